"""Environment-based settings for jobhunt."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


@dataclass
class Settings:
    db_path: str
    history_path: str
    web3_careers_pages: int
    request_timeout: float
    proxy: str | None
    verify_ssl: bool
    log_level: str

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            db_path=os.getenv("JOBHUNT_DB_PATH", "jobs.db"),
            history_path=os.getenv("JOBHUNT_HISTORY_PATH", ".jobhunthistory"),
            web3_careers_pages=int(os.getenv("WEB3_CAREERS_PAGES", "5")),
            request_timeout=float(os.getenv("REQUEST_TIMEOUT", "30")),
            proxy=os.getenv("HTTP_PROXY") or os.getenv("HTTPS_PROXY") or os.getenv("GLOBAL_PROXY") or None,
            verify_ssl=os.getenv("VERIFY_SSL", "true").lower() not in {"0", "false", "no"},
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

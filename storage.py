"""SQLite persistence for normalized jobs."""

from __future__ import annotations

import datetime as dt
import json
import logging
import sqlite3
from pathlib import Path
from typing import Iterable, List

from models import Job

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS jobs (
    id           INTEGER PRIMARY KEY,
    title        TEXT NOT NULL,
    company      TEXT NOT NULL,
    date_posted  TEXT NOT NULL,
    location     TEXT NOT NULL DEFAULT '',
    remuneration TEXT NOT NULL DEFAULT '',
    tags         TEXT NOT NULL DEFAULT '[]',
    apply        TEXT NOT NULL,
    site         TEXT NOT NULL,
    rem_upper    INTEGER NOT NULL DEFAULT 0,
    rem_lower    INTEGER NOT NULL DEFAULT 0
);
"""

COLUMNS = [
    "title",
    "company",
    "date_posted",
    "location",
    "remuneration",
    "tags",
    "apply",
    "site",
    "rem_upper",
    "rem_lower",
]


def connect(path: str) -> sqlite3.Connection:
    if path != ":memory:":
        Path(path).parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(path)
    conn.row_factory = sqlite3.Row
    conn.executescript(SCHEMA)
    return conn


def _to_row(job: Job) -> tuple:
    return (
        job.title,
        job.company,
        job.date_posted.isoformat(),
        job.location,
        job.remuneration,
        json.dumps(list(job.tags)),
        job.apply,
        job.site,
        job.rem_upper,
        job.rem_lower,
    )


def _from_row(row: sqlite3.Row) -> Job:
    return Job(
        title=row["title"],
        company=row["company"],
        date_posted=dt.date.fromisoformat(row["date_posted"]),
        location=row["location"] or "",
        remuneration=row["remuneration"] or "",
        tags=tuple(json.loads(row["tags"] or "[]")),
        apply=row["apply"],
        site=row["site"],
        rem_upper=row["rem_upper"] or 0,
        rem_lower=row["rem_lower"] or 0,
    )


def replace_jobs(conn: sqlite3.Connection, jobs: Iterable[Job]) -> int:
    """Swap the table's contents for jobs in a single transaction."""
    rows = [_to_row(job) for job in jobs]
    placeholders = ", ".join("?" for _ in COLUMNS)
    with conn:
        conn.execute("DELETE FROM jobs")
        conn.executemany(f"INSERT INTO jobs ({', '.join(COLUMNS)}) VALUES ({placeholders})", rows)
    logger.info("Stored %d jobs", len(rows))
    return len(rows)


def load_jobs(conn: sqlite3.Connection) -> List[Job]:
    """Read a point-in-time snapshot of every stored job, in insertion order."""
    cursor = conn.execute(f"SELECT {', '.join(COLUMNS)} FROM jobs ORDER BY id")
    return [_from_row(row) for row in cursor.fetchall()]

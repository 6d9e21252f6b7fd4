"""CLI entry for Job Hunt: populate the local store, then open the prompt."""

from __future__ import annotations

import argparse
import logging
from functools import partial
from typing import List, Optional

from rich.console import Console

from config import Settings
from repl import Shell
from sources import fetch_all
from storage import connect

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Scrape web3 job boards and query them with simplified SQL.")
    p.add_argument("--db", type=str, default=None, help="SQLite file to store jobs in (default: $JOBHUNT_DB_PATH or jobs.db).")
    p.add_argument(
        "--skip-refresh",
        action="store_true",
        help="Open the prompt on the existing store without scraping first.",
    )
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    settings = Settings.from_env()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    console = Console()
    conn = connect(args.db or settings.db_path)
    scrape = partial(
        fetch_all,
        proxy=settings.proxy,
        verify_ssl=settings.verify_ssl,
        timeout=settings.request_timeout,
        web3_careers_pages=settings.web3_careers_pages,
    )
    shell = Shell(conn, scrape, console=console, history_path=settings.history_path)

    try:
        if not args.skip_refresh:
            console.print("Populating local database. This shouldn't take long...", style="green")
            count = shell.refresh()
            logger.info("Initial population stored %d jobs", count)
            console.print(
                "Population completed successfully! Welcome, please begin your job hunt by entering a query.",
                style="green",
            )
        shell.run()
    finally:
        conn.close()


if __name__ == "__main__":
    main()

"""Interactive prompt for querying the local jobs store."""

from __future__ import annotations

import datetime as dt
import logging
import sqlite3
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

from models import Job
from query import QueryError, execute, parse_query
from storage import load_jobs, replace_jobs

try:
    import readline
except ImportError:  # Windows: no line history
    readline = None

logger = logging.getLogger(__name__)

PROMPT = ">> "


class Shell:
    """Read-eval-print loop over the jobs store.

    Commands:
        select jobs ...   - run a query against the current snapshot
        refresh           - re-scrape every site and rebuild the store
        exit              - leave the prompt (Ctrl-D and Ctrl-C also work)
    """

    def __init__(
        self,
        conn: sqlite3.Connection,
        scrape: Callable[[], List[Job]],
        console: Optional[Console] = None,
        history_path: Optional[str] = None,
    ) -> None:
        self.conn = conn
        self.scrape = scrape
        self.console = console or Console()
        self.history_path = history_path

    def refresh(self) -> int:
        return replace_jobs(self.conn, self.scrape())

    def select(self, text: str) -> Optional[List[Job]]:
        """Run one query line and print the result; None if it failed."""
        try:
            query = parse_query(text)
            jobs = execute(query, load_jobs(self.conn))
        except QueryError as err:
            logger.debug("Rejected query %r: %s", text, err.to_dict())
            self.print_query_error(text, err)
            return None
        except sqlite3.Error as err:
            self.console.print(Text(f"Error querying DB. {err}", style="red"))
            return None
        self.render(jobs)
        return jobs

    def handle(self, line: str) -> bool:
        """Dispatch one input line. Returns False when the shell should stop."""
        text = line.strip()
        if not text:
            return True
        command = text.lower()
        if command.startswith("select"):
            self.select(text)
        elif command == "refresh":
            self.console.print("Refreshing local database...", style="green")
            count = self.refresh()
            stamp = dt.datetime.now().strftime("%d-%m-%Y %H:%M:%S")
            self.console.print(f"Refresh completed successfully at {stamp} ({count} jobs).", style="green")
        elif command in {"exit", "quit"}:
            return False
        else:
            self.console.print(
                Text(f'Does not compute! 🤖 "{text}" is not a valid query/command.', style="red")
            )
        return True

    def render(self, jobs: Sequence[Job]) -> None:
        if jobs:
            table = Table(show_lines=False)
            for column in ("Title", "Company", "Posted", "Location", "Pay", "Tags", "Site", "Apply"):
                table.add_column(column, overflow="fold")
            for job in jobs:
                table.add_row(
                    Text(job.title),
                    Text(job.company),
                    job.date_posted.isoformat(),
                    Text(job.location),
                    Text(job.remuneration),
                    Text(", ".join(job.tags)),
                    Text(job.site),
                    Text(job.apply),
                )
            self.console.print(table)
        self.console.print(f"{len(jobs)} jobs returned.", style="green")

    def print_query_error(self, text: str, err: QueryError) -> None:
        self.console.print(Text(str(err.message), style="red"))
        if err.position is not None:
            self.console.print(Text(f"  {text}"))
            self.console.print(Text(f"  {' ' * err.position}^", style="red"))

    def _load_history(self) -> None:
        if readline is None or not self.history_path:
            return
        if Path(self.history_path).exists():
            readline.read_history_file(self.history_path)

    def _save_history(self) -> None:
        if readline is None or not self.history_path:
            return
        try:
            readline.write_history_file(self.history_path)
        except OSError as exc:
            logger.warning("Could not save history to %s (%s)", self.history_path, exc)

    def run(self) -> None:
        self._load_history()
        try:
            while True:
                try:
                    line = input(PROMPT)
                except (EOFError, KeyboardInterrupt):
                    break
                if not self.handle(line):
                    break
        finally:
            self._save_history()
        self.console.print("Thank you for using Job Hunt. Goodbye!", style="green")

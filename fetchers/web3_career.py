"""Fetcher for web3.career."""

from __future__ import annotations

import datetime as dt
import re
from typing import Iterable, List

from bs4 import BeautifulSoup

from fetchers.base import BaseFetcher, absolute_url, text_of
from models import Job
from normalize import parse_date

ONCLICK_PATH_RE = re.compile(r"'([^']+)'")


class Web3CareerFetcher(BaseFetcher):
    def __init__(self, *args, pages: int = 5, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.pages = pages

    def page_urls(self) -> Iterable[str]:
        for page in range(1, self.pages + 1):
            yield f"{self.url}?page={page}"

    def parse(self, soup: BeautifulSoup, today: dt.date) -> List[Job]:
        jobs: List[Job] = []
        rows = soup.select("tr.table_row") or soup.select("table tbody tr")
        for row in rows:
            title_tag = row.select_one("h2")
            if not title_tag:
                continue

            href = ""
            match = ONCLICK_PATH_RE.search(row.get("onclick", ""))
            if match:
                href = match.group(1)
            if not href:
                anchor = row.select_one("a[href]")
                href = anchor.get("href", "") if anchor else ""

            time_tag = row.select_one("time")
            job = self.make_job(
                title=text_of(title_tag),
                company=text_of(row.select_one("h3")),
                apply=absolute_url(self.url, href) if href else "",
                date_posted=parse_date(time_tag.get("datetime"), today) if time_tag else None,
                today=today,
                location=text_of(row.select_one("td:nth-of-type(4)")),
                remuneration=text_of(row.select_one("td:nth-of-type(5) p")),
                tags=[text_of(t) for t in row.select("span.my-badge a") or row.select("td div span")],
            )
            if job:
                jobs.append(job)
        return jobs

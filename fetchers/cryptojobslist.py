"""Fetcher for CryptoJobsList."""

from __future__ import annotations

import datetime as dt
from typing import Iterable, List

from bs4 import BeautifulSoup

from fetchers.base import BaseFetcher, absolute_url, text_of
from models import Job
from normalize import parse_date


class CryptoJobsListFetcher(BaseFetcher):
    def page_urls(self) -> Iterable[str]:
        yield f"{self.url}/engineering?sort=recent"

    def parse(self, soup: BeautifulSoup, today: dt.date) -> List[Job]:
        jobs: List[Job] = []
        rows = soup.select("main section table tbody tr") or soup.select("table tbody tr")
        for row in rows:
            title_tag = row.select_one("td div a") or row.select_one("a.job-title")
            if not title_tag:
                continue
            href = title_tag.get("href", "")

            # The first plain span is the location, the rest are tags.
            spans = [s for s in row.select("td span") if "job-salary-text" not in (s.get("class") or [])]
            location = text_of(spans[0]) if spans else ""

            job = self.make_job(
                title=text_of(title_tag),
                company=text_of(row.select_one("td > a")),
                apply=absolute_url(self.url, href) if href else "",
                date_posted=parse_date(text_of(row.select_one("td.job-time-since-creation")), today),
                today=today,
                location=location,
                remuneration=text_of(row.select_one("span.job-salary-text")),
                tags=[text_of(s) for s in spans[1:]],
            )
            if job:
                jobs.append(job)
        return jobs

"""Fetcher for the Getro-hosted ecosystem boards (Solana, Substrate, Near).

These boards share one layout with schema.org JobPosting microdata, so a
single fetcher serves all of them.
"""

from __future__ import annotations

import datetime as dt
from typing import Iterable, List
from urllib.parse import urlsplit

from bs4 import BeautifulSoup, Tag

from fetchers.base import BaseFetcher, absolute_url, text_of
from models import Job
from normalize import parse_date

# Base64 of {"job_functions":["Software Engineering"]}
SOFTWARE_ENGINEERING_FILTER = "eyJqb2JfZnVuY3Rpb25zIjpbIlNvZnR3YXJlIEVuZ2luZWVyaW5nIl19"


def _meta_content(card: Tag, selector: str) -> str:
    tag = card.select_one(selector)
    return (tag.get("content") or "").strip() if tag else ""


class GetroBoardFetcher(BaseFetcher):
    def page_urls(self) -> Iterable[str]:
        yield f"{self.url}?filter={SOFTWARE_ENGINEERING_FILTER}"

    def parse(self, soup: BeautifulSoup, today: dt.date) -> List[Job]:
        parts = urlsplit(self.url)
        origin = f"{parts.scheme}://{parts.netloc}"
        jobs: List[Job] = []
        for card in soup.select("[itemtype='https://schema.org/JobPosting']"):
            title_tag = card.select_one("[itemprop='title']")
            if not title_tag:
                continue

            company = _meta_content(card, "[itemprop='hiringOrganization'] meta[itemprop='name']")
            if not company:
                company = text_of(card.select_one("[itemprop='hiringOrganization'] [itemprop='name']"))

            anchor = title_tag if title_tag.name == "a" else title_tag.find_parent("a")
            if anchor is None:
                anchor = card.select_one("a[href*='/jobs/']")
            href = anchor.get("href", "") if anchor else ""

            job = self.make_job(
                title=text_of(title_tag),
                company=company,
                apply=absolute_url(origin, href) if href else "",
                date_posted=parse_date(_meta_content(card, "meta[itemprop='datePosted']"), today),
                today=today,
                location=_meta_content(card, "meta[itemprop='address']"),
                remuneration=_meta_content(card, "meta[itemprop='baseSalary']"),
                tags=[text_of(t) for t in card.select("[data-testid='tag']")],
            )
            if job:
                jobs.append(job)
        return jobs

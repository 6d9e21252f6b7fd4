"""Base classes for job fetchers."""

from __future__ import annotations

import datetime as dt
import logging
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Sequence

import requests
from bs4 import BeautifulSoup, Tag

from models import Job
from normalize import parse_remuneration

logger = logging.getLogger(__name__)

USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/123.0 Safari/537.36"
)


def text_of(tag: Optional[Tag]) -> str:
    return tag.get_text(" ", strip=True) if tag else ""


def absolute_url(base: str, href: str) -> str:
    if href.startswith("http"):
        return href
    if href.startswith("/"):
        return f"{base.rstrip('/')}{href}"
    return f"{base.rstrip('/')}/{href}"


class BaseFetcher(ABC):
    """Fetches listing pages of one site and turns them into Job records.

    Subclasses list the pages to download and parse each page's soup; the
    base class handles HTTP, failure logging and record normalization.
    """

    def __init__(
        self,
        source_name: str,
        url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 30,
    ) -> None:
        self.source_name = source_name
        self.url = url
        self.session = session or requests.Session()
        self.timeout = timeout

    @abstractmethod
    def page_urls(self) -> Iterable[str]:
        raise NotImplementedError

    @abstractmethod
    def parse(self, soup: BeautifulSoup, today: dt.date) -> List[Job]:
        raise NotImplementedError

    def _get_soup(self, url: str) -> Optional[BeautifulSoup]:
        try:
            resp = self.session.get(url, timeout=self.timeout, headers={"User-Agent": USER_AGENT})
            resp.raise_for_status()
            return BeautifulSoup(resp.text, "html.parser")
        except requests.RequestException as exc:
            logger.warning("Request failed for %s (%s)", url, exc)
            return None

    def fetch(self) -> List[Job]:
        today = dt.date.today()
        jobs: List[Job] = []
        for page_url in self.page_urls():
            soup = self._get_soup(page_url)
            if soup is None:
                break
            page_jobs = self.parse(soup, today)
            if not page_jobs:
                break
            jobs.extend(page_jobs)
        logger.info("%s fetched %d jobs", self.source_name, len(jobs))
        return jobs

    def make_job(
        self,
        title: str,
        company: str,
        apply: str,
        date_posted: Optional[dt.date],
        today: dt.date,
        location: str = "",
        remuneration: str = "",
        tags: Sequence[str] = (),
    ) -> Optional[Job]:
        """Build a record, or None if a required field is missing.

        A missing date falls back to the day of the scrape.
        """
        if not (title and company and apply):
            logger.debug("%s skipped incomplete listing %r", self.source_name, title or apply)
            return None
        rem_lower, rem_upper = parse_remuneration(remuneration)
        return Job(
            title=title,
            company=company,
            date_posted=date_posted or today,
            apply=apply,
            site=self.source_name,
            location=location,
            remuneration=remuneration,
            tags=tuple(t for t in tags if t),
            rem_lower=rem_lower,
            rem_upper=rem_upper,
        )

"""Tests for the per-site fetchers and the refresh pipeline, offline."""

import datetime as dt
import logging
from typing import Any

import requests
from bs4 import BeautifulSoup
from fetchers.cryptojobslist import CryptoJobsListFetcher
from fetchers.getro import GetroBoardFetcher
from fetchers.web3_career import Web3CareerFetcher
from sources import build_fetchers, collect

TODAY = dt.date(2024, 5, 10)

WEB3_CAREER_HTML = """
<table><tbody>
<tr class="table_row" onclick="tableTurboRowClick(event, '/senior-rust-engineer-parity/123')">
  <td><div><div><div><a href="/senior-rust-engineer-parity/123"><h2>Senior Rust Engineer</h2></a></div></div></div></td>
  <td><a href="/parity-jobs"><h3>Parity</h3></a></td>
  <td><time datetime="2024-05-01 10:00:00 +0000">9d</time></td>
  <td>Remote</td>
  <td><p>$100k - $150k</p></td>
  <td><div><span class="my-badge"><a href="/rust-jobs">rust</a></span><span class="my-badge"><a href="/defi-jobs">defi</a></span></div></td>
</tr>
<tr class="table_row"><td>sponsored banner</td></tr>
<tr class="table_row" onclick="tableTurboRowClick(event, '/mystery/9')">
  <td><h2>Mystery Role</h2></td>
</tr>
</tbody></table>
"""

CRYPTOJOBSLIST_HTML = """
<main><section><section><table><tbody>
<tr>
  <td><div><a href="/jobs/smart-contract-engineer-zeta">Smart Contract Engineer</a></div></td>
  <td><a href="/companies/zeta">Zeta</a></td>
  <td><span>Remote</span><span>Solidity</span><span class="job-salary-text">$120,000 - $140,000</span></td>
  <td class="job-time-since-creation">3d</td>
</tr>
</tbody></table></section></section></main>
"""

GETRO_HTML = """
<div id="content">
  <div itemscope itemtype="https://schema.org/JobPosting">
    <a href="/companies/anza/jobs/123-protocol-engineer"><div itemprop="title">Protocol Engineer</div></a>
    <div itemprop="hiringOrganization" itemscope><meta itemprop="name" content="Anza"></div>
    <meta itemprop="address" content="New York, NY">
    <meta itemprop="datePosted" content="2024-05-02">
    <div data-testid="tag">Rust</div>
  </div>
  <div itemscope itemtype="https://schema.org/JobPosting">
    <a href="https://boards.example.com/x/1"><div itemprop="title">External Role</div></a>
    <div itemprop="hiringOrganization"><meta itemprop="name" content="X Co"></div>
  </div>
</div>
"""


class _FakeResponse:
    def __init__(self, text: str) -> None:
        self.text = text

    def raise_for_status(self) -> None:
        pass


class _FakeSession:
    """Serves canned pages; any other URL fails like a dropped connection."""

    def __init__(self, pages: dict) -> None:
        self.pages = pages
        self.requested: list = []

    def get(self, url: str, **kwargs: Any) -> _FakeResponse:
        self.requested.append(url)
        if url not in self.pages:
            raise requests.ConnectionError(f"no route to {url}")
        return _FakeResponse(self.pages[url])


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def test_web3_career_parse() -> None:
    """Test a complete row is parsed and incomplete rows are skipped."""
    fetcher = Web3CareerFetcher("web3.career", "https://web3.career")
    jobs = fetcher.parse(_soup(WEB3_CAREER_HTML), TODAY)
    assert len(jobs) == 1
    job = jobs[0]
    assert job.title == "Senior Rust Engineer"
    assert job.company == "Parity"
    assert job.apply == "https://web3.career/senior-rust-engineer-parity/123"
    assert job.date_posted == dt.date(2024, 5, 1)
    assert job.location == "Remote"
    assert job.remuneration == "$100k - $150k"
    assert (job.rem_lower, job.rem_upper) == (100, 150)
    assert job.tags == ("rust", "defi")
    assert job.site == "web3.career"


def test_cryptojobslist_parse() -> None:
    """Test location, tags, salary and relative date extraction."""
    fetcher = CryptoJobsListFetcher("cryptojobslist.com", "https://cryptojobslist.com")
    jobs = fetcher.parse(_soup(CRYPTOJOBSLIST_HTML), TODAY)
    assert len(jobs) == 1
    job = jobs[0]
    assert job.title == "Smart Contract Engineer"
    assert job.company == "Zeta"
    assert job.apply == "https://cryptojobslist.com/jobs/smart-contract-engineer-zeta"
    assert job.location == "Remote"
    assert job.tags == ("Solidity",)
    assert (job.rem_lower, job.rem_upper) == (120, 140)
    assert job.date_posted == dt.date(2024, 5, 7)


def test_getro_parse() -> None:
    """Test microdata extraction and default date for missing dates."""
    fetcher = GetroBoardFetcher("jobs.solana.com", "https://jobs.solana.com/jobs")
    jobs = fetcher.parse(_soup(GETRO_HTML), TODAY)
    assert [j.title for j in jobs] == ["Protocol Engineer", "External Role"]
    first, second = jobs
    assert first.company == "Anza"
    assert first.apply == "https://jobs.solana.com/companies/anza/jobs/123-protocol-engineer"
    assert first.location == "New York, NY"
    assert first.date_posted == dt.date(2024, 5, 2)
    assert first.tags == ("Rust",)
    assert (first.rem_lower, first.rem_upper) == (0, 0)
    assert second.apply == "https://boards.example.com/x/1"
    assert second.location == ""
    assert second.date_posted == TODAY


def test_fetch_pages_until_empty() -> None:
    """Test paging stops at the first page without listings."""
    session = _FakeSession(
        {
            "https://web3.career?page=1": WEB3_CAREER_HTML,
            "https://web3.career?page=2": "<table><tbody></tbody></table>",
        }
    )
    fetcher = Web3CareerFetcher("web3.career", "https://web3.career", session, pages=5)
    jobs = fetcher.fetch()
    assert len(jobs) == 1
    assert session.requested == ["https://web3.career?page=1", "https://web3.career?page=2"]


def test_fetch_request_failure_logged(caplog) -> None:
    """Test a failed request yields no jobs and a warning."""
    fetcher = CryptoJobsListFetcher("cryptojobslist.com", "https://cryptojobslist.com", _FakeSession({}))
    with caplog.at_level(logging.WARNING):
        assert fetcher.fetch() == []
    assert "Request failed" in caplog.text


class _StaticFetcher:
    def __init__(self, name: str, jobs: list) -> None:
        self.source_name = name
        self._jobs = jobs

    def fetch(self) -> list:
        return self._jobs


class _BrokenFetcher:
    source_name = "broken"

    def fetch(self) -> list:
        raise RuntimeError("site down")


def test_collect_skips_failures_and_duplicates(make_job: Any, caplog) -> None:
    """Test one broken source does not stop the others."""
    a = make_job.create(title="A", apply="https://example.com/a")
    b = make_job.create(title="B", apply="https://example.com/b")
    fetchers = [_StaticFetcher("one", [a, b]), _BrokenFetcher(), _StaticFetcher("two", [a])]
    with caplog.at_level(logging.WARNING):
        jobs = collect(fetchers)
    assert jobs == [a, b]
    assert "Failed to fetch broken" in caplog.text


def test_build_fetchers_covers_every_site() -> None:
    """Test the refresh pipeline knows all five boards."""
    fetchers = build_fetchers(requests.Session(), web3_careers_pages=2)
    assert [f.source_name for f in fetchers] == [
        "web3.career",
        "cryptojobslist.com",
        "jobs.solana.com",
        "careers.substrate.io",
        "careers.near.org",
    ]
    assert list(fetchers[0].page_urls())[-1] == "https://web3.career?page=2"

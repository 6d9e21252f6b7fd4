"""Web3 job sources and the refresh pipeline that scrapes them all."""

from __future__ import annotations

import logging
from typing import List, Optional, Set, Tuple

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from fetchers.base import USER_AGENT, BaseFetcher
from fetchers.cryptojobslist import CryptoJobsListFetcher
from fetchers.getro import GetroBoardFetcher
from fetchers.web3_career import Web3CareerFetcher
from models import Job

logger = logging.getLogger(__name__)

WEB3_CAREERS_URL = "https://web3.career"
CRYPTO_JOBS_LIST_URL = "https://cryptojobslist.com"
SOLANA_JOBS_URL = "https://jobs.solana.com/jobs"
SUBSTRATE_JOBS_URL = "https://careers.substrate.io/jobs"
NEAR_JOBS_URL = "https://careers.near.org/jobs"


def _make_session(verify: bool, proxy: Optional[str]) -> requests.Session:
    sess = requests.Session()
    retries = Retry(total=3, backoff_factor=1, status_forcelist=[429, 500, 502, 503, 504], allowed_methods=["GET"])
    sess.mount("http://", HTTPAdapter(max_retries=retries))
    sess.mount("https://", HTTPAdapter(max_retries=retries))
    sess.headers.update({"User-Agent": USER_AGENT})
    if proxy:
        sess.proxies.update({"http": proxy, "https": proxy})
    sess.verify = verify
    return sess


def build_fetchers(
    session: requests.Session,
    timeout: float = 30,
    web3_careers_pages: int = 5,
) -> List[BaseFetcher]:
    return [
        Web3CareerFetcher("web3.career", WEB3_CAREERS_URL, session, timeout, pages=web3_careers_pages),
        CryptoJobsListFetcher("cryptojobslist.com", CRYPTO_JOBS_LIST_URL, session, timeout),
        GetroBoardFetcher("jobs.solana.com", SOLANA_JOBS_URL, session, timeout),
        GetroBoardFetcher("careers.substrate.io", SUBSTRATE_JOBS_URL, session, timeout),
        GetroBoardFetcher("careers.near.org", NEAR_JOBS_URL, session, timeout),
    ]


def collect(fetchers: List[BaseFetcher]) -> List[Job]:
    """Run every fetcher, skipping failed sources and duplicate listings."""
    seen: Set[Tuple[str, str]] = set()
    all_jobs: List[Job] = []

    for fetcher in fetchers:
        try:
            jobs = fetcher.fetch()
        except Exception as exc:
            logger.warning("Failed to fetch %s: %s", fetcher.source_name, exc)
            continue

        new_jobs = []
        for job in jobs:
            key = (job.site, job.apply)
            if key in seen:
                continue
            seen.add(key)
            new_jobs.append(job)
        logger.info("%s added %d jobs after dedupe", fetcher.source_name, len(new_jobs))
        all_jobs.extend(new_jobs)

    logger.info("Total unique jobs collected: %d", len(all_jobs))
    return all_jobs


def fetch_all(
    proxy: Optional[str] = None,
    verify_ssl: bool = True,
    timeout: float = 30,
    web3_careers_pages: int = 5,
) -> List[Job]:
    session = _make_session(verify_ssl, proxy)
    return collect(build_fetchers(session, timeout=timeout, web3_careers_pages=web3_careers_pages))

"""Pytest configuration for jobhunt tests."""

import datetime as dt
import sys
from pathlib import Path

import pytest

# Add the repository root to the path so the top-level modules import
sys.path.insert(0, str(Path(__file__).parent.parent))

from models import Job  # noqa: E402


@pytest.fixture
def make_job() -> "type[_JobFactory]":
    """Fixture that provides a factory for creating Job objects for testing."""
    return _JobFactory


class _JobFactory:
    """Factory class for creating Job objects in tests."""

    @staticmethod
    def create(
        title: str = "Rust Engineer",
        company: str = "Acme Labs",
        date_posted: dt.date = dt.date(2024, 5, 1),
        location: str = "Remote",
        remuneration: str = "",
        tags: tuple[str, ...] = (),
        apply: str = "https://web3.career/rust-engineer-acme/1",
        site: str = "web3.career",
        rem_lower: int = 0,
        rem_upper: int = 0,
    ) -> Job:
        """Create a Job for testing."""
        return Job(
            title=title,
            company=company,
            date_posted=date_posted,
            location=location,
            remuneration=remuneration,
            tags=tags,
            apply=apply,
            site=site,
            rem_lower=rem_lower,
            rem_upper=rem_upper,
        )

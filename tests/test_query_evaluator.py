"""Tests for evaluating parsed predicates against Job records."""

import datetime as dt
from typing import Any

import pytest
from query import Comparison, Operator, evaluate, like, parse_query


def _where(text: str):
    return parse_query(f"select jobs where {text}").predicate


@pytest.mark.parametrize(
    "value,pattern,expected",
    [
        ("Senior Rust Engineer", "%senior%", True),
        ("SENIOR", "%senior%", True),
        ("Rust Engineer", "%senior%", False),
        ("Senior Rust Engineer", "senior%", True),
        ("Lead Senior Engineer", "senior%", False),
        ("Rust Engineer", "%engineer", True),
        ("Rust Engineers", "%engineer", False),
        ("", "%", True),
        ("anything", "%", True),
        ("abc", "a%c", True),
        ("ac", "a%c", True),
        ("abd", "a%c", False),
        ("a.c", "a.c", True),
        ("abc", "a.c", False),
        ("C++ (dev)", "c++ (%)", True),
        ("exact", "exact", True),
        ("exact match", "exact", False),
    ],
)
def test_like(value: str, pattern: str, expected: bool) -> None:
    """Test wildcard matching is anchored, literal and case-insensitive."""
    assert like(value, pattern) is expected


def test_evaluate_text_equality_case_insensitive(make_job: Any) -> None:
    """Test text = and != ignore case but need the whole value."""
    job = make_job.create(company="Acme Labs")
    assert evaluate(_where('company = "acme labs"'), job) is True
    assert evaluate(_where('company = "acme"'), job) is False
    assert evaluate(_where('company != "ACME LABS"'), job) is False
    assert evaluate(_where('company != "other"'), job) is True


def test_evaluate_empty_location_is_empty_string(make_job: Any) -> None:
    """Test an absent optional field compares as the empty string."""
    job = make_job.create(location="")
    assert evaluate(_where('location = ""'), job) is True
    assert evaluate(_where('location like "%"'), job) is True
    assert evaluate(_where('location like "%remote%"'), job) is False


def test_evaluate_integer_comparisons(make_job: Any) -> None:
    """Test every operator on integer fields."""
    job = make_job.create(rem_lower=80, rem_upper=120)
    assert evaluate(_where("rem_upper > 100"), job) is True
    assert evaluate(_where("rem_upper >= 120"), job) is True
    assert evaluate(_where("rem_upper < 120"), job) is False
    assert evaluate(_where("rem_lower <= 80"), job) is True
    assert evaluate(_where("rem_lower = 80"), job) is True
    assert evaluate(_where("rem_lower != 80"), job) is False
    assert evaluate(_where("rem_lower > -1"), job) is True


def test_evaluate_unknown_pay_excluded(make_job: Any) -> None:
    """Test a listing without parseable pay fails rem_upper > 0."""
    job = make_job.create(remuneration="Competitive", rem_lower=0, rem_upper=0)
    assert evaluate(_where("rem_upper > 0"), job) is False


def test_evaluate_date_ordering(make_job: Any) -> None:
    """Test dates compare in calendar order."""
    job = make_job.create(date_posted=dt.date(2024, 5, 1))
    assert evaluate(_where('date_posted > "2024-04-30"'), job) is True
    assert evaluate(_where('date_posted < "2024-04-30"'), job) is False
    assert evaluate(_where('date_posted = "2024-05-01"'), job) is True
    assert evaluate(_where('date_posted >= "2023-12-31"'), job) is True


def test_evaluate_tags_as_joined_text(make_job: Any) -> None:
    """Test tags match as one comma separated string."""
    job = make_job.create(tags=("rust", "solidity"))
    assert evaluate(_where('tags like "%solidity%"'), job) is True
    assert evaluate(_where('tags = "rust, solidity"'), job) is True
    assert evaluate(_where('tags = "rust"'), job) is False


def test_evaluate_and_or(make_job: Any) -> None:
    """Test and/or combinators and their precedence."""
    senior_low = make_job.create(title="Senior Dev", rem_upper=90)
    junior_high = make_job.create(title="Junior Dev", rem_upper=200)
    predicate = _where('title like "%senior%" and rem_upper > 100 or rem_upper > 150')
    assert evaluate(predicate, senior_low) is False
    assert evaluate(predicate, junior_high) is True


def test_evaluate_does_not_mutate_record(make_job: Any) -> None:
    """Test evaluation leaves the record untouched."""
    job = make_job.create(title="Senior Dev")
    before = repr(job)
    evaluate(Comparison("title", Operator.LIKE, "%dev%"), job)
    assert repr(job) == before


def test_evaluate_unknown_node_type(make_job: Any) -> None:
    """Test an invalid tree raises TypeError."""
    with pytest.raises(TypeError):
        evaluate("not a predicate", make_job.create())  # type: ignore[arg-type]


def test_evaluate_like_folds_case_like_equality(make_job: Any) -> None:
    """Test like and = agree on case folding beyond ASCII."""
    job = make_job.create(title="Straße")
    assert evaluate(_where('title = "strasse"'), job) is True
    assert evaluate(_where('title like "strasse"'), job) is True
    assert evaluate(_where('title like "STRA%"'), job) is True
    assert like("Straße", "%SS%") is True

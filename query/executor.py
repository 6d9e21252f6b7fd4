"""Run parsed queries over a snapshot of job records."""

from __future__ import annotations

import logging
from typing import Iterable, List

from models import Job

from .evaluator import evaluate
from .parser import parse_query
from .types import OrderBy, Query, to_query_string

logger = logging.getLogger(__name__)


def _sort_key(order_by: OrderBy):
    def key(record: Job):
        value = record.value_of(order_by.field)
        if isinstance(value, str):
            return value.casefold()
        return value

    return key


def execute(query: Query, records: Iterable[Job]) -> List[Job]:
    """Filter and order a snapshot of records.

    Records that pass the where clause keep their input order. An order by
    clause applies a stable sort on top of that, so ties stay in input order
    in both directions. The input is never modified.
    """
    snapshot = list(records)
    if query.predicate is None:
        matched = snapshot
    else:
        matched = [record for record in snapshot if evaluate(query.predicate, record)]

    if query.order_by is not None:
        matched = sorted(matched, key=_sort_key(query.order_by), reverse=query.order_by.descending)

    logger.debug("%s matched %d of %d jobs", to_query_string(query), len(matched), len(snapshot))
    return matched


def run_query(text: str, records: Iterable[Job]) -> List[Job]:
    """Parse one query line and execute it.

    Raises:
        QueryError: From lexing or parsing; no records are evaluated then.
    """
    return execute(parse_query(text), records)

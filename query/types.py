"""AST types for the job query language."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class Operator(Enum):
    EQ = "="
    NE = "!="
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="
    LIKE = "like"


EQUALITY_OPERATORS = frozenset({Operator.EQ, Operator.NE})
ORDERING_OPERATORS = frozenset({Operator.LT, Operator.LE, Operator.GT, Operator.GE})

Literal = Union[str, int, dt.date]


@dataclass(frozen=True)
class Comparison:
    """A single field comparison.

    Attributes:
        field: Catalog name of the field on the left-hand side.
        operator: The comparison operator.
        literal: The right-hand side, already converted to the field's kind
            (str for text, int for integers, datetime.date for dates).
    """

    field: str
    operator: Operator
    literal: Literal


@dataclass(frozen=True)
class And:
    left: Predicate
    right: Predicate


@dataclass(frozen=True)
class Or:
    left: Predicate
    right: Predicate


# Union of all predicate node types
Predicate = Union[Comparison, And, Or]


@dataclass(frozen=True)
class OrderBy:
    field: str
    descending: bool = False


@dataclass(frozen=True)
class Query:
    """A parsed ``select jobs`` statement.

    Attributes:
        predicate: The where clause, or None to keep every record.
        order_by: The sort key, or None to keep input order.
    """

    predicate: Optional[Predicate] = None
    order_by: Optional[OrderBy] = None


def _escape_string_value(value: str) -> str:
    result = value.replace("\\", "\\\\")
    result = result.replace('"', '\\"')
    result = result.replace("\n", "\\n")
    result = result.replace("\t", "\\t")
    return result


def _literal_to_string(literal: Literal) -> str:
    if isinstance(literal, dt.date):
        return f'"{literal.isoformat()}"'
    if isinstance(literal, int):
        return str(literal)
    return f'"{_escape_string_value(literal)}"'


def predicate_to_string(expr: Predicate) -> str:
    if isinstance(expr, Comparison):
        return f"{expr.field} {expr.operator.value} {_literal_to_string(expr.literal)}"
    if isinstance(expr, And):
        return f"{predicate_to_string(expr.left)} and {predicate_to_string(expr.right)}"
    if isinstance(expr, Or):
        return f"{predicate_to_string(expr.left)} or {predicate_to_string(expr.right)}"
    raise TypeError(f"Unknown expression type: {type(expr)}")


def to_query_string(query: Query) -> str:
    """Convert a parsed query to its canonical text.

    The canonical form uses lower-case keywords, double-quoted text and ISO
    dates, and always ends with ``;``. Re-parsing the text of a query that
    came out of the parser yields an equal query.

    Examples:
        >>> to_query_string(Query())
        'select jobs;'
        >>> to_query_string(Query(Comparison("rem_upper", Operator.GT, 100)))
        'select jobs where rem_upper > 100;'
    """
    parts = ["select jobs"]
    if query.predicate is not None:
        parts.append(f"where {predicate_to_string(query.predicate)}")
    if query.order_by is not None:
        direction = "desc" if query.order_by.descending else "asc"
        parts.append(f"order by {query.order_by.field} {direction}")
    return " ".join(parts) + ";"

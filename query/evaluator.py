"""Evaluator for query predicates against job records."""

import re
from functools import lru_cache

from models import Job

from .types import And, Comparison, Operator, Or, Predicate


@lru_cache(maxsize=256)
def _compile_like(pattern: str) -> re.Pattern[str]:
    """Compile a casefolded wildcard pattern into a regex.

    ``%`` matches any run of characters, including none. Every other
    character matches itself.
    """
    body = ".*".join(re.escape(part) for part in pattern.split("%"))
    return re.compile(body, re.DOTALL)


def like(value: str, pattern: str) -> bool:
    """Check whether the whole of value matches a wildcard pattern.

    Examples:
        >>> like("Senior Rust Engineer", "%senior%")
        True
        >>> like("Rust Engineer", "senior%")
        False
    """
    return _compile_like(pattern.casefold()).fullmatch(value.casefold()) is not None


def _compare(value, operator: Operator, literal) -> bool:
    if operator == Operator.EQ:
        return value == literal
    if operator == Operator.NE:
        return value != literal
    if operator == Operator.LT:
        return value < literal
    if operator == Operator.LE:
        return value <= literal
    if operator == Operator.GT:
        return value > literal
    if operator == Operator.GE:
        return value >= literal
    raise ValueError(f"Unsupported operator: {operator}")


def _evaluate_comparison(expr: Comparison, record: Job) -> bool:
    value = record.value_of(expr.field)
    if isinstance(expr.literal, str):
        text = value if isinstance(value, str) else str(value)
        if expr.operator == Operator.LIKE:
            return like(text, expr.literal)
        return _compare(text.casefold(), expr.operator, expr.literal.casefold())
    return _compare(value, expr.operator, expr.literal)


def evaluate(predicate: Predicate, record: Job) -> bool:
    """Evaluate a predicate tree against one record.

    ``and``/``or`` short-circuit left to right.

    Args:
        predicate: The parsed where clause.
        record: The job to test.

    Returns:
        True if the record satisfies the predicate.

    Raises:
        TypeError: If the tree contains an unknown node type.
    """
    if isinstance(predicate, Comparison):
        return _evaluate_comparison(predicate, record)
    elif isinstance(predicate, And):
        return evaluate(predicate.left, record) and evaluate(predicate.right, record)
    elif isinstance(predicate, Or):
        return evaluate(predicate.left, record) or evaluate(predicate.right, record)
    else:
        raise TypeError(f"Unknown expression type: {type(predicate)}")

"""Errors raised while lexing, parsing and checking a job query."""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence


class QueryError(Exception):
    """Base class for every user-facing query error.

    Attributes:
        kind: Short machine readable name of the error class.
        message: Human readable description, without the position suffix.
        position: Character offset into the query text, if known.
    """

    kind = "query_error"

    def __init__(self, message: str, position: Optional[int] = None) -> None:
        self.message = message
        self.position = position
        if position is None:
            super().__init__(message)
        else:
            super().__init__(f"{message} (at position {position})")

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "message": self.message, "position": self.position}


class LexError(QueryError):
    """Raised when a character does not start any token."""

    kind = "lex_error"

    def __init__(self, position: int, unexpected_char: str, message: Optional[str] = None) -> None:
        self.unexpected_char = unexpected_char
        super().__init__(message or f"Unexpected character {unexpected_char!r}", position)


class ParseError(QueryError):
    """Raised when the token stream does not follow the grammar."""

    kind = "parse_error"

    def __init__(self, message: str, position: int, expected: Sequence[str] = ()) -> None:
        self.expected = tuple(expected)
        if self.expected:
            message = f"{message}; expected {_join_expected(self.expected)}"
        super().__init__(message, position)


class TrailingInputError(ParseError):
    """Raised when tokens remain after a complete query."""

    kind = "trailing_input"


class UnknownFieldError(QueryError):
    kind = "unknown_field"

    def __init__(self, name: str, position: Optional[int] = None) -> None:
        self.name = name
        super().__init__(f"Unknown field {name!r}", position)


class TypeMismatchError(QueryError):
    """Raised when an operator or literal does not suit the field's kind."""

    kind = "type_mismatch"

    def __init__(
        self,
        field: str,
        expected_kind: str,
        position: Optional[int] = None,
        detail: str = "",
    ) -> None:
        self.field = field
        self.expected_kind = expected_kind
        message = f"Field {field!r} expects {expected_kind}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message, position)


def _join_expected(expected: Sequence[str]) -> str:
    if len(expected) == 1:
        return expected[0]
    return ", ".join(expected[:-1]) + " or " + expected[-1]

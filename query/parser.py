"""Parser for the job query language.

Grammar (EBNF):
    query        = "select", "jobs", [ where_clause ], [ order_clause ], [ ";" ] ;
    where_clause = "where", or_expr ;
    or_expr      = and_expr, { "or", and_expr } ;
    and_expr     = comparison, { "and", comparison } ;
    comparison   = field, operator, literal ;
    operator     = "=" | "!=" | "<" | "<=" | ">" | ">=" | "like" ;
    literal      = string | integer ;
    order_clause = "order", "by", field, [ "asc" | "desc" ] ;

Precedence (tightest to loosest):
    1. and
    2. or
    There are no parentheses.

Fields are checked against the record catalog while parsing, so unknown
fields and kind mismatches are reported before any record is evaluated.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterable

from models import FIELDS, FieldKind

from .errors import ParseError, TrailingInputError, TypeMismatchError, UnknownFieldError
from .tokenizer import Token, TokenType, tokenize
from .types import (
    EQUALITY_OPERATORS,
    And,
    Comparison,
    Literal,
    Operator,
    Or,
    OrderBy,
    Predicate,
    Query,
)

_OPERATOR_TOKENS = {
    TokenType.EQ: Operator.EQ,
    TokenType.NE: Operator.NE,
    TokenType.LT: Operator.LT,
    TokenType.LE: Operator.LE,
    TokenType.GT: Operator.GT,
    TokenType.GE: Operator.GE,
    TokenType.LIKE: Operator.LIKE,
}


class _Parser:
    """Recursive descent parser over a materialized token list."""

    def __init__(self, tokens: Iterable[Token]) -> None:
        self.tokens = list(tokens)
        if not self.tokens or self.tokens[-1].type != TokenType.EOF:
            end = self.tokens[-1].end_position if self.tokens else 0
            self.tokens.append(Token(TokenType.EOF, "", end))
        self.pos = 0

    def _current(self) -> Token:
        if self.pos >= len(self.tokens):
            return self.tokens[-1]
        return self.tokens[self.pos]

    def _advance(self) -> Token:
        token = self._current()
        self.pos += 1
        return token

    def _check(self, token_type: TokenType) -> bool:
        return self._current().type == token_type

    def _expect(self, token_type: TokenType, expected: str) -> Token:
        token = self._current()
        if token.type != token_type:
            raise ParseError(f"Unexpected {token.describe()}", token.position, [expected])
        return self._advance()

    def parse(self) -> Query:
        self._expect(TokenType.SELECT, "'select'")
        self._expect(TokenType.JOBS, "'jobs'")

        predicate = None
        if self._check(TokenType.WHERE):
            self._advance()
            predicate = self._parse_or_expr()

        order_by = None
        if self._check(TokenType.ORDER):
            order_by = self._parse_order_clause()

        if self._check(TokenType.SEMICOLON):
            self._advance()

        if not self._check(TokenType.EOF):
            token = self._current()
            raise TrailingInputError(
                f"Unexpected {token.describe()} after end of query",
                token.position,
                self._expected_after(predicate, order_by),
            )

        return Query(predicate=predicate, order_by=order_by)

    def _expected_after(self, predicate: Predicate | None, order_by: OrderBy | None) -> list[str]:
        expected = []
        if order_by is None:
            if predicate is None:
                expected.append("'where'")
            else:
                expected.extend(["'and'", "'or'"])
            expected.append("'order by'")
        expected.extend(["';'", "end of input"])
        return expected

    def _parse_or_expr(self) -> Predicate:
        """Parse OR expression: and_expr { or and_expr }."""
        left = self._parse_and_expr()
        while self._check(TokenType.OR):
            self._advance()
            left = Or(left, self._parse_and_expr())
        return left

    def _parse_and_expr(self) -> Predicate:
        """Parse AND expression: comparison { and comparison }."""
        left = self._parse_comparison()
        while self._check(TokenType.AND):
            self._advance()
            left = And(left, self._parse_comparison())
        return left

    def _parse_field(self) -> tuple[str, FieldKind]:
        token = self._expect(TokenType.IDENT, "a field name")
        kind = FIELDS.get(token.value)
        if kind is None:
            raise UnknownFieldError(token.value, token.position)
        return token.value, kind

    def _parse_comparison(self) -> Comparison:
        """Parse comparison: field operator literal, then check kinds."""
        name, kind = self._parse_field()

        op_token = self._current()
        operator = _OPERATOR_TOKENS.get(op_token.type)
        if operator is None:
            raise ParseError(
                f"Unexpected {op_token.describe()}",
                op_token.position,
                ["a comparison operator"],
            )
        self._advance()
        _check_operator(name, kind, operator, op_token)

        literal_token = self._current()
        if literal_token.type not in (TokenType.STRING, TokenType.NUMBER):
            raise ParseError(
                f"Unexpected {literal_token.describe()}",
                literal_token.position,
                ["a quoted string", "an integer"],
            )
        self._advance()
        return Comparison(name, operator, _convert_literal(name, kind, literal_token))

    def _parse_order_clause(self) -> OrderBy:
        """Parse order clause: order by field [ asc | desc ]."""
        self._expect(TokenType.ORDER, "'order'")
        self._expect(TokenType.BY, "'by'")
        name, _ = self._parse_field()
        descending = False
        if self._check(TokenType.DESC):
            self._advance()
            descending = True
        elif self._check(TokenType.ASC):
            self._advance()
        return OrderBy(name, descending)


def _check_operator(name: str, kind: FieldKind, operator: Operator, token: Token) -> None:
    if kind == FieldKind.TEXT:
        if operator != Operator.LIKE and operator not in EQUALITY_OPERATORS:
            raise TypeMismatchError(
                name,
                "text",
                token.position,
                f"operator {operator.value!r} needs a numeric or date field",
            )
    elif operator == Operator.LIKE:
        raise TypeMismatchError(
            name,
            kind.value,
            token.position,
            "'like' only applies to text fields",
        )


def _convert_literal(name: str, kind: FieldKind, token: Token) -> Literal:
    if kind == FieldKind.INTEGER:
        if token.type != TokenType.NUMBER:
            raise TypeMismatchError(name, "integer", token.position, f"got {token.describe()}")
        return int(token.value)

    if token.type != TokenType.STRING:
        expected = "date" if kind == FieldKind.DATE else "text"
        raise TypeMismatchError(name, expected, token.position, f"got {token.describe()}")

    if kind == FieldKind.DATE:
        try:
            return dt.date.fromisoformat(token.value)
        except ValueError:
            raise TypeMismatchError(
                name,
                "date",
                token.position,
                f"{token.describe()} is not a YYYY-MM-DD date",
            ) from None
    return token.value


def parse(tokens: Iterable[Token]) -> Query:
    """Parse a token stream into a Query.

    Args:
        tokens: Tokens as produced by tokenize(). A missing EOF is added.

    Returns:
        The parsed, immutable query.

    Raises:
        ParseError: If the tokens do not follow the grammar.
        UnknownFieldError: If a field is not in the record catalog.
        TypeMismatchError: If an operator or literal does not suit the field.
    """
    return _Parser(tokens).parse()


def parse_query(text: str) -> Query:
    """Tokenize and parse one query line.

    Raises:
        LexError: If the text contains a character no token can start with.
        ParseError: See parse().

    Examples:
        >>> parse_query('select jobs where rem_upper > 100;')
        Query(predicate=Comparison(field='rem_upper', operator=<Operator.GT: '>'>, literal=100), order_by=None)
    """
    return parse(tokenize(text))

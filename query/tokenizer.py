"""Tokenizer for the job query language."""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum, auto

from .errors import LexError


class TokenType(Enum):
    """Token types for the job query language."""

    SELECT = auto()
    JOBS = auto()
    WHERE = auto()
    ORDER = auto()
    BY = auto()
    AND = auto()
    OR = auto()
    LIKE = auto()
    ASC = auto()
    DESC = auto()
    IDENT = auto()  # Field name, lower-cased
    STRING = auto()  # Double-quoted literal, escapes resolved
    NUMBER = auto()  # Integer literal
    EQ = auto()  # =
    NE = auto()  # !=
    LT = auto()  # <
    LE = auto()  # <=
    GT = auto()  # >
    GE = auto()  # >=
    SEMICOLON = auto()  # ;
    EOF = auto()  # End of input


KEYWORDS = {
    "select": TokenType.SELECT,
    "jobs": TokenType.JOBS,
    "where": TokenType.WHERE,
    "order": TokenType.ORDER,
    "by": TokenType.BY,
    "and": TokenType.AND,
    "or": TokenType.OR,
    "like": TokenType.LIKE,
    "asc": TokenType.ASC,
    "desc": TokenType.DESC,
}

_ESCAPES = {"\\": "\\", '"': '"', "n": "\n", "t": "\t"}


@dataclass(frozen=True)
class Token:
    """A token from the job query language.

    Attributes:
        type: The type of token.
        value: Lower-cased text for keywords and identifiers, the unescaped
            content for strings, the digits for numbers.
        position: Offset of the token's first character in the input.
        end: Offset just past the token's last character, quotes and
            escapes included. None when the token was not lexed from text.
    """

    type: TokenType
    value: str
    position: int = 0
    end: int | None = None

    @property
    def end_position(self) -> int:
        if self.end is not None:
            return self.end
        return self.position + len(self.value)

    def describe(self) -> str:
        """Render the token for error messages."""
        if self.type == TokenType.EOF:
            return "end of input"
        if self.type == TokenType.STRING:
            return f'"{self.value}"'
        return f"'{self.value}'"


def _skip_whitespace(text: str, pos: int) -> int:
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos


def _parse_string(text: str, pos: int) -> tuple[Token, int]:
    """Parse a quoted string whose opening quote is at pos.

    Raises:
        LexError: If the string or an escape sequence is not terminated, or
            an escape sequence is unknown.
    """
    start_pos = pos
    pos += 1
    value_chars: list[str] = []

    while pos < len(text):
        char = text[pos]
        if char == '"':
            return Token(TokenType.STRING, "".join(value_chars), start_pos, pos + 1), pos + 1
        if char == "\\":
            if pos + 1 >= len(text):
                raise LexError(pos, char, "Unterminated escape sequence")
            next_char = text[pos + 1]
            if next_char not in _ESCAPES:
                raise LexError(pos, char, f"Invalid escape sequence: \\{next_char}")
            value_chars.append(_ESCAPES[next_char])
            pos += 2
        else:
            value_chars.append(char)
            pos += 1

    raise LexError(start_pos, '"', "Unterminated string")


def _is_digit(char: str) -> bool:
    # ASCII only: int() rejects digits such as "²" that str.isdigit() accepts.
    return "0" <= char <= "9"


def _parse_number(text: str, pos: int) -> tuple[Token, int]:
    start = pos
    if text[pos] == "-":
        pos += 1
    while pos < len(text) and _is_digit(text[pos]):
        pos += 1
    return Token(TokenType.NUMBER, text[start:pos], start, pos), pos


def _is_word_char(char: str) -> bool:
    return char.isalnum() or char == "_"


def tokenize(text: str) -> Iterator[Token]:
    """Tokenize a query line.

    Tokens are produced lazily in a single pass; the last one is always EOF.

    Args:
        text: The query text.

    Yields:
        Token objects.

    Raises:
        LexError: On the first character that does not start a token.
    """
    pos = 0
    length = len(text)

    while True:
        pos = _skip_whitespace(text, pos)
        if pos >= length:
            break

        char = text[pos]
        nxt = text[pos + 1] if pos + 1 < length else ""

        if char == '"':
            token, pos = _parse_string(text, pos)
            yield token
        elif _is_digit(char) or (char == "-" and _is_digit(nxt)):
            token, pos = _parse_number(text, pos)
            yield token
        elif char.isalpha() or char == "_":
            start = pos
            while pos < length and _is_word_char(text[pos]):
                pos += 1
            word = text[start:pos].lower()
            yield Token(KEYWORDS.get(word, TokenType.IDENT), word, start, pos)
        elif char == "=":
            yield Token(TokenType.EQ, "=", pos, pos + 1)
            pos += 1
        elif char == "!" and nxt == "=":
            yield Token(TokenType.NE, "!=", pos, pos + 2)
            pos += 2
        elif char == "<":
            if nxt == "=":
                yield Token(TokenType.LE, "<=", pos, pos + 2)
                pos += 2
            else:
                yield Token(TokenType.LT, "<", pos, pos + 1)
                pos += 1
        elif char == ">":
            if nxt == "=":
                yield Token(TokenType.GE, ">=", pos, pos + 2)
                pos += 2
            else:
                yield Token(TokenType.GT, ">", pos, pos + 1)
                pos += 1
        elif char == ";":
            yield Token(TokenType.SEMICOLON, ";", pos, pos + 1)
            pos += 1
        else:
            raise LexError(pos, char)

    yield Token(TokenType.EOF, "", pos, pos)

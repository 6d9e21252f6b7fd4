"""Query language for filtering scraped jobs.

A query is a single simplified SQL statement over the jobs snapshot.

Query Language Examples:
    select jobs;
    select jobs where title like "%senior%";
    select jobs where rem_upper > 100 and location like "%remote%";
    select jobs where site = "web3.career" or tags like "%rust%";
    select jobs where date_posted >= "2024-05-01" order by date_posted desc;

Operators:
    text fields (title, company, location, remuneration, tags, apply, site):
        =, !=, like            - case-insensitive; like uses % as wildcard
    integer fields (rem_lower, rem_upper) and date_posted:
        =, !=, <, <=, >, >=    - dates are written as "YYYY-MM-DD"

Precedence (tightest to loosest):
    1. and
    2. or
"""

from .errors import (
    LexError,
    ParseError,
    QueryError,
    TrailingInputError,
    TypeMismatchError,
    UnknownFieldError,
)
from .evaluator import evaluate, like
from .executor import execute, run_query
from .parser import parse, parse_query
from .tokenizer import Token, TokenType, tokenize
from .types import And, Comparison, Operator, Or, OrderBy, Predicate, Query, to_query_string

__all__ = [
    # Tokenizer
    "tokenize",
    "Token",
    "TokenType",
    # Parser
    "parse",
    "parse_query",
    # Evaluator
    "evaluate",
    "like",
    # Executor
    "execute",
    "run_query",
    # Errors
    "QueryError",
    "LexError",
    "ParseError",
    "TrailingInputError",
    "UnknownFieldError",
    "TypeMismatchError",
    # Types
    "Query",
    "Predicate",
    "Comparison",
    "And",
    "Or",
    "OrderBy",
    "Operator",
    # Utilities
    "to_query_string",
]

"""Data models for job postings."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Tuple


class FieldKind(Enum):
    TEXT = "text"
    INTEGER = "integer"
    DATE = "date"


# Every queryable column and the kind of literal it compares against.
FIELDS: Dict[str, FieldKind] = {
    "title": FieldKind.TEXT,
    "company": FieldKind.TEXT,
    "date_posted": FieldKind.DATE,
    "location": FieldKind.TEXT,
    "remuneration": FieldKind.TEXT,
    "tags": FieldKind.TEXT,
    "apply": FieldKind.TEXT,
    "site": FieldKind.TEXT,
    "rem_lower": FieldKind.INTEGER,
    "rem_upper": FieldKind.INTEGER,
}


@dataclass(frozen=True)
class Job:
    title: str
    company: str
    date_posted: dt.date
    apply: str
    site: str
    location: str = ""
    remuneration: str = ""
    tags: Tuple[str, ...] = field(default_factory=tuple)
    rem_lower: int = 0
    rem_upper: int = 0

    def value_of(self, name: str) -> str | int | dt.date:
        """Return the comparable value of a catalog field.

        Tags are seen as one comma separated string, empty optionals as "".
        """
        if name not in FIELDS:
            raise KeyError(name)
        if name == "tags":
            return ", ".join(self.tags)
        value = getattr(self, name)
        if value is None:
            return ""
        return value

"""Data model for visitor sign-in records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from visitorlog.validation import validate_fields

RECORD_PREFIX = "visitor_"
RECORD_SUFFIX = ".json"


def record_filename(record_id: int) -> str:
    """Return the file name a record is stored under: visitor_<id>.json."""
    return f"{RECORD_PREFIX}{record_id}{RECORD_SUFFIX}"


def parse_record_id(filename: str) -> int | None:
    """Reverse of record_filename.

    Returns None for names outside the visitor_*.json pattern. A name that
    matches the pattern but carries a non-numeric segment raises ValueError.
    """
    if not (filename.startswith(RECORD_PREFIX) and filename.endswith(RECORD_SUFFIX)):
        return None
    segment = filename[len(RECORD_PREFIX):-len(RECORD_SUFFIX)]
    if not (segment.isascii() and segment.isdigit()):
        msg = f"Malformed record file name: {filename}"
        raise ValueError(msg)
    return int(segment)


@dataclass
class VisitorRecord:
    """One visitor sign-in entry.

    ``id`` stays None until the record is first saved.
    """

    full_name: str
    age: int | float
    date: str                    # YYYY-MM-DD
    time: str                    # HH:MM, 24-hour
    comments: str
    assistant: str
    id: int | None = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        validate_fields(self.full_name, self.age, self.date, self.time, self.comments, self.assistant)

    def assign_id(self, record_id: int) -> None:
        """Set the identifier once. Reassigning a different id raises ValueError."""
        if self.id is not None and self.id != record_id:
            msg = f"Record already has ID {self.id}"
            raise ValueError(msg)
        self.id = record_id

    @property
    def filename(self) -> str | None:
        return record_filename(self.id) if self.id is not None else None

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> VisitorRecord:
        return cls(
            full_name=d.get("fullName"),  # type: ignore[arg-type]
            age=d.get("age"),  # type: ignore[arg-type]
            date=d.get("date"),  # type: ignore[arg-type]
            time=d.get("time"),  # type: ignore[arg-type]
            comments=d.get("comments"),  # type: ignore[arg-type]
            assistant=d.get("assistant"),  # type: ignore[arg-type]
            id=d.get("id"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "fullName": self.full_name,
            "age": self.age,
            "date": self.date,
            "time": self.time,
            "comments": self.comments,
            "assistant": self.assistant,
            "id": self.id,
        }

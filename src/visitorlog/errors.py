"""Error kinds raised by the visitor log.

Every failure the library reports carries one ErrorKind. The kind's value is
the human-readable message template, so callers can either branch on
``exc.kind`` or show ``str(exc)`` directly.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(Enum):
    INVALID_NAME = "Name should be a string with both a first and last name."
    INVALID_AGE = "Age should be a non-negative number."
    INVALID_DATE = "Date should be a string in the format YYYY-MM-DD."
    INVALID_TIME = "Time should be a string in the format HH:MM."
    INVALID_COMMENTS = "Comments should be a string."
    INVALID_ASSISTANT = "Assistant should be a string with both a first and last name."
    INVALID_ID = "ID should be a number."
    RECORD_NOT_FOUND = "No visitor found with ID {id}."
    CANNOT_UPDATE = "No visitor found with ID {id}. Cannot update."

    def format(self, **params: Any) -> str:
        return self.value.format(**params)


class VisitorLogError(Exception):
    """A failed validation or persistence operation."""

    def __init__(self, kind: ErrorKind, **params: Any) -> None:
        self.kind = kind
        self.message = kind.format(**params)
        super().__init__(self.message)

"""Field validation for visitor records."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

from visitorlog.errors import ErrorKind, VisitorLogError

if TYPE_CHECKING:
    from collections.abc import Callable

_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_TIME_RE = re.compile(r"[0-9]{2}:[0-9]{2}")


def _is_full_name(value: Any) -> bool:
    return isinstance(value, str) and len(value.split()) == 2


def _is_age(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return value >= 0  # NaN compares False


def _is_date(value: Any) -> bool:
    return isinstance(value, str) and _DATE_RE.fullmatch(value) is not None


def _is_time(value: Any) -> bool:
    return isinstance(value, str) and _TIME_RE.fullmatch(value) is not None


def _is_comments(value: Any) -> bool:
    return isinstance(value, str)


# Checked in this order; the first failure wins.
_RULES: tuple[tuple[str, ErrorKind, Callable[[Any], bool]], ...] = (
    ("full_name", ErrorKind.INVALID_NAME, _is_full_name),
    ("age", ErrorKind.INVALID_AGE, _is_age),
    ("date", ErrorKind.INVALID_DATE, _is_date),
    ("time", ErrorKind.INVALID_TIME, _is_time),
    ("comments", ErrorKind.INVALID_COMMENTS, _is_comments),
    ("assistant", ErrorKind.INVALID_ASSISTANT, _is_full_name),
)


def validate_fields(
    full_name: Any,
    age: Any,
    date: Any,
    time: Any,
    comments: Any,
    assistant: Any,
) -> None:
    """Raise VisitorLogError for the first field that breaks its rule.

    Rules:
        full_name, assistant  str with exactly two whitespace-separated parts
        age                   int or float (not bool), >= 0
        date                  text of the form YYYY-MM-DD (not calendar-checked)
        time                  text of the form HH:MM (not range-checked)
        comments              any str
    """
    values = {
        "full_name": full_name,
        "age": age,
        "date": date,
        "time": time,
        "comments": comments,
        "assistant": assistant,
    }
    for field_name, kind, check in _RULES:
        if not check(values[field_name]):
            raise VisitorLogError(kind)

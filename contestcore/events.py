"""Event names, common query fields and their validation."""

from __future__ import annotations

import dataclasses
import enum
import numbers
import re
from collections.abc import Sized
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

ALLOWED_EVENT_FORMAT = re.compile(r"[a-zA-Z]+")

STATE_EVENT_NAME = "TestState"

EVENT_JOB_STARTED = "JobStateStarted"
EVENT_JOB_COMPLETED = "JobStateCompleted"
EVENT_JOB_FAILED = "JobStateFailed"
EVENT_JOB_CANCELLING = "JobStateCancelling"
EVENT_JOB_CANCELLED = "JobStateCancelled"
EVENT_JOB_CANCELLATION_FAILED = "JobStateCancellationFailed"

JOB_COMPLETION_EVENTS = (
    EVENT_JOB_COMPLETED,
    EVENT_JOB_FAILED,
    EVENT_JOB_CANCELLED,
    EVENT_JOB_CANCELLATION_FAILED,
)

JOB_STATE_EVENTS = (
    EVENT_JOB_STARTED,
    EVENT_JOB_COMPLETED,
    EVENT_JOB_FAILED,
    EVENT_JOB_CANCELLING,
    EVENT_JOB_CANCELLED,
    EVENT_JOB_CANCELLATION_FAILED,
)


def validate_event_name(name: str) -> str:
    """Return ``name`` if it is a valid event name, raise ValueError otherwise."""
    if not ALLOWED_EVENT_FORMAT.fullmatch(name):
        raise ValueError(
            f"event name {name} does not comply with events api "
            f"(does not match {ALLOWED_EVENT_FORMAT.pattern})"
        )
    return name


class QueryFieldAlreadySetError(ValueError):
    """A query field was given more than once."""

    def __init__(self, field_name: str, field_value: Any, value: Any) -> None:
        self.field_name = field_name
        self.field_value = field_value
        self.value = value
        super().__init__(
            f"field {field_name} is set multiple times: "
            f"cur_value:{field_value!r} new_value:{value!r}"
        )


class QueryFieldZeroValueError(ValueError):
    """A query field was given a zero value."""

    def __init__(self, field_name: str, value: Any) -> None:
        self.field_name = field_name
        self.value = value
        super().__init__(f"field {field_name} has a zero value")


@dataclass
class Query:
    """Fields common to all event queries."""

    job_id: int = 0
    event_names: list[str] = field(default_factory=list)
    emitted_start_time: datetime | None = None
    emitted_end_time: datetime | None = None


def is_zero(value: Any) -> bool:
    """Return whether ``value`` is the empty value of its kind."""
    if value is None:
        return True
    if isinstance(value, datetime):
        return value == datetime.min
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return all(is_zero(getattr(value, f.name)) for f in dataclasses.fields(value))
    if isinstance(value, enum.Enum):
        return is_zero(value.value)
    if isinstance(value, Sized):
        return len(value) == 0
    if isinstance(value, numbers.Number):
        return value == 0
    return False


def apply_query_field(query: Any, field_name: str, value: Any) -> None:
    """Set ``field_name`` on ``query``, refusing zero values and repeated fields."""
    if is_zero(value):
        raise QueryFieldZeroValueError(field_name, value)
    current = getattr(query, field_name)
    if not is_zero(current):
        raise QueryFieldAlreadySetError(field_name, current, value)
    if isinstance(value, (list, tuple)):
        value = list(value)
    setattr(query, field_name, value)
"""Events emitted by the framework itself, and queries over them."""

from __future__ import annotations

import abc
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable

from contestcore.events import Query, apply_query_field


@dataclass
class FrameworkEvent:
    """An event emitted by the framework, such as a job state change."""

    job_id: int = 0
    event_name: str = ""
    payload: str | None = None
    emit_time: datetime | None = None


@dataclass
class FrameworkQuery(Query):
    """Query over framework events."""


@dataclass(frozen=True)
class QueryField:
    """One field value to set on a FrameworkQuery."""

    name: str
    value: Any

    def apply(self, query: FrameworkQuery) -> None:
        """Set this field on ``query``."""
        apply_query_field(query, self.name, self.value)


def build_query(*fields: QueryField) -> FrameworkQuery:
    """Build a FrameworkQuery from scratch by applying ``fields`` in order."""
    query = FrameworkQuery()
    for query_field in fields:
        query_field.apply(query)
    return query


def query_job_id(job_id: int) -> QueryField:
    """Select events of one job."""
    return QueryField("job_id", job_id)


def query_event_names(event_names: Iterable[str]) -> QueryField:
    """Select events with any of the given names."""
    return QueryField("event_names", tuple(event_names))


def query_event_name(event_name: str) -> QueryField:
    """Select events with the given name."""
    return QueryField("event_names", (event_name,))


def query_emitted_start_time(emitted_start_time: datetime) -> QueryField:
    """Select events emitted at or after the given time."""
    return QueryField("emitted_start_time", emitted_start_time)


def query_emitted_end_time(emitted_end_time: datetime) -> QueryField:
    """Select events emitted at or before the given time."""
    return QueryField("emitted_end_time", emitted_end_time)


class Emitter(abc.ABC):
    """Something that can store framework events."""

    @abc.abstractmethod
    def emit(self, event: FrameworkEvent) -> None:
        """Store ``event``."""


class Fetcher(abc.ABC):
    """Something that can retrieve framework events."""

    @abc.abstractmethod
    def fetch(self, *fields: QueryField) -> list[FrameworkEvent]:
        """Return the events that match ``fields``."""
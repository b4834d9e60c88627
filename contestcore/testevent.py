"""Events emitted by test steps, and queries over them."""

from __future__ import annotations

import abc
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable

from contestcore.events import Query, apply_query_field


@dataclass
class Header:
    """Metadata identifying who emitted a test event; set by the framework."""

    job_id: int = 0
    run_id: int = 0
    test_name: str = ""
    test_step_label: str = ""


@dataclass
class Data:
    """The part of a test event filled in by the test step."""

    event_name: str = ""
    target: Any = None
    payload: str | None = None


@dataclass
class TestEvent:
    """An event emitted by a test step."""

    __test__ = False

    header: Header | None = None
    data: Data | None = None
    emit_time: datetime | None = None


@dataclass
class TestQuery(Query):
    """Query over test events."""

    __test__ = False

    run_id: int = 0
    test_name: str = ""
    test_step_label: str = field(default="")


@dataclass(frozen=True)
class QueryField:
    """One field value to set on a TestQuery."""

    name: str
    value: Any

    def apply(self, query: TestQuery) -> None:
        """Set this field on ``query``."""
        apply_query_field(query, self.name, self.value)


def build_query(*fields: QueryField) -> TestQuery:
    """Build a TestQuery from scratch by applying ``fields`` in order."""
    query = TestQuery()
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


def query_test_name(test_name: str) -> QueryField:
    """Select events of one test."""
    return QueryField("test_name", test_name)


def query_test_step_label(test_step_label: str) -> QueryField:
    """Select events of one test step."""
    return QueryField("test_step_label", test_step_label)


def query_run_id(run_id: int) -> QueryField:
    """Select events of one run."""
    return QueryField("run_id", run_id)


class Emitter(abc.ABC):
    """Something a test step uses to emit events."""

    @abc.abstractmethod
    def emit(self, data: Data) -> None:
        """Emit an event carrying ``data``."""


class Fetcher(abc.ABC):
    """Something that can retrieve test events."""

    @abc.abstractmethod
    def fetch(self, *fields: QueryField) -> list[TestEvent]:
        """Return the events that match ``fields``."""
"""Jobs, their descriptors, reporting configuration and status records."""

from __future__ import annotations

import abc
import dataclasses
import enum
import json
import threading
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import Any

from contestcore.events import Query  # noqa: F401  (re-exported for reporters)
from contestcore.testevent import Fetcher, TestEvent


@dataclass
class ReporterConfig:
    """Configuration of one run or final reporter."""

    name: str = ""
    parameters: str | None = None


@dataclass
class Reporting:
    """Which reporters run after each test run and once at the end of the job."""

    run_reporters: list[ReporterConfig] = field(default_factory=list)
    final_reporters: list[ReporterConfig] = field(default_factory=list)


@dataclass
class JobDescriptor:
    """The job creation request as given by the user."""

    job_name: str = ""
    tags: list[str] = field(default_factory=list)
    runs: int = 0
    run_interval: timedelta = timedelta(0)
    test_descriptors: list[Any] = field(default_factory=list)
    reporting: Reporting = field(default_factory=Reporting)


class Reporter(abc.ABC):
    """Computes the result of a job from its run statuses and events."""

    @property
    @abc.abstractmethod
    def name(self) -> str:
        """The reporter's name."""

    @abc.abstractmethod
    def validate_run_parameters(self, parameters: bytes) -> Any:
        """Check run reporting parameters and return their parsed form."""

    @abc.abstractmethod
    def validate_final_parameters(self, parameters: bytes) -> Any:
        """Check final reporting parameters and return their parsed form."""

    @abc.abstractmethod
    def run_report(
        self,
        cancel: threading.Event,
        parameters: Any,
        run_status: RunStatus,
        ev: Fetcher,
    ) -> tuple[bool, Any]:
        """Report on one run; return success and report data."""

    @abc.abstractmethod
    def final_report(
        self,
        cancel: threading.Event,
        parameters: Any,
        run_statuses: list[RunStatus],
        ev: Fetcher,
    ) -> tuple[bool, Any]:
        """Report on the whole job; return success and report data."""


@dataclass
class ReporterBundle:
    """A reporter together with its already validated parameters."""

    reporter: Reporter
    parameters: Any = None


def _jsonable(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: _jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, enum.Enum):
        return _jsonable(value.value)
    if isinstance(value, dict):
        return {str(key): _jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, timedelta):
        return (value.days * 86_400 + value.seconds) * 10**9 + value.microseconds * 1000
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value


@dataclass
class Report:
    """A run report or a final report."""

    reporter_name: str = ""
    success: bool = False
    report_time: datetime | None = None
    data: Any = None

    def to_json(self) -> bytes:
        """Encode the report data as compact JSON, without HTML escaping."""
        try:
            text = json.dumps(
                _jsonable(self.data),
                separators=(",", ":"),
                ensure_ascii=False,
                sort_keys=True,
                allow_nan=False,
            )
        except (TypeError, ValueError) as exc:
            raise ValueError(f"cannot encode report data: {exc}") from exc
        text = text.replace("\u2028", "\\u2028").replace("\u2029", "\\u2029")
        return (text + "\n").encode("utf-8")


@dataclass
class JobReport:
    """All reports produced for a job."""

    job_id: int = 0
    run_reports: list[list[Report]] = field(default_factory=list)
    final_reports: list[Report] = field(default_factory=list)


@dataclass
class Job:
    """A job running a list of tests on a set of targets."""

    id: int = 0
    name: str = ""
    tags: list[str] = field(default_factory=list)
    runs: int = 0
    run_interval: timedelta = timedelta(0)
    test_descriptors: str = ""
    tests: list[Any] = field(default_factory=list)
    run_reporter_bundles: list[ReporterBundle] = field(default_factory=list)
    final_reporter_bundles: list[ReporterBundle] = field(default_factory=list)
    done: threading.Event = field(default_factory=threading.Event, repr=False, compare=False)
    cancel_event: threading.Event = field(
        default_factory=threading.Event, repr=False, compare=False
    )
    pause_event: threading.Event = field(
        default_factory=threading.Event, repr=False, compare=False
    )
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def _signal(self, event: threading.Event, what: str) -> None:
        with self._lock:
            if event.is_set():
                raise RuntimeError(f"job {self.id} already {what}")
            event.set()

    def cancel(self) -> None:
        """Signal cancellation; raises RuntimeError if already signalled."""
        self._signal(self.cancel_event, "cancelled")

    def pause(self) -> None:
        """Signal pausing; raises RuntimeError if already signalled."""
        self._signal(self.pause_event, "paused")

    def is_cancelled(self) -> bool:
        """Return whether the job has been cancelled."""
        return self.cancel_event.is_set()


@dataclass
class Request:
    """An incoming job request, as persisted in storage."""

    job_id: int = 0
    job_name: str = ""
    requestor: str = ""
    server_id: str = ""
    request_time: datetime | None = None
    job_descriptor: str = ""
    test_descriptors: str = ""


@dataclass
class RunCoordinates:
    """Identifies a run within a job."""

    job_id: int = 0
    run_id: int = 0


@dataclass
class TestCoordinates(RunCoordinates):
    """Identifies a test within a run."""

    __test__ = False

    test_name: str = ""


@dataclass
class TestStepCoordinates(TestCoordinates):
    """Identifies a test step within a test."""

    __test__ = False

    test_step_name: str = ""
    test_step_label: str = ""


@dataclass
class TargetStatus(TestStepCoordinates):
    """Status of one target within a test step."""

    target: Any = None
    in_time: datetime | None = None
    out_time: datetime | None = None
    error: str = ""
    events: list[TestEvent] = field(default_factory=list)


@dataclass
class TestStepStatus(TestStepCoordinates):
    """Status of a test step: events without a target, and per-target statuses."""

    __test__ = False

    events: list[TestEvent] = field(default_factory=list)
    target_statuses: list[TargetStatus] = field(default_factory=list)


@dataclass
class TestStatus(TestCoordinates):
    """Status of a test within a run."""

    __test__ = False

    test_step_statuses: list[TestStepStatus] = field(default_factory=list)
    target_statuses: list[TargetStatus] = field(default_factory=list)


@dataclass
class RunStatus(RunCoordinates):
    """Status of one run of a job."""

    start_time: datetime | None = None
    test_statuses: list[TestStatus] = field(default_factory=list)


@dataclass
class Status:
    """A job's current status, as returned for status requests."""

    name: str = ""
    state: str = ""
    state_err_msg: str = ""
    start_time: datetime | None = None
    end_time: datetime | None = None
    run_status: RunStatus = field(default_factory=RunStatus)
    job_report: JobReport | None = None
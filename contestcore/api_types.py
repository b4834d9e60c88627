"""Events and responses exchanged between API clients and the job manager."""

from __future__ import annotations

import enum
import queue
from dataclasses import dataclass, field
from typing import ClassVar, Union

from contestcore.job import Status


class EventType(enum.IntEnum):
    """Kinds of API events."""

    START = 0
    STATUS = 1
    STOP = 2
    RETRY = 3
    ERROR = 4

    def __str__(self) -> str:
        return _EVENT_TYPE_NAMES.get(self, "unknown_event")


_EVENT_TYPE_NAMES = {
    EventType.START: "event_type_start",
    EventType.STATUS: "event_type_status",
    EventType.STOP: "event_type_stop",
    EventType.RETRY: "event_type_retry",
    EventType.ERROR: "event_type_error",
}


@dataclass(frozen=True)
class EventStartMsg:
    """Arguments of a Start event."""

    requestor: str
    job_descriptor: str = ""
    test_id: str = ""
    num_runs: int = 0


@dataclass(frozen=True)
class EventStatusMsg:
    """Arguments of a Status event."""

    requestor: str
    job_id: int = 0


@dataclass(frozen=True)
class EventStopMsg:
    """Arguments of a Stop event."""

    requestor: str
    job_id: int = 0


@dataclass(frozen=True)
class EventRetryMsg:
    """Arguments of a Retry event."""

    requestor: str
    job_id: int = 0


EventMsg = Union[EventStartMsg, EventStatusMsg, EventStopMsg, EventRetryMsg]


@dataclass
class EventResponse:
    """The job manager's answer to an event."""

    requestor: str = ""
    job_id: int = 0
    err: BaseException | None = None
    status: Status | None = None


@dataclass
class Event:
    """An API event; the answer is put on ``resp_ch``."""

    type: EventType
    msg: EventMsg | None = None
    server_id: str = ""
    err: BaseException | None = None
    resp_ch: queue.Queue = field(
        default_factory=lambda: queue.Queue(maxsize=1), repr=False, compare=False
    )


class ResponseType(enum.IntEnum):
    """Kinds of API responses."""

    START = 0
    STOP = 1
    STATUS = 2
    RETRY = 3
    VERSION = 4

    def __str__(self) -> str:
        return RESPONSE_TYPE_TO_NAME[self]


RESPONSE_TYPE_TO_NAME = {
    ResponseType.START: "ResponseTypeStart",
    ResponseType.STOP: "ResponseTypeStop",
    ResponseType.STATUS: "ResponseTypeStatus",
    ResponseType.RETRY: "ResponseTypeRetry",
    ResponseType.VERSION: "ResponseTypeVersion",
}


@dataclass
class ResponseDataStart:
    """Response data for a Start request."""

    type: ClassVar[ResponseType] = ResponseType.START

    job_id: int = 0


@dataclass
class ResponseDataStop:
    """Response data for a Stop request."""

    type: ClassVar[ResponseType] = ResponseType.STOP


@dataclass
class ResponseDataStatus:
    """Response data for a Status request."""

    type: ClassVar[ResponseType] = ResponseType.STATUS

    status: Status | None = None


@dataclass
class ResponseDataRetry:
    """Response data for a Retry request."""

    type: ClassVar[ResponseType] = ResponseType.RETRY

    job_id: int = 0
    new_job_id: int = 0


@dataclass
class ResponseDataVersion:
    """Response data for a Version request."""

    type: ClassVar[ResponseType] = ResponseType.VERSION

    version: int = 0


ResponseData = Union[
    ResponseDataStart,
    ResponseDataStop,
    ResponseDataStatus,
    ResponseDataRetry,
    ResponseDataVersion,
]


@dataclass
class Response:
    """What every API request returns."""

    type: ResponseType
    server_id: str = ""
    data: ResponseData | None = None
    err: BaseException | None = None
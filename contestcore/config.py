"""Job descriptor parsing and framework timeouts."""

from __future__ import annotations

import datetime as _dt
import enum
import json
import math
from typing import Any

import yaml

TARGET_MANAGER_TIMEOUT = _dt.timedelta(minutes=5)
"""Longest wait for a target manager's acquire and release."""

STEP_INJECT_TIMEOUT = _dt.timedelta(seconds=30)
"""Longest wait for the first test step to accept a target."""

TEST_RUNNER_MSG_TIMEOUT = _dt.timedelta(seconds=5)
"""Longest wait for delivery of a message between test runner components."""

TEST_RUNNER_SHUTDOWN_TIMEOUT = _dt.timedelta(seconds=30)
"""Longest wait for test steps to finish after cancellation."""

TEST_RUNNER_STEP_SHUTDOWN_TIMEOUT = _dt.timedelta(seconds=5)
"""Longest wait for test steps to finish once all targets went through."""

LOCK_REFRESH_TIMEOUT = _dt.timedelta(minutes=1)
"""Amount by which a target lock is extended while a job runs."""

LOCK_INITIAL_TIMEOUT = TARGET_MANAGER_TIMEOUT + LOCK_REFRESH_TIMEOUT
"""Initial lock duration when acquiring a target."""


class JobDescFormat(enum.IntEnum):
    """Supported job descriptor formats."""

    JSON = 0
    YAML = 1


_HTML_ESCAPES = (
    ("&", "\\u0026"),
    ("<", "\\u003c"),
    (">", "\\u003e"),
    ("\u2028", "\\u2028"),
    ("\u2029", "\\u2029"),
)


def _normalize(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(key): _normalize(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize(item) for item in value]
    if isinstance(value, float) and math.isfinite(value):
        if value.is_integer() and abs(value) < 1e21:
            return int(value)
        return value
    if isinstance(value, (_dt.date, _dt.time)):
        return value.isoformat()
    return value


def parse_job_descriptor(data: bytes | str, job_desc_format: JobDescFormat) -> bytes:
    """Check a job descriptor and return it as indented JSON.

    The descriptor may be given as JSON or YAML; its top level must be a mapping.
    """
    job_desc_format = JobDescFormat(job_desc_format)
    if job_desc_format is JobDescFormat.JSON:
        try:
            job_desc = json.loads(data)
        except ValueError as exc:
            raise ValueError(f"failed to parse JSON job descriptor: {exc}") from exc
        if job_desc is not None and not isinstance(job_desc, dict):
            raise ValueError(
                "failed to parse JSON job descriptor: expected a mapping at the top level"
            )
    else:
        try:
            job_desc = yaml.safe_load(data)
        except yaml.YAMLError as exc:
            raise ValueError(f"failed to parse YAML job descriptor: {exc}") from exc
        if job_desc is None:
            job_desc = {}
        if not isinstance(job_desc, dict):
            raise ValueError(
                "failed to parse YAML job descriptor: expected a mapping at the top level"
            )

    try:
        text = json.dumps(
            _normalize(job_desc),
            indent=4,
            sort_keys=True,
            ensure_ascii=False,
            allow_nan=False,
        )
    except (TypeError, ValueError) as exc:
        raise ValueError(f"failed to serialize job descriptor to JSON: {exc}") from exc
    for char, escaped in _HTML_ESCAPES:
        text = text.replace(char, escaped)
    return text.encode("utf-8")
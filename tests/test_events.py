from datetime import datetime, timezone

import pytest

from contestcore.events import (
    JOB_COMPLETION_EVENTS,
    JOB_STATE_EVENTS,
    STATE_EVENT_NAME,
    Query,
    QueryFieldAlreadySetError,
    QueryFieldZeroValueError,
    apply_query_field,
    is_zero,
    validate_event_name,
)


@pytest.mark.parametrize(
    "value", [None, 0, 0.0, "", [], (), {}, False, datetime.min, Query()]
)
def test_is_zero_true(value):
    assert is_zero(value) is True


@pytest.mark.parametrize(
    "value",
    [1, -1, "a", ["x"], True, datetime(2020, 1, 1), Query(job_id=3), object()],
)
def test_is_zero_false(value):
    assert is_zero(value) is False


def test_apply_sets_field():
    query = Query()
    now = datetime.now(timezone.utc)
    apply_query_field(query, "job_id", 7)
    apply_query_field(query, "emitted_start_time", now)
    apply_query_field(query, "event_names", ("A", "B"))
    assert query.job_id == 7
    assert query.emitted_start_time == now
    assert query.event_names == ["A", "B"]


def test_apply_rejects_duplicates():
    query = Query()
    apply_query_field(query, "job_id", 2)
    with pytest.raises(QueryFieldAlreadySetError) as info:
        apply_query_field(query, "job_id", 3)
    assert info.value.field_value == 2
    assert info.value.value == 3
    assert "job_id" in str(info.value)
    assert query.job_id == 2


def test_apply_rejects_zero_value():
    query = Query()
    with pytest.raises(QueryFieldZeroValueError) as info:
        apply_query_field(query, "job_id", 0)
    assert info.value.field_name == "job_id"
    assert query.job_id == 0


def test_apply_unknown_field():
    with pytest.raises(AttributeError):
        apply_query_field(Query(), "no_such_field", 1)


def test_errors_are_value_errors():
    with pytest.raises(ValueError):
        apply_query_field(Query(), "event_names", [])


def test_state_event_names_are_valid():
    for name in (*JOB_STATE_EVENTS, STATE_EVENT_NAME):
        assert validate_event_name(name) == name


@pytest.mark.parametrize("name", ["", "Job-State", "Job1", "Job\n", "with space"])
def test_invalid_event_names(name):
    with pytest.raises(ValueError):
        validate_event_name(name)


def test_completion_events_can_be_queried():
    query = Query()
    apply_query_field(query, "event_names", JOB_COMPLETION_EVENTS)
    assert query.event_names == list(JOB_COMPLETION_EVENTS)
    for name in query.event_names:
        assert validate_event_name(name) in JOB_STATE_EVENTS
from datetime import datetime, timezone

import pytest

from smarthealth.assessment.record import build
from smarthealth.assessment.vitals import AssessmentType
from smarthealth.internal_core.session_store import InMemorySessionStore

_VITALS = {"age": 40, "bloodPressure": 80, "glucose": 120, "bmi": 28}


def _record(day: int):
    return build(AssessmentType.DIABETES, _VITALS, "Positive", datetime(2024, 1, day, tzinfo=timezone.utc))


def test_create_session_sorts_loaded_history() -> None:
    store = InMemorySessionStore(ttl_seconds=60)
    session_id = store.create_session("user-1", [_record(1), _record(3), _record(2)])
    session = store.get_session(session_id)
    assert [item.timestamp.day for item in session["records"]] == [3, 2, 1]
    assert session["assessment_type"] is AssessmentType.DIABETES
    assert session["loading"] is False


def test_prepend_record_and_selected_type() -> None:
    store = InMemorySessionStore(ttl_seconds=60)
    session_id = store.create_session("user-1", [_record(1)])
    newest = _record(9)
    store.prepend_record(session_id, newest)
    store.set_assessment_type(session_id, AssessmentType.HEART)
    session = store.get_session(session_id)
    assert session["records"][0] is newest
    assert session["assessment_type"] is AssessmentType.HEART


def test_loading_flag_blocks_double_submit() -> None:
    store = InMemorySessionStore(ttl_seconds=60)
    session_id = store.create_session("user-1")
    assert store.begin_loading(session_id) is True
    assert store.begin_loading(session_id) is False
    store.finish_loading(session_id, "outcome")
    session = store.get_session(session_id)
    assert session["loading"] is False
    assert session["last_outcome"] == "outcome"
    assert store.begin_loading(session_id) is True


def test_unknown_and_expired_sessions() -> None:
    store = InMemorySessionStore(ttl_seconds=0)
    session_id = store.create_session("user-1")
    assert store.cleanup_expired_sessions() == 1
    with pytest.raises(KeyError):
        store.get_session(session_id)
    assert store.destroy_session(session_id) is False

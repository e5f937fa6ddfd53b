from __future__ import annotations

"""
API surface for the Smart Health assessment backend.

Design intent:
- Keep API orchestration thin and typed.
- Own every piece of mutable session state here, never in the assessment core.
- Resolve collaborators from app.state so tests can inject fakes.
"""

import logging
from typing import Any, Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from smarthealth.assessment.history import sort_for_display
from smarthealth.assessment.record import AssessmentRecord, build
from smarthealth.assessment.service import AssessmentOutcome, AssessmentService
from smarthealth.assessment.vitals import REQUIRED_FIELDS, AssessmentType
from smarthealth.errors import InvalidInput, StoreError
from smarthealth.internal_core.config import AppConfig, load_config
from smarthealth.internal_core.contracts import (
    AssessmentOutcomePayload,
    AssessmentPreviewRequest,
    AssessmentRecordPayload,
    AssessmentSubmitRequest,
    AssessmentTypeInfo,
    AssessmentTypeRequest,
    AssessmentTypesResponse,
    HistoryResponse,
    SessionCreateRequest,
    SessionView,
)
from smarthealth.internal_core.history_store import HistoryStore, InMemoryHistoryStore
from smarthealth.internal_core.logging_setup import configure_logging
from smarthealth.internal_core.prediction import PredictionProvider, build_prediction_provider
from smarthealth.internal_core.session_store import InMemorySessionStore

_CONFIG = load_config()
configure_logging(_CONFIG.SMARTHEALTH_LOG_LEVEL)

app = FastAPI(title="smarthealth assessment service")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_CONFIG.SMARTHEALTH_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _get_config() -> AppConfig:
    existing = getattr(app.state, "config", None)
    if isinstance(existing, AppConfig):
        return existing
    setattr(app.state, "config", _CONFIG)
    return _CONFIG


def _get_history_store() -> HistoryStore:
    existing = getattr(app.state, "history_store", None)
    if isinstance(existing, HistoryStore):
        return existing
    created = InMemoryHistoryStore()
    setattr(app.state, "history_store", created)
    return created


def _get_session_store() -> InMemorySessionStore:
    existing = getattr(app.state, "session_store", None)
    if isinstance(existing, InMemorySessionStore):
        return existing
    created = InMemorySessionStore(ttl_seconds=_get_config().SMARTHEALTH_SESSION_TTL_SECONDS)
    setattr(app.state, "session_store", created)
    return created


def _get_prediction_provider() -> PredictionProvider:
    existing = getattr(app.state, "prediction_provider", None)
    if isinstance(existing, PredictionProvider):
        return existing
    created = build_prediction_provider(_get_config())
    setattr(app.state, "prediction_provider", created)
    return created


def _build_service() -> AssessmentService:
    return AssessmentService(
        _get_prediction_provider(),
        _get_history_store(),
        inject_prediction_failure=_get_config().SMARTHEALTH_TEST_INJECT_PREDICTION_FAIL,
    )


@app.on_event("shutdown")
async def _close_prediction_provider() -> None:
    provider = getattr(app.state, "prediction_provider", None)
    if isinstance(provider, PredictionProvider):
        await provider.aclose()


def _record_payload(record: AssessmentRecord) -> AssessmentRecordPayload:
    return AssessmentRecordPayload(
        id=record.record_id,
        assessment_type=record.assessment_type.value,
        vitals=dict(record.input_snapshot),
        prediction_label=record.prediction_label,
        is_risky=record.is_risky,
        risk_score=record.risk_score,
        advisory=record.advisory,
        timestamp=record.timestamp_iso(),
    )


def _outcome_payload(outcome: AssessmentOutcome) -> AssessmentOutcomePayload:
    return AssessmentOutcomePayload(
        status=outcome.status,
        assessment_type=outcome.assessment_type.value,
        prediction=outcome.prediction,
        is_risky=outcome.is_risky,
        advisory=outcome.advisory,
        risk_score=outcome.risk_score,
        record=_record_payload(outcome.record) if outcome.record is not None else None,
        persisted=outcome.persisted,
        store_error=outcome.store_error,
    )


def _session_view(session: dict[str, Any]) -> SessionView:
    last_outcome = session.get("last_outcome")
    return SessionView(
        session_id=session["session_id"],
        user_id=session["user_id"],
        assessment_type=session["assessment_type"].value,
        loading=bool(session["loading"]),
        records=[_record_payload(item) for item in session["records"]],
        last_outcome=_outcome_payload(last_outcome) if isinstance(last_outcome, AssessmentOutcome) else None,
        expires_at=session["expires_at"],
    )


def _require_session(session_id: str) -> dict[str, Any]:
    try:
        return _get_session_store().get_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=f"Unknown session_id: {session_id}") from exc


def _parse_assessment_type(raw: Any) -> AssessmentType:
    try:
        return AssessmentType.parse(raw)
    except InvalidInput as exc:
        raise HTTPException(status_code=400, detail=exc.message) from exc


async def _load_history(user_id: str) -> list[AssessmentRecord]:
    try:
        records = await _get_history_store().list(user_id)
    except StoreError as exc:
        logger.error("history_list_failed user_id=%s code=%s detail=%s", user_id, exc.code, exc.message)
        raise HTTPException(status_code=503, detail=f"History unavailable: {exc.message}") from exc
    return sort_for_display(records)


@app.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/assessment-types", response_model=AssessmentTypesResponse)
async def assessment_types() -> AssessmentTypesResponse:
    return AssessmentTypesResponse(
        assessment_types=[
            AssessmentTypeInfo(assessment_type=kind.value, required_fields=list(fields))
            for kind, fields in REQUIRED_FIELDS.items()
        ]
    )


@app.post("/sessions", response_model=SessionView)
async def create_session(payload: SessionCreateRequest) -> SessionView:
    store = _get_session_store()
    expired = store.cleanup_expired_sessions()
    if expired:
        logger.info("sessions_expired count=%d", expired)
    records = await _load_history(payload.user_id)
    session_id = store.create_session(payload.user_id, records)
    logger.info("session_created user_id=%s records=%d", payload.user_id, len(records))
    return _session_view(store.get_session(session_id))


@app.get("/sessions/{session_id}", response_model=SessionView)
async def read_session(session_id: str) -> SessionView:
    return _session_view(_require_session(session_id))


@app.put("/sessions/{session_id}/assessment-type", response_model=SessionView)
async def select_assessment_type(session_id: str, payload: AssessmentTypeRequest) -> SessionView:
    _require_session(session_id)
    kind = _parse_assessment_type(payload.assessment_type)
    _get_session_store().set_assessment_type(session_id, kind)
    return _session_view(_get_session_store().get_session(session_id))


@app.delete("/sessions/{session_id}")
async def end_session(session_id: str) -> dict[str, str]:
    if not _get_session_store().destroy_session(session_id):
        raise HTTPException(status_code=404, detail=f"Unknown session_id: {session_id}")
    return {"status": "ended"}


@app.post("/sessions/{session_id}/assessments", response_model=AssessmentOutcomePayload)
async def submit_assessment(session_id: str, payload: AssessmentSubmitRequest) -> AssessmentOutcomePayload:
    session = _require_session(session_id)
    store = _get_session_store()
    kind = (
        _parse_assessment_type(payload.assessment_type)
        if payload.assessment_type
        else session["assessment_type"]
    )
    if not store.begin_loading(session_id):
        raise HTTPException(status_code=409, detail="An assessment is already in progress for this session.")

    outcome: Optional[AssessmentOutcome] = None
    try:
        outcome = await _build_service().run(session["user_id"], kind, payload.vitals)
    except InvalidInput as exc:
        raise HTTPException(status_code=400, detail=exc.message) from exc
    finally:
        store.finish_loading(session_id, outcome)

    if outcome.record is not None:
        store.prepend_record(session_id, outcome.record)
    return _outcome_payload(outcome)


@app.get("/users/{user_id}/history", response_model=HistoryResponse)
async def user_history(user_id: str, limit: Optional[int] = Query(default=None, ge=1, le=1000)) -> HistoryResponse:
    records = await _load_history(user_id)
    resolved_limit = limit or _get_config().SMARTHEALTH_HISTORY_LIMIT
    return HistoryResponse(
        user_id=user_id,
        records=[_record_payload(item) for item in records[:resolved_limit]],
    )


@app.post("/assessments/preview", response_model=AssessmentRecordPayload)
async def preview_assessment(payload: AssessmentPreviewRequest) -> AssessmentRecordPayload:
    try:
        record = build(payload.assessment_type, payload.vitals, payload.prediction_label)
    except InvalidInput as exc:
        raise HTTPException(status_code=400, detail=exc.message) from exc
    return _record_payload(record)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)

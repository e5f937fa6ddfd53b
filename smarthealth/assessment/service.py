from __future__ import annotations

"""
Assessment orchestration across the two async boundaries.

Design intent:
- Validate vitals before the prediction call so bad input never leaves the process.
- Bypass the core entirely when the prediction call fails (no partial record).
- Surface persistence failures on the outcome without discarding the record.
"""

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Literal, Mapping, Optional

from smarthealth.assessment.record import AssessmentRecord, build
from smarthealth.assessment.vitals import AssessmentType, parse_vitals
from smarthealth.errors import ExternalServiceError, StoreError
from smarthealth.internal_core.history_store import HistoryStore
from smarthealth.internal_core.prediction import PredictionProvider

logger = logging.getLogger(__name__)

UNABLE_TO_CONNECT = "Unable to connect to server."

OutcomeStatus = Literal["ok", "unable_to_connect"]


@dataclass(frozen=True)
class AssessmentOutcome:
    status: OutcomeStatus
    assessment_type: AssessmentType
    prediction: str
    record: Optional[AssessmentRecord] = None
    persisted: bool = False
    store_error: str = ""
    service_error: str = ""

    @property
    def is_risky(self) -> bool:
        return self.record.is_risky if self.record is not None else False

    @property
    def advisory(self) -> str:
        return self.record.advisory if self.record is not None else ""

    @property
    def risk_score(self) -> Optional[int]:
        return self.record.risk_score if self.record is not None else None


def unable_to_connect(assessment_type: AssessmentType, reason: str = "") -> AssessmentOutcome:
    return AssessmentOutcome(
        status="unable_to_connect",
        assessment_type=assessment_type,
        prediction=UNABLE_TO_CONNECT,
        service_error=reason,
    )


class AssessmentService:
    def __init__(
        self,
        provider: PredictionProvider,
        store: HistoryStore,
        *,
        inject_prediction_failure: bool = False,
    ) -> None:
        self._provider = provider
        self._store = store
        self._inject_prediction_failure = inject_prediction_failure

    async def _predict(self, assessment_type: AssessmentType, vitals: Any) -> str:
        if self._inject_prediction_failure:
            raise ExternalServiceError("injected", "Injected prediction failure.", self._provider.name())
        return await self._provider.predict(assessment_type, vitals)

    async def run(
        self,
        user_id: str,
        assessment_type: AssessmentType | str,
        raw_vitals: Mapping[str, Any],
        *,
        timestamp: Optional[datetime] = None,
    ) -> AssessmentOutcome:
        vitals = parse_vitals(assessment_type, raw_vitals)
        kind = vitals.assessment_type

        try:
            label = await self._predict(kind, vitals)
        except ExternalServiceError as exc:
            logger.warning(
                "prediction_failed user_id=%s type=%s provider=%s code=%s detail=%s",
                user_id,
                kind.value,
                exc.provider_name,
                exc.code,
                exc.message,
            )
            return unable_to_connect(kind, exc.code)

        record = build(kind, vitals, label, timestamp)

        try:
            doc_id = await self._store.append(user_id, record)
        except StoreError as exc:
            logger.error(
                "history_append_failed user_id=%s type=%s code=%s detail=%s",
                user_id,
                kind.value,
                exc.code,
                exc.message,
            )
            return AssessmentOutcome(
                status="ok",
                assessment_type=kind,
                prediction=label,
                record=record,
                persisted=False,
                store_error=exc.message,
            )

        record = replace(record, record_id=doc_id)
        logger.info(
            "assessment_done user_id=%s type=%s risky=%s score=%d doc_id=%s",
            user_id,
            kind.value,
            record.is_risky,
            record.risk_score,
            doc_id,
        )
        return AssessmentOutcome(
            status="ok",
            assessment_type=kind,
            prediction=label,
            record=record,
            persisted=True,
        )

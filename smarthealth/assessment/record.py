from __future__ import annotations

"""
Assessment record assembly and its document form.

Design intent:
- Compose classify -> score -> advise into one immutable value.
- Validate vitals before anything else so a bad field never yields a record.
- Keep the persisted document shape compatible with records written by older clients.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Mapping, Optional

from smarthealth.assessment.advisory import advise
from smarthealth.assessment.classification import classify
from smarthealth.assessment.history import parse_timestamp
from smarthealth.assessment.scoring import SCORE_MAX, SCORE_MIN, round_half_away_from_zero, score
from smarthealth.assessment.vitals import AssessmentType, VitalsInput, parse_vitals

DOC_ASSESSMENT_TYPE = "assessmentType"
DOC_PREDICTION_LABEL = "predictionLabel"
DOC_ADVISORY = "advisory"
DOC_RISK_SCORE = "riskScore"
DOC_TIMESTAMP = "timestamp"
_DOC_META_KEYS = {DOC_ASSESSMENT_TYPE, DOC_PREDICTION_LABEL, DOC_ADVISORY, DOC_RISK_SCORE, DOC_TIMESTAMP}

# Keys written by the first web client.
LEGACY_DOCUMENT_KEYS = {
    "model_type": DOC_ASSESSMENT_TYPE,
    "prediction": DOC_PREDICTION_LABEL,
    "advice": DOC_ADVISORY,
    "risk": DOC_RISK_SCORE,
    "bp": "bloodPressure",
    "max_heart_rate": "maxHeartRate",
    "cp": "chestPainType",
}


@dataclass(frozen=True)
class AssessmentRecord:
    assessment_type: AssessmentType
    input_snapshot: Mapping[str, Any]
    prediction_label: str
    is_risky: bool
    risk_score: int
    advisory: str
    timestamp: Optional[datetime]
    record_id: Optional[str] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "input_snapshot", MappingProxyType(dict(self.input_snapshot)))

    def timestamp_iso(self) -> Optional[str]:
        return self.timestamp.isoformat() if self.timestamp is not None else None

    def to_document(self) -> dict[str, Any]:
        document: dict[str, Any] = {DOC_ASSESSMENT_TYPE: self.assessment_type.value}
        document.update(self.input_snapshot)
        document[DOC_PREDICTION_LABEL] = self.prediction_label
        document[DOC_ADVISORY] = self.advisory
        document[DOC_RISK_SCORE] = self.risk_score
        document[DOC_TIMESTAMP] = self.timestamp_iso()
        return document


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def build(
    assessment_type: AssessmentType | str,
    vitals: VitalsInput | Mapping[str, Any],
    label: str,
    timestamp: Optional[datetime] = None,
) -> AssessmentRecord:
    if isinstance(vitals, VitalsInput) and vitals.assessment_type == AssessmentType.parse(assessment_type):
        parsed = vitals
    else:
        source = vitals.values if isinstance(vitals, VitalsInput) else vitals
        parsed = parse_vitals(assessment_type, source)

    label = label or ""
    is_risky = classify(label)
    risk_score = score(parsed.assessment_type, parsed, is_risky)
    advisory = advise(label, parsed.assessment_type, is_risky)
    return AssessmentRecord(
        assessment_type=parsed.assessment_type,
        input_snapshot=parsed.as_dict(),
        prediction_label=label,
        is_risky=is_risky,
        risk_score=risk_score,
        advisory=advisory,
        timestamp=parse_timestamp(timestamp) if timestamp is not None else _now_utc(),
    )


def _stored_risk_score(raw: Any) -> int:
    if raw is None or isinstance(raw, bool):
        return SCORE_MIN
    try:
        value = float(raw)
    except (TypeError, ValueError, OverflowError):
        return SCORE_MIN
    if not math.isfinite(value):
        return SCORE_MIN
    return min(SCORE_MAX, max(SCORE_MIN, round_half_away_from_zero(value)))


def record_from_document(document: Mapping[str, Any], record_id: Optional[str] = None) -> AssessmentRecord:
    """Rebuild a record from a stored document.

    Advisories are kept as written and stored scores are rounded into range;
    ``is_risky`` is derived from the label again because it is never persisted.
    """
    normalized: dict[str, Any] = {}
    for key, value in (document or {}).items():
        normalized[LEGACY_DOCUMENT_KEYS.get(key, key)] = value

    label = str(normalized.get(DOC_PREDICTION_LABEL) or "")
    kind = AssessmentType.parse(normalized.get(DOC_ASSESSMENT_TYPE))
    risk_score = _stored_risk_score(normalized.get(DOC_RISK_SCORE))

    return AssessmentRecord(
        assessment_type=kind,
        input_snapshot={k: v for k, v in normalized.items() if k not in _DOC_META_KEYS},
        prediction_label=label,
        is_risky=classify(label),
        risk_score=risk_score,
        advisory=str(normalized.get(DOC_ADVISORY) or ""),
        timestamp=parse_timestamp(normalized.get(DOC_TIMESTAMP)),
        record_id=record_id,
    )

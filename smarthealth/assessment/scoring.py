from __future__ import annotations

"""
Weighted linear risk score per assessment type.

Design intent:
- Cap the raw weighted sum at 100 before rounding.
- Subtract a fixed healthy-label discount after rounding, floored at 0.
- Validate every required field before any arithmetic happens.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Callable, Mapping

from smarthealth.assessment.vitals import (
    AGE,
    BLOOD_PRESSURE,
    BMI,
    CHOLESTEROL,
    GLUCOSE,
    MAX_HEART_RATE,
    REQUIRED_FIELDS,
    SEX,
    SEX_MALE,
    AssessmentType,
    VitalsInput,
    parse_field,
)

SCORE_MIN = 0
SCORE_MAX = 100
HEALTHY_DISCOUNT = 20
MALE_HEART_BONUS = 5.0


def _diabetes_raw(v: Mapping[str, float]) -> float:
    return v[AGE] * 0.3 + v[GLUCOSE] * 0.5 + v[BMI] * 0.2


def _heart_raw(v: Mapping[str, float]) -> float:
    # chestPainType is validated upstream but carries no weight.
    sex_bonus = MALE_HEART_BONUS if v[SEX] == SEX_MALE else 0.0
    return v[AGE] * 0.25 + v[CHOLESTEROL] * 0.4 + v[MAX_HEART_RATE] * 0.25 + sex_bonus


def _hypertension_raw(v: Mapping[str, float]) -> float:
    return v[AGE] * 0.3 + v[BLOOD_PRESSURE] * 0.5 + v[CHOLESTEROL] * 0.2


_FORMULAS: dict[AssessmentType, Callable[[Mapping[str, float]], float]] = {
    AssessmentType.DIABETES: _diabetes_raw,
    AssessmentType.HEART: _heart_raw,
    AssessmentType.HYPERTENSION: _hypertension_raw,
}


def round_half_away_from_zero(value: float) -> int:
    return int(Decimal(value).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _validated_values(kind: AssessmentType, vitals: VitalsInput | Mapping[str, Any]) -> dict[str, float]:
    source = vitals.values if isinstance(vitals, VitalsInput) else (vitals or {})
    return {name: parse_field(name, source.get(name)) for name in REQUIRED_FIELDS[kind]}


def base_score(assessment_type: AssessmentType | str, vitals: VitalsInput | Mapping[str, Any]) -> int:
    kind = AssessmentType.parse(assessment_type)
    values = _validated_values(kind, vitals)
    raw = _FORMULAS[kind](values)
    return round_half_away_from_zero(min(float(SCORE_MAX), raw))


def score(
    assessment_type: AssessmentType | str,
    vitals: VitalsInput | Mapping[str, Any],
    is_risky: bool,
) -> int:
    result = base_score(assessment_type, vitals)
    if not is_risky:
        result = max(SCORE_MIN, result - HEALTHY_DISCOUNT)
    # Only reachable with negative vitals; keeps the score inside its range.
    return max(SCORE_MIN, result)

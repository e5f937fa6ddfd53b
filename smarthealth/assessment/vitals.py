from __future__ import annotations

"""
Vitals parsing and validation per assessment type.

Design intent:
- Accept raw form values (numbers or numeric strings) and reject anything else early.
- Produce an immutable snapshot holding only the fields the selected type needs.
"""

import math
import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from smarthealth.errors import InvalidInput


class AssessmentType(str, Enum):
    DIABETES = "diabetes"
    HEART = "heart"
    HYPERTENSION = "hypertension"

    @classmethod
    def parse(cls, raw: Any) -> "AssessmentType":
        if isinstance(raw, cls):
            return raw
        value = str(raw or "").strip().lower()
        for item in cls:
            if item.value == value:
                return item
        raise InvalidInput(
            "unknown_assessment_type",
            f"Unknown assessment type: {raw!r}",
            field="assessmentType",
        )


AGE = "age"
BLOOD_PRESSURE = "bloodPressure"
GLUCOSE = "glucose"
BMI = "bmi"
CHOLESTEROL = "cholesterol"
MAX_HEART_RATE = "maxHeartRate"
SEX = "sex"
CHEST_PAIN_TYPE = "chestPainType"

SEX_MALE = 1
SEX_FEMALE = 0
CHEST_PAIN_CODES = (0, 1, 2, 3)

REQUIRED_FIELDS: dict[AssessmentType, tuple[str, ...]] = {
    AssessmentType.DIABETES: (AGE, BLOOD_PRESSURE, GLUCOSE, BMI),
    AssessmentType.HEART: (AGE, BLOOD_PRESSURE, CHOLESTEROL, MAX_HEART_RATE, SEX, CHEST_PAIN_TYPE),
    AssessmentType.HYPERTENSION: (AGE, BLOOD_PRESSURE, CHOLESTEROL, MAX_HEART_RATE),
}

_SEX_WORDS = {"male": SEX_MALE, "m": SEX_MALE, "female": SEX_FEMALE, "f": SEX_FEMALE}


@dataclass(frozen=True)
class VitalsInput:
    assessment_type: AssessmentType
    values: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def get(self, name: str) -> Any:
        return self.values.get(name)

    def as_dict(self) -> dict[str, float]:
        return dict(self.values)


# Plain decimal with optional exponent; no underscores, inf or nan.
_NUMBER_TEXT = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def parse_number(name: str, raw: Any) -> float:
    if raw is None:
        raise InvalidInput("missing_field", f"Missing required field: {name}", field=name)
    if isinstance(raw, bool):
        raise InvalidInput("not_numeric", f"Field {name} must be a number.", field=name)
    if isinstance(raw, (int, float)):
        value = float(raw)
    elif isinstance(raw, str):
        text = raw.strip()
        if not text:
            raise InvalidInput("missing_field", f"Missing required field: {name}", field=name)
        if not _NUMBER_TEXT.fullmatch(text):
            raise InvalidInput("not_numeric", f"Field {name} must be a number.", field=name)
        value = float(text)
    else:
        raise InvalidInput("not_numeric", f"Field {name} must be a number.", field=name)
    if not math.isfinite(value):
        raise InvalidInput("not_finite", f"Field {name} must be a finite number.", field=name)
    return value


def _parse_sex(raw: Any) -> int:
    if isinstance(raw, str) and raw.strip().lower() in _SEX_WORDS:
        return _SEX_WORDS[raw.strip().lower()]
    value = parse_number(SEX, raw)
    if value == SEX_MALE:
        return SEX_MALE
    if value == SEX_FEMALE:
        return SEX_FEMALE
    raise InvalidInput("invalid_code", "Field sex must be 1 (male) or 0 (female).", field=SEX)


def _parse_chest_pain_type(raw: Any) -> int:
    value = parse_number(CHEST_PAIN_TYPE, raw)
    if value.is_integer() and int(value) in CHEST_PAIN_CODES:
        return int(value)
    raise InvalidInput(
        "invalid_code",
        "Field chestPainType must be one of 0, 1, 2, 3.",
        field=CHEST_PAIN_TYPE,
    )


def parse_field(name: str, raw: Any) -> float:
    if name == SEX:
        return _parse_sex(raw)
    if name == CHEST_PAIN_TYPE:
        return _parse_chest_pain_type(raw)
    return parse_number(name, raw)


def parse_vitals(assessment_type: Any, raw: Mapping[str, Any]) -> VitalsInput:
    kind = AssessmentType.parse(assessment_type)
    values: dict[str, float] = {}
    for name in REQUIRED_FIELDS[kind]:
        values[name] = parse_field(name, (raw or {}).get(name))
    return VitalsInput(assessment_type=kind, values=values)


def required_fields(assessment_type: Any) -> tuple[str, ...]:
    return REQUIRED_FIELDS[AssessmentType.parse(assessment_type)]

import dataclasses

import pytest

from smarthealth.assessment.vitals import AssessmentType, parse_vitals, required_fields
from smarthealth.errors import InvalidInput


def test_parse_vitals_keeps_only_required_fields_and_parses_strings() -> None:
    vitals = parse_vitals(
        "diabetes",
        {"age": "40", "bloodPressure": " 80 ", "glucose": 120, "bmi": "28.5", "cholesterol": "999"},
    )
    assert vitals.assessment_type is AssessmentType.DIABETES
    assert vitals.as_dict() == {"age": 40.0, "bloodPressure": 80.0, "glucose": 120.0, "bmi": 28.5}


def test_parse_vitals_is_immutable() -> None:
    vitals = parse_vitals("hypertension", {"age": 1, "bloodPressure": 2, "cholesterol": 3, "maxHeartRate": 4})
    with pytest.raises(TypeError):
        vitals.values["age"] = 99  # type: ignore[index]
    with pytest.raises(dataclasses.FrozenInstanceError):
        vitals.assessment_type = AssessmentType.HEART  # type: ignore[misc]


def test_parse_vitals_heart_categorical_codes() -> None:
    base = {"age": 50, "bloodPressure": 120, "cholesterol": 200, "maxHeartRate": 150}
    vitals = parse_vitals("HEART", {**base, "sex": "female", "chestPainType": "3"})
    assert vitals.get("sex") == 0
    assert vitals.get("chestPainType") == 3

    with pytest.raises(InvalidInput) as excinfo:
        parse_vitals("heart", {**base, "sex": "2", "chestPainType": 0})
    assert excinfo.value.code == "invalid_code"
    assert excinfo.value.field == "sex"

    for bad in (4, 1.5, -1):
        with pytest.raises(InvalidInput) as excinfo:
            parse_vitals("heart", {**base, "sex": 1, "chestPainType": bad})
        assert excinfo.value.field == "chestPainType"


def test_parse_vitals_blank_string_is_missing() -> None:
    with pytest.raises(InvalidInput) as excinfo:
        parse_vitals("diabetes", {"age": "", "bloodPressure": 80, "glucose": 100, "bmi": 20})
    assert excinfo.value.code == "missing_field"
    assert excinfo.value.field == "age"


def test_parse_vitals_unknown_type() -> None:
    with pytest.raises(InvalidInput) as excinfo:
        parse_vitals("kidney", {})
    assert excinfo.value.code == "unknown_assessment_type"


def test_required_fields_per_type() -> None:
    assert required_fields("diabetes") == ("age", "bloodPressure", "glucose", "bmi")
    assert "chestPainType" in required_fields(AssessmentType.HEART)
    assert "glucose" not in required_fields("hypertension")


@pytest.mark.parametrize("raw", ["4_0", "0x28", "40abc", "inf", "NaN", "1,5"])
def test_parse_vitals_rejects_non_decimal_strings(raw) -> None:
    with pytest.raises(InvalidInput) as excinfo:
        parse_vitals("diabetes", {"age": raw, "bloodPressure": 80, "glucose": 100, "bmi": 20})
    assert excinfo.value.code == "not_numeric"
    assert excinfo.value.field == "age"


def test_parse_vitals_accepts_signed_and_exponent_strings() -> None:
    vitals = parse_vitals("diabetes", {"age": "+40", "bloodPressure": "8e1", "glucose": ".5", "bmi": "28."})
    assert vitals.as_dict() == {"age": 40.0, "bloodPressure": 80.0, "glucose": 0.5, "bmi": 28.0}

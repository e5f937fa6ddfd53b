import dataclasses
from datetime import datetime, timezone

import pytest

from smarthealth.assessment.advisory import DEFAULT_ADVICE, DIABETES_ADVICE
from smarthealth.assessment.record import build, record_from_document
from smarthealth.assessment.vitals import AssessmentType, parse_vitals
from smarthealth.errors import InvalidInput

_TS = datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)
_DIABETES = {"age": 40, "bloodPressure": 80, "glucose": 120, "bmi": 28}


def test_build_composes_classification_score_and_advisory() -> None:
    record = build(AssessmentType.DIABETES, _DIABETES, "High risk of Diabetes", _TS)
    assert record.is_risky is True
    assert record.risk_score == 78
    assert record.advisory == DIABETES_ADVICE
    assert record.timestamp == _TS
    assert record.prediction_label == "High risk of Diabetes"
    assert dict(record.input_snapshot) == {"age": 40.0, "bloodPressure": 80.0, "glucose": 120.0, "bmi": 28.0}


def test_build_healthy_label_applies_discount() -> None:
    record = build("diabetes", parse_vitals("diabetes", _DIABETES), "Negative for Diabetes", _TS)
    assert record.is_risky is False
    assert record.risk_score == 58
    assert record.advisory == DEFAULT_ADVICE


def test_build_missing_field_produces_no_record() -> None:
    vitals = dict(_DIABETES)
    vitals.pop("bmi")
    record = None
    with pytest.raises(InvalidInput):
        record = build(AssessmentType.DIABETES, vitals, "High risk of Diabetes", _TS)
    assert record is None


def test_build_defaults_timestamp_to_aware_now() -> None:
    before = datetime.now(timezone.utc)
    record = build(AssessmentType.DIABETES, _DIABETES, "", None)
    assert record.timestamp is not None
    assert record.timestamp.tzinfo is not None
    assert record.timestamp >= before


def test_record_is_immutable() -> None:
    record = build(AssessmentType.DIABETES, _DIABETES, "", _TS)
    with pytest.raises(dataclasses.FrozenInstanceError):
        record.risk_score = 1  # type: ignore[misc]
    with pytest.raises(TypeError):
        record.input_snapshot["age"] = 1  # type: ignore[index]


def test_to_document_uses_interchange_field_names() -> None:
    record = build(AssessmentType.DIABETES, _DIABETES, "High risk of Diabetes", _TS)
    document = record.to_document()
    assert document["assessmentType"] == "diabetes"
    assert document["glucose"] == 120.0
    assert document["predictionLabel"] == "High risk of Diabetes"
    assert document["advisory"] == DIABETES_ADVICE
    assert document["riskScore"] == 78
    assert document["timestamp"] == "2024-05-01T10:00:00+00:00"
    assert "isRisky" not in document


def test_record_from_document_reads_legacy_client_keys() -> None:
    record = record_from_document(
        {
            "model_type": "heart",
            "age": "50",
            "bp": "120",
            "cholesterol": "200",
            "max_heart_rate": "150",
            "sex": "1",
            "cp": "0",
            "prediction": "No heart disease",
            "advice": "Keep a healthy lifestyle.",
            "risk": 80,
            "timestamp": "2024-05-01T10:00:00.000Z",
        },
        record_id="doc1",
    )
    assert record.assessment_type is AssessmentType.HEART
    assert record.record_id == "doc1"
    assert record.is_risky is False
    assert record.risk_score == 80
    assert record.input_snapshot["bloodPressure"] == "120"
    assert record.input_snapshot["chestPainType"] == "0"
    assert record.timestamp == _TS


def test_record_from_document_tolerates_bad_score_and_timestamp() -> None:
    record = record_from_document(
        {"assessmentType": "diabetes", "predictionLabel": "Positive", "riskScore": "n/a", "timestamp": "yesterday"}
    )
    assert record.risk_score == 0
    assert record.timestamp is None
    assert record.is_risky is True


@pytest.mark.parametrize(
    "stored, expected",
    [("77.6", 78), (77.5, 78), (" 42 ", 42), (250, 100), (-3.2, 0), (float("inf"), 0), (float("nan"), 0), (True, 0)],
)
def test_record_from_document_rounds_and_clamps_stored_score(stored, expected) -> None:
    record = record_from_document({"assessmentType": "diabetes", "predictionLabel": "Positive", "riskScore": stored})
    assert record.risk_score == expected

import pytest

from smarthealth.assessment.classification import NEGATION_TERMS, RISKY_TERMS, classify


def test_classify_negation_suppresses_risky_term() -> None:
    assert classify("Negative for Diabetes") is False


def test_classify_high_risk_label_is_risky() -> None:
    assert classify("High risk of Heart Disease") is True


def test_classify_empty_and_missing_label_is_not_risky() -> None:
    assert classify("") is False
    assert classify(None) is False


@pytest.mark.parametrize(
    "label, expected",
    [
        ("POSITIVE", True),
        ("Hypertension detected", True),
        ("Cardiovascular disease present", True),
        ("You have diabetes", True),
        ("Diabetes: not detected", False),
        ("Normal", False),
        ("Healthy heart", False),
        ("Diabetic", False),
        ("Unknown condition", False),
    ],
)
def test_classify_label_table(label: str, expected: bool) -> None:
    assert classify(label) is expected


def test_classify_uses_substring_not_whole_words() -> None:
    # "no" inside another word still counts as a negation.
    assert classify("norisk") is False
    assert classify("Risk: elevated, diagnosis: diabetes") is False
    # A risky term inside another word still counts too.
    assert classify("highlighted") is True


def test_classify_matches_every_risky_term_alone() -> None:
    for term in RISKY_TERMS:
        assert classify(term.upper()) is True, term


def test_classify_every_negation_term_overrides() -> None:
    for term in NEGATION_TERMS:
        assert classify(f"high risk {term}") is False, term

from __future__ import annotations

from smarthealth.assessment.vitals import AssessmentType

DIABETES_ADVICE = "Monitor glucose and consult a doctor."
HEART_ADVICE = "Maintain a heart-healthy diet and exercise."
HYPERTENSION_ADVICE = "Monitor BP and consult your doctor."
DEFAULT_ADVICE = "Keep a healthy lifestyle."

# Ordered; first keyword found in the label wins.
_LABEL_ADVICE: tuple[tuple[str, str], ...] = (
    ("diabetes", DIABETES_ADVICE),
    ("heart", HEART_ADVICE),
    ("hypertension", HYPERTENSION_ADVICE),
)


def advise(label: str | None, assessment_type: AssessmentType | str | None, is_risky: bool) -> str:
    """Pick the advisory from label content; the requested type does not take part."""
    if not is_risky:
        return DEFAULT_ADVICE
    lower = (label or "").lower()
    for keyword, advice in _LABEL_ADVICE:
        if keyword in lower:
            return advice
    return DEFAULT_ADVICE

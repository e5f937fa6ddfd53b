from __future__ import annotations

from smarthealth.assessment.scoring import base_score
from smarthealth.assessment.vitals import AssessmentType, VitalsInput

from .base import PredictionProvider

_RISKY_LABELS = {
    AssessmentType.DIABETES: "High risk of Diabetes",
    AssessmentType.HEART: "High risk of Heart Disease",
    AssessmentType.HYPERTENSION: "High risk of Hypertension",
}
_HEALTHY_LABELS = {
    AssessmentType.DIABETES: "No Diabetes detected",
    AssessmentType.HEART: "No Heart Disease detected",
    AssessmentType.HYPERTENSION: "No Hypertension detected",
}
_RISKY_THRESHOLD = 50


class MockPredictionProvider(PredictionProvider):
    def __init__(self, fixed_label: str = "") -> None:
        self._fixed_label = fixed_label
        self._counter = 0

    @property
    def calls(self) -> int:
        return self._counter

    async def predict(self, assessment_type: AssessmentType, vitals: VitalsInput) -> str:
        self._counter += 1
        if self._fixed_label:
            return self._fixed_label
        if base_score(assessment_type, vitals) >= _RISKY_THRESHOLD:
            return _RISKY_LABELS[assessment_type]
        return _HEALTHY_LABELS[assessment_type]

    def name(self) -> str:
        return "mock"

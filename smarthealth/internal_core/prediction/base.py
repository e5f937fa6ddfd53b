from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Mapping, Optional

from smarthealth.assessment.record import DOC_ASSESSMENT_TYPE, LEGACY_DOCUMENT_KEYS
from smarthealth.assessment.vitals import AssessmentType, VitalsInput

WIRE_KEYS_STANDARD = "standard"
WIRE_KEYS_LEGACY = "legacy"
WIRE_KEYS_AUTO = "auto"

# Request field names read by the first hosted model backend.
LEGACY_WIRE_KEYS: dict[str, str] = {current: legacy for legacy, current in LEGACY_DOCUMENT_KEYS.items()}


class PredictionProvider(ABC):
    @abstractmethod
    async def predict(self, assessment_type: AssessmentType, vitals: VitalsInput) -> str: ...

    @abstractmethod
    def name(self) -> str: ...

    async def aclose(self) -> None:
        return None


def build_request_payload(
    assessment_type: AssessmentType,
    vitals: VitalsInput,
    key_map: Optional[Mapping[str, str]] = None,
) -> dict[str, object]:
    key_map = key_map or {}
    payload: dict[str, object] = {key_map.get(DOC_ASSESSMENT_TYPE, DOC_ASSESSMENT_TYPE): assessment_type.value}
    for key, value in vitals.values.items():
        payload[key_map.get(key, key)] = int(value) if float(value).is_integer() else value
    return payload

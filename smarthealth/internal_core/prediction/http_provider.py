from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import httpx

from smarthealth.assessment.vitals import AssessmentType, VitalsInput
from smarthealth.errors import ExternalServiceError

from .base import PredictionProvider, build_request_payload

logger = logging.getLogger(__name__)

_LABEL_KEYS = ("predictionLabel", "prediction")


def extract_label(body: Any) -> str:
    if not isinstance(body, dict):
        raise ExternalServiceError("bad_payload", "Prediction response is not a JSON object.", "http")
    for key in _LABEL_KEYS:
        value = body.get(key)
        if isinstance(value, str) and value.strip():
            return value
    raise ExternalServiceError("no_label", "Prediction response has no usable label.", "http")


class HttpPredictionProvider(PredictionProvider):
    def __init__(
        self,
        url: str,
        timeout_sec: float = 15.0,
        *,
        key_map: Optional[Mapping[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._url = url
        self._key_map = dict(key_map or {})
        self._client = httpx.AsyncClient(timeout=timeout_sec, transport=transport)

    async def predict(self, assessment_type: AssessmentType, vitals: VitalsInput) -> str:
        payload = build_request_payload(assessment_type, vitals, self._key_map)
        try:
            response = await self._client.post(self._url, json=payload)
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise ExternalServiceError("timeout", f"Prediction call timed out: {exc}", self.name()) from exc
        except httpx.HTTPStatusError as exc:
            raise ExternalServiceError(
                "http_status",
                f"Prediction service returned HTTP {exc.response.status_code}.",
                self.name(),
            ) from exc
        except httpx.HTTPError as exc:
            raise ExternalServiceError("transport", f"Prediction call failed: {exc}", self.name()) from exc

        try:
            body = response.json()
        except ValueError as exc:
            raise ExternalServiceError("bad_payload", "Prediction response is not JSON.", self.name()) from exc
        label = extract_label(body)
        logger.debug("prediction_ok provider=%s type=%s", self.name(), assessment_type.value)
        return label

    async def aclose(self) -> None:
        await self._client.aclose()

    def name(self) -> str:
        return "http"

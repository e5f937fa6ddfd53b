from __future__ import annotations

from typing import Optional

import httpx

from smarthealth.errors import ExternalServiceError

from ..config import LEGACY_PREDICTION_HOST, AppConfig
from .base import (
    LEGACY_WIRE_KEYS,
    WIRE_KEYS_AUTO,
    WIRE_KEYS_LEGACY,
    WIRE_KEYS_STANDARD,
    PredictionProvider,
    build_request_payload,
)
from .http_provider import HttpPredictionProvider, extract_label
from .mock import MockPredictionProvider


def resolve_wire_keys(url: str, wire_keys: str) -> str:
    """Settle "auto" by host: the legacy backend only reads its own field names."""
    if wire_keys in (WIRE_KEYS_STANDARD, WIRE_KEYS_LEGACY):
        return wire_keys
    if wire_keys == WIRE_KEYS_AUTO:
        try:
            host = httpx.URL(url).host.lower()
        except httpx.InvalidURL:
            host = ""
        return WIRE_KEYS_LEGACY if host == LEGACY_PREDICTION_HOST else WIRE_KEYS_STANDARD
    raise ValueError(f"Unknown prediction wire keys: {wire_keys!r}")


def build_prediction_provider(
    config: AppConfig,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> PredictionProvider:
    provider = config.SMARTHEALTH_PREDICTION_PROVIDER
    if provider == "mock":
        return MockPredictionProvider(fixed_label=config.SMARTHEALTH_MOCK_LABEL)
    if provider == "http":
        url = config.SMARTHEALTH_PREDICTION_URL
        wire_keys = resolve_wire_keys(url, config.SMARTHEALTH_PREDICTION_WIRE_KEYS)
        return HttpPredictionProvider(
            url,
            timeout_sec=config.SMARTHEALTH_PREDICTION_TIMEOUT_SECONDS,
            key_map=LEGACY_WIRE_KEYS if wire_keys == WIRE_KEYS_LEGACY else None,
            transport=transport,
        )
    raise ValueError(f"Unknown prediction provider: {provider!r}")


__all__ = [
    "ExternalServiceError",
    "HttpPredictionProvider",
    "LEGACY_WIRE_KEYS",
    "MockPredictionProvider",
    "PredictionProvider",
    "build_prediction_provider",
    "build_request_payload",
    "extract_label",
    "resolve_wire_keys",
]

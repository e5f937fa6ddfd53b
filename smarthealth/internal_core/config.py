from __future__ import annotations

import os
from dataclasses import dataclass

LEGACY_PREDICTION_HOST = "smart-health-backend-3.onrender.com"
DEFAULT_PREDICTION_URL = f"https://{LEGACY_PREDICTION_HOST}/predict"


def _getenv_str(name: str, default: str) -> str:
    value = os.getenv(name)
    return default if value is None else value


def _getenv_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return int(value)


def _getenv_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


def _getenv_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return float(value)


def _getenv_list(name: str, default: list[str]) -> list[str]:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return list(default)
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass(frozen=True)
class AppConfig:
    SMARTHEALTH_PREDICTION_PROVIDER: str
    SMARTHEALTH_PREDICTION_URL: str
    SMARTHEALTH_PREDICTION_WIRE_KEYS: str
    SMARTHEALTH_PREDICTION_TIMEOUT_SECONDS: float
    SMARTHEALTH_MOCK_LABEL: str
    SMARTHEALTH_SESSION_TTL_SECONDS: int
    SMARTHEALTH_HISTORY_LIMIT: int
    SMARTHEALTH_CORS_ORIGINS: list[str]
    SMARTHEALTH_LOG_LEVEL: str
    SMARTHEALTH_TEST_INJECT_PREDICTION_FAIL: bool


def load_config() -> AppConfig:
    return AppConfig(
        SMARTHEALTH_PREDICTION_PROVIDER=_getenv_str("SMARTHEALTH_PREDICTION_PROVIDER", "http").strip().lower(),
        SMARTHEALTH_PREDICTION_URL=_getenv_str("SMARTHEALTH_PREDICTION_URL", DEFAULT_PREDICTION_URL),
        SMARTHEALTH_PREDICTION_WIRE_KEYS=_getenv_str("SMARTHEALTH_PREDICTION_WIRE_KEYS", "auto").strip().lower(),
        SMARTHEALTH_PREDICTION_TIMEOUT_SECONDS=_getenv_float("SMARTHEALTH_PREDICTION_TIMEOUT_SECONDS", 15.0),
        SMARTHEALTH_MOCK_LABEL=_getenv_str("SMARTHEALTH_MOCK_LABEL", ""),
        SMARTHEALTH_SESSION_TTL_SECONDS=_getenv_int("SMARTHEALTH_SESSION_TTL_SECONDS", 14400),
        SMARTHEALTH_HISTORY_LIMIT=_getenv_int("SMARTHEALTH_HISTORY_LIMIT", 200),
        SMARTHEALTH_CORS_ORIGINS=_getenv_list("SMARTHEALTH_CORS_ORIGINS", ["*"]),
        SMARTHEALTH_LOG_LEVEL=_getenv_str("SMARTHEALTH_LOG_LEVEL", "INFO"),
        SMARTHEALTH_TEST_INJECT_PREDICTION_FAIL=_getenv_bool(
            "SMARTHEALTH_TEST_INJECT_PREDICTION_FAIL", False
        ),
    )

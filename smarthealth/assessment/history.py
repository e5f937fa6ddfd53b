from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Optional, Sequence, TypeVar

EARLIEST = datetime.min.replace(tzinfo=timezone.utc)

# Epoch values above this are milliseconds (JavaScript Date.getTime()).
_EPOCH_MILLIS_THRESHOLD = 1e11

T = TypeVar("T")


def parse_timestamp(raw: Any) -> Optional[datetime]:
    """Best-effort conversion of a stored timestamp into an aware UTC datetime."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, datetime):
        return raw if raw.tzinfo is not None else raw.replace(tzinfo=timezone.utc)
    if isinstance(raw, date):
        return datetime(raw.year, raw.month, raw.day, tzinfo=timezone.utc)
    if isinstance(raw, (int, float)):
        seconds = raw / 1000.0 if abs(raw) > _EPOCH_MILLIS_THRESHOLD else float(raw)
        try:
            return datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            return None
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
        return parsed if parsed.tzinfo is not None else parsed.replace(tzinfo=timezone.utc)
    return None


def _sort_instant(record: Any) -> datetime:
    raw = record.get("timestamp") if isinstance(record, dict) else getattr(record, "timestamp", None)
    parsed = parse_timestamp(raw)
    return parsed if parsed is not None else EARLIEST


def sort_for_display(records: Sequence[T]) -> list[T]:
    """Most recent first; equal or unreadable timestamps keep their input order."""
    # sorted() stays stable with reverse=True.
    return sorted(records, key=_sort_instant, reverse=True)

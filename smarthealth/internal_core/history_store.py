from __future__ import annotations

import logging
import uuid
from abc import ABC, abstractmethod
from threading import RLock
from typing import Any, Dict, List

from smarthealth.assessment.record import AssessmentRecord, record_from_document
from smarthealth.errors import StoreError

logger = logging.getLogger(__name__)


class HistoryStore(ABC):
    @abstractmethod
    async def append(self, user_id: str, record: AssessmentRecord) -> str: ...

    @abstractmethod
    async def list(self, user_id: str) -> List[AssessmentRecord]: ...


class InMemoryHistoryStore(HistoryStore):
    """Per-user record documents kept in process memory."""

    def __init__(self) -> None:
        self._lock = RLock()
        self._documents: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self._fail_next_append: str | None = None

    def fail_next_append(self, message: str = "history store unavailable") -> None:
        with self._lock:
            self._fail_next_append = message

    def put_document(self, user_id: str, document: Dict[str, Any]) -> str:
        doc_id = uuid.uuid4().hex
        with self._lock:
            self._documents.setdefault(user_id, {})[doc_id] = dict(document)
        return doc_id

    async def append(self, user_id: str, record: AssessmentRecord) -> str:
        if not user_id:
            raise StoreError("missing_user", "user_id is required to store a record.")
        with self._lock:
            failure = self._fail_next_append
            self._fail_next_append = None
        if failure is not None:
            raise StoreError("write_failed", failure)
        return self.put_document(user_id, record.to_document())

    async def list(self, user_id: str) -> List[AssessmentRecord]:
        with self._lock:
            documents = list(self._documents.get(user_id, {}).items())
        records: List[AssessmentRecord] = []
        for doc_id, document in documents:
            try:
                records.append(record_from_document(document, record_id=doc_id))
            except (TypeError, ValueError, OverflowError) as exc:
                logger.warning(
                    "history_skip_document user_id=%s doc_id=%s code=%s",
                    user_id,
                    doc_id,
                    getattr(exc, "code", type(exc).__name__),
                )
        return records

from __future__ import annotations

import time
import uuid
from threading import RLock
from typing import Any, Dict, List, Optional

from smarthealth.assessment.history import sort_for_display
from smarthealth.assessment.record import AssessmentRecord
from smarthealth.assessment.vitals import AssessmentType


class InMemorySessionStore:
    """Caller-owned view state for logged-in users.

    Holds the selected assessment type, the loading flag, the last outcome and
    the records shown on screen. Nothing in the assessment core reads it.
    """

    def __init__(self, ttl_seconds: int):
        self._ttl_seconds = ttl_seconds
        self._lock = RLock()
        self._sessions: Dict[str, Dict[str, Any]] = {}

    def create_session(self, user_id: str, records: Optional[List[AssessmentRecord]] = None) -> str:
        session_id = uuid.uuid4().hex
        now = time.time()
        with self._lock:
            self._sessions[session_id] = {
                "session_id": session_id,
                "user_id": user_id,
                "created_at": now,
                "updated_at": now,
                "expires_at": now + self._ttl_seconds,
                "assessment_type": AssessmentType.DIABETES,
                "loading": False,
                "records": sort_for_display(list(records or [])),
                "last_outcome": None,
            }
        return session_id

    def _require(self, session_id: str) -> Dict[str, Any]:
        session = self._sessions.get(session_id)
        if session is None:
            raise KeyError(f"Unknown session_id: {session_id}")
        return session

    def _touch(self, session_id: str) -> None:
        now = time.time()
        session = self._sessions[session_id]
        session["updated_at"] = now
        session["expires_at"] = now + self._ttl_seconds

    def set_assessment_type(self, session_id: str, assessment_type: AssessmentType) -> None:
        with self._lock:
            self._require(session_id)["assessment_type"] = assessment_type
            self._touch(session_id)

    def begin_loading(self, session_id: str) -> bool:
        """Mark a submission in flight; False if one is already running."""
        with self._lock:
            session = self._require(session_id)
            if session["loading"]:
                return False
            session["loading"] = True
            session["last_outcome"] = None
            self._touch(session_id)
            return True

    def finish_loading(self, session_id: str, outcome: Any) -> None:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return
            session["loading"] = False
            session["last_outcome"] = outcome
            self._touch(session_id)

    def prepend_record(self, session_id: str, record: AssessmentRecord) -> None:
        with self._lock:
            session = self._require(session_id)
            session["records"].insert(0, record)
            self._touch(session_id)

    def get_session(self, session_id: str) -> Dict[str, Any]:
        with self._lock:
            session = self._require(session_id)
            return {
                "session_id": session["session_id"],
                "user_id": session["user_id"],
                "created_at": session["created_at"],
                "updated_at": session["updated_at"],
                "expires_at": session["expires_at"],
                "assessment_type": session["assessment_type"],
                "loading": session["loading"],
                "records": list(session["records"]),
                "last_outcome": session["last_outcome"],
            }

    def destroy_session(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def cleanup_expired_sessions(self) -> int:
        now = time.time()
        with self._lock:
            expired = [sid for sid, session in self._sessions.items() if session["expires_at"] <= now]
            for session_id in expired:
                self._sessions.pop(session_id, None)
        return len(expired)

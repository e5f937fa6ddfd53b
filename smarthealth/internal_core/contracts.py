from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

AssessmentTypeName = Literal["diabetes", "heart", "hypertension"]
OutcomeStatus = Literal["ok", "unable_to_connect"]


class AssessmentRecordPayload(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: Optional[str] = None
    assessment_type: AssessmentTypeName
    vitals: Dict[str, Any] = Field(default_factory=dict)
    prediction_label: str
    is_risky: bool
    risk_score: int = Field(ge=0, le=100)
    advisory: str
    timestamp: Optional[str] = None


class AssessmentOutcomePayload(BaseModel):
    model_config = ConfigDict(extra="forbid")

    status: OutcomeStatus
    assessment_type: AssessmentTypeName
    prediction: str
    is_risky: bool = False
    advisory: str = ""
    risk_score: Optional[int] = Field(default=None, ge=0, le=100)
    record: Optional[AssessmentRecordPayload] = None
    persisted: bool = False
    store_error: str = ""


class SessionCreateRequest(BaseModel):
    user_id: str = Field(min_length=1, max_length=128)


class AssessmentTypeRequest(BaseModel):
    assessment_type: str = Field(min_length=1, max_length=32)


class AssessmentSubmitRequest(BaseModel):
    assessment_type: Optional[str] = Field(default=None, max_length=32)
    vitals: Dict[str, Any] = Field(default_factory=dict)


class AssessmentPreviewRequest(BaseModel):
    assessment_type: str = Field(min_length=1, max_length=32)
    vitals: Dict[str, Any] = Field(default_factory=dict)
    prediction_label: str = ""


class SessionView(BaseModel):
    model_config = ConfigDict(extra="forbid")

    session_id: str
    user_id: str
    assessment_type: AssessmentTypeName
    loading: bool = False
    records: List[AssessmentRecordPayload] = Field(default_factory=list)
    last_outcome: Optional[AssessmentOutcomePayload] = None
    expires_at: float


class HistoryResponse(BaseModel):
    user_id: str
    records: List[AssessmentRecordPayload] = Field(default_factory=list)


class AssessmentTypeInfo(BaseModel):
    assessment_type: AssessmentTypeName
    required_fields: List[str] = Field(default_factory=list)


class AssessmentTypesResponse(BaseModel):
    assessment_types: List[AssessmentTypeInfo] = Field(default_factory=list)

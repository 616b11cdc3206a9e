"""
Response payloads returned to the dashboard.
"""
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from governance_engine.schemas.requests import AssessmentTemplate


class RiskLevel(str, Enum):
    """Union of the EU AI Act classes and the NIST / ISO severity scale."""
    UNACCEPTABLE = "unacceptable"
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LIMITED = "limited"
    LOW = "low"
    MINIMAL = "minimal"


class TaskStatus(str, Enum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    BLOCKED = "blocked"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class AssessmentOut(BaseModel):
    """A persisted assessment row."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    ai_system_id: str
    template: AssessmentTemplate
    risk_level: Optional[str] = None
    eu_ai_act_category: Optional[str] = None
    nist_score: Optional[float] = None
    iso_readiness_score: Optional[float] = None
    recommended_actions: list[str] = []
    assessment_data: Optional[dict[str, Any]] = None
    created_by: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    @field_validator("recommended_actions", mode="before")
    @classmethod
    def null_actions_as_empty(cls, v):
        # rows written by the dashboard may carry NULL
        return [] if v is None else v


class RunAssessmentResponse(BaseModel):
    assessment: AssessmentOut


class GenerateDocumentResponse(BaseModel):
    content: str = Field(description="Generated document text, persisted by the caller")


class ErrorResponse(BaseModel):
    error: str
    details: Optional[Any] = None

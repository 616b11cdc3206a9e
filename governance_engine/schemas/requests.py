"""
Inbound payloads from the dashboard.

Field names follow the dashboard's camelCase JSON (`systemId`, `assessmentId`);
Python code reads the snake_case attributes.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class AssessmentTemplate(str, Enum):
    """Regulatory framework an assessment is run against."""
    EU_AI_ACT = "eu_ai_act"
    NIST_AI_RMF = "nist_ai_rmf"
    ISO_42001 = "iso_42001"


class DocumentType(str, Enum):
    ACCEPTABLE_USE_POLICY = "acceptable_use_policy"
    SYSTEM_CARD = "system_card"
    RISK_SUMMARY = "risk_summary"


class RunAssessmentRequest(BaseModel):
    """POST /run-assessment"""
    model_config = ConfigDict(populate_by_name=True)

    system_id: UUID = Field(alias="systemId", description="AI system to assess")
    template: AssessmentTemplate


class GenerateDocumentRequest(BaseModel):
    """POST /generate-document"""
    model_config = ConfigDict(populate_by_name=True)

    system_id: UUID = Field(alias="systemId")
    assessment_id: Optional[UUID] = Field(
        None,
        alias="assessmentId",
        description="Assessment whose findings feed the document (used by risk_summary)",
    )
    type: DocumentType

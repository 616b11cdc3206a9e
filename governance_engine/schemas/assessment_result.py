"""
Typed view of the JSON object the model returns for an assessment run.

Decoded once at the parser boundary; the orchestrator only ever reads these
attributes. The untouched payload travels alongside in the read-only `raw`
property so it can be stored verbatim in `assessments.assessment_data`.
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator, model_validator

from governance_engine.schemas.requests import AssessmentTemplate
from governance_engine.schemas.responses import RiskLevel

# Field each template's prompt asks for on top of risk_level + actions
TEMPLATE_REQUIRED_FIELD: dict[AssessmentTemplate, str] = {
    AssessmentTemplate.EU_AI_ACT: "eu_ai_act_category",
    AssessmentTemplate.NIST_AI_RMF: "nist_score",
    AssessmentTemplate.ISO_42001: "iso_readiness_score",
}


class AssessmentResult(BaseModel):
    model_config = ConfigDict(extra="ignore")

    risk_level: RiskLevel
    eu_ai_act_category: Optional[str] = None
    nist_score: Optional[float] = Field(None, ge=0, le=100)
    iso_readiness_score: Optional[float] = Field(None, ge=0, le=100)
    recommended_actions: list[str] = Field(default_factory=list)

    _raw: dict[str, Any] = PrivateAttr(default_factory=dict)

    @property
    def raw(self) -> dict[str, Any]:
        """The payload exactly as the model sent it, including ignored keys."""
        return self._raw

    @field_validator("risk_level", mode="before")
    @classmethod
    def normalise_risk_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("recommended_actions", mode="before")
    @classmethod
    def drop_blank_actions(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, list) and all(isinstance(a, str) for a in v):
            return [a.strip() for a in v if a.strip()]
        # anything else is left for pydantic to reject
        return v

    @model_validator(mode="after")
    def check_category_text(self) -> "AssessmentResult":
        if self.eu_ai_act_category is not None and not self.eu_ai_act_category.strip():
            self.eu_ai_act_category = None
        return self

    @classmethod
    def for_template(cls, payload: dict[str, Any], template: AssessmentTemplate) -> "AssessmentResult":
        """Validate `payload` and require the template-specific field."""
        result = cls.model_validate(payload)
        required = TEMPLATE_REQUIRED_FIELD[template]
        if getattr(result, required) is None:
            raise ValueError(f"{required} is required for {template.value} assessments")
        result._raw = payload
        return result

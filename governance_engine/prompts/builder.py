"""
Prompt Builder

Maps each of the six selectors to a fixed (system, user) instruction pair:

  Assessment templates → ask for a JSON verdict
    eu_ai_act     risk_level, eu_ai_act_category, recommended_actions
    nist_ai_rmf   nist_score, risk_level, recommended_actions
    iso_42001     iso_readiness_score, risk_level, recommended_actions

  Document types → ask for free-form prose
    acceptable_use_policy, system_card, risk_summary

An unknown selector is a ValidationError; there is no fallback prompt.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union

from governance_engine.core.errors import ValidationError
from governance_engine.schemas.requests import AssessmentTemplate, DocumentType

NOT_SPECIFIED = "Not specified"
NOT_ASSESSED = "Not yet assessed"


@dataclass(frozen=True)
class PromptPair:
    system_prompt: str
    user_prompt: str


# ═══════════════════════════════════════════════════════════════
# Assessment templates
# ═══════════════════════════════════════════════════════════════

EU_AI_ACT_SYSTEM = (
    "You are an EU AI Act compliance expert. Analyze AI systems and classify them "
    "according to the EU AI Act risk categories."
)

EU_AI_ACT_USER = """Analyze this AI system for EU AI Act compliance:

System: {name}
Description: {description}
Data Type: {data_type}
Model Type: {model_type}
Use Case: {description}

Provide:
1. Risk classification (unacceptable, high, limited, minimal)
2. EU AI Act category
3. Recommended next actions (list 3-5 specific actions)

Respond in JSON format with: risk_level, eu_ai_act_category, recommended_actions (array)"""

NIST_AI_RMF_SYSTEM = (
    "You are a NIST AI Risk Management Framework expert. Assess AI systems using "
    "NIST AI RMF principles."
)

NIST_AI_RMF_USER = """Assess this AI system using NIST AI RMF:

System: {name}
Description: {description}
Model Type: {model_type}

Evaluate based on:
- Governance
- Mapping
- Measurement
- Management

Provide:
1. NIST score (0-100)
2. Risk level (minimal, low, medium, high, critical)
3. Recommended actions (3-5 specific improvements)

Respond in JSON format with: nist_score, risk_level, recommended_actions (array)"""

ISO_42001_SYSTEM = (
    "You are an ISO 42001 AI Management System expert. Assess AI systems for "
    "ISO 42001 readiness."
)

ISO_42001_USER = """Assess ISO 42001 readiness for:

System: {name}
Description: {description}
Deployment: {deployment_environment}

Evaluate:
- AI system documentation
- Risk management
- Data governance
- Continuous monitoring

Provide:
1. ISO readiness score (0-100)
2. Risk level (minimal, low, medium, high, critical)
3. Recommended actions for ISO compliance

Respond in JSON format with: iso_readiness_score, risk_level, recommended_actions (array)"""

ASSESSMENT_PROMPTS: dict[AssessmentTemplate, tuple[str, str]] = {
    AssessmentTemplate.EU_AI_ACT: (EU_AI_ACT_SYSTEM, EU_AI_ACT_USER),
    AssessmentTemplate.NIST_AI_RMF: (NIST_AI_RMF_SYSTEM, NIST_AI_RMF_USER),
    AssessmentTemplate.ISO_42001: (ISO_42001_SYSTEM, ISO_42001_USER),
}


# ═══════════════════════════════════════════════════════════════
# Document types
# ═══════════════════════════════════════════════════════════════

ACCEPTABLE_USE_POLICY_SYSTEM = (
    "You are an AI governance expert. Create a professional Acceptable Use Policy "
    "for AI systems."
)

ACCEPTABLE_USE_POLICY_USER = """Create an AI Acceptable Use Policy for the following system:

System Name: {name}
Description: {description}
Business Unit: {business_unit}
Data Type: {data_type}
Model Type: {model_type}

Include sections on:
1. Purpose and Scope
2. Permitted Uses
3. Prohibited Uses
4. User Responsibilities
5. Monitoring and Compliance
6. Consequences of Violation

Format the response as a professional policy document with clear sections."""

SYSTEM_CARD_SYSTEM = (
    "You are an AI documentation specialist. Create detailed AI system documentation cards."
)

SYSTEM_CARD_USER = """Create an AI System Card for:

System Name: {name}
Description: {description}
Owner: {owner}
Business Unit: {business_unit}
Geography: {geography}
Data Type: {data_type}
Model Type: {model_type}
Training Source: {training_source}
Deployment Environment: {deployment_environment}
Risk Level: {risk_level}

Include sections on:
1. System Overview
2. Intended Use and Applications
3. Model Architecture and Training
4. Data Handling and Privacy
5. Performance Metrics
6. Limitations and Risks
7. Responsible AI Considerations

Format as a comprehensive system card."""

RISK_SUMMARY_SYSTEM = (
    "You are an AI risk assessment expert. Create comprehensive risk summaries."
)

RISK_SUMMARY_USER = """Create a Risk Summary for:

System: {name}
Risk Level: {risk_level}
{assessment_block}
Include sections on:
1. Executive Summary
2. Risk Classification
3. Key Risk Factors
4. Regulatory Implications
5. Mitigation Strategies
6. Action Plan

Format as an executive-ready risk document."""

RISK_SUMMARY_ASSESSMENT_BLOCK = """
EU AI Act Category: {eu_ai_act_category}
NIST Score: {nist_score}
ISO Readiness: {iso_readiness_score}
Recommended Actions: {recommended_actions}
"""

DOCUMENT_PROMPTS: dict[DocumentType, tuple[str, str]] = {
    DocumentType.ACCEPTABLE_USE_POLICY: (ACCEPTABLE_USE_POLICY_SYSTEM, ACCEPTABLE_USE_POLICY_USER),
    DocumentType.SYSTEM_CARD: (SYSTEM_CARD_SYSTEM, SYSTEM_CARD_USER),
    DocumentType.RISK_SUMMARY: (RISK_SUMMARY_SYSTEM, RISK_SUMMARY_USER),
}

SYSTEM_FIELDS = (
    "name",
    "description",
    "owner",
    "business_unit",
    "geography",
    "data_type",
    "model_type",
    "training_source",
    "deployment_environment",
)


def _text(value: Any, missing: str = NOT_SPECIFIED) -> str:
    if value is None:
        return missing
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    text = str(value).strip()
    return text or missing


def _system_fields(system: Any) -> dict[str, str]:
    fields = {f: _text(getattr(system, f, None)) for f in SYSTEM_FIELDS}
    # name is interpolated verbatim
    fields["name"] = str(system.name)
    fields["risk_level"] = _text(getattr(system, "risk_level", None), NOT_ASSESSED)
    return fields


def _assessment_block(assessment: Optional[Any]) -> str:
    if assessment is None:
        return ""
    actions = getattr(assessment, "recommended_actions", None) or []
    return RISK_SUMMARY_ASSESSMENT_BLOCK.format(
        eu_ai_act_category=_text(assessment.eu_ai_act_category),
        nist_score=_text(assessment.nist_score),
        iso_readiness_score=_text(assessment.iso_readiness_score),
        recommended_actions=", ".join(actions) if actions else NOT_SPECIFIED,
    )


def coerce_selector(selector: Union[str, AssessmentTemplate, DocumentType], enum_cls, label: str):
    """Enum member for `selector`, or ValidationError listing the allowed values."""
    try:
        return enum_cls(selector)
    except ValueError:
        raise ValidationError(
            f"Unknown {label}: {selector!r}",
            details=[{"field": label, "allowed": [e.value for e in enum_cls]}],
        )


def build_assessment_prompt(
    system: Any, template: Union[str, AssessmentTemplate]
) -> PromptPair:
    """Prompt pair asking the model for a JSON verdict under `template`."""
    template = coerce_selector(template, AssessmentTemplate, "template")
    system_prompt, user_template = ASSESSMENT_PROMPTS[template]
    return PromptPair(system_prompt, user_template.format(**_system_fields(system)))


def build_document_prompt(
    system: Any,
    document_type: Union[str, DocumentType],
    assessment: Optional[Any] = None,
) -> PromptPair:
    """
    Prompt pair for a prose document. Only risk_summary reads `assessment`;
    without one the assessment-specific lines are left out entirely.
    """
    document_type = coerce_selector(document_type, DocumentType, "type")
    system_prompt, user_template = DOCUMENT_PROMPTS[document_type]
    fields = _system_fields(system)
    if document_type == DocumentType.RISK_SUMMARY:
        fields["assessment_block"] = _assessment_block(assessment)
    return PromptPair(system_prompt, user_template.format(**fields))

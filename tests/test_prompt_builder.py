"""
Unit tests for the prompt builder.
"""
import pytest

from governance_engine.core.errors import ValidationError
from governance_engine.models.records import Assessment
from governance_engine.prompts.builder import (
    NOT_ASSESSED,
    NOT_SPECIFIED,
    build_assessment_prompt,
    build_document_prompt,
)
from governance_engine.schemas.requests import AssessmentTemplate, DocumentType

from conftest import make_system


def _make_assessment(**kwargs) -> Assessment:
    defaults = {
        "ai_system_id": "sys-1",
        "template": "eu_ai_act",
        "risk_level": "high",
        "eu_ai_act_category": "Annex III - creditworthiness",
        "nist_score": 62.0,
        "iso_readiness_score": 48.5,
        "recommended_actions": ["Register in EU database", "Add human oversight"],
    }
    defaults.update(kwargs)
    return Assessment(**defaults)


class TestAssessmentPrompts:

    @pytest.mark.parametrize("template", list(AssessmentTemplate))
    def test_system_name_verbatim(self, template):
        system = make_system(name="Résumé Screener v2 {beta}")
        prompts = build_assessment_prompt(system, template)
        assert "Résumé Screener v2 {beta}" in prompts.user_prompt

    @pytest.mark.parametrize("template", [t.value for t in AssessmentTemplate])
    def test_accepts_plain_string_selector(self, template):
        prompts = build_assessment_prompt(make_system(), template)
        assert prompts.system_prompt
        assert "recommended_actions" in prompts.user_prompt

    def test_eu_ai_act_fields(self):
        prompts = build_assessment_prompt(make_system(), AssessmentTemplate.EU_AI_ACT)
        assert "EU AI Act compliance expert" in prompts.system_prompt
        assert "Data Type: Personal financial data" in prompts.user_prompt
        assert "Model Type: Gradient boosted trees" in prompts.user_prompt
        assert "Use Case: Scores retail loan applications" in prompts.user_prompt
        assert "risk_level, eu_ai_act_category, recommended_actions" in prompts.user_prompt

    def test_nist_asks_for_score(self):
        prompts = build_assessment_prompt(make_system(), AssessmentTemplate.NIST_AI_RMF)
        assert "NIST AI Risk Management Framework" in prompts.system_prompt
        assert "nist_score, risk_level, recommended_actions" in prompts.user_prompt
        for function in ("Governance", "Mapping", "Measurement", "Management"):
            assert function in prompts.user_prompt

    def test_iso_uses_deployment_environment(self):
        prompts = build_assessment_prompt(make_system(), AssessmentTemplate.ISO_42001)
        assert "Deployment: Production (AWS eu-central-1)" in prompts.user_prompt
        assert "iso_readiness_score" in prompts.user_prompt

    @pytest.mark.parametrize("template", [AssessmentTemplate.NIST_AI_RMF, AssessmentTemplate.ISO_42001])
    def test_scored_templates_state_risk_scale(self, template):
        prompts = build_assessment_prompt(make_system(), template)
        assert "Risk level (minimal, low, medium, high, critical)" in prompts.user_prompt

    def test_missing_fields_render_placeholder(self):
        system = make_system(description=None, model_type="  ")
        prompts = build_assessment_prompt(system, AssessmentTemplate.NIST_AI_RMF)
        assert f"Description: {NOT_SPECIFIED}" in prompts.user_prompt
        assert f"Model Type: {NOT_SPECIFIED}" in prompts.user_prompt
        assert "None" not in prompts.user_prompt

    def test_unknown_template_rejected(self):
        with pytest.raises(ValidationError) as exc:
            build_assessment_prompt(make_system(), "gdpr")
        assert exc.value.status_code == 400
        assert "gdpr" in exc.value.message


class TestDocumentPrompts:

    def test_acceptable_use_policy(self):
        prompts = build_document_prompt(make_system(), DocumentType.ACCEPTABLE_USE_POLICY)
        assert "Acceptable Use Policy" in prompts.system_prompt
        assert "Business Unit: Retail Lending" in prompts.user_prompt
        assert "Prohibited Uses" in prompts.user_prompt

    def test_system_card_without_assessment(self):
        prompts = build_document_prompt(make_system(), DocumentType.SYSTEM_CARD)
        assert "System Name: Loan Default Predictor" in prompts.user_prompt
        assert "Training Source: Internal loan book 2015-2024" in prompts.user_prompt
        assert f"Risk Level: {NOT_ASSESSED}" in prompts.user_prompt
        assert "NIST Score" not in prompts.user_prompt
        assert "EU AI Act Category" not in prompts.user_prompt
        assert "ISO Readiness" not in prompts.user_prompt

    def test_system_card_ignores_assessment(self):
        prompts = build_document_prompt(make_system(), "system_card", _make_assessment())
        assert "NIST Score" not in prompts.user_prompt

    def test_risk_summary_with_assessment(self):
        system = make_system(risk_level="high")
        prompts = build_document_prompt(system, DocumentType.RISK_SUMMARY, _make_assessment())
        assert "Risk Level: high" in prompts.user_prompt
        assert "EU AI Act Category: Annex III - creditworthiness" in prompts.user_prompt
        assert "NIST Score: 62" in prompts.user_prompt
        assert "ISO Readiness: 48.5" in prompts.user_prompt
        assert "Recommended Actions: Register in EU database, Add human oversight" in prompts.user_prompt

    def test_risk_summary_without_assessment(self):
        prompts = build_document_prompt(make_system(), DocumentType.RISK_SUMMARY)
        assert "System: Loan Default Predictor" in prompts.user_prompt
        assert "NIST Score" not in prompts.user_prompt
        assert "Executive Summary" in prompts.user_prompt

    def test_risk_summary_partial_assessment(self):
        assessment = _make_assessment(nist_score=None, recommended_actions=None)
        prompts = build_document_prompt(make_system(), DocumentType.RISK_SUMMARY, assessment)
        assert f"NIST Score: {NOT_SPECIFIED}" in prompts.user_prompt
        assert f"Recommended Actions: {NOT_SPECIFIED}" in prompts.user_prompt

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            build_document_prompt(make_system(), "privacy_notice")

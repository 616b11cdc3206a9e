"""
Assessment Orchestrator

Orchestrates one assessment run:
  1. Load the AI system (NotFoundError if absent)
  2. Build the template prompt
  3. Call the LLM gateway
  4. Decode the answer into an AssessmentResult
  5. Insert the assessment row
  6. Copy the risk level onto the AI system
  7. Derive one open task per recommended action

Steps 5-7 are committed together; a failure in any of them rolls back all three.
"""
from __future__ import annotations

import time
from typing import Union

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from governance_engine.core.errors import GovernanceError
from governance_engine.core.metrics import ASSESSMENT_RUNS
from governance_engine.models.records import Assessment, Task
from governance_engine.prompts.builder import build_assessment_prompt, coerce_selector
from governance_engine.schemas.assessment_result import AssessmentResult
from governance_engine.schemas.requests import AssessmentTemplate
from governance_engine.schemas.responses import RiskLevel, TaskPriority, TaskStatus
from governance_engine.services import repository
from governance_engine.services.llm_gateway import GatewayClient
from governance_engine.services.response_parser import decode_assessment_result

logger = structlog.get_logger()

# Risk levels whose follow-up tasks are escalated to HIGH priority
ESCALATING_RISK_LEVELS = frozenset({RiskLevel.HIGH, RiskLevel.CRITICAL})


def task_priority_for(risk_level: RiskLevel) -> TaskPriority:
    if risk_level in ESCALATING_RISK_LEVELS:
        return TaskPriority.HIGH
    return TaskPriority.MEDIUM


def derive_tasks(
    result: AssessmentResult,
    assessment: Assessment,
    template: AssessmentTemplate,
    created_by: str,
) -> list[Task]:
    """One open task per recommended action, linked to the assessment and its system."""
    priority = task_priority_for(result.risk_level)
    return [
        Task(
            title=action,
            description=f"Action recommended from {template.value} assessment",
            status=TaskStatus.OPEN.value,
            priority=priority.value,
            ai_system_id=assessment.ai_system_id,
            assessment_id=assessment.id,
            created_by=created_by,
        )
        for action in result.recommended_actions
    ]


async def run_assessment(
    db: AsyncSession,
    gateway: GatewayClient,
    system_id: str,
    template: Union[str, AssessmentTemplate],
    created_by: str,
) -> Assessment:
    """
    Main entry point. Returns the persisted Assessment.
    """
    t0 = time.perf_counter_ns()
    template = coerce_selector(template, AssessmentTemplate, "template")
    log = logger.bind(system_id=system_id, template=template.value)

    try:
        # ── Step 1: Load system ──
        system = await repository.get_system(db, system_id)

        # ── Step 2-4: Prompt → gateway → decode ──
        prompts = build_assessment_prompt(system, template)
        log.info("assessment_started", system_name=system.name)
        raw_text = await gateway.send(prompts.system_prompt, prompts.user_prompt)
        result = decode_assessment_result(raw_text, template)

        # ── Step 5: Persist assessment ──
        assessment = await repository.insert_assessment(db, Assessment(
            ai_system_id=system.id,
            template=template.value,
            risk_level=result.risk_level.value,
            eu_ai_act_category=result.eu_ai_act_category,
            nist_score=result.nist_score,
            iso_readiness_score=result.iso_readiness_score,
            recommended_actions=result.recommended_actions,
            assessment_data=result.raw,
            created_by=created_by,
        ))

        # ── Step 6: Risk level on the system ──
        await repository.set_system_risk_level(db, system, result.risk_level.value)

        # ── Step 7: Follow-up tasks ──
        tasks = await repository.insert_tasks(
            db, derive_tasks(result, assessment, template, created_by)
        )

        await db.commit()
    except GovernanceError as e:
        await db.rollback()
        ASSESSMENT_RUNS.labels(template=template.value, outcome=type(e).__name__).inc()
        log.warning("assessment_failed", error_type=type(e).__name__, error=e.message)
        raise
    except Exception:
        await db.rollback()
        ASSESSMENT_RUNS.labels(template=template.value, outcome="unexpected").inc()
        raise

    ASSESSMENT_RUNS.labels(template=template.value, outcome="success").inc()
    log.info(
        "assessment_complete",
        assessment_id=assessment.id,
        risk_level=assessment.risk_level,
        tasks_created=len(tasks),
        elapsed_ms=int((time.perf_counter_ns() - t0) / 1_000_000),
    )
    return assessment

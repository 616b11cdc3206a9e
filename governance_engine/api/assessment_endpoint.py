"""
POST /run-assessment

Called by the dashboard's assessment runner.
Synchronous request → prompt → LLM → persist → response.
Every run writes one assessment row, updates the system's risk level
and derives follow-up tasks.
"""
from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from governance_engine.core.auth import caller_id, verify_token
from governance_engine.core.errors import GovernanceError
from governance_engine.models.database import get_db
from governance_engine.schemas.requests import RunAssessmentRequest
from governance_engine.schemas.responses import AssessmentOut, ErrorResponse, RunAssessmentResponse
from governance_engine.services.assessment_runner import run_assessment
from governance_engine.services.llm_gateway import GatewayClient, get_gateway

logger = structlog.get_logger()
router = APIRouter(tags=["assessments"])


@router.post(
    "/run-assessment",
    response_model=RunAssessmentResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Run an LLM-backed compliance assessment for an AI system",
)
async def run_assessment_endpoint(
    request: RunAssessmentRequest,
    token_payload: dict = Depends(verify_token),
    db: AsyncSession = Depends(get_db),
    gateway: GatewayClient = Depends(get_gateway),
) -> RunAssessmentResponse:

    logger.info(
        "run_assessment_requested",
        system_id=str(request.system_id),
        template=request.template.value,
        caller=token_payload.get("sub", "unknown"),
    )

    try:
        assessment = await run_assessment(
            db,
            gateway,
            system_id=str(request.system_id),
            template=request.template,
            created_by=caller_id(token_payload),
        )
    except GovernanceError:
        raise
    except Exception as e:
        logger.error("assessment_run_failed", system_id=str(request.system_id), error=str(e))
        raise HTTPException(status_code=500, detail="Failed to run assessment")

    return RunAssessmentResponse(assessment=AssessmentOut.model_validate(assessment))

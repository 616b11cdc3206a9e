"""
POST /generate-document

Returns generated policy / system-card / risk-summary text.
The dashboard stores the result as a Document row.
"""
from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from governance_engine.core.auth import verify_token
from governance_engine.core.errors import GovernanceError
from governance_engine.models.database import get_db
from governance_engine.schemas.requests import GenerateDocumentRequest
from governance_engine.schemas.responses import ErrorResponse, GenerateDocumentResponse
from governance_engine.services.document_generator import generate_document
from governance_engine.services.llm_gateway import GatewayClient, get_gateway

logger = structlog.get_logger()
router = APIRouter(tags=["documents"])


@router.post(
    "/generate-document",
    response_model=GenerateDocumentResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Generate a governance document for an AI system",
)
async def generate_document_endpoint(
    request: GenerateDocumentRequest,
    token_payload: dict = Depends(verify_token),
    db: AsyncSession = Depends(get_db),
    gateway: GatewayClient = Depends(get_gateway),
) -> GenerateDocumentResponse:
    assessment_id = str(request.assessment_id) if request.assessment_id else None

    logger.info(
        "generate_document_requested",
        system_id=str(request.system_id),
        document_type=request.type.value,
        assessment_id=assessment_id,
        caller=token_payload.get("sub", "unknown"),
    )

    try:
        content = await generate_document(
            db,
            gateway,
            system_id=str(request.system_id),
            document_type=request.type,
            assessment_id=assessment_id,
        )
    except GovernanceError:
        raise
    except Exception as e:
        logger.error("document_generation_failed", system_id=str(request.system_id), error=str(e))
        raise HTTPException(status_code=500, detail="An error occurred generating your document")

    return GenerateDocumentResponse(content=content)

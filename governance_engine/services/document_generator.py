"""
Document Orchestrator

Loads the AI system (and optional assessment), builds the document prompt,
calls the gateway and returns the generated text. The caller persists the
Document row; nothing is written here.
"""
from __future__ import annotations

from typing import Optional, Union

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from governance_engine.core.errors import GovernanceError
from governance_engine.core.metrics import DOCUMENT_GENERATIONS
from governance_engine.prompts.builder import build_document_prompt, coerce_selector
from governance_engine.schemas.requests import DocumentType
from governance_engine.services import repository
from governance_engine.services.llm_gateway import GatewayClient

logger = structlog.get_logger()


async def generate_document(
    db: AsyncSession,
    gateway: GatewayClient,
    system_id: str,
    document_type: Union[str, DocumentType],
    assessment_id: Optional[str] = None,
) -> str:
    document_type = coerce_selector(document_type, DocumentType, "type")
    log = logger.bind(system_id=system_id, document_type=document_type.value, assessment_id=assessment_id)

    try:
        # Existence is checked before any prompt is built
        system = await repository.get_system(db, system_id)
        assessment = None
        if assessment_id is not None:
            assessment = await repository.get_assessment(db, assessment_id, system_id=system_id)

        prompts = build_document_prompt(system, document_type, assessment)
        log.info("document_generation_started")
        content = await gateway.send(prompts.system_prompt, prompts.user_prompt)
    except GovernanceError as e:
        DOCUMENT_GENERATIONS.labels(document_type=document_type.value, outcome=type(e).__name__).inc()
        log.warning("document_generation_failed", error_type=type(e).__name__, error=e.message)
        raise

    DOCUMENT_GENERATIONS.labels(document_type=document_type.value, outcome="success").inc()
    log.info("document_generation_complete", content_chars=len(content))
    return content

"""
Data-store access used by the pipeline.

Thin wrappers over the ORM so the orchestrators read as a sequence of
domain steps. None of these commit; the caller owns the transaction.
"""
from __future__ import annotations

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from governance_engine.core.errors import NotFoundError
from governance_engine.models.records import AISystem, Assessment, Task


async def get_system(db: AsyncSession, system_id: str) -> AISystem:
    system = await db.get(AISystem, system_id)
    if system is None:
        raise NotFoundError(f"AI system {system_id} not found")
    return system


async def get_assessment(
    db: AsyncSession, assessment_id: str, system_id: Optional[str] = None
) -> Assessment:
    assessment = await db.get(Assessment, assessment_id)
    if assessment is None:
        raise NotFoundError(f"Assessment {assessment_id} not found")
    if system_id is not None and assessment.ai_system_id != system_id:
        raise NotFoundError(f"Assessment {assessment_id} not found for AI system {system_id}")
    return assessment


async def insert_assessment(db: AsyncSession, assessment: Assessment) -> Assessment:
    db.add(assessment)
    await db.flush()
    return assessment


async def set_system_risk_level(db: AsyncSession, system: AISystem, risk_level: str) -> None:
    # last write wins when two runs finish against the same system
    system.risk_level = risk_level
    await db.flush()


async def insert_tasks(db: AsyncSession, tasks: list[Task]) -> list[Task]:
    if tasks:
        db.add_all(tasks)
        await db.flush()
    return tasks

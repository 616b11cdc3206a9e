"""
Relational schema shared with the dashboard.

Tables: ai_systems, assessments, tasks, documents, evidence.
IDs are UUID strings so the same models run on Postgres and SQLite.
"""
import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import DeclarativeBase


def _uuid() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class AISystem(Base):
    __tablename__ = "ai_systems"

    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    owner = Column(String(100), nullable=True)
    business_unit = Column(String(100), nullable=True)
    geography = Column(String(100), nullable=True)
    data_type = Column(String(100), nullable=True)
    model_type = Column(String(100), nullable=True)
    training_source = Column(String(200), nullable=True)
    deployment_environment = Column(String(100), nullable=True)

    # ── Written only by an assessment run ──
    risk_level = Column(String(20), nullable=True)

    created_by = Column(String(36), nullable=False)
    created_at = Column(DateTime(timezone=True), default=_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_now, onupdate=_now, nullable=True)

    def __repr__(self):
        return f"<AISystem {self.id} name={self.name!r} risk={self.risk_level}>"


class Assessment(Base):
    __tablename__ = "assessments"
    __table_args__ = (
        CheckConstraint(
            "template IN ('eu_ai_act', 'nist_ai_rmf', 'iso_42001')",
            name="ck_assessments_template",
        ),
    )

    id = Column(String(36), primary_key=True, default=_uuid)
    ai_system_id = Column(String(36), ForeignKey("ai_systems.id"), nullable=False, index=True)
    template = Column(String(20), nullable=False)

    # ── Model outputs ──
    risk_level = Column(String(20), nullable=True)
    eu_ai_act_category = Column(Text, nullable=True)
    nist_score = Column(Float, nullable=True)
    iso_readiness_score = Column(Float, nullable=True)
    recommended_actions = Column(JSON, nullable=True)

    # ── Full model payload for audit ──
    assessment_data = Column(JSON, nullable=True)

    created_by = Column(String(36), nullable=False)
    created_at = Column(DateTime(timezone=True), default=_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_now, nullable=True)

    def __repr__(self):
        return f"<Assessment {self.id} template={self.template} risk={self.risk_level}>"


class Task(Base):
    __tablename__ = "tasks"
    __table_args__ = (
        CheckConstraint(
            "status IN ('open', 'in_progress', 'completed', 'blocked')",
            name="ck_tasks_status",
        ),
        CheckConstraint(
            "priority IN ('low', 'medium', 'high', 'critical')",
            name="ck_tasks_priority",
        ),
    )

    id = Column(String(36), primary_key=True, default=_uuid)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    owner = Column(String(100), nullable=True)
    due_date = Column(Date, nullable=True)
    status = Column(String(20), nullable=False, default="open")
    priority = Column(String(20), nullable=False, default="medium")

    ai_system_id = Column(String(36), ForeignKey("ai_systems.id"), nullable=True, index=True)
    assessment_id = Column(String(36), ForeignKey("assessments.id"), nullable=True, index=True)

    created_by = Column(String(36), nullable=False)
    created_at = Column(DateTime(timezone=True), default=_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_now, onupdate=_now, nullable=True)

    def __repr__(self):
        return f"<Task {self.id} status={self.status} priority={self.priority}>"


class Document(Base):
    __tablename__ = "documents"

    id = Column(String(36), primary_key=True, default=_uuid)
    title = Column(String(200), nullable=False)
    type = Column(String(40), nullable=False)
    content = Column(Text, nullable=False)

    ai_system_id = Column(String(36), ForeignKey("ai_systems.id"), nullable=True)
    assessment_id = Column(String(36), ForeignKey("assessments.id"), nullable=True)

    created_by = Column(String(36), nullable=False)
    created_at = Column(DateTime(timezone=True), default=_now, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_now, nullable=True)


class Evidence(Base):
    """Metadata for a file held in the `evidence` object-storage bucket."""
    __tablename__ = "evidence"

    id = Column(String(36), primary_key=True, default=_uuid)
    file_name = Column(String(255), nullable=False)
    file_path = Column(String(500), nullable=False)
    file_size = Column(Integer, nullable=True)

    ai_system_id = Column(String(36), ForeignKey("ai_systems.id"), nullable=True)
    assessment_id = Column(String(36), ForeignKey("assessments.id"), nullable=True)

    uploaded_by = Column(String(36), nullable=False)
    created_at = Column(DateTime(timezone=True), default=_now, nullable=False)

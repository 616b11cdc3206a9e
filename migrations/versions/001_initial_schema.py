"""
001 — Initial schema: ai_systems, assessments, tasks, documents, evidence

Revision ID: 001
Create Date: 2026-10-18
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB

revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps(updated: bool = True) -> list:
    cols = [sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False)]
    if updated:
        cols.append(sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()))
    return cols


def upgrade() -> None:
    op.create_table(
        "ai_systems",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("owner", sa.String(100), nullable=True),
        sa.Column("business_unit", sa.String(100), nullable=True),
        sa.Column("geography", sa.String(100), nullable=True),
        sa.Column("data_type", sa.String(100), nullable=True),
        sa.Column("model_type", sa.String(100), nullable=True),
        sa.Column("training_source", sa.String(200), nullable=True),
        sa.Column("deployment_environment", sa.String(100), nullable=True),
        sa.Column("risk_level", sa.String(20), nullable=True),
        sa.Column("created_by", sa.String(36), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "assessments",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("ai_system_id", sa.String(36), sa.ForeignKey("ai_systems.id"), nullable=False),
        sa.Column("template", sa.String(20), nullable=False),

        sa.Column("risk_level", sa.String(20), nullable=True),
        sa.Column("eu_ai_act_category", sa.Text, nullable=True),
        sa.Column("nist_score", sa.Float, nullable=True),
        sa.Column("iso_readiness_score", sa.Float, nullable=True),
        sa.Column("recommended_actions", JSONB, nullable=True),
        sa.Column("assessment_data", JSONB, nullable=True),

        sa.Column("created_by", sa.String(36), nullable=False),
        *_timestamps(),
        sa.CheckConstraint(
            "template IN ('eu_ai_act', 'nist_ai_rmf', 'iso_42001')",
            name="ck_assessments_template",
        ),
    )

    op.create_table(
        "tasks",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("title", sa.Text, nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("owner", sa.String(100), nullable=True),
        sa.Column("due_date", sa.Date, nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="open"),
        sa.Column("priority", sa.String(20), nullable=False, server_default="medium"),
        sa.Column("ai_system_id", sa.String(36), sa.ForeignKey("ai_systems.id"), nullable=True),
        sa.Column("assessment_id", sa.String(36), sa.ForeignKey("assessments.id"), nullable=True),
        sa.Column("created_by", sa.String(36), nullable=False),
        *_timestamps(),
        sa.CheckConstraint(
            "status IN ('open', 'in_progress', 'completed', 'blocked')",
            name="ck_tasks_status",
        ),
        sa.CheckConstraint(
            "priority IN ('low', 'medium', 'high', 'critical')",
            name="ck_tasks_priority",
        ),
    )

    op.create_table(
        "documents",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("type", sa.String(40), nullable=False),
        sa.Column("content", sa.Text, nullable=False),
        sa.Column("ai_system_id", sa.String(36), sa.ForeignKey("ai_systems.id"), nullable=True),
        sa.Column("assessment_id", sa.String(36), sa.ForeignKey("assessments.id"), nullable=True),
        sa.Column("created_by", sa.String(36), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "evidence",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("file_name", sa.String(255), nullable=False),
        sa.Column("file_path", sa.String(500), nullable=False),
        sa.Column("file_size", sa.Integer, nullable=True),
        sa.Column("ai_system_id", sa.String(36), sa.ForeignKey("ai_systems.id"), nullable=True),
        sa.Column("assessment_id", sa.String(36), sa.ForeignKey("assessments.id"), nullable=True),
        sa.Column("uploaded_by", sa.String(36), nullable=False),
        *_timestamps(updated=False),
    )

    op.create_index("ix_assessments_ai_system_id", "assessments", ["ai_system_id"])
    op.create_index("ix_tasks_ai_system_id", "tasks", ["ai_system_id"])
    op.create_index("ix_tasks_assessment_id", "tasks", ["assessment_id"])


def downgrade() -> None:
    op.drop_table("evidence")
    op.drop_table("documents")
    op.drop_table("tasks")
    op.drop_table("assessments")
    op.drop_table("ai_systems")

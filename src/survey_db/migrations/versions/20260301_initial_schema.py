"""Initial schema: surveys, data entries, responses, admin accounts.

Responses reference their data entry with a plain (NO ACTION) foreign key so
deleting an entry racing with a new submission fails at the database
instead of leaving a dangling ``data_entry_id``, while a survey delete
can still cascade through its entries and responses in one statement.

Revision ID: 20260301_initial
Revises:
Create Date: 2026-03-01
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP

# revision identifiers, used by Alembic.
revision = "20260301_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "surveys",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "status", sa.String(20), nullable=False, server_default=sa.text("'draft'")
        ),
        sa.Column(
            "questions", JSONB(), nullable=False, server_default=sa.text("'[]'::jsonb")
        ),
        sa.Column(
            "params", JSONB(), nullable=False, server_default=sa.text("'[]'::jsonb")
        ),
        sa.Column("created_at", TIMESTAMP(timezone=True), nullable=False),
        sa.Column("updated_at", TIMESTAMP(timezone=True), nullable=False),
        sa.CheckConstraint(
            "status IN ('draft', 'active', 'completed')", name="ck_survey_status"
        ),
    )
    op.create_index("ix_surveys_status", "surveys", ["status"])

    op.create_table(
        "survey_data_entries",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "survey_id",
            sa.String(36),
            sa.ForeignKey("surveys.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "values", JSONB(), nullable=False, server_default=sa.text("'{}'::jsonb")
        ),
        sa.Column("label", sa.String(200), nullable=True),
        sa.Column("created_at", TIMESTAMP(timezone=True), nullable=False),
        sa.Column("updated_at", TIMESTAMP(timezone=True), nullable=False),
    )
    op.create_index(
        "ix_survey_data_entries_survey_id", "survey_data_entries", ["survey_id"]
    )

    op.create_table(
        "responses",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "survey_id",
            sa.String(36),
            sa.ForeignKey("surveys.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("answers", JSONB(), nullable=False),
        sa.Column("params", JSONB(), nullable=True),
        sa.Column(
            "data_entry_id",
            sa.String(36),
            sa.ForeignKey("survey_data_entries.id"),
            nullable=True,
        ),
        sa.Column("created_at", TIMESTAMP(timezone=True), nullable=False),
    )
    op.create_index("ix_responses_survey_id", "responses", ["survey_id"])
    op.create_index(
        "ix_responses_data_entry",
        "responses",
        ["data_entry_id"],
        postgresql_where=sa.text("data_entry_id IS NOT NULL"),
    )

    op.create_table(
        "admin_users",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("email", sa.Text(), nullable=False, unique=True),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column("created_at", TIMESTAMP(timezone=True), nullable=False),
    )

    op.create_table(
        "admin_sessions",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column(
            "user_id",
            sa.String(36),
            sa.ForeignKey("admin_users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
        sa.Column("created_at", TIMESTAMP(timezone=True), nullable=False),
    )
    op.create_index("ix_admin_sessions_user_id", "admin_sessions", ["user_id"])


def downgrade() -> None:
    op.drop_index("ix_admin_sessions_user_id", table_name="admin_sessions")
    op.drop_table("admin_sessions")
    op.drop_table("admin_users")
    op.drop_index("ix_responses_data_entry", table_name="responses")
    op.drop_index("ix_responses_survey_id", table_name="responses")
    op.drop_table("responses")
    op.drop_index(
        "ix_survey_data_entries_survey_id", table_name="survey_data_entries"
    )
    op.drop_table("survey_data_entries")
    op.drop_index("ix_surveys_status", table_name="surveys")
    op.drop_table("surveys")

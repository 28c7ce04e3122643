"""Survey ORM models — surveys, data entries, responses and admin accounts.

``questions`` and ``params`` on a survey (and ``values`` on a data entry) are
JSONB columns holding loosely-typed data; the engine parses them on read and
treats anything malformed as empty.  Responses are append-only.
"""

import secrets
import uuid
from datetime import datetime, timezone

from sqlalchemy import ForeignKey, Index, String, Text, text
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP
from sqlalchemy.orm import Mapped, mapped_column, relationship

from survey_db.models.base import Base
from survey_db.models.enums import SurveyStatus


def _new_id() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Survey(Base):
    """One row per survey definition."""

    __tablename__ = "surveys"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    status: Mapped[str] = mapped_column(
        # Store as the lowercase string value, not the Python name
        String(20),
        nullable=False,
        default=SurveyStatus.DRAFT.value,
        server_default=text("'draft'"),
        index=True,
    )

    # [{type, id, label, required, ...}] — see survey_engine.models.question
    questions: Mapped[list] = mapped_column(
        JSONB,
        nullable=False,
        server_default=text("'[]'::jsonb"),
    )
    # [{key, label, visible}]
    params: Mapped[list] = mapped_column(
        JSONB,
        nullable=False,
        server_default=text("'[]'::jsonb"),
    )

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), nullable=False, default=_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), nullable=False, default=_now, onupdate=_now
    )

    data_entries: Mapped[list["SurveyDataEntry"]] = relationship(
        back_populates="survey",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="SurveyDataEntry.created_at",
    )

    def __repr__(self) -> str:
        return f"<Survey(id={self.id!r}, title={self.title!r}, status={self.status!r})>"


class SurveyDataEntry(Base):
    """A pre-registered bundle of param values respondents can pick from."""

    __tablename__ = "survey_data_entries"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    survey_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("surveys.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # {param_key: value}; keys are a subset of the survey's declared params
    values: Mapped[dict] = mapped_column(
        JSONB,
        nullable=False,
        server_default=text("'{}'::jsonb"),
    )
    label: Mapped[str | None] = mapped_column(String(200), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), nullable=False, default=_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), nullable=False, default=_now, onupdate=_now
    )

    survey: Mapped[Survey] = relationship(back_populates="data_entries")

    def __repr__(self) -> str:
        return f"<SurveyDataEntry(id={self.id!r}, survey={self.survey_id!r})>"


class SurveyResponse(Base):
    """One respondent submission.  Never updated once written."""

    __tablename__ = "responses"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    survey_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("surveys.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # {question_id: "value" | ["value", ...]}
    answers: Mapped[dict] = mapped_column(JSONB, nullable=False)
    # Resolved params (data entry values merged with caller params)
    params: Mapped[dict | None] = mapped_column(JSONB, nullable=True)
    # NO ACTION: a referenced entry cannot be deleted, checked at statement end
    # so survey cascades still go through
    data_entry_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("survey_data_entries.id"),
        nullable=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), nullable=False, default=_now
    )

    __table_args__ = (
        # Response counts per data entry are computed on every entry listing
        Index(
            "ix_responses_data_entry",
            "data_entry_id",
            postgresql_where=text("data_entry_id IS NOT NULL"),
        ),
    )

    def __repr__(self) -> str:
        return f"<SurveyResponse(id={self.id!r}, survey={self.survey_id!r})>"


class AdminUser(Base):
    """An administrator allowed to sign in to the admin API."""

    __tablename__ = "admin_users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    email: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    # "salt_hex:key_hex" — see survey_engine.passwords
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), nullable=False, default=_now
    )

    def __repr__(self) -> str:
        return f"<AdminUser(id={self.id!r}, email={self.email!r})>"


class AdminSession(Base):
    """Server-side session referenced by the admin session cookie."""

    __tablename__ = "admin_sessions"

    id: Mapped[str] = mapped_column(
        String(64), primary_key=True, default=lambda: secrets.token_urlsafe(32)
    )
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("admin_users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    expires_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), nullable=False, default=_now
    )

    user: Mapped[AdminUser] = relationship(lazy="joined")

    def __repr__(self) -> str:
        return f"<AdminSession(user={self.user_id!r}, expires_at={self.expires_at!s})>"

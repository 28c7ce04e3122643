"""Async CRUD repositories for surveys, data entries, responses and admins.

All public methods accept an ``AsyncSession`` so the caller controls
transaction boundaries.  Methods ``flush()`` but never ``commit()``.

The repositories deliberately avoid business-logic validation (status
gating, key checks, required answers) — that belongs in ``survey_engine``.
Referential guarantees (a response pinning its data entry) are enforced by
foreign-key constraints and surface as ``IntegrityError`` on flush.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from survey_db.models.enums import SurveyStatus
from survey_db.models.survey import (
    AdminSession,
    AdminUser,
    Survey,
    SurveyDataEntry,
    SurveyResponse,
)


class SurveyRepository:
    """Async read/write operations on the ``surveys`` table."""

    async def create(
        self,
        db: AsyncSession,
        *,
        title: str,
        description: str | None,
        questions: list[dict[str, Any]],
        params: list[dict[str, Any]] | None = None,
        status: SurveyStatus = SurveyStatus.DRAFT,
    ) -> Survey:
        """Insert a new survey row and return it."""
        survey = Survey(
            title=title,
            description=description,
            questions=questions,
            params=params or [],
            status=status.value,
        )
        db.add(survey)
        await db.flush()  # Populate id and timestamps
        return survey

    async def get_by_id(self, db: AsyncSession, survey_id: str) -> Survey | None:
        return await db.get(Survey, survey_id)

    async def list_all(
        self, db: AsyncSession, *, limit: int = 20, offset: int = 0
    ) -> list[Survey]:
        """List surveys, most recently created first."""
        stmt = (
            select(Survey)
            .order_by(Survey.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await db.execute(stmt)
        return list(result.scalars().all())

    async def update_content(
        self,
        db: AsyncSession,
        survey: Survey,
        *,
        title: str,
        questions: list[dict[str, Any]],
        description: str | None = None,
        params: list[dict[str, Any]] | None = None,
    ) -> Survey:
        """Overwrite title and questions; ``None`` description/params are kept."""
        survey.title = title
        survey.questions = questions
        if description is not None:
            survey.description = description
        if params is not None:
            survey.params = params
        await db.flush()
        return survey

    async def set_status(
        self, db: AsyncSession, survey: Survey, status: SurveyStatus
    ) -> Survey:
        survey.status = status.value
        await db.flush()
        return survey

    async def delete(self, db: AsyncSession, survey: Survey) -> None:
        """Delete a survey; entries and responses go with it (ON DELETE CASCADE)."""
        await db.delete(survey)
        await db.flush()


class DataEntryRepository:
    """Async read/write operations on ``survey_data_entries``."""

    async def get_by_id(
        self, db: AsyncSession, entry_id: str
    ) -> SurveyDataEntry | None:
        return await db.get(SurveyDataEntry, entry_id)

    async def list_by_survey(
        self, db: AsyncSession, survey_id: str
    ) -> list[SurveyDataEntry]:
        """Entries of a survey in creation order."""
        stmt = (
            select(SurveyDataEntry)
            .where(SurveyDataEntry.survey_id == survey_id)
            .order_by(SurveyDataEntry.created_at.asc())
        )
        result = await db.execute(stmt)
        return list(result.scalars().all())

    async def list_with_counts(
        self, db: AsyncSession, survey_id: str
    ) -> list[tuple[SurveyDataEntry, int]]:
        """Entries of a survey paired with their referencing response count."""
        stmt = (
            select(SurveyDataEntry, func.count(SurveyResponse.id))
            .outerjoin(
                SurveyResponse,
                SurveyResponse.data_entry_id == SurveyDataEntry.id,
            )
            .where(SurveyDataEntry.survey_id == survey_id)
            .group_by(SurveyDataEntry.id)
            .order_by(SurveyDataEntry.created_at.asc())
        )
        result = await db.execute(stmt)
        return [(entry, int(count)) for entry, count in result.all()]

    async def count_responses(self, db: AsyncSession, entry_id: str) -> int:
        stmt = select(func.count(SurveyResponse.id)).where(
            SurveyResponse.data_entry_id == entry_id
        )
        result = await db.execute(stmt)
        return int(result.scalar_one())

    async def create(
        self,
        db: AsyncSession,
        *,
        survey_id: str,
        values: dict[str, str],
        label: str | None = None,
    ) -> SurveyDataEntry:
        entry = SurveyDataEntry(survey_id=survey_id, values=values, label=label)
        db.add(entry)
        await db.flush()
        return entry

    async def update(
        self,
        db: AsyncSession,
        entry: SurveyDataEntry,
        *,
        values: dict[str, str],
        label: str | None,
    ) -> SurveyDataEntry:
        """Replace values and label (a ``None`` label clears it)."""
        entry.values = values
        entry.label = label
        await db.flush()
        return entry

    async def delete(self, db: AsyncSession, entry: SurveyDataEntry) -> None:
        await db.delete(entry)
        await db.flush()


class ResponseRepository:
    """Append-only access to the ``responses`` table."""

    async def create(
        self,
        db: AsyncSession,
        *,
        survey_id: str,
        answers: dict[str, Any],
        params: dict[str, str] | None = None,
        data_entry_id: str | None = None,
    ) -> SurveyResponse:
        response = SurveyResponse(
            survey_id=survey_id,
            answers=answers,
            params=params,
            data_entry_id=data_entry_id,
        )
        db.add(response)
        await db.flush()
        return response

    async def create_many(
        self, db: AsyncSession, survey_id: str, items: list[dict[str, Any]]
    ) -> int:
        """Insert several responses for one survey; returns the row count.

        Each item carries ``answers`` and optionally ``params`` and
        ``data_entry_id``.
        """
        rows = [
            SurveyResponse(
                survey_id=survey_id,
                answers=item["answers"],
                params=item.get("params"),
                data_entry_id=item.get("data_entry_id"),
            )
            for item in items
        ]
        db.add_all(rows)
        await db.flush()
        return len(rows)

    async def list_by_survey(
        self, db: AsyncSession, survey_id: str
    ) -> list[SurveyResponse]:
        stmt = (
            select(SurveyResponse)
            .where(SurveyResponse.survey_id == survey_id)
            .order_by(SurveyResponse.created_at.asc())
        )
        result = await db.execute(stmt)
        return list(result.scalars().all())


class AdminRepository:
    """Admin accounts and their server-side sessions."""

    async def get_user_by_email(
        self, db: AsyncSession, email: str
    ) -> AdminUser | None:
        stmt = select(AdminUser).where(AdminUser.email == email)
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    async def upsert_user(
        self, db: AsyncSession, *, email: str, password_hash: str
    ) -> AdminUser:
        """Create the admin, or reset the password of an existing one."""
        user = await self.get_user_by_email(db, email)
        if user is None:
            user = AdminUser(email=email, password_hash=password_hash)
            db.add(user)
        else:
            user.password_hash = password_hash
        await db.flush()
        return user

    async def create_session(
        self, db: AsyncSession, user: AdminUser, *, expires_at: datetime
    ) -> AdminSession:
        session = AdminSession(user_id=user.id, expires_at=expires_at)
        db.add(session)
        await db.flush()
        return session

    async def get_session(
        self, db: AsyncSession, session_id: str
    ) -> AdminSession | None:
        """Fetch a session with its user eagerly loaded."""
        return await db.get(AdminSession, session_id)

    async def delete_session(self, db: AsyncSession, session_id: str) -> int:
        """Delete a session row if it exists; returns the affected count."""
        result = await db.execute(
            delete(AdminSession).where(AdminSession.id == session_id)
        )
        await db.flush()
        return result.rowcount

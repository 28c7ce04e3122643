"""Data entries — pre-registered param values respondents can select.

An entry's ``values`` keys must be declared as params on its survey; values
themselves are free strings.  An entry stays deletable only while no
response references it.  Response counts are derived on every read, never
stored.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from survey_db.models.survey import Survey, SurveyDataEntry
from survey_db.repository import DataEntryRepository, SurveyRepository
from survey_engine.errors import NotFoundError, PolicyViolationError, ValidationError
from survey_engine.models.question import parse_params
from survey_engine.models.requests import DataEntryRequest
from survey_engine.models.views import DataEntryListView, DataEntryView

logger = logging.getLogger(__name__)

SURVEY_NOT_FOUND = "Survey not found"
DATA_ENTRY_NOT_FOUND = "Data entry not found"
ENTRY_IN_USE_MESSAGE = "Data entry has responses and cannot be deleted"


def validate_data_entry_keys(values: dict[str, str], params_raw: Any) -> None:
    """Raise ``ValidationError`` if ``values`` uses an undeclared param key.

    The message lists every invalid key (in submission order) followed by
    the allowed set, e.g. ``"Invalid keys: foo, bar. Allowed keys: event"``.
    """
    allowed = [p.key for p in parse_params(params_raw)]
    allowed_set = set(allowed)
    invalid = [k for k in values if k not in allowed_set]
    if invalid:
        raise ValidationError(
            f"Invalid keys: {', '.join(invalid)}. "
            f"Allowed keys: {', '.join(allowed)}"
        )


def ensure_entry_deletable(response_count: int) -> None:
    if response_count > 0:
        raise PolicyViolationError(ENTRY_IN_USE_MESSAGE)


class DataEntryService:
    """CRUD for data entries, always scoped to their parent survey."""

    def __init__(self) -> None:
        self._surveys = SurveyRepository()
        self._entries = DataEntryRepository()

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    async def _load_survey(self, db: AsyncSession, survey_id: str) -> Survey:
        survey = await self._surveys.get_by_id(db, survey_id)
        if survey is None:
            raise NotFoundError(SURVEY_NOT_FOUND)
        return survey

    async def _load_entry(
        self, db: AsyncSession, survey_id: str, entry_id: str
    ) -> SurveyDataEntry:
        entry = await self._entries.get_by_id(db, entry_id)
        if entry is None or entry.survey_id != survey_id:
            raise NotFoundError(DATA_ENTRY_NOT_FOUND)
        return entry

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def list_entries(self, db: AsyncSession, survey_id: str) -> DataEntryListView:
        await self._load_survey(db, survey_id)
        rows = await self._entries.list_with_counts(db, survey_id)
        return DataEntryListView(
            data_entries=[DataEntryView.from_row(e, count) for e, count in rows]
        )

    async def create_entry(
        self, db: AsyncSession, survey_id: str, body: DataEntryRequest
    ) -> DataEntryView:
        survey = await self._load_survey(db, survey_id)
        validate_data_entry_keys(body.values, survey.params)
        entry = await self._entries.create(
            db, survey_id=survey_id, values=body.values, label=body.label,
        )
        logger.info("Data entry %s created for survey %s", entry.id, survey_id)
        return DataEntryView.from_row(entry, 0)

    async def update_entry(
        self,
        db: AsyncSession,
        survey_id: str,
        entry_id: str,
        body: DataEntryRequest,
    ) -> DataEntryView:
        """Replace an entry's values; an omitted label clears the label."""
        entry = await self._load_entry(db, survey_id, entry_id)
        survey = await self._load_survey(db, survey_id)
        validate_data_entry_keys(body.values, survey.params)
        entry = await self._entries.update(
            db, entry, values=body.values, label=body.label,
        )
        count = await self._entries.count_responses(db, entry.id)
        logger.info("Data entry %s updated", entry.id)
        return DataEntryView.from_row(entry, count)

    async def delete_entry(
        self, db: AsyncSession, survey_id: str, entry_id: str
    ) -> None:
        """Delete an entry no response refers to.

        The count check and the delete are two statements; a response
        inserted in between is caught by the response foreign key, which
        fails the flush.
        """
        entry = await self._load_entry(db, survey_id, entry_id)
        ensure_entry_deletable(await self._entries.count_responses(db, entry.id))
        await self._entries.delete(db, entry)
        logger.info("Data entry %s deleted from survey %s", entry_id, survey_id)

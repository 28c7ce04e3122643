"""SurveyService — survey definition management for admins and the data API.

Covers create / read / list / content update / status update / delete,
the admin response listing, and bulk response import.  Status gating comes
from ``survey_engine.lifecycle``; params are editable in every state.
"""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from survey_db.models.enums import SurveyStatus
from survey_db.models.survey import Survey
from survey_db.repository import (
    DataEntryRepository,
    ResponseRepository,
    SurveyRepository,
)
from survey_engine.errors import NotFoundError, ValidationError
from survey_engine.lifecycle import (
    ensure_deletable,
    ensure_questions_mutable,
    is_open_for_responses,
)
from survey_engine.models.question import dump_params, dump_questions
from survey_engine.models.requests import BulkResponsesRequest, SurveyContentRequest
from survey_engine.models.views import (
    AdminSurveyView,
    BulkSubmitResult,
    DataEntryView,
    ResponseView,
    SurveyListView,
    SurveyResponsesView,
    SurveySummary,
)
from survey_engine.submission import DATA_ENTRY_NOT_FOUND, merge_params

logger = logging.getLogger(__name__)

SURVEY_NOT_FOUND = "Survey not found"
SURVEY_NOT_ACTIVE = "Survey is not active"


class SurveyService:
    """Survey definition operations shared by the admin and data APIs."""

    def __init__(self) -> None:
        self._surveys = SurveyRepository()
        self._entries = DataEntryRepository()
        self._responses = ResponseRepository()

    async def _load(self, db: AsyncSession, survey_id: str) -> Survey:
        survey = await self._surveys.get_by_id(db, survey_id)
        if survey is None:
            raise NotFoundError(SURVEY_NOT_FOUND)
        return survey

    # ==================================================================
    # Reads
    # ==================================================================

    async def list_surveys(
        self, db: AsyncSession, *, limit: int = 20, offset: int = 0
    ) -> SurveyListView:
        """List surveys, most recently created first."""
        rows = await self._surveys.list_all(db, limit=limit, offset=offset)
        return SurveyListView(
            surveys=[
                SurveySummary(
                    id=s.id, title=s.title, status=s.status, created_at=s.created_at,
                )
                for s in rows
            ]
        )

    async def get_survey(self, db: AsyncSession, survey_id: str) -> AdminSurveyView:
        """Full survey including data entries and their response counts."""
        survey = await self._load(db, survey_id)
        rows = await self._entries.list_with_counts(db, survey_id)
        return AdminSurveyView.from_row(
            survey,
            data_entries=[DataEntryView.from_row(e, count) for e, count in rows],
        )

    async def list_responses(
        self, db: AsyncSession, survey_id: str
    ) -> SurveyResponsesView:
        survey = await self._load(db, survey_id)
        rows = await self._responses.list_by_survey(db, survey.id)
        return SurveyResponsesView(
            survey_id=survey.id,
            responses=[ResponseView.from_row(r) for r in rows],
        )

    # ==================================================================
    # Writes
    # ==================================================================

    async def create_survey(
        self,
        db: AsyncSession,
        body: SurveyContentRequest,
        *,
        status: SurveyStatus = SurveyStatus.DRAFT,
    ) -> AdminSurveyView:
        survey = await self._surveys.create(
            db,
            title=body.title,
            description=body.description,
            questions=dump_questions(body.questions),
            params=dump_params(body.params) if body.params is not None else None,
            status=status,
        )
        logger.info("Survey %s created (status=%s)", survey.id, survey.status)
        return AdminSurveyView.from_row(survey)

    async def update_survey(
        self, db: AsyncSession, survey_id: str, body: SurveyContentRequest
    ) -> AdminSurveyView:
        """Replace title and questions; description/params only when given.

        Raises ``PolicyViolationError`` when the questions change on a
        survey that is no longer a draft.
        """
        survey = await self._load(db, survey_id)
        ensure_questions_mutable(survey.status, survey.questions, body.questions)
        survey = await self._surveys.update_content(
            db,
            survey,
            title=body.title,
            questions=dump_questions(body.questions),
            description=body.description,
            params=dump_params(body.params) if body.params is not None else None,
        )
        logger.info("Survey %s updated", survey.id)
        return AdminSurveyView.from_row(survey)

    async def update_status(
        self, db: AsyncSession, survey_id: str, status: SurveyStatus
    ) -> AdminSurveyView:
        """Set the status.  Any state may follow any other."""
        survey = await self._load(db, survey_id)
        previous = survey.status
        survey = await self._surveys.set_status(db, survey, status)
        logger.info(
            "Survey %s status changed: %s -> %s", survey.id, previous, survey.status,
        )
        return AdminSurveyView.from_row(survey)

    async def delete_survey(self, db: AsyncSession, survey_id: str) -> None:
        survey = await self._load(db, survey_id)
        ensure_deletable(survey.status)
        await self._surveys.delete(db, survey)
        logger.info("Survey %s deleted", survey_id)

    async def import_responses(
        self, db: AsyncSession, survey_id: str, body: BulkResponsesRequest
    ) -> BulkSubmitResult:
        """Store a batch of machine-submitted responses for an active survey.

        Unlike the respondent path, a non-active survey is reported as 400
        (the data API is trusted) and required answers are not enforced.
        Referenced data entries must belong to the survey; their values are
        merged into params exactly as for a single submission.
        """
        survey = await self._load(db, survey_id)
        if not is_open_for_responses(survey.status):
            raise ValidationError(SURVEY_NOT_ACTIVE)

        entry_values: dict[str, dict[str, str]] = {}
        for entry_id in {r.data_entry_id for r in body.responses if r.data_entry_id}:
            entry = await self._entries.get_by_id(db, entry_id)
            if entry is None or entry.survey_id != survey_id:
                raise NotFoundError(DATA_ENTRY_NOT_FOUND)
            entry_values[entry_id] = dict(entry.values or {})

        items = []
        for item in body.responses:
            params = item.params
            if item.data_entry_id:
                params = merge_params(entry_values[item.data_entry_id], item.params)
            items.append(
                {
                    "answers": item.answers,
                    "params": params,
                    "data_entry_id": item.data_entry_id or None,
                }
            )

        count = await self._responses.create_many(db, survey_id, items)
        logger.info("Imported %d responses into survey %s", count, survey_id)
        return BulkSubmitResult(count=count)

"""Respondent-facing operations — read an active survey, submit answers.

Submission runs these steps in order and stops at the first failure:

  1. ``sendCopy`` without ``respondentEmail``        -> 400 (no storage access)
  2. survey missing or not ``active``                -> 404
  3. any required question left empty                -> 400 listing all ids
  4. ``dataEntryId`` missing or from another survey  -> 404
  5. store the response (entry values merged under caller params)
  6. ``sendCopy`` -> the copy is returned to the caller, which sends it
     with ``send_copy`` once the response is committed

Draft and completed surveys answer exactly like missing ones, so
respondents cannot probe which ids exist.
"""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from survey_db.models.survey import Survey
from survey_db.repository import (
    DataEntryRepository,
    ResponseRepository,
    SurveyRepository,
)
from survey_engine.errors import NotFoundError, ValidationError
from survey_engine.interfaces import ResponseCopy, ResponseCopySender
from survey_engine.lifecycle import is_open_for_responses
from survey_engine.models.question import Question, parse_params, parse_questions
from survey_engine.models.requests import Answers, ParamValues, SubmitAnswersRequest
from survey_engine.models.views import PublicDataEntry, PublicSurveyView, SubmitResult

logger = logging.getLogger(__name__)

SURVEY_NOT_FOUND = "Survey not found"
DATA_ENTRY_NOT_FOUND = "Data entry not found"
COPY_EMAIL_REQUIRED = "respondentEmail is required when sendCopy is true"


# ------------------------------------------------------------------
# Pure validation helpers
# ------------------------------------------------------------------

def check_copy_request(body: SubmitAnswersRequest) -> None:
    if body.send_copy and not body.respondent_email:
        raise ValidationError(COPY_EMAIL_REQUIRED)


def find_missing_required_answers(
    questions: list[Question], answers: Answers
) -> list[str]:
    """Return ids of required questions without an answer, in question order.

    Checkbox answers count as missing when absent or an empty list; every
    other type when absent or an empty string.
    """
    missing: list[str] = []
    for question in questions:
        if not question.required:
            continue
        answer = answers.get(question.id)
        if question.type == "checkbox":
            if not answer:
                missing.append(question.id)
        elif answer is None or answer == "":
            missing.append(question.id)
    return missing


def ensure_required_answers(questions: list[Question], answers: Answers) -> None:
    missing = find_missing_required_answers(questions, answers)
    if missing:
        raise ValidationError(
            f"Required questions must be answered: {', '.join(missing)}"
        )


def merge_params(
    entry_values: ParamValues, caller_params: ParamValues | None
) -> ParamValues:
    """Data entry values overlaid with caller params (caller wins)."""
    return {**entry_values, **(caller_params or {})}


class SubmissionService:
    """Public read and submit operations on active surveys.

    Args:
        sender: optional response-copy sender; when ``None``, copy requests
            are accepted but no e-mail goes out (logged as a warning)
    """

    def __init__(self, sender: ResponseCopySender | None = None) -> None:
        self._sender = sender
        self._surveys = SurveyRepository()
        self._entries = DataEntryRepository()
        self._responses = ResponseRepository()

    async def _load_open_survey(self, db: AsyncSession, survey_id: str) -> Survey:
        survey = await self._surveys.get_by_id(db, survey_id)
        if survey is None or not is_open_for_responses(survey.status):
            raise NotFoundError(SURVEY_NOT_FOUND)
        return survey

    async def get_public_survey(
        self, db: AsyncSession, survey_id: str
    ) -> PublicSurveyView:
        """Return an active survey with its selectable data entries."""
        survey = await self._load_open_survey(db, survey_id)
        entries = await self._entries.list_by_survey(db, survey_id)
        return PublicSurveyView(
            id=survey.id,
            title=survey.title,
            description=survey.description,
            status=survey.status,
            questions=parse_questions(survey.questions),
            params=parse_params(survey.params),
            data_entries=[
                PublicDataEntry(id=e.id, values=dict(e.values or {}), label=e.label)
                for e in entries
            ],
        )

    async def submit(
        self, db: AsyncSession, survey_id: str, body: SubmitAnswersRequest
    ) -> tuple[SubmitResult, ResponseCopy | None]:
        """Validate and store one response.

        Returns the result plus the response copy to e-mail, if one was
        requested.  Nothing is sent here: the copy must only go out after
        the caller's transaction commits.
        """
        check_copy_request(body)

        survey = await self._load_open_survey(db, survey_id)
        questions = parse_questions(survey.questions)
        ensure_required_answers(questions, body.answers)

        params = body.params
        if body.data_entry_id:
            entry = await self._entries.get_by_id(db, body.data_entry_id)
            if entry is None or entry.survey_id != survey_id:
                raise NotFoundError(DATA_ENTRY_NOT_FOUND)
            params = merge_params(entry.values or {}, body.params)

        await self._responses.create(
            db,
            survey_id=survey_id,
            answers=body.answers,
            params=params,
            data_entry_id=body.data_entry_id or None,
        )
        logger.info(
            "Response stored for survey %s (data_entry=%s)",
            survey_id, body.data_entry_id,
        )

        copy = None
        if body.send_copy and body.respondent_email:
            copy = ResponseCopy(
                to=body.respondent_email,
                survey_title=survey.title,
                questions=questions,
                answers=body.answers,
            )

        return SubmitResult(success=True, survey_id=survey_id), copy

    async def send_copy(self, copy: ResponseCopy) -> None:
        """Send ``copy``; delivery errors are logged and never raised."""
        if self._sender is None:
            logger.warning("Response copy requested but no mail sender is configured")
            return
        try:
            await self._sender.send(copy)
        except Exception:
            logger.exception("Failed to send response copy email")

"""Respondent endpoints — read an active survey and submit answers.

No authentication.  Draft, completed and unknown surveys all answer 404
with the same body.
"""

from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from survey_engine.models.requests import SubmitAnswersRequest
from survey_engine.models.views import PublicSurveyView, SubmitResult
from survey_engine.submission import SubmissionService

from survey_server.dependencies import get_db, get_submission_service

router = APIRouter(prefix="/survey", tags=["survey"])


@router.get("/{survey_id}")
async def get_survey(
    survey_id: str,
    db: AsyncSession = Depends(get_db, scope="function"),
    service: SubmissionService = Depends(get_submission_service),
) -> PublicSurveyView:
    """Return an active survey with the data entries respondents can pick."""
    return await service.get_public_survey(db, survey_id)


@router.post("/{survey_id}/submit")
async def submit_answers(
    survey_id: str,
    body: SubmitAnswersRequest,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db, scope="function"),
    service: SubmissionService = Depends(get_submission_service),
) -> SubmitResult:
    """Validate and store one response.

    Returns 400 listing every unanswered required question, 404 for an
    unknown/inactive survey or a data entry from another survey.  When
    ``sendCopy`` is set the e-mail goes out as a background task, which
    only runs once ``get_db`` has committed; its failure never changes
    this response.
    """
    result, copy = await service.submit(db, survey_id, body)
    if copy is not None:
        background_tasks.add_task(service.send_copy, copy)
    return result

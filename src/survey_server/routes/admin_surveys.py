"""Admin survey endpoints — session-cookie protected survey management.

Every route requires a valid admin session (uniform 401 otherwise).
Questions are frozen once a survey leaves ``draft``; params are not.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from survey_engine.data_entries import DataEntryService
from survey_engine.models.requests import (
    DataEntryRequest,
    SurveyContentRequest,
    UpdateSurveyStatusRequest,
)
from survey_engine.models.views import (
    AdminSurveyView,
    DataEntryListView,
    DataEntryView,
    SuccessResult,
    SurveyListView,
    SurveyResponsesView,
)
from survey_engine.surveys import SurveyService

from survey_server.config import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from survey_server.dependencies import (
    get_data_entry_service,
    get_db,
    get_survey_service,
    require_admin,
)

router = APIRouter(
    prefix="/admin/surveys",
    tags=["admin-surveys"],
    dependencies=[Depends(require_admin)],
)


# ------------------------------------------------------------------
# Surveys
# ------------------------------------------------------------------

@router.get("")
async def list_surveys(
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db, scope="function"),
    service: SurveyService = Depends(get_survey_service),
) -> SurveyListView:
    """List surveys, newest first."""
    return await service.list_surveys(db, limit=limit, offset=offset)


@router.post("", status_code=201)
async def create_survey(
    body: SurveyContentRequest,
    db: AsyncSession = Depends(get_db, scope="function"),
    service: SurveyService = Depends(get_survey_service),
) -> AdminSurveyView:
    """Create a survey in ``draft``."""
    return await service.create_survey(db, body)


@router.get("/{survey_id}")
async def get_survey(
    survey_id: str,
    db: AsyncSession = Depends(get_db, scope="function"),
    service: SurveyService = Depends(get_survey_service),
) -> AdminSurveyView:
    """Survey detail with data entries and their response counts."""
    return await service.get_survey(db, survey_id)


@router.put("/{survey_id}")
async def update_survey(
    survey_id: str,
    body: SurveyContentRequest,
    db: AsyncSession = Depends(get_db, scope="function"),
    service: SurveyService = Depends(get_survey_service),
) -> AdminSurveyView:
    """Replace survey content.

    Returns 400 if the questions differ from the stored ones and the
    survey is active or completed.
    """
    return await service.update_survey(db, survey_id, body)


@router.patch("/{survey_id}")
async def update_survey_status(
    survey_id: str,
    body: UpdateSurveyStatusRequest,
    db: AsyncSession = Depends(get_db, scope="function"),
    service: SurveyService = Depends(get_survey_service),
) -> AdminSurveyView:
    return await service.update_status(db, survey_id, body.status)


@router.delete("/{survey_id}")
async def delete_survey(
    survey_id: str,
    db: AsyncSession = Depends(get_db, scope="function"),
    service: SurveyService = Depends(get_survey_service),
) -> SuccessResult:
    """Delete a draft or active survey; completed surveys are kept."""
    await service.delete_survey(db, survey_id)
    return SuccessResult()


@router.get("/{survey_id}/responses")
async def list_responses(
    survey_id: str,
    db: AsyncSession = Depends(get_db, scope="function"),
    service: SurveyService = Depends(get_survey_service),
) -> SurveyResponsesView:
    return await service.list_responses(db, survey_id)


# ------------------------------------------------------------------
# Data entries
# ------------------------------------------------------------------

@router.get("/{survey_id}/data-entries")
async def list_data_entries(
    survey_id: str,
    db: AsyncSession = Depends(get_db, scope="function"),
    service: DataEntryService = Depends(get_data_entry_service),
) -> DataEntryListView:
    return await service.list_entries(db, survey_id)


@router.post("/{survey_id}/data-entries", status_code=201)
async def create_data_entry(
    survey_id: str,
    body: DataEntryRequest,
    db: AsyncSession = Depends(get_db, scope="function"),
    service: DataEntryService = Depends(get_data_entry_service),
) -> DataEntryView:
    """Create an entry; 400 if a values key is not a declared param."""
    return await service.create_entry(db, survey_id, body)


@router.put("/{survey_id}/data-entries/{entry_id}")
async def update_data_entry(
    survey_id: str,
    entry_id: str,
    body: DataEntryRequest,
    db: AsyncSession = Depends(get_db, scope="function"),
    service: DataEntryService = Depends(get_data_entry_service),
) -> DataEntryView:
    return await service.update_entry(db, survey_id, entry_id, body)


@router.delete("/{survey_id}/data-entries/{entry_id}")
async def delete_data_entry(
    survey_id: str,
    entry_id: str,
    db: AsyncSession = Depends(get_db, scope="function"),
    service: DataEntryService = Depends(get_data_entry_service),
) -> SuccessResult:
    """Delete an entry; 400 while any response references it."""
    await service.delete_entry(db, survey_id, entry_id)
    return SuccessResult()

"""Data API endpoints — machine clients authenticated by ``X-API-Key``.

Lets an external system create and publish surveys, pre-register data
entries (e.g. one per event date) and bulk-import responses.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from survey_db.models.enums import SurveyStatus
from survey_engine.data_entries import DataEntryService
from survey_engine.models.requests import (
    BulkResponsesRequest,
    DataCreateSurveyRequest,
    DataEntryRequest,
    SurveyContentRequest,
)
from survey_engine.models.views import (
    AdminSurveyView,
    BulkSubmitResult,
    DataEntryListView,
    DataEntryView,
    SuccessResult,
    SurveyListView,
)
from survey_engine.surveys import SurveyService

from survey_server.config import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT
from survey_server.dependencies import (
    get_data_entry_service,
    get_db,
    get_survey_service,
    require_api_key,
)

router = APIRouter(
    prefix="/data/surveys",
    tags=["data"],
    dependencies=[Depends(require_api_key)],
)


@router.post("", status_code=201)
async def create_survey(
    body: DataCreateSurveyRequest,
    db: AsyncSession = Depends(get_db, scope="function"),
    service: SurveyService = Depends(get_survey_service),
) -> AdminSurveyView:
    """Create a survey; ``status`` may be ``draft`` (default) or ``active``."""
    status = SurveyStatus(body.status) if body.status else SurveyStatus.DRAFT
    return await service.create_survey(db, body, status=status)


@router.get("")
async def list_surveys(
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db, scope="function"),
    service: SurveyService = Depends(get_survey_service),
) -> SurveyListView:
    return await service.list_surveys(db, limit=limit, offset=offset)


@router.get("/{survey_id}")
async def get_survey(
    survey_id: str,
    db: AsyncSession = Depends(get_db, scope="function"),
    service: SurveyService = Depends(get_survey_service),
) -> AdminSurveyView:
    return await service.get_survey(db, survey_id)


@router.put("/{survey_id}")
async def update_survey(
    survey_id: str,
    body: SurveyContentRequest,
    db: AsyncSession = Depends(get_db, scope="function"),
    service: SurveyService = Depends(get_survey_service),
) -> AdminSurveyView:
    return await service.update_survey(db, survey_id, body)


@router.post("/{survey_id}/responses", status_code=201)
async def import_responses(
    survey_id: str,
    body: BulkResponsesRequest,
    db: AsyncSession = Depends(get_db, scope="function"),
    service: SurveyService = Depends(get_survey_service),
) -> BulkSubmitResult:
    """Bulk-insert responses into an active survey (400 when not active)."""
    return await service.import_responses(db, survey_id, body)


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
    await service.delete_entry(db, survey_id, entry_id)
    return SuccessResult()

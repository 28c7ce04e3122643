"""Response models — what API callers see.

Decoupled from the ORM rows in ``survey_db`` so callers never see database
internals.  ``from_row`` helpers parse the untyped JSON columns on the way
out, so a corrupted column shows up as an empty list, not a 500.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from survey_db.models.survey import Survey, SurveyDataEntry, SurveyResponse
from survey_engine.models.question import (
    CamelModel,
    Question,
    SurveyParam,
    parse_params,
    parse_questions,
)
from survey_engine.models.requests import Answers


class SurveySummary(CamelModel):
    """One row of a survey listing."""

    id: str
    title: str
    status: str
    created_at: datetime


class SurveyListView(CamelModel):
    surveys: List[SurveySummary]


class DataEntryView(CamelModel):
    """A data entry with its derived response count."""

    id: str
    survey_id: str
    values: Dict[str, str]
    label: Optional[str] = None
    response_count: int
    created_at: datetime

    @classmethod
    def from_row(cls, entry: SurveyDataEntry, response_count: int) -> "DataEntryView":
        return cls(
            id=entry.id,
            survey_id=entry.survey_id,
            values=dict(entry.values or {}),
            label=entry.label,
            response_count=response_count,
            created_at=entry.created_at,
        )


class DataEntryListView(CamelModel):
    data_entries: List[DataEntryView]


class AdminSurveyView(CamelModel):
    """Full survey as seen by administrators and the data API."""

    id: str
    title: str
    description: Optional[str] = None
    status: str
    created_at: datetime
    questions: List[Question]
    params: List[SurveyParam]
    data_entries: Optional[List[DataEntryView]] = None

    @classmethod
    def from_row(
        cls,
        survey: Survey,
        data_entries: list[DataEntryView] | None = None,
    ) -> "AdminSurveyView":
        return cls(
            id=survey.id,
            title=survey.title,
            description=survey.description,
            status=survey.status,
            created_at=survey.created_at,
            questions=parse_questions(survey.questions),
            params=parse_params(survey.params),
            data_entries=data_entries,
        )


class PublicDataEntry(CamelModel):
    """A data entry as offered to respondents."""

    id: str
    values: Dict[str, str]
    label: Optional[str] = None


class PublicSurveyView(CamelModel):
    """An active survey as shown to respondents."""

    id: str
    title: str
    description: Optional[str] = None
    status: str
    questions: List[Question]
    params: List[SurveyParam]
    data_entries: List[PublicDataEntry]


class SubmitResult(CamelModel):
    success: bool = True
    survey_id: str


class ResponseView(CamelModel):
    id: str
    answers: Answers
    params: Dict[str, str]
    data_entry_id: Optional[str] = None

    @classmethod
    def from_row(cls, response: SurveyResponse) -> "ResponseView":
        return cls(
            id=response.id,
            answers=response.answers,
            params=response.params or {},
            data_entry_id=response.data_entry_id,
        )


class SurveyResponsesView(CamelModel):
    survey_id: str
    responses: List[ResponseView]


class BulkSubmitResult(CamelModel):
    count: int


class SuccessResult(CamelModel):
    success: bool = True


class MessageResult(CamelModel):
    message: str


class AdminIdentity(CamelModel):
    """The signed-in administrator attached to admin requests."""

    id: str
    email: str

"""Typed request payloads accepted by the engine.

FastAPI validates request bodies into these models before a handler runs, so
the engine only ever sees post-validation shapes.  Field names are snake_case
in Python and camelCase on the wire (``dataEntryId``, ``sendCopy``).
"""

from __future__ import annotations

from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import Field

from survey_db.models.enums import SurveyStatus
from survey_engine.models.question import CamelModel, Question, SurveyParam

# Same loose shape check used for sign-in e-mails; delivery is the real test.
EmailLike = Annotated[str, Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$", max_length=255)]

Answer = Union[str, List[str]]
Answers = Dict[str, Answer]
ParamValues = Dict[str, str]


class SurveyContentRequest(CamelModel):
    """Body for creating a survey or replacing its content."""

    title: str = Field(min_length=1)
    description: Optional[str] = Field(default=None, max_length=10_000)
    questions: List[Question]
    params: Optional[List[SurveyParam]] = None


class DataCreateSurveyRequest(SurveyContentRequest):
    """Body for POST /data/surveys — may publish immediately."""

    status: Optional[Literal["draft", "active"]] = None


class UpdateSurveyStatusRequest(CamelModel):
    """Body for PATCH /admin/surveys/{id}."""

    status: SurveyStatus


class DataEntryRequest(CamelModel):
    """Body for creating or updating a data entry."""

    values: ParamValues
    label: Optional[str] = Field(default=None, max_length=200)


class SubmitAnswersRequest(CamelModel):
    """Body for POST /survey/{id}/submit."""

    answers: Answers
    params: Optional[ParamValues] = None
    data_entry_id: Optional[str] = None
    send_copy: Optional[bool] = None
    respondent_email: Optional[EmailLike] = None


class BulkResponseItem(CamelModel):
    """One response inside a bulk import."""

    answers: Answers
    params: Optional[ParamValues] = None
    data_entry_id: Optional[str] = None


class BulkResponsesRequest(CamelModel):
    """Body for POST /data/surveys/{id}/responses."""

    responses: List[BulkResponseItem] = Field(min_length=1)


class LoginRequest(CamelModel):
    """Body for POST /admin/auth/login."""

    email: EmailLike
    password: str = Field(min_length=1)

"""Public model re-exports for survey_engine.

Consumers should import from ``survey_engine.models`` rather than reaching
into sub-modules directly.
"""

# --- Questions / params ---
from survey_engine.models.question import (
    BaseQuestion,
    CheckboxQuestion,
    Question,
    RadioQuestion,
    SurveyParam,
    TextQuestion,
    dump_params,
    dump_questions,
    parse_params,
    parse_questions,
)

# --- Requests ---
from survey_engine.models.requests import (
    BulkResponseItem,
    BulkResponsesRequest,
    DataCreateSurveyRequest,
    DataEntryRequest,
    LoginRequest,
    SubmitAnswersRequest,
    SurveyContentRequest,
    UpdateSurveyStatusRequest,
)

# --- Views ---
from survey_engine.models.views import (
    AdminIdentity,
    AdminSurveyView,
    BulkSubmitResult,
    DataEntryListView,
    DataEntryView,
    MessageResult,
    PublicDataEntry,
    PublicSurveyView,
    ResponseView,
    SubmitResult,
    SuccessResult,
    SurveyListView,
    SurveyResponsesView,
    SurveySummary,
)

__all__ = [
    # Questions / params
    "BaseQuestion",
    "CheckboxQuestion",
    "Question",
    "RadioQuestion",
    "SurveyParam",
    "TextQuestion",
    "dump_params",
    "dump_questions",
    "parse_params",
    "parse_questions",
    # Requests
    "BulkResponseItem",
    "BulkResponsesRequest",
    "DataCreateSurveyRequest",
    "DataEntryRequest",
    "LoginRequest",
    "SubmitAnswersRequest",
    "SurveyContentRequest",
    "UpdateSurveyStatusRequest",
    # Views
    "AdminIdentity",
    "AdminSurveyView",
    "BulkSubmitResult",
    "DataEntryListView",
    "DataEntryView",
    "MessageResult",
    "PublicDataEntry",
    "PublicSurveyView",
    "ResponseView",
    "SubmitResult",
    "SuccessResult",
    "SurveyListView",
    "SurveyResponsesView",
    "SurveySummary",
]

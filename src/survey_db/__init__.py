"""survey_db — PostgreSQL persistence layer for surveys and responses.

Provides the ORM models, async engine helpers, and repositories used by the
survey engine and the FastAPI server.  Repositories never commit; the caller
owns the transaction boundary.
"""

from survey_db.engine import build_engine, build_session_factory
from survey_db.models.enums import SurveyStatus
from survey_db.models.survey import (
    AdminSession,
    AdminUser,
    Survey,
    SurveyDataEntry,
    SurveyResponse,
)
from survey_db.repository import (
    AdminRepository,
    DataEntryRepository,
    ResponseRepository,
    SurveyRepository,
)

__all__ = [
    "AdminRepository",
    "AdminSession",
    "AdminUser",
    "DataEntryRepository",
    "ResponseRepository",
    "Survey",
    "SurveyDataEntry",
    "SurveyRepository",
    "SurveyResponse",
    "SurveyStatus",
    "build_engine",
    "build_session_factory",
]

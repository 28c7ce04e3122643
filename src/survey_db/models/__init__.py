"""ORM models for survey_db."""

from survey_db.models.base import Base
from survey_db.models.enums import SurveyStatus
from survey_db.models.survey import (
    AdminSession,
    AdminUser,
    Survey,
    SurveyDataEntry,
    SurveyResponse,
)

__all__ = [
    "AdminSession",
    "AdminUser",
    "Base",
    "Survey",
    "SurveyDataEntry",
    "SurveyResponse",
    "SurveyStatus",
]

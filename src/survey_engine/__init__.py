"""survey_engine — survey lifecycle rules and response validation.

Typical usage::

    from survey_engine import SubmissionService, SurveyService

    surveys = SurveyService()
    view = await surveys.create_survey(db, body)

    submissions = SubmissionService(sender=ResendMailer(api_key, sender))
    result, copy = await submissions.submit(db, view.id, answers_body)
    if copy is not None:
        await submissions.send_copy(copy)  # after commit

All service methods take an explicit ``AsyncSession``; none of them commit.
"""

from survey_engine.data_entries import DataEntryService, validate_data_entry_keys
from survey_engine.errors import (
    MisconfigurationError,
    NotFoundError,
    PolicyViolationError,
    SurveyError,
    UnauthorizedError,
    ValidationError,
)
from survey_engine.interfaces import ResponseCopy, ResponseCopySender
from survey_engine.mailer import ResendMailer, ResponseCopyRenderer
from survey_engine.passwords import hash_password, verify_password
from survey_engine.submission import SubmissionService, find_missing_required_answers
from survey_engine.surveys import SurveyService

__all__ = [
    "DataEntryService",
    "MisconfigurationError",
    "NotFoundError",
    "PolicyViolationError",
    "ResendMailer",
    "ResponseCopy",
    "ResponseCopyRenderer",
    "ResponseCopySender",
    "SubmissionService",
    "SurveyError",
    "SurveyService",
    "UnauthorizedError",
    "ValidationError",
    "find_missing_required_answers",
    "hash_password",
    "validate_data_entry_keys",
    "verify_password",
]

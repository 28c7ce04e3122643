"""Database-level enumerations for surveys."""

import enum


class SurveyStatus(str, enum.Enum):
    """Lifecycle states for a survey.

    Usual flow is draft -> active -> completed, but the status-only update
    accepts any value over any other.  What each state gates:
        draft:      questions editable, hidden from respondents
        active:     questions frozen, accepts responses
        completed:  questions frozen, hidden from respondents, not deletable
    """

    DRAFT = "draft"
    ACTIVE = "active"
    COMPLETED = "completed"

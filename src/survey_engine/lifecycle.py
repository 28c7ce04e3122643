"""Survey status rules — which mutations each lifecycle state allows.

There is no enforced transition graph: the status-only update may move a
survey between any two states.  What the status controls is mutation:

    ============  =================  ==========  ===================
    status        questions editable  deletable   visible to public
    ============  =================  ==========  ===================
    draft         yes                yes         no
    active        no                 yes         yes
    completed     no                 no          no
    ============  =================  ==========  ===================

Params stay editable in every state.
"""

from __future__ import annotations

import json
from typing import Any

from survey_db.models.enums import SurveyStatus
from survey_engine.errors import PolicyViolationError
from survey_engine.models.question import Question, dump_questions, parse_questions

QUESTIONS_FROZEN_MESSAGE = "Cannot modify questions for active or completed survey"
COMPLETED_NOT_DELETABLE_MESSAGE = "Completed survey cannot be deleted"


def serialize_questions(questions: list[Question]) -> str:
    """Serialize questions in canonical form for equality checks."""
    return json.dumps(dump_questions(questions), ensure_ascii=False)


def ensure_questions_mutable(
    status: str, existing_raw: Any, new_questions: list[Question]
) -> None:
    """Reject a questions change on a survey that is no longer a draft.

    Both sides go through the same parse/dump step, so key order within a
    question object and omitted defaults do not count as changes.  Anything
    else that changes the serialized list (order of questions, option text,
    a flipped ``required``) does.
    """
    if status == SurveyStatus.DRAFT.value:
        return
    existing = serialize_questions(parse_questions(existing_raw))
    incoming = serialize_questions(new_questions)
    if existing != incoming:
        raise PolicyViolationError(QUESTIONS_FROZEN_MESSAGE)


def ensure_deletable(status: str) -> None:
    if status == SurveyStatus.COMPLETED.value:
        raise PolicyViolationError(COMPLETED_NOT_DELETABLE_MESSAGE)


def is_open_for_responses(status: str) -> bool:
    """Only active surveys are readable and answerable by respondents."""
    return status == SurveyStatus.ACTIVE.value

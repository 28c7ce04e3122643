"""Abstract interfaces for side effects the engine triggers.

The engine only depends on these contracts; concrete implementations are
chosen by the server wiring (``survey_engine.mailer.ResendMailer`` in
production, in-memory fakes in tests).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from survey_engine.models.question import Question
from survey_engine.models.requests import Answers


@dataclass(frozen=True)
class ResponseCopy:
    """Everything needed to e-mail a respondent a copy of their answers."""

    to: str
    survey_title: str
    questions: list[Question] = field(default_factory=list)
    answers: Answers = field(default_factory=dict)


class ResponseCopySender(ABC):
    """Interface for delivering a response copy to the respondent.

    ``send`` raises on delivery failure.  Callers that must not fail
    (the submission path) run it in the background and only log errors.
    """

    @abstractmethod
    async def send(self, copy: ResponseCopy) -> None:
        """Render and deliver ``copy``."""
        ...

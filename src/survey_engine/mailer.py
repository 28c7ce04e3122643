"""Response-copy e-mail — jinja2 rendering and delivery through Resend.

``ResponseCopyRenderer`` turns a survey's questions and a respondent's
answers into an HTML summary (one numbered row per question).
``ResendMailer`` posts the rendered message to the Resend REST API.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import httpx
import jinja2

from survey_engine.interfaces import ResponseCopy, ResponseCopySender
from survey_engine.models.question import Question
from survey_engine.models.requests import Answers

logger = logging.getLogger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"

# Separator for multi-choice answers in the rendered summary
LIST_ANSWER_SEPARATOR = "、"

SUBJECT_PREFIX = "【回答コピー】"


def format_answer(raw: Any) -> str:
    """Render one stored answer as display text; missing answers are empty."""
    if raw is None:
        return ""
    if isinstance(raw, list):
        return LIST_ANSWER_SEPARATOR.join(str(v) for v in raw)
    return str(raw)


def build_subject(survey_title: str) -> str:
    return f"{SUBJECT_PREFIX}{survey_title}"


class ResponseCopyRenderer:
    """Jinja2-based HTML renderer for response copies.

    Args:
        template_dir: optional override for the template directory.
            Defaults to ``templates/`` sibling of this module.
    """

    TEMPLATE_NAME = "response_copy.html.jinja2"

    def __init__(self, template_dir: Path | None = None) -> None:
        if template_dir is None:
            template_dir = Path(__file__).parent / "templates"
        self._env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            autoescape=jinja2.select_autoescape(["html", "jinja2"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(
        self, survey_title: str, questions: list[Question], answers: Answers
    ) -> str:
        rows = [
            {
                "number": f"Q{index}",
                "label": question.label,
                "value": format_answer(answers.get(question.id)),
            }
            for index, question in enumerate(questions, start=1)
        ]
        template = self._env.get_template(self.TEMPLATE_NAME)
        return template.render(
            subject=build_subject(survey_title),
            rows=rows,
        )


class ResendMailer(ResponseCopySender):
    """Sends response copies through the Resend HTTP API.

    Args:
        api_key: Resend API key (Bearer token)
        sender: the ``from`` address, e.g. ``"Survey <noreply@example.com>"``
        renderer: optional renderer override
        timeout: per-request timeout in seconds
    """

    def __init__(
        self,
        api_key: str,
        sender: str,
        renderer: ResponseCopyRenderer | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._api_key = api_key
        self._sender = sender
        self._renderer = renderer or ResponseCopyRenderer()
        self._timeout = timeout

    def build_payload(self, copy: ResponseCopy) -> dict[str, Any]:
        """Build the JSON body for the Resend ``/emails`` endpoint."""
        return {
            "from": self._sender,
            "to": [copy.to],
            "subject": build_subject(copy.survey_title),
            "html": self._renderer.render(
                copy.survey_title, copy.questions, copy.answers
            ),
        }

    async def send(self, copy: ResponseCopy) -> None:
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            response = await client.post(
                RESEND_API_URL,
                json=self.build_payload(copy),
                headers={"Authorization": f"Bearer {self._api_key}"},
            )
            response.raise_for_status()
        logger.info("Response copy sent for survey %r", copy.survey_title)

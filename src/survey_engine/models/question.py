"""Question and survey-param models.

Questions come in three variants, discriminated by ``type``:

    - text:     free-form answer (a string)
    - radio:    pick one of ``options`` (a string)
    - checkbox: pick any of ``options`` (a list of strings)

``radio`` and ``checkbox`` may set ``allowOther`` so the respondent can type
a value that is not in ``options``.

Stored survey rows keep questions and params in untyped JSONB columns.
``parse_questions`` / ``parse_params`` are total: anything that does not
validate as a whole list comes back as ``[]``.  A single bad item discards
the whole list rather than being skipped.  Parsing is strict, so a stored
``"required": "true"`` is malformed rather than coerced to ``True``.
"""

from __future__ import annotations

from typing import Annotated, Any, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

PARAM_KEY_PATTERN = r"^[a-zA-Z0-9_-]+$"


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase keys (``allowOther``)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Question variants ---

class BaseQuestion(CamelModel):
    """Fields shared by all question types."""

    id: str
    label: str
    required: bool = False


class TextQuestion(BaseQuestion):
    """Free-form text answer."""

    type: Literal["text"] = "text"


class RadioQuestion(BaseQuestion):
    """Single choice among ``options``."""

    type: Literal["radio"] = "radio"
    options: List[str]
    allow_other: bool = False


class CheckboxQuestion(BaseQuestion):
    """Multiple choice among ``options``; the answer is a list."""

    type: Literal["checkbox"] = "checkbox"
    options: List[str]
    allow_other: bool = False


Question = Annotated[
    Union[TextQuestion, RadioQuestion, CheckboxQuestion],
    Field(discriminator="type"),
]


# --- Survey params ---

class SurveyParam(CamelModel):
    """A metadata key a survey accepts alongside its responses."""

    key: str = Field(min_length=1, pattern=PARAM_KEY_PATTERN)
    label: str = Field(min_length=1)
    visible: bool


_questions_adapter = TypeAdapter(List[Question])
_params_adapter = TypeAdapter(List[SurveyParam])


def parse_questions(raw: Any) -> list[Question]:
    """Parse a stored questions column; malformed data yields ``[]``."""
    try:
        return _questions_adapter.validate_python(raw, strict=True)
    except PydanticValidationError:
        return []


def parse_params(raw: Any) -> list[SurveyParam]:
    """Parse a stored params column; malformed data yields ``[]``."""
    try:
        return _params_adapter.validate_python(raw, strict=True)
    except PydanticValidationError:
        return []


def dump_questions(questions: list[Question]) -> list[dict[str, Any]]:
    """Canonical JSON-ready form: camelCase keys, defaults filled in."""
    return [q.model_dump(by_alias=True) for q in questions]


def dump_params(params: list[SurveyParam]) -> list[dict[str, Any]]:
    return [p.model_dump(by_alias=True) for p in params]

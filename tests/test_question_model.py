"""Tests for the question/param models and their total parsers."""

import pytest
from pydantic import ValidationError

from conftest import SAMPLE_PARAMS, SAMPLE_QUESTIONS
from survey_engine.models.question import (
    CheckboxQuestion,
    RadioQuestion,
    SurveyParam,
    TextQuestion,
    dump_questions,
    parse_params,
    parse_questions,
)
from survey_engine.models.requests import SubmitAnswersRequest, SurveyContentRequest


class TestParseQuestions:
    def test_discriminates_variants(self):
        questions = parse_questions(SAMPLE_QUESTIONS)
        assert [type(q) for q in questions] == [
            TextQuestion, CheckboxQuestion, RadioQuestion,
        ]

    def test_defaults_filled(self):
        q = parse_questions([{"id": "q1", "type": "radio", "label": "L", "options": ["a"]}])[0]
        assert q.required is False
        assert q.allow_other is False

    def test_camel_case_allow_other(self):
        q = parse_questions([{
            "id": "q1", "type": "checkbox", "label": "L",
            "options": ["a"], "allowOther": True,
        }])[0]
        assert q.allow_other is True
        assert dump_questions([q])[0]["allowOther"] is True

    def test_unknown_type_discards_whole_list(self):
        raw = SAMPLE_QUESTIONS + [{"id": "q9", "type": "slider", "label": "S"}]
        assert parse_questions(raw) == []

    def test_choice_without_options_is_malformed(self):
        assert parse_questions([{"id": "q1", "type": "radio", "label": "L"}]) == []

    @pytest.mark.parametrize("raw", [None, "not a list", {"id": "q1"}, 42])
    def test_non_list_yields_empty(self, raw):
        assert parse_questions(raw) == []

    def test_empty_list(self):
        assert parse_questions([]) == []

    @pytest.mark.parametrize("raw", [
        {"id": "q1", "type": "text", "label": "L", "required": "true"},
        {"id": "q1", "type": "text", "label": "L", "required": 1},
        {"id": "q1", "type": "radio", "label": "L", "options": ["a"], "allowOther": "yes"},
        {"id": "q1", "type": "checkbox", "label": "L", "options": ["a"], "allowOther": 1},
        {"id": "q1", "type": "radio", "label": "L", "options": ["a", 2]},
        {"id": 7, "type": "text", "label": "L"},
    ])
    def test_mistyped_field_is_not_coerced(self, raw):
        assert parse_questions(SAMPLE_QUESTIONS + [raw]) == []


class TestParseParams:
    def test_valid(self):
        params = parse_params(SAMPLE_PARAMS)
        assert [p.key for p in params] == ["event", "venue"]

    @pytest.mark.parametrize("key", ["", "has space", "dot.key", "日本"])
    def test_invalid_key_discards_list(self, key):
        raw = SAMPLE_PARAMS + [{"key": key, "label": "X", "visible": True}]
        assert parse_params(raw) == []

    def test_missing_visible_is_malformed(self):
        assert parse_params([{"key": "event", "label": "Event"}]) == []

    @pytest.mark.parametrize("visible", ["yes", "false", 1, 0, None])
    def test_mistyped_visible_is_not_coerced(self, visible):
        raw = SAMPLE_PARAMS + [{"key": "room", "label": "Room", "visible": visible}]
        assert parse_params(raw) == []

    def test_key_pattern_allows_dash_and_underscore(self):
        assert SurveyParam(key="event_date-2", label="Date", visible=False).key == "event_date-2"


class TestRequestModels:
    def test_content_requires_title(self):
        with pytest.raises(ValidationError):
            SurveyContentRequest.model_validate({"title": "", "questions": []})

    def test_content_rejects_bad_question(self):
        with pytest.raises(ValidationError):
            SurveyContentRequest.model_validate({
                "title": "T",
                "questions": [{"id": "q1", "type": "slider", "label": "L"}],
            })

    def test_description_length_limit(self):
        with pytest.raises(ValidationError):
            SurveyContentRequest.model_validate({
                "title": "T", "description": "x" * 10_001, "questions": [],
            })

    def test_submit_accepts_camel_case(self):
        body = SubmitAnswersRequest.model_validate({
            "answers": {"q1": "x", "q2": ["A"]},
            "dataEntryId": "e1",
            "sendCopy": True,
            "respondentEmail": "r@example.com",
        })
        assert body.data_entry_id == "e1"
        assert body.send_copy is True
        assert body.answers["q2"] == ["A"]

    def test_submit_rejects_malformed_email(self):
        with pytest.raises(ValidationError):
            SubmitAnswersRequest.model_validate({
                "answers": {}, "respondentEmail": "not-an-email",
            })

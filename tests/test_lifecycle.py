"""Tests for status-driven mutation rules (questions freeze, delete guard)."""

import pytest

from conftest import SAMPLE_QUESTIONS
from survey_engine.errors import PolicyViolationError
from survey_engine.lifecycle import (
    COMPLETED_NOT_DELETABLE_MESSAGE,
    QUESTIONS_FROZEN_MESSAGE,
    ensure_deletable,
    ensure_questions_mutable,
    is_open_for_responses,
)
from survey_engine.models.question import parse_questions


def _changed_label():
    raw = [dict(q) for q in SAMPLE_QUESTIONS]
    raw[0]["label"] = "Full name"
    return parse_questions(raw)


class TestQuestionsMutable:
    def test_draft_accepts_any_change(self):
        ensure_questions_mutable("draft", SAMPLE_QUESTIONS, _changed_label())

    @pytest.mark.parametrize("status", ["active", "completed"])
    def test_frozen_rejects_change(self, status):
        with pytest.raises(PolicyViolationError) as exc_info:
            ensure_questions_mutable(status, SAMPLE_QUESTIONS, _changed_label())
        assert exc_info.value.message == QUESTIONS_FROZEN_MESSAGE
        assert exc_info.value.status_code == 400

    @pytest.mark.parametrize("status", ["active", "completed"])
    def test_frozen_accepts_identical(self, status):
        ensure_questions_mutable(status, SAMPLE_QUESTIONS, parse_questions(SAMPLE_QUESTIONS))

    def test_key_order_is_not_a_change(self):
        reordered = [dict(reversed(list(q.items()))) for q in SAMPLE_QUESTIONS]
        ensure_questions_mutable("active", SAMPLE_QUESTIONS, parse_questions(reordered))

    def test_omitted_defaults_are_not_a_change(self):
        stored = [{"id": "q1", "type": "text", "label": "Name", "required": False}]
        incoming = parse_questions([{"id": "q1", "type": "text", "label": "Name"}])
        ensure_questions_mutable("active", stored, incoming)

    def test_question_order_is_a_change(self):
        swapped = parse_questions(list(reversed(SAMPLE_QUESTIONS)))
        with pytest.raises(PolicyViolationError):
            ensure_questions_mutable("active", SAMPLE_QUESTIONS, swapped)

    def test_flipping_required_is_a_change(self):
        raw = [dict(q) for q in SAMPLE_QUESTIONS]
        raw[2]["required"] = True
        with pytest.raises(PolicyViolationError):
            ensure_questions_mutable("completed", SAMPLE_QUESTIONS, parse_questions(raw))


class TestDeletable:
    @pytest.mark.parametrize("status", ["draft", "active"])
    def test_deletable(self, status):
        ensure_deletable(status)

    def test_completed_not_deletable(self):
        with pytest.raises(PolicyViolationError) as exc_info:
            ensure_deletable("completed")
        assert exc_info.value.message == COMPLETED_NOT_DELETABLE_MESSAGE


class TestOpenForResponses:
    @pytest.mark.parametrize(
        "status, expected",
        [("draft", False), ("active", True), ("completed", False)],
    )
    def test_only_active_is_open(self, status, expected):
        assert is_open_for_responses(status) is expected

"""DataEntryService tests with the in-memory store.

Covers key validation against declared params, survey scoping, derived
response counts, and the referenced-entry delete guard.
"""

import pytest

from conftest import SAMPLE_PARAMS, SAMPLE_QUESTIONS
from helpers.mock_store import install_mock_store
from survey_engine.data_entries import (
    DataEntryService,
    ensure_entry_deletable,
    validate_data_entry_keys,
)
from survey_engine.errors import NotFoundError, PolicyViolationError, ValidationError
from survey_engine.models.requests import DataEntryRequest


@pytest.fixture
def service(store):
    return install_mock_store(DataEntryService(), store)


@pytest.fixture
def survey(store):
    return store.add_survey(
        status="active", questions=SAMPLE_QUESTIONS, params=SAMPLE_PARAMS,
    )


# =====================================================================
# Pure helpers
# =====================================================================


class TestValidateKeys:
    def test_declared_keys_pass(self):
        validate_data_entry_keys({"event": "Tokyo", "venue": "Hall A"}, SAMPLE_PARAMS)

    def test_empty_values_pass(self):
        validate_data_entry_keys({}, [])

    def test_lists_every_invalid_key(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_data_entry_keys(
                {"foo": "1", "event": "x", "bar": "2"}, SAMPLE_PARAMS,
            )
        assert exc_info.value.message == (
            "Invalid keys: foo, bar. Allowed keys: event, venue"
        )

    def test_malformed_params_allow_nothing(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_data_entry_keys({"event": "x"}, "garbage")
        assert "Invalid keys: event" in exc_info.value.message


class TestDeleteGuard:
    def test_zero_responses(self):
        ensure_entry_deletable(0)

    def test_referenced(self):
        with pytest.raises(PolicyViolationError):
            ensure_entry_deletable(1)


# =====================================================================
# Service
# =====================================================================


class TestCreateEntry:
    @pytest.mark.asyncio
    async def test_create(self, service, survey, db, store):
        view = await service.create_entry(
            db, survey.id, DataEntryRequest(values={"event": "Tokyo"}, label="Day 1"),
        )
        assert view.survey_id == survey.id
        assert view.values == {"event": "Tokyo"}
        assert view.label == "Day 1"
        assert view.response_count == 0
        assert view.id in store.entries

    @pytest.mark.asyncio
    async def test_invalid_key_rejected(self, service, survey, db, store):
        with pytest.raises(ValidationError):
            await service.create_entry(
                db, survey.id, DataEntryRequest(values={"city": "Osaka"}),
            )
        assert store.entries == {}

    @pytest.mark.asyncio
    async def test_unknown_survey(self, service, db):
        with pytest.raises(NotFoundError):
            await service.create_entry(db, "missing", DataEntryRequest(values={}))


class TestListEntries:
    @pytest.mark.asyncio
    async def test_counts_are_derived(self, service, survey, db, store):
        used = store.add_entry(survey.id, values={"event": "A"})
        unused = store.add_entry(survey.id, values={"event": "B"})
        store.add_response(survey.id, answers={}, data_entry_id=used.id)
        store.add_response(survey.id, answers={}, data_entry_id=used.id)

        view = await service.list_entries(db, survey.id)

        counts = {e.id: e.response_count for e in view.data_entries}
        assert counts == {used.id: 2, unused.id: 0}

    @pytest.mark.asyncio
    async def test_scoped_to_survey(self, service, survey, db, store):
        other = store.add_survey()
        store.add_entry(other.id, values={})
        view = await service.list_entries(db, survey.id)
        assert view.data_entries == []


class TestUpdateEntry:
    @pytest.mark.asyncio
    async def test_replaces_values_and_clears_label(self, service, survey, db, store):
        entry = store.add_entry(survey.id, values={"event": "A"}, label="old")
        view = await service.update_entry(
            db, survey.id, entry.id, DataEntryRequest(values={"venue": "Hall"}),
        )
        assert view.values == {"venue": "Hall"}
        assert view.label is None

    @pytest.mark.asyncio
    async def test_invalid_key_rejected(self, service, survey, db, store):
        entry = store.add_entry(survey.id, values={"event": "A"})
        with pytest.raises(ValidationError):
            await service.update_entry(
                db, survey.id, entry.id, DataEntryRequest(values={"nope": "x"}),
            )
        assert entry.values == {"event": "A"}

    @pytest.mark.asyncio
    async def test_entry_of_other_survey_is_not_found(self, service, survey, db, store):
        other = store.add_survey(params=SAMPLE_PARAMS)
        entry = store.add_entry(other.id, values={})
        with pytest.raises(NotFoundError):
            await service.update_entry(
                db, survey.id, entry.id, DataEntryRequest(values={}),
            )


class TestDeleteEntry:
    @pytest.mark.asyncio
    async def test_delete_unreferenced(self, service, survey, db, store):
        entry = store.add_entry(survey.id, values={})
        await service.delete_entry(db, survey.id, entry.id)
        assert entry.id not in store.entries

    @pytest.mark.asyncio
    async def test_referenced_entry_kept(self, service, survey, db, store):
        entry = store.add_entry(survey.id, values={})
        store.add_response(survey.id, answers={}, data_entry_id=entry.id)
        with pytest.raises(PolicyViolationError) as exc_info:
            await service.delete_entry(db, survey.id, entry.id)
        assert exc_info.value.message == "Data entry has responses and cannot be deleted"
        assert entry.id in store.entries

    @pytest.mark.asyncio
    async def test_unknown_entry(self, service, survey, db):
        with pytest.raises(NotFoundError):
            await service.delete_entry(db, survey.id, "missing")

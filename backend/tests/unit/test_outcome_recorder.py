"""
Unit Tests for Outcome Recording
"""
import pytest
from unittest.mock import AsyncMock

from conftest import NOW, TickingClock
from rapiddial.core.exceptions import NoCallHistoryError, NotFoundError, ValidationError
from rapiddial.domain.models.call_record import CallRecordUpdate
from rapiddial.domain.services.outcome_recorder import OutcomeRecorder
from rapiddial.infrastructure.storage.call_record_store import SqlCallRecordStore
from rapiddial.infrastructure.storage.prospect_repository import SqlProspectRepository


@pytest.fixture
def store(session_factory):
    return SqlCallRecordStore(session_factory, clock=TickingClock())


@pytest.fixture
def prospects(session_factory):
    return SqlProspectRepository(session_factory)


@pytest.fixture
def recorder(store, prospects):
    return OutcomeRecorder(store, prospects, clock=lambda: NOW)


class TestOutcomeRecorder:
    """Tests for OutcomeRecorder.record_outcome"""

    @pytest.mark.asyncio
    async def test_outcome_lands_on_latest_call(self, store, prospects, recorder, add_prospect):
        add_prospect("p1")
        await store.upsert("CA-old", CallRecordUpdate(prospect_id="p1", caller_id="alice"))
        await store.upsert("CA-new", CallRecordUpdate(prospect_id="p1", caller_id="alice"))

        record = await recorder.record_outcome("p1", "alice", "Booked", "Tuesday 10am")

        assert record.call_key == "CA-new"
        assert record.outcome == "Booked"
        assert record.notes == "Tuesday 10am"
        assert (await store.get("CA-old")).outcome == "Call in progress"

        prospect = await prospects.get_prospect("p1")
        assert prospect.last_call_outcome == "Booked"
        assert prospect.last_contact_date == NOW

    @pytest.mark.asyncio
    async def test_no_history_raises(self, store, prospects, recorder, add_prospect):
        add_prospect("p1")

        with pytest.raises(NoCallHistoryError) as exc_info:
            await recorder.record_outcome("p1", "alice", "Booked")

        assert exc_info.value.prospect_id == "p1"
        assert exc_info.value.caller_id == "alice"

        prospect = await prospects.get_prospect("p1")
        assert prospect.last_contact_date is None
        assert prospect.last_call_outcome is None
        entries, total = await store.list_history()
        assert entries == []
        assert total == 0

    @pytest.mark.asyncio
    async def test_other_callers_history_does_not_count(self, store, recorder, add_prospect):
        add_prospect("p1")
        await store.upsert("CA1", CallRecordUpdate(prospect_id="p1", caller_id="bob"))

        with pytest.raises(NoCallHistoryError):
            await recorder.record_outcome("p1", "alice", "Booked")

    @pytest.mark.asyncio
    async def test_missing_prospect_writes_nothing(self, store, recorder):
        await store.upsert("CA1", CallRecordUpdate(prospect_id="ghost", caller_id="alice"))

        with pytest.raises(NotFoundError):
            await recorder.record_outcome("ghost", "alice", "Booked")

        assert (await store.get("CA1")).outcome == "Call in progress"

    @pytest.mark.asyncio
    async def test_retry_is_idempotent(self, store, prospects, recorder, add_prospect):
        add_prospect("p1")
        await store.upsert("CA1", CallRecordUpdate(prospect_id="p1", caller_id="alice"))

        first = await recorder.record_outcome("p1", "alice", "Call back", "after 3pm")
        second = await recorder.record_outcome("p1", "alice", "Call back", "after 3pm")

        assert first == second
        assert (await prospects.get_prospect("p1")).last_call_outcome == "Call back"

    @pytest.mark.asyncio
    async def test_missing_identity_rejected(self, recorder):
        with pytest.raises(ValidationError):
            await recorder.record_outcome("", "alice", "Booked")
        with pytest.raises(ValidationError):
            await recorder.record_outcome("p1", "", "Booked")
        with pytest.raises(ValidationError):
            await recorder.record_outcome("p1", "alice", "  ")

    @pytest.mark.asyncio
    async def test_prospect_deleted_between_steps(self, store):
        prospects = AsyncMock()
        prospects.get_prospect.return_value = object()
        prospects.mark_contacted.return_value = False
        await store.upsert("CA1", CallRecordUpdate(prospect_id="p1", caller_id="alice"))

        recorder = OutcomeRecorder(store, prospects, clock=lambda: NOW)

        with pytest.raises(NotFoundError):
            await recorder.record_outcome("p1", "alice", "Booked")

        prospects.mark_contacted.assert_awaited_once_with("p1", "Booked", NOW)

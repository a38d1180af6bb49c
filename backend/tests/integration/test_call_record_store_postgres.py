"""
Integration Test: call record upserts racing on PostgreSQL
Requires TEST_DATABASE_URL pointing at a disposable PostgreSQL database
"""
import asyncio
import os
import uuid

import pytest
from sqlalchemy import func, select

from rapiddial.domain.models.call_record import CallRecordUpdate
from rapiddial.infrastructure.storage.call_record_store import SqlCallRecordStore
from rapiddial.infrastructure.storage.database import (
    create_db_engine,
    create_session_factory,
    init_db,
    session_scope,
)
from rapiddial.infrastructure.storage.models import CallRecordRow

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL")

pytestmark = pytest.mark.skipif(
    not TEST_DATABASE_URL,
    reason="TEST_DATABASE_URL not set - PostgreSQL integration tests skipped"
)


@pytest.fixture
def pg_session_factory():
    engine = create_db_engine(TEST_DATABASE_URL)
    init_db(engine)
    yield create_session_factory(engine)
    engine.dispose()


class TestPostgresCallRecordStore:
    """Concurrent first events for one call key across independent stores"""

    @pytest.mark.asyncio
    async def test_racing_stores_create_one_record(self, pg_session_factory):
        call_key = f"CA-it-{uuid.uuid4().hex}"
        # One store per simulated worker process: no shared in-process lock
        stores = [SqlCallRecordStore(pg_session_factory) for _ in range(8)]
        updates = [
            CallRecordUpdate(status="ringing"),
            CallRecordUpdate(prospect_id="p1"),
            CallRecordUpdate(caller_id="alice"),
            CallRecordUpdate(recording_url="https://rec/1"),
            CallRecordUpdate(duration_seconds=30),
            CallRecordUpdate(notes="race"),
            CallRecordUpdate(outcome="Booked"),
            CallRecordUpdate(status="ringing"),
        ]

        await asyncio.gather(*(store.upsert(call_key, update) for store, update in zip(stores, updates)))

        with session_scope(pg_session_factory) as session:
            count = session.execute(
                select(func.count()).select_from(CallRecordRow).where(CallRecordRow.call_key == call_key)
            ).scalar_one()
        assert count == 1

        record = await stores[0].get(call_key)
        assert record.prospect_id == "p1"
        assert record.caller_id == "alice"
        assert record.recording_url == "https://rec/1"
        assert record.duration_seconds == 30
        assert record.notes == "race"
        assert record.outcome == "Booked"

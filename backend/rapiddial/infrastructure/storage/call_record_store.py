"""
SQL Call Record Store
call_history table with a field-level merge-upsert keyed by call key
"""
import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func, insert, or_, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from rapiddial.core.exceptions import ValidationError
from rapiddial.domain.interfaces.call_record_store import CallRecordStore
from rapiddial.domain.models.call_record import (
    CallHistoryEntry,
    CallRecord,
    CallRecordUpdate,
    CallStatus,
    DEFAULT_OUTCOME,
)
from rapiddial.infrastructure.storage.base import SqlRepository
from rapiddial.infrastructure.storage.database import session_scope
from rapiddial.infrastructure.storage.models import CallRecordRow, ProspectRow
from rapiddial.utils.keyed_lock import KeyedLock
from rapiddial.utils.time_utils import Clock, ensure_utc, utc_now

logger = logging.getLogger(__name__)


MAX_PAGE_SIZE = 500


def _to_record(row: CallRecordRow) -> CallRecord:
    record = CallRecord.model_validate(row)
    record.attempted_at = ensure_utc(record.attempted_at)
    return record


def _to_entry(row: CallRecordRow, business_name: Optional[str], phone_number: Optional[str]) -> CallHistoryEntry:
    entry = CallHistoryEntry.model_validate(row)
    entry.attempted_at = ensure_utc(entry.attempted_at)
    entry.prospect_business_name = business_name
    entry.prospect_phone_number = phone_number
    return entry


class SqlCallRecordStore(SqlRepository, CallRecordStore):
    """
    Call record store on top of SQLAlchemy.

    Upserts for one call key are serialized in-process by a KeyedLock.
    Across processes the unique call_key constraint plus
    INSERT .. ON CONFLICT DO NOTHING and a row lock on the re-select keep
    concurrent first events from creating a second record.
    """

    def __init__(
        self,
        session_factory: sessionmaker,
        timeout_seconds: float = 5.0,
        clock: Clock = utc_now
    ):
        super().__init__(session_factory, timeout_seconds)
        self._clock = clock
        self._locks = KeyedLock()

    # =========================================================================
    # Writes
    # =========================================================================

    async def upsert(self, call_key: str, update: CallRecordUpdate) -> CallRecord:
        if not call_key:
            raise ValidationError("call key is required")

        changes = update.changes()
        async with self._locks.hold(call_key):
            return await self._run("upsert", self._upsert_sync, call_key, changes)

    def _upsert_sync(self, call_key: str, changes: Dict[str, Any]) -> CallRecord:
        with session_scope(self._session_factory) as session:
            row = self._select_for_update(session, call_key)
            if row is None:
                self._insert_if_absent(session, call_key)
                row = self._select_for_update(session, call_key)
                logger.debug(f"Call record created: key={call_key}")

            for field, value in changes.items():
                setattr(row, field, value)

            session.flush()
            return _to_record(row)

    @staticmethod
    def _select_for_update(session: Session, call_key: str) -> Optional[CallRecordRow]:
        stmt = select(CallRecordRow).where(CallRecordRow.call_key == call_key).with_for_update()
        return session.execute(stmt).scalar_one_or_none()

    def _insert_if_absent(self, session: Session, call_key: str) -> None:
        values = {
            "call_key": call_key,
            "status": CallStatus.PENDING.value,
            "outcome": DEFAULT_OUTCOME,
            "attempted_at": self._clock(),
        }

        dialect = session.get_bind().dialect.name
        if dialect == "postgresql":
            session.execute(
                pg_insert(CallRecordRow).values(**values).on_conflict_do_nothing(index_elements=["call_key"])
            )
        elif dialect == "sqlite":
            session.execute(
                sqlite_insert(CallRecordRow).values(**values).on_conflict_do_nothing(index_elements=["call_key"])
            )
        else:
            # Other backends: a losing racer hits the unique constraint and reuses the winner's row
            try:
                with session.begin_nested():
                    session.execute(insert(CallRecordRow).values(**values))
            except IntegrityError:
                logger.debug(f"Call record for {call_key} created concurrently")

    # =========================================================================
    # Reads
    # =========================================================================

    async def get(self, call_key: str) -> Optional[CallHistoryEntry]:
        return await self._run("get", self._get_sync, call_key)

    def _get_sync(self, call_key: str) -> Optional[CallHistoryEntry]:
        with session_scope(self._session_factory) as session:
            stmt = (
                select(CallRecordRow, ProspectRow.business_name, ProspectRow.phone_number)
                .outerjoin(ProspectRow, ProspectRow.id == CallRecordRow.prospect_id)
                .where(CallRecordRow.call_key == call_key)
            )
            result = session.execute(stmt).first()
            if result is None:
                return None
            return _to_entry(*result)

    async def find_latest(self, prospect_id: str, caller_id: str) -> Optional[CallRecord]:
        return await self._run("find_latest", self._find_latest_sync, prospect_id, caller_id)

    def _find_latest_sync(self, prospect_id: str, caller_id: str) -> Optional[CallRecord]:
        with session_scope(self._session_factory) as session:
            stmt = (
                select(CallRecordRow)
                .where(
                    CallRecordRow.prospect_id == prospect_id,
                    CallRecordRow.caller_id == caller_id,
                )
                .order_by(CallRecordRow.attempted_at.desc(), CallRecordRow.created_at.desc())
                .limit(1)
            )
            row = session.execute(stmt).scalar_one_or_none()
            return _to_record(row) if row is not None else None

    async def list_history(
        self,
        limit: int = 100,
        offset: int = 0,
        caller_id: Optional[str] = None,
        search: Optional[str] = None
    ) -> Tuple[List[CallHistoryEntry], int]:
        if limit < 1 or limit > MAX_PAGE_SIZE:
            raise ValidationError(f"limit must be between 1 and {MAX_PAGE_SIZE}")
        if offset < 0:
            raise ValidationError("offset must not be negative")

        return await self._run("list_history", self._list_history_sync, limit, offset, caller_id, search)

    def _list_history_sync(
        self,
        limit: int,
        offset: int,
        caller_id: Optional[str],
        search: Optional[str]
    ) -> Tuple[List[CallHistoryEntry], int]:
        with session_scope(self._session_factory) as session:
            stmt = (
                select(CallRecordRow, ProspectRow.business_name, ProspectRow.phone_number)
                .outerjoin(ProspectRow, ProspectRow.id == CallRecordRow.prospect_id)
            )

            if caller_id:
                stmt = stmt.where(CallRecordRow.caller_id == caller_id)
            if search and search.strip():
                pattern = f"%{search.strip()}%"
                stmt = stmt.where(or_(
                    ProspectRow.business_name.ilike(pattern),
                    CallRecordRow.caller_id.ilike(pattern),
                ))

            total = session.execute(
                select(func.count()).select_from(stmt.subquery())
            ).scalar_one()

            page = session.execute(
                stmt.order_by(CallRecordRow.attempted_at.desc(), CallRecordRow.created_at.desc())
                .limit(limit)
                .offset(offset)
            ).all()

            return [_to_entry(*row) for row in page], total

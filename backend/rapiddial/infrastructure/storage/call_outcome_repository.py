"""
SQL Call Outcome Repository
CRUD over the call_outcomes catalog table
"""
import logging
from typing import List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from rapiddial.core.exceptions import ValidationError
from rapiddial.domain.models.call_outcome import CallOutcomeCreate, CallOutcomeOption, CallOutcomePatch
from rapiddial.infrastructure.storage.base import SqlRepository
from rapiddial.infrastructure.storage.database import session_scope
from rapiddial.infrastructure.storage.models import CallOutcomeRow

logger = logging.getLogger(__name__)


class SqlCallOutcomeRepository(SqlRepository):

    async def list_all(self) -> List[CallOutcomeOption]:
        return await self._run("list_all", self._list_all_sync)

    def _list_all_sync(self) -> List[CallOutcomeOption]:
        with session_scope(self._session_factory) as session:
            rows = session.execute(
                select(CallOutcomeRow).order_by(CallOutcomeRow.sort_order, CallOutcomeRow.label)
            ).scalars().all()
            return [CallOutcomeOption.model_validate(row) for row in rows]

    async def create(self, data: CallOutcomeCreate) -> CallOutcomeOption:
        return await self._run("create", self._create_sync, data)

    def _create_sync(self, data: CallOutcomeCreate) -> CallOutcomeOption:
        try:
            with session_scope(self._session_factory) as session:
                row = CallOutcomeRow(**data.model_dump())
                session.add(row)
                session.flush()
                return CallOutcomeOption.model_validate(row)
        except IntegrityError as e:
            raise ValidationError(f"Call outcome '{data.label}' already exists") from e

    async def update(self, outcome_id: str, patch: CallOutcomePatch) -> Optional[CallOutcomeOption]:
        return await self._run("update", self._update_sync, outcome_id, patch)

    def _update_sync(self, outcome_id: str, patch: CallOutcomePatch) -> Optional[CallOutcomeOption]:
        try:
            with session_scope(self._session_factory) as session:
                row = session.get(CallOutcomeRow, outcome_id)
                if row is None:
                    return None
                for field, value in patch.model_dump(exclude_unset=True).items():
                    setattr(row, field, value)
                session.flush()
                return CallOutcomeOption.model_validate(row)
        except IntegrityError as e:
            raise ValidationError(f"Call outcome '{patch.label}' already exists") from e

    async def delete(self, outcome_id: str) -> bool:
        return await self._run("delete", self._delete_sync, outcome_id)

    def _delete_sync(self, outcome_id: str) -> bool:
        with session_scope(self._session_factory) as session:
            row = session.get(CallOutcomeRow, outcome_id)
            if row is None:
                return False
            session.delete(row)
            return True

    async def seed(self, defaults: Sequence[CallOutcomeCreate]) -> int:
        """Insert the default labels if the catalog is empty. Returns rows added."""
        return await self._run("seed", self._seed_sync, list(defaults))

    def _seed_sync(self, defaults: List[CallOutcomeCreate]) -> int:
        with session_scope(self._session_factory) as session:
            existing = session.execute(select(CallOutcomeRow.id).limit(1)).first()
            if existing is not None:
                return 0
            session.add_all(CallOutcomeRow(**item.model_dump()) for item in defaults)
            logger.info(f"Seeded {len(defaults)} default call outcomes")
            return len(defaults)

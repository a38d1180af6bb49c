"""
SQL Prospect Repository
Prospects and field reps from the prospects / field_reps tables
"""
import logging
from typing import List, Optional
from datetime import datetime

from sqlalchemy import select, update

from rapiddial.domain.interfaces.prospect_repository import ProspectRepository
from rapiddial.domain.models.prospect import FieldRep, Prospect
from rapiddial.infrastructure.storage.base import SqlRepository
from rapiddial.infrastructure.storage.database import session_scope
from rapiddial.infrastructure.storage.models import FieldRepRow, ProspectRow
from rapiddial.utils.time_utils import ensure_utc

logger = logging.getLogger(__name__)


def _coordinate_pair(lat: Optional[float], lng: Optional[float], label: str):
    """A half-geocoded row has no usable location; treat it as ungeocoded"""
    if (lat is None) != (lng is None):
        logger.warning(f"{label} has only one coordinate set ({lat}, {lng}) - ignoring its location")
        return None, None
    return lat, lng


def _to_prospect(row: ProspectRow) -> Prospect:
    fields = {name: getattr(row, name) for name in Prospect.model_fields}
    fields["address_lat"], fields["address_lng"] = _coordinate_pair(
        row.address_lat, row.address_lng, f"Prospect {row.id}"
    )
    prospect = Prospect.model_validate(fields)
    if prospect.last_contact_date is not None:
        prospect.last_contact_date = ensure_utc(prospect.last_contact_date)
    return prospect


def _to_field_rep(row: FieldRepRow) -> FieldRep:
    fields = {name: getattr(row, name) for name in FieldRep.model_fields}
    fields["home_lat"], fields["home_lng"] = _coordinate_pair(
        row.home_lat, row.home_lng, f"Field rep {row.id}"
    )
    return FieldRep.model_validate(fields)


class SqlProspectRepository(SqlRepository, ProspectRepository):

    async def list_by_territory(self, territory: str) -> List[Prospect]:
        return await self._run("list_by_territory", self._list_by_territory_sync, territory)

    def _list_by_territory_sync(self, territory: str) -> List[Prospect]:
        with session_scope(self._session_factory) as session:
            rows = session.execute(
                select(ProspectRow)
                .where(ProspectRow.territory == territory)
                .order_by(ProspectRow.created_at, ProspectRow.id)
            ).scalars().all()
            return [_to_prospect(row) for row in rows]

    async def get_prospect(self, prospect_id: str) -> Optional[Prospect]:
        return await self._run("get_prospect", self._get_prospect_sync, prospect_id)

    def _get_prospect_sync(self, prospect_id: str) -> Optional[Prospect]:
        with session_scope(self._session_factory) as session:
            row = session.get(ProspectRow, prospect_id)
            return _to_prospect(row) if row is not None else None

    async def get_field_rep(self, field_rep_id: str) -> Optional[FieldRep]:
        return await self._run("get_field_rep", self._get_field_rep_sync, field_rep_id)

    def _get_field_rep_sync(self, field_rep_id: str) -> Optional[FieldRep]:
        with session_scope(self._session_factory) as session:
            row = session.get(FieldRepRow, field_rep_id)
            return _to_field_rep(row) if row is not None else None

    async def mark_contacted(self, prospect_id: str, outcome: str, contacted_at: datetime) -> bool:
        return await self._run("mark_contacted", self._mark_contacted_sync, prospect_id, outcome, contacted_at)

    def _mark_contacted_sync(self, prospect_id: str, outcome: str, contacted_at: datetime) -> bool:
        with session_scope(self._session_factory) as session:
            result = session.execute(
                update(ProspectRow)
                .where(ProspectRow.id == prospect_id)
                .values(last_contact_date=contacted_at, last_call_outcome=outcome)
            )
            return result.rowcount > 0

    async def update_priority_score(self, prospect_id: str, score: int) -> bool:
        return await self._run("update_priority_score", self._update_priority_score_sync, prospect_id, score)

    def _update_priority_score_sync(self, prospect_id: str, score: int) -> bool:
        with session_scope(self._session_factory) as session:
            result = session.execute(
                update(ProspectRow)
                .where(ProspectRow.id == prospect_id)
                .values(priority_score=score)
            )
            return result.rowcount > 0

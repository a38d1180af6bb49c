"""
Shared test fixtures
SQLite-backed session factories and small builders for domain objects
"""
import pytest
from datetime import datetime, timedelta, timezone
from typing import Optional

from rapiddial.domain.models.prospect import FieldRep, Prospect
from rapiddial.infrastructure.storage.database import (
    create_db_engine,
    create_session_factory,
    init_db,
    session_scope,
)
from rapiddial.infrastructure.storage.models import FieldRepRow, ProspectRow


NOW = datetime(2024, 6, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'rapiddial-test.db'}"


@pytest.fixture
def engine(database_url):
    engine = create_db_engine(database_url)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def add_prospect(session_factory):
    """Insert a prospect row and return its id"""
    def _add(prospect_id: str, territory: str = "Miami", **fields) -> str:
        fields.setdefault("business_name", f"Business {prospect_id}")
        fields.setdefault("specialty", "Other")
        with session_scope(session_factory) as session:
            session.add(ProspectRow(id=prospect_id, territory=territory, **fields))
        return prospect_id
    return _add


@pytest.fixture
def add_field_rep(session_factory):
    """Insert a field rep row and return its id"""
    def _add(rep_id: str, territory: str = "Miami", **fields) -> str:
        fields.setdefault("name", f"Rep {rep_id}")
        with session_scope(session_factory) as session:
            session.add(FieldRepRow(id=rep_id, territory=territory, **fields))
        return rep_id
    return _add


def make_prospect(
    prospect_id: str,
    lat: Optional[float] = None,
    lng: Optional[float] = None,
    territory: str = "Miami",
    specialty: str = "Other",
    last_contact_date: Optional[datetime] = None
) -> Prospect:
    return Prospect(
        id=prospect_id,
        business_name=f"Business {prospect_id}",
        territory=territory,
        specialty=specialty,
        last_contact_date=last_contact_date,
        address_lat=lat,
        address_lng=lng,
    )


def make_rep(
    rep_id: str = "rep-1",
    territory: str = "Miami",
    home_lat: Optional[float] = None,
    home_lng: Optional[float] = None
) -> FieldRep:
    return FieldRep(id=rep_id, name=f"Rep {rep_id}", territory=territory, home_lat=home_lat, home_lng=home_lng)


class TickingClock:
    """Deterministic clock that advances by a fixed step on every call"""

    def __init__(self, start: datetime = NOW, step: timedelta = timedelta(minutes=1)):
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + self.step
        return value

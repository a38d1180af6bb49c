"""
SQLAlchemy Database Models
Tables read and written by the calling engine
"""
from sqlalchemy import Column, String, Integer, DateTime, Text, Numeric, Index
from sqlalchemy.orm import declarative_base
from datetime import datetime, timezone
import uuid

Base = declarative_base()


def _uuid() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ProspectRow(Base):
    """Prospect model - maps to prospects table"""
    __tablename__ = "prospects"

    id = Column(String(36), primary_key=True, default=_uuid)
    business_name = Column(Text, nullable=False)
    phone_number = Column(String(20))
    address_street = Column(String(255))
    address_city = Column(String(100))
    address_state = Column(String(2))
    address_zip = Column(String(10))
    address_lat = Column(Numeric(10, 8, asdecimal=False))
    address_lng = Column(Numeric(11, 8, asdecimal=False))
    specialty = Column(String(50), nullable=False, default="Other")
    territory = Column(String(20), nullable=False, index=True)
    office_email = Column(String(255))
    last_contact_date = Column(DateTime(timezone=True))
    last_call_outcome = Column(String(50))
    priority_score = Column(Integer)
    created_at = Column(DateTime(timezone=True), default=_now)
    updated_at = Column(DateTime(timezone=True), default=_now, onupdate=_now)


class FieldRepRow(Base):
    """Field rep model - maps to field_reps table"""
    __tablename__ = "field_reps"

    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(Text, nullable=False)
    territory = Column(String(20), nullable=False, index=True)
    home_zip_code = Column(String(10))
    home_lat = Column(Numeric(10, 8, asdecimal=False))
    home_lng = Column(Numeric(11, 8, asdecimal=False))
    created_at = Column(DateTime(timezone=True), default=_now)
    updated_at = Column(DateTime(timezone=True), default=_now, onupdate=_now)


class CallRecordRow(Base):
    """Call history model - one row per call key"""
    __tablename__ = "call_history"

    id = Column(String(36), primary_key=True, default=_uuid)
    call_key = Column(String(64), nullable=False, unique=True)
    status = Column(String(30), nullable=False, default="pending")
    # No foreign key: provider events may name a prospect before it is synced
    prospect_id = Column(String(36))
    caller_id = Column(String(100))
    outcome = Column(String(50))
    notes = Column(Text)
    recording_url = Column(Text)
    duration_seconds = Column(Integer)
    attempted_at = Column(DateTime(timezone=True), nullable=False, default=_now)
    created_at = Column(DateTime(timezone=True), default=_now)
    updated_at = Column(DateTime(timezone=True), default=_now, onupdate=_now)

    __table_args__ = (
        Index("ix_call_history_prospect_caller", "prospect_id", "caller_id", "attempted_at"),
    )


class CallOutcomeRow(Base):
    """Call outcome catalog model - maps to call_outcomes table"""
    __tablename__ = "call_outcomes"

    id = Column(String(36), primary_key=True, default=_uuid)
    label = Column(String(50), nullable=False, unique=True)
    bg_color = Column(String(30), nullable=False)
    text_color = Column(String(30), nullable=False)
    border_color = Column(String(30))
    hover_color = Column(String(30))
    sort_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), default=_now)
    updated_at = Column(DateTime(timezone=True), default=_now, onupdate=_now)

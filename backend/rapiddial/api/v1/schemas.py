"""
API Response Schemas
camelCase wire shapes for the dialer front end
"""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import List, Optional
from datetime import datetime

from rapiddial.domain.models.call_record import CallRecord
from rapiddial.domain.models.prospect import Prospect


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProspectResponse(CamelModel):
    id: str
    business_name: str
    phone_number: Optional[str] = None
    territory: str
    specialty: str
    last_contact_date: Optional[datetime] = None
    last_call_outcome: Optional[str] = None
    address_lat: Optional[float] = None
    address_lng: Optional[float] = None
    priority_score: Optional[int] = None

    @classmethod
    def from_prospect(cls, prospect: Prospect) -> "ProspectResponse":
        return cls(**prospect.model_dump())


class CallingListResponse(CamelModel):
    field_rep_id: str
    territory: str
    count: int
    prospects: List[ProspectResponse]
    estimated_drive_minutes: Optional[int] = None


class RecalculatePrioritiesRequest(BaseModel):
    territory: str


class RecalculatePrioritiesResponse(CamelModel):
    updated: int


class CallRecordResponse(CamelModel):
    """Call record snapshot"""
    call_key: str
    status: str
    prospect_id: Optional[str] = None
    caller_id: Optional[str] = None
    outcome: Optional[str] = None
    notes: Optional[str] = None
    recording_url: Optional[str] = None
    duration_seconds: Optional[int] = None
    attempted_at: datetime
    prospect_business_name: Optional[str] = None
    prospect_phone_number: Optional[str] = None

    @classmethod
    def from_record(cls, record: CallRecord) -> "CallRecordResponse":
        return cls(**record.model_dump())


class CallHistoryResponse(CamelModel):
    items: List[CallRecordResponse]
    total: int
    limit: int
    offset: int


class WebhookAck(CamelModel):
    call_key: str
    status: str

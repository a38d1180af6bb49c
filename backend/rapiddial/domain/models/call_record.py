"""
Call Record Domain Models
Canonical call record plus the typed events that update it
"""
from pydantic import BaseModel, Field
from typing import Any, Dict, Optional
from datetime import datetime
from enum import Enum


class CallStatus(str, Enum):
    """
    Known call statuses.

    Provider statuses are stored verbatim, so a record may hold values outside
    this enum (e.g. Twilio's "in-progress" or "no-answer").
    """
    PENDING = "pending"
    INITIATED = "initiated"
    RINGING = "ringing"
    ANSWERED = "answered"
    COMPLETED = "completed"
    FAILED = "failed"


DEFAULT_OUTCOME = "Call in progress"
RECORDED_OUTCOME = "Call completed"


class CallRecord(BaseModel):
    """One call, merged from every provider event that references its call key"""
    call_key: str
    status: str = CallStatus.PENDING.value
    prospect_id: Optional[str] = None
    caller_id: Optional[str] = None
    outcome: Optional[str] = DEFAULT_OUTCOME
    notes: Optional[str] = None
    recording_url: Optional[str] = None
    duration_seconds: Optional[int] = None
    attempted_at: datetime

    model_config = {"from_attributes": True}


class CallRecordUpdate(BaseModel):
    """
    Partial update applied by the merge-upsert.

    Every field is optional. A field left as None (or an empty string) is
    absent: it never clears the stored value. To change a field, supply a new
    non-empty value.
    """
    status: Optional[str] = None
    prospect_id: Optional[str] = None
    caller_id: Optional[str] = None
    outcome: Optional[str] = None
    notes: Optional[str] = None
    recording_url: Optional[str] = None
    duration_seconds: Optional[int] = Field(default=None, ge=0)

    def changes(self) -> Dict[str, Any]:
        """Fields that carry a value and must be written."""
        return {
            name: value
            for name, value in self.model_dump().items()
            if value is not None and value != ""
        }


class CallHistoryEntry(CallRecord):
    """Call record joined with prospect display fields (read side)"""
    prospect_business_name: Optional[str] = None
    prospect_phone_number: Optional[str] = None


# =============================================================================
# Inbound events (field names match the telephony provider's callbacks)
# =============================================================================

class StatusCallback(BaseModel):
    """Call status callback: POST /webhooks/twilio/status"""
    call_sid: str = Field(..., alias="CallSid", min_length=1)
    parent_call_sid: Optional[str] = Field(default=None, alias="ParentCallSid")
    call_status: str = Field(..., alias="CallStatus", min_length=1)
    to: Optional[str] = Field(default=None, alias="To")
    duration: Optional[int] = Field(default=None, alias="Duration", ge=0)

    model_config = {"populate_by_name": True, "extra": "ignore"}


class RecordingCallback(BaseModel):
    """Recording-ready callback: POST /webhooks/twilio/recording"""
    call_sid: str = Field(..., alias="CallSid", min_length=1)
    parent_call_sid: Optional[str] = Field(default=None, alias="ParentCallSid")
    recording_url: str = Field(..., alias="RecordingUrl", min_length=1)
    recording_duration: Optional[int] = Field(default=None, alias="RecordingDuration", ge=0)
    recording_sid: Optional[str] = Field(default=None, alias="RecordingSid")

    model_config = {"populate_by_name": True, "extra": "ignore"}


class CallInitiatedEvent(BaseModel):
    """Sent by the dialer client right after it places a call"""
    call_sid: str = Field(..., alias="callSid", min_length=1)
    parent_call_sid: Optional[str] = Field(default=None, alias="parentCallSid")
    prospect_id: Optional[str] = Field(default=None, alias="prospectId")
    caller_id: Optional[str] = Field(default=None, alias="callerId")

    model_config = {"populate_by_name": True, "extra": "ignore"}


class OutcomeSubmission(BaseModel):
    """Manual outcome entered by the caller after hanging up"""
    prospect_id: str = Field(..., alias="prospectId")
    caller_id: str = Field(..., alias="callerId")
    outcome: str
    notes: Optional[str] = None

    model_config = {"populate_by_name": True, "extra": "ignore"}

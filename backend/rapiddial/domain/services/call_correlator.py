"""
Call Record Correlator
Maps unordered, possibly duplicated provider callbacks onto one call record
"""
import logging
from typing import Optional

from rapiddial.domain.interfaces.call_record_store import CallRecordStore
from rapiddial.domain.interfaces.recording_archiver import RecordingArchiver
from rapiddial.domain.models.call_record import (
    CallInitiatedEvent,
    CallRecord,
    CallRecordUpdate,
    CallStatus,
    RECORDED_OUTCOME,
    RecordingCallback,
    StatusCallback,
)

logger = logging.getLogger(__name__)


def resolve_call_key(call_sid: str, parent_call_sid: Optional[str] = None) -> str:
    """
    Correlation key for a provider event.

    A relayed call (browser leg bridged to a PSTN leg) reports the outer leg
    as the parent; both legs must land on the parent's record.
    """
    return parent_call_sid or call_sid


class CallRecordCorrelator:
    """
    Applies provider events to the call-record store.

    Every event becomes a CallRecordUpdate carrying only the fields the event
    knows about, so events may arrive in any order or more than once.
    """

    def __init__(
        self,
        store: CallRecordStore,
        archiver: Optional[RecordingArchiver] = None
    ):
        self._store = store
        self._archiver = archiver

    async def handle_initiated(self, event: CallInitiatedEvent) -> CallRecord:
        """Link a freshly dialled call to its prospect and caller"""
        call_key = resolve_call_key(event.call_sid, event.parent_call_sid)
        record = await self._store.upsert(call_key, CallRecordUpdate(
            status=CallStatus.INITIATED.value,
            prospect_id=event.prospect_id,
            caller_id=event.caller_id,
        ))
        logger.info(
            f"Call initiated: key={call_key} prospect={event.prospect_id} caller={event.caller_id}"
        )
        return record

    async def handle_status(
        self,
        event: StatusCallback,
        prospect_id: Optional[str] = None,
        caller_id: Optional[str] = None
    ) -> CallRecord:
        """Record a status change; prospect/caller may be supplied out of band"""
        call_key = resolve_call_key(event.call_sid, event.parent_call_sid)
        record = await self._store.upsert(call_key, CallRecordUpdate(
            status=event.call_status,
            prospect_id=prospect_id,
            caller_id=caller_id,
        ))
        logger.info(
            f"Call status: key={call_key} sid={event.call_sid} "
            f"via_parent={event.parent_call_sid is not None} status={event.call_status} "
            f"to={event.to} duration={event.duration}"
        )
        return record

    async def handle_recording(self, event: RecordingCallback) -> CallRecord:
        """Attach the finished recording and mark the call completed"""
        call_key = resolve_call_key(event.call_sid, event.parent_call_sid)

        recording_url = event.recording_url
        if self._archiver is not None:
            recording_url = await self._archiver.archive(call_key, event.recording_url)
        else:
            logger.warning(f"No recording archive configured; keeping provider URL for {call_key}")

        record = await self._store.upsert(call_key, CallRecordUpdate(
            recording_url=recording_url,
            duration_seconds=event.recording_duration,
            outcome=RECORDED_OUTCOME,
        ))
        logger.info(
            f"Call recording: key={call_key} duration={event.recording_duration}s url={recording_url}"
        )
        return record

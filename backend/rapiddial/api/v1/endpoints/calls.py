"""
Call Endpoints
Dialer call registration, manual outcomes, and call history
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from rapiddial.api.v1.dependencies import (
    get_call_record_store,
    get_correlator,
    get_outcome_recorder,
)
from rapiddial.api.v1.errors import to_http_exception
from rapiddial.api.v1.schemas import CallHistoryResponse, CallRecordResponse
from rapiddial.core.exceptions import CallingEngineError
from rapiddial.domain.interfaces.call_record_store import CallRecordStore
from rapiddial.domain.models.call_record import CallInitiatedEvent, OutcomeSubmission
from rapiddial.domain.services.call_correlator import CallRecordCorrelator
from rapiddial.domain.services.outcome_recorder import OutcomeRecorder
from rapiddial.infrastructure.storage.call_record_store import MAX_PAGE_SIZE

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/calls", tags=["calls"])


@router.post("/initiated", response_model=CallRecordResponse)
async def call_initiated(
    event: CallInitiatedEvent,
    correlator: CallRecordCorrelator = Depends(get_correlator)
):
    """
    Register a call the dialer just placed.

    Links the call SID to the prospect and caller so that later provider
    callbacks and the caller's outcome land on the same record.
    """
    try:
        record = await correlator.handle_initiated(event)
    except CallingEngineError as e:
        raise to_http_exception(e)
    return CallRecordResponse.from_record(record)


@router.post("/outcome")
async def record_outcome(
    submission: OutcomeSubmission,
    recorder: OutcomeRecorder = Depends(get_outcome_recorder)
):
    """
    Record the caller's outcome for their latest call with a prospect.

    409 when no dialer-initiated call exists for the pair; 503 when storage
    is unavailable (safe to retry).
    """
    try:
        await recorder.record_outcome(
            submission.prospect_id,
            submission.caller_id,
            submission.outcome,
            submission.notes,
        )
    except CallingEngineError as e:
        logger.warning(
            f"Outcome rejected for prospect={submission.prospect_id} "
            f"caller={submission.caller_id}: {e.message}"
        )
        raise to_http_exception(e)

    return {"status": "recorded"}


@router.get("", response_model=CallHistoryResponse)
async def list_calls(
    limit: int = Query(100, ge=1, le=MAX_PAGE_SIZE, description="Items per page"),
    offset: int = Query(0, ge=0, description="Items to skip"),
    caller_id: Optional[str] = Query(None, description="Only calls by this caller"),
    search: Optional[str] = Query(None, description="Business name or caller id contains"),
    store: CallRecordStore = Depends(get_call_record_store)
):
    """Get call history, newest first."""
    try:
        entries, total = await store.list_history(limit, offset, caller_id, search)
    except CallingEngineError as e:
        raise to_http_exception(e)

    return CallHistoryResponse(
        items=[CallRecordResponse.from_record(entry) for entry in entries],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.get("/{call_key}", response_model=CallRecordResponse)
async def get_call(
    call_key: str,
    store: CallRecordStore = Depends(get_call_record_store)
):
    """Get one call record by its call key."""
    try:
        entry = await store.get(call_key)
    except CallingEngineError as e:
        raise to_http_exception(e)

    if entry is None:
        raise HTTPException(status_code=404, detail=f"Call {call_key} not found")
    return CallRecordResponse.from_record(entry)

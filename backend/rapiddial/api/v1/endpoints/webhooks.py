"""
Webhooks API Endpoints
Handles call status and recording callbacks from the telephony provider (Twilio)

Callbacks may arrive late, twice, or out of order; every handler is an
idempotent upsert keyed by the parent call SID (or the call SID).
"""
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pydantic import ValidationError as PydanticValidationError

from rapiddial.api.v1.dependencies import get_correlator
from rapiddial.api.v1.errors import to_http_exception
from rapiddial.api.v1.schemas import WebhookAck
from rapiddial.core.exceptions import CallingEngineError
from rapiddial.domain.models.call_record import RecordingCallback, StatusCallback
from rapiddial.domain.services.call_correlator import CallRecordCorrelator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/webhooks", tags=["webhooks"])


async def read_payload(request: Request) -> Dict[str, Any]:
    """Twilio posts form-encoded bodies; test tools and relays often send JSON"""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError:
            raise HTTPException(status_code=400, detail="Malformed JSON body")
        if not isinstance(body, dict):
            raise HTTPException(status_code=400, detail="Expected a JSON object")
        return body

    form = await request.form()
    return dict(form)


@router.post("/twilio/status", response_model=WebhookAck)
async def twilio_status(
    request: Request,
    prospect_id: Optional[str] = Query(None, alias="prospectId"),
    caller_id: Optional[str] = Query(None, alias="callerId"),
    correlator: CallRecordCorrelator = Depends(get_correlator)
):
    """
    Handle Twilio call status callback.

    The dialer may append prospectId / callerId to the status callback URL;
    when present they are linked to the call record.
    """
    payload = await read_payload(request)
    try:
        event = StatusCallback.model_validate(payload)
    except PydanticValidationError as e:
        logger.warning(f"Rejected status callback: {e.errors()}")
        raise HTTPException(status_code=400, detail="CallSid and CallStatus are required")

    try:
        record = await correlator.handle_status(event, prospect_id, caller_id)
    except CallingEngineError as e:
        logger.error(f"Status callback failed for {event.call_sid}: {e.message}")
        raise to_http_exception(e)

    return WebhookAck(call_key=record.call_key, status=record.status)


@router.post("/twilio/recording", response_model=WebhookAck)
async def twilio_recording(
    request: Request,
    correlator: CallRecordCorrelator = Depends(get_correlator)
):
    """Handle Twilio recording-ready callback."""
    payload = await read_payload(request)
    try:
        event = RecordingCallback.model_validate(payload)
    except PydanticValidationError as e:
        logger.warning(f"Rejected recording callback: {e.errors()}")
        raise HTTPException(status_code=400, detail="CallSid and RecordingUrl are required")

    try:
        record = await correlator.handle_recording(event)
    except CallingEngineError as e:
        logger.error(f"Recording callback failed for {event.call_sid}: {e.message}")
        raise to_http_exception(e)

    return WebhookAck(call_key=record.call_key, status=record.status)

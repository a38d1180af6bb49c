"""
Calling List Endpoints
Prioritized, route-ordered call lists for field reps
"""
import logging

from fastapi import APIRouter, Depends

from rapiddial.api.v1.dependencies import get_calling_list_service
from rapiddial.api.v1.errors import to_http_exception
from rapiddial.api.v1.schemas import (
    CallingListResponse,
    ProspectResponse,
    RecalculatePrioritiesRequest,
    RecalculatePrioritiesResponse,
)
from rapiddial.core.exceptions import CallingEngineError
from rapiddial.services.calling_list_service import CallingListService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/calling-list", tags=["calling-list"])


@router.post("/recalculate-priorities", response_model=RecalculatePrioritiesResponse)
async def recalculate_priorities(
    request: RecalculatePrioritiesRequest,
    service: CallingListService = Depends(get_calling_list_service)
):
    """Re-score every prospect in a territory and store the scores."""
    try:
        updated = await service.recalculate_priorities(request.territory)
        return RecalculatePrioritiesResponse(updated=updated)
    except CallingEngineError as e:
        raise to_http_exception(e)


@router.get("/{field_rep_id}", response_model=CallingListResponse)
async def get_calling_list(
    field_rep_id: str,
    service: CallingListService = Depends(get_calling_list_service)
):
    """
    Get a field rep's calling list.

    Prospects come back in calling order: by route when the rep has home
    coordinates, otherwise by priority.
    """
    try:
        calling_list = await service.get_calling_list(field_rep_id)
    except CallingEngineError as e:
        raise to_http_exception(e)

    return CallingListResponse(
        field_rep_id=calling_list.field_rep_id,
        territory=calling_list.territory,
        count=calling_list.count,
        prospects=[ProspectResponse.from_prospect(p) for p in calling_list.prospects],
        estimated_drive_minutes=calling_list.estimated_drive_minutes,
    )

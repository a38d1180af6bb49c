"""
Call Outcome Catalog Endpoints
Manage the outcome labels offered after a call
"""
from typing import List

from fastapi import APIRouter, Depends, Response, status

from rapiddial.api.v1.dependencies import get_outcome_catalog
from rapiddial.api.v1.errors import to_http_exception
from rapiddial.core.exceptions import CallingEngineError
from rapiddial.domain.models.call_outcome import CallOutcomeCreate, CallOutcomeOption, CallOutcomePatch
from rapiddial.services.outcome_catalog import OutcomeCatalog

router = APIRouter(prefix="/call-outcomes", tags=["call-outcomes"])


@router.get("", response_model=List[CallOutcomeOption])
async def list_call_outcomes(catalog: OutcomeCatalog = Depends(get_outcome_catalog)):
    try:
        return await catalog.list_outcomes()
    except CallingEngineError as e:
        raise to_http_exception(e)


@router.post("", response_model=CallOutcomeOption, status_code=status.HTTP_201_CREATED)
async def create_call_outcome(
    data: CallOutcomeCreate,
    catalog: OutcomeCatalog = Depends(get_outcome_catalog)
):
    try:
        return await catalog.create_outcome(data)
    except CallingEngineError as e:
        raise to_http_exception(e)


@router.patch("/{outcome_id}", response_model=CallOutcomeOption)
async def update_call_outcome(
    outcome_id: str,
    patch: CallOutcomePatch,
    catalog: OutcomeCatalog = Depends(get_outcome_catalog)
):
    try:
        return await catalog.update_outcome(outcome_id, patch)
    except CallingEngineError as e:
        raise to_http_exception(e)


@router.delete("/{outcome_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_call_outcome(
    outcome_id: str,
    catalog: OutcomeCatalog = Depends(get_outcome_catalog)
):
    try:
        await catalog.delete_outcome(outcome_id)
    except CallingEngineError as e:
        raise to_http_exception(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

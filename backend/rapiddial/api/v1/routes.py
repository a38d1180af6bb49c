"""
API Router
Combines all endpoint routers
"""
from fastapi import APIRouter
from rapiddial.api.v1.endpoints import (
    calling_list,
    webhooks,
    calls,
    call_outcomes,
)

api_router = APIRouter()

api_router.include_router(calling_list.router)
api_router.include_router(webhooks.router)
api_router.include_router(calls.router)
api_router.include_router(call_outcomes.router)

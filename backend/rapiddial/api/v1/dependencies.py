"""
API Dependencies
Accessors for the services built at startup and stored on app.state
"""
from fastapi import Request

from rapiddial.domain.interfaces.call_record_store import CallRecordStore
from rapiddial.domain.services.call_correlator import CallRecordCorrelator
from rapiddial.domain.services.outcome_recorder import OutcomeRecorder
from rapiddial.services.calling_list_service import CallingListService
from rapiddial.services.outcome_catalog import OutcomeCatalog


def get_call_record_store(request: Request) -> CallRecordStore:
    return request.app.state.call_record_store


def get_correlator(request: Request) -> CallRecordCorrelator:
    return request.app.state.correlator


def get_outcome_recorder(request: Request) -> OutcomeRecorder:
    return request.app.state.outcome_recorder


def get_calling_list_service(request: Request) -> CallingListService:
    return request.app.state.calling_list_service


def get_outcome_catalog(request: Request) -> OutcomeCatalog:
    return request.app.state.outcome_catalog

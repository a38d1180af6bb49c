"""
Engine error to HTTP status mapping
"""
from fastapi import HTTPException, status

from rapiddial.core.exceptions import (
    CallingEngineError,
    NoCallHistoryError,
    NotFoundError,
    StorageError,
    ValidationError,
)

_STATUS_BY_ERROR = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (NoCallHistoryError, status.HTTP_409_CONFLICT),
    # Retryable: the client (or the telephony provider) should try again
    (StorageError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def to_http_exception(error: CallingEngineError) -> HTTPException:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return HTTPException(status_code=status_code, detail=error.message)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=error.message)

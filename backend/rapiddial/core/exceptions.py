"""
Calling Engine Errors
"""


class CallingEngineError(Exception):
    """Base class for errors surfaced by the calling engine."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class ValidationError(CallingEngineError):
    """Raised when input to the engine is malformed (e.g. missing identity)."""


class NotFoundError(CallingEngineError):
    """Raised when a referenced field rep, prospect or call record does not exist."""


class NoCallHistoryError(CallingEngineError):
    """
    Raised when an outcome is submitted for a (prospect, caller) pair that has
    no dialer-initiated call to attach it to.
    """
    def __init__(self, prospect_id: str, caller_id: str):
        self.prospect_id = prospect_id
        self.caller_id = caller_id
        super().__init__(
            f"No call history found for prospect {prospect_id} and caller {caller_id}. "
            "Call must be made before recording outcome."
        )


class StorageError(CallingEngineError):
    """Raised when the call-record store cannot be reached or times out. Safe to retry."""
    retryable = True

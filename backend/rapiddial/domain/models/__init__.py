"""Domain models"""

# Prospects and field reps
from .prospect import (
    Coordinates,
    Prospect,
    FieldRep,
    ScoredProspect,
)

# Call records and provider events
from .call_record import (
    CallStatus,
    CallRecord,
    CallRecordUpdate,
    CallHistoryEntry,
    StatusCallback,
    RecordingCallback,
    CallInitiatedEvent,
    OutcomeSubmission,
    DEFAULT_OUTCOME,
    RECORDED_OUTCOME,
)

# Outcome catalog
from .call_outcome import (
    CallOutcomeOption,
    CallOutcomeCreate,
    CallOutcomePatch,
    DEFAULT_CALL_OUTCOMES,
)

__all__ = [
    "Coordinates",
    "Prospect",
    "FieldRep",
    "ScoredProspect",
    "CallStatus",
    "CallRecord",
    "CallRecordUpdate",
    "CallHistoryEntry",
    "StatusCallback",
    "RecordingCallback",
    "CallInitiatedEvent",
    "OutcomeSubmission",
    "DEFAULT_OUTCOME",
    "RECORDED_OUTCOME",
    "CallOutcomeOption",
    "CallOutcomeCreate",
    "CallOutcomePatch",
    "DEFAULT_CALL_OUTCOMES",
]

"""
Outcome Recorder
Attaches a caller's outcome to their latest call with a prospect
"""
import logging
from typing import Optional

from rapiddial.core.exceptions import NoCallHistoryError, NotFoundError, ValidationError
from rapiddial.domain.interfaces.call_record_store import CallRecordStore
from rapiddial.domain.interfaces.prospect_repository import ProspectRepository
from rapiddial.domain.models.call_record import CallRecord, CallRecordUpdate
from rapiddial.utils.time_utils import Clock, utc_now

logger = logging.getLogger(__name__)


class OutcomeRecorder:
    """
    Records manual call outcomes.

    An outcome can only be attached to a call that was placed through the
    dialer: the most recent call record for the (prospect, caller) pair must
    exist and carry a call key.

    Writes happen in two steps: the call record first, then the prospect's
    last contact. Both steps are idempotent, so a caller that gets a
    StorageError retries the whole operation.
    """

    def __init__(
        self,
        store: CallRecordStore,
        prospects: ProspectRepository,
        clock: Clock = utc_now
    ):
        self._store = store
        self._prospects = prospects
        self._clock = clock

    async def record_outcome(
        self,
        prospect_id: str,
        caller_id: str,
        outcome: str,
        notes: Optional[str] = None
    ) -> CallRecord:
        """
        Attach an outcome to the latest call and mirror it onto the prospect.

        Raises:
            ValidationError: Missing prospect, caller or outcome
            NotFoundError: Prospect does not exist
            NoCallHistoryError: No dialer-initiated call for this pair
            StorageError: Store unreachable (safe to retry)
        """
        if not prospect_id or not caller_id:
            raise ValidationError("prospectId and callerId are required")
        if not outcome or not outcome.strip():
            raise ValidationError("outcome is required")

        latest = await self._store.find_latest(prospect_id, caller_id)
        if latest is None or not latest.call_key:
            raise NoCallHistoryError(prospect_id, caller_id)

        prospect = await self._prospects.get_prospect(prospect_id)
        if prospect is None:
            raise NotFoundError(f"Prospect {prospect_id} not found")

        record = await self._store.upsert(
            latest.call_key,
            CallRecordUpdate(outcome=outcome, notes=notes)
        )

        contacted_at = self._clock()
        if not await self._prospects.mark_contacted(prospect_id, outcome, contacted_at):
            raise NotFoundError(f"Prospect {prospect_id} not found")

        logger.info(
            f"Outcome recorded: key={latest.call_key} prospect={prospect_id} "
            f"caller={caller_id} outcome={outcome}"
        )
        return record

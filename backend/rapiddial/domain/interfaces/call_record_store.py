"""
Call Record Store Interface
Keyed storage of call records with an idempotent merge-upsert
"""
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from rapiddial.domain.models.call_record import CallHistoryEntry, CallRecord, CallRecordUpdate


class CallRecordStore(ABC):
    """
    Abstract base class for call record storage.

    Implementations guarantee at most one record per call key, even when two
    upserts for an unseen key race. All methods raise StorageError when the
    backing store fails or times out.
    """

    @abstractmethod
    async def upsert(self, call_key: str, update: CallRecordUpdate) -> CallRecord:
        """
        Merge an update into the record for call_key, creating it if needed.

        New records start as status=pending, outcome="Call in progress",
        attempted_at=now; the update is applied on top. Fields absent from the
        update are left untouched.
        """
        pass

    @abstractmethod
    async def get(self, call_key: str) -> Optional[CallHistoryEntry]:
        """Point lookup by call key, with prospect display fields"""
        pass

    @abstractmethod
    async def find_latest(self, prospect_id: str, caller_id: str) -> Optional[CallRecord]:
        """Most recent record (by attempted_at) for a prospect/caller pair"""
        pass

    @abstractmethod
    async def list_history(
        self,
        limit: int = 100,
        offset: int = 0,
        caller_id: Optional[str] = None,
        search: Optional[str] = None
    ) -> Tuple[List[CallHistoryEntry], int]:
        """
        Page through call history, newest first.

        Returns:
            (entries, total matching records)
        """
        pass

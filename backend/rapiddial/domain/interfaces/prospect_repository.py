"""
Prospect Repository Interface
Read access to prospects and field reps, plus the two writes the engine makes
"""
from abc import ABC, abstractmethod
from typing import List, Optional
from datetime import datetime

from rapiddial.domain.models.prospect import FieldRep, Prospect


class ProspectRepository(ABC):
    """Abstract base class for prospect and field rep persistence"""

    @abstractmethod
    async def list_by_territory(self, territory: str) -> List[Prospect]:
        pass

    @abstractmethod
    async def get_prospect(self, prospect_id: str) -> Optional[Prospect]:
        pass

    @abstractmethod
    async def get_field_rep(self, field_rep_id: str) -> Optional[FieldRep]:
        pass

    @abstractmethod
    async def mark_contacted(self, prospect_id: str, outcome: str, contacted_at: datetime) -> bool:
        """
        Set last_contact_date and last_call_outcome.

        Idempotent for identical arguments. Returns False if the prospect
        does not exist.
        """
        pass

    @abstractmethod
    async def update_priority_score(self, prospect_id: str, score: int) -> bool:
        pass

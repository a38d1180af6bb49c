"""
Calling List Service
Loads a rep and their territory's prospects, then builds the calling list
"""
import logging

from rapiddial.core.exceptions import NotFoundError, ValidationError
from rapiddial.domain.interfaces.prospect_repository import ProspectRepository
from rapiddial.domain.services.calling_list import CallingList, CallingListGenerator
from rapiddial.domain.services.priority_scorer import PriorityScorer
from rapiddial.utils.time_utils import Clock, utc_now

logger = logging.getLogger(__name__)


class CallingListService:
    """Repository-backed entry points for calling-list generation and scoring"""

    def __init__(
        self,
        prospects: ProspectRepository,
        generator: CallingListGenerator,
        scorer: PriorityScorer,
        clock: Clock = utc_now
    ):
        self._prospects = prospects
        self._generator = generator
        self._scorer = scorer
        self._clock = clock

    async def get_calling_list(self, field_rep_id: str) -> CallingList:
        if not field_rep_id:
            raise ValidationError("field rep id is required")

        field_rep = await self._prospects.get_field_rep(field_rep_id)
        if field_rep is None:
            raise NotFoundError(f"Field rep {field_rep_id} not found")

        prospects = await self._prospects.list_by_territory(field_rep.territory)
        return self._generator.build(prospects, field_rep, self._clock())

    async def recalculate_priorities(self, territory: str) -> int:
        """Score every prospect in a territory and persist the scores"""
        if not territory:
            raise ValidationError("territory is required")

        prospects = await self._prospects.list_by_territory(territory)
        now = self._clock()

        updated = 0
        for scored in self._scorer.score_all(prospects, now):
            if await self._prospects.update_priority_score(scored.prospect.id, scored.score):
                updated += 1

        logger.info(f"Recalculated priorities for {updated} prospects in {territory}")
        return updated

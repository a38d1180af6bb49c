"""
Calling List Generator
Turns a territory's prospect pool into a prioritized, route-ordered call list
"""
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence
from datetime import datetime

from rapiddial.core.config import ConfigManager
from rapiddial.domain.models.prospect import FieldRep, Prospect
from rapiddial.domain.services.geo_partitioner import partition
from rapiddial.domain.services.priority_scorer import PriorityScorer
from rapiddial.domain.services.route_sequencer import route_drive_minutes, sequence

logger = logging.getLogger(__name__)


MAX_PROSPECTS = 50
CLUSTER_COUNT = 3


@dataclass
class CallingList:
    """Result of a calling-list generation"""
    field_rep_id: str
    territory: str
    prospects: List[Prospect]
    routed: bool
    estimated_drive_minutes: Optional[int] = None

    @property
    def count(self) -> int:
        return len(self.prospects)


class CallingListGenerator:
    """
    Builds a field rep's calling list.

    1. Keep prospects in the rep's territory.
    2. Score and sort by priority (stable), keep the top max_prospects.
    3. Without home coordinates, return that list in priority order.
    4. Otherwise split it into cluster_count latitude groups, route each group
       from the rep's home, and concatenate the routes in group order.
    """

    def __init__(
        self,
        scorer: PriorityScorer,
        max_prospects: int = MAX_PROSPECTS,
        cluster_count: int = CLUSTER_COUNT
    ):
        if max_prospects < 1 or cluster_count < 1:
            raise ValueError("max_prospects and cluster_count must be positive")

        self._scorer = scorer
        self.max_prospects = max_prospects
        self.cluster_count = cluster_count

    @classmethod
    def from_config(cls, config: ConfigManager, scorer: PriorityScorer) -> "CallingListGenerator":
        return cls(
            scorer=scorer,
            max_prospects=int(config.get("calling_list.max_prospects", MAX_PROSPECTS)),
            cluster_count=int(config.get("calling_list.cluster_count", CLUSTER_COUNT)),
        )

    def generate(
        self,
        all_prospects: Sequence[Prospect],
        field_rep: FieldRep,
        now: Optional[datetime] = None
    ) -> List[Prospect]:
        return self.build(all_prospects, field_rep, now).prospects

    def build(
        self,
        all_prospects: Sequence[Prospect],
        field_rep: FieldRep,
        now: Optional[datetime] = None
    ) -> CallingList:
        territory_prospects = [p for p in all_prospects if p.territory == field_rep.territory]

        ranked = self._scorer.rank(territory_prospects, now)
        top = [scored.prospect for scored in ranked[:self.max_prospects]]

        home = field_rep.home_coordinates
        if home is None:
            logger.warning(
                f"Field rep {field_rep.id} has no home coordinates; "
                f"returning {len(top)} prospects in priority order"
            )
            return CallingList(
                field_rep_id=field_rep.id,
                territory=field_rep.territory,
                prospects=top,
                routed=False,
            )

        routed: List[Prospect] = []
        drive_minutes = 0
        for group in partition(top, self.cluster_count):
            # Every group starts from home, not from the end of the previous group
            route = sequence(group, home.lat, home.lng)
            drive_minutes += route_drive_minutes(route, home.lat, home.lng)
            routed.extend(route)

        logger.info(
            f"Calling list for rep {field_rep.id} ({field_rep.territory}): "
            f"{len(routed)} of {len(territory_prospects)} prospects routed in "
            f"{self.cluster_count} groups, ~{drive_minutes} min driving"
        )

        return CallingList(
            field_rep_id=field_rep.id,
            territory=field_rep.territory,
            prospects=routed,
            routed=True,
            estimated_drive_minutes=drive_minutes,
        )

"""
Priority Scorer
Scores prospects by contact recency and specialty value
"""
import logging
from typing import Dict, List, Mapping, Optional, Sequence
from datetime import datetime

from rapiddial.core.config import ConfigManager, DEFAULT_ENGINE_CONFIG
from rapiddial.domain.models.prospect import Prospect, ScoredProspect
from rapiddial.utils.time_utils import Clock, ensure_utc, utc_now

logger = logging.getLogger(__name__)


BASE_SCORE = 100
MAX_SCORE = 300
POINTS_PER_DAY = 2
MAX_RECENCY_POINTS = 50  # Also awarded to never-contacted prospects

SPECIALTY_WEIGHTS: Dict[str, int] = dict(DEFAULT_ENGINE_CONFIG["scoring"]["specialty_weights"])
DEFAULT_SPECIALTY_WEIGHT: int = DEFAULT_ENGINE_CONFIG["scoring"]["default_specialty_weight"]


class PriorityScorer:
    """
    Computes a 100-300 priority score per prospect.

    score = 100
          + recency: 50 if never contacted, else min(2 * whole days since contact, 50)
          + specialty weight (unknown specialties get the default weight)
    capped at 300.
    """

    def __init__(
        self,
        specialty_weights: Optional[Mapping[str, int]] = None,
        default_weight: int = DEFAULT_SPECIALTY_WEIGHT,
        clock: Clock = utc_now
    ):
        weights = dict(SPECIALTY_WEIGHTS if specialty_weights is None else specialty_weights)
        if default_weight < 0 or any(w < 0 for w in weights.values()):
            raise ValueError("Specialty weights must be non-negative")

        self._weights = weights
        self._default_weight = default_weight
        self._clock = clock

    @classmethod
    def from_config(cls, config: ConfigManager, clock: Clock = utc_now) -> "PriorityScorer":
        return cls(
            specialty_weights=config.get("scoring.specialty_weights", SPECIALTY_WEIGHTS),
            default_weight=config.get("scoring.default_specialty_weight", DEFAULT_SPECIALTY_WEIGHT),
            clock=clock,
        )

    def recency_points(self, last_contact_date: Optional[datetime], now: datetime) -> int:
        if last_contact_date is None:
            return MAX_RECENCY_POINTS

        days = (ensure_utc(now) - ensure_utc(last_contact_date)).days
        # Contact dates in the future count as "just contacted"
        return max(0, min(days * POINTS_PER_DAY, MAX_RECENCY_POINTS))

    def specialty_points(self, specialty: Optional[str]) -> int:
        return self._weights.get(specialty or "", self._default_weight)

    def score(self, prospect: Prospect, now: Optional[datetime] = None) -> int:
        now = now or self._clock()
        total = (
            BASE_SCORE
            + self.recency_points(prospect.last_contact_date, now)
            + self.specialty_points(prospect.specialty)
        )
        return min(total, MAX_SCORE)

    def score_all(
        self,
        prospects: Sequence[Prospect],
        now: Optional[datetime] = None
    ) -> List[ScoredProspect]:
        """Score a batch against a single reference time"""
        now = now or self._clock()
        return [ScoredProspect(prospect=p, score=self.score(p, now)) for p in prospects]

    def rank(
        self,
        prospects: Sequence[Prospect],
        now: Optional[datetime] = None
    ) -> List[ScoredProspect]:
        """Highest score first; ties keep their input order"""
        return sorted(self.score_all(prospects, now), key=lambda s: s.score, reverse=True)

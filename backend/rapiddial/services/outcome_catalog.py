"""
Call Outcome Catalog Service
Outcome labels offered to callers, cached in Redis
"""
import json
import logging
from typing import List, Optional

import redis.asyncio as redis

from rapiddial.core.exceptions import NotFoundError
from rapiddial.domain.models.call_outcome import (
    CallOutcomeCreate,
    CallOutcomeOption,
    CallOutcomePatch,
    DEFAULT_CALL_OUTCOMES,
)
from rapiddial.infrastructure.storage.call_outcome_repository import SqlCallOutcomeRepository

logger = logging.getLogger(__name__)


class OutcomeCatalogCache:
    """
    Redis cache for the outcome list.

    The list is stored as one JSON document under CACHE_KEY with a TTL.
    Redis failures are logged and treated as a miss; the catalog then reads
    storage directly.
    """

    CACHE_KEY = "call_outcomes:all"

    def __init__(self, redis_client: "redis.Redis", ttl_seconds: int = 300):
        self._redis = redis_client
        self._ttl = ttl_seconds

    async def get(self) -> Optional[List[CallOutcomeOption]]:
        try:
            cached = await self._redis.get(self.CACHE_KEY)
        except redis.RedisError as e:
            logger.warning(f"Outcome cache read failed: {e}")
            return None

        if cached is None:
            return None
        return [CallOutcomeOption(**item) for item in json.loads(cached)]

    async def set(self, outcomes: List[CallOutcomeOption]) -> None:
        payload = json.dumps([o.model_dump() for o in outcomes])
        try:
            await self._redis.setex(self.CACHE_KEY, self._ttl, payload)
        except redis.RedisError as e:
            logger.warning(f"Outcome cache write failed: {e}")

    async def invalidate(self) -> None:
        try:
            await self._redis.delete(self.CACHE_KEY)
        except redis.RedisError as e:
            logger.warning(f"Outcome cache invalidation failed: {e}")
            return
        logger.info("Call outcome cache invalidated")


class OutcomeCatalog:
    """Lists and edits call outcome labels; every write invalidates the cache"""

    def __init__(
        self,
        repository: SqlCallOutcomeRepository,
        cache: Optional[OutcomeCatalogCache] = None
    ):
        self._repository = repository
        self._cache = cache

    @property
    def cache_enabled(self) -> bool:
        return self._cache is not None

    async def seed_defaults(self) -> int:
        added = await self._repository.seed(DEFAULT_CALL_OUTCOMES)
        if added:
            await self._invalidate()
        return added

    async def list_outcomes(self) -> List[CallOutcomeOption]:
        if self._cache is not None:
            cached = await self._cache.get()
            if cached is not None:
                return cached

        outcomes = await self._repository.list_all()
        if self._cache is not None:
            await self._cache.set(outcomes)
        return outcomes

    async def create_outcome(self, data: CallOutcomeCreate) -> CallOutcomeOption:
        created = await self._repository.create(data)
        await self._invalidate()
        logger.info(f"Call outcome created: {created.label}")
        return created

    async def update_outcome(self, outcome_id: str, patch: CallOutcomePatch) -> CallOutcomeOption:
        updated = await self._repository.update(outcome_id, patch)
        if updated is None:
            raise NotFoundError(f"Call outcome {outcome_id} not found")
        await self._invalidate()
        return updated

    async def delete_outcome(self, outcome_id: str) -> None:
        if not await self._repository.delete(outcome_id):
            raise NotFoundError(f"Call outcome {outcome_id} not found")
        await self._invalidate()

    async def _invalidate(self) -> None:
        if self._cache is not None:
            await self._cache.invalidate()

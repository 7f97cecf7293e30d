"""
Redis Training Lock - Infrastructure Layer

Serialises training runs across API processes and Celery workers with a
Redis lock. Acquisition never blocks: a second run fails fast instead of
queueing behind the first one.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable

import structlog
from redis.asyncio import Redis
from redis.exceptions import LockError

from src.domain.entities.errors import TrainingInProgressError
from src.domain.ports.training_lock import ITrainingLock
from src.shared import TRAINING_LOCK_NAME

logger = structlog.get_logger(__name__)


class RedisTrainingLock(ITrainingLock):
    """Non-blocking distributed lock around a training run."""

    def __init__(
        self,
        redis_url: str,
        name: str = TRAINING_LOCK_NAME,
        timeout: float = 3600,
        client_factory: Callable[[str], Redis] = Redis.from_url,
    ):
        """
        Args:
            redis_url: Redis connection URL
            name: Lock key
            timeout: Seconds after which a lock left by a crashed run expires
            client_factory: Builds the Redis client for each run
        """
        self.redis_url = redis_url
        self.name = name
        self.timeout = timeout
        self._client_factory = client_factory

    @asynccontextmanager
    async def hold(self) -> AsyncIterator[None]:
        # One client per run: Celery tasks drive each run in a fresh event loop.
        client = self._client_factory(self.redis_url)
        lock = client.lock(self.name, timeout=self.timeout)
        try:
            acquired = await lock.acquire(blocking=False)
            if not acquired:
                logger.warning("training.lock_busy", lock=self.name)
                raise TrainingInProgressError()

            logger.debug("training.lock_acquired", lock=self.name)
            try:
                yield
            finally:
                try:
                    await lock.release()
                except LockError as e:
                    logger.warning(
                        "training.lock_release_failed", lock=self.name, error=str(e)
                    )
        finally:
            await client.aclose()

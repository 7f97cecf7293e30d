"""Infrastructure services package."""

from . import tasks
from .celery_config import celery_app
from .training_lock import RedisTrainingLock

__all__ = ["celery_app", "tasks", "RedisTrainingLock"]

"""Domain ports package."""

from .training_lock import ITrainingLock

__all__ = ["ITrainingLock"]

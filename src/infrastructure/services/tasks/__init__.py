"""Celery task implementations for infrastructure services."""

from .base import CallbackTask, logger
from .retraining import weekly_model_update

__all__ = ["CallbackTask", "logger", "weekly_model_update"]

"""
Infrastructure Services - Celery Configuration

This module contains the Celery configuration and the beat schedule
for periodic model retraining.
"""

import os
from typing import Optional

from celery import Celery
from celery.schedules import crontab


def create_celery_app(
    broker_url: Optional[str] = None,
    backend_url: Optional[str] = None,
    retrain_day_of_week: Optional[str] = None,
    retrain_hour: Optional[str] = None,
    retrain_minute: Optional[str] = None,
    range_days: Optional[int] = None,
) -> Celery:
    """
    Create and configure Celery application.

    Args:
        broker_url: Message broker URL (uses env var if not provided)
        backend_url: Result backend URL (uses env var if not provided)
        retrain_day_of_week: Crontab weekday of the weekly update (Monday)
        retrain_hour: Crontab hour of the weekly update (03, UTC)
        retrain_minute: Crontab minute of the weekly update
        range_days: History window passed to the weekly update

    Returns:
        Configured Celery application
    """
    effective_broker = broker_url or os.getenv(
        "CELERY_BROKER_URL", "redis://redis:6379/0"
    )
    effective_backend = backend_url or os.getenv(
        "CELERY_RESULT_BACKEND", "redis://redis:6379/0"
    )
    day_of_week = retrain_day_of_week or os.getenv(
        "FORECAST_RETRAIN_DAY_OF_WEEK", "mon"
    )
    hour = retrain_hour or os.getenv("FORECAST_RETRAIN_HOUR", "3")
    minute = retrain_minute or os.getenv("FORECAST_RETRAIN_MINUTE", "0")
    window = range_days or int(os.getenv("FORECAST_WEEKLY_RANGE_DAYS", "120"))

    app = Celery(
        "crowdcast_worker",
        broker=effective_broker,
        backend=effective_backend,
        include=["src.infrastructure.services.tasks.retraining"],
    )

    app.conf.update(
        # Task configuration
        task_serializer="json",
        accept_content=["json"],
        result_serializer="json",
        timezone="UTC",
        enable_utc=True,
        # Result backend configuration
        result_expires=3600,  # 1 hour
        # Task routing
        task_routes={
            "weekly_model_update": {"queue": "model_training"},
        },
        # Worker configuration
        worker_prefetch_multiplier=1,
        task_acks_late=True,
        worker_max_tasks_per_child=100,
        # Beat configuration
        beat_schedule={
            "weekly-model-update": {
                "task": "weekly_model_update",
                "schedule": crontab(
                    day_of_week=day_of_week, hour=hour, minute=minute
                ),
                "kwargs": {"range_days": window},
            },
        },
    )

    return app


celery_app = create_celery_app()

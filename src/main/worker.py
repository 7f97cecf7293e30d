#!/usr/bin/env python3
"""
Worker Entry Point - Main Layer

This module serves as the entry point for the Celery worker.
Similar to app.py, it initializes the necessary components and starts the worker
together with the embedded beat scheduler that triggers weekly retraining.
"""

import os

from src.main.config import get_settings
from src.shared import configure_logging, get_logger, update_logging_from_settings

# Configure logging with basic settings first
configure_logging()

# Load settings
settings = get_settings()

# Update logging with complete settings
update_logging_from_settings(settings)

# Get structured logger
logger = get_logger(__name__)


def create_worker():
    """
    Configure and return the Celery worker.

    Similar to create_app() in app.py, this function configures
    the worker with proper settings and environment.
    """
    settings = get_settings()

    # Task modules read their own settings, keep them in sync
    os.environ.setdefault("CELERY_BROKER_URL", settings.celery.broker_url)
    os.environ.setdefault("CELERY_RESULT_BACKEND", settings.celery.result_backend_url)

    from src.infrastructure.services.celery_config import create_celery_app

    worker_app = create_celery_app(
        broker_url=settings.celery.broker_url,
        backend_url=settings.celery.result_backend_url,
        retrain_day_of_week=settings.forecast.retrain_day_of_week,
        retrain_hour=settings.forecast.retrain_hour,
        retrain_minute=settings.forecast.retrain_minute,
        range_days=settings.forecast.weekly_range_days,
    )

    logger.info(
        "Configuring Celery worker",
        broker_url=settings.celery.broker_url,
        backend_url=settings.celery.result_backend_url,
        app_name=worker_app.main,
        retrain_schedule=(
            f"{settings.forecast.retrain_day_of_week} "
            f"{settings.forecast.retrain_hour}:{settings.forecast.retrain_minute}"
        ),
    )

    return worker_app


def main():
    """Main entry point for Celery worker."""

    logger.info("Starting Celery worker")

    worker_app = create_worker()

    worker_app.worker_main(
        [
            "worker",
            "--beat",
            "--loglevel=info",
            "--queues=model_training",
            "--concurrency=1",  # Training runs are serialised anyway
        ]
    )


if __name__ == "__main__":
    main()

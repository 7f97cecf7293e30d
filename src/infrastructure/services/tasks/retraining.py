"""Celery tasks that refresh the forecasting artifact bundle."""

import asyncio
from typing import Any, Dict, Optional

from src.infrastructure.services.celery_config import celery_app
from src.infrastructure.services.tasks.base import CallbackTask, logger
from src.infrastructure.settings import get_settings


@celery_app.task(bind=True, base=CallbackTask, name="weekly_model_update")
def weekly_model_update(self, range_days: Optional[int] = None) -> Dict[str, Any]:
    """Retrain on the trailing event window and replace the stored bundle."""

    from src.application.use_cases.model_training_use_case import (
        ModelTrainingUseCase,
    )
    from src.infrastructure.database.mongo_database import MongoDatabase
    from src.infrastructure.repositories.access_event_repository import (
        AccessEventRepository,
    )
    from src.infrastructure.repositories.file_artifact_store import (
        FileArtifactStore,
    )
    from src.infrastructure.repositories.gridfs_artifact_store import (
        GridFSArtifactStore,
    )
    from src.infrastructure.services.training_lock import RedisTrainingLock
    from src.shared import EnumArtifactsBackend

    settings = get_settings()
    window = range_days or settings.forecast.weekly_range_days

    logger.info("Starting weekly model update", task_id=self.request.id, days=window)

    database = MongoDatabase(
        mongo_uri=settings.database.mongo_uri,
        db_name=settings.database.database_name,
        events_collection=settings.forecast.events_collection,
        timestamp_field=settings.forecast.timestamp_field,
    )
    try:
        event_repository = AccessEventRepository(
            database,
            collection_name=settings.forecast.events_collection,
            timestamp_field=settings.forecast.timestamp_field,
        )
        if settings.artifacts.backend == EnumArtifactsBackend.GRIDFS:
            artifact_store = GridFSArtifactStore(
                mongo_client=database.client,
                database_name=settings.database.database_name,
                collection=settings.artifacts.gridfs_collection,
            )
        else:
            artifact_store = FileArtifactStore(settings.artifacts.path)

        training_lock = None
        if settings.forecast.training_lock_enabled:
            training_lock = RedisTrainingLock(
                settings.forecast.redis_url,
                timeout=settings.forecast.training_lock_timeout,
            )

        use_case = ModelTrainingUseCase(
            event_repository=event_repository,
            artifact_store=artifact_store,
            training_lock=training_lock,
            timezone_name=settings.forecast.timezone,
            max_iters=settings.forecast.kmeans_max_iters,
        )
        report = asyncio.run(use_case.weekly_update(range_days=window))
    finally:
        database.close()

    return report.model_dump(mode="json")

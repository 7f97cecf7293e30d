"""
Dependency container injection module - Main Layer

This module implements the dependency injection container
to simplify the management and lifecycle of dependencies
in the application.
"""

from contextlib import asynccontextmanager

from dependency_injector import containers, providers

from src.application.use_cases.model_prediction_use_case import ModelPredictionUseCase
from src.application.use_cases.model_training_use_case import ModelTrainingUseCase
from src.infrastructure.database import MongoDatabase
from src.infrastructure.repositories.access_event_repository import (
    AccessEventRepository,
)
from src.infrastructure.repositories.file_artifact_store import FileArtifactStore
from src.infrastructure.repositories.gridfs_artifact_store import (
    GridFSArtifactStore,
)
from src.infrastructure.services.training_lock import RedisTrainingLock
from src.shared import get_logger

from .config import AppSettings

logger = get_logger(__name__)


def _enum_value(value):
    return value.value if hasattr(value, "value") else str(value)


def _lock_mode(enabled) -> str:
    return "enabled" if enabled else "disabled"


class AppContainer(containers.DeclarativeContainer):
    """Composition Root using dependecy-injector."""

    wiring_config = containers.WiringConfiguration(packages=["..presentation"])

    # Settings
    config = providers.Configuration()

    # Infrastructure
    mongo_database = providers.Singleton(
        MongoDatabase,
        mongo_uri=config.database.mongo_uri,
        db_name=config.database.database_name,
        events_collection=config.forecast.events_collection,
        timestamp_field=config.forecast.timestamp_field,
    )

    event_repository = providers.Singleton(
        AccessEventRepository,
        mongo_database=mongo_database,
        collection_name=config.forecast.events_collection,
        timestamp_field=config.forecast.timestamp_field,
    )

    artifact_store = providers.Selector(
        providers.Callable(_enum_value, config.artifacts.backend),
        file=providers.Singleton(FileArtifactStore, path=config.artifacts.path),
        gridfs=providers.Singleton(
            GridFSArtifactStore,
            mongo_client=providers.Callable(lambda db: db.client, mongo_database),
            database_name=config.database.database_name,
            collection=config.artifacts.gridfs_collection,
        ),
    )

    training_lock = providers.Selector(
        providers.Callable(_lock_mode, config.forecast.training_lock_enabled),
        enabled=providers.Singleton(
            RedisTrainingLock,
            redis_url=config.forecast.redis_url,
            timeout=config.forecast.training_lock_timeout,
        ),
        disabled=providers.Object(None),
    )

    # Application (use cases)
    model_training_use_case = providers.Factory(
        ModelTrainingUseCase,
        event_repository=event_repository,
        artifact_store=artifact_store,
        training_lock=training_lock,
        timezone_name=config.forecast.timezone,
        max_iters=config.forecast.kmeans_max_iters,
    )

    model_prediction_use_case = providers.Factory(
        ModelPredictionUseCase,
        artifact_store=artifact_store,
        suggestion_days=config.forecast.suggestion_days,
        suggestion_hours=config.forecast.suggestion_hours,
    )


# -------------------------
# Global Container Instance
# -------------------------
_app_container: AppContainer | None = None


def init_container(settings: AppSettings) -> AppContainer:
    """Initialize global container with application settings."""

    global _app_container

    container = AppContainer()
    container.config.from_pydantic(settings)
    _app_container = container
    return container


def get_container() -> AppContainer:
    """Get the initialized global container."""

    if _app_container is None:
        raise RuntimeError("Container has not been initialized yet")

    return _app_container


@asynccontextmanager
async def app_lifespan():
    """
    Centralized lifecycle management for external resources.

    Used by the FastAPI lifespan to ensure the event indexes exist on
    startup and to close the MongoDB client on shutdown.
    """
    container = get_container()

    mongo_database = container.mongo_database()

    try:
        logger.info("container.mongo.ensure_connection")
        await mongo_database.create_indexes()

        logger.info("container.resources.initialized")
        yield container

    finally:
        logger.info("container.mongo.close")
        mongo_database.close()

        logger.info("container.resources.shutdown")

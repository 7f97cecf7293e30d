"""Infrastructure-level configuration helpers for background workers."""

from __future__ import annotations

from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.shared import EnumArtifactsBackend


class _DatabaseSettings(BaseSettings):
    mongo_uri: str = Field(
        default="mongodb://localhost:27017/crowdcast",
        validation_alias=AliasChoices("DB_MONGO_URI", "MONGO_URI"),
        description="MongoDB connection URI",
    )
    database_name: str = Field(
        default="crowdcast",
        validation_alias=AliasChoices("DB_DATABASE_NAME", "DATABASE_NAME"),
        description="MongoDB database name",
    )

    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")


class _ForecastSettings(BaseSettings):
    timezone: str = Field(
        default="UTC",
        validation_alias=AliasChoices("FORECAST_TIMEZONE", "TZ_NAME"),
        description="Timezone used to bucket events into weekday/hour slots",
    )
    events_collection: str = Field(
        default="access_events",
        validation_alias=AliasChoices("FORECAST_EVENTS_COLLECTION"),
        description="Collection holding raw access events",
    )
    timestamp_field: str = Field(
        default="timestamp",
        validation_alias=AliasChoices("FORECAST_TIMESTAMP_FIELD"),
        description="Event timestamp field",
    )
    weekly_range_days: int = Field(
        default=120,
        validation_alias=AliasChoices("FORECAST_WEEKLY_RANGE_DAYS"),
        description="Days of history used by the weekly update",
    )
    kmeans_max_iters: int = Field(
        default=100,
        validation_alias=AliasChoices("FORECAST_KMEANS_MAX_ITERS"),
        description="Iteration cap for k-means",
    )
    training_lock_enabled: bool = Field(
        default=True,
        validation_alias=AliasChoices("FORECAST_TRAINING_LOCK_ENABLED"),
        description="Serialise training runs with a Redis lock",
    )
    training_lock_timeout: int = Field(
        default=3600,
        validation_alias=AliasChoices("FORECAST_TRAINING_LOCK_TIMEOUT"),
        description="Seconds before an abandoned training lock expires",
    )
    redis_url: str = Field(
        default="redis://redis:6379/0",
        validation_alias=AliasChoices("FORECAST_REDIS_URL"),
        description="Redis URL used by the training lock",
    )

    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")


class _ArtifactSettings(BaseSettings):
    backend: EnumArtifactsBackend = Field(
        default=EnumArtifactsBackend.FILE,
        validation_alias=AliasChoices("ARTIFACTS_BACKEND"),
        description="Artifact store backend",
    )
    path: str = Field(
        default="artifacts/model.json",
        validation_alias=AliasChoices("ARTIFACTS_PATH"),
        description="Bundle path for the file backend",
    )
    gridfs_collection: str = Field(
        default="model_artifacts",
        validation_alias=AliasChoices("ARTIFACTS_GRIDFS_COLLECTION"),
        description="GridFS bucket for the gridfs backend",
    )

    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")


class InfrastructureSettings(BaseSettings):
    database: _DatabaseSettings = Field(default_factory=_DatabaseSettings)
    forecast: _ForecastSettings = Field(default_factory=_ForecastSettings)
    artifacts: _ArtifactSettings = Field(default_factory=_ArtifactSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )


_settings: Optional[InfrastructureSettings] = None


def get_settings() -> InfrastructureSettings:
    """Lazy-load infrastructure settings for Celery workers."""
    global _settings
    if _settings is None:
        _settings = InfrastructureSettings()
    return _settings

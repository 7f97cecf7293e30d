"""
Application Settings - Main Layer

Use Pydantic Settings for configuration management.
This module handles configuration settings provided using
environment variables, .env files and default values.
"""

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.shared import (
    DEFAULT_SUGGESTION_DAYS,
    DEFAULT_SUGGESTION_HOURS,
    EnumArtifactsBackend,
    EnumEnvironment,
    EnumLogLevel,
)


class DatabaseSettings(BaseSettings):
    """Database configuration settings."""

    mongo_uri: str = Field(
        default="mongodb://localhost:27017/crowdcast",
        description="MongoDB connection URI",
    )
    database_name: str = Field(
        default="crowdcast", description="Name of the MongoDB database"
    )

    model_config = SettingsConfigDict(
        env_prefix="DB_", case_sensitive=False, extra="ignore"
    )


class APISettings(BaseSettings):
    """HTTP API configuration settings."""

    title: str = Field(default="Crowdcast", description="API title")
    description: str = Field(
        default="Congestion forecasting service for access-controlled spaces",
        description="API description",
    )
    version: str = Field(default="1.0.0", description="API version")
    port: int = Field(default=8000, description="Port to bind the server")

    model_config = SettingsConfigDict(
        env_prefix="API_", case_sensitive=False, extra="ignore"
    )


class CelerySettings(BaseSettings):
    """Celery configuration settings."""

    broker_url: str = Field(
        default="redis://redis:6379/0",
        description="Message broker URL",
        alias="CELERY_BROKER_URL",
    )
    result_backend_url: str = Field(
        default="redis://redis:6379/0",
        description="Result backend URL",
        alias="CELERY_RESULT_BACKEND",
    )

    model_config = SettingsConfigDict(
        env_prefix="CELERY_", case_sensitive=False, extra="ignore"
    )


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: EnumLogLevel = Field(default=EnumLogLevel.INFO, description="Logging level")
    file_path: Optional[str] = Field(
        default=None, description="Log file path (if None, logs to console)"
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_", case_sensitive=False, extra="ignore"
    )


class ForecastSettings(BaseSettings):
    """Forecasting pipeline settings."""

    timezone: str = Field(
        default="UTC", description="Timezone used to bucket events by weekday/hour"
    )
    events_collection: str = Field(
        default="access_events", description="Collection holding raw access events"
    )
    timestamp_field: str = Field(
        default="timestamp", description="Event timestamp field"
    )
    weekly_range_days: int = Field(
        default=120, ge=1, description="Days of history used by the weekly update"
    )
    retrain_day_of_week: str = Field(
        default="mon", description="Crontab weekday of the weekly update"
    )
    retrain_hour: str = Field(
        default="3", description="Crontab hour (UTC) of the weekly update"
    )
    retrain_minute: str = Field(
        default="0", description="Crontab minute of the weekly update"
    )
    suggestion_days: List[int] = Field(
        default_factory=lambda: list(DEFAULT_SUGGESTION_DAYS),
        description="Weekdays ranked by the suggestions endpoint (Sunday = 0)",
    )
    suggestion_hours: List[int] = Field(
        default_factory=lambda: list(DEFAULT_SUGGESTION_HOURS),
        description="Hour slots ranked by the suggestions endpoint",
    )
    kmeans_max_iters: int = Field(
        default=100, ge=1, description="Iteration cap for k-means"
    )
    training_lock_enabled: bool = Field(
        default=True, description="Serialise training runs with a Redis lock"
    )
    training_lock_timeout: int = Field(
        default=3600, ge=1, description="Seconds before an abandoned lock expires"
    )
    redis_url: str = Field(
        default="redis://redis:6379/0",
        description="Redis URL used by the training lock",
    )

    model_config = SettingsConfigDict(
        env_prefix="FORECAST_", case_sensitive=False, extra="ignore"
    )

    @field_validator("suggestion_days")
    @classmethod
    def _check_days(cls, value: List[int]) -> List[int]:
        if any(day < 0 or day > 6 for day in value):
            raise ValueError("suggestion_days must be within 0..6")
        return value

    @field_validator("suggestion_hours")
    @classmethod
    def _check_hours(cls, value: List[int]) -> List[int]:
        if any(hour < 0 or hour > 23 for hour in value):
            raise ValueError("suggestion_hours must be within 0..23")
        return value


class ArtifactSettings(BaseSettings):
    """Artifact store settings."""

    backend: EnumArtifactsBackend = Field(
        default=EnumArtifactsBackend.FILE, description="Artifact store backend"
    )
    path: str = Field(
        default="artifacts/model.json",
        description="Bundle path for the file backend",
    )
    gridfs_collection: str = Field(
        default="model_artifacts", description="GridFS bucket for the gridfs backend"
    )

    model_config = SettingsConfigDict(
        env_prefix="ARTIFACTS_", case_sensitive=False, extra="ignore"
    )


class AppSettings(BaseSettings):
    """Main application settings, aggregating all sub-settings."""

    environment: EnumEnvironment = Field(
        default=EnumEnvironment.DEVELOPMENT, description="Application environment"
    )

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    api: APISettings = Field(default_factory=APISettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    celery: CelerySettings = Field(default_factory=CelerySettings)
    forecast: ForecastSettings = Field(default_factory=ForecastSettings)
    artifacts: ArtifactSettings = Field(default_factory=ArtifactSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


def get_settings() -> AppSettings:
    """
    Get application settings instance Factory.

    Used to be mocked in tests, allowing different settings based on enviroment.
    """
    return AppSettings()

"""
Application DTOs - Training

This module contains Data Transfer Objects (DTOs) for training operations.
DTOs are used to transfer data between layers and define the API contracts.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class TrainingRequestDTO(BaseModel):
    """DTO for a training request over an optional time range."""

    model_config = ConfigDict(populate_by_name=True)

    start: Optional[datetime] = Field(
        default=None,
        alias="from",
        description="Only use events at or after this instant (inclusive, UTC)",
    )
    end: Optional[datetime] = Field(
        default=None,
        alias="to",
        description="Only use events at or before this instant (inclusive, UTC)",
    )

    @model_validator(mode="after")
    def _check_range(self) -> "TrainingRequestDTO":
        if self.start and self.end and self.start > self.end:
            raise ValueError("'from' must not be later than 'to'")
        return self


class WeeklyUpdateRequestDTO(BaseModel):
    """DTO for a rolling-window retraining request."""

    range_days: int = Field(
        default=120,
        ge=1,
        le=3650,
        description="Number of days of recent events to train on",
    )


class BundleMetadataDTO(BaseModel):
    """Metadata attached to the persisted artifact bundle."""

    updated_at: datetime
    n: int = Field(description="Number of aggregated weekday/hour rows")
    version: int


class FitMetricsDTO(BaseModel):
    """In-sample fit of the regression line."""

    mae: float
    rmse: float
    r2: Optional[float] = None


class TrainingResponseDTO(BaseModel):
    """DTO returned by every persisted training run."""

    message: str
    artifacts_location: str
    metadata: BundleMetadataDTO
    metrics: FitMetricsDTO

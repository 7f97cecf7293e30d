"""
Application DTOs - Prediction

Data Transfer Objects for predictions, schedule suggestions and
congestion alerts served from the trained artifact bundle.
"""

from typing import List

from pydantic import BaseModel, Field

from src.application.dtos.training_dto import BundleMetadataDTO
from src.domain.entities.forecast import CongestionLevel


class PredictionRequestDTO(BaseModel):
    """Slot to forecast. Weekdays run from Sunday (0) to Saturday (6)."""

    weekday: int = Field(ge=0, le=6, description="Day of week, Sunday = 0")
    hour_slot: int = Field(ge=0, le=23, description="Hour of day (0-23)")


class PredictionDTO(BaseModel):
    value: float = Field(description="Forecasted number of events in the slot")
    level: CongestionLevel


class PredictionResponseDTO(BaseModel):
    """DTO returned by the prediction endpoint."""

    prediction: PredictionDTO
    metadata: BundleMetadataDTO


class SuggestionDTO(BaseModel):
    weekday: int
    hour_slot: int
    value: float
    level: CongestionLevel


class SuggestionsResponseDTO(BaseModel):
    """Grid slots ranked by forecast, highest first."""

    top: List[SuggestionDTO]


class AlertDTO(BaseModel):
    type: str = "congestion"
    weekday: int
    hour_slot: int
    expected: float
    level: str


class AlertsResponseDTO(BaseModel):
    threshold: str
    alerts: List[AlertDTO]

"""
ML Router - Presentation Layer

This module defines the FastAPI router for the forecasting endpoints:
training runs, single-slot predictions, ranked suggestions and
congestion alerts.
"""

from typing import NoReturn, Optional

import structlog
from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Query, status

from src.application.dtos.prediction_dto import (
    AlertsResponseDTO,
    PredictionRequestDTO,
    PredictionResponseDTO,
    SuggestionsResponseDTO,
)
from src.application.dtos.training_dto import (
    TrainingRequestDTO,
    TrainingResponseDTO,
    WeeklyUpdateRequestDTO,
)
from src.application.use_cases.model_prediction_use_case import ModelPredictionUseCase
from src.application.use_cases.model_training_use_case import ModelTrainingUseCase
from src.domain.entities.errors import (
    ArtifactStoreError,
    InsufficientDataError,
    InvalidInputError,
    ModelNotTrainedError,
    NoTrainingDataError,
    TrainingInProgressError,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/ml", tags=["Forecasting"])

_STATUS_BY_ERROR = (
    (ModelNotTrainedError, status.HTTP_404_NOT_FOUND),
    (NoTrainingDataError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (InvalidInputError, status.HTTP_400_BAD_REQUEST),
    (InsufficientDataError, status.HTTP_400_BAD_REQUEST),
    (TrainingInProgressError, status.HTTP_409_CONFLICT),
)


def _raise_http_error(error: Exception, action: str) -> NoReturn:
    """Translate a use case failure into the matching HTTP error."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            raise HTTPException(status_code=status_code, detail=str(error))

    if isinstance(error, ArtifactStoreError):
        logger.error(f"Artifact store failure during {action}", error=str(error))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Artifact store unavailable",
        )

    logger.error(f"Failed to {action}", error=str(error), exc_info=error)
    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal server error",
    )


@router.post(
    "/train",
    response_model=TrainingResponseDTO,
    summary="Train on events within an optional time range",
)
@inject
async def train(
    request: Optional[TrainingRequestDTO] = None,
    training_use_case: ModelTrainingUseCase = Depends(
        Provide["model_training_use_case"]
    ),
) -> TrainingResponseDTO:
    """
    Train the forecasting models and replace the stored bundle.

    Without a body (or without ``from``/``to``) every stored event is used.
    """
    request = request or TrainingRequestDTO()
    try:
        return await training_use_case.execute(start=request.start, end=request.end)
    except Exception as e:
        _raise_http_error(e, "train model")


@router.post(
    "/predict",
    response_model=PredictionResponseDTO,
    summary="Forecast one weekday/hour slot",
)
@inject
async def predict(
    request: PredictionRequestDTO,
    prediction_use_case: ModelPredictionUseCase = Depends(
        Provide["model_prediction_use_case"]
    ),
) -> PredictionResponseDTO:
    """Return the forecast count and congestion level for a slot."""
    try:
        return await prediction_use_case.predict(
            weekday=request.weekday, hour_slot=request.hour_slot
        )
    except Exception as e:
        _raise_http_error(e, "predict")


@router.get(
    "/suggestions",
    response_model=SuggestionsResponseDTO,
    summary="Rank the weekday/hour grid by forecast",
)
@inject
async def get_suggestions(
    top: int = Query(10, ge=1, le=168, description="Number of slots to return"),
    prediction_use_case: ModelPredictionUseCase = Depends(
        Provide["model_prediction_use_case"]
    ),
) -> SuggestionsResponseDTO:
    try:
        return await prediction_use_case.suggestions(top=top)
    except Exception as e:
        _raise_http_error(e, "build suggestions")


@router.get(
    "/alerts",
    response_model=AlertsResponseDTO,
    summary="Congestion alerts at or above a severity level",
)
@inject
async def get_alerts(
    threshold: str = Query("high", description="Minimum level: low, medium, high"),
    top: Optional[int] = Query(
        None, ge=1, le=168, description="Only consider the top ranked slots"
    ),
    prediction_use_case: ModelPredictionUseCase = Depends(
        Provide["model_prediction_use_case"]
    ),
) -> AlertsResponseDTO:
    try:
        return await prediction_use_case.alerts(threshold=threshold, top=top)
    except Exception as e:
        _raise_http_error(e, "build alerts")


@router.post(
    "/train-historical",
    response_model=TrainingResponseDTO,
    summary="Train on the full event history",
)
@inject
async def train_historical(
    training_use_case: ModelTrainingUseCase = Depends(
        Provide["model_training_use_case"]
    ),
) -> TrainingResponseDTO:
    try:
        return await training_use_case.train_historical()
    except Exception as e:
        _raise_http_error(e, "train on historical events")


@router.post(
    "/weekly-update",
    response_model=TrainingResponseDTO,
    summary="Retrain on the most recent days of events",
)
@inject
async def weekly_update(
    request: Optional[WeeklyUpdateRequestDTO] = None,
    training_use_case: ModelTrainingUseCase = Depends(
        Provide["model_training_use_case"]
    ),
) -> TrainingResponseDTO:
    request = request or WeeklyUpdateRequestDTO()
    try:
        return await training_use_case.weekly_update(range_days=request.range_days)
    except Exception as e:
        _raise_http_error(e, "run weekly update")

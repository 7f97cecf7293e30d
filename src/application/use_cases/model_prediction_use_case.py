"""
Application Use Case - Model Prediction

Serves forecasts from the persisted artifact bundle. Every request loads
the bundle once and works on that snapshot, so a concurrent retrain never
shows up half way through a request.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

import structlog

from src.application.dtos.prediction_dto import (
    AlertDTO,
    AlertsResponseDTO,
    PredictionDTO,
    PredictionResponseDTO,
    SuggestionDTO,
    SuggestionsResponseDTO,
)
from src.application.dtos.training_dto import BundleMetadataDTO
from src.domain.entities.errors import ModelNotTrainedError
from src.domain.entities.forecast import ArtifactBundle, Prediction, Suggestion
from src.domain.repositories.artifact_store import IArtifactStore
from src.domain.services.alerts import build_congestion_alerts
from src.domain.services.predictor import predict_congestion
from src.domain.services.suggestions import DEFAULT_TOP, top_suggestions
from src.shared.consts import DEFAULT_SUGGESTION_DAYS, DEFAULT_SUGGESTION_HOURS

logger = structlog.get_logger(__name__)


class ModelPredictionUseCase:
    """Coordinates prediction, suggestion and alert flows."""

    def __init__(
        self,
        artifact_store: IArtifactStore,
        suggestion_days: Optional[Sequence[int]] = None,
        suggestion_hours: Optional[Sequence[int]] = None,
    ):
        self.artifact_store = artifact_store
        self.suggestion_days = list(suggestion_days or DEFAULT_SUGGESTION_DAYS)
        self.suggestion_hours = list(suggestion_hours or DEFAULT_SUGGESTION_HOURS)

    async def predict(self, weekday: int, hour_slot: int) -> PredictionResponseDTO:
        """Forecast a single weekday/hour slot."""
        bundle = await self._load_bundle()
        prediction = predict_congestion(bundle, weekday, hour_slot)

        logger.info(
            "prediction.completed",
            weekday=weekday,
            hour_slot=hour_slot,
            value=prediction.value,
            level=prediction.level.value,
        )

        return PredictionResponseDTO(
            prediction=PredictionDTO(value=prediction.value, level=prediction.level),
            metadata=_metadata_dto(bundle),
        )

    async def suggestions(self, top: int = DEFAULT_TOP) -> SuggestionsResponseDTO:
        """Rank the configured weekday/hour grid by forecast."""
        bundle = await self._load_bundle()
        ranked = self._rank(bundle, top)
        return SuggestionsResponseDTO(top=[_suggestion_dto(s) for s in ranked])

    async def alerts(
        self, threshold: str = "high", top: Optional[int] = None
    ) -> AlertsResponseDTO:
        """
        Build congestion alerts from the ranked grid.

        Args:
            threshold: Minimum severity level to alert on
            top: Only consider the ``top`` highest forecasts (whole grid if None)
        """
        bundle = await self._load_bundle()
        grid_size = len(self.suggestion_days) * len(self.suggestion_hours)
        ranked = self._rank(bundle, grid_size if top is None else top)
        alerts = build_congestion_alerts(ranked, threshold)

        logger.info(
            "alerts.generated",
            threshold=threshold,
            candidates=len(ranked),
            alerts=len(alerts),
        )

        return AlertsResponseDTO(
            threshold=threshold,
            alerts=[
                AlertDTO(
                    type=alert.type,
                    weekday=alert.weekday,
                    hour_slot=alert.hour_slot,
                    expected=alert.expected,
                    level=alert.level,
                )
                for alert in alerts
            ],
        )

    def _rank(self, bundle: ArtifactBundle, top: int) -> List[Suggestion]:
        def predict_fn(weekday: int, hour_slot: int) -> Prediction:
            return predict_congestion(bundle, weekday, hour_slot)

        return top_suggestions(
            predict_fn,
            days=self.suggestion_days,
            hours=self.suggestion_hours,
            top=top,
        )

    async def _load_bundle(self) -> ArtifactBundle:
        bundle = await self.artifact_store.load()
        if bundle is None:
            logger.warning("prediction.model_not_trained")
            raise ModelNotTrainedError()
        return bundle


def _metadata_dto(bundle: ArtifactBundle) -> BundleMetadataDTO:
    return BundleMetadataDTO(
        updated_at=bundle.metadata.updated_at,
        n=bundle.metadata.n,
        version=bundle.metadata.version,
    )


def _suggestion_dto(suggestion: Suggestion) -> SuggestionDTO:
    return SuggestionDTO(
        weekday=suggestion.weekday,
        hour_slot=suggestion.hour_slot,
        value=suggestion.value,
        level=suggestion.level,
    )

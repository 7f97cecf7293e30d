"""
Application Use Cases - Model Training

Builds the congestion forecasting artifact bundle from raw access events
and persists it. The bundle combines:
  * a least-squares line over the weekday/hour encoding
  * a trailing moving average of the hourly counts (diagnostic)
  * a 1-D k-means model that maps counts to severity levels
"""

from __future__ import annotations

from contextlib import nullcontext
from datetime import datetime, timedelta, timezone
from typing import AsyncContextManager, Callable, Iterable, List, Optional

import structlog

from src.application.dtos.training_dto import (
    BundleMetadataDTO,
    FitMetricsDTO,
    TrainingResponseDTO,
)
from src.domain.entities.access_event import AccessEvent
from src.domain.entities.errors import NoTrainingDataError
from src.domain.entities.forecast import ArtifactBundle, BundleMetadata, FeatureRow
from src.domain.ports.training_lock import ITrainingLock
from src.domain.repositories.access_event_repository import IAccessEventRepository
from src.domain.repositories.artifact_store import IArtifactStore
from src.domain.services.clustering import (
    DEFAULT_MAX_ITERS,
    choose_cluster_count,
    train_kmeans,
)
from src.domain.services.feature_extractor import extract_hourly_features
from src.domain.services.fit_metrics import evaluate_fit
from src.domain.services.regression import train_linear_regression
from src.domain.services.smoothing import moving_average

logger = structlog.get_logger(__name__)

DEFAULT_RANGE_DAYS = 120
SMOOTHING_WINDOW = 3


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ModelTrainingUseCase:
    """Use case for training and persisting the forecasting models."""

    def __init__(
        self,
        event_repository: IAccessEventRepository,
        artifact_store: IArtifactStore,
        training_lock: Optional[ITrainingLock] = None,
        timezone_name: str = "UTC",
        max_iters: int = DEFAULT_MAX_ITERS,
        clock: Callable[[], datetime] = _utc_now,
    ):
        """
        Initialize the model training use case.

        Args:
            event_repository: Source of raw access events
            artifact_store: Destination of the trained bundle
            training_lock: Optional lock serialising persisted runs
            timezone_name: Timezone used to bucket events into weekday/hour
            max_iters: Iteration cap for k-means
            clock: Provides the current UTC time
        """
        self.event_repository = event_repository
        self.artifact_store = artifact_store
        self.training_lock = training_lock
        self.timezone_name = timezone_name
        self.max_iters = max_iters
        self._clock = clock

    def train_from_events(self, events: Iterable[AccessEvent]) -> ArtifactBundle:
        """
        Build a complete artifact bundle without persisting it.

        Raises:
            NoTrainingDataError: If no event carries a timestamp
            InvalidInputError, InsufficientDataError: From the models
        """
        rows = extract_hourly_features(events, tz=self.timezone_name)
        return self._train_rows(rows)

    async def execute(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> TrainingResponseDTO:
        """Train on events in an optional inclusive range and persist the bundle."""
        return await self._run(start, end, message="Model trained")

    async def train_historical(self) -> TrainingResponseDTO:
        """Train on the full event history and persist the bundle."""
        return await self._run(None, None, message="Historical training completed")

    async def weekly_update(
        self, range_days: int = DEFAULT_RANGE_DAYS
    ) -> TrainingResponseDTO:
        """Retrain on the last ``range_days`` days, replacing the stored bundle."""
        end = self._clock()
        start = end - timedelta(days=range_days)
        return await self._run(start, end, message="Weekly update completed")

    async def _run(
        self,
        start: Optional[datetime],
        end: Optional[datetime],
        message: str,
    ) -> TrainingResponseDTO:
        logger.info(
            "training.start",
            start=start.isoformat() if start else None,
            end=end.isoformat() if end else None,
        )

        async with self._hold_lock():
            events = await self.event_repository.find_events(start=start, end=end)
            rows = extract_hourly_features(events, tz=self.timezone_name)
            try:
                bundle = self._train_rows(rows)
            except NoTrainingDataError:
                logger.warning(
                    "training.no_data",
                    events=len(events),
                    start=start.isoformat() if start else None,
                    end=end.isoformat() if end else None,
                )
                raise

            metrics = evaluate_fit(
                bundle.lin_model,
                [row.hour_index for row in rows],
                [row.count for row in rows],
            )
            location = await self.artifact_store.save(bundle)

        logger.info(
            "training.completed",
            events=len(events),
            rows=bundle.metadata.n,
            clusters=bundle.kmeans.k,
            slope=bundle.lin_model.slope,
            intercept=bundle.lin_model.intercept,
            mae=metrics.mae,
            location=location,
        )

        return TrainingResponseDTO(
            message=message,
            artifacts_location=location,
            metadata=BundleMetadataDTO(
                updated_at=bundle.metadata.updated_at,
                n=bundle.metadata.n,
                version=bundle.metadata.version,
            ),
            metrics=FitMetricsDTO(mae=metrics.mae, rmse=metrics.rmse, r2=metrics.r2),
        )

    def _train_rows(self, rows: List[FeatureRow]) -> ArtifactBundle:
        if not rows:
            raise NoTrainingDataError()

        xs = [row.hour_index for row in rows]
        ys = [row.count for row in rows]

        lin_model = train_linear_regression(xs, ys)
        ma_series = moving_average(ys, SMOOTHING_WINDOW)
        kmeans = train_kmeans(ys, choose_cluster_count(len(rows)), self.max_iters)

        return ArtifactBundle(
            lin_model=lin_model,
            ma_series=ma_series,
            kmeans=kmeans,
            metadata=BundleMetadata(updated_at=self._clock(), n=len(rows)),
        )

    def _hold_lock(self) -> AsyncContextManager[None]:
        if self.training_lock is None:
            return nullcontext()
        return self.training_lock.hold()

from __future__ import annotations

import sys
from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, AsyncIterator, Dict, Iterator, List, Optional, Sequence

import pytest

from src.domain.entities.access_event import AccessEvent
from src.domain.entities.errors import TrainingInProgressError
from src.domain.entities.forecast import (
    ArtifactBundle,
    BundleMetadata,
    ClusterModel,
    CongestionLevel,
    RegressionModel,
)
from src.domain.repositories.access_event_repository import IAccessEventRepository
from src.domain.repositories.artifact_store import IArtifactStore

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# 2024-01-01 is a Monday.
MONDAY = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_event(day_offset: int, hour: int, minute: int = 0) -> AccessEvent:
    """Event ``day_offset`` days after Monday 2024-01-01 at ``hour:minute`` UTC."""
    return AccessEvent(
        timestamp=MONDAY + timedelta(days=day_offset, hours=hour, minutes=minute),
        event_type="entry",
        location="main-gate",
    )


def monday_tuesday_events() -> List[AccessEvent]:
    """Three Monday 08:00 entries and one Tuesday 09:00 entry."""
    return [make_event(0, 8), make_event(0, 8, 15), make_event(0, 8, 45)] + [
        make_event(1, 9)
    ]


class InMemoryArtifactStore(IArtifactStore):
    def __init__(self, bundle: Optional[ArtifactBundle] = None) -> None:
        self.bundle = bundle
        self.saves = 0
        self.loads = 0

    async def save(self, bundle: ArtifactBundle) -> str:
        self.bundle = bundle
        self.saves += 1
        return "memory://bundle"

    async def load(self) -> Optional[ArtifactBundle]:
        self.loads += 1
        return self.bundle


class FakeEventRepository(IAccessEventRepository):
    def __init__(self, events: Optional[Sequence[AccessEvent]] = None) -> None:
        self.events = list(events or [])
        self.calls: List[tuple[Optional[datetime], Optional[datetime]]] = []

    async def find_events(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[AccessEvent]:
        self.calls.append((start, end))
        return [
            event
            for event in self.events
            if event.timestamp is None
            or (
                (start is None or event.timestamp >= start)
                and (end is None or event.timestamp <= end)
            )
        ]


class FakeTrainingLock:
    def __init__(self, busy: bool = False) -> None:
        self.busy = busy
        self.acquired = 0
        self.released = 0

    @asynccontextmanager
    async def hold(self) -> AsyncIterator[None]:
        if self.busy:
            raise TrainingInProgressError()
        self.acquired += 1
        try:
            yield
        finally:
            self.released += 1


class FakeCursor:
    def __init__(self, documents: Sequence[Dict[str, Any]]):
        self._documents = list(documents)

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        return iter(self._documents)


class FakeCollection:
    def __init__(self, documents: Optional[Sequence[Dict[str, Any]]] = None) -> None:
        self.documents: List[Dict[str, Any]] = list(documents or [])
        self.last_query: Dict[str, Any] | None = None
        self.last_projection: Dict[str, Any] | None = None
        self.created_indexes: List[tuple[Any, ...]] = []

    def find(
        self, query: Dict[str, Any], projection: Dict[str, Any] | None = None
    ) -> FakeCursor:
        self.last_query = query
        self.last_projection = projection
        return FakeCursor([doc for doc in self.documents if self._matches(doc, query)])

    def create_index(self, keys: Any, name: str | None = None, **kwargs: Any) -> Any:
        self.created_indexes.append((keys, name, kwargs))
        return name or keys

    @staticmethod
    def _matches(document: Dict[str, Any], query: Dict[str, Any]) -> bool:
        for key, condition in query.items():
            value = document.get(key)
            if isinstance(condition, dict):
                try:
                    if "$gte" in condition and value < condition["$gte"]:
                        return False
                    if "$lte" in condition and value > condition["$lte"]:
                        return False
                except TypeError:
                    # Mongo never matches range filters across BSON types.
                    return False
            elif value != condition:
                return False
        return True


class FakeMongoDatabase:
    def __init__(self) -> None:
        self.collections: Dict[str, FakeCollection] = {}
        self.closed = False

    def get_collection(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection())

    async def create_indexes(self) -> None:  # pragma: no cover - stub for tests
        pass

    def close(self) -> None:
        self.closed = True


@pytest.fixture()
def fake_mongo_database() -> FakeMongoDatabase:
    return FakeMongoDatabase()


@pytest.fixture()
def sample_bundle() -> ArtifactBundle:
    return ArtifactBundle(
        lin_model=RegressionModel(slope=0.5, intercept=1.0),
        ma_series=[3.0, 2.0, 4.0],
        kmeans=ClusterModel(
            centroids=[10.0, 30.0, 60.0],
            cluster_labels={
                0: CongestionLevel.LOW,
                1: CongestionLevel.MEDIUM,
                2: CongestionLevel.HIGH,
            },
        ),
        metadata=BundleMetadata(
            updated_at=datetime(2024, 3, 4, 3, 0, tzinfo=timezone.utc), n=9
        ),
    )


@pytest.fixture()
def fixed_now() -> datetime:
    return datetime(2024, 5, 6, 3, 0, tzinfo=timezone.utc)

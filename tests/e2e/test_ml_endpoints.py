from __future__ import annotations

import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient

from src.main.app import create_app
from src.main.container import get_container
from tests.conftest import (
    FakeEventRepository,
    InMemoryArtifactStore,
    monday_tuesday_events,
)


class _StubMongo:
    async def create_indexes(self):
        return None

    def close(self):
        return None


@pytest.fixture()
def store() -> InMemoryArtifactStore:
    return InMemoryArtifactStore()


@pytest.fixture()
def client(store):
    app = create_app()
    container = get_container()

    container.mongo_database.override(providers.Object(_StubMongo()))
    container.event_repository.override(
        providers.Object(FakeEventRepository(monday_tuesday_events()))
    )
    container.artifact_store.override(providers.Object(store))
    container.training_lock.override(providers.Object(None))

    with TestClient(app) as test_client:
        yield test_client


def test_predict_before_training_is_not_found(client):
    response = client.post("/ml/predict", json={"weekday": 1, "hour_slot": 8})

    assert response.status_code == 404


def test_train_then_predict(client, store):
    trained = client.post("/ml/train")
    assert trained.status_code == 200
    body = trained.json()
    assert body["message"] == "Model trained"
    assert body["metadata"]["n"] == 2
    assert store.saves == 1

    response = client.post("/ml/predict", json={"weekday": 1, "hour_slot": 8})
    assert response.status_code == 200
    prediction = response.json()["prediction"]
    assert prediction["value"] == pytest.approx(3.0)
    assert prediction["level"] == "low"


def test_train_with_range_body(client):
    response = client.post(
        "/ml/train",
        json={"from": "2024-01-02T00:00:00Z", "to": "2024-01-02T23:59:59Z"},
    )

    assert response.status_code == 200
    assert response.json()["metadata"]["n"] == 1


def test_train_rejects_inverted_range(client):
    response = client.post(
        "/ml/train",
        json={"from": "2024-02-01T00:00:00Z", "to": "2024-01-01T00:00:00Z"},
    )

    assert response.status_code == 422


def test_suggestions_and_alerts(client):
    client.post("/ml/train-historical")

    suggestions = client.get("/ml/suggestions", params={"top": 3}).json()["top"]
    values = [item["value"] for item in suggestions]
    assert len(suggestions) == 3
    assert values == sorted(values, reverse=True)

    alerts = client.get("/ml/alerts", params={"threshold": "low", "top": 4}).json()
    assert alerts["threshold"] == "low"
    assert len(alerts["alerts"]) == 4
    assert alerts["alerts"][0]["type"] == "congestion"


def test_predict_validates_slot(client):
    response = client.post("/ml/predict", json={"weekday": 7, "hour_slot": 8})

    assert response.status_code == 422


def test_weekly_update_without_recent_events(client, store):
    response = client.post("/ml/weekly-update", json={"range_days": 7})

    assert response.status_code == 422
    assert store.saves == 0

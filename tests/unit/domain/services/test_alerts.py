from __future__ import annotations

from typing import Any, List

import pytest

from src.domain.entities.forecast import Alert, CongestionLevel, Suggestion
from src.domain.services.alerts import build_congestion_alerts


def _suggestion(hour_slot: int, value: float, level: Any) -> Suggestion:
    return Suggestion(weekday=1, hour_slot=hour_slot, value=value, level=level)


@pytest.fixture()
def predictions() -> List[Suggestion]:
    return [
        _suggestion(8, 90.0, CongestionLevel.HIGH),
        _suggestion(9, 40.0, CongestionLevel.MEDIUM),
        _suggestion(10, 5.0, CongestionLevel.LOW),
        _suggestion(11, 1.0, "unknown"),
    ]


def test_high_threshold_keeps_only_high(predictions) -> None:
    alerts = build_congestion_alerts(predictions, "high")

    assert alerts == [
        Alert(weekday=1, hour_slot=8, expected=90.0, level="high", type="congestion")
    ]


def test_default_threshold_is_high(predictions) -> None:
    assert build_congestion_alerts(predictions) == build_congestion_alerts(
        predictions, "high"
    )


def test_medium_threshold_keeps_medium_and_high(predictions) -> None:
    alerts = build_congestion_alerts(predictions, "medium")

    assert [alert.level for alert in alerts] == ["high", "medium"]


def test_low_threshold_keeps_everything_including_unknown_levels(predictions) -> None:
    alerts = build_congestion_alerts(predictions, "low")

    assert [alert.hour_slot for alert in alerts] == [8, 9, 10, 11]
    assert alerts[-1].level == "unknown"


def test_unknown_threshold_behaves_like_high(predictions) -> None:
    alerts = build_congestion_alerts(predictions, "extreme")

    assert [alert.hour_slot for alert in alerts] == [8]


def test_alerts_keep_input_order() -> None:
    predictions = [
        _suggestion(20, 10.0, CongestionLevel.HIGH),
        _suggestion(7, 99.0, CongestionLevel.HIGH),
    ]

    alerts = build_congestion_alerts(predictions, "high")

    assert [alert.hour_slot for alert in alerts] == [20, 7]


def test_no_predictions_no_alerts() -> None:
    assert build_congestion_alerts([], "low") == []

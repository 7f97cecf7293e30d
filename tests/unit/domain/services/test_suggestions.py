from __future__ import annotations

from typing import List, Tuple

from src.domain.entities.forecast import CongestionLevel, Prediction
from src.domain.services.suggestions import (
    DEFAULT_DAYS,
    DEFAULT_HOURS,
    build_suggestion_grid,
    top_suggestions,
)


def _product_predict(weekday: int, hour_slot: int) -> Prediction:
    return Prediction(value=float(weekday * hour_slot), level=CongestionLevel.LOW)


def _flat_predict(weekday: int, hour_slot: int) -> Prediction:
    return Prediction(value=1.0, level=CongestionLevel.MEDIUM)


def test_build_suggestion_grid_iterates_days_then_hours() -> None:
    calls: List[Tuple[int, int]] = []

    def predict(weekday: int, hour_slot: int) -> Prediction:
        calls.append((weekday, hour_slot))
        return _product_predict(weekday, hour_slot)

    grid = build_suggestion_grid(predict, days=[1, 2], hours=[8, 9])

    assert calls == [(1, 8), (1, 9), (2, 8), (2, 9)]
    assert [(s.weekday, s.hour_slot, s.value) for s in grid] == [
        (1, 8, 8.0),
        (1, 9, 9.0),
        (2, 8, 16.0),
        (2, 9, 18.0),
    ]


def test_top_suggestions_sorted_descending_with_default_limit() -> None:
    ranked = top_suggestions(_product_predict)

    values = [s.value for s in ranked]
    assert len(ranked) == 10
    assert values == sorted(values, reverse=True)
    assert (ranked[0].weekday, ranked[0].hour_slot) == (5, 20)


def test_top_suggestions_length_is_bounded_by_grid() -> None:
    ranked = top_suggestions(_product_predict, top=500)

    assert len(ranked) == len(DEFAULT_DAYS) * len(DEFAULT_HOURS)


def test_top_suggestions_keeps_grid_order_for_equal_values() -> None:
    ranked = top_suggestions(_flat_predict, days=[3, 1], hours=[9, 6], top=4)

    assert [(s.weekday, s.hour_slot) for s in ranked] == [
        (3, 9),
        (3, 6),
        (1, 9),
        (1, 6),
    ]


def test_top_suggestions_none_top_means_default() -> None:
    assert len(top_suggestions(_product_predict, top=None)) == 10


def test_top_suggestions_zero_top_is_empty() -> None:
    assert top_suggestions(_product_predict, top=0) == []


def test_top_suggestions_carries_levels() -> None:
    ranked = top_suggestions(_flat_predict, days=[1], hours=[8], top=1)

    assert ranked[0].level == CongestionLevel.MEDIUM

"""Rank weekday/hour candidates by forecasted congestion."""

from typing import Callable, List, Optional, Sequence

from src.domain.entities.forecast import Prediction, Suggestion

PredictFn = Callable[[int, int], Prediction]

DEFAULT_DAYS = (1, 2, 3, 4, 5)
DEFAULT_HOURS = (6, 7, 8, 9, 12, 13, 17, 18, 19, 20)
DEFAULT_TOP = 10


def build_suggestion_grid(
    predict_fn: PredictFn,
    days: Sequence[int] = DEFAULT_DAYS,
    hours: Sequence[int] = DEFAULT_HOURS,
) -> List[Suggestion]:
    """Predict every (day, hour) pair, days in the outer loop."""
    suggestions: List[Suggestion] = []
    for day in days:
        for hour in hours:
            prediction = predict_fn(day, hour)
            suggestions.append(
                Suggestion(
                    weekday=day,
                    hour_slot=hour,
                    value=prediction.value,
                    level=prediction.level,
                )
            )
    return suggestions


def top_suggestions(
    predict_fn: PredictFn,
    days: Sequence[int] = DEFAULT_DAYS,
    hours: Sequence[int] = DEFAULT_HOURS,
    top: Optional[int] = DEFAULT_TOP,
) -> List[Suggestion]:
    """
    Return the ``top`` grid points with the highest forecast.

    Equal values keep grid order, since ``sorted`` is stable even with
    ``reverse=True``.
    """
    grid = build_suggestion_grid(predict_fn, days, hours)
    ranked = sorted(grid, key=lambda suggestion: suggestion.value, reverse=True)
    limit = DEFAULT_TOP if top is None else max(top, 0)
    return ranked[:limit]

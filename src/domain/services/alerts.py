"""Turn ranked predictions into congestion alerts."""

from typing import Iterable, List

from src.domain.entities.forecast import (
    LEVEL_RANKS,
    Alert,
    CongestionLevel,
    Suggestion,
    level_rank,
)


def build_congestion_alerts(
    predictions: Iterable[Suggestion],
    threshold_level: str = CongestionLevel.HIGH.value,
) -> List[Alert]:
    """
    Keep predictions at or above ``threshold_level`` and wrap them as alerts.

    Unknown prediction levels rank as "low"; an unknown threshold ranks as
    "high".
    """
    minimum = level_rank(threshold_level, default=LEVEL_RANKS["high"])
    return [
        Alert(
            weekday=prediction.weekday,
            hour_slot=prediction.hour_slot,
            expected=prediction.value,
            level=getattr(prediction.level, "value", prediction.level),
        )
        for prediction in predictions
        if level_rank(prediction.level) >= minimum
    ]

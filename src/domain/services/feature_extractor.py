"""Domain service aggregating raw access events into hourly occupancy rows."""

from typing import Iterable, List

import pandas as pd

from src.domain.entities.access_event import AccessEvent
from src.domain.entities.forecast import FeatureRow


def _to_local_timestamps(events: Iterable[AccessEvent], tz: str) -> pd.Series:
    timestamps = [event.timestamp for event in events if event.timestamp is not None]
    if not timestamps:
        return pd.Series([], dtype="datetime64[ns, UTC]")
    # Naive datetimes are UTC, which is how MongoDB hands them back.
    series = pd.Series(pd.to_datetime(timestamps, utc=True))
    return series.dt.tz_convert(tz)


def extract_hourly_features(
    events: Iterable[AccessEvent], tz: str = "UTC"
) -> List[FeatureRow]:
    """
    Count events per (weekday, hour) bucket in the given timezone.

    Weekdays follow the Sunday = 0 ... Saturday = 6 convention. Events
    without a timestamp are skipped.

    Returns:
        One row per populated bucket, sorted by weekday then hour.
    """
    local = _to_local_timestamps(events, tz)
    if local.empty:
        return []

    frame = pd.DataFrame(
        {
            "weekday": (local.dt.dayofweek + 1) % 7,
            "hour_slot": local.dt.hour,
        }
    )
    counts = (
        frame.groupby(["weekday", "hour_slot"], sort=True)
        .size()
        .reset_index(name="total")
    )

    return [
        FeatureRow(weekday=int(weekday), hour_slot=int(hour_slot), count=int(total))
        for weekday, hour_slot, total in counts.itertuples(index=False, name=None)
    ]

"""Trailing moving average used as a diagnostic series in the artifact bundle."""

from typing import List, Sequence

import numpy as np


def moving_average(series: Sequence[float], window_size: int = 3) -> List[float]:
    """
    Average each point with up to ``window_size - 1`` preceding points.

    The window shrinks at the start of the series; there is no padding and
    no look-ahead. A window of 1 or less returns a copy of the input.
    """
    if window_size <= 1:
        return list(series)

    data = np.asarray(series, dtype=float)
    if data.size == 0:
        return []

    cumulative = np.concatenate(([0.0], np.cumsum(data)))
    ends = np.arange(1, data.size + 1)
    starts = np.maximum(0, ends - window_size)
    averages = (cumulative[ends] - cumulative[starts]) / (ends - starts)
    return [float(v) for v in averages]

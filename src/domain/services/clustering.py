"""
One-dimensional k-means used to turn occupancy counts into severity levels.

Seeding is percentile based rather than random, so a given input and ``k``
always produce the same centroids. Ties in distance go to the lowest
cluster index, which is what ``numpy.argmin`` returns.
"""

from typing import Dict, Sequence

import numpy as np

from src.domain.entities.errors import InsufficientDataError, InvalidInputError
from src.domain.entities.forecast import (
    LEVELS_BY_RANK,
    ClusterModel,
    CongestionLevel,
)

DEFAULT_MAX_ITERS = 100


def choose_cluster_count(n_rows: int) -> int:
    """Number of clusters for ``n_rows`` feature rows: floor(sqrt(n)) in [1, 3]."""
    return min(3, max(1, int(np.floor(np.sqrt(n_rows)))))


def _seed_centroids(values: np.ndarray, k: int) -> np.ndarray:
    ordered = np.sort(values)
    n = len(ordered)
    positions = [(i * n) // (k + 1) for i in range(1, k + 1)]
    return ordered[positions].astype(float)


def _nearest(values: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    distances = np.abs(values[:, np.newaxis] - centroids[np.newaxis, :])
    return distances.argmin(axis=1)


def _label_by_rank(centroids: np.ndarray) -> Dict[int, CongestionLevel]:
    labels: Dict[int, CongestionLevel] = {}
    # Stable sort keeps equal centroids in index order.
    for rank, index in enumerate(np.argsort(centroids, kind="stable")):
        labels[int(index)] = LEVELS_BY_RANK[min(rank, len(LEVELS_BY_RANK) - 1)]
    return labels


def train_kmeans(
    values: Sequence[float], k: int, max_iters: int = DEFAULT_MAX_ITERS
) -> ClusterModel:
    """
    Cluster ``values`` into ``k`` groups and label each group by centroid rank.

    Raises:
        InvalidInputError: If ``k`` is lower than 1.
        InsufficientDataError: If there are fewer values than clusters.
    """
    if k < 1:
        raise InvalidInputError("k-means requires at least one cluster", {"k": k})
    if len(values) < k:
        raise InsufficientDataError(available=len(values), required=k)

    data = np.asarray(values, dtype=float)
    centroids = _seed_centroids(data, k)
    assignments = np.zeros(len(data), dtype=int)

    for _ in range(max_iters):
        nearest = _nearest(data, centroids)
        changed = bool(np.any(nearest != assignments))
        assignments = nearest

        sums = np.bincount(assignments, weights=data, minlength=k)
        counts = np.bincount(assignments, minlength=k)
        populated = counts > 0
        centroids[populated] = sums[populated] / counts[populated]

        if not changed:
            break

    return ClusterModel(
        centroids=[float(c) for c in centroids],
        cluster_labels=_label_by_rank(centroids),
    )


def classify(model: ClusterModel, value: float) -> CongestionLevel:
    """Severity label of the centroid closest to ``value``."""
    centroids = np.asarray(model.centroids, dtype=float)
    best = int(np.abs(centroids - value).argmin())
    return model.cluster_labels.get(best, CongestionLevel.MEDIUM)

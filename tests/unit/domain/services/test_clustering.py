from __future__ import annotations

import pytest

from src.domain.entities.errors import InsufficientDataError, InvalidInputError
from src.domain.entities.forecast import ClusterModel, CongestionLevel
from src.domain.services.clustering import (
    choose_cluster_count,
    classify,
    train_kmeans,
)


@pytest.mark.parametrize(
    "n_rows, expected",
    [(0, 1), (1, 1), (3, 1), (4, 2), (8, 2), (9, 3), (100, 3)],
)
def test_choose_cluster_count_is_bounded_sqrt(n_rows: int, expected: int) -> None:
    assert choose_cluster_count(n_rows) == expected


def test_train_kmeans_separates_groups_and_labels_by_rank() -> None:
    model = train_kmeans([1, 2, 10, 11, 50, 52], 3)

    assert model.centroids == pytest.approx([1.5, 10.5, 51.0])
    assert model.cluster_labels == {
        0: CongestionLevel.LOW,
        1: CongestionLevel.MEDIUM,
        2: CongestionLevel.HIGH,
    }
    assert model.k == 3


def test_train_kmeans_is_deterministic() -> None:
    values = [7, 3, 3, 12, 40, 41, 8, 19]

    assert train_kmeans(values, 3) == train_kmeans(values, 3)


def test_train_kmeans_single_cluster_uses_mean() -> None:
    model = train_kmeans([3, 1], 1)

    assert model.centroids == pytest.approx([2.0])
    assert model.cluster_labels == {0: CongestionLevel.LOW}


def test_train_kmeans_extra_clusters_share_high_label() -> None:
    model = train_kmeans([0, 10, 20, 30], 4)

    assert model.centroids == pytest.approx([0.0, 10.0, 20.0, 30.0])
    assert [model.cluster_labels[i] for i in range(4)] == [
        CongestionLevel.LOW,
        CongestionLevel.MEDIUM,
        CongestionLevel.HIGH,
        CongestionLevel.HIGH,
    ]


def test_train_kmeans_with_fewer_values_than_clusters_fails() -> None:
    with pytest.raises(InsufficientDataError) as exc_info:
        train_kmeans([5], 3)

    assert exc_info.value.details == {"available": 1, "required": 3}


def test_train_kmeans_rejects_non_positive_k() -> None:
    with pytest.raises(InvalidInputError):
        train_kmeans([1, 2, 3], 0)


def test_classify_returns_label_of_nearest_centroid() -> None:
    model = train_kmeans([1, 2, 10, 11, 50, 52], 3)

    assert classify(model, 0) == CongestionLevel.LOW
    assert classify(model, 9) == CongestionLevel.MEDIUM
    assert classify(model, 100) == CongestionLevel.HIGH


def test_classify_ties_go_to_lowest_cluster_index() -> None:
    model = ClusterModel(
        centroids=[0.0, 10.0],
        cluster_labels={0: CongestionLevel.LOW, 1: CongestionLevel.MEDIUM},
    )

    assert classify(model, 5.0) == CongestionLevel.LOW


def test_classify_without_label_falls_back_to_medium() -> None:
    model = ClusterModel(centroids=[1.0], cluster_labels={})

    assert classify(model, 1.0) == CongestionLevel.MEDIUM

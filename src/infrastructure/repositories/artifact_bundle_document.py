"""
Artifact bundle document mapping.

Converts the ArtifactBundle entity to and from the JSON document layout
shared by every artifact store:

    {"linModel": {"slope", "intercept"},
     "maSeries": [...],
     "kmeans": {"centroids": [...], "clusterLabels": [...]},
     "metadata": {"updatedAt", "n", "version"}}

Field names are part of the contract with previously written bundles and
must not change.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Mapping

from src.domain.entities.errors import ArtifactStoreError
from src.domain.entities.forecast import (
    ArtifactBundle,
    BundleMetadata,
    ClusterModel,
    CongestionLevel,
    RegressionModel,
)


def bundle_to_document(bundle: ArtifactBundle) -> Dict[str, Any]:
    labels = bundle.kmeans.cluster_labels
    return {
        "linModel": {
            "slope": bundle.lin_model.slope,
            "intercept": bundle.lin_model.intercept,
        },
        "maSeries": list(bundle.ma_series),
        "kmeans": {
            "centroids": list(bundle.kmeans.centroids),
            "clusterLabels": [
                labels[index].value if index in labels else None
                for index in range(bundle.kmeans.k)
            ],
        },
        "metadata": {
            "updatedAt": bundle.metadata.updated_at.isoformat(),
            "n": bundle.metadata.n,
            "version": bundle.metadata.version,
        },
    }


def _parse_labels(raw: Any) -> Dict[int, CongestionLevel]:
    if isinstance(raw, Mapping):
        items = ((int(key), value) for key, value in raw.items())
    else:
        items = enumerate(raw)
    return {
        index: CongestionLevel(value) for index, value in items if value is not None
    }


def _parse_timestamp(raw: str) -> datetime:
    # Bundles written by older tooling use the "Z" suffix.
    parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def bundle_from_document(document: Mapping[str, Any]) -> ArtifactBundle:
    """
    Rebuild a bundle from its stored document.

    Raises:
        ArtifactStoreError: If required fields are missing or malformed.
    """
    try:
        lin_model = document["linModel"]
        kmeans = document["kmeans"]
        metadata = document["metadata"]
        return ArtifactBundle(
            lin_model=RegressionModel(
                slope=float(lin_model["slope"]),
                intercept=float(lin_model["intercept"]),
            ),
            ma_series=[float(v) for v in document.get("maSeries", [])],
            kmeans=ClusterModel(
                centroids=[float(c) for c in kmeans["centroids"]],
                cluster_labels=_parse_labels(kmeans.get("clusterLabels", [])),
            ),
            metadata=BundleMetadata(
                updated_at=_parse_timestamp(metadata["updatedAt"]),
                n=int(metadata["n"]),
                version=int(metadata["version"]),
            ),
        )
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise ArtifactStoreError(f"Malformed artifact bundle: {e}") from e

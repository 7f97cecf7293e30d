"""
GridFS Artifact Store - Infrastructure Layer

Stores the artifact bundle JSON document in MongoDB GridFS. A save writes
the new file first and only then removes older bundles; readers always
pick the newest upload, so they see either the previous bundle or the
new one.
"""

import json
from typing import Optional

import gridfs
import structlog
from pymongo import MongoClient
from pymongo.database import Database

from src.domain.entities.errors import ArtifactStoreError
from src.domain.entities.forecast import ArtifactBundle
from src.domain.repositories.artifact_store import IArtifactStore
from src.infrastructure.repositories.artifact_bundle_document import (
    bundle_from_document,
    bundle_to_document,
)

logger = structlog.get_logger(__name__)

ARTIFACT_TYPE = "forecast_bundle"


class GridFSArtifactStore(IArtifactStore):
    """MongoDB GridFS implementation of the artifact store."""

    def __init__(
        self,
        mongo_client: MongoClient,
        database_name: str,
        collection: str = "model_artifacts",
    ):
        """
        Initialize the GridFS artifact store.

        Args:
            mongo_client: MongoDB client connection
            database_name: Name of the database to use
            collection: GridFS bucket name
        """
        self.db: Database = mongo_client[database_name]
        self.fs = gridfs.GridFS(self.db, collection=collection)

    async def save(self, bundle: ArtifactBundle) -> str:
        content = json.dumps(bundle_to_document(bundle)).encode("utf-8")
        try:
            file_id = self.fs.put(
                content,
                filename=f"{ARTIFACT_TYPE}.json",
                metadata={
                    "artifact_type": ARTIFACT_TYPE,
                    "content_type": "application/json",
                    "version": bundle.metadata.version,
                    "n": bundle.metadata.n,
                },
            )
        except Exception as e:
            logger.error("artifacts.gridfs.save_failed", error=str(e))
            raise ArtifactStoreError(f"Failed to save artifact bundle: {e}") from e

        # load() already serves the new upload; older copies may linger.
        try:
            removed = self._delete_previous_bundles(keep=file_id)
        except Exception as e:
            logger.warning(
                "artifacts.gridfs.cleanup_failed", file_id=str(file_id), error=str(e)
            )
            removed = 0

        logger.info(
            "artifacts.gridfs.saved",
            file_id=str(file_id),
            size_bytes=len(content),
            replaced=removed,
        )
        return str(file_id)

    async def load(self) -> Optional[ArtifactBundle]:
        try:
            cursor = (
                self.fs.find({"metadata.artifact_type": ARTIFACT_TYPE})
                .sort("uploadDate", -1)
                .limit(1)
            )
            grid_out = next(iter(cursor), None)
            if grid_out is None:
                logger.debug("artifacts.gridfs.not_found")
                return None
            content = grid_out.read()
        except Exception as e:
            logger.error("artifacts.gridfs.load_failed", error=str(e))
            raise ArtifactStoreError(f"Failed to read artifact bundle: {e}") from e

        try:
            document = json.loads(content.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ArtifactStoreError(f"Artifact bundle is not valid JSON: {e}") from e
        return bundle_from_document(document)

    def _delete_previous_bundles(self, keep) -> int:
        removed = 0
        for previous in self.fs.find({"metadata.artifact_type": ARTIFACT_TYPE}):
            if previous._id == keep:
                continue
            self.fs.delete(previous._id)
            removed += 1
        return removed

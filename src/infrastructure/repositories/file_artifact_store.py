"""
File Artifact Store - Infrastructure Layer

Keeps the current artifact bundle as a single JSON document on disk.
Writes go to a temporary file in the same directory which then replaces
the target with ``os.replace``, so readers never see a partial file.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

import structlog

from src.domain.entities.errors import ArtifactStoreError
from src.domain.entities.forecast import ArtifactBundle
from src.domain.repositories.artifact_store import IArtifactStore
from src.infrastructure.repositories.artifact_bundle_document import (
    bundle_from_document,
    bundle_to_document,
)

logger = structlog.get_logger(__name__)


class FileArtifactStore(IArtifactStore):
    """Filesystem implementation of the artifact store."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    async def save(self, bundle: ArtifactBundle) -> str:
        payload = json.dumps(bundle_to_document(bundle), indent=2)
        tmp_name: Optional[str] = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(payload)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            logger.error(
                "artifacts.file.save_failed", path=str(self.path), error=str(e)
            )
            raise ArtifactStoreError(f"Failed to save artifact bundle: {e}") from e

        logger.info(
            "artifacts.file.saved",
            path=str(self.path),
            rows=bundle.metadata.n,
            size_bytes=len(payload),
        )
        return str(self.path)

    async def load(self) -> Optional[ArtifactBundle]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("artifacts.file.not_found", path=str(self.path))
            return None
        except OSError as e:
            logger.error(
                "artifacts.file.load_failed", path=str(self.path), error=str(e)
            )
            raise ArtifactStoreError(f"Failed to read artifact bundle: {e}") from e

        try:
            document = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ArtifactStoreError(f"Artifact bundle is not valid JSON: {e}") from e
        return bundle_from_document(document)

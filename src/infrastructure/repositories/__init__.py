"""
Repositories Package - Infrastructure Layer

This package contains concrete implementations of the repository
interfaces defined in the domain layer. These implementations
handle the details of data persistence.
"""

from .access_event_repository import AccessEventRepository
from .file_artifact_store import FileArtifactStore
from .gridfs_artifact_store import GridFSArtifactStore

__all__ = ["AccessEventRepository", "FileArtifactStore", "GridFSArtifactStore"]

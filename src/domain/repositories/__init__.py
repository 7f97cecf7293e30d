"""
Repositories Package

This package contains interfaces defining repository contracts
for data access operations. Specific implementations are provided
by the infrastructure layer.
"""

from .access_event_repository import IAccessEventRepository
from .artifact_store import IArtifactStore

__all__ = ["IAccessEventRepository", "IArtifactStore"]

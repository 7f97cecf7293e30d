"""
Artifact Store Interface

This module defines the interface for persisting the trained artifact
bundle following the repository pattern. The store holds a single current
bundle: every save replaces the previous one outright, and readers either
see the old bundle or the new one, never a partial write.
"""

from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities.forecast import ArtifactBundle


class IArtifactStore(ABC):
    """Interface for artifact bundle storage implementations."""

    @abstractmethod
    async def save(self, bundle: ArtifactBundle) -> str:
        """
        Persist a bundle as the sole current state.

        Args:
            bundle: Complete output of a training run

        Returns:
            Location of the stored bundle (path or storage identifier)

        Raises:
            ArtifactStoreError: If the bundle cannot be written
        """
        pass

    @abstractmethod
    async def load(self) -> Optional[ArtifactBundle]:
        """
        Load the last saved bundle.

        Returns:
            The bundle, or None when no training has been persisted yet

        Raises:
            ArtifactStoreError: If the stored bundle cannot be read
        """
        pass

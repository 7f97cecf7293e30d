"""Domain port for serialising training runs."""

from __future__ import annotations

from typing import AsyncContextManager, Protocol


class ITrainingLock(Protocol):
    """Mutual exclusion across processes that persist artifact bundles."""

    def hold(self) -> AsyncContextManager[None]:
        """Hold the lock for the duration of the block.

        Raises:
            TrainingInProgressError: If another run already holds it.
        """
        ...

"""
Access Event Repository Interface

Read-only boundary with the store that records entries and exits at
control points.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from src.domain.entities.access_event import AccessEvent


class IAccessEventRepository(ABC):
    """Interface for access event sources."""

    @abstractmethod
    async def find_events(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[AccessEvent]:
        """
        Fetch events whose timestamp falls in an inclusive UTC range.

        Args:
            start: Lower bound (inclusive); unbounded when None
            end: Upper bound (inclusive); unbounded when None

        Returns:
            Events in the range, in no particular order
        """
        pass

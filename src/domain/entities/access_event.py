"""Domain entities for raw access-control events."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(slots=True, frozen=True)
class AccessEvent:
    """An entry or exit registered at a control point."""

    timestamp: Optional[datetime]
    event_type: Optional[str] = None
    location: Optional[str] = None

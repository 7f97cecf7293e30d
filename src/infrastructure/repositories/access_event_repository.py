"""
MongoDB Access Event Repository - Infrastructure Layer

Reads raw entry/exit records from the event collection. Only the
timestamp, type and location fields are projected.
"""

from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

import structlog
from pymongo.errors import PyMongoError

from src.domain.entities.access_event import AccessEvent
from src.domain.entities.errors import DomainError
from src.domain.repositories.access_event_repository import IAccessEventRepository
from src.infrastructure.database import MongoDatabase

logger = structlog.get_logger(__name__)


class AccessEventRepository(IAccessEventRepository):
    """MongoDB implementation of the access event source."""

    def __init__(
        self,
        mongo_database: MongoDatabase,
        collection_name: str = "access_events",
        timestamp_field: str = "timestamp",
        type_field: str = "type",
        location_field: str = "location",
    ):
        self.db = mongo_database
        self.collection_name = collection_name
        self.timestamp_field = timestamp_field
        self.type_field = type_field
        self.location_field = location_field

    def _build_query(
        self, start: Optional[datetime], end: Optional[datetime]
    ) -> Dict[str, Any]:
        time_range: Dict[str, datetime] = {}
        if start is not None:
            time_range["$gte"] = start
        if end is not None:
            time_range["$lte"] = end
        return {self.timestamp_field: time_range} if time_range else {}

    def _to_entity(self, document: Mapping[str, Any]) -> AccessEvent:
        timestamp = document.get(self.timestamp_field)
        return AccessEvent(
            timestamp=timestamp if isinstance(timestamp, datetime) else None,
            event_type=document.get(self.type_field),
            location=document.get(self.location_field),
        )

    async def find_events(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[AccessEvent]:
        query = self._build_query(start, end)
        projection = {
            "_id": 0,
            self.timestamp_field: 1,
            self.type_field: 1,
            self.location_field: 1,
        }
        try:
            cursor = self.db.get_collection(self.collection_name).find(
                query, projection
            )
            events = [self._to_entity(document) for document in cursor]
        except PyMongoError as e:
            logger.error(
                "events.fetch_failed",
                collection=self.collection_name,
                error=str(e),
            )
            raise DomainError(f"Failed to fetch access events: {e}") from e

        logger.info(
            "events.fetched",
            collection=self.collection_name,
            count=len(events),
            start=start.isoformat() if start else None,
            end=end.isoformat() if end else None,
        )
        return events

"""
MongoDB Database - Infrastructure Layer

This module provides a MongoDB database client shared by the repositories.
It handles the connection, collection access and startup indexes.
"""

import pymongo.errors
import structlog
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

logger = structlog.get_logger(__name__)


class MongoDatabase:
    """MongoDB database client."""

    def __init__(
        self,
        mongo_uri: str,
        db_name: str,
        events_collection: str = "access_events",
        timestamp_field: str = "timestamp",
    ):
        """
        Initialize the MongoDB database client.

        Args:
            mongo_uri: MongoDB connection URI
            db_name: Name of the database to use
            events_collection: Collection holding raw access events
            timestamp_field: Event field indexed for time-range queries
        """
        self.client: MongoClient = MongoClient(mongo_uri)
        self.db: Database = self.client[db_name]
        self.events_collection = events_collection
        self.timestamp_field = timestamp_field

    def get_collection(self, collection_name: str) -> Collection:
        """
        Get a collection from the database.

        Args:
            collection_name: Name of the collection

        Returns:
            MongoDB collection
        """
        return self.db[collection_name]

    def close(self) -> None:
        """Close the database connection."""
        self.client.close()

    async def create_indexes(self) -> None:
        """
        Create the indexes needed by the event range queries.
        Called during application startup.
        """
        try:
            self.db[self.events_collection].create_index(
                self.timestamp_field,
                name=f"{self.timestamp_field}_idx",
                background=True,
            )
        except pymongo.errors.OperationFailure as e:
            logger.warning(
                "mongo.create_indexes_failed",
                collection=self.events_collection,
                error=str(e),
            )

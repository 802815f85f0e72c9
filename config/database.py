# config/database.py
from __future__ import annotations

import os
from typing import Optional

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from middleware.errors import DatabaseConnectionError

DEFAULT_MONGO_URI = "mongodb://localhost:27017"


def build_mongo_uri() -> str:
    """
    Build the MongoDB URI.
    Precedence:
      1. TEST_MONGODB_URI (for CI/tests)
      2. MONGODB_URI (full connection string)
      3. mongodb://localhost:27017
    """
    test_uri = os.getenv("TEST_MONGODB_URI")
    if test_uri:
        return test_uri

    uri = os.getenv("MONGODB_URI")
    if uri:
        return uri

    return DEFAULT_MONGO_URI


class MongoConnection:
    """
    MongoDB client & DB accessor.
    - Constructed once by the application factory and shared by the process.
    - Wraps pymongo's pooled client; no reconnection logic of its own.
    """

    def __init__(
        self,
        uri: Optional[str] = None,
        db_name: str = "country_db",
        timeout_ms: int = 5000,
        client: Optional[MongoClient] = None,
    ) -> None:
        self._uri = uri or build_mongo_uri()
        self._db_name = db_name
        if client is None:
            client = MongoClient(self._uri, serverSelectionTimeoutMS=timeout_ms)
        self._client = client

    @property
    def client(self) -> MongoClient:
        """Return the shared MongoClient instance."""
        return self._client

    def db(self):
        """Return the default database handle."""
        return self._client[self._db_name]

    def collection(self, name: str) -> Collection:
        """Return a collection handle from the default DB."""
        return self.db()[name]

    def ping(self) -> None:
        """Round-trip to the server, raising DatabaseConnectionError on failure."""
        try:
            self._client.admin.command("ping")
        except PyMongoError as exc:
            raise DatabaseConnectionError(
                "Error connecting to MongoDB",
                details={"reason": str(exc)},
            ) from exc

    def close(self) -> None:
        """Close the client (used in tests/shutdown)."""
        if getattr(self, "_client", None) is not None:
            self._client.close()

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from pymongo import ASCENDING
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError as MongoDuplicateKeyError
from pymongo.errors import PyMongoError

from config.database import MongoConnection
from domain.models.country import Country
from middleware.errors import DatabaseOperationError, DuplicateKeyError


@contextmanager
def _store_errors(action: str) -> Iterator[None]:
    """Re-raise driver errors as typed application errors."""
    try:
        yield
    except MongoDuplicateKeyError as exc:
        raise DuplicateKeyError(
            "Country already exists",
            details={"reason": str(exc)},
        ) from exc
    except PyMongoError as exc:
        raise DatabaseOperationError(
            f"Error {action}",
            details={"reason": str(exc)},
        ) from exc


class CountryRepository:
    """Repository for Country model with CRUD operations."""

    def __init__(self, collection: Collection):
        self.collection = collection

    @classmethod
    def from_connection(cls, connection: MongoConnection, name: str = "countries") -> "CountryRepository":
        return cls(connection.collection(name))

    def ensure_indexes(self):
        """Create the unique index on the country name."""
        with _store_errors("creating indexes"):
            self.collection.create_index([("country", ASCENDING)], unique=True)

    def find_by_country(self, country: str) -> Optional[Country]:
        """Find a country by its name."""
        with _store_errors("fetching country"):
            doc = self.collection.find_one({"country": country})
        return Country.from_mongo(doc) if doc else None

    def find_all(self) -> List[Country]:
        """Find all countries in the collection's natural order."""
        with _store_errors("fetching countries"):
            return [Country.from_mongo(doc) for doc in self.collection.find({})]

    def save(self, country: Country) -> str:
        """Save a country to the database."""
        with _store_errors("inserting data"):
            result = self.collection.insert_one(country.to_mongo())
        return str(result.inserted_id)

    def update(self, country: str, data: Dict[str, Any]) -> int:
        """Apply a partial update to one country; return the matched count."""
        with _store_errors("updating country"):
            result = self.collection.update_one({"country": country}, {"$set": data})
        return result.matched_count

    def delete(self, country: str) -> int:
        """Delete a country by its name; return the deleted count."""
        with _store_errors("deleting country"):
            result = self.collection.delete_one({"country": country})
        return result.deleted_count

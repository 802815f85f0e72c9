import sys
from pathlib import Path
from types import SimpleNamespace

import pytest
from bson import ObjectId
from pymongo.errors import DuplicateKeyError, OperationFailure

# Ensure project root is on sys.path
sys.path.append(str(Path(__file__).resolve().parents[1]))

from app import create_app  # noqa: E402
from repositories.country_repository import CountryRepository  # noqa: E402


class FakeCollection:
    """In-memory stand-in for the pymongo Collection calls the repository makes."""

    def __init__(self, docs=None):
        self.docs = [dict(doc) for doc in (docs or [])]
        self.unique_fields = set()
        self.fail_with = None

    def _maybe_fail(self):
        if self.fail_with is not None:
            raise self.fail_with

    def _matches(self, doc, query):
        return all(doc.get(k) == v for k, v in query.items())

    def _check_unique(self, candidate, skip=None):
        for field in self.unique_fields:
            for doc in self.docs:
                if doc is not skip and doc.get(field) == candidate.get(field):
                    raise DuplicateKeyError(
                        f"E11000 duplicate key error dup key: {{ {field}: \"{candidate.get(field)}\" }}",
                        code=11000,
                    )

    def create_index(self, keys, unique=False, **kwargs):
        self._maybe_fail()
        if unique:
            self.unique_fields.update(field for field, _ in keys)
        return "_".join(f"{field}_{direction}" for field, direction in keys)

    def find(self, query=None):
        self._maybe_fail()
        return [dict(doc) for doc in self.docs if self._matches(doc, query or {})]

    def find_one(self, query):
        self._maybe_fail()
        return next(iter(self.find(query)), None)

    def insert_one(self, doc):
        self._maybe_fail()
        self._check_unique(doc)
        stored = dict(doc, _id=ObjectId())
        self.docs.append(stored)
        return SimpleNamespace(inserted_id=stored["_id"])

    def update_one(self, query, update):
        self._maybe_fail()
        for doc in self.docs:
            if self._matches(doc, query):
                changed = dict(doc, **update["$set"])
                self._check_unique(changed, skip=doc)
                doc.update(update["$set"])
                return SimpleNamespace(matched_count=1, modified_count=1)
        return SimpleNamespace(matched_count=0, modified_count=0)

    def delete_one(self, query):
        self._maybe_fail()
        for index, doc in enumerate(self.docs):
            if self._matches(doc, query):
                del self.docs[index]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)


@pytest.fixture
def collection():
    return FakeCollection()


@pytest.fixture
def repository(collection):
    repo = CountryRepository(collection)
    repo.ensure_indexes()
    return repo


@pytest.fixture
def app(repository):
    app = create_app(config={"TESTING": True}, repository=repository)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def store_failure():
    """Error a broken store raises."""
    return OperationFailure("not authorized on country_db to execute command")

from __future__ import annotations

import pytest

from domain.models.country import Country
from middleware.errors import DatabaseOperationError, DuplicateKeyError
from repositories.country_repository import CountryRepository


def _italy() -> Country:
    return Country(country="Italy", capital="Rome", population=59000000)


def test_ensure_indexes_declares_unique_country(collection):
    CountryRepository(collection).ensure_indexes()

    assert collection.unique_fields == {"country"}


def test_save_and_find_all(repository, collection):
    inserted_id = repository.save(_italy())

    assert inserted_id == str(collection.docs[0]["_id"])
    assert repository.find_all() == [_italy()]


def test_save_duplicate_raises_typed_conflict(repository, collection):
    repository.save(_italy())

    with pytest.raises(DuplicateKeyError) as excinfo:
        repository.save(Country(country="Italy", capital="Milan", population=1))

    assert excinfo.value.code == 400
    assert excinfo.value.message == "Country already exists"
    assert len(collection.docs) == 1
    assert collection.docs[0]["capital"] == "Rome"


def test_other_store_errors_become_database_operation_errors(repository, collection, store_failure):
    collection.fail_with = store_failure

    with pytest.raises(DatabaseOperationError) as excinfo:
        repository.save(_italy())

    assert excinfo.value.code == 500
    assert excinfo.value.message == "Error inserting data"
    assert "not authorized" in excinfo.value.details["reason"]


def test_find_by_country(repository):
    repository.save(_italy())

    assert repository.find_by_country("Italy") == _italy()
    assert repository.find_by_country("France") is None


def test_update_returns_matched_count(repository, collection):
    repository.save(_italy())

    assert repository.update("Italy", {"capital": "Milan"}) == 1
    assert repository.update("France", {"capital": "Paris"}) == 0
    assert collection.docs[0]["capital"] == "Milan"


def test_update_rename_onto_existing_country_conflicts(repository):
    repository.save(_italy())
    repository.save(Country(country="France", capital="Paris", population=68000000))

    with pytest.raises(DuplicateKeyError):
        repository.update("France", {"country": "Italy"})

    assert repository.find_by_country("France").capital == "Paris"


def test_delete_removes_only_matching_record(repository):
    repository.save(_italy())
    repository.save(Country(country="France", capital="Paris", population=68000000))

    assert repository.delete("Italy") == 1
    assert repository.delete("Italy") == 0
    assert [c.country for c in repository.find_all()] == ["France"]

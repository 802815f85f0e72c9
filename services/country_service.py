"""Service helpers for managing country records."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from pydantic import ValidationError as PydanticValidationError

from domain.models.country import Country, CountryCreate, CountryUpdate
from middleware.errors import RecordNotFoundError, ValidationError
from repositories.country_repository import CountryRepository


CREATE_FIELDS_ERROR = "All fields are required and population must be a number"
UPDATE_PARAMS_ERROR = "Invalid or missing parameters"


def _field_errors(exc: PydanticValidationError) -> Dict[str, str]:
    """Flatten pydantic errors into ``{field: message}``."""
    errors: Dict[str, str] = {}
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"]) or "body"
        errors.setdefault(field, err["msg"])
    return errors


class CountryService:
    """Validate requests, call the repository and shape the results."""

    def __init__(self, repository: CountryRepository, logger: Optional[logging.Logger] = None):
        self.repository = repository
        self.logger = logger or logging.getLogger(__name__)

    def create_country(self, payload: Optional[Mapping[str, Any]]) -> Country:
        try:
            data = CountryCreate.model_validate(dict(payload or {}))
        except PydanticValidationError as exc:
            raise ValidationError(CREATE_FIELDS_ERROR, details={"fields": _field_errors(exc)})

        country = data.to_country()
        self.repository.save(country)
        self.logger.info("Inserted country %s", country.country)
        return country

    def list_countries(self) -> List[Country]:
        return self.repository.find_all()

    def get_country(self, name: str) -> Country:
        country = self.repository.find_by_country(name)
        if country is None:
            raise RecordNotFoundError("Country not found", details={"country": name})
        return country

    def update_country(self, name: str, payload: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        """
        Apply a partial update to ``name``.

        ``newCountry`` renames the record. Blank or null fields are ignored,
        and at least one field has to remain. Returns the ``$set`` document.
        """
        if not name:
            raise ValidationError(UPDATE_PARAMS_ERROR)
        try:
            data = CountryUpdate.model_validate(dict(payload or {}))
        except PydanticValidationError as exc:
            raise ValidationError(UPDATE_PARAMS_ERROR, details={"fields": _field_errors(exc)})
        if data.is_empty():
            raise ValidationError(
                UPDATE_PARAMS_ERROR,
                details={"expected": ["newCountry", "capital", "population"]},
            )

        changes = data.to_update()
        if self.repository.update(name, changes) == 0:
            raise RecordNotFoundError("Country not found", details={"country": name})
        self.logger.info("Updated country %s: %s", name, sorted(changes))
        return changes

    def delete_country(self, name: str) -> None:
        if self.repository.delete(name) == 0:
            raise RecordNotFoundError("Country not found", details={"country": name})
        self.logger.info("Deleted country %s", name)

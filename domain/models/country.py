from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def coerce_population(value: Any) -> int:
    """
    Turn a submitted population into an int.

    Accepts ints, integral floats and numeric strings ("59000000", "5.9e7").
    Booleans and anything non-numeric are rejected.
    """
    if isinstance(value, bool):
        raise ValueError("population must be a number")
    if isinstance(value, str):
        value = value.strip()
        if "_" in value:
            raise ValueError("population must be a number")
        try:
            value = float(value) if any(c in value for c in ".eE") else int(value)
        except ValueError:
            raise ValueError("population must be a number")
    if isinstance(value, float):
        if value != value or not value.is_integer():
            raise ValueError("population must be a whole number")
        value = int(value)
    if not isinstance(value, int):
        raise ValueError("population must be a number")
    if value <= 0:
        raise ValueError("population must be greater than zero")
    return value


class Country(BaseModel):
    """
    Country entity.

    - country: unique name (e.g., "Italy")
    - capital: capital city (e.g., "Rome")
    - population: head count, always stored as a number
    """
    country: str = Field(..., min_length=1, description="Unique country name like 'Italy'")
    capital: str = Field(..., min_length=1)
    population: int = Field(..., gt=0)

    def to_mongo(self) -> dict:
        return self.model_dump(exclude_none=True)

    @classmethod
    def from_mongo(cls, doc: dict | None) -> "Country | None":
        """Deserialize from MongoDB (``_id`` and driver extras are dropped)."""
        if not doc:
            return None
        return cls(**{k: v for k, v in doc.items() if k in cls.model_fields})


class CountryCreate(BaseModel):
    """Body of ``POST /submit``."""

    model_config = ConfigDict(str_strip_whitespace=True)

    country: str = Field(..., min_length=1)
    capital: str = Field(..., min_length=1)
    population: int

    @field_validator("population", mode="before")
    @classmethod
    def _population(cls, value: Any) -> int:
        return coerce_population(value)

    def to_country(self) -> Country:
        return Country(
            country=self.country,
            capital=self.capital,
            population=self.population,
        )


class CountryUpdate(BaseModel):
    """Body of ``PUT /countries/<country>``; every field optional."""

    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    new_country: Optional[str] = Field(default=None, alias="newCountry")
    capital: Optional[str] = None
    population: Optional[int] = None

    @field_validator("new_country", "capital", mode="before")
    @classmethod
    def _blank_is_missing(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("population", mode="before")
    @classmethod
    def _population(cls, value: Any) -> Optional[int]:
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        return coerce_population(value)

    def is_empty(self) -> bool:
        return self.new_country is None and self.capital is None and self.population is None

    def to_update(self) -> dict:
        """Build the partial ``$set`` document; ``newCountry`` maps to ``country``."""
        data = {}
        if self.new_country is not None:
            data["country"] = self.new_country
        if self.capital is not None:
            data["capital"] = self.capital
        if self.population is not None:
            data["population"] = self.population
        return data

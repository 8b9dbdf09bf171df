"""Listing request/response schemas and the search filter object."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class ListingCreate(BaseModel):
    """Sell form. Seller id comes from the caller's identity, not the body."""

    name: str
    code: str
    brand: str | None = None
    model: str | None = None
    condition: str
    price: float
    city: str
    region: str
    details: str | None = None


class ListingResponse(BaseModel):
    id: int
    name: str
    code: str
    brand: str | None = None
    model: str | None = None
    condition: str
    price: float
    city: str
    region: str
    seller_id: str
    details: str
    created_at: datetime

    model_config = {"from_attributes": True}


class ListingSummary(BaseModel):
    """Listing columns shown next to requests and matches."""

    name: str
    code: str
    brand: str | None = None
    model: str | None = None
    seller_id: str

    model_config = {"from_attributes": True}


class ListingFilters(BaseModel):
    """
    Search predicates, all optional and combined with AND.
    Text fields match case-insensitive substrings, condition matches exactly,
    price_min/price_max are inclusive. Accepts snake_case or camelCase keys.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    name: str | None = None
    code: str | None = None
    brand: str | None = None
    model: str | None = None
    condition: str | None = None
    city: str | None = None
    region: str | None = None
    seller_id: str | None = None
    price_min: float | None = None
    price_max: float | None = None

    @field_validator("*", mode="before")
    @classmethod
    def blank_is_absent(cls, value):
        # Empty form fields mean "no constraint"
        if isinstance(value, str) and not value.strip():
            return None
        return value

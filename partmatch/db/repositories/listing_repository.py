"""
Listing repository - create listings and search them with combined filters.
"""

import logging
import math
from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import select

from partmatch.core.errors import ValidationError
from partmatch.db.models.listing import CONDITIONS, Listing
from partmatch.db.models.user import User
from partmatch.db.repositories.base_repository import BaseRepository, require_text, storage_errors
from partmatch.schemas.listing import ListingFilters

logger = logging.getLogger(__name__)

REQUIRED_TEXT_FIELDS = ("name", "code", "condition", "city", "region", "seller_id")
OPTIONAL_TEXT_FIELDS = ("brand", "model")

# Filters matched as case-insensitive substrings; condition is exact, price is a range
SUBSTRING_FILTERS = ("name", "code", "brand", "model", "city", "region", "seller_id")

# Bounds of the NUMERIC(12, 2) price column
MAX_PRICE = Decimal("9999999999.99")
CENT = Decimal("0.01")


def parse_price(value: Any) -> float:
    """Numeric (or numeric string), finite, >= 0 and storable in the NUMERIC(12, 2) column."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError("Missing required field: price")
    if isinstance(value, bool):
        raise ValidationError("Price must be a number")
    try:
        price = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError("Price must be a number") from None
    if not price.is_finite():
        raise ValidationError("Price must be a number")
    if price < 0:
        raise ValidationError("Price must not be negative")
    if price > MAX_PRICE:
        raise ValidationError(f"Price must not exceed {MAX_PRICE}")
    if price != price.quantize(CENT):
        raise ValidationError("Price must have at most 2 decimal places")
    return float(price)


def validate_listing(attrs: Mapping[str, Any]) -> dict[str, Any]:
    """Check required fields and return cleaned column values. Raises ValidationError."""
    values = {field: require_text(attrs.get(field), field) for field in REQUIRED_TEXT_FIELDS}
    if values["condition"] not in CONDITIONS:
        raise ValidationError(f"Condition must be one of: {', '.join(CONDITIONS)}")
    values["price"] = parse_price(attrs.get("price"))
    for field in OPTIONAL_TEXT_FIELDS:
        raw = attrs.get(field)
        text = str(raw).strip() if raw is not None else ""
        values[field] = text or None
    details = attrs.get("details")
    values["details"] = str(details) if details is not None else ""
    return values


def coerce_filters(filters: ListingFilters | Mapping[str, Any] | None) -> ListingFilters:
    if filters is None:
        return ListingFilters()
    if isinstance(filters, ListingFilters):
        return filters
    try:
        return ListingFilters.model_validate(dict(filters))
    except PydanticValidationError as exc:
        fields = ", ".join(str(err["loc"][0]) for err in exc.errors() if err.get("loc"))
        raise ValidationError(f"Invalid search filter: {fields}") from None


class ListingRepository(BaseRepository[Listing]):
    """Listing queries. Results are always ordered by id (insertion order)."""

    def __init__(self, session):
        super().__init__(session, Listing)

    async def create(self, attrs: Mapping[str, Any]) -> int:
        """Validate and insert a listing; returns the generated id."""
        values = validate_listing(attrs)
        await self.require_reference(User, values["seller_id"], "seller_id")
        listing = await self.add(Listing(**values))
        logger.info("Listing %s created by seller %s", listing.id, listing.seller_id)
        return listing.id

    async def search(self, filters: ListingFilters | Mapping[str, Any] | None = None) -> list[Listing]:
        """All listings satisfying every provided filter. No filters returns everything."""
        f = coerce_filters(filters)
        conds = []
        for field in SUBSTRING_FILTERS:
            value = getattr(f, field)
            if value is not None:
                conds.append(getattr(Listing, field).icontains(value, autoescape=True))
        if f.condition is not None:
            conds.append(Listing.condition == f.condition)
        if f.price_min is not None:
            if not math.isfinite(f.price_min):
                raise ValidationError("Invalid search filter: priceMin")
            conds.append(Listing.price >= f.price_min)
        if f.price_max is not None:
            if not math.isfinite(f.price_max):
                raise ValidationError("Invalid search filter: priceMax")
            conds.append(Listing.price <= f.price_max)

        with storage_errors("listing search"):
            result = await self.session.execute(select(Listing).where(*conds).order_by(Listing.id))
            return list(result.scalars().all())

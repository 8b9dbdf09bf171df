"""
Listing endpoints - sell a part, search and view listings.
"""

from fastapi import APIRouter, Query, status

from partmatch.core.dependencies import CurrentIdentity, Matching
from partmatch.schemas.listing import ListingCreate, ListingFilters, ListingResponse

router = APIRouter()


@router.get("", response_model=list[ListingResponse])
async def search_listings(
    matching: Matching,
    name: str | None = Query(None),
    code: str | None = Query(None),
    brand: str | None = Query(None),
    model: str | None = Query(None),
    condition: str | None = Query(None),
    city: str | None = Query(None),
    region: str | None = Query(None),
    seller_id: str | None = Query(None),
    price_min: float | None = Query(None),
    price_max: float | None = Query(None),
):
    """Search with AND-combined filters. No filters lists every listing."""
    filters = ListingFilters(
        name=name,
        code=code,
        brand=brand,
        model=model,
        condition=condition,
        city=city,
        region=region,
        seller_id=seller_id,
        price_min=price_min,
        price_max=price_max,
    )
    return await matching.search(filters)


@router.get("/{listing_id}", response_model=ListingResponse)
async def get_listing(matching: Matching, listing_id: int):
    return await matching.get_listing(listing_id)


@router.post("", response_model=ListingResponse, status_code=status.HTTP_201_CREATED)
async def create_listing(matching: Matching, data: ListingCreate, seller: CurrentIdentity):
    """Post a listing owned by the caller."""
    return await matching.sell(seller, data.model_dump())

"""Match schemas."""

from datetime import datetime

from pydantic import BaseModel

from partmatch.schemas.listing import ListingSummary


class MatchCreate(BaseModel):
    listing_id: int
    status: str


class MatchResponse(BaseModel):
    id: int
    buyer_id: str
    listing_id: int
    status: str
    created_at: datetime

    model_config = {"from_attributes": True}


class MatchWithListingResponse(MatchResponse):
    listing: ListingSummary

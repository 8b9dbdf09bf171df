"""Match request schemas."""

from datetime import datetime

from pydantic import BaseModel

from partmatch.schemas.listing import ListingSummary


class MatchRequestCreate(BaseModel):
    listing_id: int


class MatchRequestStatusUpdate(BaseModel):
    status: str


class MatchRequestResponse(BaseModel):
    id: int
    buyer_id: str
    listing_id: int
    status: str
    created_at: datetime

    model_config = {"from_attributes": True}


class PendingRequestResponse(MatchRequestResponse):
    listing: ListingSummary

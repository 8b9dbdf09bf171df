"""
Match request endpoints - buyers request a listing, sellers approve or reject.
"""

from fastapi import APIRouter, status

from partmatch.core.dependencies import CurrentIdentity, Matching
from partmatch.schemas.match_request import (
    MatchRequestCreate,
    MatchRequestResponse,
    MatchRequestStatusUpdate,
    PendingRequestResponse,
)

router = APIRouter()


@router.post("", response_model=MatchRequestResponse, status_code=status.HTTP_201_CREATED)
async def create_request(matching: Matching, data: MatchRequestCreate, buyer: CurrentIdentity):
    """Send a pending request. A repeat for the same listing returns 409 duplicate_request."""
    return await matching.send_request(buyer, data.listing_id)


@router.get("/pending", response_model=list[PendingRequestResponse])
async def pending_requests(matching: Matching, seller: CurrentIdentity):
    """Pending requests on the caller's listings."""
    return await matching.pending_requests(seller)


@router.post("/{request_id}/status", response_model=MatchRequestResponse)
async def set_request_status(
    matching: Matching, request_id: int, data: MatchRequestStatusUpdate, seller: CurrentIdentity
):
    return await matching.decide_request(seller, request_id, data.status)

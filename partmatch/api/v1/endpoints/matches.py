"""
Match endpoints - record interest in a listing and list the caller's matches.
"""

from fastapi import APIRouter, status

from partmatch.core.dependencies import CurrentIdentity, Matching
from partmatch.schemas.match import MatchCreate, MatchResponse, MatchWithListingResponse

router = APIRouter()


@router.post("", response_model=MatchResponse, status_code=status.HTTP_201_CREATED)
async def create_match(matching: Matching, data: MatchCreate, buyer: CurrentIdentity):
    """Record interest. A repeat for the same listing returns 409 duplicate_match."""
    return await matching.record_interest(buyer, data.listing_id, data.status)


@router.get("/mine", response_model=list[MatchWithListingResponse])
async def my_matches(matching: Matching, user: CurrentIdentity):
    """Matches where the caller is the buyer or the seller."""
    return await matching.matches_for(user)

"""
Matching service - buyer/seller workflow over listings, match requests and matches.
Keeps the endpoints thin: ownership and existence checks live here, storage rules in the repositories.
"""

from collections.abc import Mapping
from typing import Any

from partmatch.core.errors import ForbiddenError, NotFoundError, ValidationError
from partmatch.db.models.listing import Listing
from partmatch.db.repositories.base_repository import require_int_id, require_text
from partmatch.db.repositories.listing_repository import ListingRepository
from partmatch.db.repositories.match_repository import MatchRepository
from partmatch.db.repositories.match_request_repository import MatchRequestRepository, validate_decision
from partmatch.schemas.listing import ListingFilters, ListingResponse
from partmatch.schemas.match import MatchResponse, MatchWithListingResponse
from partmatch.schemas.match_request import MatchRequestResponse, PendingRequestResponse
from partmatch.schemas.user import Identity


class MatchingService:
    def __init__(
        self,
        listing_repo: ListingRepository,
        request_repo: MatchRequestRepository,
        match_repo: MatchRepository,
    ):
        self.listing_repo = listing_repo
        self.request_repo = request_repo
        self.match_repo = match_repo

    async def _existing_listing(self, listing_id: Any) -> Listing:
        listing = await self.listing_repo.get_by_id(require_int_id(listing_id, "listing_id"))
        if listing is None:
            raise NotFoundError("Listing not found")
        return listing

    # Listings

    async def sell(self, seller: Identity, attrs: Mapping[str, Any]) -> ListingResponse:
        listing_id = await self.listing_repo.create({**attrs, "seller_id": seller.id})
        listing = await self.listing_repo.get_by_id(listing_id)
        return ListingResponse.model_validate(listing)

    async def get_listing(self, listing_id: int) -> ListingResponse:
        return ListingResponse.model_validate(await self._existing_listing(listing_id))

    async def search(self, filters: ListingFilters | Mapping[str, Any] | None) -> list[ListingResponse]:
        listings = await self.listing_repo.search(filters)
        return [ListingResponse.model_validate(item) for item in listings]

    # Match requests

    async def send_request(self, buyer: Identity, listing_id: Any) -> MatchRequestResponse:
        listing = await self._existing_listing(listing_id)
        if listing.seller_id == buyer.id:
            raise ValidationError("You cannot send a request for your own listing")
        request = await self.request_repo.create(buyer.id, listing.id)
        return MatchRequestResponse.model_validate(request)

    async def pending_requests(self, seller: Identity) -> list[PendingRequestResponse]:
        requests = await self.request_repo.list_pending_for_seller(seller.id)
        return [PendingRequestResponse.model_validate(r) for r in requests]

    async def decide_request(self, seller: Identity, request_id: Any, status: str) -> MatchRequestResponse:
        """Approve or reject. Only the seller of the requested listing may decide."""
        status = validate_decision(status)
        request = await self.request_repo.get_by_id_with_listing(require_int_id(request_id, "request_id"))
        if request is None:
            raise NotFoundError("Match request not found")
        if request.listing.seller_id != seller.id:
            raise ForbiddenError("Only the seller of this listing can decide the request")
        updated = await self.request_repo.set_status(request.id, status)
        return MatchRequestResponse.model_validate(updated)

    # Matches

    async def record_interest(self, buyer: Identity, listing_id: Any, status: str) -> MatchResponse:
        status = require_text(status, "status")
        listing = await self._existing_listing(listing_id)
        match = await self.match_repo.create(buyer.id, listing.id, status)
        return MatchResponse.model_validate(match)

    async def matches_for(self, user: Identity) -> list[MatchWithListingResponse]:
        matches = await self.match_repo.list_for_user(user.id)
        return [MatchWithListingResponse.model_validate(m) for m in matches]

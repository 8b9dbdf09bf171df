"""
Match request repository - buyer requests and the seller's approve/reject decision.
Uniqueness of (buyer, listing) is enforced by the table, not by a prior lookup.
"""

import logging

from sqlalchemy import select, update
from sqlalchemy.orm import contains_eager, selectinload

from partmatch.core.errors import DuplicateRequestError, NotFoundError, ValidationError
from partmatch.db.models.listing import Listing
from partmatch.db.models.match_request import DECISIONS, PENDING, MatchRequest
from partmatch.db.models.user import User
from partmatch.db.repositories.base_repository import (
    BaseRepository,
    require_int_id,
    require_text,
    storage_errors,
)

logger = logging.getLogger(__name__)


def validate_decision(status: str) -> str:
    if status not in DECISIONS:
        raise ValidationError(f"Status must be one of: {', '.join(DECISIONS)}")
    return status


class MatchRequestRepository(BaseRepository[MatchRequest]):
    def __init__(self, session):
        super().__init__(session, MatchRequest)

    async def get_by_id_with_listing(self, id: int) -> MatchRequest | None:
        with storage_errors("match request lookup"):
            result = await self.session.execute(
                select(MatchRequest)
                .where(MatchRequest.id == id)
                .options(selectinload(MatchRequest.listing))
                .execution_options(populate_existing=True)
            )
            return result.scalar_one_or_none()

    async def create(self, buyer_id: str, listing_id: int) -> MatchRequest:
        """Insert a pending request. A second request for the same pair raises DuplicateRequestError."""
        buyer_id = require_text(buyer_id, "buyer_id")
        listing_id = require_int_id(listing_id, "listing_id")
        await self.require_reference(User, buyer_id, "buyer_id")
        await self.require_reference(Listing, listing_id, "listing_id")

        stmt = (
            self.dialect_insert()
            .values(buyer_id=buyer_id, listing_id=listing_id, status=PENDING)
            .on_conflict_do_nothing(index_elements=["buyer_id", "listing_id"])
            .returning(MatchRequest.id)
        )
        with storage_errors("match request insert"):
            new_id = (await self.session.execute(stmt)).scalar_one_or_none()
        if new_id is None:
            logger.info("Duplicate match request: buyer=%s listing=%s", buyer_id, listing_id)
            raise DuplicateRequestError()
        logger.info("Match request %s created: buyer=%s listing=%s", new_id, buyer_id, listing_id)
        return await self.get_by_id(new_id)

    async def list_pending_for_seller(self, seller_id: str) -> list[MatchRequest]:
        """Pending requests on the seller's listings, with the listing loaded for display."""
        seller_id = require_text(seller_id, "seller_id")
        with storage_errors("pending match request query"):
            result = await self.session.execute(
                select(MatchRequest)
                .join(MatchRequest.listing)
                .options(contains_eager(MatchRequest.listing))
                .where(MatchRequest.status == PENDING, Listing.seller_id == seller_id)
                .order_by(MatchRequest.id)
                .execution_options(populate_existing=True)
            )
            return list(result.scalars().all())

    async def set_status(self, request_id: int, status: str) -> MatchRequest:
        """
        Move a request to approved/rejected. The update only matches rows that are
        still pending or already carry the same status, so a decision is never reversed.
        """
        request_id = require_int_id(request_id, "request_id")
        status = validate_decision(status)

        with storage_errors("match request status update"):
            result = await self.session.execute(
                update(MatchRequest)
                .where(MatchRequest.id == request_id, MatchRequest.status.in_((PENDING, status)))
                .values(status=status)
                .execution_options(synchronize_session=False)
            )
        if result.rowcount == 0:
            existing = await self.get_by_id(request_id)
            if existing is None:
                raise NotFoundError("Match request not found")
            raise ValidationError(f"Match request has already been {existing.status}")
        logger.info("Match request %s set to %s", request_id, status)
        return await self.get_by_id(request_id)

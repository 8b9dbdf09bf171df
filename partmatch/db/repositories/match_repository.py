"""
Match repository - recorded buyer interest and the "my matches" view for either party.
"""

import logging

from sqlalchemy import or_, select
from sqlalchemy.orm import contains_eager

from partmatch.core.errors import DuplicateMatchError
from partmatch.db.models.listing import Listing
from partmatch.db.models.match import Match
from partmatch.db.models.user import User
from partmatch.db.repositories.base_repository import (
    BaseRepository,
    require_int_id,
    require_text,
    storage_errors,
)

logger = logging.getLogger(__name__)


class MatchRepository(BaseRepository[Match]):
    def __init__(self, session):
        super().__init__(session, Match)

    async def create(self, buyer_id: str, listing_id: int, status: str) -> Match:
        """Record interest. A second match for the same pair raises DuplicateMatchError."""
        buyer_id = require_text(buyer_id, "buyer_id")
        listing_id = require_int_id(listing_id, "listing_id")
        status = require_text(status, "status")
        await self.require_reference(User, buyer_id, "buyer_id")
        await self.require_reference(Listing, listing_id, "listing_id")

        stmt = (
            self.dialect_insert()
            .values(buyer_id=buyer_id, listing_id=listing_id, status=status)
            .on_conflict_do_nothing(index_elements=["buyer_id", "listing_id"])
            .returning(Match.id)
        )
        with storage_errors("match insert"):
            new_id = (await self.session.execute(stmt)).scalar_one_or_none()
        if new_id is None:
            logger.info("Duplicate match: buyer=%s listing=%s", buyer_id, listing_id)
            raise DuplicateMatchError()
        logger.info("Match %s recorded: buyer=%s listing=%s status=%s", new_id, buyer_id, listing_id, status)
        return await self.get_by_id(new_id)

    async def list_for_user(self, user_id: str) -> list[Match]:
        """
        Matches where the user is the buyer or owns the listing. A single OR query over
        the join, so a match satisfying both roles comes back once.
        """
        user_id = require_text(user_id, "user_id")
        with storage_errors("match query"):
            result = await self.session.execute(
                select(Match)
                .join(Match.listing)
                .options(contains_eager(Match.listing))
                .where(or_(Match.buyer_id == user_id, Listing.seller_id == user_id))
                .order_by(Match.id)
                .execution_options(populate_existing=True)
            )
            return list(result.scalars().unique().all())

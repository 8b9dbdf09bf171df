"""
Match tests - recorded interest and the either-party "my matches" view.
"""

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from partmatch.core.errors import DuplicateMatchError, ValidationError
from partmatch.db.models import Match
from partmatch.db.repositories import MatchRepository
from tests.conftest import make_listing, make_user


@pytest.mark.asyncio
async def test_create_and_duplicate_match(session: AsyncSession, seller, buyer):
    listing = await make_listing(session, seller)
    repo = MatchRepository(session)

    match = await repo.create(buyer.id, listing.id, "interested")
    assert match.status == "interested"

    with pytest.raises(DuplicateMatchError):
        await repo.create(buyer.id, listing.id, "interested")
    assert await session.scalar(select(func.count()).select_from(Match)) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [None, "", "   "])
async def test_create_match_requires_status(session: AsyncSession, seller, buyer, status):
    listing = await make_listing(session, seller)
    with pytest.raises(ValidationError):
        await MatchRepository(session).create(buyer.id, listing.id, status)


@pytest.mark.asyncio
async def test_matches_for_buyer_and_seller(session: AsyncSession, seller, buyer):
    stranger = await make_user(session, "stranger-01", "stranger@example.com")
    listing = await make_listing(session, seller, name="Gearbox", code="GB-6", brand="ZF", model="6HP")
    repo = MatchRepository(session)
    match = await repo.create(buyer.id, listing.id, "interested")

    as_buyer = await repo.list_for_user(buyer.id)
    as_seller = await repo.list_for_user(seller.id)
    assert [m.id for m in as_buyer] == [match.id]
    assert [m.id for m in as_seller] == [match.id]
    assert as_seller[0].listing.name == "Gearbox"
    assert as_seller[0].listing.code == "GB-6"
    assert await repo.list_for_user(stranger.id) == []


@pytest.mark.asyncio
async def test_match_on_own_listing_is_listed_once(session: AsyncSession, seller, buyer):
    own = await make_listing(session, seller, name="Own part")
    other = await make_listing(session, buyer, name="Buyer part")
    repo = MatchRepository(session)

    self_match = await repo.create(seller.id, own.id, "interested")
    bought = await repo.create(seller.id, other.id, "interested")
    sold = await repo.create(buyer.id, own.id, "approved")

    matches = await repo.list_for_user(seller.id)
    assert [m.id for m in matches] == [self_match.id, bought.id, sold.id]


@pytest.mark.asyncio
async def test_create_match_rejects_unknown_buyer_or_listing(session: AsyncSession, seller):
    listing = await make_listing(session, seller)
    repo = MatchRepository(session)
    with pytest.raises(ValidationError, match="Unknown buyer_id"):
        await repo.create("ghost", listing.id, "interested")
    with pytest.raises(ValidationError, match="Unknown listing_id"):
        await repo.create(seller.id, listing.id + 100, "interested")
    assert await session.scalar(select(func.count()).select_from(Match)) == 0

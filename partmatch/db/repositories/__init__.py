# Repository pattern: abstract data access (SOLID - Dependency Inversion)

from partmatch.db.repositories.listing_repository import ListingRepository
from partmatch.db.repositories.match_repository import MatchRepository
from partmatch.db.repositories.match_request_repository import MatchRequestRepository
from partmatch.db.repositories.user_repository import UserRepository

__all__ = ["UserRepository", "ListingRepository", "MatchRequestRepository", "MatchRepository"]

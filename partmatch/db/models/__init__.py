from partmatch.db.models.user import User
from partmatch.db.models.listing import Listing
from partmatch.db.models.match_request import MatchRequest
from partmatch.db.models.match import Match

__all__ = ["User", "Listing", "MatchRequest", "Match"]

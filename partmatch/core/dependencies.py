"""
FastAPI dependencies - injection for services and the caller's identity.
"""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from partmatch.core.errors import AuthError
from partmatch.db.repositories import (
    ListingRepository,
    MatchRepository,
    MatchRequestRepository,
    UserRepository,
)
from partmatch.db.session import DbSession
from partmatch.schemas.user import Identity
from partmatch.services.identity_service import IdentityService
from partmatch.services.matching_service import MatchingService

security = HTTPBearer(auto_error=False)

BearerCredentials = Annotated[HTTPAuthorizationCredentials | None, Depends(security)]


def get_identity_service(session: DbSession) -> IdentityService:
    return IdentityService(UserRepository(session))


def get_matching_service(session: DbSession) -> MatchingService:
    """Factory for service with repository injection (Dependency Inversion)."""
    return MatchingService(
        ListingRepository(session),
        MatchRequestRepository(session),
        MatchRepository(session),
    )


async def get_current_identity(
    identities: Annotated[IdentityService, Depends(get_identity_service)],
    credentials: BearerCredentials,
) -> Identity:
    """Resolve the bearer token to an identity. Anonymous when absent, invalid or revoked."""
    return await identities.resolve(credentials.credentials if credentials else None)


async def require_identity(
    identity: Annotated[Identity, Depends(get_current_identity)],
) -> Identity:
    """Raises AuthError (401) for anonymous callers."""
    if identity.is_anonymous:
        raise AuthError()
    return identity


Identities = Annotated[IdentityService, Depends(get_identity_service)]
Matching = Annotated[MatchingService, Depends(get_matching_service)]
OptionalIdentity = Annotated[Identity, Depends(get_current_identity)]
CurrentIdentity = Annotated[Identity, Depends(require_identity)]

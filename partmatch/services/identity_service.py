"""
Identity service - the in-process authentication provider.
Orchestrates user repository, password hashing, JWT, Redis cache and session events.
"""

import json
import logging

from partmatch.cache.redis_client import cache_delete, cache_get, cache_set
from partmatch.config import get_settings
from partmatch.core.errors import AuthError
from partmatch.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    seconds_until_expiry,
    verify_password,
)
from partmatch.core.session_events import IDENTITY_UPDATED, SIGNED_IN, SIGNED_OUT, publish_session_event
from partmatch.db.models.user import User
from partmatch.db.repositories.user_repository import UserRepository
from partmatch.schemas.user import ANONYMOUS, Identity

logger = logging.getLogger(__name__)

IDENTITY_CACHE_PREFIX = "identity:"
REVOKED_TOKEN_PREFIX = "revoked-token:"


def _to_identity(user: User) -> Identity:
    return Identity(id=user.id, email=user.email, username=user.username)


class IdentityService:
    """Register, sign in, sign out and resolve the current caller."""

    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo
        self.settings = get_settings()

    async def register(self, email: str, password: str) -> User:
        """Create a credential-backed identity with a fresh opaque id."""
        user = await self.user_repo.create_credential(email, hash_password(password))
        logger.info("Registered identity %s", user.id)
        return user

    async def login(self, email: str, password: str) -> tuple[str, Identity]:
        """Verify credentials, refresh the identity row and issue a bearer token."""
        user = await self.user_repo.get_by_email(email)
        if not user or not verify_password(password, user.hashed_password):
            raise AuthError("Invalid email or password")
        identity = await self.upsert_identity(user.id, user.email)
        token = create_access_token(identity.id)
        await publish_session_event(SIGNED_IN, identity.id)
        return token, identity

    async def upsert_identity(self, identity_id: str, email: str | None) -> Identity:
        """Insert or refresh the identity row; drops any cached copy."""
        user = await self.user_repo.upsert_identity(identity_id, email)
        await cache_delete(IDENTITY_CACHE_PREFIX + user.id)
        await publish_session_event(IDENTITY_UPDATED, user.id)
        return _to_identity(user)

    async def logout(self, token: str | None) -> bool:
        """Revoke the token until it expires. Returns False if the revocation could not be stored."""
        payload = decode_access_token(token) if token else None
        if not payload or "sub" not in payload:
            raise AuthError()
        revoked = True
        if payload.get("jti"):
            revoked = await cache_set(REVOKED_TOKEN_PREFIX + payload["jti"], "1", seconds_until_expiry(payload))
            if not revoked:
                logger.warning("Could not record revocation of token for %s", payload["sub"])
        await cache_delete(IDENTITY_CACHE_PREFIX + payload["sub"])
        await publish_session_event(SIGNED_OUT, payload["sub"])
        return revoked

    async def resolve(self, token: str | None) -> Identity:
        """The caller's identity, or ANONYMOUS. Never raises for a missing or bad token."""
        if not token:
            return ANONYMOUS
        payload = decode_access_token(token)
        if not payload or "sub" not in payload:
            return ANONYMOUS
        if payload.get("jti") and await cache_get(REVOKED_TOKEN_PREFIX + payload["jti"]):
            return ANONYMOUS

        key = IDENTITY_CACHE_PREFIX + str(payload["sub"])
        cached = await cache_get(key)
        if cached:
            try:
                return Identity.model_validate(json.loads(cached))
            except ValueError:
                logger.warning("Dropping unreadable cached identity %s", key)

        user = await self.user_repo.get_by_id(str(payload["sub"]))
        if not user:
            return ANONYMOUS
        identity = _to_identity(user)
        await cache_set(key, identity.model_dump(), self.settings.identity_cache_ttl)
        return identity

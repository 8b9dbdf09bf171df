"""
User repository - identity lookups and the login-time upsert.
"""

import logging
import uuid

from sqlalchemy import func, select

from partmatch.config import get_settings
from partmatch.core.errors import DuplicateError, ValidationError
from partmatch.db.models.user import User
from partmatch.db.repositories.base_repository import BaseRepository, require_text, storage_errors

logger = logging.getLogger(__name__)


def username_from_email(email: str | None) -> str:
    """Local part of the address, or the configured placeholder when there is none."""
    if email:
        local = email.split("@", 1)[0].strip()
        if local:
            return local
    return get_settings().default_username


class UserRepository(BaseRepository[User]):
    """User-specific queries. Extends base CRUD with domain logic."""

    def __init__(self, session):
        super().__init__(session, User)

    async def get_by_email(self, email: str) -> User | None:
        """Find user by email - used for authentication."""
        with storage_errors("user lookup by email"):
            result = await self.session.execute(select(User).where(User.email == email))
            return result.scalar_one_or_none()

    async def create_credential(self, email: str, hashed_password: str) -> User:
        """
        Insert a password-backed identity with a fresh opaque id. The unique email index
        decides races: a losing insert returns no row and raises DuplicateError.
        """
        email = require_text(email, "email")
        stmt = (
            self.dialect_insert()
            .values(
                id=str(uuid.uuid4()),
                email=email,
                username=username_from_email(email),
                hashed_password=hashed_password,
            )
            .on_conflict_do_nothing(index_elements=["email"])
            .returning(User.id)
        )
        with storage_errors("credential insert"):
            new_id = (await self.session.execute(stmt)).scalar_one_or_none()
        if new_id is None:
            logger.info("Registration refused, email already in use")
            raise DuplicateError("Email already registered")
        return await self.get_by_id(new_id)

    async def upsert_identity(self, identity_id: str, email: str | None) -> User:
        """
        Insert the identity if its id is new, otherwise refresh email and username.
        One statement, so repeated calls with the same input leave the row unchanged.
        """
        identity_id = require_text(identity_id, "id")
        if email is not None and not isinstance(email, str):
            raise ValidationError("Invalid email")
        email = email.strip() if email and email.strip() else None
        username = username_from_email(email)

        stmt = self.dialect_insert().values(id=identity_id, email=email, username=username)
        stmt = stmt.on_conflict_do_update(
            index_elements=["id"],
            set_={
                "email": stmt.excluded.email,
                "username": stmt.excluded.username,
                "updated_at": func.now(),
            },
        )
        with storage_errors("identity upsert"):
            await self.session.execute(stmt)
        user = await self.get_by_id(identity_id)
        logger.info("Identity %s upserted (username=%s)", identity_id, username)
        return user

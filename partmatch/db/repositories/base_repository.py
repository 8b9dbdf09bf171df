"""
Base repository - generic async data access shared by all repositories.
Translates datastore failures into StorageError and validates ids up front.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from partmatch.core.errors import StorageError, ValidationError
from partmatch.db.base import Base

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


@contextmanager
def storage_errors(operation: str) -> Iterator[None]:
    """Log any SQLAlchemy failure with traceback and re-raise it as a generic StorageError."""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.exception("Storage failure during %s", operation)
        raise StorageError() from exc


def require_text(value: Any, field: str) -> str:
    """Present and non-blank, returned stripped."""
    if value is None:
        raise ValidationError(f"Missing required field: {field}")
    text = str(value).strip()
    if not text:
        raise ValidationError(f"Missing required field: {field}")
    return text


def require_int_id(value: Any, field: str) -> int:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"Missing required field: {field}")
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {field}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {field}") from None


class BaseRepository(Generic[ModelType]):
    """Generic async repository. Subclasses define model-specific methods."""

    def __init__(self, session: AsyncSession, model: type[ModelType]):
        self.session = session
        self.model = model

    async def get_by_id(self, id: Any) -> ModelType | None:
        """Fetch single entity by primary key. Used for detail endpoints."""
        with storage_errors(f"{self.model.__tablename__} lookup"):
            result = await self.session.execute(
                select(self.model)
                .where(self.model.id == id)
                .execution_options(populate_existing=True)
            )
            return result.scalar_one_or_none()

    async def add(self, entity: ModelType) -> ModelType:
        """Persist new entity. Caller commits session."""
        with storage_errors(f"{self.model.__tablename__} insert"):
            self.session.add(entity)
            await self.session.flush()  # Get ID without committing
            await self.session.refresh(entity)
        return entity

    def dialect_insert(self):
        """INSERT construct for the bound dialect, so ON CONFLICT clauses are available."""
        dialect = self.session.get_bind().dialect.name
        if dialect == "postgresql":
            return pg_insert(self.model)
        if dialect == "sqlite":
            return sqlite_insert(self.model)
        raise StorageError(f"Unsupported database dialect: {dialect}")

    async def require_reference(self, model: type[Base], value: Any, field: str) -> Any:
        """Referenced row must exist, so inserts never point at unknown users or listings."""
        with storage_errors(f"{model.__tablename__} reference check"):
            found = await self.session.scalar(select(model.id).where(model.id == value))
        if found is None:
            raise ValidationError(f"Unknown {field}")
        return value

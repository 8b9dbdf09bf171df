"""
Declarative base shared by users, listings, match_requests and matches.
Alembic autogenerates against Base.metadata, so every model module must be imported
(see partmatch.db.models) before the metadata is read.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass

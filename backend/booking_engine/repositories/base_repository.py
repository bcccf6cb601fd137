# backend/booking_engine/repositories/base_repository.py
"""
Base Repository for the booking engine.

Repositories own every query; services never touch the session directly.
Each method awaits one or more round-trips on the injected ``AsyncSession``
and never commits: transaction boundaries belong to the unit of work (writes)
or to the request-scoped read session (queries).

Persistence failures are logged with their context and re-raised as
``RepositoryException`` so callers can map them to a generic Conflict
without leaking driver details.
"""

from __future__ import annotations

import logging
from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import RepositoryException
from ..database import Base

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """
    Common data access patterns for one model.

    Attributes:
        db: Async SQLAlchemy session
        model: SQLAlchemy model class
    """

    def __init__(self, db: AsyncSession, model: Type[T]):
        self.db = db
        self.model = model
        self.logger = logging.getLogger(f"{__name__}.{model.__name__}")

    async def get_by_id(self, id: str) -> Optional[T]:
        try:
            return await self.db.get(self.model, id)
        except SQLAlchemyError as e:
            self.logger.error(f"Error getting {self.model.__name__} by id {id}: {str(e)}")
            raise RepositoryException(f"Failed to retrieve {self.model.__name__}: {str(e)}") from e

    async def create(self, **kwargs: Any) -> T:
        """
        Create a new entity.

        Note: Does NOT commit - the caller owns the transaction.
        """
        try:
            entity = self.model(**kwargs)
            self.db.add(entity)
            await self.db.flush()
            return entity
        except IntegrityError as exc:
            self.logger.error(
                "Integrity error creating %s: %s", self.model.__name__, exc, exc_info=True
            )
            raise RepositoryException(f"Integrity constraint violated: {exc}") from exc
        except SQLAlchemyError as e:
            self.logger.error(f"Error creating {self.model.__name__}: {str(e)}")
            raise RepositoryException(f"Failed to create {self.model.__name__}: {str(e)}") from e

    async def update(self, id: str, **kwargs: Any) -> Optional[T]:
        """Update only the provided fields; returns None when the row is missing."""
        try:
            entity = await self.db.get(self.model, id)
            if entity is None:
                return None
            for key, value in kwargs.items():
                if hasattr(entity, key):
                    setattr(entity, key, value)
            await self.db.flush()
            return entity
        except IntegrityError as exc:
            self.logger.error(
                "Integrity error updating %s %s: %s", self.model.__name__, id, exc, exc_info=True
            )
            raise RepositoryException(f"Integrity constraint violated: {exc}") from exc
        except SQLAlchemyError as e:
            self.logger.error(f"Error updating {self.model.__name__} {id}: {str(e)}")
            raise RepositoryException(f"Failed to update {self.model.__name__}: {str(e)}") from e

    async def delete(self, id: str) -> bool:
        """Delete by primary key; returns False if the row was not found."""
        try:
            entity = await self.db.get(self.model, id)
            if entity is None:
                return False
            await self.db.delete(entity)
            await self.db.flush()
            return True
        except IntegrityError as e:
            self.logger.error(
                f"Cannot delete {self.model.__name__} {id} due to constraints: {str(e)}"
            )
            raise RepositoryException(f"Cannot delete due to existing references: {str(e)}") from e
        except SQLAlchemyError as e:
            self.logger.error(f"Error deleting {self.model.__name__} {id}: {str(e)}")
            raise RepositoryException(f"Failed to delete {self.model.__name__}: {str(e)}") from e

# backend/booking_engine/repositories/establishment_repository.py
"""Establishment lookups, chiefly the caller's role within a tenant."""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import RepositoryException
from ..models.establishment import Establishment, EstablishmentMember
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class EstablishmentRepository(BaseRepository[Establishment]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, Establishment)

    async def get_user_role(self, user_id: str, establishment_id: str) -> Optional[str]:
        """Return 'OWNER', 'STAFF' or None when the user has no role there."""
        try:
            stmt = select(EstablishmentMember.role).where(
                EstablishmentMember.user_id == user_id,
                EstablishmentMember.establishment_id == establishment_id,
            )
            return (await self.db.execute(stmt)).scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(
                f"Error loading role of user {user_id} in establishment {establishment_id}: {str(e)}"
            )
            raise RepositoryException(f"Failed to load establishment role: {str(e)}") from e

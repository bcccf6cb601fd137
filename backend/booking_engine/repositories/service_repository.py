# backend/booking_engine/repositories/service_repository.py
"""Read access to services and their extra items."""

from typing import Dict, Sequence

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import RepositoryException
from ..models.service import ExtraItem, Service
from .base_repository import BaseRepository


class ServiceRepository(BaseRepository[Service]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, Service)

class ExtraItemRepository(BaseRepository[ExtraItem]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, ExtraItem)

    async def get_many(self, ids: Sequence[str]) -> Dict[str, ExtraItem]:
        """Load several extra items in one round-trip, keyed by id; missing ids are absent."""
        if not ids:
            return {}
        try:
            stmt = select(ExtraItem).where(ExtraItem.id.in_(set(ids)))
            rows = (await self.db.execute(stmt)).scalars().all()
            return {row.id: row for row in rows}
        except SQLAlchemyError as e:
            self.logger.error(f"Error loading extra items {list(ids)}: {str(e)}")
            raise RepositoryException(f"Failed to load extra items: {str(e)}") from e

# backend/booking_engine/repositories/availability_repository.py
"""
Availability Repository for the booking engine.

Implements slot queries for authoring (overlap detection, active booking
checks) and the two capacity mutations used inside the unit of work.

Capacity is the only contended counter for SERVICE bookings, so it is never
read-modified-written in Python: ``decrement_capacity`` is one conditional
UPDATE whose affected-row count tells the caller whether the seats were
actually taken.
"""

from datetime import date
import logging
from typing import List, Optional

from sqlalchemy import and_, exists, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.enums import ACTIVE_SLOT_BOOKING_STATUSES
from ..core.exceptions import RepositoryException
from ..models.availability import Availability
from ..models.booking import Booking
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class AvailabilityRepository(BaseRepository[Availability]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, Availability)

    async def decrement_capacity(self, availability_id: str, quantity: int) -> bool:
        """
        Take ``quantity`` seats if and only if they are still there.

        Returns:
            True when exactly one row was updated, False when the slot is
            missing or no longer has enough capacity.
        """
        try:
            stmt = (
                update(Availability)
                .where(Availability.id == availability_id, Availability.capacity >= quantity)
                .values(capacity=Availability.capacity - quantity)
                .execution_options(synchronize_session=False)
            )
            result = await self.db.execute(stmt)
            return result.rowcount == 1
        except SQLAlchemyError as e:
            logger.error(
                "Capacity decrement failed",
                extra={"availability_id": availability_id, "quantity": quantity, "error": str(e)},
            )
            raise RepositoryException(f"Failed to decrement capacity: {str(e)}") from e

    async def increment_capacity(self, availability_id: str, quantity: int) -> bool:
        try:
            stmt = (
                update(Availability)
                .where(Availability.id == availability_id)
                .values(capacity=Availability.capacity + quantity)
                .execution_options(synchronize_session=False)
            )
            result = await self.db.execute(stmt)
            return result.rowcount == 1
        except SQLAlchemyError as e:
            logger.error(
                "Capacity restore failed",
                extra={"availability_id": availability_id, "quantity": quantity, "error": str(e)},
            )
            raise RepositoryException(f"Failed to increment capacity: {str(e)}") from e

    async def find_overlapping(
        self,
        service_id: str,
        slot_date: date,
        start_time: str,
        end_time: str,
        exclude_id: Optional[str] = None,
    ) -> List[Availability]:
        """
        Slots of the same service and date colliding with ``[start_time, end_time)``.

        Mirrors ``domain.capacity.slots_overlap``: the new slot starts inside an
        existing one, ends inside one, or contains one.
        """
        try:
            conditions = [
                Availability.service_id == service_id,
                Availability.date == slot_date,
                or_(
                    and_(Availability.start_time <= start_time, Availability.end_time > start_time),
                    and_(Availability.start_time < end_time, Availability.end_time >= end_time),
                    and_(Availability.start_time >= start_time, Availability.end_time <= end_time),
                ),
            ]
            if exclude_id:
                conditions.append(Availability.id != exclude_id)
            stmt = select(Availability).where(*conditions).order_by(Availability.start_time)
            return list((await self.db.execute(stmt)).scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Error checking slot overlap for service {service_id}: {str(e)}")
            raise RepositoryException(f"Failed to check availability overlap: {str(e)}") from e

    async def has_active_bookings(self, availability_id: str) -> bool:
        """Whether PENDING or CONFIRMED bookings still reference the slot."""
        try:
            stmt = select(
                exists().where(
                    Booking.availability_id == availability_id,
                    Booking.status.in_([s.value for s in ACTIVE_SLOT_BOOKING_STATUSES]),
                )
            )
            return bool((await self.db.execute(stmt)).scalar())
        except SQLAlchemyError as e:
            logger.error(f"Error checking bookings of availability {availability_id}: {str(e)}")
            raise RepositoryException(f"Failed to check availability bookings: {str(e)}") from e

# backend/booking_engine/repositories/room_repository.py
"""
Room Repository for the booking engine.

A room is free for a stay when its status is AVAILABLE and no booking that
still holds it (anything but CANCELLED, CHECKED_OUT or NO_SHOW) overlaps
the requested dates. Overlap is inclusive on both ends:

    existing.check_in <= new.check_out AND existing.check_out >= new.check_in
"""

from datetime import date
import logging
from typing import List, Optional

from sqlalchemy import and_, exists, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.enums import RELEASED_BOOKING_STATUSES, RoomStatus
from ..core.exceptions import RepositoryException
from ..models.booking import Booking
from ..models.room import Room
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)

_RELEASED = [status.value for status in RELEASED_BOOKING_STATUSES]


def _holding_booking_clause(
    check_in: Optional[date] = None,
    check_out: Optional[date] = None,
):
    """Correlated EXISTS over bookings still holding ``Room.id``."""
    conditions = [Booking.room_id == Room.id, Booking.status.notin_(_RELEASED)]
    if check_in is not None and check_out is not None:
        conditions.append(
            and_(Booking.check_in_date <= check_out, Booking.check_out_date >= check_in)
        )
    return exists().where(*conditions)


class RoomRepository(BaseRepository[Room]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, Room)

    async def find_available_rooms(
        self, service_id: str, check_in: date, check_out: date
    ) -> List[Room]:
        """Bookable rooms of a service for a stay, ordered by floor then number."""
        try:
            stmt = (
                select(Room)
                .where(
                    Room.service_id == service_id,
                    Room.status == RoomStatus.AVAILABLE.value,
                    ~_holding_booking_clause(check_in, check_out),
                )
                .order_by(Room.floor, Room.number)
            )
            return list((await self.db.execute(stmt)).scalars().all())
        except SQLAlchemyError as e:
            logger.error(
                "Error finding available rooms",
                extra={"service_id": service_id, "error": str(e)},
            )
            raise RepositoryException(f"Failed to find available rooms: {str(e)}") from e

    async def is_free_for_stay(
        self, room_id: str, check_in: date, check_out: date, lock: bool = False
    ) -> bool:
        """
        Re-verify one room for a stay.

        With ``lock=True`` the room row is selected FOR UPDATE so concurrent
        transactions queue behind this one (dialects without row locks, such
        as SQLite, ignore the clause and rely on database-level write locks).

        Under READ COMMITTED a waiter only re-checks the locked row itself
        after the lock is released; the booking EXISTS subquery keeps the
        snapshot taken before the wait. The ``status == AVAILABLE`` predicate
        is therefore what serializes two reservations of the same room: the
        winner flips the room to OCCUPIED inside its transaction.
        """
        try:
            stmt = select(Room.id).where(
                Room.id == room_id,
                Room.status == RoomStatus.AVAILABLE.value,
                ~_holding_booking_clause(check_in, check_out),
            )
            if lock:
                stmt = stmt.with_for_update()
            return (await self.db.execute(stmt)).first() is not None
        except SQLAlchemyError as e:
            logger.error(
                "Error verifying room availability",
                extra={"room_id": room_id, "error": str(e)},
            )
            raise RepositoryException(f"Failed to verify room availability: {str(e)}") from e

    async def update_status(self, room_id: str, status: RoomStatus) -> bool:
        try:
            stmt = (
                update(Room)
                .where(Room.id == room_id)
                .values(status=status.value)
                .execution_options(synchronize_session=False)
            )
            result = await self.db.execute(stmt)
            return result.rowcount == 1
        except SQLAlchemyError as e:
            logger.error(
                "Room status update failed",
                extra={"room_id": room_id, "status": status.value, "error": str(e)},
            )
            raise RepositoryException(f"Failed to update room status: {str(e)}") from e

    async def number_exists(
        self, service_id: str, number: str, exclude_room_id: Optional[str] = None
    ) -> bool:
        try:
            conditions = [Room.service_id == service_id, Room.number == number]
            if exclude_room_id:
                conditions.append(Room.id != exclude_room_id)
            stmt = select(exists().where(*conditions))
            return bool((await self.db.execute(stmt)).scalar())
        except SQLAlchemyError as e:
            logger.error(f"Error checking room number for service {service_id}: {str(e)}")
            raise RepositoryException(f"Failed to check room number: {str(e)}") from e

    async def has_active_bookings(self, room_id: str) -> bool:
        try:
            stmt = select(
                exists().where(Booking.room_id == room_id, Booking.status.notin_(_RELEASED))
            )
            return bool((await self.db.execute(stmt)).scalar())
        except SQLAlchemyError as e:
            logger.error(f"Error checking bookings of room {room_id}: {str(e)}")
            raise RepositoryException(f"Failed to check room bookings: {str(e)}") from e

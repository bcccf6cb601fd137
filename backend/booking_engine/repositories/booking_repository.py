# backend/booking_engine/repositories/booking_repository.py
"""
Booking Repository for the booking engine.

Implements all data access operations for bookings:
- Ownership projection used by the lifecycle orchestrator
- Booking + extra line inserts inside the creation transaction
- Compare-and-set status transitions
- Paginated listings per customer and per establishment
"""

from dataclasses import dataclass
from datetime import date
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.enums import BookingStatus
from ..core.exceptions import RepositoryException
from ..core.timezone_utils import utc_now
from ..domain.pricing import ExtraLine
from ..models.booking import Booking, BookingExtraItem
from ..models.service import Service
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BookingOwnership:
    """Minimal projection needed to authorize and plan a lifecycle event."""

    id: str
    user_id: str
    establishment_id: str
    status: str
    quantity: int
    availability_id: str
    room_id: Optional[str]
    service_type: str
    check_in_date: Optional[date]


class BookingRepository(BaseRepository[Booking]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, Booking)

    async def get_booking_ownership(self, booking_id: str) -> Optional[BookingOwnership]:
        try:
            stmt = (
                select(
                    Booking.id,
                    Booking.user_id,
                    Booking.establishment_id,
                    Booking.status,
                    Booking.quantity,
                    Booking.availability_id,
                    Booking.room_id,
                    Service.type,
                    Booking.check_in_date,
                )
                .join(Service, Service.id == Booking.service_id)
                .where(Booking.id == booking_id)
            )
            row = (await self.db.execute(stmt)).first()
            if row is None:
                return None
            return BookingOwnership(
                id=row[0],
                user_id=row[1],
                establishment_id=row[2],
                status=row[3],
                quantity=row[4],
                availability_id=row[5],
                room_id=row[6],
                service_type=row[7],
                check_in_date=row[8],
            )
        except SQLAlchemyError as e:
            logger.error(f"Error loading ownership of booking {booking_id}: {str(e)}")
            raise RepositoryException(f"Failed to load booking: {str(e)}") from e

    async def get_booking_with_details(self, booking_id: str) -> Optional[Booking]:
        """Fresh booking row; its extra lines arrive through selectin loading."""
        try:
            stmt = (
                select(Booking)
                .where(Booking.id == booking_id)
                .execution_options(populate_existing=True)
            )
            return (await self.db.execute(stmt)).scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error getting booking {booking_id}: {str(e)}")
            raise RepositoryException(f"Failed to retrieve booking: {str(e)}") from e

    async def create_with_extras(self, data: Dict[str, Any], extras: Sequence[ExtraLine]) -> Booking:
        """
        Insert a booking and its snapshotted extra lines.

        Note: Does NOT commit - runs inside the creation unit of work.
        """
        try:
            booking = Booking(**data)
            booking.extra_items = [
                BookingExtraItem(
                    extra_item_id=line.extra_item_id,
                    quantity=line.quantity,
                    price_at_booking=line.price_at_booking,
                )
                for line in extras
            ]
            self.db.add(booking)
            await self.db.flush()
            return booking
        except IntegrityError as exc:
            logger.error("Integrity error creating booking: %s", exc, exc_info=True)
            raise RepositoryException(f"Integrity constraint violated: {exc}") from exc
        except SQLAlchemyError as e:
            logger.error(f"Error creating booking: {str(e)}")
            raise RepositoryException(f"Failed to create booking: {str(e)}") from e

    async def transition_status(
        self,
        booking_id: str,
        expected_status: str,
        new_status: BookingStatus,
        changes: Optional[Dict[str, Any]] = None,
    ) -> bool:
        """
        Move a booking to ``new_status`` only if it is still in ``expected_status``.

        Returns False when another transaction changed the status first, which
        guarantees each compensation runs at most once.
        """
        values: Dict[str, Any] = {"status": new_status.value, "updated_at": utc_now()}
        values.update(changes or {})
        try:
            stmt = (
                update(Booking)
                .where(Booking.id == booking_id, Booking.status == expected_status)
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            result = await self.db.execute(stmt)
            return result.rowcount == 1
        except SQLAlchemyError as e:
            logger.error(
                "Booking status update failed",
                extra={"booking_id": booking_id, "status": new_status.value, "error": str(e)},
            )
            raise RepositoryException(f"Failed to update booking status: {str(e)}") from e

    async def list_for_user(
        self,
        user_id: str,
        offset: int = 0,
        limit: int = 20,
        status: Optional[BookingStatus] = None,
    ) -> Tuple[List[Booking], int]:
        return await self._paginate([Booking.user_id == user_id], offset, limit, status)

    async def list_for_establishment(
        self,
        establishment_id: str,
        offset: int = 0,
        limit: int = 20,
        status: Optional[BookingStatus] = None,
    ) -> Tuple[List[Booking], int]:
        return await self._paginate(
            [Booking.establishment_id == establishment_id], offset, limit, status
        )

    async def _paginate(
        self,
        conditions: List[Any],
        offset: int,
        limit: int,
        status: Optional[BookingStatus],
    ) -> Tuple[List[Booking], int]:
        if status is not None:
            conditions = [*conditions, Booking.status == status.value]
        try:
            total = (
                await self.db.execute(select(func.count(Booking.id)).where(*conditions))
            ).scalar_one()
            stmt = (
                select(Booking)
                .where(*conditions)
                .order_by(Booking.created_at.desc(), Booking.id.desc())
                .offset(offset)
                .limit(limit)
            )
            items = list((await self.db.execute(stmt)).scalars().all())
            return items, int(total)
        except SQLAlchemyError as e:
            logger.error(f"Error listing bookings: {str(e)}")
            raise RepositoryException(f"Failed to list bookings: {str(e)}") from e

# backend/booking_engine/services/booking_query_service.py
"""
Read side for bookings: single lookups and paginated listings.

Customers see their own bookings; OWNER and STAFF members see every booking
of their establishment.
"""

from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING, List, Optional, Tuple

from ..core.config import settings
from ..core.enums import BookingStatus
from ..core.exceptions import DomainException, ForbiddenException, NotFoundException
from ..core.result import Err, Ok, Result
from ..models.booking import Booking
from .base import PERSISTENCE_ERRORS, BaseService

if TYPE_CHECKING:
    from ..repositories.booking_repository import BookingRepository
    from ..repositories.establishment_repository import EstablishmentRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BookingPage:
    data: List[Booking]
    total: int
    page: int
    limit: int


def _normalize_paging(page: int, limit: int) -> Tuple[int, int]:
    page = max(page, 1)
    limit = min(max(limit, 1), settings.max_page_size)
    return page, limit


class BookingQueryService(BaseService):
    def __init__(
        self,
        booking_repository: "BookingRepository",
        establishment_repository: "EstablishmentRepository",
    ):
        super().__init__()
        self.booking_repository = booking_repository
        self.establishment_repository = establishment_repository

    @BaseService.measure_operation("get_booking")
    async def get_booking(self, booking_id: str, user_id: str) -> Result[Booking, DomainException]:
        try:
            booking = await self.booking_repository.get_booking_with_details(booking_id)
            if booking is None:
                return Err(NotFoundException("Booking"))
            if booking.user_id != user_id:
                role = await self.establishment_repository.get_user_role(
                    user_id, booking.establishment_id
                )
                if role is None:
                    return Err(
                        ForbiddenException("You do not have permission to view this booking")
                    )
            return Ok(booking)
        except PERSISTENCE_ERRORS as exc:
            return self.persistence_failure("get_booking", exc)

    @BaseService.measure_operation("list_user_bookings")
    async def list_for_user(
        self,
        user_id: str,
        page: int = 1,
        limit: int = 20,
        status: Optional[BookingStatus] = None,
    ) -> Result[BookingPage, DomainException]:
        page, limit = _normalize_paging(page, limit)
        try:
            items, total = await self.booking_repository.list_for_user(
                user_id, offset=(page - 1) * limit, limit=limit, status=status
            )
        except PERSISTENCE_ERRORS as exc:
            return self.persistence_failure("list_user_bookings", exc)
        return Ok(BookingPage(data=items, total=total, page=page, limit=limit))

    @BaseService.measure_operation("list_establishment_bookings")
    async def list_for_establishment(
        self,
        establishment_id: str,
        user_id: str,
        page: int = 1,
        limit: int = 20,
        status: Optional[BookingStatus] = None,
    ) -> Result[BookingPage, DomainException]:
        """Every booking of an establishment; requires an OWNER or STAFF role there."""
        page, limit = _normalize_paging(page, limit)
        try:
            role = await self.establishment_repository.get_user_role(user_id, establishment_id)
            if role is None:
                logger.info(
                    "Establishment booking listing refused",
                    extra={"user_id": user_id, "establishment_id": establishment_id},
                )
                return Err(
                    ForbiddenException(
                        "You do not have permission to view bookings of this establishment"
                    )
                )
            items, total = await self.booking_repository.list_for_establishment(
                establishment_id, offset=(page - 1) * limit, limit=limit, status=status
            )
        except PERSISTENCE_ERRORS as exc:
            return self.persistence_failure("list_establishment_bookings", exc)
        return Ok(BookingPage(data=items, total=total, page=page, limit=limit))

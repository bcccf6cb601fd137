# backend/booking_engine/services/booking_creation_service.py
"""
Booking creation orchestrator.

Validation happens in two phases:

1. Read-only checks outside any transaction (service, slot, stay dates, room
   selection, capacity, pricing). They fail fast and never mutate anything.
2. One unit-of-work transaction that takes the seats with a conditional
   UPDATE, re-verifies and occupies the room under a row lock, and inserts
   the booking with its extra lines. The phase-1 checks are not trusted here:
   another request may have consumed the same capacity or room in between.

Every outcome is returned as a ``Result``; business failures never raise.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import TYPE_CHECKING, Optional

from ..core.enums import BookingStatus, RoomStatus, ServiceType
from ..core.exceptions import (
    CapacityExhaustedException,
    ConflictException,
    DomainException,
    NotFoundException,
    RoomUnavailableException,
)
from ..core.result import Err, Ok, Result
from ..core.timezone_utils import Clock, utc_now, utc_today
from ..domain.capacity import StayDates, has_capacity, room_is_bookable, validate_hotel_dates
from ..domain.pricing import ExtraRequest, PriceQuote, PricingCalculator
from ..models.booking import Booking
from ..models.room import Room
from ..repositories.unit_of_work import UnitOfWorkContext
from ..schemas.booking import CreateBookingInput
from .base import PERSISTENCE_ERRORS, BaseService

if TYPE_CHECKING:
    from ..repositories.availability_repository import AvailabilityRepository
    from ..repositories.room_repository import RoomRepository
    from ..repositories.service_repository import ExtraItemRepository, ServiceRepository
    from ..repositories.unit_of_work import SQLAlchemyUnitOfWork

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Reservation:
    """Everything phase 2 needs, resolved and priced by phase 1."""

    establishment_id: str
    service_id: str
    availability_id: str
    quantity: int
    quote: PriceQuote
    room_id: Optional[str] = None
    stay: Optional[StayDates] = None


class BookingCreationService(BaseService):
    """Validates, prices and atomically reserves new bookings."""

    def __init__(
        self,
        service_repository: "ServiceRepository",
        availability_repository: "AvailabilityRepository",
        room_repository: "RoomRepository",
        extra_item_repository: "ExtraItemRepository",
        unit_of_work: "SQLAlchemyUnitOfWork",
        pricing: Optional[PricingCalculator] = None,
        clock: Clock = utc_now,
    ):
        super().__init__()
        self.service_repository = service_repository
        self.availability_repository = availability_repository
        self.room_repository = room_repository
        self.extra_item_repository = extra_item_repository
        self.unit_of_work = unit_of_work
        self.pricing = pricing or PricingCalculator()
        self.clock = clock

    @BaseService.measure_operation("create_booking")
    async def create(
        self, data: CreateBookingInput, user_id: str
    ) -> Result[Booking, DomainException]:
        """
        Create a CONFIRMED booking for ``user_id``.

        Returns:
            Ok(Booking) with price, room and extra lines populated, or Err with
            NotFound (service, slot, room, extra) or Conflict (inactive service,
            mismatched association, invalid stay, no capacity or room, extra limits,
            persistence failure)
        """
        try:
            planned = await self._plan(data)
        except PERSISTENCE_ERRORS as exc:
            return self.persistence_failure("create_booking", exc)
        if planned.is_err():
            logger.info(
                "Booking request rejected",
                extra={
                    "user_id": user_id,
                    "service_id": data.service_id,
                    "availability_id": data.availability_id,
                    "error_code": planned.error.code,
                },
            )
            return planned

        result = await self.unit_of_work.execute(
            lambda ctx: self._reserve(ctx, planned.value, data, user_id)
        )
        if result.is_ok():
            booking = result.value
            logger.info(
                "Booking created",
                extra={
                    "booking_id": booking.id,
                    "user_id": user_id,
                    "availability_id": booking.availability_id,
                    "room_id": booking.room_id,
                },
            )
        else:
            logger.warning(
                "Booking reservation failed",
                extra={
                    "user_id": user_id,
                    "availability_id": data.availability_id,
                    "error_code": result.error.code,
                },
            )
        return result

    async def _plan(self, data: CreateBookingInput) -> Result[_Reservation, DomainException]:
        service = await self.service_repository.get_by_id(data.service_id)
        if service is None:
            return Err(NotFoundException("Service"))
        if not service.active:
            return Err(ConflictException("Service is not active"))

        availability = await self.availability_repository.get_by_id(data.availability_id)
        if availability is None:
            return Err(NotFoundException("Availability"))
        if availability.service_id != service.id:
            return Err(ConflictException("Availability does not belong to the specified service"))

        room_id: Optional[str] = None
        stay: Optional[StayDates] = None
        if service.type == ServiceType.HOTEL.value:
            if data.check_in_date is None or data.check_out_date is None:
                return Err(
                    ConflictException(
                        "checkInDate and checkOutDate are required for hotel bookings"
                    )
                )
            stay_result = validate_hotel_dates(
                data.check_in_date, data.check_out_date, utc_today(self.clock)
            )
            if stay_result.is_err():
                return stay_result
            stay = stay_result.value

            room = await self._select_room(service.id, data.room_id, stay)
            if room.is_err():
                return room
            room_id = room.value.id
        else:
            capacity = has_capacity(availability, data.quantity)
            if capacity.is_err():
                return capacity

        extra_items = await self.extra_item_repository.get_many(
            [extra.extra_item_id for extra in data.extras]
        )
        quote = self.pricing.quote(
            service,
            availability,
            data.quantity,
            extras=[
                ExtraRequest(
                    extra_item_id=extra.extra_item_id,
                    quantity=extra.quantity,
                    extra_item=extra_items.get(extra.extra_item_id),
                )
                for extra in data.extras
            ],
            number_of_nights=stay.number_of_nights if stay else None,
        )
        if quote.is_err():
            return quote

        return Ok(
            _Reservation(
                establishment_id=service.establishment_id,
                service_id=service.id,
                availability_id=availability.id,
                quantity=data.quantity,
                quote=quote.value,
                room_id=room_id,
                stay=stay,
            )
        )

    async def _select_room(
        self, service_id: str, room_id: Optional[str], stay: StayDates
    ) -> Result[Room, DomainException]:
        """Validate the requested room, or pick the first free one by floor then number."""
        available = await self.room_repository.find_available_rooms(
            service_id, stay.check_in_date, stay.check_out_date
        )

        if room_id is None:
            if not available:
                return Err(RoomUnavailableException("No rooms available for the selected dates"))
            return Ok(available[0])

        room = await self.room_repository.get_by_id(room_id)
        if room is None:
            return Err(NotFoundException("Room"))
        bookable = room_is_bookable(room, service_id)
        if bookable.is_err():
            return bookable
        if room.id not in {candidate.id for candidate in available}:
            return Err(RoomUnavailableException())
        return Ok(room)

    async def _reserve(
        self,
        ctx: UnitOfWorkContext,
        reservation: _Reservation,
        data: CreateBookingInput,
        user_id: str,
    ) -> Result[Booking, DomainException]:
        # Write first: the conditional decrement is the serialization point for the slot
        taken = await ctx.availability_repository.decrement_capacity(
            reservation.availability_id, reservation.quantity
        )
        if not taken:
            return Err(CapacityExhaustedException())

        stay = reservation.stay
        if reservation.room_id is not None and stay is not None:
            free = await ctx.room_repository.is_free_for_stay(
                reservation.room_id, stay.check_in_date, stay.check_out_date, lock=True
            )
            if not free:
                return Err(RoomUnavailableException())
            await ctx.room_repository.update_status(reservation.room_id, RoomStatus.OCCUPIED)

        booking = await ctx.booking_repository.create_with_extras(
            {
                "user_id": user_id,
                "establishment_id": reservation.establishment_id,
                "service_id": reservation.service_id,
                "availability_id": reservation.availability_id,
                "quantity": reservation.quantity,
                "total_price": reservation.quote.total_price,
                "status": BookingStatus.CONFIRMED.value,
                "check_in_date": stay.check_in_date if stay else None,
                "check_out_date": stay.check_out_date if stay else None,
                "room_id": reservation.room_id,
                "number_of_nights": stay.number_of_nights if stay else None,
                "number_of_guests": data.number_of_guests,
                "guest_name": data.guest_name,
                "guest_email": data.guest_email,
                "guest_phone": data.guest_phone,
                "guest_document": data.guest_document,
                "notes": data.notes,
            },
            reservation.quote.extras,
        )
        return Ok(booking)

# backend/booking_engine/services/booking_status_service.py
"""
Booking lifecycle orchestrator.

Each operation follows the same sequence:

1. Load the booking ownership projection (NotFound if missing)
2. Authorize the caller for the event (Forbidden)
3. Check the event against the state machine and service type (Conflict)
4. Apply the status change and its compensations in one transaction
5. Return the refreshed booking

The status change inside the transaction is a compare-and-set on the status
read in step 1, so two concurrent cancellations can never both restore
capacity.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Optional

from ..core.enums import RoomStatus, ServiceType
from ..core.exceptions import ConflictException, DomainException, NotFoundException
from ..core.result import OK_NONE, Err, Ok, Result
from ..core.timezone_utils import Clock, utc_now, utc_today
from ..domain.booking_state import (
    BookingEvent,
    Transition,
    authorize_event,
    check_in_allowed,
    ensure_service_supports,
    plan_transition,
)
from ..models.booking import Booking
from ..repositories.booking_repository import BookingOwnership
from ..repositories.unit_of_work import UnitOfWorkContext
from .base import PERSISTENCE_ERRORS, BaseService

if TYPE_CHECKING:
    from ..repositories.booking_repository import BookingRepository
    from ..repositories.establishment_repository import EstablishmentRepository
    from ..repositories.unit_of_work import SQLAlchemyUnitOfWork

logger = logging.getLogger(__name__)


class BookingStatusService(BaseService):
    """Confirm, cancel, check-in, check-out and no-show transitions."""

    def __init__(
        self,
        booking_repository: "BookingRepository",
        establishment_repository: "EstablishmentRepository",
        unit_of_work: "SQLAlchemyUnitOfWork",
        clock: Clock = utc_now,
    ):
        super().__init__()
        self.booking_repository = booking_repository
        self.establishment_repository = establishment_repository
        self.unit_of_work = unit_of_work
        self.clock = clock

    @BaseService.measure_operation("cancel_booking")
    async def cancel(
        self, booking_id: str, user_id: str, reason: Optional[str] = None
    ) -> Result[Booking, DomainException]:
        """Cancel a CONFIRMED booking, restoring slot capacity and releasing its room."""
        return await self._apply(BookingEvent.CANCEL, booking_id, user_id, reason=reason)

    @BaseService.measure_operation("confirm_booking")
    async def confirm(self, booking_id: str, user_id: str) -> Result[Booking, DomainException]:
        return await self._apply(BookingEvent.CONFIRM, booking_id, user_id)

    @BaseService.measure_operation("check_in_booking")
    async def check_in(self, booking_id: str, user_id: str) -> Result[Booking, DomainException]:
        """Hotel only; refused before the booking's check-in date."""
        return await self._apply(BookingEvent.CHECK_IN, booking_id, user_id)

    @BaseService.measure_operation("check_out_booking")
    async def check_out(self, booking_id: str, user_id: str) -> Result[Booking, DomainException]:
        return await self._apply(BookingEvent.CHECK_OUT, booking_id, user_id)

    @BaseService.measure_operation("mark_no_show")
    async def mark_no_show(self, booking_id: str, user_id: str) -> Result[Booking, DomainException]:
        return await self._apply(BookingEvent.NO_SHOW, booking_id, user_id)

    async def _apply(
        self,
        event: BookingEvent,
        booking_id: str,
        user_id: str,
        reason: Optional[str] = None,
    ) -> Result[Booking, DomainException]:
        try:
            ownership = await self.booking_repository.get_booking_ownership(booking_id)
            if ownership is None:
                return Err(NotFoundException("Booking"))
            role = await self.establishment_repository.get_user_role(
                user_id, ownership.establishment_id
            )
        except PERSISTENCE_ERRORS as exc:
            return self.persistence_failure(event.value, exc)

        checked = self._check(event, ownership, user_id, role)
        if checked.is_err():
            logger.info(
                "Booking transition rejected",
                extra={
                    "booking_id": booking_id,
                    "user_id": user_id,
                    "event": event.value,
                    "current_status": ownership.status,
                    "error_code": checked.error.code,
                },
            )
            return checked
        transition = checked.value

        changes: Dict[str, Any] = {}
        if transition.timestamp_field:
            changes[transition.timestamp_field] = self.clock()
        if event == BookingEvent.CANCEL:
            changes["cancellation_reason"] = reason

        result = await self.unit_of_work.execute(
            lambda ctx: self._transition(ctx, ownership, transition, changes)
        )
        if result.is_err():
            return result

        logger.info(
            "Booking status changed",
            extra={
                "booking_id": booking_id,
                "user_id": user_id,
                "from_status": ownership.status,
                "to_status": transition.target.value,
            },
        )
        try:
            booking = await self.booking_repository.get_booking_with_details(booking_id)
        except PERSISTENCE_ERRORS as exc:
            return self.persistence_failure(event.value, exc)
        if booking is None:
            return Err(NotFoundException("Booking"))
        return Ok(booking)

    def _check(
        self,
        event: BookingEvent,
        ownership: BookingOwnership,
        user_id: str,
        role: Optional[str],
    ) -> Result[Transition, DomainException]:
        authorized = authorize_event(
            event, user_id=user_id, booking_user_id=ownership.user_id, role=role
        )
        if authorized.is_err():
            return authorized

        planned = plan_transition(ownership.status, event)
        if planned.is_err():
            return planned
        transition = planned.value

        supported = ensure_service_supports(transition, ownership.service_type)
        if supported.is_err():
            return supported

        if event == BookingEvent.CHECK_IN:
            allowed = check_in_allowed(ownership.check_in_date, utc_today(self.clock))
            if allowed.is_err():
                return allowed
        return Ok(transition)

    async def _transition(
        self,
        ctx: UnitOfWorkContext,
        ownership: BookingOwnership,
        transition: Transition,
        changes: Dict[str, Any],
    ) -> Result[None, DomainException]:
        moved = await ctx.booking_repository.transition_status(
            ownership.id, ownership.status, transition.target, changes
        )
        if not moved:
            # Someone else changed the status first; report against the fresh state
            current = await ctx.booking_repository.get_booking_ownership(ownership.id)
            if current is None:
                return Err(NotFoundException("Booking"))
            replanned = plan_transition(current.status, transition.event)
            if replanned.is_err():
                return replanned
            return Err(ConflictException("Booking was modified concurrently, please retry"))

        if transition.restore_capacity:
            restored = await ctx.availability_repository.increment_capacity(
                ownership.availability_id, ownership.quantity
            )
            if not restored:
                return Err(NotFoundException("Availability"))

        is_hotel = ownership.service_type == ServiceType.HOTEL.value
        if transition.release_room and is_hotel and ownership.room_id:
            await ctx.room_repository.update_status(ownership.room_id, RoomStatus.AVAILABLE)

        return OK_NONE

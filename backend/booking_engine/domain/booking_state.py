# backend/booking_engine/domain/booking_state.py
"""
Booking lifecycle state machine.

Every legal transition is declared once in ``TRANSITIONS`` together with the
compensations it requires (restoring slot capacity, releasing the room) and
the timestamp column it stamps. Anything not declared is rejected with a
Conflict naming the current status; nothing is silently ignored.

    PENDING ──confirm──> CONFIRMED ──cancel──> CANCELLED
       │                   │  │
       │                   │  └──no-show──> NO_SHOW
       └──check-in─────────┴──check-in──> CHECKED_IN ──check-out──> CHECKED_OUT
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Dict, FrozenSet, Optional, Union

from ..core.enums import BookingStatus, EstablishmentRole, ServiceType
from ..core.exceptions import ConflictException, ForbiddenException, InvalidTransitionException
from ..core.result import OK_NONE, Err, Ok, Result


class BookingEvent(str, Enum):
    CONFIRM = "confirm"
    CANCEL = "cancel"
    CHECK_IN = "check_in"
    CHECK_OUT = "check_out"
    NO_SHOW = "no_show"


@dataclass(frozen=True)
class Transition:
    """
    One edge of the lifecycle graph.

    Attributes:
        sources: Statuses the event may be applied to
        target: Resulting status
        timestamp_field: Booking column stamped with the transition time
        restore_capacity: Give the booked quantity back to the slot
        release_room: Set the assigned room back to AVAILABLE
        hotel_only: Refuse the event for non-hotel services
        customer_allowed: The booking's own customer may trigger it
    """

    event: BookingEvent
    sources: FrozenSet[BookingStatus]
    target: BookingStatus
    timestamp_field: Optional[str] = None
    restore_capacity: bool = False
    release_room: bool = False
    hotel_only: bool = False
    customer_allowed: bool = False


STAFF_ROLES: FrozenSet[str] = frozenset(role.value for role in EstablishmentRole)

TRANSITIONS: Dict[BookingEvent, Transition] = {
    BookingEvent.CANCEL: Transition(
        event=BookingEvent.CANCEL,
        sources=frozenset({BookingStatus.CONFIRMED}),
        target=BookingStatus.CANCELLED,
        timestamp_field="cancelled_at",
        restore_capacity=True,
        release_room=True,
        customer_allowed=True,
    ),
    BookingEvent.CONFIRM: Transition(
        event=BookingEvent.CONFIRM,
        sources=frozenset({BookingStatus.PENDING}),
        target=BookingStatus.CONFIRMED,
        timestamp_field="confirmed_at",
    ),
    BookingEvent.CHECK_IN: Transition(
        event=BookingEvent.CHECK_IN,
        sources=frozenset({BookingStatus.PENDING, BookingStatus.CONFIRMED}),
        target=BookingStatus.CHECKED_IN,
        timestamp_field="checked_in_at",
        hotel_only=True,
    ),
    BookingEvent.CHECK_OUT: Transition(
        event=BookingEvent.CHECK_OUT,
        sources=frozenset({BookingStatus.CHECKED_IN}),
        target=BookingStatus.CHECKED_OUT,
        timestamp_field="checked_out_at",
        release_room=True,
        hotel_only=True,
    ),
    BookingEvent.NO_SHOW: Transition(
        event=BookingEvent.NO_SHOW,
        sources=frozenset({BookingStatus.PENDING, BookingStatus.CONFIRMED}),
        target=BookingStatus.NO_SHOW,
        release_room=True,
        hotel_only=True,
    ),
}

_STATUS_LABELS: Dict[BookingStatus, str] = {
    BookingStatus.PENDING: "pending",
    BookingStatus.CONFIRMED: "confirmed",
    BookingStatus.CANCELLED: "cancelled",
    BookingStatus.CHECKED_IN: "checked-in",
    BookingStatus.CHECKED_OUT: "checked-out",
    BookingStatus.NO_SHOW: "no-show",
}

_ALREADY_MESSAGES: Dict[BookingEvent, str] = {
    BookingEvent.CONFIRM: "Booking is already confirmed",
    BookingEvent.CANCEL: "Booking is already cancelled",
    BookingEvent.CHECK_IN: "Booking is already checked in",
    BookingEvent.CHECK_OUT: "Booking is already checked out",
    BookingEvent.NO_SHOW: "Booking is already marked as no-show",
}

_REJECTION_TEMPLATES: Dict[BookingEvent, str] = {
    BookingEvent.CONFIRM: "Cannot confirm a {status} booking",
    BookingEvent.CANCEL: "Cannot cancel a {status} booking",
    BookingEvent.CHECK_IN: "Cannot check in a {status} booking",
    BookingEvent.CHECK_OUT: "Cannot check out a {status} booking",
    BookingEvent.NO_SHOW: "Cannot mark a {status} booking as no-show",
}

_ACTION_PHRASES: Dict[BookingEvent, str] = {
    BookingEvent.CONFIRM: "confirm",
    BookingEvent.CANCEL: "cancel",
    BookingEvent.CHECK_IN: "check in",
    BookingEvent.CHECK_OUT: "check out",
    BookingEvent.NO_SHOW: "mark as no-show",
}

_HOTEL_ONLY_MESSAGES: Dict[BookingEvent, str] = {
    BookingEvent.CHECK_IN: "Check-in is only available for hotel bookings",
    BookingEvent.CHECK_OUT: "Check-out is only available for hotel bookings",
    BookingEvent.NO_SHOW: "No-show is only available for hotel bookings",
}


def _rejection_message(current: BookingStatus, event: BookingEvent) -> str:
    transition = TRANSITIONS[event]
    if current == transition.target:
        return _ALREADY_MESSAGES[event]
    if event == BookingEvent.CHECK_OUT and current in TRANSITIONS[BookingEvent.CHECK_IN].sources:
        return "Booking must be checked in before check-out"
    return _REJECTION_TEMPLATES[event].format(status=_STATUS_LABELS[current])


def plan_transition(
    current: Union[BookingStatus, str], event: BookingEvent
) -> Result[Transition, InvalidTransitionException]:
    """Return the declared transition for ``event`` or a Conflict naming ``current``."""
    status = BookingStatus(current)
    transition = TRANSITIONS[event]
    if status not in transition.sources:
        return Err(
            InvalidTransitionException(
                _rejection_message(status, event),
                current_status=status.value,
                event=event.value,
            )
        )
    return Ok(transition)


def authorize_event(
    event: BookingEvent,
    *,
    user_id: str,
    booking_user_id: str,
    role: Optional[str],
) -> Result[None, ForbiddenException]:
    """Customers may only cancel their own bookings; everything else needs OWNER/STAFF."""
    if role in STAFF_ROLES:
        return OK_NONE
    if TRANSITIONS[event].customer_allowed and user_id == booking_user_id:
        return OK_NONE
    return Err(
        ForbiddenException(f"You do not have permission to {_ACTION_PHRASES[event]} this booking")
    )


def ensure_service_supports(
    transition: Transition, service_type: Optional[str]
) -> Result[None, ConflictException]:
    if transition.hotel_only and service_type != ServiceType.HOTEL.value:
        return Err(ConflictException(_HOTEL_ONLY_MESSAGES[transition.event]))
    return OK_NONE


def check_in_allowed(check_in_date: Optional[date], today: date) -> Result[None, ConflictException]:
    if check_in_date is not None and today < check_in_date:
        return Err(ConflictException("Check-in is not allowed before the check-in date"))
    return OK_NONE

# backend/booking_engine/domain/capacity.py
"""
Capacity rules for the two reservation strategies.

SERVICE bookings consume seats from an availability slot. HOTEL bookings
hold a room for a date range. The helpers here only inspect values that were
already loaded; the authoritative checks run again inside the unit of work.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
import re
from typing import TYPE_CHECKING

from ..core.enums import RoomStatus
from ..core.exceptions import CapacityExhaustedException, ConflictException
from ..core.result import OK_NONE, Err, Ok, Result

if TYPE_CHECKING:
    from ..models.availability import Availability
    from ..models.room import Room

_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


@dataclass(frozen=True)
class StayDates:
    """A validated hotel stay."""

    check_in_date: date
    check_out_date: date
    number_of_nights: int


def has_capacity(availability: "Availability", quantity: int) -> Result[None, ConflictException]:
    if availability.capacity < quantity:
        return Err(CapacityExhaustedException())
    return OK_NONE


def room_is_bookable(room: "Room", service_id: str) -> Result[None, ConflictException]:
    if room.service_id != service_id:
        return Err(ConflictException("Room does not belong to the specified service"))
    if room.status != RoomStatus.AVAILABLE.value:
        return Err(
            ConflictException(
                f"Room is {room.status} and cannot be booked",
                code="ROOM_UNAVAILABLE",
            )
        )
    return OK_NONE


def validate_hotel_dates(
    check_in: date, check_out: date, today: date
) -> Result[StayDates, ConflictException]:
    """
    Validate a stay and compute its length in nights.

    ``today`` is the caller's UTC calendar date; a stay may start today but
    not earlier.
    """
    if check_in < today:
        return Err(ConflictException("checkInDate cannot be in the past"))
    if check_out <= check_in:
        return Err(ConflictException("checkOutDate must be after checkInDate"))
    nights = (check_out - check_in).days
    return Ok(StayDates(check_in_date=check_in, check_out_date=check_out, number_of_nights=nights))


def stays_overlap(
    existing_check_in: date,
    existing_check_out: date,
    check_in: date,
    check_out: date,
) -> bool:
    # Inclusive on both ends: a stay ending on the day another begins collides.
    return existing_check_in <= check_out and existing_check_out >= check_in


def is_valid_time(value: str) -> bool:
    return bool(_TIME_PATTERN.match(value))


def time_range_valid(start_time: str, end_time: str) -> Result[None, ConflictException]:
    if not is_valid_time(start_time) or not is_valid_time(end_time):
        return Err(ConflictException("Times must use the HH:MM format"))
    if start_time >= end_time:
        return Err(ConflictException("Start time must be before end time"))
    return OK_NONE


def slots_overlap(
    existing_start: str,
    existing_end: str,
    new_start: str,
    new_end: str,
) -> bool:
    """
    Detect a collision between two half-open ``[start, end)`` slots.

    Zero-padded ``HH:MM`` strings compare correctly as plain strings.
    """
    starts_inside = existing_start <= new_start < existing_end
    ends_inside = existing_start < new_end <= existing_end
    contains = new_start <= existing_start and new_end >= existing_end
    return starts_inside or ends_inside or contains

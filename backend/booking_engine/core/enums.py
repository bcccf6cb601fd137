# backend/booking_engine/core/enums.py
"""
Core enums for the booking engine.

All enums persisted to the database inherit from (str, Enum) and store
their VALUE, which matches the upper-case name.
"""

from enum import Enum


class ServiceType(str, Enum):
    """Reservation strategy of a bookable service."""

    SERVICE = "SERVICE"  # Seats against an availability slot
    HOTEL = "HOTEL"  # Rooms against a date range


class RoomStatus(str, Enum):
    AVAILABLE = "AVAILABLE"
    OCCUPIED = "OCCUPIED"
    CLEANING = "CLEANING"
    MAINTENANCE = "MAINTENANCE"
    BLOCKED = "BLOCKED"


class BookingStatus(str, Enum):
    """Booking lifecycle statuses."""

    PENDING = "PENDING"  # Reserved for staff-confirmed flows
    CONFIRMED = "CONFIRMED"  # Default - bookings are auto-confirmed
    CANCELLED = "CANCELLED"
    CHECKED_IN = "CHECKED_IN"
    CHECKED_OUT = "CHECKED_OUT"
    NO_SHOW = "NO_SHOW"


class EstablishmentRole(str, Enum):
    """Establishment-scoped authorization levels."""

    OWNER = "OWNER"
    STAFF = "STAFF"


# Bookings in these statuses no longer hold a room for their date range.
RELEASED_BOOKING_STATUSES = (
    BookingStatus.CANCELLED,
    BookingStatus.CHECKED_OUT,
    BookingStatus.NO_SHOW,
)

# Bookings in these statuses still consume slot capacity.
ACTIVE_SLOT_BOOKING_STATUSES = (BookingStatus.PENDING, BookingStatus.CONFIRMED)

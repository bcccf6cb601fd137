"""
Request and response schemas.

Requests forbid unknown fields; responses are built from ORM objects and
serialized with camelCase keys.
"""

from .base import Money, PaginatedResponse, StandardizedModel
from .booking import (
    BookingExtraLineResponse,
    BookingListResponse,
    BookingResponse,
    CancelBookingInput,
    CreateBookingInput,
    ExtraSelection,
)
from .catalog import (
    AvailabilityCreate,
    AvailabilityResponse,
    AvailabilityUpdate,
    RoomCreate,
    RoomResponse,
    RoomUpdate,
)

__all__ = [
    "AvailabilityCreate",
    "AvailabilityResponse",
    "AvailabilityUpdate",
    "BookingExtraLineResponse",
    "BookingListResponse",
    "BookingResponse",
    "CancelBookingInput",
    "CreateBookingInput",
    "ExtraSelection",
    "Money",
    "PaginatedResponse",
    "RoomCreate",
    "RoomResponse",
    "RoomUpdate",
    "StandardizedModel",
]

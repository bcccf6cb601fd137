"""
Service layer for the booking engine.

Services hold the business logic and return ``Result`` values; routes only
translate those results into HTTP responses.
"""

from .availability_service import AvailabilityService
from .base import BaseService
from .booking_creation_service import BookingCreationService
from .booking_query_service import BookingPage, BookingQueryService
from .booking_status_service import BookingStatusService
from .room_service import RoomService

__all__ = [
    "AvailabilityService",
    "BaseService",
    "BookingCreationService",
    "BookingPage",
    "BookingQueryService",
    "BookingStatusService",
    "RoomService",
]

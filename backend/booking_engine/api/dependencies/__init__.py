"""
FastAPI dependencies: database sessions, caller identity and services.
"""

from .auth import get_current_user_id
from .database import get_db, get_session_factory
from .services import (
    get_availability_service,
    get_booking_creation_service,
    get_booking_query_service,
    get_booking_status_service,
    get_clock,
    get_room_service,
    get_unit_of_work,
)

__all__ = [
    "get_availability_service",
    "get_booking_creation_service",
    "get_booking_query_service",
    "get_booking_status_service",
    "get_clock",
    "get_current_user_id",
    "get_db",
    "get_room_service",
    "get_session_factory",
    "get_unit_of_work",
]

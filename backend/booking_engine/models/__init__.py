"""Persisted models; importing this package registers every table on Base.metadata."""

from .availability import Availability
from .booking import Booking, BookingExtraItem
from .establishment import Establishment, EstablishmentMember
from .room import Room
from .service import ExtraItem, Service

__all__ = [
    "Availability",
    "Booking",
    "BookingExtraItem",
    "Establishment",
    "EstablishmentMember",
    "ExtraItem",
    "Room",
    "Service",
]

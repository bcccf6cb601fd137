# backend/booking_engine/repositories/__init__.py
"""
Repository layer for the booking engine.

Repositories encapsulate every query behind async methods; the unit of work
binds the write-side repositories to one transaction.
"""

from .availability_repository import AvailabilityRepository
from .base_repository import BaseRepository
from .booking_repository import BookingOwnership, BookingRepository
from .establishment_repository import EstablishmentRepository
from .factory import RepositoryFactory
from .room_repository import RoomRepository
from .service_repository import ExtraItemRepository, ServiceRepository
from .unit_of_work import SQLAlchemyUnitOfWork, UnitOfWorkContext

__all__ = [
    "AvailabilityRepository",
    "BaseRepository",
    "BookingOwnership",
    "BookingRepository",
    "EstablishmentRepository",
    "ExtraItemRepository",
    "RepositoryFactory",
    "RoomRepository",
    "SQLAlchemyUnitOfWork",
    "ServiceRepository",
    "UnitOfWorkContext",
]

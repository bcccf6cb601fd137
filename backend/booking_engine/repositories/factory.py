# backend/booking_engine/repositories/factory.py
"""
Repository Factory for the booking engine.

Provides centralized creation of repository instances so services and the
unit of work build them the same way from whatever session they hold.
"""

from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import AsyncSession

# Avoid circular imports
if TYPE_CHECKING:
    from .availability_repository import AvailabilityRepository
    from .booking_repository import BookingRepository
    from .establishment_repository import EstablishmentRepository
    from .room_repository import RoomRepository
    from .service_repository import ExtraItemRepository, ServiceRepository


class RepositoryFactory:
    """Factory class for creating repository instances."""

    @staticmethod
    def create_establishment_repository(db: AsyncSession) -> "EstablishmentRepository":
        """Create repository for establishment roles."""
        from .establishment_repository import EstablishmentRepository

        return EstablishmentRepository(db)

    @staticmethod
    def create_service_repository(db: AsyncSession) -> "ServiceRepository":
        from .service_repository import ServiceRepository

        return ServiceRepository(db)

    @staticmethod
    def create_extra_item_repository(db: AsyncSession) -> "ExtraItemRepository":
        from .service_repository import ExtraItemRepository

        return ExtraItemRepository(db)

    @staticmethod
    def create_availability_repository(db: AsyncSession) -> "AvailabilityRepository":
        """Create repository for availability slots and capacity updates."""
        from .availability_repository import AvailabilityRepository

        return AvailabilityRepository(db)

    @staticmethod
    def create_room_repository(db: AsyncSession) -> "RoomRepository":
        """Create repository for hotel rooms."""
        from .room_repository import RoomRepository

        return RoomRepository(db)

    @staticmethod
    def create_booking_repository(db: AsyncSession) -> "BookingRepository":
        """Create repository for booking data access."""
        from .booking_repository import BookingRepository

        return BookingRepository(db)

# backend/booking_engine/api/dependencies/services.py
"""
Service layer dependencies for dependency injection.

This module provides factory functions that create service instances
with their required dependencies properly injected. Read-side repositories
share the request session; writes go through a unit of work that opens its
own session from the application's session factory.
"""

import logging

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ...core.timezone_utils import Clock, utc_now
from ...repositories.factory import RepositoryFactory
from ...repositories.unit_of_work import SQLAlchemyUnitOfWork
from ...services.availability_service import AvailabilityService
from ...services.booking_creation_service import BookingCreationService
from ...services.booking_query_service import BookingQueryService
from ...services.booking_status_service import BookingStatusService
from ...services.room_service import RoomService
from .database import get_db, get_session_factory

logger = logging.getLogger(__name__)


def get_clock() -> Clock:
    """Wall clock for date-sensitive rules; overridden in tests."""
    return utc_now


def get_unit_of_work(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> SQLAlchemyUnitOfWork:
    return SQLAlchemyUnitOfWork(session_factory)


def get_booking_creation_service(
    db: AsyncSession = Depends(get_db),
    unit_of_work: SQLAlchemyUnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
) -> BookingCreationService:
    """Get BookingCreationService with read repositories on the request session."""
    return BookingCreationService(
        service_repository=RepositoryFactory.create_service_repository(db),
        availability_repository=RepositoryFactory.create_availability_repository(db),
        room_repository=RepositoryFactory.create_room_repository(db),
        extra_item_repository=RepositoryFactory.create_extra_item_repository(db),
        unit_of_work=unit_of_work,
        clock=clock,
    )


def get_booking_status_service(
    db: AsyncSession = Depends(get_db),
    unit_of_work: SQLAlchemyUnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
) -> BookingStatusService:
    return BookingStatusService(
        booking_repository=RepositoryFactory.create_booking_repository(db),
        establishment_repository=RepositoryFactory.create_establishment_repository(db),
        unit_of_work=unit_of_work,
        clock=clock,
    )


def get_booking_query_service(db: AsyncSession = Depends(get_db)) -> BookingQueryService:
    return BookingQueryService(
        booking_repository=RepositoryFactory.create_booking_repository(db),
        establishment_repository=RepositoryFactory.create_establishment_repository(db),
    )


def get_availability_service(
    db: AsyncSession = Depends(get_db),
    unit_of_work: SQLAlchemyUnitOfWork = Depends(get_unit_of_work),
) -> AvailabilityService:
    return AvailabilityService(
        availability_repository=RepositoryFactory.create_availability_repository(db),
        service_repository=RepositoryFactory.create_service_repository(db),
        establishment_repository=RepositoryFactory.create_establishment_repository(db),
        unit_of_work=unit_of_work,
    )


def get_room_service(
    db: AsyncSession = Depends(get_db),
    unit_of_work: SQLAlchemyUnitOfWork = Depends(get_unit_of_work),
) -> RoomService:
    return RoomService(
        room_repository=RepositoryFactory.create_room_repository(db),
        service_repository=RepositoryFactory.create_service_repository(db),
        establishment_repository=RepositoryFactory.create_establishment_repository(db),
        unit_of_work=unit_of_work,
    )

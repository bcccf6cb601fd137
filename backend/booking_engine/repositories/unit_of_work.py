# backend/booking_engine/repositories/unit_of_work.py
"""
Unit of work for booking-affecting writes.

``SQLAlchemyUnitOfWork.execute(work)`` opens a dedicated session, hands
``work`` a context of repositories bound to that session's transaction and
commits only when ``work`` returns ``Ok``. An ``Err`` result rolls back, so
a capacity decrement can never outlive the booking row it was taken for.

Persistence faults (including lock timeouts and serialization failures) are
logged and surfaced as a generic Conflict; the driver error never reaches
the caller. Any other exception propagates after the session is closed,
which rolls back the open transaction.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Awaitable, Callable, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..core.exceptions import ConflictException, DomainException, RepositoryException
from ..core.result import Err, Result
from .availability_repository import AvailabilityRepository
from .booking_repository import BookingRepository
from .factory import RepositoryFactory
from .room_repository import RoomRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")

PERSISTENCE_CONFLICT_MESSAGE = "The booking could not be saved, please try again"


@dataclass
class UnitOfWorkContext:
    """Transaction-scoped repository handles."""

    session: AsyncSession
    availability_repository: AvailabilityRepository
    room_repository: RoomRepository
    booking_repository: BookingRepository


Work = Callable[[UnitOfWorkContext], Awaitable[Result[T, DomainException]]]


class SQLAlchemyUnitOfWork:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def execute(self, work: Work[T]) -> Result[T, DomainException]:
        async with self.session_factory() as session:
            ctx = UnitOfWorkContext(
                session=session,
                availability_repository=RepositoryFactory.create_availability_repository(session),
                room_repository=RepositoryFactory.create_room_repository(session),
                booking_repository=RepositoryFactory.create_booking_repository(session),
            )
            try:
                result = await work(ctx)
                if result.is_err():
                    await session.rollback()
                    logger.info(
                        "Unit of work rolled back",
                        extra={"error_type": type(result.error).__name__},
                    )
                    return result
                await session.commit()
                return result
            except (RepositoryException, SQLAlchemyError) as exc:
                await session.rollback()
                logger.error(
                    f"Unit of work failed: {str(exc)}",
                    extra={"error_type": type(exc).__name__},
                    exc_info=True,
                )
                return Err(
                    ConflictException(PERSISTENCE_CONFLICT_MESSAGE, code="PERSISTENCE_CONFLICT")
                )

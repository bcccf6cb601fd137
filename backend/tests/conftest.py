# backend/tests/conftest.py
"""
Shared fixtures for the booking engine test suite.

Every test gets its own file-backed SQLite database so unit-of-work sessions
really run on separate connections and contend on SQLite's write lock, which
is what the concurrency tests rely on.
"""

from datetime import date
from decimal import Decimal
from typing import Callable, Optional

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from booking_engine.core.config import Settings
from booking_engine.core.enums import EstablishmentRole, RoomStatus, ServiceType
from booking_engine.core.timezone_utils import Clock
from booking_engine.database import create_all, create_engine_from_settings, create_session_factory
from booking_engine.models.availability import Availability
from booking_engine.models.establishment import Establishment, EstablishmentMember
from booking_engine.models.room import Room
from booking_engine.models.service import ExtraItem, Service
from booking_engine.repositories.factory import RepositoryFactory
from booking_engine.repositories.unit_of_work import SQLAlchemyUnitOfWork
from booking_engine.services.availability_service import AvailabilityService
from booking_engine.services.booking_creation_service import BookingCreationService
from booking_engine.services.booking_query_service import BookingQueryService
from booking_engine.services.booking_status_service import BookingStatusService
from booking_engine.services.room_service import RoomService

from support import OWNER_ID, STAFF_ID, STAY_CHECK_IN, Catalog, fixed_clock


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    return Settings(
        environment="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'booking_engine_test.db'}",
    )


@pytest.fixture
async def engine(test_settings):
    engine = create_engine_from_settings(test_settings)
    await create_all(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return create_session_factory(engine)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def catalog(session_factory) -> Catalog:
    """
    One establishment with an OWNER and a STAFF member, a SERVICE offering
    (base 50.00, one seat left) and a HOTEL offering (base 120.00 per night,
    one room).
    """
    async with session_factory() as session:
        establishment = Establishment(name="Seaside Resort")
        session.add(establishment)
        await session.flush()
        session.add_all(
            [
                EstablishmentMember(
                    establishment_id=establishment.id,
                    user_id=OWNER_ID,
                    role=EstablishmentRole.OWNER.value,
                ),
                EstablishmentMember(
                    establishment_id=establishment.id,
                    user_id=STAFF_ID,
                    role=EstablishmentRole.STAFF.value,
                ),
            ]
        )

        spa = Service(
            establishment_id=establishment.id,
            name="Hot Stone Massage",
            base_price=Decimal("50.00"),
            duration_minutes=60,
            capacity=1,
            type=ServiceType.SERVICE.value,
        )
        hotel = Service(
            establishment_id=establishment.id,
            name="Double Room",
            base_price=Decimal("120.00"),
            duration_minutes=1440,
            capacity=1,
            type=ServiceType.HOTEL.value,
        )
        retired = Service(
            establishment_id=establishment.id,
            name="Retired Treatment",
            base_price=Decimal("30.00"),
            type=ServiceType.SERVICE.value,
            active=False,
        )
        session.add_all([spa, hotel, retired])
        await session.flush()

        spa_slot = Availability(
            service_id=spa.id,
            date=date(2025, 6, 1),
            start_time="10:00",
            end_time="11:00",
            capacity=1,
        )
        hotel_slot = Availability(
            service_id=hotel.id,
            date=date(2025, 6, 1),
            start_time="14:00",
            end_time="23:00",
            capacity=10,
        )
        room = Room(service_id=hotel.id, number="101", floor=1, status=RoomStatus.AVAILABLE.value)
        towel = ExtraItem(
            service_id=spa.id, name="Warm towel", price=Decimal("5.50"), max_quantity=3
        )
        breakfast = ExtraItem(
            service_id=hotel.id, name="Breakfast", price=Decimal("15.00"), max_quantity=2
        )
        inactive = ExtraItem(
            service_id=spa.id, name="Old oil", price=Decimal("9.00"), max_quantity=1, active=False
        )
        session.add_all([spa_slot, hotel_slot, room, towel, breakfast, inactive])
        await session.commit()

        return Catalog(
            establishment_id=establishment.id,
            spa_service_id=spa.id,
            spa_slot_id=spa_slot.id,
            hotel_service_id=hotel.id,
            hotel_slot_id=hotel_slot.id,
            room_id=room.id,
            towel_extra_id=towel.id,
            breakfast_extra_id=breakfast.id,
            inactive_extra_id=inactive.id,
            inactive_service_id=retired.id,
        )


@pytest.fixture
def unit_of_work(session_factory) -> SQLAlchemyUnitOfWork:
    return SQLAlchemyUnitOfWork(session_factory)


@pytest.fixture
def make_creation_service(unit_of_work) -> Callable[..., BookingCreationService]:
    def _build(session: AsyncSession, clock: Optional[Clock] = None) -> BookingCreationService:
        return BookingCreationService(
            service_repository=RepositoryFactory.create_service_repository(session),
            availability_repository=RepositoryFactory.create_availability_repository(session),
            room_repository=RepositoryFactory.create_room_repository(session),
            extra_item_repository=RepositoryFactory.create_extra_item_repository(session),
            unit_of_work=unit_of_work,
            clock=clock or fixed_clock(STAY_CHECK_IN),
        )

    return _build


@pytest.fixture
def make_status_service(unit_of_work) -> Callable[..., BookingStatusService]:
    def _build(session: AsyncSession, clock: Optional[Clock] = None) -> BookingStatusService:
        return BookingStatusService(
            booking_repository=RepositoryFactory.create_booking_repository(session),
            establishment_repository=RepositoryFactory.create_establishment_repository(session),
            unit_of_work=unit_of_work,
            clock=clock or fixed_clock(STAY_CHECK_IN),
        )

    return _build


@pytest.fixture
def creation_service(db, make_creation_service) -> BookingCreationService:
    return make_creation_service(db)


@pytest.fixture
def status_service(db, make_status_service) -> BookingStatusService:
    return make_status_service(db)


@pytest.fixture
def query_service(db) -> BookingQueryService:
    return BookingQueryService(
        booking_repository=RepositoryFactory.create_booking_repository(db),
        establishment_repository=RepositoryFactory.create_establishment_repository(db),
    )


@pytest.fixture
def availability_service(db, unit_of_work) -> AvailabilityService:
    return AvailabilityService(
        availability_repository=RepositoryFactory.create_availability_repository(db),
        service_repository=RepositoryFactory.create_service_repository(db),
        establishment_repository=RepositoryFactory.create_establishment_repository(db),
        unit_of_work=unit_of_work,
    )


@pytest.fixture
def room_service(db, unit_of_work) -> RoomService:
    return RoomService(
        room_repository=RepositoryFactory.create_room_repository(db),
        service_repository=RepositoryFactory.create_service_repository(db),
        establishment_repository=RepositoryFactory.create_establishment_repository(db),
        unit_of_work=unit_of_work,
    )

# backend/tests/support.py
"""Constants and helpers shared by the test modules."""

from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Optional

from booking_engine.core.timezone_utils import Clock
from booking_engine.models.booking import Booking

OWNER_ID = "01J0000000000000000000OWNR"
STAFF_ID = "01J0000000000000000000STAF"
CUSTOMER_ID = "01J0000000000000000000CUST"
OTHER_USER_ID = "01J0000000000000000000OTHR"

STAY_CHECK_IN = date(2025, 6, 1)
STAY_CHECK_OUT = date(2025, 6, 5)


def fixed_clock(day: date) -> Clock:
    """Clock pinned to noon UTC of ``day``."""
    moment = datetime(day.year, day.month, day.day, 12, 0, tzinfo=timezone.utc)
    return lambda: moment


@dataclass
class Catalog:
    establishment_id: str
    spa_service_id: str
    spa_slot_id: str
    hotel_service_id: str
    hotel_slot_id: str
    room_id: str
    towel_extra_id: str
    breakfast_extra_id: str
    inactive_extra_id: str
    inactive_service_id: str

    def spa_request(self, **overrides: Any) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "service_id": self.spa_service_id,
            "availability_id": self.spa_slot_id,
            "quantity": 1,
        }
        payload.update(overrides)
        return payload

    def hotel_request(self, room_id: Optional[str] = None, **overrides: Any) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "service_id": self.hotel_service_id,
            "availability_id": self.hotel_slot_id,
            "quantity": 1,
            "check_in_date": STAY_CHECK_IN,
            "check_out_date": STAY_CHECK_OUT,
        }
        if room_id is not None:
            payload["room_id"] = room_id
        payload.update(overrides)
        return payload


async def reload(session_factory, model, entity_id):
    """Read a row through a fresh session, bypassing any identity map."""
    async with session_factory() as session:
        return await session.get(model, entity_id)


async def insert_booking(
    session_factory, catalog: Catalog, status, user_id: str = CUSTOMER_ID, quantity: int = 1
) -> str:
    """Insert a SERVICE booking directly, bypassing capacity bookkeeping."""
    async with session_factory() as session:
        booking = Booking(
            user_id=user_id,
            establishment_id=catalog.establishment_id,
            service_id=catalog.spa_service_id,
            availability_id=catalog.spa_slot_id,
            quantity=quantity,
            total_price=Decimal("50.00"),
            status=status.value,
        )
        session.add(booking)
        await session.commit()
        return booking.id

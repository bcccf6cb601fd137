# backend/tests/test_booking_query_service.py
import pytest

from booking_engine.core.enums import BookingStatus
from support import CUSTOMER_ID, OTHER_USER_ID, OWNER_ID, STAFF_ID, insert_booking


@pytest.fixture
async def bookings(session_factory, catalog):
    """Three bookings for the customer, one for somebody else."""
    ids = [
        await insert_booking(session_factory, catalog, BookingStatus.CONFIRMED),
        await insert_booking(session_factory, catalog, BookingStatus.CANCELLED),
        await insert_booking(session_factory, catalog, BookingStatus.CONFIRMED),
        await insert_booking(
            session_factory, catalog, BookingStatus.CONFIRMED, user_id=OTHER_USER_ID
        ),
    ]
    return ids


class TestGetBooking:
    @pytest.mark.asyncio
    async def test_customer_sees_own_booking(self, query_service, bookings):
        result = await query_service.get_booking(bookings[0], CUSTOMER_ID)

        assert result.is_ok()
        assert result.value.id == bookings[0]
        assert result.value.extra_items == []

    @pytest.mark.asyncio
    async def test_staff_sees_any_booking_of_establishment(self, query_service, bookings):
        result = await query_service.get_booking(bookings[3], STAFF_ID)

        assert result.value.user_id == OTHER_USER_ID

    @pytest.mark.asyncio
    async def test_other_customer_is_refused(self, query_service, bookings):
        result = await query_service.get_booking(bookings[3], CUSTOMER_ID)

        assert result.error.status_code == 403
        assert result.error.message == "You do not have permission to view this booking"

    @pytest.mark.asyncio
    async def test_unknown_booking(self, query_service, catalog):
        result = await query_service.get_booking("01J00000000000000000000000", CUSTOMER_ID)

        assert result.error.status_code == 404


class TestListForUser:
    @pytest.mark.asyncio
    async def test_only_own_bookings(self, query_service, bookings):
        result = await query_service.list_for_user(CUSTOMER_ID)

        page = result.value
        assert page.total == 3
        assert {booking.id for booking in page.data} == set(bookings[:3])
        assert (page.page, page.limit) == (1, 20)

    @pytest.mark.asyncio
    async def test_second_page(self, query_service, bookings):
        result = await query_service.list_for_user(CUSTOMER_ID, page=2, limit=2)

        assert result.value.total == 3
        assert len(result.value.data) == 1

    @pytest.mark.asyncio
    async def test_paging_is_clamped(self, query_service, bookings):
        result = await query_service.list_for_user(CUSTOMER_ID, page=0, limit=10_000)

        assert result.value.page == 1
        assert result.value.limit == 100

    @pytest.mark.asyncio
    async def test_status_filter(self, query_service, bookings):
        result = await query_service.list_for_user(CUSTOMER_ID, status=BookingStatus.CANCELLED)

        assert result.value.total == 1
        assert result.value.data[0].id == bookings[1]


class TestListForEstablishment:
    @pytest.mark.asyncio
    async def test_owner_sees_all_bookings(self, query_service, bookings, catalog):
        result = await query_service.list_for_establishment(catalog.establishment_id, OWNER_ID)

        assert result.value.total == 4

    @pytest.mark.asyncio
    async def test_customer_is_refused(self, query_service, bookings, catalog):
        result = await query_service.list_for_establishment(
            catalog.establishment_id, CUSTOMER_ID
        )

        assert result.error.status_code == 403
        assert result.error.message == (
            "You do not have permission to view bookings of this establishment"
        )

# backend/tests/test_room_service.py
import pytest

from booking_engine.core.enums import RoomStatus
from booking_engine.models.room import Room
from booking_engine.schemas.booking import CreateBookingInput
from booking_engine.schemas.catalog import RoomCreate, RoomUpdate
from support import CUSTOMER_ID, OWNER_ID, STAFF_ID, reload


class TestCreateRoom:
    @pytest.mark.asyncio
    async def test_owner_adds_room_to_hotel(self, room_service, catalog, session_factory):
        result = await room_service.create(
            RoomCreate(service_id=catalog.hotel_service_id, number="102", floor=1), OWNER_ID
        )

        assert result.is_ok()
        stored = await reload(session_factory, Room, result.value.id)
        assert stored.number == "102"
        assert stored.status == RoomStatus.AVAILABLE.value

    @pytest.mark.asyncio
    async def test_rooms_need_a_hotel_service(self, room_service, catalog):
        result = await room_service.create(
            RoomCreate(service_id=catalog.spa_service_id, number="1"), OWNER_ID
        )

        assert result.error.status_code == 409
        assert result.error.message == "Rooms can only be added to hotel services"

    @pytest.mark.asyncio
    async def test_duplicate_number(self, room_service, catalog):
        result = await room_service.create(
            RoomCreate(service_id=catalog.hotel_service_id, number="101"), OWNER_ID
        )

        assert result.error.message == "Room number 101 already exists for this service"

    @pytest.mark.asyncio
    async def test_staff_cannot_manage_rooms(self, room_service, catalog):
        result = await room_service.create(
            RoomCreate(service_id=catalog.hotel_service_id, number="103"), STAFF_ID
        )

        assert result.error.status_code == 403
        assert result.error.message == "Only establishment owners can manage rooms"


class TestUpdateRoom:
    @pytest.mark.asyncio
    async def test_put_room_into_maintenance(self, room_service, catalog, session_factory):
        result = await room_service.update(
            catalog.room_id, RoomUpdate(status=RoomStatus.MAINTENANCE), OWNER_ID
        )

        assert result.is_ok()
        stored = await reload(session_factory, Room, catalog.room_id)
        assert stored.status == RoomStatus.MAINTENANCE.value

    @pytest.mark.asyncio
    async def test_occupied_room_with_guest_cannot_be_released(
        self, room_service, creation_service, catalog, session_factory
    ):
        booked = await creation_service.create(
            CreateBookingInput(**catalog.hotel_request()), CUSTOMER_ID
        )
        assert booked.value.room_id == catalog.room_id

        result = await room_service.update(
            catalog.room_id, RoomUpdate(status=RoomStatus.AVAILABLE), OWNER_ID
        )

        assert result.error.message == "Cannot set room to AVAILABLE while it has active bookings"
        stored = await reload(session_factory, Room, catalog.room_id)
        assert stored.status == RoomStatus.OCCUPIED.value

    @pytest.mark.asyncio
    async def test_floor_can_be_cleared(self, room_service, catalog, session_factory):
        result = await room_service.update(
            catalog.room_id, RoomUpdate.model_validate({"floor": None}), OWNER_ID
        )

        assert result.is_ok()
        stored = await reload(session_factory, Room, catalog.room_id)
        assert stored.floor is None
        assert stored.number == "101"
        assert stored.status == RoomStatus.AVAILABLE.value

    @pytest.mark.asyncio
    async def test_renumber_onto_existing_number(self, room_service, catalog):
        other = await room_service.create(
            RoomCreate(service_id=catalog.hotel_service_id, number="102"), OWNER_ID
        )

        result = await room_service.update(other.value.id, RoomUpdate(number="101"), OWNER_ID)

        assert result.error.message == "Room number 101 already exists for this service"


class TestDeleteRoom:
    @pytest.mark.asyncio
    async def test_room_with_booking_is_kept(
        self, room_service, creation_service, catalog, session_factory
    ):
        await creation_service.create(CreateBookingInput(**catalog.hotel_request()), CUSTOMER_ID)

        result = await room_service.delete(catalog.room_id, OWNER_ID)

        assert result.error.message == "Cannot delete a room with active bookings"
        assert await reload(session_factory, Room, catalog.room_id) is not None

    @pytest.mark.asyncio
    async def test_free_room_is_deleted(self, room_service, catalog, session_factory):
        result = await room_service.delete(catalog.room_id, OWNER_ID)

        assert result.is_ok()
        assert await reload(session_factory, Room, catalog.room_id) is None

    @pytest.mark.asyncio
    async def test_unknown_room(self, room_service, catalog):
        result = await room_service.delete("01J00000000000000000000000", OWNER_ID)

        assert result.error.status_code == 404
        assert result.error.message == "Room not found"

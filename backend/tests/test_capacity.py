from datetime import date
from types import SimpleNamespace

import pytest

from booking_engine.core.enums import RoomStatus
from booking_engine.domain.capacity import (
    has_capacity,
    room_is_bookable,
    slots_overlap,
    stays_overlap,
    time_range_valid,
    validate_hotel_dates,
)

TODAY = date(2025, 6, 1)


class TestHasCapacity:
    def test_enough_seats(self):
        assert has_capacity(SimpleNamespace(capacity=3), 3).is_ok()

    def test_not_enough_seats(self):
        result = has_capacity(SimpleNamespace(capacity=1), 2)
        assert result.is_err()
        assert result.error.status_code == 409
        assert result.error.code == "CAPACITY_EXHAUSTED"


class TestRoomIsBookable:
    def test_available_room_of_service(self):
        room = SimpleNamespace(service_id="svc", status=RoomStatus.AVAILABLE.value)
        assert room_is_bookable(room, "svc").is_ok()

    def test_room_of_another_service(self):
        room = SimpleNamespace(service_id="other", status=RoomStatus.AVAILABLE.value)
        result = room_is_bookable(room, "svc")
        assert result.is_err()
        assert result.error.message == "Room does not belong to the specified service"

    @pytest.mark.parametrize("status", ["OCCUPIED", "CLEANING", "MAINTENANCE", "BLOCKED"])
    def test_room_not_available(self, status):
        room = SimpleNamespace(service_id="svc", status=status)
        result = room_is_bookable(room, "svc")
        assert result.is_err()
        assert result.error.code == "ROOM_UNAVAILABLE"
        assert status in result.error.message


class TestValidateHotelDates:
    def test_counts_nights(self):
        result = validate_hotel_dates(date(2025, 6, 1), date(2025, 6, 5), TODAY)
        assert result.is_ok()
        assert result.value.number_of_nights == 4

    def test_crosses_month_boundary(self):
        result = validate_hotel_dates(date(2025, 1, 30), date(2025, 2, 2), date(2025, 1, 30))
        assert result.value.number_of_nights == 3

    @pytest.mark.parametrize(
        "check_in, check_out",
        [(date(2025, 6, 5), date(2025, 6, 5)), (date(2025, 6, 5), date(2025, 6, 1))],
    )
    def test_check_out_must_follow_check_in(self, check_in, check_out):
        result = validate_hotel_dates(check_in, check_out, TODAY)
        assert result.is_err()
        assert result.error.message == "checkOutDate must be after checkInDate"

    def test_check_in_today_is_allowed(self):
        assert validate_hotel_dates(TODAY, date(2025, 6, 2), TODAY).is_ok()

    def test_check_in_before_today(self):
        result = validate_hotel_dates(date(2025, 5, 31), date(2025, 6, 2), TODAY)
        assert result.is_err()
        assert result.error.message == "checkInDate cannot be in the past"

    def test_past_check_in_is_reported_before_date_order(self):
        result = validate_hotel_dates(date(2025, 5, 31), date(2025, 5, 30), TODAY)
        assert result.error.message == "checkInDate cannot be in the past"


class TestStaysOverlap:
    def test_shared_boundary_day_collides(self):
        assert stays_overlap(date(2025, 6, 1), date(2025, 6, 5), date(2025, 6, 5), date(2025, 6, 8))

    def test_disjoint_stays(self):
        assert not stays_overlap(
            date(2025, 6, 1), date(2025, 6, 5), date(2025, 6, 6), date(2025, 6, 8)
        )

    def test_contained_stay(self):
        assert stays_overlap(
            date(2025, 6, 1), date(2025, 6, 10), date(2025, 6, 3), date(2025, 6, 4)
        )


class TestTimeRangeValid:
    def test_valid_range(self):
        assert time_range_valid("09:00", "10:30").is_ok()

    def test_start_not_before_end(self):
        result = time_range_valid("10:00", "10:00")
        assert result.error.message == "Start time must be before end time"
        assert time_range_valid("11:00", "10:00").is_err()

    def test_bad_format(self):
        assert time_range_valid("9:00", "10:00").error.message == "Times must use the HH:MM format"
        assert time_range_valid("09:00", "24:00").is_err()


class TestSlotsOverlap:
    @pytest.mark.parametrize(
        "new_start, new_end",
        [
            ("09:30", "10:30"),  # starts inside
            ("08:00", "09:30"),  # ends inside
            ("08:00", "11:00"),  # contains
            ("09:15", "09:45"),  # contained
            ("09:00", "10:00"),  # identical
        ],
    )
    def test_colliding_slots(self, new_start, new_end):
        assert slots_overlap("09:00", "10:00", new_start, new_end)

    @pytest.mark.parametrize("new_start, new_end", [("10:00", "11:00"), ("08:00", "09:00")])
    def test_adjacent_slots_do_not_collide(self, new_start, new_end):
        assert not slots_overlap("09:00", "10:00", new_start, new_end)

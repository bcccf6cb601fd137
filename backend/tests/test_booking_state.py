from datetime import date

import pytest

from booking_engine.core.enums import BookingStatus, ServiceType
from booking_engine.domain.booking_state import (
    TRANSITIONS,
    BookingEvent,
    authorize_event,
    check_in_allowed,
    ensure_service_supports,
    plan_transition,
)


class TestPlanTransition:
    @pytest.mark.parametrize(
        "current, event, target",
        [
            (BookingStatus.CONFIRMED, BookingEvent.CANCEL, BookingStatus.CANCELLED),
            (BookingStatus.PENDING, BookingEvent.CONFIRM, BookingStatus.CONFIRMED),
            (BookingStatus.PENDING, BookingEvent.CHECK_IN, BookingStatus.CHECKED_IN),
            (BookingStatus.CONFIRMED, BookingEvent.CHECK_IN, BookingStatus.CHECKED_IN),
            (BookingStatus.CHECKED_IN, BookingEvent.CHECK_OUT, BookingStatus.CHECKED_OUT),
            (BookingStatus.CONFIRMED, BookingEvent.NO_SHOW, BookingStatus.NO_SHOW),
            (BookingStatus.PENDING, BookingEvent.NO_SHOW, BookingStatus.NO_SHOW),
        ],
    )
    def test_legal_transitions(self, current, event, target):
        result = plan_transition(current, event)
        assert result.is_ok()
        assert result.value.target == target

    def test_accepts_raw_status_strings(self):
        assert plan_transition("CONFIRMED", BookingEvent.CANCEL).is_ok()

    @pytest.mark.parametrize(
        "current, event, message",
        [
            (BookingStatus.CANCELLED, BookingEvent.CONFIRM, "Cannot confirm a cancelled booking"),
            (BookingStatus.CANCELLED, BookingEvent.CANCEL, "Booking is already cancelled"),
            (BookingStatus.CONFIRMED, BookingEvent.CONFIRM, "Booking is already confirmed"),
            (BookingStatus.PENDING, BookingEvent.CANCEL, "Cannot cancel a pending booking"),
            (BookingStatus.CHECKED_IN, BookingEvent.CANCEL, "Cannot cancel a checked-in booking"),
            (
                BookingStatus.CONFIRMED,
                BookingEvent.CHECK_OUT,
                "Booking must be checked in before check-out",
            ),
            (BookingStatus.NO_SHOW, BookingEvent.NO_SHOW, "Booking is already marked as no-show"),
            (
                BookingStatus.CHECKED_OUT,
                BookingEvent.NO_SHOW,
                "Cannot mark a checked-out booking as no-show",
            ),
            (BookingStatus.CHECKED_IN, BookingEvent.CHECK_IN, "Booking is already checked in"),
        ],
    )
    def test_illegal_transitions_name_current_state(self, current, event, message):
        result = plan_transition(current, event)
        assert result.is_err()
        assert result.error.status_code == 409
        assert result.error.code == "INVALID_TRANSITION"
        assert result.error.message == message
        assert result.error.details == {"current_status": current.value, "event": event.value}

    @pytest.mark.parametrize(
        "terminal", [BookingStatus.CANCELLED, BookingStatus.CHECKED_OUT, BookingStatus.NO_SHOW]
    )
    def test_terminal_states_accept_nothing(self, terminal):
        assert all(plan_transition(terminal, event).is_err() for event in BookingEvent)

    def test_compensations(self):
        cancel = TRANSITIONS[BookingEvent.CANCEL]
        assert cancel.restore_capacity and cancel.release_room
        assert TRANSITIONS[BookingEvent.CHECK_OUT].release_room
        assert not TRANSITIONS[BookingEvent.CHECK_OUT].restore_capacity
        assert TRANSITIONS[BookingEvent.NO_SHOW].release_room
        assert not TRANSITIONS[BookingEvent.NO_SHOW].restore_capacity
        assert TRANSITIONS[BookingEvent.CONFIRM].timestamp_field == "confirmed_at"


class TestAuthorizeEvent:
    @pytest.mark.parametrize("role", ["OWNER", "STAFF"])
    @pytest.mark.parametrize("event", list(BookingEvent))
    def test_establishment_roles_may_do_anything(self, role, event):
        assert authorize_event(event, user_id="u1", booking_user_id="u2", role=role).is_ok()

    def test_customer_may_cancel_own_booking(self):
        assert authorize_event(
            BookingEvent.CANCEL, user_id="u1", booking_user_id="u1", role=None
        ).is_ok()

    def test_customer_cannot_cancel_someone_else(self):
        result = authorize_event(BookingEvent.CANCEL, user_id="u1", booking_user_id="u2", role=None)
        assert result.error.status_code == 403
        assert result.error.message == "You do not have permission to cancel this booking"

    @pytest.mark.parametrize(
        "event, phrase",
        [
            (BookingEvent.CONFIRM, "confirm"),
            (BookingEvent.CHECK_IN, "check in"),
            (BookingEvent.CHECK_OUT, "check out"),
            (BookingEvent.NO_SHOW, "mark as no-show"),
        ],
    )
    def test_customer_cannot_self_serve_staff_events(self, event, phrase):
        result = authorize_event(event, user_id="u1", booking_user_id="u1", role=None)
        assert result.is_err()
        assert result.error.message == f"You do not have permission to {phrase} this booking"


class TestHotelOnlyEvents:
    @pytest.mark.parametrize(
        "event, message",
        [
            (BookingEvent.CHECK_IN, "Check-in is only available for hotel bookings"),
            (BookingEvent.CHECK_OUT, "Check-out is only available for hotel bookings"),
            (BookingEvent.NO_SHOW, "No-show is only available for hotel bookings"),
        ],
    )
    def test_refused_for_service_bookings(self, event, message):
        result = ensure_service_supports(TRANSITIONS[event], ServiceType.SERVICE.value)
        assert result.error.message == message

    def test_cancel_works_for_any_service(self):
        assert ensure_service_supports(TRANSITIONS[BookingEvent.CANCEL], "SERVICE").is_ok()
        assert ensure_service_supports(TRANSITIONS[BookingEvent.CHECK_IN], "HOTEL").is_ok()


class TestCheckInAllowed:
    def test_on_or_after_check_in_date(self):
        assert check_in_allowed(date(2025, 6, 1), date(2025, 6, 1)).is_ok()
        assert check_in_allowed(date(2025, 6, 1), date(2025, 6, 3)).is_ok()

    def test_before_check_in_date(self):
        result = check_in_allowed(date(2025, 6, 1), date(2025, 5, 31))
        assert result.error.message == "Check-in is not allowed before the check-in date"

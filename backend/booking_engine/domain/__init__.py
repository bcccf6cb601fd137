"""
Pure booking rules: capacity, pricing and the lifecycle state machine.

Nothing in this package touches the database; every check returns a
``Result`` so orchestrators can branch explicitly on business failures.
"""

from .booking_state import (
    BookingEvent,
    Transition,
    authorize_event,
    check_in_allowed,
    plan_transition,
)
from .capacity import (
    StayDates,
    has_capacity,
    room_is_bookable,
    slots_overlap,
    stays_overlap,
    time_range_valid,
    validate_hotel_dates,
)
from .pricing import ExtraLine, ExtraRequest, PriceQuote, PricingCalculator, to_money

__all__ = [
    "BookingEvent",
    "ExtraLine",
    "ExtraRequest",
    "PriceQuote",
    "PricingCalculator",
    "StayDates",
    "Transition",
    "authorize_event",
    "check_in_allowed",
    "has_capacity",
    "plan_transition",
    "room_is_bookable",
    "slots_overlap",
    "stays_overlap",
    "time_range_valid",
    "to_money",
    "validate_hotel_dates",
]

# backend/booking_engine/schemas/booking.py
"""
Booking schemas for the booking engine.

Request DTOs validate shape only (types, bounds, formats). Every business
rule (capacity, room availability, extra limits, lifecycle legality) is
enforced by the orchestrators, which report failures as results.
"""

from datetime import date, datetime
import re
from typing import List, Optional

from pydantic import Field, ValidationInfo, field_validator, model_validator

from ..core.enums import BookingStatus
from ._strict_base import StrictRequestModel
from .base import Money, PaginatedResponse, StandardizedModel

DATE_ONLY_REGEX = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _ensure_date_only(value: object, field_name: str) -> object:
    if isinstance(value, str):
        candidate = value.strip()
        if not DATE_ONLY_REGEX.fullmatch(candidate):
            raise ValueError(f"{field_name} must be a YYYY-MM-DD date-only string")
        return candidate
    return value


class ExtraSelection(StrictRequestModel):
    """One requested extra item and how many of it."""

    extra_item_id: str = Field(..., min_length=1, description="Extra item to add")
    quantity: int = Field(1, ge=1, description="Units of the extra item")


class CreateBookingInput(StrictRequestModel):
    """
    Create a booking against an availability slot.

    Hotel services additionally need ``check_in_date`` and ``check_out_date``;
    ``room_id`` is optional and the first free room is assigned when omitted.
    """

    service_id: str = Field(..., min_length=1)
    availability_id: str = Field(..., min_length=1)
    quantity: int = Field(1, ge=1, le=1000)
    extras: List[ExtraSelection] = Field(default_factory=list)

    check_in_date: Optional[date] = None
    check_out_date: Optional[date] = None
    room_id: Optional[str] = None
    number_of_guests: Optional[int] = Field(None, ge=1, le=50)

    guest_name: Optional[str] = Field(None, max_length=255)
    guest_email: Optional[str] = Field(None, max_length=255)
    guest_phone: Optional[str] = Field(None, max_length=50)
    guest_document: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = Field(None, max_length=1000)

    @field_validator("check_in_date", "check_out_date", mode="before")
    @classmethod
    def _enforce_date_only(cls, v: object, info: ValidationInfo) -> object:
        return _ensure_date_only(v, info.field_name or "date")

    @field_validator("guest_email")
    @classmethod
    def _validate_email(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if "@" not in v or v.startswith("@") or v.endswith("@"):
            raise ValueError("guest_email must be a valid email address")
        return v

    @field_validator("notes", "guest_name")
    @classmethod
    def _strip_text(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v else v

    @model_validator(mode="after")
    def _unique_extras(self) -> "CreateBookingInput":
        ids = [extra.extra_item_id for extra in self.extras]
        if len(ids) != len(set(ids)):
            raise ValueError("Each extra item may only be listed once")
        return self


class CancelBookingInput(StrictRequestModel):
    reason: Optional[str] = Field(None, max_length=500, description="Why the booking is cancelled")


class BookingExtraLineResponse(StandardizedModel):
    extra_item_id: str
    quantity: int
    price_at_booking: Money


class BookingResponse(StandardizedModel):
    """Booking as returned by every booking endpoint."""

    id: str
    user_id: str
    establishment_id: str
    service_id: str
    availability_id: str
    quantity: int
    total_price: Money
    status: BookingStatus

    check_in_date: Optional[date] = None
    check_out_date: Optional[date] = None
    room_id: Optional[str] = None
    number_of_nights: Optional[int] = None
    number_of_guests: Optional[int] = None

    guest_name: Optional[str] = None
    guest_email: Optional[str] = None
    guest_phone: Optional[str] = None
    guest_document: Optional[str] = None
    notes: Optional[str] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    confirmed_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    cancellation_reason: Optional[str] = None
    checked_in_at: Optional[datetime] = None
    checked_out_at: Optional[datetime] = None

    extra_items: List[BookingExtraLineResponse] = Field(default_factory=list)


class BookingListResponse(PaginatedResponse[BookingResponse]):
    pass

# backend/booking_engine/schemas/catalog.py
"""Schemas for availability slot and room management."""

from datetime import date
from datetime import date as date_type
from decimal import Decimal
import re
from typing import Optional

from pydantic import Field, field_validator, model_validator

from ..core.enums import RoomStatus
from ._strict_base import StrictRequestModel
from .base import Money, StandardizedModel

TIME_REGEX = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def _ensure_hh_mm(value: Optional[str]) -> Optional[str]:
    if value is not None and not TIME_REGEX.fullmatch(value):
        raise ValueError(f"Invalid time format: {value}. Expected HH:MM format.")
    return value


def _reject_explicit_nulls(model: StrictRequestModel, fields: tuple) -> None:
    """Optional means 'may be omitted'; these columns cannot be cleared."""
    for name in fields:
        if name in model.model_fields_set and getattr(model, name) is None:
            raise ValueError(f"{name} cannot be null")


class AvailabilityCreate(StrictRequestModel):
    service_id: str = Field(..., min_length=1)
    specific_date: date
    start_time: str = Field(..., description="HH:MM, inclusive")
    end_time: str = Field(..., description="HH:MM, exclusive")
    capacity: int = Field(..., ge=0)
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    is_recurring: bool = False

    @field_validator("start_time", "end_time")
    @classmethod
    def _validate_time(cls, v: str) -> str:
        return _ensure_hh_mm(v)


class AvailabilityUpdate(StrictRequestModel):
    """Partial update; omitted fields keep their current value."""

    specific_date: Optional[date] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    capacity: Optional[int] = Field(None, ge=0)
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    is_recurring: Optional[bool] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def _validate_time(cls, v: Optional[str]) -> Optional[str]:
        return _ensure_hh_mm(v)

    @model_validator(mode="after")
    def _non_nullable(self) -> "AvailabilityUpdate":
        _reject_explicit_nulls(
            self, ("specific_date", "start_time", "end_time", "capacity", "is_recurring")
        )
        return self


class RoomCreate(StrictRequestModel):
    service_id: str = Field(..., min_length=1)
    number: str = Field(..., min_length=1, max_length=20)
    floor: Optional[int] = None
    description: Optional[str] = Field(None, max_length=1000)
    status: RoomStatus = RoomStatus.AVAILABLE


class RoomUpdate(StrictRequestModel):
    number: Optional[str] = Field(None, min_length=1, max_length=20)
    floor: Optional[int] = None
    description: Optional[str] = Field(None, max_length=1000)
    status: Optional[RoomStatus] = None

    @model_validator(mode="after")
    def _non_nullable(self) -> "RoomUpdate":
        _reject_explicit_nulls(self, ("number", "status"))
        return self


class AvailabilityResponse(StandardizedModel):
    id: str
    service_id: str
    date: date_type
    start_time: str
    end_time: str
    capacity: int
    price: Optional[Money] = None
    is_recurring: bool


class RoomResponse(StandardizedModel):
    id: str
    service_id: str
    number: str
    floor: Optional[int] = None
    description: Optional[str] = None
    status: RoomStatus

# backend/booking_engine/core/result.py
"""
Explicit success/failure results for expected business outcomes.

Orchestrators return ``Ok(value)`` or ``Err(error)`` so every failure path is
visible at the call site. Exceptions stay reserved for programmer errors and
infrastructure faults.

Usage:
    result = await creation_service.create(data, user_id)
    if result.is_err():
        raise result.error.to_http_exception()
    booking = result.value
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False


@dataclass(frozen=True)
class Err(Generic[E]):
    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True


Result = Union[Ok[T], Err[E]]

OK_NONE: Ok[None] = Ok(None)

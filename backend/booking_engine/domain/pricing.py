# backend/booking_engine/domain/pricing.py
"""
Deterministic price computation for new bookings.

All amounts are ``Decimal`` values quantized to cents with ROUND_HALF_UP.
Extra items are priced once, at booking time, and the resulting unit price is
stored on each booking line so later catalogue edits never rewrite history.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
import logging
from typing import TYPE_CHECKING, Optional, Sequence, Tuple, Union

from ..core.exceptions import ConflictException, DomainException, NotFoundException
from ..core.result import Err, Ok, Result

if TYPE_CHECKING:
    from ..models.availability import Availability
    from ..models.service import ExtraItem, Service

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def to_money(value: Union[Decimal, int, float, str]) -> Decimal:
    """Quantize any numeric input to a two-decimal ``Decimal``."""
    if isinstance(value, float):
        # Go through str so binary float noise never reaches stored totals
        value = str(value)
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class ExtraRequest:
    """A requested extra: the loaded catalogue item (or None) and a quantity."""

    extra_item_id: str
    quantity: int
    extra_item: Optional["ExtraItem"]


@dataclass(frozen=True)
class ExtraLine:
    extra_item_id: str
    quantity: int
    price_at_booking: Decimal

    @property
    def line_total(self) -> Decimal:
        return to_money(self.price_at_booking * self.quantity)


@dataclass(frozen=True)
class PriceQuote:
    unit_price: Decimal
    base_total: Decimal
    extras: Tuple[ExtraLine, ...]
    total_price: Decimal


class PricingCalculator:
    """Side-effect free pricing for SERVICE and HOTEL bookings."""

    def unit_price(self, service: "Service", availability: "Availability") -> Decimal:
        # A slot override of 0 is a deliberate free slot, so only None falls back
        if availability.price is not None:
            return to_money(availability.price)
        return to_money(service.base_price)

    def base_total(
        self,
        unit_price: Decimal,
        quantity: int,
        number_of_nights: Optional[int] = None,
    ) -> Decimal:
        """Nights drive hotel totals; quantity drives everything else."""
        multiplier = number_of_nights if number_of_nights is not None else quantity
        return to_money(unit_price * multiplier)

    def price_extra(
        self, request: ExtraRequest, service_id: str
    ) -> Result[ExtraLine, DomainException]:
        extra_item = request.extra_item
        # Soft-deleted extras look absent to customers
        if extra_item is None or not extra_item.active:
            return Err(NotFoundException("ExtraItem"))
        if extra_item.service_id != service_id:
            return Err(ConflictException("Extra item does not belong to the service"))
        if request.quantity > extra_item.max_quantity:
            return Err(
                ConflictException(
                    f"Extra item {extra_item.name} quantity exceeds maximum of "
                    f"{extra_item.max_quantity}"
                )
            )
        return Ok(
            ExtraLine(
                extra_item_id=extra_item.id,
                quantity=request.quantity,
                price_at_booking=to_money(extra_item.price),
            )
        )

    def quote(
        self,
        service: "Service",
        availability: "Availability",
        quantity: int,
        extras: Sequence[ExtraRequest] = (),
        number_of_nights: Optional[int] = None,
    ) -> Result[PriceQuote, DomainException]:
        """
        Price a booking end to end.

        Args:
            service: The booked service
            availability: The slot being booked (may override the unit price)
            quantity: Seats requested
            extras: Requested extras with their catalogue rows already loaded
            number_of_nights: Stay length for hotel bookings, None otherwise

        Returns:
            Ok(PriceQuote) or the first extra validation failure
        """
        unit_price = self.unit_price(service, availability)
        base_total = self.base_total(unit_price, quantity, number_of_nights)

        lines = []
        total = base_total
        for request in extras:
            line_result = self.price_extra(request, service.id)
            if line_result.is_err():
                logger.info(
                    "Extra item rejected",
                    extra={"extra_item_id": request.extra_item_id, "service_id": service.id},
                )
                return line_result
            line = line_result.value
            lines.append(line)
            total += line.line_total

        return Ok(
            PriceQuote(
                unit_price=unit_price,
                base_total=base_total,
                extras=tuple(lines),
                total_price=to_money(total),
            )
        )

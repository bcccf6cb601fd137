# backend/booking_engine/services/availability_service.py
"""
Availability slot authoring.

Only establishment OWNERs may create, update or delete slots. Slots of the
same service on the same date must not overlap; the overlap query runs inside
the write transaction so two concurrent authors cannot both insert colliding
slots. A slot still referenced by PENDING or CONFIRMED bookings cannot be
deleted.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Optional

from ..core.enums import EstablishmentRole
from ..core.exceptions import (
    AvailabilityOverlapException,
    ConflictException,
    DomainException,
    ForbiddenException,
    NotFoundException,
)
from ..core.result import OK_NONE, Err, Ok, Result
from ..domain.capacity import time_range_valid
from ..models.availability import Availability
from ..models.service import Service
from ..repositories.unit_of_work import UnitOfWorkContext
from ..schemas.catalog import AvailabilityCreate, AvailabilityUpdate
from .base import PERSISTENCE_ERRORS, BaseService

if TYPE_CHECKING:
    from ..repositories.availability_repository import AvailabilityRepository
    from ..repositories.establishment_repository import EstablishmentRepository
    from ..repositories.service_repository import ServiceRepository
    from ..repositories.unit_of_work import SQLAlchemyUnitOfWork

logger = logging.getLogger(__name__)


class AvailabilityService(BaseService):
    def __init__(
        self,
        availability_repository: "AvailabilityRepository",
        service_repository: "ServiceRepository",
        establishment_repository: "EstablishmentRepository",
        unit_of_work: "SQLAlchemyUnitOfWork",
    ):
        super().__init__()
        self.availability_repository = availability_repository
        self.service_repository = service_repository
        self.establishment_repository = establishment_repository
        self.unit_of_work = unit_of_work

    @BaseService.measure_operation("create_availability")
    async def create(
        self, data: AvailabilityCreate, user_id: str
    ) -> Result[Availability, DomainException]:
        try:
            service = await self._owned_service(data.service_id, user_id)
        except PERSISTENCE_ERRORS as exc:
            return self.persistence_failure("create_availability", exc)
        if service.is_err():
            return service

        valid = time_range_valid(data.start_time, data.end_time)
        if valid.is_err():
            return valid

        fields = {
            "service_id": data.service_id,
            "date": data.specific_date,
            "start_time": data.start_time,
            "end_time": data.end_time,
            "capacity": data.capacity,
            "price": data.price,
            "is_recurring": data.is_recurring,
        }

        async def work(ctx: UnitOfWorkContext) -> Result[Availability, DomainException]:
            overlap = await self._reject_overlap(ctx, fields)
            if overlap.is_err():
                return overlap
            slot = await ctx.availability_repository.create(**fields)
            return Ok(slot)

        result = await self.unit_of_work.execute(work)
        if result.is_ok():
            self.log_operation("create_availability", availability_id=result.value.id)
        return result

    @BaseService.measure_operation("update_availability")
    async def update(
        self, availability_id: str, data: AvailabilityUpdate, user_id: str
    ) -> Result[Availability, DomainException]:
        try:
            existing = await self.availability_repository.get_by_id(availability_id)
            if existing is None:
                return Err(NotFoundException("Availability"))
            service = await self._owned_service(existing.service_id, user_id)
        except PERSISTENCE_ERRORS as exc:
            return self.persistence_failure("update_availability", exc)
        if service.is_err():
            return service

        changes = data.model_dump(exclude_unset=True)
        if "specific_date" in changes:
            changes["date"] = changes.pop("specific_date")
        merged = {
            "service_id": existing.service_id,
            "date": changes.get("date", existing.date),
            "start_time": changes.get("start_time", existing.start_time),
            "end_time": changes.get("end_time", existing.end_time),
        }
        valid = time_range_valid(merged["start_time"], merged["end_time"])
        if valid.is_err():
            return valid

        async def work(ctx: UnitOfWorkContext) -> Result[Availability, DomainException]:
            overlap = await self._reject_overlap(ctx, merged, exclude_id=availability_id)
            if overlap.is_err():
                return overlap
            slot = await ctx.availability_repository.update(availability_id, **changes)
            if slot is None:
                return Err(NotFoundException("Availability"))
            return Ok(slot)

        result = await self.unit_of_work.execute(work)
        if result.is_ok():
            self.log_operation("update_availability", availability_id=availability_id)
        return result

    @BaseService.measure_operation("delete_availability")
    async def delete(self, availability_id: str, user_id: str) -> Result[None, DomainException]:
        try:
            existing = await self.availability_repository.get_by_id(availability_id)
            if existing is None:
                return Err(NotFoundException("Availability"))
            service = await self._owned_service(existing.service_id, user_id)
        except PERSISTENCE_ERRORS as exc:
            return self.persistence_failure("delete_availability", exc)
        if service.is_err():
            return service

        async def work(ctx: UnitOfWorkContext) -> Result[None, DomainException]:
            if await ctx.availability_repository.has_active_bookings(availability_id):
                return Err(ConflictException("Cannot delete availability with active bookings"))
            if not await ctx.availability_repository.delete(availability_id):
                return Err(NotFoundException("Availability"))
            return OK_NONE

        result = await self.unit_of_work.execute(work)
        if result.is_ok():
            self.log_operation("delete_availability", availability_id=availability_id)
        return result

    async def _owned_service(self, service_id: str, user_id: str) -> Result[Service, DomainException]:
        service = await self.service_repository.get_by_id(service_id)
        if service is None:
            return Err(NotFoundException("Service"))
        role = await self.establishment_repository.get_user_role(user_id, service.establishment_id)
        if role != EstablishmentRole.OWNER.value:
            return Err(ForbiddenException("Only establishment owners can manage availability"))
        return Ok(service)

    async def _reject_overlap(
        self,
        ctx: UnitOfWorkContext,
        slot: Dict[str, Any],
        exclude_id: Optional[str] = None,
    ) -> Result[None, DomainException]:
        overlapping = await ctx.availability_repository.find_overlapping(
            slot["service_id"],
            slot["date"],
            slot["start_time"],
            slot["end_time"],
            exclude_id=exclude_id,
        )
        if overlapping:
            logger.info(
                "Availability overlap rejected",
                extra={"service_id": slot["service_id"], "conflicting_id": overlapping[0].id},
            )
            return Err(
                AvailabilityOverlapException(
                    slot["date"].isoformat(), f"{slot['start_time']}-{slot['end_time']}"
                )
            )
        return OK_NONE

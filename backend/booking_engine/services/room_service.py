# backend/booking_engine/services/room_service.py
"""
Room management for HOTEL services.

OWNERs create, update and delete rooms. Room numbers are unique per service.
A room that still holds a booking (any status other than CANCELLED,
CHECKED_OUT or NO_SHOW) can neither be deleted nor be put back to AVAILABLE.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..core.enums import EstablishmentRole, RoomStatus, ServiceType
from ..core.exceptions import ConflictException, DomainException, ForbiddenException, NotFoundException
from ..core.result import OK_NONE, Err, Ok, Result
from ..models.room import Room
from ..models.service import Service
from ..repositories.unit_of_work import UnitOfWorkContext
from ..schemas.catalog import RoomCreate, RoomUpdate
from .base import PERSISTENCE_ERRORS, BaseService

if TYPE_CHECKING:
    from ..repositories.establishment_repository import EstablishmentRepository
    from ..repositories.room_repository import RoomRepository
    from ..repositories.service_repository import ServiceRepository
    from ..repositories.unit_of_work import SQLAlchemyUnitOfWork

logger = logging.getLogger(__name__)


class RoomService(BaseService):
    def __init__(
        self,
        room_repository: "RoomRepository",
        service_repository: "ServiceRepository",
        establishment_repository: "EstablishmentRepository",
        unit_of_work: "SQLAlchemyUnitOfWork",
    ):
        super().__init__()
        self.room_repository = room_repository
        self.service_repository = service_repository
        self.establishment_repository = establishment_repository
        self.unit_of_work = unit_of_work

    @BaseService.measure_operation("create_room")
    async def create(self, data: RoomCreate, user_id: str) -> Result[Room, DomainException]:
        try:
            service = await self._owned_service(data.service_id, user_id)
        except PERSISTENCE_ERRORS as exc:
            return self.persistence_failure("create_room", exc)
        if service.is_err():
            return service
        if service.value.type != ServiceType.HOTEL.value:
            return Err(ConflictException("Rooms can only be added to hotel services"))

        async def work(ctx: UnitOfWorkContext) -> Result[Room, DomainException]:
            if await ctx.room_repository.number_exists(data.service_id, data.number):
                return Err(
                    ConflictException(f"Room number {data.number} already exists for this service")
                )
            room = await ctx.room_repository.create(
                service_id=data.service_id,
                number=data.number,
                floor=data.floor,
                description=data.description,
                status=data.status.value,
            )
            return Ok(room)

        result = await self.unit_of_work.execute(work)
        if result.is_ok():
            self.log_operation("create_room", room_id=result.value.id, service_id=data.service_id)
        return result

    @BaseService.measure_operation("update_room")
    async def update(
        self, room_id: str, data: RoomUpdate, user_id: str
    ) -> Result[Room, DomainException]:
        try:
            room = await self.room_repository.get_by_id(room_id)
            if room is None:
                return Err(NotFoundException("Room"))
            service = await self._owned_service(room.service_id, user_id)
        except PERSISTENCE_ERRORS as exc:
            return self.persistence_failure("update_room", exc)
        if service.is_err():
            return service

        changes = data.model_dump(exclude_unset=True)
        if changes.get("status") is not None:
            changes["status"] = RoomStatus(changes["status"]).value
        service_id = room.service_id

        async def work(ctx: UnitOfWorkContext) -> Result[Room, DomainException]:
            number = changes.get("number")
            if number and await ctx.room_repository.number_exists(
                service_id, number, exclude_room_id=room_id
            ):
                return Err(ConflictException(f"Room number {number} already exists for this service"))
            releasing = changes.get("status") == RoomStatus.AVAILABLE.value
            if releasing and await ctx.room_repository.has_active_bookings(room_id):
                return Err(
                    ConflictException("Cannot set room to AVAILABLE while it has active bookings")
                )
            updated = await ctx.room_repository.update(room_id, **changes)
            if updated is None:
                return Err(NotFoundException("Room"))
            return Ok(updated)

        result = await self.unit_of_work.execute(work)
        if result.is_ok():
            self.log_operation("update_room", room_id=room_id)
        return result

    @BaseService.measure_operation("delete_room")
    async def delete(self, room_id: str, user_id: str) -> Result[None, DomainException]:
        try:
            room = await self.room_repository.get_by_id(room_id)
            if room is None:
                return Err(NotFoundException("Room"))
            service = await self._owned_service(room.service_id, user_id)
        except PERSISTENCE_ERRORS as exc:
            return self.persistence_failure("delete_room", exc)
        if service.is_err():
            return service

        async def work(ctx: UnitOfWorkContext) -> Result[None, DomainException]:
            if await ctx.room_repository.has_active_bookings(room_id):
                return Err(ConflictException("Cannot delete a room with active bookings"))
            if not await ctx.room_repository.delete(room_id):
                return Err(NotFoundException("Room"))
            return OK_NONE

        result = await self.unit_of_work.execute(work)
        if result.is_ok():
            self.log_operation("delete_room", room_id=room_id)
        return result

    async def _owned_service(self, service_id: str, user_id: str) -> Result[Service, DomainException]:
        service = await self.service_repository.get_by_id(service_id)
        if service is None:
            return Err(NotFoundException("Service"))
        role = await self.establishment_repository.get_user_role(user_id, service.establishment_id)
        if role != EstablishmentRole.OWNER.value:
            return Err(ForbiddenException("Only establishment owners can manage rooms"))
        return Ok(service)

# backend/booking_engine/routes/v1/catalog.py
"""
Availability and room management routes - API v1

Mounted under /api/v1 by main.py. Establishment owners only; the services
enforce the role.

Endpoints:
    POST /availability - Create a slot
    PATCH /availability/{availability_id} - Update a slot
    DELETE /availability/{availability_id} - Delete a slot
    POST /rooms - Create a hotel room
    PATCH /rooms/{room_id} - Update a room
    DELETE /rooms/{room_id} - Delete a room
"""

import logging

from fastapi import APIRouter, Depends, Response, status

from ...api.dependencies import get_availability_service, get_current_user_id, get_room_service
from ...schemas.catalog import (
    AvailabilityCreate,
    AvailabilityResponse,
    AvailabilityUpdate,
    RoomCreate,
    RoomResponse,
    RoomUpdate,
)
from ...services.availability_service import AvailabilityService
from ...services.room_service import RoomService
from .bookings import handle_domain_exception

logger = logging.getLogger(__name__)

router = APIRouter(tags=["catalog-v1"])


@router.post(
    "/availability", response_model=AvailabilityResponse, status_code=status.HTTP_201_CREATED
)
async def create_availability(
    payload: AvailabilityCreate,
    user_id: str = Depends(get_current_user_id),
    availability_service: AvailabilityService = Depends(get_availability_service),
) -> AvailabilityResponse:
    result = await availability_service.create(payload, user_id)
    if result.is_err():
        handle_domain_exception(result.error)
    return AvailabilityResponse.model_validate(result.value)


@router.patch("/availability/{availability_id}", response_model=AvailabilityResponse)
async def update_availability(
    availability_id: str,
    payload: AvailabilityUpdate,
    user_id: str = Depends(get_current_user_id),
    availability_service: AvailabilityService = Depends(get_availability_service),
) -> AvailabilityResponse:
    result = await availability_service.update(availability_id, payload, user_id)
    if result.is_err():
        handle_domain_exception(result.error)
    return AvailabilityResponse.model_validate(result.value)


@router.delete("/availability/{availability_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_availability(
    availability_id: str,
    user_id: str = Depends(get_current_user_id),
    availability_service: AvailabilityService = Depends(get_availability_service),
) -> Response:
    result = await availability_service.delete(availability_id, user_id)
    if result.is_err():
        handle_domain_exception(result.error)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/rooms", response_model=RoomResponse, status_code=status.HTTP_201_CREATED)
async def create_room(
    payload: RoomCreate,
    user_id: str = Depends(get_current_user_id),
    room_service: RoomService = Depends(get_room_service),
) -> RoomResponse:
    result = await room_service.create(payload, user_id)
    if result.is_err():
        handle_domain_exception(result.error)
    return RoomResponse.model_validate(result.value)


@router.patch("/rooms/{room_id}", response_model=RoomResponse)
async def update_room(
    room_id: str,
    payload: RoomUpdate,
    user_id: str = Depends(get_current_user_id),
    room_service: RoomService = Depends(get_room_service),
) -> RoomResponse:
    result = await room_service.update(room_id, payload, user_id)
    if result.is_err():
        handle_domain_exception(result.error)
    return RoomResponse.model_validate(result.value)


@router.delete("/rooms/{room_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_room(
    room_id: str,
    user_id: str = Depends(get_current_user_id),
    room_service: RoomService = Depends(get_room_service),
) -> Response:
    result = await room_service.delete(room_id, user_id)
    if result.is_err():
        handle_domain_exception(result.error)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

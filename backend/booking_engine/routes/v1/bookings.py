# backend/booking_engine/routes/v1/bookings.py
"""
Booking routes - API v1

Versioned booking endpoints under /api/v1/bookings.
All business logic delegated to the booking services; routes only unwrap
their results.

Endpoints:
    POST / - Create a booking
    GET / - List the caller's bookings
    GET /establishments/{establishment_id} - List an establishment's bookings (owner/staff)
    GET /{booking_id} - Booking details
    POST /{booking_id}/cancel - Cancel a booking
    POST /{booking_id}/confirm - Confirm a pending booking
    POST /{booking_id}/check-in - Check a hotel guest in
    POST /{booking_id}/check-out - Check a hotel guest out
    POST /{booking_id}/no-show - Mark a booking as no-show
"""

import logging
from typing import NoReturn, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status

from ...api.dependencies import (
    get_booking_creation_service,
    get_booking_query_service,
    get_booking_status_service,
    get_current_user_id,
)
from ...core.config import settings
from ...core.enums import BookingStatus
from ...core.exceptions import DomainException
from ...core.result import Result
from ...models.booking import Booking
from ...schemas.booking import (
    BookingListResponse,
    BookingResponse,
    CancelBookingInput,
    CreateBookingInput,
)
from ...services.booking_creation_service import BookingCreationService
from ...services.booking_query_service import BookingPage, BookingQueryService
from ...services.booking_status_service import BookingStatusService

logger = logging.getLogger(__name__)

# V1 router - no prefix here, will be added when mounting in main.py
router = APIRouter(tags=["bookings-v1"])


def handle_domain_exception(exc: DomainException) -> NoReturn:
    """Convert domain exceptions to HTTP exceptions."""
    if hasattr(exc, "to_http_exception"):
        raise exc.to_http_exception()
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


def _booking_or_raise(result: Result[Booking, DomainException]) -> BookingResponse:
    if result.is_err():
        handle_domain_exception(result.error)
    return BookingResponse.model_validate(result.value)


def _page_or_raise(result: Result[BookingPage, DomainException]) -> BookingListResponse:
    if result.is_err():
        handle_domain_exception(result.error)
    page = result.value
    return BookingListResponse(
        data=[BookingResponse.model_validate(b) for b in page.data],
        total=page.total,
        page=page.page,
        limit=page.limit,
    )


# ============================================================================
# SECTION 1: Static routes (no path parameters)
# ============================================================================


@router.post("/", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
async def create_booking(
    booking_data: CreateBookingInput,
    user_id: str = Depends(get_current_user_id),
    creation_service: BookingCreationService = Depends(get_booking_creation_service),
) -> BookingResponse:
    """Create a booking; hotel bookings also reserve a room for the stay."""
    result = await creation_service.create(booking_data, user_id)
    return _booking_or_raise(result)


@router.get("/", response_model=BookingListResponse)
async def list_my_bookings(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.default_page_size, ge=1),
    booking_status: Optional[BookingStatus] = Query(None, alias="status"),
    user_id: str = Depends(get_current_user_id),
    query_service: BookingQueryService = Depends(get_booking_query_service),
) -> BookingListResponse:
    result = await query_service.list_for_user(
        user_id, page=page, limit=limit, status=booking_status
    )
    return _page_or_raise(result)


@router.get("/establishments/{establishment_id}", response_model=BookingListResponse)
async def list_establishment_bookings(
    establishment_id: str,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.default_page_size, ge=1),
    booking_status: Optional[BookingStatus] = Query(None, alias="status"),
    user_id: str = Depends(get_current_user_id),
    query_service: BookingQueryService = Depends(get_booking_query_service),
) -> BookingListResponse:
    """Every booking of an establishment (owner or staff only)."""
    result = await query_service.list_for_establishment(
        establishment_id, user_id, page=page, limit=limit, status=booking_status
    )
    return _page_or_raise(result)


# ============================================================================
# SECTION 2: Booking routes
# ============================================================================


@router.get("/{booking_id}", response_model=BookingResponse)
async def get_booking(
    booking_id: str,
    user_id: str = Depends(get_current_user_id),
    query_service: BookingQueryService = Depends(get_booking_query_service),
) -> BookingResponse:
    result = await query_service.get_booking(booking_id, user_id)
    return _booking_or_raise(result)


@router.post("/{booking_id}/cancel", response_model=BookingResponse)
async def cancel_booking(
    booking_id: str,
    cancel_data: Optional[CancelBookingInput] = Body(None),
    user_id: str = Depends(get_current_user_id),
    status_service: BookingStatusService = Depends(get_booking_status_service),
) -> BookingResponse:
    """Cancel a confirmed booking (its customer, or establishment owner/staff)."""
    reason = cancel_data.reason if cancel_data else None
    result = await status_service.cancel(booking_id, user_id, reason=reason)
    return _booking_or_raise(result)


@router.post("/{booking_id}/confirm", response_model=BookingResponse)
async def confirm_booking(
    booking_id: str,
    user_id: str = Depends(get_current_user_id),
    status_service: BookingStatusService = Depends(get_booking_status_service),
) -> BookingResponse:
    result = await status_service.confirm(booking_id, user_id)
    return _booking_or_raise(result)


@router.post("/{booking_id}/check-in", response_model=BookingResponse)
async def check_in_booking(
    booking_id: str,
    user_id: str = Depends(get_current_user_id),
    status_service: BookingStatusService = Depends(get_booking_status_service),
) -> BookingResponse:
    result = await status_service.check_in(booking_id, user_id)
    return _booking_or_raise(result)


@router.post("/{booking_id}/check-out", response_model=BookingResponse)
async def check_out_booking(
    booking_id: str,
    user_id: str = Depends(get_current_user_id),
    status_service: BookingStatusService = Depends(get_booking_status_service),
) -> BookingResponse:
    result = await status_service.check_out(booking_id, user_id)
    return _booking_or_raise(result)


@router.post("/{booking_id}/no-show", response_model=BookingResponse)
async def mark_no_show(
    booking_id: str,
    user_id: str = Depends(get_current_user_id),
    status_service: BookingStatusService = Depends(get_booking_status_service),
) -> BookingResponse:
    """Mark booking as no-show (establishment owner/staff only)."""
    result = await status_service.mark_no_show(booking_id, user_id)
    return _booking_or_raise(result)

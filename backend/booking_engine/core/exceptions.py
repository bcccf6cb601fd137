# backend/booking_engine/core/exceptions.py
"""
Domain-specific exceptions for the booking engine.

These exceptions provide clear, business-focused error messages. The
orchestrators hand them back inside ``Err`` results instead of raising
them, and the API layer converts them to HTTP responses.
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException, status

HTTP_422_UNPROCESSABLE: int = getattr(status, "HTTP_422_UNPROCESSABLE_CONTENT", 422)


class DomainException(Exception):
    """Base exception for all domain-specific errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload

    def to_http_exception(self) -> HTTPException:
        return HTTPException(status_code=self.status_code, detail=self.to_dict())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DomainException):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.message == other.message
            and self.code == other.code
            and self.details == other.details
        )

    def __hash__(self) -> int:
        return hash((type(self), self.message, self.code))


class ValidationException(DomainException):
    """Raised when request input is malformed."""

    status_code = HTTP_422_UNPROCESSABLE

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, code=code or "VALIDATION_ERROR", details=details)


class NotFoundException(DomainException):
    """Raised when a referenced entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(
        self,
        entity: str,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.entity = entity
        super().__init__(message or f"{entity} not found", code="NOT_FOUND", details=details)


class ConflictException(DomainException):
    """Raised when a business rule would be violated by the operation."""

    status_code = status.HTTP_409_CONFLICT

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, code=code or "CONFLICT", details=details)


class UnauthorizedException(DomainException):
    """Raised when the caller is not authenticated."""

    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Not authenticated") -> None:
        super().__init__(message, code="UNAUTHORIZED")

    def to_http_exception(self) -> HTTPException:
        return HTTPException(
            status_code=self.status_code,
            detail=self.to_dict(),
            headers={"WWW-Authenticate": "Bearer"},
        )


class ForbiddenException(DomainException):
    """Raised when the caller lacks the establishment role for an action."""

    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, code="FORBIDDEN", details=details)


# Specific business exceptions


class CapacityExhaustedException(ConflictException):
    """Raised when an availability slot cannot absorb the requested quantity."""

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(
            message or "No available capacity for the requested quantity",
            code="CAPACITY_EXHAUSTED",
        )


class RoomUnavailableException(ConflictException):
    """Raised when a room cannot be assigned for the requested stay."""

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(
            message or "Room is not available for the selected dates",
            code="ROOM_UNAVAILABLE",
        )


class InvalidTransitionException(ConflictException):
    """Raised when a booking lifecycle event is not legal for its current status."""

    def __init__(self, message: str, current_status: str, event: str) -> None:
        super().__init__(
            message,
            code="INVALID_TRANSITION",
            details={"current_status": current_status, "event": event},
        )


class AvailabilityOverlapException(ConflictException):
    """Raised when an availability slot overlaps with an existing slot."""

    def __init__(self, specific_date: str, new_range: str) -> None:
        super().__init__(
            message="Time slot overlaps with an existing availability",
            code="AVAILABILITY_OVERLAP",
            details={"date": specific_date, "new_slot": new_range},
        )


class RepositoryException(Exception):
    """
    Exception raised for repository layer errors.

    This exception is used when data access operations fail,
    such as database connection issues, query failures, or
    constraint violations. It never reaches API callers directly.
    """

# backend/booking_engine/services/base.py
"""
Base Service Pattern for the booking engine.

Provides common functionality for all service classes including:
- Logging
- Persistence fault handling for read paths
- Performance monitoring

Collaborators (repositories, unit of work, clock) are always passed in by
the caller; services never build their own.
"""

from functools import wraps
import inspect
import logging
import time
from typing import Any, Awaitable, Callable, Tuple, Type, TypeVar, cast

from sqlalchemy.exc import SQLAlchemyError

from ..core.config import settings
from ..core.exceptions import ConflictException, RepositoryException
from ..core.result import Err
from ..monitoring.prometheus_metrics import prometheus_metrics

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])

# Faults that are logged and reported as a generic Conflict
PERSISTENCE_ERRORS: Tuple[Type[Exception], ...] = (RepositoryException, SQLAlchemyError)

GENERIC_PERSISTENCE_MESSAGE = "The request could not be completed, please try again"


class BaseService:
    """
    Base class for all service layer components.

    Public operations return ``Ok``/``Err`` results. ``measure_operation``
    records both raised exceptions and ``Err`` values as failures.
    """

    def __init__(self) -> None:
        self.logger = logging.getLogger(self.__class__.__name__)

    @staticmethod
    def measure_operation(operation_name: str) -> Callable[[F], F]:
        """
        Decorator to measure async operation performance.

        Usage:
            @BaseService.measure_operation("create_booking")
            async def create(self, data, user_id):
                ...
        """

        def decorator(func: F) -> F:
            if not inspect.iscoroutinefunction(func):
                raise TypeError(f"{func.__name__} must be a coroutine function")

            @wraps(func)
            async def async_wrapper(self, *args, **kwargs):
                start_time = time.perf_counter()
                success = False
                error_type = None
                outcome = "exception"

                try:
                    result = await func(self, *args, **kwargs)
                    if isinstance(result, Err):
                        error_type = type(result.error).__name__
                        outcome = getattr(result.error, "code", error_type)
                    else:
                        success = True
                        outcome = "success"
                    return result
                except Exception as e:
                    error_type = type(e).__name__
                    raise
                finally:
                    elapsed = time.perf_counter() - start_time
                    if elapsed > settings.slow_operation_threshold_seconds:
                        self.logger.warning(
                            f"Slow operation detected: {operation_name} took {elapsed:.2f}s"
                        )

                    try:
                        prometheus_metrics.record_service_operation(
                            service=self.__class__.__name__,
                            operation=operation_name,
                            duration=elapsed,
                            status="success" if success else "error",
                            error_type=error_type,
                        )
                        prometheus_metrics.record_booking_outcome(operation_name, outcome)
                    except Exception as metrics_error:
                        # Metrics collection must never break the operation
                        self.logger.debug(f"Metrics recording failed: {metrics_error}")

            return cast(F, async_wrapper)

        return decorator

    def persistence_failure(self, operation: str, exc: Exception) -> Err[ConflictException]:
        """
        Log an unexpected persistence fault and hide it behind a generic Conflict.

        The underlying error is logged, never returned to the caller.
        """
        self.logger.error(
            f"Persistence failure during {operation}: {str(exc)}",
            extra={"operation": operation, "error_type": type(exc).__name__},
        )
        return Err(ConflictException(GENERIC_PERSISTENCE_MESSAGE, code="PERSISTENCE_CONFLICT"))

    def log_operation(self, operation: str, **context: Any) -> None:
        self.logger.info(f"Operation: {operation}", extra={"operation": operation, **context})

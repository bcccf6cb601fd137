# backend/tests/test_base_service.py
import pytest

from booking_engine.core.exceptions import ConflictException, RepositoryException
from booking_engine.core.result import Err, Ok
from booking_engine.monitoring.prometheus_metrics import REGISTRY
from booking_engine.services.base import BaseService


class MeasuredSampleService(BaseService):
    @BaseService.measure_operation("sample_ok")
    async def succeed(self):
        return Ok("done")

    @BaseService.measure_operation("sample_err")
    async def refuse(self):
        return Err(ConflictException("No seats left", code="CAPACITY_EXHAUSTED"))

    @BaseService.measure_operation("sample_raise")
    async def explode(self):
        raise RuntimeError("boom")


def _sample(name, **labels):
    return REGISTRY.get_sample_value(name, labels) or 0.0


def _outcome_count(operation, outcome):
    return _sample("booking_engine_booking_outcomes_total", operation=operation, outcome=outcome)


def _operation_count(operation, status):
    return _sample(
        "booking_engine_service_operations_total",
        service="MeasuredSampleService",
        operation=operation,
        status=status,
    )


@pytest.mark.asyncio
async def test_ok_and_err_results_are_counted_separately():
    service = MeasuredSampleService()
    ok_before = _outcome_count("sample_ok", "success")
    err_before = _outcome_count("sample_err", "CAPACITY_EXHAUSTED")
    failed_before = _operation_count("sample_err", "error")

    assert (await service.succeed()).value == "done"
    assert (await service.refuse()).is_err()

    assert _operation_count("sample_ok", "success") >= 1
    assert _operation_count("sample_err", "error") == failed_before + 1
    assert _outcome_count("sample_ok", "success") == ok_before + 1
    assert _outcome_count("sample_err", "CAPACITY_EXHAUSTED") == err_before + 1


@pytest.mark.asyncio
async def test_raised_exceptions_propagate_and_count_as_failures():
    service = MeasuredSampleService()
    failures_before = _sample(
        "booking_engine_errors_total",
        service="MeasuredSampleService",
        operation="sample_raise",
        error_type="RuntimeError",
    )

    with pytest.raises(RuntimeError):
        await service.explode()

    assert _outcome_count("sample_raise", "exception") >= 1
    assert (
        _sample(
            "booking_engine_errors_total",
            service="MeasuredSampleService",
            operation="sample_raise",
            error_type="RuntimeError",
        )
        == failures_before + 1
    )


def test_only_coroutines_can_be_measured():
    with pytest.raises(TypeError, match="must be a coroutine function"):

        @BaseService.measure_operation("sync_call")
        def not_async(self):
            return None


def test_persistence_failure_hides_driver_error():
    result = BaseService().persistence_failure("get_booking", RepositoryException("disk I/O"))

    assert result.error.code == "PERSISTENCE_CONFLICT"
    assert result.error.status_code == 409
    assert "disk" not in result.error.message

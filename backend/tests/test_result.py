from booking_engine.core.exceptions import ConflictException
from booking_engine.core.result import OK_NONE, Err, Ok


def test_ok_exposes_value():
    result = Ok(3)
    assert result.is_ok() and not result.is_err()
    assert result.value == 3


def test_err_exposes_error():
    error = ConflictException("Nope")
    result = Err(error)
    assert result.is_err() and not result.is_ok()
    assert result.error is error


def test_results_compare_by_content():
    assert Ok(3) == Ok(3)
    assert Ok(3) != Err(3)


def test_ok_none_singleton():
    assert OK_NONE.is_ok()
    assert OK_NONE.value is None

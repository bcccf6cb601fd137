# backend/tests/test_unit_of_work.py
import pytest
from sqlalchemy.exc import OperationalError

from booking_engine.core.exceptions import ConflictException
from booking_engine.core.result import Err, Ok
from booking_engine.models.availability import Availability
from booking_engine.models.establishment import Establishment
from support import reload


@pytest.mark.asyncio
async def test_ok_result_commits(unit_of_work, session_factory):
    async def work(ctx):
        establishment = Establishment(name="Mountain Lodge")
        ctx.session.add(establishment)
        await ctx.session.flush()
        return Ok(establishment.id)

    result = await unit_of_work.execute(work)

    stored = await reload(session_factory, Establishment, result.value)
    assert stored.name == "Mountain Lodge"


@pytest.mark.asyncio
async def test_err_result_rolls_back_earlier_writes(unit_of_work, session_factory, catalog):
    async def work(ctx):
        assert await ctx.availability_repository.decrement_capacity(catalog.spa_slot_id, 1)
        return Err(ConflictException("Changed my mind"))

    result = await unit_of_work.execute(work)

    assert result.error.message == "Changed my mind"
    slot = await reload(session_factory, Availability, catalog.spa_slot_id)
    assert slot.capacity == 1


@pytest.mark.asyncio
async def test_database_fault_becomes_generic_conflict(unit_of_work, session_factory, catalog):
    async def work(ctx):
        await ctx.availability_repository.decrement_capacity(catalog.spa_slot_id, 1)
        raise OperationalError("UPDATE availability", {}, Exception("database is locked"))

    result = await unit_of_work.execute(work)

    assert result.error.status_code == 409
    assert result.error.code == "PERSISTENCE_CONFLICT"
    assert "locked" not in result.error.message
    slot = await reload(session_factory, Availability, catalog.spa_slot_id)
    assert slot.capacity == 1


@pytest.mark.asyncio
async def test_programming_errors_propagate(unit_of_work):
    async def work(ctx):
        raise KeyError("missing")

    with pytest.raises(KeyError):
        await unit_of_work.execute(work)

# backend/booking_engine/api/dependencies/database.py
"""
Database-related dependencies.

The engine and session factory are created once per application in
``main.create_app`` and kept on ``app.state``; nothing here is a module-level
singleton.
"""

from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker


def get_session_factory(request: Request) -> async_sessionmaker[AsyncSession]:
    return request.app.state.session_factory


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Get a read session for the current request.

    Yields:
        Async database session that will be closed after use
    """
    async with get_session_factory(request)() as session:
        yield session

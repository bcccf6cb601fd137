"""
Health check endpoint for monitoring and load balancer probes.
"""

import logging
from typing import Dict

from fastapi import APIRouter, Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(request: Request) -> Dict[str, str]:
    """Report service liveness and whether the database answers."""
    database = "ok"
    try:
        async with request.app.state.session_factory() as session:
            await session.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.warning("Health check database probe failed", exc_info=True)
        database = "unavailable"
    return {"status": "healthy" if database == "ok" else "degraded", "database": database}

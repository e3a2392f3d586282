"""
Health check endpoints.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from crud_shared.config.logging import get_logger
from crud_shared.config.settings import settings
from crud_shared.infrastructure.db import get_session

logger = get_logger(__name__)

router = APIRouter(prefix=settings.api_prefix, tags=["health"])


@router.get("/health")
async def health_check():
    """
    Basic health check endpoint.
    Returns service status without checking dependencies.
    """
    return {
        "status": "healthy",
        "service": settings.service_name,
        "environment": settings.environment,
    }


@router.get("/health/detailed")
async def detailed_health_check(session: AsyncSession = Depends(get_session)):
    """
    Health check that verifies database connectivity.
    Returns 503 when the database cannot be reached.
    """
    checks = {
        "status": "healthy",
        "service": settings.service_name,
        "dependencies": {},
    }

    try:
        await session.execute(text("SELECT 1"))
        checks["dependencies"]["database"] = {"status": "healthy"}
    except Exception as e:
        logger.warning("Database health check failed", error=str(e))
        checks["dependencies"]["database"] = {"status": "unhealthy", "error": str(e)}
        checks["status"] = "degraded"
        return JSONResponse(content=checks, status_code=503)

    return checks

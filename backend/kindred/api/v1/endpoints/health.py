from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from kindred import __version__
from kindred.core.config import settings
from kindred.core.database import get_db
from kindred.core.logging_config import logger

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check():
    return {"status": "healthy", "service": settings.APP_NAME, "version": __version__}


@router.get("/health/ready")
async def readiness_check(db: AsyncSession = Depends(get_db)):
    """Ready when the database answers"""
    try:
        await db.execute(text("SELECT 1"))
    except Exception as e:
        logger.log_error_with_context(e, "readiness check")
        return {"status": "unavailable", "database": "error"}
    return {"status": "ready", "database": "ok"}

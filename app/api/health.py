"""Health check endpoint"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app import config
from app.db import get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("/")
async def health_check(db: AsyncSession = Depends(get_db)):
    """
    Report the configured task storage backend and whether the database
    answers. Profiles always live in the SQL database, so it is checked
    regardless of the task backend.

    Returns 503 when the database cannot be reached.
    """
    try:
        await db.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError as e:
        logger.warning(f"Health check: database unavailable: {e}")
        database = "unavailable"

    body = {
        "status": "healthy" if database == "ok" else "degraded",
        "service": "task-tracker-backend",
        "storage_backend": config.TASK_STORAGE_BACKEND,
        "database": database,
    }
    return JSONResponse(status_code=200 if database == "ok" else 503, content=body)

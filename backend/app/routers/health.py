import logging
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.database import get_session

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/api/v1/health")
async def health(session: AsyncSession = Depends(get_session)):
    """Liveness plus a round trip to the database the tills write to."""
    try:
        await session.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Health check database error: {e}")
        return JSONResponse(
            status_code=503,
            content={"status": "degraded", "database": "unreachable"}
        )
    return {"status": "ok", "database": "ok"}

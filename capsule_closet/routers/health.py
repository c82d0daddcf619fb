import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from capsule_closet.core.db import get_session

router = APIRouter(tags=["health"])
logger = logging.getLogger("uvicorn.error")


@router.get("/health")
async def health(session: AsyncSession = Depends(get_session)):
    try:
        await session.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning("health: database unreachable reason=%s", e)
        return {"status": "degraded", "database": False}
    return {"status": "ok", "database": True}

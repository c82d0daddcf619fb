import logging
from typing import Any, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from capsule_closet.models.models import Event

logger = logging.getLogger("uvicorn.error")


async def record_event(
    session: AsyncSession,
    user_id: str,
    event_type: str,
    metadata: Optional[Dict[str, Any]] = None,
    entity_id: Optional[str] = None,
) -> bool:
    """Append an analytics event inside a savepoint.

    A failed write is logged and rolled back on its own; the caller's
    transaction stays usable. Returns whether the event was stored.
    """
    try:
        async with session.begin_nested():
            session.add(Event(user_id=user_id, type=event_type, entity_id=entity_id, meta=metadata or {}))
    except SQLAlchemyError as e:
        logger.warning("events: insert failed type=%s user_id=%s reason=%s", event_type, user_id, e)
        return False
    return True

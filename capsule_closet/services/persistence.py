import logging
from typing import List, Optional, Sequence
from uuid import uuid4

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from capsule_closet.models.models import Capsule as CapsuleModel, Outfit as OutfitModel
from capsule_closet.services.styling import ClosetItem, GapSpec, Outfit

logger = logging.getLogger("uvicorn.error")


def _gap_payload(gaps: Sequence[GapSpec]) -> tuple[list[dict], dict[str, str]]:
    specs = [{"category": g.category, "color": g.color, "silhouette": g.silhouette} for g in gaps]
    reasons = {f"gap_{i}": g.reason for i, g in enumerate(gaps)}
    return specs, reasons


async def save_capsule(
    session: AsyncSession, user_id: str, selected: Sequence[ClosetItem], gaps: Sequence[GapSpec]
) -> Optional[CapsuleModel]:
    """Upsert the user's single capsule row. Returns None when the write fails."""
    specs, reasons = _gap_payload(gaps)
    owned = [it.id for it in selected]
    try:
        async with session.begin_nested():
            res = await session.execute(select(CapsuleModel).where(CapsuleModel.user_id == user_id))
            capsule = res.scalar_one_or_none()
            if capsule is None:
                capsule = CapsuleModel(id=str(uuid4()), user_id=user_id)
                session.add(capsule)
            capsule.owned_item_ids = owned
            capsule.gap_specs = specs
            capsule.reasons = reasons
    except SQLAlchemyError as e:
        logger.error("capsule: save failed user_id=%s reason=%s", user_id, e)
        return None
    return capsule


async def save_outfits(session: AsyncSession, user_id: str, outfits: Sequence[Outfit]) -> List[str]:
    """Insert each outfit in its own savepoint.

    A failed insert is logged and skipped; the rest are still written. Stored
    outfits take their row id, and the list of stored ids is returned.
    """
    stored: List[str] = []
    for outfit in outfits:
        row = OutfitModel(
            id=str(uuid4()),
            user_id=user_id,
            item_ids=outfit.item_ids,
            occasion=outfit.occasion,
            score=outfit.score,
            saved=outfit.saved,
            worn=outfit.worn,
            meta=outfit.metadata,
        )
        try:
            async with session.begin_nested():
                session.add(row)
        except SQLAlchemyError as e:
            logger.error("outfits: save failed user_id=%s outfit=%s reason=%s", user_id, outfit.id, e)
            continue
        outfit.id = row.id
        stored.append(row.id)
    return stored

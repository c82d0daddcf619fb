import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from capsule_closet.auth.deps import get_current_user_id
from capsule_closet.core.config import settings
from capsule_closet.core.db import get_session
from capsule_closet.models.models import Capsule as CapsuleModel
from capsule_closet.routers.closet_helpers import CLOSET_PATH, _item_out, _load_catalog
from capsule_closet.schemas.capsules import CapsuleOut, GapSpecOut, StoredCapsuleOut
from capsule_closet.services.events import record_event
from capsule_closet.services.persistence import save_capsule
from capsule_closet.services.styling import generate_capsule

router = APIRouter(prefix="/capsules", tags=["capsules"])
logger = logging.getLogger("uvicorn.error")


@router.post("/generate", response_model=CapsuleOut)
async def generate(
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    """
    Build the capsule from every confirmed item plus up to six gaps.
    Closets below the minimum size are sent back to the closet step instead.
    """
    catalog = await _load_catalog(session, user_id)
    if catalog.size < settings.CAPSULE_MIN_ITEMS:
        logger.info("capsule: redirect user_id=%s items=%d", user_id, catalog.size)
        return CapsuleOut(status="needs_items", redirect_to=CLOSET_PATH)

    selected, gaps = generate_capsule(catalog.items)
    stored = await save_capsule(session, user_id, selected, gaps)
    await record_event(
        session,
        user_id,
        "generate_capsule",
        {"total_items": catalog.size, "selected_items": len(selected), "gaps_count": len(gaps)},
    )
    await session.commit()
    logger.info("capsule: generated user_id=%s items=%d gaps=%d", user_id, len(selected), len(gaps))
    return CapsuleOut(
        items=[_item_out(it) for it in selected],
        gaps=[GapSpecOut(category=g.category, color=g.color, silhouette=g.silhouette, reason=g.reason) for g in gaps],
        saved=stored is not None,
    )


@router.get("/current", response_model=StoredCapsuleOut)
async def current_capsule(
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    res = await session.execute(select(CapsuleModel).where(CapsuleModel.user_id == user_id))
    capsule = res.scalar_one_or_none()
    if not capsule:
        raise HTTPException(status_code=404, detail="capsule_not_found")
    reasons = capsule.reasons or {}
    gaps = [
        GapSpecOut(**spec, reason=reasons.get(f"gap_{i}"))
        for i, spec in enumerate(capsule.gap_specs or [])
    ]
    return StoredCapsuleOut(
        id=capsule.id,
        owned_item_ids=list(capsule.owned_item_ids or []),
        gaps=gaps,
        updated_at=capsule.updated_at.isoformat() if capsule.updated_at else None,
    )

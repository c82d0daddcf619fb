import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from capsule_closet.auth.deps import get_current_user_id
from capsule_closet.core.config import settings
from capsule_closet.core.db import get_session
from capsule_closet.models.models import Outfit as OutfitModel
from capsule_closet.routers.closet_helpers import CLOSET_PATH, _load_catalog
from capsule_closet.routers.outfits_helpers import _generated_out, _get_owned_outfit, _stored_out
from capsule_closet.schemas.outfits import OutfitFeedOut, OutfitOut
from capsule_closet.services.events import record_event
from capsule_closet.services.persistence import save_outfits
from capsule_closet.services.styling import generate_outfits

router = APIRouter(prefix="/outfits", tags=["outfits"])
logger = logging.getLogger("uvicorn.error")


@router.post("/generate", response_model=OutfitFeedOut)
async def generate(
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    """
    Generate the daily feed: up to 10 looks, best score first.
    Each look is stored on its own; a failed write skips only that look.
    """
    catalog = await _load_catalog(session, user_id)
    if catalog.size < settings.OUTFITS_MIN_ITEMS:
        logger.info("outfits: redirect user_id=%s items=%d", user_id, catalog.size)
        return OutfitFeedOut(status="needs_items", redirect_to=CLOSET_PATH)

    outfits = generate_outfits(catalog.items)
    stored = await save_outfits(session, user_id, outfits)
    await record_event(
        session,
        user_id,
        "generate_outfits",
        {"total_outfits": len(outfits), "total_items": catalog.size},
    )
    await session.commit()
    logger.info("outfits: generated user_id=%s outfits=%d stored=%d", user_id, len(outfits), len(stored))
    stored_ids = set(stored)
    return OutfitFeedOut(outfits=[_generated_out(o, o.id in stored_ids) for o in outfits], stored=len(stored))


@router.get("", response_model=list[OutfitOut])
async def list_outfits(
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    res = await session.execute(
        select(OutfitModel)
        .where(OutfitModel.user_id == user_id)
        .order_by(OutfitModel.score.desc(), OutfitModel.created_at.desc())
    )
    catalog = await _load_catalog(session, user_id)
    return [_stored_out(o, catalog) for o in res.scalars().all()]


@router.post("/{outfit_id}/save", response_model=OutfitOut)
async def toggle_save(
    outfit_id: str,
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    outfit = await _get_owned_outfit(session, user_id, outfit_id)
    outfit.saved = not outfit.saved
    await record_event(
        session,
        user_id,
        "save_look",
        {"outfit_id": outfit.id, "action": "toggle_save"},
        entity_id=outfit.id,
    )
    await session.commit()
    return _stored_out(outfit, await _load_catalog(session, user_id))


@router.post("/{outfit_id}/wear", response_model=OutfitOut)
async def mark_worn(
    outfit_id: str,
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    """Mark an outfit worn. One-way; repeating it changes nothing."""
    outfit = await _get_owned_outfit(session, user_id, outfit_id)
    if not outfit.worn:
        outfit.worn = True
        await record_event(
            session,
            user_id,
            "wear",
            {"outfit_id": outfit.id, "occasion": outfit.occasion},
            entity_id=outfit.id,
        )
        await session.commit()
    return _stored_out(outfit, await _load_catalog(session, user_id))


@router.post("/{outfit_id}/swap", status_code=501)
async def swap(
    outfit_id: str,
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    outfit = await _get_owned_outfit(session, user_id, outfit_id)
    await record_event(session, user_id, "swap", {"outfit_id": outfit.id}, entity_id=outfit.id)
    await session.commit()
    raise HTTPException(status_code=501, detail="swap_unavailable")

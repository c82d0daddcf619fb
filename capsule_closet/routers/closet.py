import logging
from dataclasses import asdict
from typing import List

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from capsule_closet.auth.deps import get_current_user_id
from capsule_closet.core.config import settings
from capsule_closet.core.db import get_session
from capsule_closet.models.models import ClosetItem as ClosetItemModel
from capsule_closet.routers.closet_helpers import _closet_rows, _count_items, _item_out
from capsule_closet.schemas.closet import ClosetItemCreate, ClosetItemOut, ClosetOut, UploadBatchOut, UploadResultOut
from capsule_closet.services.events import record_event
from capsule_closet.services.uploads import IncomingFile, process_uploads, remaining_slots

router = APIRouter(prefix="/closet", tags=["closet"])
logger = logging.getLogger("uvicorn.error")


@router.get("/items", response_model=ClosetOut)
async def list_closet(
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    rows = await _closet_rows(session, user_id)
    return ClosetOut(
        items=[_item_out(r) for r in rows],
        confirmed_count=len(rows),
        max_items=settings.CLOSET_MAX_ITEMS,
        can_generate_capsule=len(rows) >= settings.CAPSULE_MIN_ITEMS,
    )


@router.post("/uploads", response_model=UploadBatchOut)
async def upload_photos(
    files: List[UploadFile] = File(...),
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    """
    Upload closet photos. Files are processed in submission order; each one
    independently ends in `tagging` (stored, ready to tag) or `error`.
    Non-image files and files beyond the closet cap are dropped.
    """
    existing = await _count_items(session, user_id)
    incoming = []
    for f in files:
        incoming.append(IncomingFile(filename=f.filename or "", content_type=f.content_type or "", data=await f.read()))
    results, dropped = process_uploads(user_id, incoming, existing)
    return UploadBatchOut(
        results=[UploadResultOut(**asdict(r)) for r in results],
        dropped=dropped,
        remaining_slots=remaining_slots(existing),
    )


@router.post("/items", response_model=ClosetItemOut)
async def confirm_item(
    payload: ClosetItemCreate,
    session: AsyncSession = Depends(get_session),
    user_id: str = Depends(get_current_user_id),
):
    """Confirm a tagged photo as a closet item."""
    if await _count_items(session, user_id) >= settings.CLOSET_MAX_ITEMS:
        raise HTTPException(status_code=409, detail="closet_full")
    item = ClosetItemModel(
        user_id=user_id,
        image_url=payload.image_url,
        category=payload.category,
        subcategory=payload.subcategory or "",
        color=payload.color,
        silhouette=payload.silhouette,
        season=payload.season,
    )
    session.add(item)
    try:
        await session.flush()
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error("closet: confirm failed user_id=%s reason=%s", user_id, e)
        raise HTTPException(status_code=503, detail="closet_write_failed") from e
    await record_event(
        session,
        user_id,
        "confirm_tag",
        {"category": item.category, "color": item.color, "silhouette": item.silhouette},
        entity_id=item.id,
    )
    await session.commit()
    logger.info("closet: confirmed item_id=%s user_id=%s category=%s", item.id, user_id, item.category)
    return _item_out(item)

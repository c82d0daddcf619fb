from __future__ import annotations

from typing import Optional

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from capsule_closet.models.models import Outfit as OutfitModel
from capsule_closet.routers.closet_helpers import _iso, _item_out
from capsule_closet.schemas.outfits import OutfitOut
from capsule_closet.services.styling import CatalogSnapshot, Outfit


async def _get_owned_outfit(session: AsyncSession, user_id: str, outfit_id: str) -> OutfitModel:
    res = await session.execute(select(OutfitModel).where(OutfitModel.id == outfit_id, OutfitModel.user_id == user_id))
    outfit = res.scalar_one_or_none()
    if not outfit:
        raise HTTPException(status_code=404, detail="outfit_not_found")
    return outfit


def _generated_out(outfit: Outfit, stored: bool = True) -> OutfitOut:
    return OutfitOut(
        id=outfit.id,
        items=[_item_out(it) for it in outfit.items],
        item_ids=outfit.item_ids,
        occasion=outfit.occasion,
        score=outfit.score,
        saved=outfit.saved,
        worn=outfit.worn,
        wear_enabled=not outfit.worn,
        stored=stored,
        metadata=outfit.metadata,
    )


def _stored_out(row: OutfitModel, catalog: Optional[CatalogSnapshot] = None) -> OutfitOut:
    item_ids = list(row.item_ids or [])
    items = []
    if catalog is not None:
        # items removed from the closet since generation are left out
        items = [_item_out(it) for it in (catalog.find(i) for i in item_ids) if it is not None]
    return OutfitOut(
        id=row.id,
        items=items,
        item_ids=item_ids,
        occasion=row.occasion,
        score=row.score,
        saved=bool(row.saved),
        worn=bool(row.worn),
        wear_enabled=not row.worn,
        metadata=row.meta,
        created_at=_iso(row.created_at),
    )

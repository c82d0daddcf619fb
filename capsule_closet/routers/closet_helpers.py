from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from capsule_closet.models.models import ClosetItem as ClosetItemModel
from capsule_closet.schemas.closet import ClosetItemOut
from capsule_closet.services.styling import CatalogSnapshot

CLOSET_PATH = "/closet"


def _iso(dt: Optional[datetime]) -> Optional[str]:
    return dt.isoformat() if dt else None


def _item_out(item: Any) -> ClosetItemOut:
    """Serialize either a closet row or a catalog ClosetItem."""
    return ClosetItemOut(
        id=str(item.id),
        image_url=item.image_url or "",
        category=item.category,
        subcategory=item.subcategory or "",
        color=item.color,
        silhouette=item.silhouette or "",
        season=item.season or "all-season",
        created_at=_iso(getattr(item, "created_at", None)),
    )


async def _closet_rows(session: AsyncSession, user_id: str) -> list[ClosetItemModel]:
    res = await session.execute(
        select(ClosetItemModel)
        .where(ClosetItemModel.user_id == user_id)
        .order_by(ClosetItemModel.created_at.asc(), ClosetItemModel.id.asc())
    )
    return list(res.scalars().all())


async def _load_catalog(session: AsyncSession, user_id: str) -> CatalogSnapshot:
    return CatalogSnapshot.from_rows(user_id, await _closet_rows(session, user_id))


async def _count_items(session: AsyncSession, user_id: str) -> int:
    res = await session.execute(select(func.count()).select_from(ClosetItemModel).where(ClosetItemModel.user_id == user_id))
    return int(res.scalar_one())

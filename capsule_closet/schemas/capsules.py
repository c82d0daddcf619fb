from pydantic import BaseModel
from typing import Optional, List

from capsule_closet.schemas.closet import ClosetItemOut


class GapSpecOut(BaseModel):
    category: str
    color: str
    silhouette: str
    reason: Optional[str] = None


class CapsuleOut(BaseModel):
    status: str = "generated"
    redirect_to: Optional[str] = None
    items: List[ClosetItemOut] = []
    gaps: List[GapSpecOut] = []
    saved: bool = False


class StoredCapsuleOut(BaseModel):
    id: str
    owned_item_ids: List[str]
    gaps: List[GapSpecOut]
    updated_at: Optional[str] = None

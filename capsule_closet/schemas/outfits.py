from pydantic import BaseModel
from typing import Optional, List, Literal, Any, Dict

from capsule_closet.schemas.closet import ClosetItemOut
from capsule_closet.services.styling.outfits import MAX_SCORE


class OutfitOut(BaseModel):
    id: str
    items: List[ClosetItemOut]
    item_ids: List[str]
    occasion: Literal["evening", "work", "casual"]
    score: int
    max_score: int = MAX_SCORE
    saved: bool = False
    worn: bool = False
    wear_enabled: bool = True
    # false when the look could not be written; it cannot be saved, worn or swapped
    stored: bool = True
    metadata: Optional[Dict[str, Any]] = None
    created_at: Optional[str] = None


class OutfitFeedOut(BaseModel):
    status: str = "generated"
    redirect_to: Optional[str] = None
    outfits: List[OutfitOut] = []
    stored: int = 0

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple


CATEGORIES = ("top", "bottom", "dress", "outerwear", "shoes", "bag", "accessory")


@dataclass(frozen=True)
class ClosetItem:
    """A confirmed, tagged wardrobe item."""
    id: str
    category: str
    color: str
    subcategory: str = ""
    silhouette: str = ""
    season: str = "all-season"
    image_url: str = ""

    @classmethod
    def from_row(cls, row: Any) -> "ClosetItem":
        return cls(
            id=str(row.id),
            category=row.category,
            color=row.color,
            subcategory=row.subcategory or "",
            silhouette=row.silhouette or "",
            season=row.season or "all-season",
            image_url=row.image_url or "",
        )


@dataclass(frozen=True)
class GapSpec:
    """A recommended item the wardrobe is missing."""
    category: str
    color: str
    silhouette: str
    reason: str


@dataclass
class Outfit:
    """A generated look. Only `saved` and `worn` change after creation."""
    id: str
    items: List[ClosetItem]
    occasion: str
    score: int
    saved: bool = False
    worn: bool = False
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def item_ids(self) -> List[str]:
        return [it.id for it in self.items]


@dataclass(frozen=True)
class CatalogSnapshot:
    """One user's confirmed items, loaded once per request."""
    user_id: str
    items: Tuple[ClosetItem, ...]

    @classmethod
    def from_rows(cls, user_id: str, rows: Sequence[Any]) -> "CatalogSnapshot":
        return cls(user_id=user_id, items=tuple(ClosetItem.from_row(r) for r in rows))

    @property
    def size(self) -> int:
        return len(self.items)

    def find(self, item_id: str) -> Optional[ClosetItem]:
        return next((it for it in self.items if it.id == item_id), None)

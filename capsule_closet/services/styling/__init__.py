from .types import CATEGORIES, CatalogSnapshot, ClosetItem, GapSpec, Outfit
from .palette import compatible
from .capsule import generate_capsule
from .outfits import determine_occasion, generate_outfits, score_outfit

__all__ = [
    "CATEGORIES",
    "CatalogSnapshot",
    "ClosetItem",
    "GapSpec",
    "Outfit",
    "compatible",
    "generate_capsule",
    "generate_outfits",
    "determine_occasion",
    "score_outfit",
]

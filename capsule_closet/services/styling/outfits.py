from typing import Iterable, List, Optional, Sequence

from .palette import compatible
from .types import ClosetItem, Outfit

MAX_OUTFITS = 10
MAX_SCORE = 10

WORK_SUBCATEGORIES = {"blazer", "heels"}
CASUAL_SUBCATEGORIES = {"sneakers"}


def _by_category(items: Sequence[ClosetItem], category: str) -> List[ClosetItem]:
    return [it for it in items if it.category == category]


def _pick(pool: Sequence[ClosetItem], match_colors: Iterable[str], compat_color: str) -> Optional[ClosetItem]:
    # exact color first, then anything compatible, then whatever comes first
    match_colors = set(match_colors)
    for it in pool:
        if it.color in match_colors:
            return it
    for it in pool:
        if compatible(it.color, compat_color):
            return it
    return pool[0] if pool else None


def determine_occasion(items: Sequence[ClosetItem]) -> str:
    subcategories = {it.subcategory for it in items}
    if subcategories & WORK_SUBCATEGORIES:
        return "work"
    if subcategories & CASUAL_SUBCATEGORIES:
        return "casual"
    return "casual"


def score_outfit(items: Sequence[ClosetItem]) -> int:
    """Additive score from category presence and color count."""
    categories = {it.category for it in items}
    score = 0
    if "top" in categories:
        score += 2
    if "bottom" in categories:
        score += 2
    if "shoes" in categories:
        score += 1
    if "bag" in categories:
        score += 1
    if "outerwear" in categories:
        score += 1
    unique_colors = len({it.color for it in items})
    if unique_colors <= 3:
        score += 2
    if unique_colors <= 2:
        score += 1
    return score


def _dress_outfits(dresses, shoes, bags, outerwear, start: int) -> List[Outfit]:
    outfits: List[Outfit] = []
    for dress in dresses:
        if start + len(outfits) >= MAX_OUTFITS:
            break
        shoe = _pick(shoes, [dress.color], dress.color)
        bag = _pick(bags, [dress.color], dress.color)
        jacket = next((o for o in outerwear if compatible(o.color, dress.color)), None)

        items = [it for it in (dress, shoe, bag, jacket) if it is not None]
        if len(items) < 2:
            continue
        outfits.append(
            Outfit(
                id=f"outfit-{start + len(outfits)}",
                items=items,
                occasion="evening",
                score=score_outfit(items),
                metadata={"type": "dress", "colors": [it.color for it in items]},
            )
        )
    return outfits


def _separates_outfits(tops, bottoms, shoes, bags, outerwear, start: int) -> List[Outfit]:
    outfits: List[Outfit] = []
    for top in tops:
        for bottom in bottoms:
            if start + len(outfits) >= MAX_OUTFITS:
                return outfits
            if not compatible(top.color, bottom.color):
                continue

            pair_colors = (top.color, bottom.color)
            shoe = _pick(shoes, pair_colors, top.color)
            if shoe is None:
                continue
            bag = _pick(bags, pair_colors, top.color)
            jacket = next(
                (o for o in outerwear if compatible(o.color, top.color) and compatible(o.color, bottom.color)),
                None,
            )

            items = [it for it in (top, bottom, shoe, bag, jacket) if it is not None]
            if len(items) < 3:
                continue
            outfits.append(
                Outfit(
                    id=f"outfit-{start + len(outfits)}",
                    items=items,
                    occasion=determine_occasion(items),
                    score=score_outfit(items),
                    metadata={"type": "separates", "colors": [it.color for it in items]},
                )
            )
    return outfits


def generate_outfits(catalog: Sequence[ClosetItem]) -> List[Outfit]:
    """Build up to ten looks from the catalog, best score first.

    Dresses are tried before separates and both walk the catalog in order,
    so the result is fully determined by the input.
    """
    tops = _by_category(catalog, "top")
    bottoms = _by_category(catalog, "bottom")
    dresses = _by_category(catalog, "dress")
    outerwear = _by_category(catalog, "outerwear")
    shoes = _by_category(catalog, "shoes")
    bags = _by_category(catalog, "bag")

    candidates = _dress_outfits(dresses, shoes, bags, outerwear, start=0)
    candidates += _separates_outfits(tops, bottoms, shoes, bags, outerwear, start=len(candidates))

    # sorted() is stable, ties keep generation order
    return sorted(candidates, key=lambda o: o.score, reverse=True)[:MAX_OUTFITS]

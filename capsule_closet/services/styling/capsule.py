from collections import Counter
from typing import List, Sequence, Tuple

from .types import CATEGORIES, ClosetItem, GapSpec

MAX_GAPS = 6


def _missing_gap(category: str) -> GapSpec:
    if category == "bottom":
        return GapSpec(
            category=category,
            color="black",
            silhouette="straight",
            reason="A black trouser would unlock 5+ outfit combinations",
        )
    return GapSpec(
        category=category,
        color="neutral",
        silhouette="straight",
        reason=f"A {category} would unlock 5+ outfit combinations",
    )


def _second_gap(category: str) -> GapSpec:
    is_bottom = category == "bottom"
    return GapSpec(
        category=category,
        color="blue" if is_bottom else "neutral",
        silhouette="straight" if is_bottom else "fitted",
        reason=f"An additional {category} would create more outfit variety",
    )


def generate_capsule(catalog: Sequence[ClosetItem]) -> Tuple[List[ClosetItem], List[GapSpec]]:
    """Select the capsule items and the gaps that would round it out.

    Every confirmed item is kept. Gaps follow the category priority order;
    the outerwear and bag checks run again after the pass, so those gaps can
    appear twice when the closet has neither.
    """
    selected = list(catalog)
    counts = Counter(it.category for it in catalog)
    gaps: List[GapSpec] = []

    for category in CATEGORIES:
        count = counts.get(category, 0)
        if count == 0:
            gaps.append(_missing_gap(category))
        elif count == 1 and category != "accessory":
            gaps.append(_second_gap(category))

    if not counts.get("outerwear"):
        gaps.append(
            GapSpec(
                category="outerwear",
                color="neutral",
                silhouette="fitted",
                reason="A neutral blazer would create 8+ professional looks",
            )
        )
    if not counts.get("bag"):
        gaps.append(
            GapSpec(
                category="bag",
                color="black",
                silhouette="medium",
                reason="A versatile bag would complete your daily looks",
            )
        )

    return selected, gaps[:MAX_GAPS]

import re
import unicodedata
from typing import Iterable, Optional

from capsule_closet.core.taxonomy import allowed_values, subcategories_for

DEFAULT_SEASON = "all-season"

def normalize_tag(s: str) -> str:
    s = unicodedata.normalize("NFKD", s or "").encode("ascii", "ignore").decode()
    s = s.strip().lower()
    s = re.sub(r"[^a-z0-9]+", "-", s)
    s = re.sub(r"-{2,}", "-", s).strip("-")
    if not (1 <= len(s) <= 24):
        raise ValueError("invalid_length")
    return s

def normalize_many(xs: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for x in xs or []:
        t = normalize_tag(x)
        if t and t not in seen:
            seen.add(t)
            out.append(t)
    return out

def normalize_facet(facet: str, value: str) -> str:
    """Normalize a single tag and check it against the taxonomy facet."""
    try:
        v = normalize_tag(value)
    except ValueError:
        raise ValueError(f"invalid_{facet}")
    if v not in allowed_values(facet):
        raise ValueError(f"invalid_{facet}")
    return v

def normalize_subcategory(category: str, value: Optional[str]) -> str:
    if not value:
        return ""
    try:
        v = normalize_tag(value)
    except ValueError:
        raise ValueError("invalid_subcategory")
    if v not in subcategories_for(category):
        raise ValueError("invalid_subcategory")
    return v

from pydantic import BaseModel, field_validator
from typing import Optional, List

from capsule_closet.core.tags import normalize_facet, normalize_many
from capsule_closet.core.taxonomy import allowed_values


class Sizes(BaseModel):
    top: str = ""
    bottom: str = ""
    shoe: str = ""


class ProfileIn(BaseModel):
    sizes: Sizes = Sizes()
    budget_band: str
    vibes: List[str]
    climate: str = "temperate"
    brands: List[str] = []

    @field_validator("budget_band")
    @classmethod
    def _budget(cls, v: str):
        return normalize_facet("budget_band", v)

    @field_validator("climate")
    @classmethod
    def _climate(cls, v: str):
        return normalize_facet("climate", v)

    @field_validator("vibes")
    @classmethod
    def _vibes(cls, v: List[str]):
        vibes = normalize_many(v)
        if not vibes:
            raise ValueError("vibes_required")
        allowed = allowed_values("vibe")
        for vibe in vibes:
            if vibe not in allowed:
                raise ValueError("invalid_vibe")
        return vibes

    @field_validator("brands")
    @classmethod
    def _brands(cls, v: List[str]):
        cleaned = []
        for b in v or []:
            b = (b or "").strip()
            if b and b not in cleaned:
                cleaned.append(b[:64])
        return cleaned[:20]


class ProfileOut(BaseModel):
    id: str
    sizes: Sizes = Sizes()
    budget_band: Optional[str] = None
    vibes: List[str] = []
    climate: Optional[str] = None
    brands: List[str] = []
    onboarded: bool = False
    redirect_to: Optional[str] = None


class HomeOut(BaseModel):
    authenticated: bool
    onboarded: bool = False
    closet_count: int = 0
    redirect_to: Optional[str] = None

from pydantic import BaseModel, field_validator, model_validator
from typing import Optional, List, Literal

from capsule_closet.core.tags import DEFAULT_SEASON, normalize_facet, normalize_subcategory


class ClosetItemCreate(BaseModel):
    image_url: str
    category: str
    subcategory: Optional[str] = None
    color: str
    silhouette: str
    season: Optional[str] = DEFAULT_SEASON

    @field_validator("category")
    @classmethod
    def _category(cls, v: str):
        return normalize_facet("category", v)

    @field_validator("color")
    @classmethod
    def _color(cls, v: str):
        return normalize_facet("color", v)

    @field_validator("silhouette")
    @classmethod
    def _silhouette(cls, v: str):
        return normalize_facet("silhouette", v)

    @field_validator("season")
    @classmethod
    def _season(cls, v: Optional[str]):
        return normalize_facet("season", v) if v else DEFAULT_SEASON

    @field_validator("image_url")
    @classmethod
    def _image_url(cls, v: str):
        v = v.strip()
        if not v:
            raise ValueError("image_url_required")
        return v

    @model_validator(mode="after")
    def _subcategory(self):
        self.subcategory = normalize_subcategory(self.category, self.subcategory)
        return self


class ClosetItemOut(BaseModel):
    id: str
    image_url: str
    category: str
    subcategory: str = ""
    color: str
    silhouette: str
    season: str
    status: Literal["confirmed"] = "confirmed"
    created_at: Optional[str] = None


class ClosetOut(BaseModel):
    items: List[ClosetItemOut]
    confirmed_count: int
    max_items: int
    can_generate_capsule: bool


class UploadResultOut(BaseModel):
    filename: str
    status: Literal["tagging", "error"]
    image_url: Optional[str] = None
    key: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    error: Optional[str] = None


class UploadBatchOut(BaseModel):
    results: List[UploadResultOut]
    dropped: int
    remaining_slots: int

from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Annotated, Dict, List, Optional
from datetime import datetime, date
from enum import Enum

from kore.utils.payload import pairs_to_size_map


class Gender(str, Enum):
    MEN = "MEN"
    WOMEN = "WOMEN"
    KIDS = "KIDS"
    UNISEX = "UNISEX"


class Stage(str, Enum):
    AVAILABLE = "AVAILABLE"
    WISHLIST = "WISHLIST"


NonNegativeQty = Annotated[int, Field(ge=0)]


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class ImageRef(BaseModel):
    url: str
    key: Optional[str] = None


class VariantIn(BaseModel):
    item_name: str = Field(..., min_length=1)
    sku: Optional[str] = "Auto"
    cost_price: float = Field(0, ge=0)
    size_qty: Dict[str, NonNegativeQty] = {}
    selling_price: float = Field(0, ge=0)
    mrp: float = Field(0, ge=0)

    class Config:
        coerce_numbers_to_str = True

    @field_validator("item_name", "sku", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("sku")
    @classmethod
    def default_sku(cls, v):
        return v or "Auto"

    @field_validator("size_qty", mode="before")
    @classmethod
    def accept_pairs(cls, v):
        return pairs_to_size_map(v)


class VariantResponse(BaseModel):
    id: int
    item_name: str
    sku: str
    cost_price: float
    size_qty: Dict[str, int]
    selling_price: float
    mrp: float

    class Config:
        from_attributes = True

    @field_validator("size_qty", mode="before")
    @classmethod
    def from_pairs(cls, v):
        return pairs_to_size_map(v)


class CatalogFields(BaseModel):
    """Scalar article fields shared by create and update"""
    article_name: Optional[str] = None
    sole_color: Optional[str] = None
    gender: Optional[Gender] = None
    category_id: Optional[str] = None
    brand_id: Optional[str] = None
    manufacturer_company_id: Optional[str] = None
    unit_id: Optional[str] = None
    stage: Optional[Stage] = None
    expected_available_date: Optional[date] = None

    class Config:
        coerce_numbers_to_str = True

    @field_validator("article_name", "sole_color", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("expected_available_date", mode="before")
    @classmethod
    def blank_date(cls, v):
        return _blank_to_none(v)


class CatalogCreate(CatalogFields):
    article_name: str = Field(..., min_length=1)
    gender: Gender
    category_id: str
    brand_id: str
    manufacturer_company_id: str
    unit_id: str
    stage: Stage = Stage.AVAILABLE
    variants: List[VariantIn] = []

    @field_validator("stage", mode="before")
    @classmethod
    def default_stage(cls, v):
        return _blank_to_none(v) or Stage.AVAILABLE

    @model_validator(mode="after")
    def wishlist_needs_date(self):
        if self.stage == Stage.WISHLIST and not self.expected_available_date:
            raise ValueError("expected_available_date is required when stage is WISHLIST")
        return self


class CatalogUpdate(CatalogFields):
    variants: Optional[List[VariantIn]] = None


class CatalogResponse(BaseModel):
    id: int
    article_name: str
    sole_color: Optional[str] = None
    gender: str
    category_id: str
    brand_id: str
    manufacturer_company_id: str
    unit_id: str
    stage: str
    expected_available_date: Optional[date] = None
    primary_image: ImageRef
    secondary_images: List[ImageRef] = []
    variants: List[VariantResponse] = []
    is_deleted: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CatalogListMeta(BaseModel):
    total: int
    page: int
    limit: int


class CatalogListResponse(BaseModel):
    data: List[CatalogResponse]
    meta: CatalogListMeta

from pydantic import BaseModel, field_validator
from typing import List, Literal, Optional
from datetime import datetime, date

from kore.services.po_calculator import parse_or_default, parse_quantity, round2


class POLineIn(BaseModel):
    article_id: Optional[int] = None
    variant_id: Optional[int] = None
    item_name: str
    image_url: Optional[str] = None
    sku: Optional[str] = None
    sku_company: Optional[str] = None
    item_tax_code: Optional[str] = None
    quantity: int = 1
    tax_rate: float = 0
    tax_type: Literal["GST", "IGST"] = "GST"
    base_price: float = 0

    # Numeric form input never fails validation, it falls back to 0.
    # Amounts are held at the stored scale of two decimals.
    @field_validator("quantity", mode="before")
    @classmethod
    def coerce_quantity(cls, v):
        return parse_quantity(v)

    @field_validator("tax_rate", "base_price", mode="before")
    @classmethod
    def coerce_amount(cls, v):
        return float(round2(parse_or_default(v)))


class POLineResponse(POLineIn):
    id: Optional[int] = None
    tax_per_item: float
    unit_total: float

    class Config:
        from_attributes = True


class POFields(BaseModel):
    vendor_id: Optional[int] = None
    po_number: Optional[str] = None
    reference_number: Optional[str] = None
    order_date: Optional[date] = None
    delivery_date: Optional[date] = None
    payment_terms: Optional[str] = None
    shipment_preference: Optional[str] = None
    notes: Optional[str] = None
    terms_and_conditions: Optional[str] = None
    discount_percent: Optional[float] = None

    @field_validator("discount_percent", mode="before")
    @classmethod
    def coerce_discount(cls, v):
        return float(round2(parse_or_default(v)))

    @field_validator("order_date", "delivery_date", mode="before")
    @classmethod
    def blank_date(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class POCreate(POFields):
    vendor_id: int
    discount_percent: float = 0
    status: Literal["DRAFT", "SENT"] = "DRAFT"
    items: List[POLineIn] = []


class POUpdate(POFields):
    items: Optional[List[POLineIn]] = None


class POResponse(BaseModel):
    id: int
    po_number: str
    vendor_id: int
    vendor_name: Optional[str] = None
    reference_number: Optional[str] = None
    order_date: Optional[date] = None
    delivery_date: Optional[date] = None
    payment_terms: Optional[str] = None
    shipment_preference: Optional[str] = None
    notes: Optional[str] = None
    terms_and_conditions: Optional[str] = None
    items: List[POLineResponse] = []
    sub_total: float
    discount_percent: float
    discount_amount: float
    total_tax: float
    total: float
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class POListResponse(BaseModel):
    id: int
    po_number: str
    vendor_id: int
    vendor_name: Optional[str] = None
    order_date: Optional[date] = None
    total: float
    status: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class POComputeRequest(BaseModel):
    items: List[POLineIn] = []
    discount_percent: float = 0

    @field_validator("discount_percent", mode="before")
    @classmethod
    def coerce_discount(cls, v):
        return float(round2(parse_or_default(v)))


class POComputeResponse(BaseModel):
    items: List[POLineResponse]
    sub_total: float
    discount_amount: float
    total_tax: float
    total: float


class NextPONumberResponse(BaseModel):
    po_number: str

from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from enum import Enum


class OrderStatus(str, Enum):
    BOOKED = "BOOKED"
    PENDING = "PENDING"
    READY_FOR_DISPATCH = "READY_FOR_DISPATCH"
    DISPATCHED = "DISPATCHED"
    DELIVERED = "DELIVERED"


class OrderItemIn(BaseModel):
    variant_id: int
    cartons: int = Field(..., ge=1)


class OrderCreate(BaseModel):
    items: List[OrderItemIn] = []


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


class OrderItemResponse(BaseModel):
    variant_id: int
    item_name: str
    carton_count: int
    pair_count: int
    price: float

    class Config:
        from_attributes = True


class OrderResponse(BaseModel):
    id: int
    order_number: str
    distributor_id: int
    distributor_name: str
    status: str
    items: List[OrderItemResponse] = []
    total_cartons: int
    total_pairs: int
    total_amount: float
    dispatched_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class InventoryAdd(BaseModel):
    cartons: int = Field(..., ge=1)


class InventoryResponse(BaseModel):
    variant_id: int
    actual_stock: int
    reserved_stock: int
    available_stock: int

    class Config:
        from_attributes = True

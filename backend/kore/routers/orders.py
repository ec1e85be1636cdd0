from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from kore.database import get_db
from kore.dependencies import get_current_user, require_roles
from kore.models.user import User
from kore.schemas.order import InventoryAdd, InventoryResponse, OrderCreate, OrderResponse, OrderStatusUpdate
from kore.services.order_service import order_service

router = APIRouter(prefix="/api/orders", tags=["orders"])
inventory_router = APIRouter(prefix="/api/inventory", tags=["inventory"])

STOCK_ROLES = ("superadmin", "admin", "staff")


@router.post("", response_model=OrderResponse, status_code=201)
def place_order(
    data: OrderCreate,
    user: User = Depends(require_roles("distributor")),
    db: Session = Depends(get_db)
):
    """Place the distributor's cart as an order, reserving stock"""
    return order_service.place_order(db, user, data.items)


@router.get("", response_model=List[OrderResponse])
def list_orders(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Distributors see their own orders, staff see all"""
    return order_service.list_orders(db, user)


@router.get("/{order_id}", response_model=OrderResponse)
def get_order(order_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return order_service.get_order(db, order_id, user)


@router.patch("/{order_id}/status", response_model=OrderResponse)
def update_order_status(
    order_id: int,
    data: OrderStatusUpdate,
    user: User = Depends(require_roles(*STOCK_ROLES)),
    db: Session = Depends(get_db)
):
    return order_service.update_status(db, order_id, data.status, user)


@inventory_router.get("", response_model=List[InventoryResponse])
def list_inventory(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return order_service.list_inventory(db)


@inventory_router.post("/{variant_id}/add", response_model=InventoryResponse)
def add_inventory(
    variant_id: int,
    data: InventoryAdd,
    user: User = Depends(require_roles(*STOCK_ROLES)),
    db: Session = Depends(get_db)
):
    """Record inward stock (in cartons) for a variant"""
    return order_service.add_inventory(db, variant_id, data.cartons)

"""
Distributor Order Service - carton-level ordering against catalogue variants.

Placing an order always reserves stock for every line. If any line asks for
more cartons than are available the whole order is booked as PENDING
instead of BOOKED. Actual stock only goes down when the order is first
dispatched.
"""
import logging
import time
from datetime import datetime, timezone
from typing import Dict, List

from sqlalchemy.orm import Session

from kore.config import settings
from kore.errors import NotFoundError, ValidationError
from kore.models.distributor_order import DistributorOrder, DistributorOrderItem
from kore.models.inventory import Inventory
from kore.models.master_catalog import CatalogVariant, MasterCatalog
from kore.models.user import User
from kore.schemas.order import OrderItemIn, OrderStatus
from kore.services.po_calculator import parse_or_default, round2

logger = logging.getLogger(__name__)

DISTRIBUTOR = "distributor"


def _merge_items(items: List[OrderItemIn]) -> Dict[int, int]:
    """Cartons per variant, in first-seen order"""
    merged: Dict[int, int] = {}
    for item in items:
        merged[item.variant_id] = merged.get(item.variant_id, 0) + item.cartons
    return merged


class OrderService:

    def get_variant(self, db: Session, variant_id: int) -> CatalogVariant:
        variant = (
            db.query(CatalogVariant)
            .join(MasterCatalog)
            .filter(CatalogVariant.id == variant_id, MasterCatalog.is_deleted.is_(False))
            .first()
        )
        if not variant:
            raise NotFoundError(f"Variant {variant_id} not found")
        return variant

    def get_inventory(self, db: Session, variant_id: int) -> Inventory:
        """Inventory row for a variant, created empty on first use"""
        inventory = db.query(Inventory).filter(Inventory.variant_id == variant_id).first()
        if not inventory:
            inventory = Inventory(variant_id=variant_id, actual_stock=0, reserved_stock=0)
            db.add(inventory)
        return inventory

    def list_inventory(self, db: Session) -> List[Inventory]:
        return db.query(Inventory).order_by(Inventory.variant_id).all()

    def add_inventory(self, db: Session, variant_id: int, cartons: int) -> Inventory:
        self.get_variant(db, variant_id)
        inventory = self.get_inventory(db, variant_id)
        inventory.actual_stock = (inventory.actual_stock or 0) + cartons
        db.commit()
        db.refresh(inventory)
        logger.info(f"Added {cartons} cartons to variant {variant_id}, actual stock now {inventory.actual_stock}")
        return inventory

    def place_order(self, db: Session, distributor: User, items: List[OrderItemIn]) -> DistributorOrder:
        if not items:
            raise ValidationError("Cart is empty")

        order = DistributorOrder(
            order_number=self._order_number(db),
            distributor_id=distributor.id,
            distributor_name=distributor.company_name or distributor.name,
            status=OrderStatus.BOOKED.value,
        )

        pending = False
        total_cartons = 0
        total_pairs = 0
        total_amount = round2(0)
        for variant_id, cartons in _merge_items(items).items():
            variant = self.get_variant(db, variant_id)
            pairs = cartons * settings.pairs_per_carton
            price = round2(pairs * parse_or_default(variant.selling_price))

            inventory = self.get_inventory(db, variant_id)
            if inventory.available_stock < cartons:
                pending = True
            inventory.reserved_stock = (inventory.reserved_stock or 0) + cartons

            order.items.append(DistributorOrderItem(
                variant_id=variant_id,
                item_name=variant.item_name,
                carton_count=cartons,
                pair_count=pairs,
                price=price,
            ))
            total_cartons += cartons
            total_pairs += pairs
            total_amount += price

        if pending:
            order.status = OrderStatus.PENDING.value
        order.total_cartons = total_cartons
        order.total_pairs = total_pairs
        order.total_amount = total_amount

        db.add(order)
        db.commit()
        db.refresh(order)
        logger.info(f"Order {order.order_number} placed by distributor {distributor.id} with status {order.status}")
        return order

    def list_orders(self, db: Session, user: User) -> List[DistributorOrder]:
        query = db.query(DistributorOrder)
        if user.role == DISTRIBUTOR:
            query = query.filter(DistributorOrder.distributor_id == user.id)
        return query.order_by(DistributorOrder.created_at.desc(), DistributorOrder.id.desc()).all()

    def get_order(self, db: Session, order_id: int, user: User) -> DistributorOrder:
        order = db.query(DistributorOrder).filter(DistributorOrder.id == order_id).first()
        if not order or (user.role == DISTRIBUTOR and order.distributor_id != user.id):
            raise NotFoundError("Order not found")
        return order

    def update_status(self, db: Session, order_id: int, status: OrderStatus, user: User) -> DistributorOrder:
        order = self.get_order(db, order_id, user)

        if status == OrderStatus.DISPATCHED and order.dispatched_at is None:
            for item in order.items:
                inventory = self.get_inventory(db, item.variant_id)
                inventory.actual_stock = (inventory.actual_stock or 0) - item.carton_count
                inventory.reserved_stock = (inventory.reserved_stock or 0) - item.carton_count
            order.dispatched_at = datetime.now(timezone.utc)

        order.status = status.value
        db.commit()
        db.refresh(order)
        logger.info(f"Order {order.order_number} moved to {order.status}")
        return order

    def _order_number(self, db: Session) -> str:
        stamp = int(time.time() * 1000)
        while db.query(DistributorOrder.id).filter(DistributorOrder.order_number == f"ORD-{stamp}").first():
            stamp += 1
        return f"ORD-{stamp}"


order_service = OrderService()

"""
Purchase Order Service - persists purchase orders with computed line and
order totals, and allocates PO numbers server-side.

PO numbers are suggested as max(existing) + 1. Two concurrent creations can
pick the same number, so allocation relies on the unique constraint on
po_number and retries with a fresh suggestion when the insert collides.
"""
import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from kore.config import settings
from kore.errors import NotFoundError, ValidationError
from kore.models.purchase_order import PurchaseOrder
from kore.models.po_line import POLine
from kore.models.vendor import Vendor
from kore.schemas.po import POCreate, POLineIn, POUpdate
from kore.services.po_calculator import compute_totals, line_amounts
from kore.services.po_number import next_po_number

logger = logging.getLogger(__name__)


def _check_lines(items: List[POLineIn]) -> None:
    for index, item in enumerate(items, start=1):
        if item.quantity < 1:
            raise ValidationError(f"Line {index}: quantity must be at least 1")
        if not 0 <= item.tax_rate <= 100:
            raise ValidationError(f"Line {index}: tax_rate must be between 0 and 100")
        if item.base_price < 0:
            raise ValidationError(f"Line {index}: base_price must not be negative")


def _check_discount(discount_percent: float) -> None:
    if not 0 <= discount_percent <= 100:
        raise ValidationError("discount_percent must be between 0 and 100")


def _build_lines(items: List[POLineIn]) -> List[POLine]:
    lines = []
    for position, item in enumerate(items):
        amounts = line_amounts(item.quantity, item.base_price, item.tax_rate)
        lines.append(POLine(
            position=position,
            article_id=item.article_id,
            variant_id=item.variant_id,
            item_name=item.item_name,
            image_url=item.image_url,
            sku=item.sku,
            sku_company=item.sku_company,
            item_tax_code=item.item_tax_code,
            quantity=item.quantity,
            tax_rate=item.tax_rate,
            tax_type=item.tax_type,
            base_price=item.base_price,
            tax_per_item=amounts.tax_per_item,
            unit_total=amounts.unit_total,
        ))
    return lines


def _apply_totals(po: PurchaseOrder) -> None:
    totals = compute_totals(
        [{"quantity": line.quantity, "base_price": line.base_price, "tax_rate": line.tax_rate} for line in po.items],
        po.discount_percent,
    )
    po.sub_total = totals.sub_total
    po.discount_amount = totals.discount_amount
    po.total_tax = totals.total_tax
    po.total = totals.total


class PurchaseOrderService:
    """Service for creating and maintaining purchase orders"""

    def next_number(self, db: Session) -> str:
        existing = [row[0] for row in db.query(PurchaseOrder.po_number).all()]
        return next_po_number(existing)

    def create(self, db: Session, data: POCreate) -> PurchaseOrder:
        """
        Create a purchase order.

        When no po_number is supplied one is allocated; a collision with a
        concurrently created order triggers a retry with the next number.

        Raises:
            NotFoundError: vendor does not exist
            ValidationError: duplicate explicit po_number, invalid lines or discount
        """
        vendor = self._get_vendor(db, data.vendor_id)
        _check_lines(data.items)
        _check_discount(data.discount_percent)

        if data.po_number:
            if db.query(PurchaseOrder).filter(PurchaseOrder.po_number == data.po_number).first():
                raise ValidationError(f"Purchase order with number {data.po_number} already exists")
            po = self._new_po(data, vendor, data.po_number)
            db.add(po)
            db.commit()
            db.refresh(po)
            logger.info(f"Created purchase order {po.po_number} for vendor {vendor.id}")
            return po

        attempts = settings.po_number_max_attempts
        for attempt in range(1, attempts + 1):
            po_number = self.next_number(db)
            po = self._new_po(data, vendor, po_number)
            db.add(po)
            try:
                db.commit()
            except IntegrityError:
                db.rollback()
                logger.warning(f"PO number {po_number} already taken (attempt {attempt}/{attempts}), retrying")
                continue
            db.refresh(po)
            logger.info(f"Created purchase order {po.po_number} for vendor {vendor.id}")
            return po

        logger.error(f"Could not allocate a PO number after {attempts} attempts")
        raise ValidationError("Could not allocate a PO number, please retry")

    def list(
        self,
        db: Session,
        vendor_id: Optional[int] = None,
        status: Optional[str] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> List[PurchaseOrder]:
        query = db.query(PurchaseOrder)
        if vendor_id:
            query = query.filter(PurchaseOrder.vendor_id == vendor_id)
        if status:
            query = query.filter(PurchaseOrder.status == status)
        return query.order_by(PurchaseOrder.created_at.desc(), PurchaseOrder.id.desc()).offset(skip).limit(limit).all()

    def get(self, db: Session, po_id: int) -> PurchaseOrder:
        po = db.query(PurchaseOrder).filter(PurchaseOrder.id == po_id).first()
        if not po:
            raise NotFoundError("Purchase order not found")
        return po

    def update(self, db: Session, po_id: int, data: POUpdate) -> PurchaseOrder:
        """Merge supplied fields; items, if given, replace the whole line list"""
        po = self.get(db, po_id)
        fields = data.model_fields_set - {"items"}
        if "discount_percent" in fields:
            _check_discount(data.discount_percent)

        if "vendor_id" in fields and data.vendor_id is not None and data.vendor_id != po.vendor_id:
            vendor = self._get_vendor(db, data.vendor_id)
            po.vendor_id = vendor.id
            po.vendor_name = vendor.display_name
        fields.discard("vendor_id")

        if "po_number" in fields and data.po_number and data.po_number != po.po_number:
            clash = db.query(PurchaseOrder).filter(PurchaseOrder.po_number == data.po_number).first()
            if clash:
                raise ValidationError(f"Purchase order with number {data.po_number} already exists")
            po.po_number = data.po_number
        fields.discard("po_number")

        for key in fields:
            setattr(po, key, getattr(data, key))

        if data.items is not None:
            _check_lines(data.items)
            po.items = _build_lines(data.items)

        _apply_totals(po)
        db.commit()
        db.refresh(po)
        logger.info(f"Updated purchase order {po.po_number}")
        return po

    def send(self, db: Session, po_id: int) -> PurchaseOrder:
        po = self.get(db, po_id)
        if po.status == "SENT":
            raise ValidationError(f"Purchase order {po.po_number} has already been sent")
        po.status = "SENT"
        db.commit()
        db.refresh(po)
        logger.info(f"Purchase order {po.po_number} marked as sent")
        return po

    def delete(self, db: Session, po_id: int) -> None:
        po = self.get(db, po_id)
        po_number = po.po_number
        db.delete(po)
        db.commit()
        logger.info(f"Deleted purchase order {po_number}")

    def _get_vendor(self, db: Session, vendor_id: int) -> Vendor:
        vendor = db.query(Vendor).filter(Vendor.id == vendor_id).first()
        if not vendor:
            raise NotFoundError(f"Vendor with ID {vendor_id} not found")
        return vendor

    def _new_po(self, data: POCreate, vendor: Vendor, po_number: str) -> PurchaseOrder:
        po = PurchaseOrder(
            po_number=po_number,
            vendor_id=vendor.id,
            vendor_name=vendor.display_name,
            reference_number=data.reference_number,
            order_date=data.order_date or date.today(),
            delivery_date=data.delivery_date,
            payment_terms=data.payment_terms,
            shipment_preference=data.shipment_preference,
            notes=data.notes,
            terms_and_conditions=data.terms_and_conditions,
            discount_percent=data.discount_percent,
            status=data.status,
        )
        po.items = _build_lines(data.items)
        _apply_totals(po)
        return po


purchase_order_service = PurchaseOrderService()

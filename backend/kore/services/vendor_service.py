import logging
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from kore.errors import ConflictError, NotFoundError, ValidationError
from kore.models.purchase_order import PurchaseOrder
from kore.models.vendor import Vendor
from kore.schemas.vendor import VendorCreate, VendorUpdate
from kore.utils.payload import like_pattern

logger = logging.getLogger(__name__)

# Nested structures are stored as plain JSON
JSON_FIELDS = {"billing_address", "shipping_address", "contact_persons", "bank_details"}
LIST_FIELDS = {"contact_persons", "bank_details"}


def _column_values(data, fields) -> dict:
    values = {}
    for key in fields:
        value = getattr(data, key)
        if key in JSON_FIELDS and value is not None:
            value = data.model_dump(include={key})[key]
        elif key in LIST_FIELDS and value is None:
            value = []
        values[key] = value
    return values


class VendorService:
    """CRUD and search for vendors"""

    def create(self, db: Session, data: VendorCreate) -> Vendor:
        vendor = Vendor(**_column_values(data, type(data).model_fields.keys()))
        db.add(vendor)
        db.commit()
        db.refresh(vendor)
        logger.info(f"Created vendor {vendor.id} ({vendor.display_name})")
        return vendor

    def list(self, db: Session, q: Optional[str] = None) -> List[Vendor]:
        """All vendors, optionally filtered by a case-insensitive search"""
        query = db.query(Vendor)
        if q:
            pattern = like_pattern(q)
            query = query.filter(or_(
                Vendor.display_name.ilike(pattern, escape="\\"),
                Vendor.company_name.ilike(pattern, escape="\\"),
                Vendor.email.ilike(pattern, escape="\\"),
            ))
        return query.order_by(Vendor.display_name).all()

    def get(self, db: Session, vendor_id: int) -> Vendor:
        vendor = db.query(Vendor).filter(Vendor.id == vendor_id).first()
        if not vendor:
            raise NotFoundError("Vendor not found")
        return vendor

    def update(self, db: Session, vendor_id: int, data: VendorUpdate) -> Vendor:
        vendor = self.get(db, vendor_id)
        values = _column_values(data, data.model_fields_set)
        if "display_name" in values and not values["display_name"]:
            raise ValidationError("Display Name is required.")
        for key, value in values.items():
            setattr(vendor, key, value)
        db.commit()
        db.refresh(vendor)
        logger.info(f"Updated vendor {vendor.id}")
        return vendor

    def delete(self, db: Session, vendor_id: int) -> None:
        vendor = self.get(db, vendor_id)
        in_use = db.query(PurchaseOrder).filter(PurchaseOrder.vendor_id == vendor_id).count()
        if in_use:
            raise ConflictError(f"Vendor is referenced by {in_use} purchase order(s)")
        db.delete(vendor)
        db.commit()
        logger.info(f"Deleted vendor {vendor_id}")


vendor_service = VendorService()

from sqlalchemy import Column, Integer, String, Numeric, ForeignKey, DateTime, Date, Text
from sqlalchemy.orm import relationship
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.sql import func
from kore.database import Base


class PurchaseOrder(Base):
    __tablename__ = "purchase_orders"

    id = Column(Integer, primary_key=True, index=True)
    po_number = Column(String, unique=True, nullable=False, index=True)  # PO-NNNNN
    vendor_id = Column(Integer, ForeignKey("vendors.id"), nullable=False, index=True)
    vendor_name = Column(String, nullable=True)  # Denormalized at write time
    reference_number = Column(String, nullable=True)
    order_date = Column(Date, nullable=True)
    delivery_date = Column(Date, nullable=True)
    payment_terms = Column(String, nullable=True)
    shipment_preference = Column(String, nullable=True)
    notes = Column(Text, nullable=True)
    terms_and_conditions = Column(Text, nullable=True)

    # Totals, always recomputed from the line items
    sub_total = Column(Numeric(14, 2), nullable=False, default=0)
    discount_percent = Column(Numeric(5, 2), nullable=False, default=0)
    discount_amount = Column(Numeric(14, 2), nullable=False, default=0)
    total_tax = Column(Numeric(14, 2), nullable=False, default=0)
    total = Column(Numeric(14, 2), nullable=False, default=0)

    status = Column(String(10), nullable=False, default="DRAFT", index=True)  # DRAFT, SENT
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    vendor = relationship("Vendor", back_populates="purchase_orders")
    items = relationship(
        "POLine",
        back_populates="purchase_order",
        order_by="POLine.position",
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
    )

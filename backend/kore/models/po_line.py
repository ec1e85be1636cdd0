from sqlalchemy import Column, Integer, String, Numeric, ForeignKey
from sqlalchemy.orm import relationship
from kore.database import Base


class POLine(Base):
    __tablename__ = "po_lines"

    id = Column(Integer, primary_key=True, index=True)
    po_id = Column(Integer, ForeignKey("purchase_orders.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False)

    # Source article/variant, empty for manually entered lines
    article_id = Column(Integer, nullable=True)
    variant_id = Column(Integer, nullable=True)

    item_name = Column(String, nullable=False)
    image_url = Column(String, nullable=True)
    sku = Column(String, nullable=True, index=True)
    sku_company = Column(String, nullable=True)  # Brand label
    item_tax_code = Column(String, nullable=True)  # HSN code
    quantity = Column(Integer, nullable=False, default=1)
    tax_rate = Column(Numeric(5, 2), nullable=False, default=0)  # Percent
    tax_type = Column(String(10), nullable=False, default="GST")  # GST, IGST
    base_price = Column(Numeric(12, 2), nullable=False, default=0)

    # Derived from quantity, base_price and tax_rate
    tax_per_item = Column(Numeric(12, 2), nullable=False, default=0)
    unit_total = Column(Numeric(14, 2), nullable=False, default=0)

    # Relationships
    purchase_order = relationship("PurchaseOrder", back_populates="items")

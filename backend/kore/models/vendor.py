from sqlalchemy import Column, Integer, String, DateTime, Boolean, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from kore.database import Base


class Vendor(Base):
    __tablename__ = "vendors"

    id = Column(Integer, primary_key=True, index=True)
    salutation = Column(String, nullable=True)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    company_name = Column(String, nullable=True)
    display_name = Column(String, nullable=False, index=True)
    email = Column(String, nullable=True)
    work_phone = Column(String, nullable=True)
    mobile = Column(String, nullable=True)

    # Other details
    pan = Column(String, nullable=True)
    msme_registered = Column(Boolean, default=False)
    currency = Column(String, default="INR")
    payment_terms = Column(String, nullable=True)
    tds = Column(String, nullable=True)
    enable_portal = Column(Boolean, default=False)

    # Address format: {"attention", "country", "address1", "address2", "city", "state", "pin_code", "phone", "fax"}
    billing_address = Column(JSON, nullable=True)
    shipping_address = Column(JSON, nullable=True)
    # Ordered lists of dicts, entry order preserved
    contact_persons = Column(JSON, nullable=False, default=list)
    bank_details = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    purchase_orders = relationship("PurchaseOrder", back_populates="vendor")

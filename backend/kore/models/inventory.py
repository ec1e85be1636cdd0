from sqlalchemy import Column, Integer, DateTime
from sqlalchemy.sql import func
from kore.database import Base


class Inventory(Base):
    """Carton-level stock for one catalogue variant"""
    __tablename__ = "inventory"

    id = Column(Integer, primary_key=True, index=True)
    # Variants are replaced wholesale on catalogue update, so no FK here
    variant_id = Column(Integer, unique=True, nullable=False, index=True)
    actual_stock = Column(Integer, nullable=False, default=0)  # Cartons on hand
    reserved_stock = Column(Integer, nullable=False, default=0)  # Cartons held for open orders
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    @property
    def available_stock(self) -> int:
        return (self.actual_stock or 0) - (self.reserved_stock or 0)

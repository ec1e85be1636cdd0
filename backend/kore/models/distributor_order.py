from sqlalchemy import Column, Integer, String, Numeric, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from kore.database import Base


class DistributorOrder(Base):
    __tablename__ = "distributor_orders"

    id = Column(Integer, primary_key=True, index=True)
    order_number = Column(String, unique=True, nullable=False, index=True)  # ORD-<epoch ms>
    distributor_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    distributor_name = Column(String, nullable=False)
    status = Column(String(20), nullable=False, default="BOOKED", index=True)  # BOOKED, PENDING, READY_FOR_DISPATCH, DISPATCHED, DELIVERED
    total_cartons = Column(Integer, nullable=False, default=0)
    total_pairs = Column(Integer, nullable=False, default=0)
    total_amount = Column(Numeric(14, 2), nullable=False, default=0)
    dispatched_at = Column(DateTime(timezone=True), nullable=True)  # Stock is deducted once, on first dispatch
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    items = relationship("DistributorOrderItem", back_populates="order", cascade="all, delete-orphan")


class DistributorOrderItem(Base):
    __tablename__ = "distributor_order_items"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("distributor_orders.id"), nullable=False, index=True)
    variant_id = Column(Integer, nullable=False)
    item_name = Column(String, nullable=False)  # Snapshot at order time
    carton_count = Column(Integer, nullable=False)
    pair_count = Column(Integer, nullable=False)
    price = Column(Numeric(14, 2), nullable=False)

    # Relationships
    order = relationship("DistributorOrder", back_populates="items")

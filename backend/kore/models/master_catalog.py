from sqlalchemy import Column, Integer, String, Numeric, ForeignKey, DateTime, Date, Boolean, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.sql import func
from kore.database import Base


class MasterCatalog(Base):
    """
    Article-level product record.

    Variants are kept in the order they were entered; the position column
    is maintained by the ordering_list collection.
    """
    __tablename__ = "master_catalogs"

    id = Column(Integer, primary_key=True, index=True)
    article_name = Column(String, nullable=False, index=True)
    sole_color = Column(String, nullable=True)
    gender = Column(String(10), nullable=False, index=True)  # MEN, WOMEN, KIDS, UNISEX

    # Opaque references to category/brand/manufacturer/unit masters
    category_id = Column(String, nullable=False, index=True)
    brand_id = Column(String, nullable=False, index=True)
    manufacturer_company_id = Column(String, nullable=False, index=True)
    unit_id = Column(String, nullable=False)

    stage = Column(String(10), nullable=False, default="AVAILABLE", index=True)  # AVAILABLE, WISHLIST
    expected_available_date = Column(Date, nullable=True)  # Required when stage is WISHLIST

    primary_image_url = Column(String, nullable=False)
    primary_image_key = Column(String, nullable=True)
    # Format: [{"url": "...", "key": "..."}]
    secondary_images = Column(JSON, nullable=False, default=list)

    is_deleted = Column(Boolean, nullable=False, default=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    variants = relationship(
        "CatalogVariant",
        back_populates="catalog",
        order_by="CatalogVariant.position",
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
    )

    @property
    def primary_image(self) -> dict:
        image = {"url": self.primary_image_url}
        if self.primary_image_key:
            image["key"] = self.primary_image_key
        return image


class CatalogVariant(Base):
    __tablename__ = "catalog_variants"

    id = Column(Integer, primary_key=True, index=True)
    catalog_id = Column(Integer, ForeignKey("master_catalogs.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    item_name = Column(String, nullable=False)  # e.g. "Item-Red-5-7"
    sku = Column(String, nullable=False, default="Auto")
    cost_price = Column(Numeric(12, 2), nullable=False, default=0)
    # Sparse size map stored as ordered pairs: [{"size": "5", "qty": 10}]
    size_qty = Column(JSON, nullable=False, default=list)
    selling_price = Column(Numeric(12, 2), nullable=False, default=0)
    mrp = Column(Numeric(12, 2), nullable=False, default=0)

    # Relationships
    catalog = relationship("MasterCatalog", back_populates="variants")

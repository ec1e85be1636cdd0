from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from kore.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False, index=True)  # Stored lower-cased
    hashed_password = Column(String, nullable=False)
    role = Column(String(20), nullable=False, default="staff", index=True)  # superadmin, admin, staff, distributor
    company_name = Column(String, nullable=True)
    location = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

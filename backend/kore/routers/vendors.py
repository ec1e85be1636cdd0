from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from kore.database import get_db
from kore.schemas.vendor import VendorCreate, VendorResponse, VendorUpdate
from kore.services.vendor_service import vendor_service

router = APIRouter(prefix="/api/vendors", tags=["vendors"])


@router.get("", response_model=List[VendorResponse])
def list_vendors(
    q: Optional[str] = Query(None, description="Search display name, company or email"),
    db: Session = Depends(get_db)
):
    """List all vendors"""
    return vendor_service.list(db, q=q)


@router.post("", response_model=VendorResponse, status_code=201)
def create_vendor(vendor_data: VendorCreate, db: Session = Depends(get_db)):
    return vendor_service.create(db, vendor_data)


@router.get("/{vendor_id}", response_model=VendorResponse)
def get_vendor(vendor_id: int, db: Session = Depends(get_db)):
    return vendor_service.get(db, vendor_id)


@router.put("/{vendor_id}", response_model=VendorResponse)
def update_vendor(vendor_id: int, vendor_data: VendorUpdate, db: Session = Depends(get_db)):
    return vendor_service.update(db, vendor_id, vendor_data)


@router.delete("/{vendor_id}")
def delete_vendor(vendor_id: int, db: Session = Depends(get_db)):
    vendor_service.delete(db, vendor_id)
    return {"message": "Deleted"}

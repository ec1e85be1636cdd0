from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Literal, Optional
from kore.database import get_db
from kore.schemas.po import (
    NextPONumberResponse,
    POComputeRequest,
    POComputeResponse,
    POCreate,
    POListResponse,
    POResponse,
    POUpdate,
)
from kore.services.po_calculator import compute_line, compute_totals
from kore.services.purchase_order_service import purchase_order_service

router = APIRouter(prefix="/api/purchase-orders", tags=["purchase-orders"])


@router.get("/next-number", response_model=NextPONumberResponse)
def get_next_po_number(db: Session = Depends(get_db)):
    """Suggest the next PO number (max existing + 1)"""
    return NextPONumberResponse(po_number=purchase_order_service.next_number(db))


@router.post("/compute", response_model=POComputeResponse)
def compute_purchase_order(data: POComputeRequest):
    """Preview line and order totals without saving anything"""
    lines = [compute_line(item.model_dump()) for item in data.items]
    totals = compute_totals(lines, data.discount_percent)
    return POComputeResponse(
        items=lines,
        sub_total=totals.sub_total,
        discount_amount=totals.discount_amount,
        total_tax=totals.total_tax,
        total=totals.total,
    )


@router.get("", response_model=List[POListResponse])
def list_purchase_orders(
    vendor_id: Optional[int] = Query(None, description="Filter by vendor ID"),
    status: Optional[Literal["DRAFT", "SENT"]] = Query(None, description="Filter by status"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    db: Session = Depends(get_db)
):
    """List purchase orders, newest first"""
    return purchase_order_service.list(db, vendor_id=vendor_id, status=status, skip=skip, limit=limit)


@router.post("", response_model=POResponse, status_code=201)
def create_purchase_order(po_data: POCreate, db: Session = Depends(get_db)):
    """Create a purchase order; a PO number is allocated when none is given"""
    return purchase_order_service.create(db, po_data)


@router.get("/{po_id}", response_model=POResponse)
def get_purchase_order(po_id: int, db: Session = Depends(get_db)):
    return purchase_order_service.get(db, po_id)


@router.put("/{po_id}", response_model=POResponse)
def update_purchase_order(po_id: int, po_data: POUpdate, db: Session = Depends(get_db)):
    return purchase_order_service.update(db, po_id, po_data)


@router.post("/{po_id}/send", response_model=POResponse)
def send_purchase_order(po_id: int, db: Session = Depends(get_db)):
    """Move a draft purchase order to SENT"""
    return purchase_order_service.send(db, po_id)


@router.delete("/{po_id}")
def delete_purchase_order(po_id: int, db: Session = Depends(get_db)):
    purchase_order_service.delete(db, po_id)
    return {"message": "Deleted"}

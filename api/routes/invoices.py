"""Invoice generator routes"""

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID
import logging

from api.dependencies import get_db
from api.responses import paginated_response
from domain.models import utcnow
from domain.enums import InvoiceStatus, SortOrder
from domain.schemas.invoice_schemas import (
    InvoiceCreate,
    InvoiceUpdate,
    InvoiceStatusUpdate,
    InvoiceResponse,
    BulkDeleteRequest,
    BulkDeleteResponse,
    InvoiceStats,
    InvoiceAlert,
)
from repositories.invoice_repository import SORT_COLUMNS
from services.invoice_service import InvoiceService

router = APIRouter(prefix="/invoices", tags=["Invoices"])
logger = logging.getLogger("appsuite.api.invoices")

SORT_PATTERN = "^(" + "|".join(SORT_COLUMNS) + ")$"


@router.post("/bulk-delete", response_model=BulkDeleteResponse)
def bulk_delete(payload: BulkDeleteRequest, db: Session = Depends(get_db)):
    return InvoiceService.bulk_delete(db, payload.invoice_ids)


@router.get("/stats", response_model=InvoiceStats)
def invoice_stats(db: Session = Depends(get_db)):
    return InvoiceService.get_stats(db)


@router.get("/alerts", response_model=List[InvoiceAlert])
def invoice_alerts(db: Session = Depends(get_db)):
    """Overdue invoices, then invoices due within the reminder window"""
    return InvoiceService.get_alerts(db)


@router.get("/export")
def export_invoices(db: Session = Depends(get_db)):
    """All invoices as a CSV download"""
    filename = f"invoices-{utcnow().date().isoformat()}.csv"
    return Response(
        content=InvoiceService.export_csv(db),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("", response_model=InvoiceResponse, status_code=status.HTTP_201_CREATED)
def create_invoice(payload: InvoiceCreate, db: Session = Depends(get_db)):
    invoice = InvoiceService.create_invoice(db, payload)
    return InvoiceService.to_response(invoice)


@router.get("")
def list_invoices(
    search: Optional[str] = Query(None, max_length=100),
    status: Optional[InvoiceStatus] = Query(None),
    sort_by: str = Query("date", pattern=SORT_PATTERN),
    sort_order: SortOrder = Query(SortOrder.DESC),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    """
    Paginated invoice listing.

    `search` matches client name, client email and invoice number. Filtering
    by `overdue` includes sent invoices whose due date has passed.
    """
    items, total = InvoiceService.list_invoices(
        db,
        search=search,
        status=status,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )
    return paginated_response([i.model_dump(mode="json") for i in items], total, page, limit)


@router.get("/{invoice_id}", response_model=InvoiceResponse)
def get_invoice(invoice_id: UUID, db: Session = Depends(get_db)):
    return InvoiceService.to_response(InvoiceService.get_invoice(db, invoice_id))


@router.put("/{invoice_id}", response_model=InvoiceResponse)
def update_invoice(invoice_id: UUID, payload: InvoiceUpdate, db: Session = Depends(get_db)):
    invoice = InvoiceService.update_invoice(db, invoice_id, payload)
    return InvoiceService.to_response(invoice)


@router.patch("/{invoice_id}/status", response_model=InvoiceResponse)
def update_invoice_status(
    invoice_id: UUID, payload: InvoiceStatusUpdate, db: Session = Depends(get_db)
):
    invoice = InvoiceService.update_status(db, invoice_id, payload.status)
    return InvoiceService.to_response(invoice)


@router.delete("/{invoice_id}")
def delete_invoice(invoice_id: UUID, db: Session = Depends(get_db)):
    InvoiceService.delete_invoice(db, invoice_id)
    return {"status": "ok", "deleted": str(invoice_id)}

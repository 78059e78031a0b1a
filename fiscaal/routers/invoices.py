from fastapi import APIRouter, Depends, Query
from sqlmodel import Session
from datetime import date

from fiscaal.db.session import get_session
from fiscaal.schemas import (
    InvoiceCreate,
    InvoiceOut,
    InvoicePreviewIn,
    InvoicePreviewOut,
    InvoiceStatusIn,
)
from fiscaal.services import invoices_service

router = APIRouter(prefix="/invoices", tags=["Invoices"])


# ===========================
# LIST
# ===========================
@router.get("", response_model=list[InvoiceOut])
def invoices_list(
    status: str | None = Query(None),
    date_from: date | None = Query(None),
    date_to: date | None = Query(None),
    session: Session = Depends(get_session),
):
    return invoices_service.list_invoices(
        session, status=status, date_from=date_from, date_to=date_to
    )


# ===========================
# PREVIEW (totals while editing)
# ===========================
@router.post("/preview", response_model=InvoicePreviewOut)
def invoice_preview(
    data: InvoicePreviewIn,
    session: Session = Depends(get_session),
):
    return invoices_service.preview_invoice(session, data)


@router.get("/next-number")
def invoice_next_number(
    issue_date: date = Query(...),
    session: Session = Depends(get_session),
):
    # Read only: the number is reserved at creation time
    return {"number": invoices_service.next_number_preview(session, issue_date)}


# ===========================
# CREATE
# ===========================
@router.post("", response_model=InvoiceOut, status_code=201)
def invoice_create(
    data: InvoiceCreate,
    session: Session = Depends(get_session),
):
    return invoices_service.create_invoice(session, data)


@router.get("/{invoice_id}", response_model=InvoiceOut)
def invoice_detail(
    invoice_id: int,
    session: Session = Depends(get_session),
):
    return invoices_service.get_invoice(session, invoice_id)


@router.post("/{invoice_id}/status", response_model=InvoiceOut)
def invoice_status(
    invoice_id: int,
    data: InvoiceStatusIn,
    session: Session = Depends(get_session),
):
    return invoices_service.update_invoice_status(session, invoice_id, data.status)

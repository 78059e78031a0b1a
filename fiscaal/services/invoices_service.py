# fiscaal/services/invoices_service.py
from __future__ import annotations

import threading
from datetime import date

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from fiscaal.core.clock import utcnow
from fiscaal.core.config import settings
from fiscaal.core.errors import NotFoundError, PersistenceConflict, ValidationError
from fiscaal.core.logger import logger
from fiscaal.models.client import Client
from fiscaal.models.company import Company
from fiscaal.models.invoice import INVOICE_STATUSES, STATUS_UNPAID, Invoice
from fiscaal.models.invoice_line import InvoiceLine
from fiscaal.models.product import Product
from fiscaal.schemas import InvoiceCreate, InvoiceLineIn, InvoicePreviewIn
from fiscaal.services.invoice_calc import (
    calculate_due_date,
    calculate_invoice_totals,
    calculate_line_totals,
    effective_vat_rate,
)
from fiscaal.services.invoice_numbering import (
    SqlCounterStore,
    next_invoice_number,
    preview_invoice_number,
)
from fiscaal.services.sepa_qr import build_sepa_qr_payload, payment_information

# Serialises invoice creation inside this process; the counter UPDATE
# covers other connections.
_create_lock = threading.Lock()


def get_company(session: Session) -> Company | None:
    return session.exec(select(Company).order_by(Company.id)).first()


def _prefill_line(session: Session, line: InvoiceLineIn, default_vat_rate: float) -> dict:
    """
    Completes a line with its product defaults (description, price, rate).
    Values typed on the line always win.
    """
    product = session.get(Product, line.product_id) if line.product_id else None

    description = (line.description or "").strip()
    unit_price = line.unit_price
    vat_rate = line.vat_rate

    if product:
        description = description or product.name
        if unit_price is None:
            unit_price = product.unit_price
        if vat_rate is None:
            vat_rate = product.vat_rate

    return {
        "product_id": line.product_id,
        "description": description,
        "quantity": float(line.quantity or 0),
        "unit_price": float(unit_price or 0),
        "vat_rate": default_vat_rate if vat_rate is None else float(vat_rate),
    }


def _compute_lines(session: Session, data: InvoicePreviewIn, default_vat_rate: float):
    """Lines without a description are left out of preview and invoice alike."""
    computed = []
    for raw in data.lines:
        line = _prefill_line(session, raw, default_vat_rate)
        if not line["description"]:
            continue
        line["vat_rate"] = effective_vat_rate(line["vat_rate"], data.reverse_charge)
        totals = calculate_line_totals(line["quantity"], line["unit_price"], line["vat_rate"])
        computed.append((line, totals))
    return computed


def _payment_term(data: InvoicePreviewIn, company: Company | None) -> int:
    if data.payment_term_days is not None:
        return data.payment_term_days
    if company:
        return company.payment_term_days
    return settings.DEFAULT_PAYMENT_TERM_DAYS


def preview_invoice(session: Session, data: InvoicePreviewIn) -> dict:
    """
    Line totals, invoice totals and due date while the invoice is being
    edited. Nothing is reserved or written.
    """
    company = get_company(session)
    default_rate = company.default_vat_rate if company else 0.0

    computed = _compute_lines(session, data, default_rate)
    totals = calculate_invoice_totals(t for _, t in computed)

    return {
        "lines": [
            {
                "vat_rate": line["vat_rate"],
                "line_net": t.line_net,
                "line_vat": t.line_vat,
                "line_gross": t.line_gross,
            }
            for line, t in computed
        ],
        "total_net": totals.total_net,
        "total_vat": totals.total_vat,
        "total_gross": totals.total_gross,
        "due_date": calculate_due_date(data.issue_date, _payment_term(data, company)),
    }


def next_number_preview(session: Session, issue_date: date) -> str:
    return preview_invoice_number(SqlCounterStore(session), issue_date)


def create_invoice(session: Session, data: InvoiceCreate) -> Invoice:
    """
    Creates an invoice in a single transaction.

    1) checks company, client and at least one line
    2) reserves the next number of the issue month
    3) computes lines, totals, due date and the SEPA QR payload
    4) commits everything together

    Any failure rolls back the counter increment together with the
    invoice, so a number is never handed out twice.
    """

    # ============================
    # 1) Validation
    # ============================
    company = get_company(session)
    if not company:
        raise ValidationError("No company profile configured")

    if not data.client_id:
        raise ValidationError("Select a client")

    client = session.get(Client, data.client_id)
    if not client:
        raise ValidationError("Client not found")

    computed = _compute_lines(session, data, company.default_vat_rate)
    if not computed:
        raise ValidationError("Add at least one line item")

    totals = calculate_invoice_totals(t for _, t in computed)
    due_date = calculate_due_date(data.issue_date, _payment_term(data, company))
    vat_note = settings.REVERSE_CHARGE_NOTE if data.reverse_charge else None

    with _create_lock:
        try:
            # ============================
            # 2) Numbering
            # ============================
            allocated = next_invoice_number(SqlCounterStore(session), data.issue_date)

            # ============================
            # 3) Invoice + lines
            # ============================
            qr_payload = build_sepa_qr_payload(
                company.bic,
                company.name,
                company.iban,
                totals.total_gross,
                allocated.number,
                payment_information(allocated.number, company.name),
            )

            invoice = Invoice(
                invoice_number=allocated.number,
                company_id=company.id,
                client_id=client.id,
                issue_date=data.issue_date,
                due_date=due_date,
                currency=settings.CURRENCY,
                status=STATUS_UNPAID,
                total_net=totals.total_net,
                total_vat=totals.total_vat,
                total_gross=totals.total_gross,
                reverse_charge=data.reverse_charge,
                vat_note=vat_note,
                payment_reference=allocated.number,
                payment_qr_payload=qr_payload,
                notes=data.notes,
            )
            session.add(invoice)

            for position, (line, line_totals) in enumerate(computed):
                invoice.lines.append(
                    InvoiceLine(
                        position=position,
                        product_id=line["product_id"],
                        description=line["description"],
                        quantity=line["quantity"],
                        unit_price=line["unit_price"],
                        vat_rate=line["vat_rate"],
                        line_net=line_totals.line_net,
                        line_vat=line_totals.line_vat,
                        line_gross=line_totals.line_gross,
                    )
                )

            # ============================
            # 4) Commit
            # ============================
            session.commit()

        except IntegrityError as e:
            session.rollback()
            logger.warning(f"Invoice creation conflict: {e}")
            raise PersistenceConflict("Invoice number already in use, try again") from e
        except Exception:
            session.rollback()
            logger.exception("Invoice creation failed, transaction rolled back")
            raise

    session.refresh(invoice)
    logger.info(
        f"Invoice {invoice.invoice_number} created "
        f"(client={client.id}, gross={invoice.total_gross:.2f})"
    )
    return invoice


def get_invoice(session: Session, invoice_id: int) -> Invoice:
    invoice = session.get(Invoice, invoice_id)
    if not invoice:
        raise NotFoundError("Invoice not found")
    return invoice


def list_invoices(
    session: Session,
    *,
    status: str | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
) -> list[Invoice]:
    query = select(Invoice)

    if status:
        query = query.where(Invoice.status == status)

    if date_from:
        query = query.where(Invoice.issue_date >= date_from)

    if date_to:
        query = query.where(Invoice.issue_date <= date_to)

    return list(session.exec(query.order_by(Invoice.issue_date, Invoice.invoice_number)).all())


def update_invoice_status(session: Session, invoice_id: int, status: str) -> Invoice:
    """
    Changes payment status only. Totals and number stay as created; a
    cancelled invoice keeps its number consumed.
    """
    if status not in INVOICE_STATUSES:
        raise ValidationError(f"Invalid invoice status: {status!r}")

    invoice = get_invoice(session, invoice_id)
    previous = invoice.status

    invoice.status = status
    invoice.updated_at = utcnow()
    session.add(invoice)
    session.commit()
    session.refresh(invoice)

    logger.info(f"Invoice {invoice.invoice_number}: {previous} -> {status}")
    return invoice

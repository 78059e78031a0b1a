from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, List
from datetime import date, datetime

from fiscaal.core.clock import utcnow

from fiscaal.models.client import Client
from fiscaal.models.invoice_line import InvoiceLine

STATUS_UNPAID = "unpaid"
STATUS_PARTIAL = "partial"
STATUS_PAID = "paid"
STATUS_CANCELLED = "cancelled"

INVOICE_STATUSES = (STATUS_UNPAID, STATUS_PARTIAL, STATUS_PAID, STATUS_CANCELLED)


class Invoice(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    invoice_number: str = Field(index=True, unique=True)

    company_id: int = Field(foreign_key="company.id")
    client_id: int = Field(foreign_key="client.id")
    client: Optional[Client] = Relationship(back_populates="invoices")

    issue_date: date
    due_date: date
    currency: str = "EUR"

    status: str = STATUS_UNPAID

    # Totals (sum of the rounded line totals)
    total_net: float = 0.0
    total_vat: float = 0.0
    total_gross: float = 0.0

    # vat_note is derived from reverse_charge, never the other way round
    reverse_charge: bool = False
    vat_note: Optional[str] = None

    payment_reference: str = ""
    payment_qr_payload: str = ""
    notes: Optional[str] = None

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    lines: List[InvoiceLine] = Relationship(
        back_populates="invoice",
        sa_relationship_kwargs={"order_by": "InvoiceLine.position"},
    )

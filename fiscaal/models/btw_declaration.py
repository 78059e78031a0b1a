from sqlmodel import SQLModel, Field
from sqlalchemy import UniqueConstraint
from typing import Optional
from datetime import datetime

from fiscaal.core.clock import utcnow

STATUS_DRAFT = "draft"
STATUS_SUBMITTED = "submitted"
STATUS_PAID = "paid"

DECLARATION_STATUSES = (STATUS_DRAFT, STATUS_SUBMITTED, STATUS_PAID)


class BTWDeclaration(SQLModel, table=True):
    __tablename__ = "btw_declaration"

    __table_args__ = (
        UniqueConstraint("year", "period", name="uq_btw_declaration_period"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)

    year: int
    period: str                          # Q1..Q4
    status: str = STATUS_DRAFT

    # Rubriek 1: omzet
    revenue_nl_high: float = 0.0         # 1a
    revenue_nl_low: float = 0.0          # 1b
    revenue_nl_zero: float = 0.0         # 1e
    revenue_nl_other: float = 0.0        # verlegd (reverse charge)
    revenue_unclassified: float = 0.0

    vat_high: float = 0.0
    vat_low: float = 0.0

    # Rubriek 1d: privégebruik
    private_use_amount: float = 0.0      # km
    private_use_vat: float = 0.0

    # Rubriek 5b: voorbelasting
    input_vat_general: float = 0.0

    total_vat_to_pay: float = 0.0
    total_vat_deductible: float = 0.0
    balance: float = 0.0

    notes: Optional[str] = None

    submitted_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

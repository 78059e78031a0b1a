from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import date, datetime

from fiscaal.core.clock import utcnow


class Expense(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    date: date
    category: str = "other"
    supplier: str = ""
    description: Optional[str] = None

    amount_net: float = 0.0
    vat_rate: float = 21.0
    vat_amount: float = 0.0
    amount_gross: float = 0.0
    currency: str = "EUR"

    payment_method: str = "bank_transfer"
    invoice_number: Optional[str] = None

    is_vat_deductible: bool = True
    is_business_expense: bool = True
    private_percentage: Optional[float] = None     # 0-100

    notes: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)

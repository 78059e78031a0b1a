from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime

from fiscaal.core.clock import utcnow

if TYPE_CHECKING:
    from fiscaal.models.invoice import Invoice


class Client(SQLModel, table=True):
    __tablename__ = "client"

    id: Optional[int] = Field(default=None, primary_key=True)

    name: str
    vat_number: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None

    address: Optional[str] = None
    postal_code: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = "Nederland"

    created_at: datetime = Field(default_factory=utcnow)

    # 1-N with Invoice
    invoices: List["Invoice"] = Relationship(back_populates="client")

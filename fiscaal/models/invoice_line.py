from sqlmodel import SQLModel, Field, Relationship
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from fiscaal.models.invoice import Invoice


class InvoiceLine(SQLModel, table=True):
    __tablename__ = "invoice_line"

    id: Optional[int] = Field(default=None, primary_key=True)

    invoice_id: Optional[int] = Field(default=None, foreign_key="invoice.id")
    invoice: Optional["Invoice"] = Relationship(back_populates="lines")

    product_id: Optional[int] = Field(default=None, foreign_key="product.id")

    position: int = 0
    description: str
    quantity: float = 1.0
    unit_price: float = 0.0
    vat_rate: float = 0.0

    # Derived by the line calculator, never edited directly
    line_net: float = 0.0
    line_vat: float = 0.0
    line_gross: float = 0.0

from sqlmodel import SQLModel, Field


class InvoiceCounter(SQLModel, table=True):
    """
    Last issued sequence per (year, month).

    A missing row means 0. The value only ever goes up: deleting or
    cancelling an invoice never hands its number out again.
    """

    __tablename__ = "invoice_counter"

    year: int = Field(primary_key=True)
    month: int = Field(primary_key=True)
    last_seq: int = 0

    @property
    def period_key(self) -> str:
        return f"{self.year}-{self.month}"

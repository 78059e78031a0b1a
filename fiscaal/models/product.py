from sqlmodel import SQLModel, Field
from typing import Optional


class Product(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    name: str
    description: Optional[str] = None
    unit_price: float = 0.0
    vat_rate: float = 21.0          # 21, 9, 0
    unit: Optional[str] = None      # "uur", "stuk", ...
    active: bool = True

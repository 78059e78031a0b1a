from sqlmodel import SQLModel, Field
from typing import Optional


class Company(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    # IDENTIFICATIE
    name: str = ""
    kvk_number: str = ""
    vat_number: str = ""
    vat_registered: bool = True

    # ADRES
    address: str = ""
    postal_code: str = ""
    city: str = ""
    country: str = "Nederland"

    # CONTACT
    email: str = ""
    phone: str = ""
    website: Optional[str] = None

    # BANK
    iban: str = ""
    bic: str = ""

    # ============================
    # FACTURATIE
    # ============================
    default_vat_rate: float = 21.0
    payment_term_days: int = 14

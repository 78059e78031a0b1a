from pydantic import BaseModel, Field
from typing import Optional, List, Literal
from datetime import date, datetime


# ---------- Company / clients ----------
class CompanyIn(BaseModel):
    name: str
    kvk_number: str = ""
    vat_number: str = ""
    vat_registered: bool = True
    address: str = ""
    postal_code: str = ""
    city: str = ""
    country: str = "Nederland"
    email: str = ""
    phone: str = ""
    iban: str = ""
    bic: str = ""
    default_vat_rate: float = Field(21.0, ge=0, le=100)
    payment_term_days: int = Field(14, ge=0)


class ClientIn(BaseModel):
    name: str
    vat_number: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    postal_code: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = "Nederland"


# ---------- Products ----------
class ProductIn(BaseModel):
    name: str
    description: Optional[str] = None
    unit_price: float = 0.0
    vat_rate: float = Field(21.0, ge=0, le=100)
    unit: Optional[str] = None
    active: bool = True


# ---------- Invoices ----------
class InvoiceLineIn(BaseModel):
    # Negative amounts are accepted on purpose (credit lines)
    description: str = ""
    quantity: float = 1.0
    unit_price: Optional[float] = None
    vat_rate: Optional[float] = Field(None, ge=0, le=100)
    product_id: Optional[int] = None


class InvoicePreviewIn(BaseModel):
    issue_date: date
    payment_term_days: Optional[int] = Field(None, ge=0)
    reverse_charge: bool = False
    lines: List[InvoiceLineIn] = Field(default_factory=list)


class InvoiceCreate(InvoicePreviewIn):
    client_id: Optional[int] = None
    notes: Optional[str] = None


class LineTotalsOut(BaseModel):
    vat_rate: float
    line_net: float
    line_vat: float
    line_gross: float


class InvoicePreviewOut(BaseModel):
    lines: List[LineTotalsOut]
    total_net: float
    total_vat: float
    total_gross: float
    due_date: date


class InvoiceLineOut(BaseModel):
    id: int
    position: int
    description: str
    quantity: float
    unit_price: float
    vat_rate: float
    line_net: float
    line_vat: float
    line_gross: float
    product_id: Optional[int] = None

    class Config:
        from_attributes = True


class InvoiceOut(BaseModel):
    id: int
    invoice_number: str
    client_id: int
    issue_date: date
    due_date: date
    currency: str
    status: str
    reverse_charge: bool
    vat_note: Optional[str] = None
    total_net: float
    total_vat: float
    total_gross: float
    payment_reference: str
    payment_qr_payload: str
    notes: Optional[str] = None
    created_at: datetime
    lines: List[InvoiceLineOut] = Field(default_factory=list)

    class Config:
        from_attributes = True


class InvoiceStatusIn(BaseModel):
    status: Literal["unpaid", "partial", "paid", "cancelled"]


# ---------- Expenses / kilometers ----------
class ExpenseIn(BaseModel):
    date: date
    supplier: str
    amount_net: float
    vat_rate: float = Field(21.0, ge=0, le=100)
    category: str = "other"
    description: Optional[str] = None
    payment_method: str = "bank_transfer"
    invoice_number: Optional[str] = None
    is_vat_deductible: bool = True
    is_business_expense: bool = True
    private_percentage: Optional[float] = Field(None, ge=0, le=100)
    notes: Optional[str] = None


class KilometerIn(BaseModel):
    date: date
    distance: float = Field(..., ge=0)
    start_location: str = ""
    end_location: str = ""
    purpose: str = ""
    vehicle_type: Literal["car", "bike", "motorcycle"] = "car"
    is_private: bool = False
    is_private_vehicle: bool = True
    client_id: Optional[int] = None
    notes: Optional[str] = None


# ---------- BTW ----------
class DeclarationSaveIn(BaseModel):
    status: Literal["draft", "submitted", "paid"] = "draft"
    override: bool = False
    notes: Optional[str] = None


class DeclarationStatusIn(BaseModel):
    status: Literal["draft", "submitted", "paid"]
    override: bool = False

from .btw_declaration import BTWDeclaration
from .client import Client
from .company import Company
from .expense import Expense
from .invoice import Invoice
from .invoice_counter import InvoiceCounter
from .invoice_line import InvoiceLine
from .kilometer import KilometerEntry
from .product import Product

__all__ = [
    "BTWDeclaration",
    "Client",
    "Company",
    "Expense",
    "Invoice",
    "InvoiceCounter",
    "InvoiceLine",
    "KilometerEntry",
    "Product",
]

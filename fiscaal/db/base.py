from sqlmodel import SQLModel

from fiscaal.models.company import Company
from fiscaal.models.client import Client
from fiscaal.models.product import Product
from fiscaal.models.invoice import Invoice
from fiscaal.models.invoice_line import InvoiceLine
from fiscaal.models.invoice_counter import InvoiceCounter
from fiscaal.models.expense import Expense
from fiscaal.models.kilometer import KilometerEntry
from fiscaal.models.btw_declaration import BTWDeclaration


def init_db(engine=None):
    if engine is None:
        from fiscaal.db.session import engine
    SQLModel.metadata.create_all(engine)

# fiscaal/services/invoice_calc.py
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable

from fiscaal.services.money import round2


@dataclass(frozen=True)
class LineTotals:
    line_net: float
    line_vat: float
    line_gross: float


@dataclass(frozen=True)
class InvoiceTotals:
    total_net: float
    total_vat: float
    total_gross: float


def effective_vat_rate(vat_rate: float | None, reverse_charge: bool = False) -> float:
    # Reverse charge always invoices at 0%, whatever the line or product says
    if reverse_charge:
        return 0.0
    return float(vat_rate or 0)


def calculate_line_totals(quantity: float, unit_price: float, vat_rate: float) -> LineTotals:
    """
    Net, VAT and gross for one invoice line.

    Each figure is rounded independently; gross is built from the rounded
    net and VAT. Negative input is accepted as is.
    """
    line_net = round2(quantity * unit_price)
    line_vat = round2(line_net * (vat_rate / 100))
    line_gross = round2(line_net + line_vat)

    return LineTotals(line_net=line_net, line_vat=line_vat, line_gross=line_gross)


def calculate_invoice_totals(lines: Iterable) -> InvoiceTotals:
    """
    Sum the already rounded line figures and round once more.

    Accepts ``LineTotals`` or anything exposing ``line_net``, ``line_vat``
    and ``line_gross`` (e.g. ``InvoiceLine`` rows).
    """
    lines = list(lines)

    total_net = round2(sum(l.line_net for l in lines))
    total_vat = round2(sum(l.line_vat for l in lines))
    total_gross = round2(sum(l.line_gross for l in lines))

    return InvoiceTotals(total_net=total_net, total_vat=total_vat, total_gross=total_gross)


def add_days(d: date, days: int) -> date:
    return d + timedelta(days=days)


def calculate_due_date(issue_date: date, payment_term_days: int) -> date:
    return add_days(issue_date, payment_term_days)

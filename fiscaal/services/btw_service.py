# fiscaal/services/btw_service.py
"""
Quarterly BTW (Dutch VAT) declaration figures.

Pure computation over already loaded invoices, expenses and kilometer
entries. Nothing here reads or writes the database; saving a declaration
is done by ``btw_declaration_service``.
"""
from __future__ import annotations

import calendar
from dataclasses import dataclass, field, asdict
from datetime import date
from enum import Enum
from typing import Iterable

from fiscaal.core.config import settings
from fiscaal.core.errors import ValidationError
from fiscaal.models.invoice import STATUS_CANCELLED
from fiscaal.services.money import round2

QUARTERS = ("Q1", "Q2", "Q3", "Q4")

# (start month/day, end month/day), inclusive
QUARTER_DATES = {
    "Q1": ((1, 1), (3, 31)),
    "Q2": ((4, 1), (6, 30)),
    "Q3": ((7, 1), (9, 30)),
    "Q4": ((10, 1), (12, 31)),
}

POLICY_NEAREST = "nearest"
POLICY_SEPARATE = "separate"

BALANCE_TO_PAY = "to_pay"
BALANCE_TO_REFUND = "to_refund"
BALANCE_ZERO = "zero"


class RateBucket(str, Enum):
    REVERSE_CHARGE = "reverse_charge"
    HIGH = "high"
    LOW = "low"
    ZERO = "zero"
    UNCLASSIFIED = "unclassified"


@dataclass(frozen=True)
class VatBands:
    """
    Tolerance bands on the effective rate of an invoice.

    High and low bands are inclusive on both ends, the zero band is
    ``0 <= rate < zero_max``.
    """

    high_rate: float = 21.0
    low_rate: float = 9.0
    high_min: float = 20.0
    high_max: float = 22.0
    low_min: float = 8.0
    low_max: float = 10.0
    zero_max: float = 1.0

    def __post_init__(self):
        if not (self.zero_max <= self.low_min <= self.low_max < self.high_min <= self.high_max):
            raise ValueError("VAT bands overlap or are out of order")
        if not (self.low_min <= self.low_rate <= self.low_max):
            raise ValueError("Low rate outside its own band")
        if not (self.high_min <= self.high_rate <= self.high_max):
            raise ValueError("High rate outside its own band")

    @classmethod
    def from_settings(cls) -> "VatBands":
        return cls(
            high_rate=settings.BTW_HIGH_RATE,
            low_rate=settings.BTW_LOW_RATE,
            high_min=settings.BTW_HIGH_BAND_MIN,
            high_max=settings.BTW_HIGH_BAND_MAX,
            low_min=settings.BTW_LOW_BAND_MIN,
            low_max=settings.BTW_LOW_BAND_MAX,
            zero_max=settings.BTW_ZERO_BAND_MAX,
        )


@dataclass
class DeclarationResult:
    year: int
    period: str
    start_date: date
    end_date: date

    # Omzet per bucket
    revenue_high: float = 0.0
    revenue_low: float = 0.0
    revenue_zero: float = 0.0
    revenue_reverse_charge: float = 0.0
    revenue_unclassified: float = 0.0
    total_revenue: float = 0.0

    # Verschuldigde BTW
    vat_high: float = 0.0
    vat_low: float = 0.0

    # Privégebruik
    total_km: float = 0.0
    private_km: float = 0.0
    private_use_vat: float = 0.0

    # Voorbelasting
    input_vat: float = 0.0

    total_vat_payable: float = 0.0
    total_vat_deductible: float = 0.0
    balance: float = 0.0
    balance_status: str = BALANCE_ZERO

    invoices_count: int = 0
    expenses_count: int = 0
    kilometers_count: int = 0
    unclassified_count: int = 0

    buckets: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["start_date"] = self.start_date.isoformat()
        data["end_date"] = self.end_date.isoformat()
        return data

    def declaration_fields(self) -> dict:
        """Column values for a ``BTWDeclaration`` row."""
        return {
            "revenue_nl_high": self.revenue_high,
            "revenue_nl_low": self.revenue_low,
            "revenue_nl_zero": self.revenue_zero,
            "revenue_nl_other": self.revenue_reverse_charge,
            "revenue_unclassified": self.revenue_unclassified,
            "vat_high": self.vat_high,
            "vat_low": self.vat_low,
            "private_use_amount": self.private_km,
            "private_use_vat": self.private_use_vat,
            "input_vat_general": self.input_vat,
            "total_vat_to_pay": self.total_vat_payable,
            "total_vat_deductible": self.total_vat_deductible,
            "balance": self.balance,
        }

    def summary_note(self) -> str:
        return (
            f"Automatisch berekend op basis van {self.invoices_count} facturen, "
            f"{self.expenses_count} uitgaven en {self.kilometers_count} ritten."
        )


# ============================================================
# PERIODS
# ============================================================

def normalize_period(period: str) -> str:
    tag = (period or "").strip().upper()
    if tag not in QUARTERS:
        raise ValidationError(f"Invalid quarter: {period!r}")
    return tag


def quarter_date_range(year: int, period: str) -> tuple[date, date]:
    (sm, sd), (em, ed) = QUARTER_DATES[normalize_period(period)]
    return date(year, sm, sd), date(year, em, ed)


def quarter_for_date(d: date) -> str:
    return f"Q{(d.month - 1) // 3 + 1}"


def payment_deadline(year: int, period: str) -> date:
    """Last day of the month following the quarter (Q4 → 31 January)."""
    _, (end_month, _) = QUARTER_DATES[normalize_period(period)]
    month = end_month + 1
    if month > 12:
        year, month = year + 1, 1
    return date(year, month, calendar.monthrange(year, month)[1])


def _as_date(value) -> date | None:
    if value is None or isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def _in_range(value, start: date, end: date) -> bool:
    d = _as_date(value)
    return d is not None and start <= d <= end


# ============================================================
# CLASSIFICATION BY EFFECTIVE RATE
# ============================================================

def effective_rate(net: float, vat: float) -> float:
    net = net or 0
    if net == 0:
        return 0.0
    return (vat or 0) / net * 100


def classify_rate(rate: float, bands: VatBands) -> RateBucket:
    if bands.high_min <= rate <= bands.high_max:
        return RateBucket.HIGH
    if bands.low_min <= rate <= bands.low_max:
        return RateBucket.LOW
    if 0 <= rate < bands.zero_max:
        return RateBucket.ZERO
    return RateBucket.UNCLASSIFIED


def classify_invoice(invoice, bands: VatBands | None = None) -> RateBucket:
    bands = bands or VatBands.from_settings()

    if getattr(invoice, "reverse_charge", False):
        return RateBucket.REVERSE_CHARGE

    rate = effective_rate(invoice.total_net, invoice.total_vat)
    return classify_rate(rate, bands)


def nearest_bucket(rate: float, bands: VatBands) -> RateBucket:
    candidates = [
        (abs(rate - bands.high_rate), RateBucket.HIGH),
        (abs(rate - bands.low_rate), RateBucket.LOW),
        (abs(rate), RateBucket.ZERO),
    ]
    return min(candidates, key=lambda c: c[0])[1]


# ============================================================
# AANGIFTE
# ============================================================

def calculate_declaration(
    year: int,
    period: str,
    invoices: Iterable,
    expenses: Iterable,
    kilometers: Iterable,
    *,
    private_use_rate: float | None = None,
    bands: VatBands | None = None,
    unclassified_policy: str | None = None,
) -> DeclarationResult:
    """
    Computes the BTW figures for one quarter.

    - invoices dated in the quarter, cancelled ones excluded, are split
      into reverse charge / 21% / 9% / 0% by their effective rate
    - private kilometers are charged at ``private_use_rate`` per km
    - VAT on business expenses is deductible, minus the private share

    Figures are rounded to cents at the end; the balance is positive when
    BTW has to be paid and negative when a refund is due.
    """
    period = normalize_period(period)
    bands = bands or VatBands.from_settings()
    policy = unclassified_policy or settings.BTW_UNCLASSIFIED_POLICY
    if policy not in (POLICY_NEAREST, POLICY_SEPARATE):
        raise ValidationError(f"Unknown unclassified policy: {policy!r}")
    if private_use_rate is None:
        private_use_rate = settings.PRIVATE_USE_VAT_PER_KM

    start, end = quarter_date_range(year, period)

    period_invoices = [
        inv for inv in invoices
        if _in_range(inv.issue_date, start, end) and inv.status != STATUS_CANCELLED
    ]
    period_expenses = [exp for exp in expenses if _in_range(exp.date, start, end)]
    period_kilometers = [km for km in kilometers if _in_range(km.date, start, end)]

    # ---------------------------
    # Rubriek 1: omzet
    # ---------------------------
    revenue = {bucket: 0.0 for bucket in RateBucket}
    unclassified_revenue = 0.0
    unclassified_count = 0

    for inv in period_invoices:
        net = inv.total_net or 0
        bucket = classify_invoice(inv, bands)

        if bucket is RateBucket.UNCLASSIFIED:
            unclassified_revenue += net
            unclassified_count += 1
            if policy == POLICY_NEAREST:
                bucket = nearest_bucket(effective_rate(net, inv.total_vat), bands)

        revenue[bucket] += net

    raw_vat_high = revenue[RateBucket.HIGH] * (bands.high_rate / 100)
    raw_vat_low = revenue[RateBucket.LOW] * (bands.low_rate / 100)

    # ---------------------------
    # Rubriek 1d: privégebruik
    # ---------------------------
    total_km = sum(km.distance or 0 for km in period_kilometers)
    private_km = sum(km.distance or 0 for km in period_kilometers if km.is_private)
    raw_private_use_vat = private_km * private_use_rate

    # ---------------------------
    # Rubriek 5b: voorbelasting
    # ---------------------------
    deductible = 0.0
    for exp in period_expenses:
        if not (exp.is_vat_deductible and exp.is_business_expense):
            continue
        vat_amount = exp.vat_amount or 0
        if exp.private_percentage:
            vat_amount = vat_amount * (1 - exp.private_percentage / 100)
        deductible += vat_amount

    # ---------------------------
    # Saldo
    # ---------------------------
    raw_payable = raw_vat_high + raw_vat_low + raw_private_use_vat
    raw_balance = raw_payable - deductible
    balance = round2(raw_balance)

    if balance > 0:
        balance_status = BALANCE_TO_PAY
    elif balance < 0:
        balance_status = BALANCE_TO_REFUND
    else:
        balance_status = BALANCE_ZERO

    bucketed = (
        revenue[RateBucket.HIGH]
        + revenue[RateBucket.LOW]
        + revenue[RateBucket.ZERO]
        + revenue[RateBucket.REVERSE_CHARGE]
    )
    total_revenue = bucketed if policy == POLICY_NEAREST else bucketed + unclassified_revenue

    return DeclarationResult(
        year=year,
        period=period,
        start_date=start,
        end_date=end,
        revenue_high=round2(revenue[RateBucket.HIGH]),
        revenue_low=round2(revenue[RateBucket.LOW]),
        revenue_zero=round2(revenue[RateBucket.ZERO]),
        revenue_reverse_charge=round2(revenue[RateBucket.REVERSE_CHARGE]),
        revenue_unclassified=round2(unclassified_revenue),
        total_revenue=round2(total_revenue),
        vat_high=round2(raw_vat_high),
        vat_low=round2(raw_vat_low),
        total_km=total_km,
        private_km=private_km,
        private_use_vat=round2(raw_private_use_vat),
        input_vat=round2(deductible),
        total_vat_payable=round2(raw_payable),
        total_vat_deductible=round2(deductible),
        balance=balance,
        balance_status=balance_status,
        invoices_count=len(period_invoices),
        expenses_count=len(period_expenses),
        kilometers_count=len(period_kilometers),
        unclassified_count=unclassified_count,
        buckets={b.value: round2(v) for b, v in revenue.items() if b is not RateBucket.UNCLASSIFIED},
    )

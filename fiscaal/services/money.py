# fiscaal/services/money.py
from decimal import Decimal, ROUND_HALF_UP


def round2(x) -> float:
    """
    Round an amount to cents.

    ``x * 100`` is rounded half away from zero to an integer and divided
    by 100 again. Every monetary step in the application goes through
    here on its own (net, then VAT, then gross), never only at the end.
    """
    cents = Decimal(repr(float(x) * 100)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return float(cents) / 100

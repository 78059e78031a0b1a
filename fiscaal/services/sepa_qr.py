# fiscaal/services/sepa_qr.py
from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP

# EPC069-12 header
SERVICE_TAG = "BCD"
VERSION = "002"
CHARACTER_SET = "1"          # UTF-8
IDENTIFICATION = "SCT"


def _fmt_amount(amount) -> str:
    # Dot decimal separator, no thousands separator, always two decimals
    dec = Decimal(str(amount or "0")).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return f"EUR{format(dec, 'f')}"


def build_sepa_qr_payload(
    bic: str,
    name: str,
    iban: str,
    amount: float,
    reference: str,
    information: str,
) -> str:
    """
    Builds the EPC QR payload ("girocode") for a SEPA credit transfer.

    Twelve lines, newline separated. Lines 9 and 10 (purpose code and
    structured creditor reference) are left empty on purpose: the invoice
    number travels as unstructured reference on line 11.
    """
    lines = [
        SERVICE_TAG,
        VERSION,
        CHARACTER_SET,
        IDENTIFICATION,
        bic or "",
        name or "",
        iban or "",
        _fmt_amount(amount),
        "",
        "",
        reference or "",
        information or "",
    ]

    return "\n".join(lines)


def payment_information(invoice_number: str, company_name: str) -> str:
    return f"Factuur {invoice_number} – {company_name}"

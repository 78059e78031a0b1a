# fiscaal/services/invoice_numbering.py
from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import date
from typing import Protocol

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from fiscaal.core.config import settings
from fiscaal.core.errors import PersistenceConflict
from fiscaal.models.invoice_counter import InvoiceCounter


@dataclass(frozen=True)
class AllocatedNumber:
    number: str
    year: int
    month: int
    seq: int


def period_key(year: int, month: int) -> str:
    return f"{year}-{month}"


def format_invoice_number(year: int, month: int, seq: int, prefix: str | None = None) -> str:
    """
    FV-2025-05-001

    The three digit padding is cosmetic: seq 1000 becomes "1000".
    """
    prefix = prefix or settings.INVOICE_PREFIX
    return f"{prefix}-{year:04d}-{month:02d}-{seq:03d}"


class CounterStore(Protocol):
    """
    Last issued sequence per (year, month).

    ``allocate_next`` is a single atomic read-modify-write: two callers can
    never get the same value for the same period.
    """

    def current(self, year: int, month: int) -> int: ...

    def allocate_next(self, year: int, month: int) -> int: ...


class InMemoryCounterStore:
    def __init__(self, initial: dict[str, int] | None = None):
        self._counters: dict[str, int] = dict(initial or {})
        self._lock = threading.Lock()

    def current(self, year: int, month: int) -> int:
        with self._lock:
            return self._counters.get(period_key(year, month), 0)

    def allocate_next(self, year: int, month: int) -> int:
        key = period_key(year, month)
        with self._lock:
            seq = self._counters.get(key, 0) + 1
            self._counters[key] = seq
            return seq

    def snapshot(self) -> dict[str, int]:
        with self._lock:
            return dict(self._counters)


class SqlCounterStore:
    """
    Counter store on the ``invoice_counter`` table.

    Works inside the caller's transaction and never commits: if the
    surrounding invoice insert fails, the rollback also undoes the
    increment.
    """

    def __init__(self, session: Session, max_retries: int | None = None):
        self.session = session
        self.max_retries = max_retries or settings.COUNTER_MAX_RETRIES

    def _read(self, year: int, month: int) -> int | None:
        return self.session.exec(
            select(InvoiceCounter.last_seq)
            .where(InvoiceCounter.year == year)
            .where(InvoiceCounter.month == month)
        ).first()

    def current(self, year: int, month: int) -> int:
        return self._read(year, month) or 0

    def _increment(self, year: int, month: int) -> bool:
        result = self.session.exec(
            update(InvoiceCounter)
            .where(InvoiceCounter.year == year)
            .where(InvoiceCounter.month == month)
            .values(last_seq=InvoiceCounter.last_seq + 1)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def allocate_next(self, year: int, month: int) -> int:
        for _ in range(self.max_retries):
            if not self._increment(year, month):
                # First invoice of the period: create the row
                try:
                    with self.session.begin_nested():
                        self.session.add(InvoiceCounter(year=year, month=month, last_seq=1))
                    return 1
                except IntegrityError:
                    # Someone else created it in between, increment theirs
                    continue

            return self._read(year, month)

        raise PersistenceConflict(
            f"Could not allocate an invoice number for period {period_key(year, month)}"
        )


def next_invoice_number(store: CounterStore, issue_date: date) -> AllocatedNumber:
    year = issue_date.year
    month = issue_date.month

    seq = store.allocate_next(year, month)

    return AllocatedNumber(
        number=format_invoice_number(year, month, seq),
        year=year,
        month=month,
        seq=seq,
    )


def preview_invoice_number(store: CounterStore, issue_date: date) -> str:
    """Next number for the period, without reserving it."""
    seq = store.current(issue_date.year, issue_date.month) + 1
    return format_invoice_number(issue_date.year, issue_date.month, seq)

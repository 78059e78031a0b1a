import threading
from datetime import date

import pytest
from sqlmodel import Session

from fiscaal.core.errors import PersistenceConflict
from fiscaal.models.invoice_counter import InvoiceCounter
from fiscaal.services.invoice_numbering import (
    InMemoryCounterStore,
    SqlCounterStore,
    format_invoice_number,
    next_invoice_number,
    period_key,
    preview_invoice_number,
)


def test_format_invoice_number() -> None:
    assert format_invoice_number(2025, 5, 1) == "FV-2025-05-001"
    assert format_invoice_number(2025, 12, 42) == "FV-2025-12-042"
    assert format_invoice_number(2025, 5, 1000) == "FV-2025-05-1000"


def test_period_key_is_not_padded() -> None:
    assert period_key(2025, 5) == "2025-5"


def test_sequential_allocation_in_memory() -> None:
    store = InMemoryCounterStore()

    numbers = [next_invoice_number(store, date(2025, 5, d)) for d in (1, 15, 31)]

    assert [n.seq for n in numbers] == [1, 2, 3]
    assert [n.number for n in numbers] == [
        "FV-2025-05-001",
        "FV-2025-05-002",
        "FV-2025-05-003",
    ]


def test_new_month_starts_at_one() -> None:
    store = InMemoryCounterStore({"2025-5": 7})

    allocated = next_invoice_number(store, date(2025, 6, 2))

    assert allocated.number == "FV-2025-06-001"
    assert store.snapshot() == {"2025-5": 7, "2025-6": 1}


def test_concurrent_allocation_has_no_duplicates() -> None:
    store = InMemoryCounterStore()
    issued: list[int] = []
    issued_lock = threading.Lock()

    def worker():
        for _ in range(50):
            seq = store.allocate_next(2025, 5)
            with issued_lock:
                issued.append(seq)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(issued) == list(range(1, 401))


def test_sql_store_allocates_gapless(session) -> None:
    store = SqlCounterStore(session)

    seqs = [store.allocate_next(2025, 5) for _ in range(5)]
    session.commit()

    assert seqs == [1, 2, 3, 4, 5]
    assert session.get(InvoiceCounter, (2025, 5)).last_seq == 5


def test_sql_store_months_are_independent(session) -> None:
    store = SqlCounterStore(session)

    store.allocate_next(2025, 5)
    store.allocate_next(2025, 5)
    assert store.allocate_next(2025, 6) == 1
    session.commit()

    assert store.current(2025, 5) == 2
    assert store.current(2025, 6) == 1


def test_sql_store_rollback_undoes_increment(session) -> None:
    store = SqlCounterStore(session)
    store.allocate_next(2025, 5)
    session.commit()

    store.allocate_next(2025, 5)
    session.rollback()

    assert store.current(2025, 5) == 1
    assert store.allocate_next(2025, 5) == 2


def test_preview_does_not_reserve(session) -> None:
    store = SqlCounterStore(session)

    assert preview_invoice_number(store, date(2025, 5, 15)) == "FV-2025-05-001"
    assert preview_invoice_number(store, date(2025, 5, 15)) == "FV-2025-05-001"
    assert store.current(2025, 5) == 0


@pytest.mark.parametrize("existing", [998, 999])
def test_sequence_passes_padding_width(existing) -> None:
    store = InMemoryCounterStore({"2025-5": existing})

    allocated = next_invoice_number(store, date(2025, 5, 1))

    assert allocated.seq == existing + 1
    assert allocated.number == format_invoice_number(2025, 5, existing + 1)


def test_sql_store_gives_up_after_bounded_retries(engine, session, monkeypatch) -> None:
    # Row created by another connection after our UPDATE missed it
    with Session(engine) as other:
        other.add(InvoiceCounter(year=2025, month=5, last_seq=4))
        other.commit()

    store = SqlCounterStore(session, max_retries=2)
    attempts = []

    def increment_misses(year, month):
        attempts.append((year, month))
        return False

    monkeypatch.setattr(store, "_increment", increment_misses)

    with pytest.raises(PersistenceConflict):
        store.allocate_next(2025, 5)

    assert len(attempts) == 2
    assert store.current(2025, 5) == 4

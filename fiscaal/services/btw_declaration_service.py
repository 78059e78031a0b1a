# fiscaal/services/btw_declaration_service.py
from __future__ import annotations

from sqlmodel import Session, select

from fiscaal.core.clock import utcnow
from fiscaal.core.errors import NotFoundError, ValidationError
from fiscaal.core.logger import logger
from fiscaal.models.btw_declaration import (
    DECLARATION_STATUSES,
    STATUS_DRAFT,
    STATUS_PAID,
    STATUS_SUBMITTED,
    BTWDeclaration,
)
from fiscaal.models.expense import Expense
from fiscaal.models.invoice import Invoice
from fiscaal.models.kilometer import KilometerEntry
from fiscaal.services.btw_service import (
    DeclarationResult,
    calculate_declaration,
    normalize_period,
    quarter_date_range,
)

# draft → draft (re-save), draft → submitted → paid
ALLOWED_TRANSITIONS = {
    STATUS_DRAFT: {STATUS_DRAFT, STATUS_SUBMITTED},
    STATUS_SUBMITTED: {STATUS_PAID},
    STATUS_PAID: set(),
}


def check_transition(current: str, new: str, *, override: bool = False) -> None:
    if new not in DECLARATION_STATUSES:
        raise ValidationError(f"Invalid declaration status: {new!r}")
    if override:
        return
    if new not in ALLOWED_TRANSITIONS[current]:
        raise ValidationError(
            f"Declaration is {current}; moving to {new} requires an explicit override"
        )


def compute_for_period(session: Session, year: int, period: str) -> DeclarationResult:
    """
    Loads the quarter's invoices, expenses and kilometers and computes
    the declaration figures. Nothing is saved.
    """
    start, end = quarter_date_range(year, period)

    invoices = session.exec(
        select(Invoice).where(Invoice.issue_date >= start).where(Invoice.issue_date <= end)
    ).all()
    expenses = session.exec(
        select(Expense).where(Expense.date >= start).where(Expense.date <= end)
    ).all()
    kilometers = session.exec(
        select(KilometerEntry)
        .where(KilometerEntry.date >= start)
        .where(KilometerEntry.date <= end)
    ).all()

    return calculate_declaration(year, period, invoices, expenses, kilometers)


def get_declaration(session: Session, year: int, period: str) -> BTWDeclaration | None:
    return session.exec(
        select(BTWDeclaration)
        .where(BTWDeclaration.year == year)
        .where(BTWDeclaration.period == normalize_period(period))
    ).first()


def list_declarations(session: Session, year: int | None = None) -> list[BTWDeclaration]:
    query = select(BTWDeclaration)
    if year:
        query = query.where(BTWDeclaration.year == year)
    return list(session.exec(query.order_by(BTWDeclaration.year, BTWDeclaration.period)).all())


def save_declaration(
    session: Session,
    year: int,
    period: str,
    result: DeclarationResult | None = None,
    *,
    status: str = STATUS_DRAFT,
    notes: str | None = None,
    override: bool = False,
) -> BTWDeclaration:
    """
    Creates or updates the declaration of (year, period) with freshly
    computed figures.

    A submitted or paid declaration is never recomputed silently: it
    needs ``override=True``.
    """
    period = normalize_period(period)
    if result is None:
        result = compute_for_period(session, year, period)

    declaration = get_declaration(session, year, period)

    if declaration:
        if declaration.status != STATUS_DRAFT and not override:
            raise ValidationError(
                f"Declaration {year}-{period} is {declaration.status}; "
                "recomputing it requires an explicit override"
            )
        check_transition(declaration.status, status, override=override)
    else:
        # A new declaration starts as a draft
        check_transition(STATUS_DRAFT, status, override=override)
        declaration = BTWDeclaration(year=year, period=period)

    for name, value in result.declaration_fields().items():
        setattr(declaration, name, value)

    if status == STATUS_SUBMITTED and declaration.status != STATUS_SUBMITTED:
        declaration.submitted_at = utcnow()

    declaration.status = status
    declaration.notes = notes or result.summary_note()
    declaration.updated_at = utcnow()

    session.add(declaration)
    session.commit()
    session.refresh(declaration)

    logger.info(
        f"BTW {year}-{period} saved as {status} (balance={declaration.balance:.2f})"
    )
    return declaration


def update_declaration_status(
    session: Session,
    year: int,
    period: str,
    status: str,
    *,
    override: bool = False,
) -> BTWDeclaration:
    declaration = get_declaration(session, year, period)
    if not declaration:
        raise NotFoundError("Declaration not found")

    previous = declaration.status
    check_transition(previous, status, override=override)

    if status == STATUS_SUBMITTED and previous != STATUS_SUBMITTED:
        declaration.submitted_at = utcnow()

    declaration.status = status
    declaration.updated_at = utcnow()
    session.add(declaration)
    session.commit()
    session.refresh(declaration)

    if override:
        logger.warning(f"BTW {year}-{declaration.period}: {previous} -> {status} (override)")
    else:
        logger.info(f"BTW {year}-{declaration.period}: {previous} -> {status}")
    return declaration


def delete_declaration(session: Session, year: int, period: str) -> None:
    declaration = get_declaration(session, year, period)
    if not declaration:
        raise NotFoundError("Declaration not found")

    session.delete(declaration)
    session.commit()
    logger.info(f"BTW {year}-{declaration.period} deleted")

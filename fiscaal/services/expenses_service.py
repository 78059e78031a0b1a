# fiscaal/services/expenses_service.py
from __future__ import annotations

from datetime import date

from sqlmodel import Session, select

from fiscaal.core.logger import logger
from fiscaal.models.expense import Expense
from fiscaal.schemas import ExpenseIn
from fiscaal.services.money import round2


def calculate_expense_amounts(amount_net: float, vat_rate: float) -> tuple[float, float]:
    """(vat_amount, amount_gross), rounded the same way as invoice lines."""
    vat = round2(amount_net * (vat_rate / 100))
    gross = round2(amount_net + vat)
    return vat, gross


def create_expense(session: Session, data: ExpenseIn) -> Expense:
    vat_amount, amount_gross = calculate_expense_amounts(data.amount_net, data.vat_rate)

    expense = Expense(
        **data.model_dump(),
        vat_amount=vat_amount,
        amount_gross=amount_gross,
    )
    session.add(expense)
    session.commit()
    session.refresh(expense)

    logger.info(f"Expense {expense.id} stored ({expense.supplier}, vat={vat_amount:.2f})")
    return expense


def list_expenses(
    session: Session,
    date_from: date | None = None,
    date_to: date | None = None,
) -> list[Expense]:
    query = select(Expense)

    if date_from:
        query = query.where(Expense.date >= date_from)

    if date_to:
        query = query.where(Expense.date <= date_to)

    return list(session.exec(query.order_by(Expense.date)).all())

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session
from datetime import date

from fiscaal.db.session import get_session
from fiscaal.schemas import ExpenseIn
from fiscaal.services import expenses_service

router = APIRouter(prefix="/expenses", tags=["Expenses"])


@router.get("")
def expenses_list(
    date_from: date | None = Query(None),
    date_to: date | None = Query(None),
    session: Session = Depends(get_session),
):
    return expenses_service.list_expenses(session, date_from, date_to)


@router.post("", status_code=201)
def expense_create(
    data: ExpenseIn,
    session: Session = Depends(get_session),
):
    return expenses_service.create_expense(session, data)

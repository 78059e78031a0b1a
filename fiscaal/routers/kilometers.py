from fastapi import APIRouter, Depends, Query
from sqlmodel import Session
from datetime import date

from fiscaal.db.session import get_session
from fiscaal.schemas import KilometerIn
from fiscaal.services import kilometers_service

router = APIRouter(prefix="/kilometers", tags=["Kilometers"])


@router.get("")
def kilometers_list(
    date_from: date | None = Query(None),
    date_to: date | None = Query(None),
    session: Session = Depends(get_session),
):
    return kilometers_service.list_kilometer_entries(session, date_from, date_to)


@router.post("", status_code=201)
def kilometer_create(
    data: KilometerIn,
    session: Session = Depends(get_session),
):
    return kilometers_service.create_kilometer_entry(session, data)

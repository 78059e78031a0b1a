from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from fiscaal.db.session import get_session
from fiscaal.schemas import DeclarationSaveIn, DeclarationStatusIn
from fiscaal.services import btw_declaration_service
from fiscaal.services.btw_service import normalize_period, payment_deadline

router = APIRouter(prefix="/btw", tags=["BTW"])


# ============================================================
# LIST SAVED DECLARATIONS
# ============================================================
@router.get("")
def btw_list(
    year: int | None = Query(None),
    session: Session = Depends(get_session),
):
    return btw_declaration_service.list_declarations(session, year)


# ============================================================
# CALCULATE (not saved)
# ============================================================
@router.get("/{year}/{period}")
def btw_calculate(
    year: int,
    period: str,
    session: Session = Depends(get_session),
):
    period = normalize_period(period)
    result = btw_declaration_service.compute_for_period(session, year, period)
    saved = btw_declaration_service.get_declaration(session, year, period)

    return {
        "calculated": result.to_dict(),
        "payment_deadline": payment_deadline(year, period).isoformat(),
        "saved": saved,
    }


# ============================================================
# SAVE
# ============================================================
@router.post("/{year}/{period}")
def btw_save(
    year: int,
    period: str,
    data: DeclarationSaveIn,
    session: Session = Depends(get_session),
):
    return btw_declaration_service.save_declaration(
        session,
        year,
        period,
        status=data.status,
        notes=data.notes,
        override=data.override,
    )


@router.post("/{year}/{period}/status")
def btw_status(
    year: int,
    period: str,
    data: DeclarationStatusIn,
    session: Session = Depends(get_session),
):
    return btw_declaration_service.update_declaration_status(
        session, year, period, data.status, override=data.override
    )


@router.delete("/{year}/{period}", status_code=204)
def btw_delete(
    year: int,
    period: str,
    session: Session = Depends(get_session),
):
    btw_declaration_service.delete_declaration(session, year, period)

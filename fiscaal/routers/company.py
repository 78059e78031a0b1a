from fastapi import APIRouter, Depends
from sqlmodel import Session, select

from fiscaal.db.session import get_session
from fiscaal.core.errors import NotFoundError, ValidationError
from fiscaal.models.client import Client
from fiscaal.models.company import Company
from fiscaal.schemas import ClientIn, CompanyIn
from fiscaal.services.invoices_service import get_company

router = APIRouter(tags=["Company"])


# ============================================================
# COMPANY PROFILE (singleton)
# ============================================================
@router.get("/company")
def company_detail(session: Session = Depends(get_session)):
    company = get_company(session)
    if not company:
        raise NotFoundError("No company profile configured")
    return company


@router.put("/company")
def company_update(
    data: CompanyIn,
    session: Session = Depends(get_session),
):
    company = get_company(session) or Company()

    for name, value in data.model_dump().items():
        setattr(company, name, value)

    session.add(company)
    session.commit()
    session.refresh(company)
    return company


# ============================================================
# CLIENTS
# ============================================================
@router.get("/clients")
def clients_list(session: Session = Depends(get_session)):
    return session.exec(select(Client).order_by(Client.name)).all()


@router.post("/clients", status_code=201)
def client_create(
    data: ClientIn,
    session: Session = Depends(get_session),
):
    client = Client(**data.model_dump())
    session.add(client)
    session.commit()
    session.refresh(client)
    return client


@router.put("/clients/{client_id}")
def client_update(
    client_id: int,
    data: ClientIn,
    session: Session = Depends(get_session),
):
    client = session.get(Client, client_id)
    if not client:
        raise NotFoundError("Client not found")

    for name, value in data.model_dump().items():
        setattr(client, name, value)

    session.add(client)
    session.commit()
    session.refresh(client)
    return client


@router.delete("/clients/{client_id}", status_code=204)
def client_delete(client_id: int, session: Session = Depends(get_session)):
    client = session.get(Client, client_id)
    if not client:
        raise NotFoundError("Client not found")

    # Invoiced clients stay: their invoices point at them
    if client.invoices:
        raise ValidationError("Client has invoices and cannot be deleted")

    session.delete(client)
    session.commit()

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("FISCAAL_NO_ENV_FILE", "1")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from fiscaal.db.base import init_db
from fiscaal.db.session import get_session
from fiscaal.main import app
from fiscaal.models.client import Client
from fiscaal.models.company import Company


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture()
def company(session):
    company = Company(
        name="Test BV",
        kvk_number="12345678",
        vat_number="NL001234567B01",
        iban="NL25INGB0109126122",
        bic="INGBNL2A",
        default_vat_rate=21.0,
        payment_term_days=14,
    )
    session.add(company)
    session.commit()
    session.refresh(company)
    return company


@pytest.fixture()
def client_row(session):
    client = Client(name="Klant NV", city="Utrecht")
    session.add(client)
    session.commit()
    session.refresh(client)
    return client


@pytest.fixture()
def api(engine):
    def override_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_session
    yield TestClient(app)
    app.dependency_overrides.clear()

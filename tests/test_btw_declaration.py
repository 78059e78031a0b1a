from datetime import date

import pytest

from fiscaal.core.errors import NotFoundError, ValidationError
from fiscaal.models.btw_declaration import BTWDeclaration
from fiscaal.models.expense import Expense
from fiscaal.models.invoice import Invoice
from fiscaal.models.kilometer import KilometerEntry
from fiscaal.services import btw_declaration_service as svc


@pytest.fixture()
def quarter_data(session, company, client_row):
    session.add(
        Invoice(
            invoice_number="FV-2025-05-001",
            company_id=company.id,
            client_id=client_row.id,
            issue_date=date(2025, 5, 15),
            due_date=date(2025, 5, 29),
            total_net=500.0,
            total_vat=105.0,
            total_gross=605.0,
            payment_reference="FV-2025-05-001",
        )
    )
    session.add(
        Expense(
            date=date(2025, 5, 20),
            supplier="Leverancier",
            amount_net=100.0,
            vat_rate=21.0,
            vat_amount=21.0,
            amount_gross=121.0,
        )
    )
    session.add(KilometerEntry(date=date(2025, 6, 1), distance=100, is_private=True))
    session.commit()


def test_compute_for_period_reads_the_quarter(session, quarter_data) -> None:
    result = svc.compute_for_period(session, 2025, "Q2")

    assert result.total_vat_payable == 126.0
    assert result.total_vat_deductible == 21.0
    assert result.balance == 105.0


def test_compute_does_not_persist(session, quarter_data) -> None:
    svc.compute_for_period(session, 2025, "Q2")

    assert svc.get_declaration(session, 2025, "Q2") is None


def test_save_creates_draft(session, quarter_data) -> None:
    declaration = svc.save_declaration(session, 2025, "q2")

    assert declaration.period == "Q2"
    assert declaration.status == "draft"
    assert declaration.revenue_nl_high == 500.0
    assert declaration.private_use_vat == 21.0
    assert declaration.balance == 105.0
    assert "1 facturen, 1 uitgaven en 1 ritten" in declaration.notes


def test_resave_draft_updates_same_row(session, quarter_data) -> None:
    first = svc.save_declaration(session, 2025, "Q2")
    session.add(KilometerEntry(date=date(2025, 6, 2), distance=50, is_private=True))
    session.commit()

    second = svc.save_declaration(session, 2025, "Q2")

    assert second.id == first.id
    assert second.private_use_amount == 150
    assert len(svc.list_declarations(session, 2025)) == 1


def test_draft_submitted_paid(session, quarter_data) -> None:
    svc.save_declaration(session, 2025, "Q2")

    submitted = svc.save_declaration(session, 2025, "Q2", status="submitted")
    assert submitted.status == "submitted"
    assert submitted.submitted_at is not None

    paid = svc.update_declaration_status(session, 2025, "Q2", "paid")
    assert paid.status == "paid"


def test_submitted_is_not_recomputed_without_override(session, quarter_data) -> None:
    svc.save_declaration(session, 2025, "Q2", status="submitted")

    with pytest.raises(ValidationError):
        svc.save_declaration(session, 2025, "Q2", status="draft")

    with pytest.raises(ValidationError):
        svc.save_declaration(session, 2025, "Q2", status="submitted")


def test_no_way_back_without_override(session, quarter_data) -> None:
    svc.save_declaration(session, 2025, "Q2", status="submitted")
    svc.update_declaration_status(session, 2025, "Q2", "paid")

    with pytest.raises(ValidationError):
        svc.update_declaration_status(session, 2025, "Q2", "draft")

    reopened = svc.update_declaration_status(session, 2025, "Q2", "draft", override=True)
    assert reopened.status == "draft"


def test_new_declaration_cannot_start_as_paid(session, quarter_data) -> None:
    with pytest.raises(ValidationError):
        svc.save_declaration(session, 2025, "Q2", status="paid")

    assert session.get(BTWDeclaration, 1) is None


def test_status_of_missing_declaration(session) -> None:
    with pytest.raises(NotFoundError):
        svc.update_declaration_status(session, 2025, "Q3", "submitted")


def test_delete_declaration(session, quarter_data) -> None:
    svc.save_declaration(session, 2025, "Q2")

    svc.delete_declaration(session, 2025, "Q2")

    assert svc.get_declaration(session, 2025, "Q2") is None

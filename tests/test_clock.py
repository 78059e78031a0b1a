from datetime import timezone

from fiscaal.core.clock import utcnow
from fiscaal.models.btw_declaration import BTWDeclaration
from fiscaal.models.client import Client


def test_utcnow_is_timezone_aware() -> None:
    assert utcnow().tzinfo is timezone.utc


def test_timestamps_are_aware_and_stored(session) -> None:
    client = Client(name="Klant NV")
    declaration = BTWDeclaration(year=2025, period="Q2")
    assert client.created_at.tzinfo is timezone.utc
    assert declaration.updated_at.tzinfo is timezone.utc

    session.add(client)
    session.add(declaration)
    session.commit()
    session.refresh(client)
    session.refresh(declaration)

    assert client.created_at is not None
    assert declaration.created_at is not None

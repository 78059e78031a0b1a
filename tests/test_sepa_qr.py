from fiscaal.services.sepa_qr import build_sepa_qr_payload, payment_information


def test_payload_layout() -> None:
    payload = build_sepa_qr_payload(
        "INGBNL2A",
        "Test BV",
        "NL25INGB0109126122",
        605.00,
        "FV-2025-05-001",
        "Factuur FV-2025-05-001",
    )
    lines = payload.split("\n")

    assert len(lines) == 12
    assert lines[:4] == ["BCD", "002", "1", "SCT"]
    assert lines[4:7] == ["INGBNL2A", "Test BV", "NL25INGB0109126122"]
    assert lines[7] == "EUR605.00"
    assert lines[8] == ""
    assert lines[9] == ""
    assert lines[10] == "FV-2025-05-001"
    assert lines[11] == "Factuur FV-2025-05-001"


def test_amount_always_has_two_decimals() -> None:
    payload = build_sepa_qr_payload("BIC", "Name", "IBAN", 1234.5, "REF", "")

    assert payload.split("\n")[7] == "EUR1234.50"
    assert "," not in payload.split("\n")[7]


def test_payment_information() -> None:
    assert payment_information("FV-2025-05-001", "Test BV") == "Factuur FV-2025-05-001 – Test BV"

COMPANY = {
    "name": "Test BV",
    "vat_number": "NL001234567B01",
    "iban": "NL25INGB0109126122",
    "bic": "INGBNL2A",
    "default_vat_rate": 21,
    "payment_term_days": 14,
}

INVOICE = {
    "issue_date": "2025-05-15",
    "lines": [{"description": "Consultancy", "quantity": 10, "unit_price": 50, "vat_rate": 21}],
}


def setup_company_and_client(api) -> int:
    assert api.put("/company", json=COMPANY).status_code == 200
    response = api.post("/clients", json={"name": "Klant NV"})
    assert response.status_code == 201
    return response.json()["id"]


def test_create_invoice(api) -> None:
    client_id = setup_company_and_client(api)

    response = api.post("/invoices", json={**INVOICE, "client_id": client_id})

    assert response.status_code == 201
    body = response.json()
    assert body["invoice_number"] == "FV-2025-05-001"
    assert body["total_net"] == 500.0
    assert body["total_vat"] == 105.0
    assert body["total_gross"] == 605.0
    assert body["due_date"] == "2025-05-29"
    assert body["payment_qr_payload"].split("\n")[7] == "EUR605.00"
    assert len(body["lines"]) == 1


def test_next_number_preview(api) -> None:
    client_id = setup_company_and_client(api)
    api.post("/invoices", json={**INVOICE, "client_id": client_id})

    response = api.get("/invoices/next-number", params={"issue_date": "2025-05-20"})

    assert response.json() == {"number": "FV-2025-05-002"}


def test_validation_errors_are_400(api) -> None:
    client_id = setup_company_and_client(api)

    response = api.post("/invoices", json={**INVOICE, "client_id": client_id, "lines": []})

    assert response.status_code == 400
    assert response.json()["error"] == "ValidationError"


def test_missing_company_is_400(api) -> None:
    response = api.post("/invoices", json={**INVOICE, "client_id": 1})

    assert response.status_code == 400


def test_preview(api) -> None:
    response = api.post("/invoices/preview", json={**INVOICE, "reverse_charge": True})

    assert response.status_code == 200
    body = response.json()
    assert body["total_vat"] == 0.0
    assert body["total_gross"] == 500.0
    assert body["lines"][0]["vat_rate"] == 0.0


def test_btw_quarter_flow(api) -> None:
    client_id = setup_company_and_client(api)
    api.post("/invoices", json={**INVOICE, "client_id": client_id})
    cancelled = api.post("/invoices", json={**INVOICE, "client_id": client_id}).json()
    api.post(f"/invoices/{cancelled['id']}/status", json={"status": "cancelled"})

    api.post(
        "/expenses",
        json={"date": "2025-05-20", "supplier": "Leverancier", "amount_net": 100, "vat_rate": 21},
    )
    api.post("/kilometers", json={"date": "2025-06-01", "distance": 100, "is_private": True})

    response = api.get("/btw/2025/Q2")
    assert response.status_code == 200
    calculated = response.json()["calculated"]
    assert calculated["invoices_count"] == 1
    assert calculated["total_vat_payable"] == 126.0
    assert calculated["total_vat_deductible"] == 21.0
    assert calculated["balance"] == 105.0
    assert response.json()["payment_deadline"] == "2025-07-31"
    assert response.json()["saved"] is None

    saved = api.post("/btw/2025/Q2", json={"status": "submitted"})
    assert saved.status_code == 200
    assert saved.json()["status"] == "submitted"

    back = api.post("/btw/2025/Q2/status", json={"status": "draft"})
    assert back.status_code == 400

    paid = api.post("/btw/2025/Q2/status", json={"status": "paid"})
    assert paid.json()["status"] == "paid"


def test_unknown_quarter(api) -> None:
    assert api.get("/btw/2025/Q7").status_code == 400


def test_expense_amounts_are_derived(api) -> None:
    response = api.post(
        "/expenses",
        json={"date": "2025-05-20", "supplier": "Shop", "amount_net": 19.99, "vat_rate": 21},
    )

    body = response.json()
    assert body["vat_amount"] == 4.2
    assert body["amount_gross"] == 24.19


def test_kilometer_allowance(api) -> None:
    response = api.post(
        "/kilometers",
        json={"date": "2025-05-02", "distance": 100, "vehicle_type": "bike"},
    )

    body = response.json()
    assert body["rate"] == 0.27
    assert body["amount"] == 27.0


def test_product_catalog(api) -> None:
    created = api.post("/products", json={"name": "Workshop", "unit_price": 250, "vat_rate": 9})
    assert created.status_code == 201
    product_id = created.json()["id"]

    updated = api.put(
        f"/products/{product_id}",
        json={"name": "Workshop (dag)", "unit_price": 300, "vat_rate": 9},
    )
    assert updated.json()["unit_price"] == 300.0

    assert [p["name"] for p in api.get("/products").json()] == ["Workshop (dag)"]

    api.put(f"/products/{product_id}", json={"name": "Workshop (dag)", "active": False})
    assert api.get("/products").json() == []
    assert len(api.get("/products", params={"include_inactive": True}).json()) == 1

    assert api.put("/products/999", json={"name": "X"}).status_code == 404


def test_product_prefills_invoice_line(api) -> None:
    client_id = setup_company_and_client(api)
    product_id = api.post(
        "/products", json={"name": "Workshop", "unit_price": 250, "vat_rate": 9}
    ).json()["id"]

    response = api.post(
        "/invoices",
        json={
            "issue_date": "2025-05-15",
            "client_id": client_id,
            "lines": [{"product_id": product_id, "quantity": 2}],
        },
    )

    body = response.json()
    assert body["lines"][0]["description"] == "Workshop"
    assert body["total_gross"] == 545.0


def test_client_update_and_delete(api) -> None:
    client_id = setup_company_and_client(api)

    updated = api.put(f"/clients/{client_id}", json={"name": "Klant NV", "city": "Delft"})
    assert updated.status_code == 200
    assert updated.json()["city"] == "Delft"

    spare = api.post("/clients", json={"name": "Zonder Facturen"}).json()["id"]
    assert api.delete(f"/clients/{spare}").status_code == 204
    assert [c["id"] for c in api.get("/clients").json()] == [client_id]

    assert api.delete("/clients/999").status_code == 404


def test_invoiced_client_cannot_be_deleted(api) -> None:
    client_id = setup_company_and_client(api)
    api.post("/invoices", json={**INVOICE, "client_id": client_id})

    response = api.delete(f"/clients/{client_id}")

    assert response.status_code == 400
    assert len(api.get("/clients").json()) == 1

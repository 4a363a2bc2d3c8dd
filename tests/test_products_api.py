"""
Product catalogue, review and purchase.
"""

PRODUCT = {
    "title": "Travel Cover",
    "description": "Medical and baggage cover abroad",
    "coverageAmount": 20000,
    "premium": 120,
    "duration": 12,
}


def _submit(client, headers, **overrides):
    payload = dict(PRODUCT)
    payload.update(overrides)
    return client.post("/products", headers=headers, json=payload)


def test_standard_submission_awaits_review(client, register, admin_headers, notifier):
    author, stranger = register(), register()
    res = _submit(client, author["headers"])
    assert res.status_code == 201
    product = res.json()
    assert product["isApproved"] is False

    catalogue = client.get("/products")
    assert catalogue.status_code == 200
    assert product["id"] not in [p["id"] for p in catalogue.json()]

    assert client.get(f"/products/{product['id']}", headers=author["headers"]).status_code == 200
    assert client.get(f"/products/{product['id']}", headers=stranger["headers"]).status_code == 403
    assert product["id"] in [p["id"] for p in client.get("/products/mine", headers=author["headers"]).json()]

    pending = client.get("/admin/pendingProducts", headers=admin_headers)
    assert product["id"] in [p["id"] for p in pending.json()]

    res = client.post(f"/admin/approveProduct/{product['id']}", headers=admin_headers, json={"decision": True})
    assert res.status_code == 200
    assert res.json()["product"]["isApproved"] is True
    assert notifier.calls[-1][0] == author["email"]
    assert notifier.calls[-1][2] == "product_approved"
    assert product["id"] in [p["id"] for p in client.get("/products").json()]


def test_admin_submission_is_listed_immediately(client, admin_headers):
    product = _submit(client, admin_headers, title="Admin Listed").json()
    assert product["isApproved"] is True
    assert product["id"] in [p["id"] for p in client.get("/products").json()]


def test_invalid_product_values(client, register):
    user = register()
    assert _submit(client, user["headers"], premium=0).status_code == 400
    assert _submit(client, user["headers"], duration=-1).status_code == 400
    res = client.post("/products", headers=user["headers"], json={"title": "No body"})
    assert res.status_code == 400


def test_purchase_creates_policy_and_transaction(client, register, admin_headers):
    product = _submit(client, admin_headers, duration=12).json()
    buyer = register()

    res = client.post(
        f"/products/{product['id']}/purchase", headers=buyer["headers"], json={"startDate": "2024-01-31"}
    )
    assert res.status_code == 201
    policy = res.json()["policy"]
    transaction = res.json()["transaction"]
    assert policy["status"] == "pending"
    assert policy["ownerId"] == buyer["id"]
    assert policy["productId"] == product["id"]
    assert policy["amount"] == 20000
    assert policy["startDate"] == "2024-01-31"
    assert policy["endDate"] == "2025-01-31"
    assert transaction["amount"] == 120
    assert transaction["transactionType"] == "purchase"
    assert transaction["status"] == "completed"
    assert transaction["policyId"] == policy["id"]

    history = client.get("/transactions", headers=buyer["headers"])
    assert history.status_code == 200
    assert [t["id"] for t in history.json()] == [transaction["id"]]
    assert history.json()[0]["productName"] == PRODUCT["title"]

    assert client.get(f"/policies/{policy['id']}", headers=buyer["headers"]).status_code == 200


def test_purchase_without_body_starts_today(client, register, admin_headers):
    product = _submit(client, admin_headers, duration=0).json()
    buyer = register()
    res = client.post(f"/products/{product['id']}/purchase", headers=buyer["headers"])
    assert res.status_code == 201
    assert res.json()["policy"]["startDate"] is not None
    assert res.json()["policy"]["endDate"] is None


def test_purchase_of_unapproved_product_is_not_found(client, register):
    author, buyer = register(), register()
    product = _submit(client, author["headers"]).json()
    res = client.post(f"/products/{product['id']}/purchase", headers=buyer["headers"])
    assert res.status_code == 404
    assert res.json()["error"] == "Product not found or not approved"


def test_transactions_are_private(client, register, admin_headers):
    product = _submit(client, admin_headers).json()
    buyer, other = register(), register()
    client.post(f"/products/{product['id']}/purchase", headers=buyer["headers"])
    assert client.get("/transactions", headers=other["headers"]).json() == []


def test_only_creator_or_admin_deletes(client, register, admin_headers):
    author, stranger = register(), register()
    product = _submit(client, author["headers"]).json()

    assert client.delete(f"/products/{product['id']}", headers=stranger["headers"]).status_code == 403
    assert client.delete(f"/products/{product['id']}", headers=author["headers"]).status_code == 204
    assert client.delete(f"/products/{product['id']}", headers=author["headers"]).status_code == 404

    other = _submit(client, author["headers"]).json()
    assert client.delete(f"/products/{other['id']}", headers=admin_headers).status_code == 204


def test_blank_text_fields_are_missing(client, register):
    user = register()
    res = _submit(client, user["headers"], title="   ")
    assert res.status_code == 400
    assert res.json()["error"] == "Missing required fields: title"

    res = _submit(client, user["headers"], description="\t")
    assert res.status_code == 400
    assert res.json()["error"] == "Missing required fields: description"


def test_oversized_premium_rejected(client, register):
    user = register()
    assert _submit(client, user["headers"], premium=10**15).status_code == 400

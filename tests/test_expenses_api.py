"""
End-to-end tests for the expenses API.

Every test gets a fresh in-memory database through the app lifespan
(see the client fixture in conftest.py).
"""
import uuid

from tests.conftest import days_ago

API = "/api/v1/expenses"


def _payload(**overrides):
    payload = {
        "description": "Lunch at restaurant",
        "amount": 25.555,
        "currency": "USD",
        "category": "food",
        "expenseDate": days_ago(1).isoformat(),
    }
    payload.update(overrides)
    return payload


def _create(client, **overrides):
    response = client.post(API, json=_payload(**overrides))
    assert response.status_code == 201, response.text
    return response.json()


def _fields(response):
    return {detail["field"] for detail in response.json()["details"]}


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["timestamp"].endswith("Z")


def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["app"] == "Expense Tracker API"


def test_create_expense(client):
    response = client.post(API, json=_payload())

    assert response.status_code == 201
    body = response.json()
    assert uuid.UUID(body["id"])
    assert body["description"] == "Lunch at restaurant"
    assert body["amount"] == 25.56
    assert body["currency"] == "USD"
    assert body["category"] == "food"
    assert body["expenseDate"].endswith("Z")
    assert body["createdAt"] == body["updatedAt"]


def test_create_without_date(client):
    payload = _payload()
    del payload["expenseDate"]

    response = client.post(API, json=payload)

    assert response.status_code == 400
    assert _fields(response) == {"expenseDate"}


def test_create_oversized_amount(client):
    response = client.post(API, json=_payload(amount=1e30))

    assert response.status_code == 400
    assert _fields(response) == {"amount"}
    assert client.get(API).json()["pagination"]["total"] == 0


def test_update_oversized_amount(client):
    created = _create(client)

    response = client.put(f"{API}/{created['id']}", json={"amount": 1e30})

    assert response.status_code == 400
    assert _fields(response) == {"amount"}


def test_create_invalid_body(client):
    response = client.post(API, json=_payload(description="", amount=0, currency="CHF"))

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Validation failed"
    assert {"description", "amount", "currency"} <= _fields(response)


def test_create_future_date(client):
    future = days_ago(-3).isoformat()

    response = client.post(API, json=_payload(expenseDate=future))

    assert response.status_code == 400
    assert _fields(response) == {"expenseDate"}
    assert response.json()["details"][0]["message"] == "Expense date cannot be in the future"


def test_get_expense(client):
    created = _create(client)

    response = client.get(f"{API}/{created['id']}")

    assert response.status_code == 200
    assert response.json() == created


def test_get_unknown_expense(client):
    missing = str(uuid.uuid4())

    response = client.get(f"{API}/{missing}")

    assert response.status_code == 404
    body = response.json()
    assert body["error"] == "Resource not found"
    assert body["details"]["resourceId"] == missing


def test_get_malformed_id(client):
    response = client.get(f"{API}/not-a-uuid")

    assert response.status_code == 400
    assert _fields(response) == {"id"}


def test_update_expense(client):
    created = _create(client, category="other")

    response = client.put(
        f"{API}/{created['id']}",
        json={"description": "Dinner", "amount": 40, "category": "entertainment"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["description"] == "Dinner"
    assert body["amount"] == 40.0
    assert body["currency"] == "USD"
    assert body["category"] == "entertainment"
    assert body["createdAt"] == created["createdAt"]

    assert client.get(f"{API}/{created['id']}").json()["description"] == "Dinner"


def test_update_expense_date(client):
    created = _create(client)
    new_date = days_ago(10).replace(microsecond=0)

    response = client.put(f"{API}/{created['id']}", json={"expenseDate": new_date.isoformat()})

    assert response.status_code == 200
    assert response.json()["expenseDate"] == new_date.strftime("%Y-%m-%dT%H:%M:%S.000Z")


def test_update_rejects_future_date(client):
    created = _create(client)

    response = client.put(f"{API}/{created['id']}", json={"expenseDate": days_ago(-1).isoformat()})

    assert response.status_code == 400
    assert client.get(f"{API}/{created['id']}").json()["expenseDate"] == created["expenseDate"]


def test_update_unknown_expense(client):
    response = client.put(f"{API}/{uuid.uuid4()}", json={"description": "x"})

    assert response.status_code == 404


def test_delete_expense(client):
    created = _create(client)

    response = client.delete(f"{API}/{created['id']}")

    assert response.status_code == 204
    assert response.content == b""
    assert client.get(f"{API}/{created['id']}").status_code == 404
    assert client.delete(f"{API}/{created['id']}").status_code == 404


def test_list_expenses_pagination(client):
    for days in (1, 2, 3):
        _create(client, description=f"Expense {days}", expenseDate=days_ago(days).isoformat())

    response = client.get(API, params={"page": 1, "limit": 2})

    assert response.status_code == 200
    body = response.json()
    assert [e["description"] for e in body["data"]] == ["Expense 1", "Expense 2"]
    assert body["pagination"] == {"page": 1, "limit": 2, "total": 3, "totalPages": 2}


def test_list_expenses_filters(client):
    _create(client, description="Bus", category="transport", expenseDate=days_ago(8).isoformat())
    _create(client, description="Train", category="transport", expenseDate=days_ago(1).isoformat())
    _create(client, description="Salad", category="food", expenseDate=days_ago(1).isoformat())

    response = client.get(API, params={"category": "transport", "startDate": days_ago(4).isoformat()})

    assert response.status_code == 200
    assert [e["description"] for e in response.json()["data"]] == ["Train"]


def test_list_defaults(client):
    body = client.get(API).json()

    assert body["data"] == []
    assert body["pagination"] == {"page": 1, "limit": 20, "total": 0, "totalPages": 0}


def test_list_invalid_query(client):
    assert client.get(API, params={"limit": 101}).status_code == 400
    assert client.get(API, params={"page": 0}).status_code == 400

    response = client.get(API, params={"category": "travel"})
    assert response.status_code == 400
    assert _fields(response) == {"category"}


def test_correlation_id_is_generated(client):
    response = client.get("/health")

    assert uuid.UUID(response.headers["X-Correlation-ID"])


def test_correlation_id_is_echoed(client):
    response = client.get(API, headers={"X-Correlation-ID": "req-123"})

    assert response.headers["X-Correlation-ID"] == "req-123"

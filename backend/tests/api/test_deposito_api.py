from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import inspect

from deposito.api.main import app
from deposito.db import get_engine
from deposito.db_base import Base


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


def _setup_account(client: TestClient, *, balance: str, rate: str, created_at: str) -> str:
    r = client.post("/customers", json={"name": "John Miller"})
    assert r.status_code == 201, r.text
    customer_id = r.json()["id"]

    r = client.post("/deposito-types", json={"name": "Gold", "yearly_return": rate})
    assert r.status_code == 201, r.text
    type_id = r.json()["id"]

    r = client.post(
        "/accounts",
        json={
            "packet": "Standard",
            "balance": balance,
            "customer_id": customer_id,
            "deposito_type_id": type_id,
            "created_at": created_at,
        },
    )
    assert r.status_code == 201, r.text
    created = r.json()
    assert created["customer"]["name"] == "John Miller"
    assert created["deposito_type"]["yearly_return"] == f"{float(rate):.6f}"
    return created["id"]


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_deposit_withdraw_and_history(client):
    account_id = _setup_account(
        client, balance="1000000", rate="0.12", created_at="2026-01-10T09:00:00Z"
    )

    r = client.post(
        "/transactions/deposit",
        json={"account_id": account_id, "amount": "100", "date": "2026-03-01T09:00"},
    )
    assert r.status_code == 201, r.text
    dep = r.json()
    assert dep["type"] == "deposit"
    assert dep["amount"] == "100.00"

    r = client.post(
        "/transactions/withdraw",
        json={"account_id": account_id, "amount": "500000", "date": "2026-07-10T09:00:00Z"},
    )
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["transaction"]["type"] == "withdraw"
    assert body["transaction"]["amount"] == "500000.00"
    calc = body["calculation"]
    assert calc["months"] == 6
    assert calc["starting_balance"] == "1000100.00"
    assert calc["yearly_return"] == "0.120000"

    r = client.get(f"/accounts/{account_id}")
    assert r.status_code == 200
    # 1,000,100 * 1.06 - 500,000
    assert r.json()["balance"] == "560106.00"

    r = client.get(f"/accounts/{account_id}/transactions")
    assert r.status_code == 200
    assert [t["type"] for t in r.json()] == ["deposit", "withdraw"]


def test_history_is_ordered_by_effective_date(client):
    account_id = _setup_account(client, balance="10", rate="0", created_at="2026-01-10T09:00:00Z")

    for amount, date in (("3", "2026-03-01T00:00:00Z"), ("1", "2026-01-15T00:00:00Z"), ("2", "2026-02-01T00:00:00Z")):
        r = client.post("/transactions/deposit", json={"account_id": account_id, "amount": amount, "date": date})
        assert r.status_code == 201, r.text

    r = client.get(f"/accounts/{account_id}/transactions")
    assert [t["amount"] for t in r.json()] == ["1.00", "2.00", "3.00"]


def test_insufficient_funds_is_400_and_changes_nothing(client):
    account_id = _setup_account(client, balance="100", rate="0.05", created_at="2026-01-10T09:00:00Z")

    r = client.post(
        "/transactions/withdraw",
        json={"account_id": account_id, "amount": "100.01", "date": "2026-02-10T09:00:00Z"},
    )
    assert r.status_code == 400
    assert r.json()["kind"] == "insufficient_funds"

    assert client.get(f"/accounts/{account_id}").json()["balance"] == "100.00"
    assert client.get(f"/accounts/{account_id}/transactions").json() == []


def test_unknown_account_is_404(client):
    r = client.post(
        "/transactions/deposit",
        json={"account_id": str(uuid4()), "amount": "10", "date": "2026-01-10T09:00:00Z"},
    )
    assert r.status_code == 404
    assert r.json()["kind"] == "not_found"

    r = client.get(f"/accounts/{uuid4()}/transactions")
    assert r.status_code == 404


@pytest.mark.parametrize(
    "payload",
    [
        {"amount": "0", "date": "2026-01-10T09:00:00Z"},
        {"amount": "-5", "date": "2026-01-10T09:00:00Z"},
        {"amount": "1.234", "date": "2026-01-10T09:00:00Z"},
        {"amount": "10", "date": "not-a-date"},
    ],
)
def test_invalid_input_is_422(client, payload):
    account_id = _setup_account(client, balance="100", rate="0.05", created_at="2026-01-10T09:00:00Z")
    r = client.post("/transactions/deposit", json={"account_id": account_id, **payload})
    assert r.status_code == 422


def test_malformed_account_id_is_422(client):
    r = client.post(
        "/transactions/withdraw",
        json={"account_id": "abc", "amount": "10", "date": "2026-01-10T09:00:00Z"},
    )
    assert r.status_code == 422


def test_duplicate_deposito_type_name_is_409(client):
    assert client.post("/deposito-types", json={"name": "Gold", "yearly_return": "0.07"}).status_code == 201
    r = client.post("/deposito-types", json={"name": "Gold", "yearly_return": "0.05"})
    assert r.status_code == 409


def test_deposito_type_rate_out_of_range_is_422(client):
    r = client.post("/deposito-types", json={"name": "Platinum", "yearly_return": "1.5"})
    assert r.status_code == 422


def test_account_with_history_cannot_be_deleted(client):
    account_id = _setup_account(client, balance="100", rate="0.05", created_at="2026-01-10T09:00:00Z")
    client.post(
        "/transactions/deposit",
        json={"account_id": account_id, "amount": "1", "date": "2026-01-11T09:00:00Z"},
    )

    r = client.delete(f"/accounts/{account_id}")
    assert r.status_code == 409


def test_customer_crud(client):
    r = client.post("/customers", json={"name": "Ada"})
    cid = r.json()["id"]

    r = client.patch(f"/customers/{cid}", json={"name": "Ada Lovelace"})
    assert r.status_code == 200
    assert r.json()["name"] == "Ada Lovelace"

    assert [c["name"] for c in client.get("/customers").json()] == ["Ada Lovelace"]

    assert client.delete(f"/customers/{cid}").status_code == 204
    assert client.get(f"/customers/{cid}").status_code == 404


def test_account_update_keeps_balance_and_tier(client):
    account_id = _setup_account(client, balance="100", rate="0.05", created_at="2026-01-10T09:00:00Z")

    r = client.patch(f"/accounts/{account_id}", json={"packet": "Premium"})
    assert r.status_code == 200
    body = r.json()
    assert body["packet"] == "Premium"
    assert body["balance"] == "100.00"

    listed = client.get("/accounts").json()
    assert [a["id"] for a in listed] == [account_id]


def test_app_startup_creates_missing_tables():

    Base.metadata.drop_all(get_engine())
    assert not inspect(get_engine()).has_table("accounts")

    with TestClient(app) as c:
        assert c.get("/health").status_code == 200
        assert inspect(get_engine()).has_table("accounts")
        assert c.get("/accounts").json() == []

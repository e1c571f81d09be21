"""
End-to-end tests against a real PostgreSQL database.

Skipped unless DATABASE_TEST_URL is set. The schema in db/schema.sql is
re-applied once per module and tables are emptied before every test.
"""
import asyncio
import os
from datetime import date
from pathlib import Path

import asyncpg
import pytest
from fastapi.testclient import TestClient

from conftest import TEST_COMPANY
from core.db import _sanitize_database_url
from main import app

DATABASE_TEST_URL = os.environ.get("DATABASE_TEST_URL", "").strip()
SCHEMA = Path(__file__).resolve().parent.parent / "db" / "schema.sql"

pytestmark = pytest.mark.skipif(not DATABASE_TEST_URL, reason="DATABASE_TEST_URL is not set")


def _run_sql(sql, *args):
    async def run():
        conn = await asyncpg.connect(_sanitize_database_url(DATABASE_TEST_URL))
        try:
            if args:
                return await conn.fetchrow(sql, *args)
            return await conn.execute(sql)
        finally:
            await conn.close()

    return asyncio.run(run())


@pytest.fixture(scope="module", autouse=True)
def schema():
    _run_sql(SCHEMA.read_text())


@pytest.fixture
def live_client(monkeypatch, schema):
    monkeypatch.setenv("APP_ENV", "test")
    _run_sql("DELETE FROM invoices; DELETE FROM companies;")
    _run_sql(
        "INSERT INTO companies (code, name, description) VALUES ($1, $2, $3) RETURNING code",
        TEST_COMPANY["code"],
        TEST_COMPANY["name"],
        TEST_COMPANY["description"],
    )
    app.dependency_overrides.clear()
    with TestClient(app) as client:
        yield client


def _new_invoice(client, **fields):
    resp = client.post("/invoices", json={"comp_code": "testco", "amt": 100, **fields})
    assert resp.status_code == 201
    return resp.json()["invoice"]


def test_company_round_trip(live_client):
    new_co = {"code": "newco", "name": "New Company", "description": "Maker of New Companies"}

    assert live_client.post("/companies", json=new_co).json() == {"company": new_co}
    assert live_client.get("/companies/newco").json() == {"company": new_co}
    assert live_client.post("/companies", json=new_co).status_code == 400


def test_invoice_detail_includes_company(live_client):
    invoice = _new_invoice(live_client)

    resp = live_client.get(f"/invoices/{invoice['id']}")

    assert resp.status_code == 200
    body = resp.json()["invoice"]
    assert body["company"] == TEST_COMPANY
    assert body["amt"] == 100.0
    assert body["paid"] is False
    assert body["paid_date"] is None
    assert body["add_date"] == date.today().isoformat()
    assert live_client.get("/invoices").json() == {
        "invoices": [{"id": invoice["id"], "comp_code": "testco"}],
    }


def test_invoice_for_unknown_company_is_400(live_client):
    resp = live_client.post("/invoices", json={"comp_code": "noco", "amt": 5})

    assert resp.status_code == 400
    assert resp.json() == {"error": {"message": "No such company", "status": 400}}


def test_paid_transitions_set_and_clear_paid_date(live_client):
    invoice = _new_invoice(live_client)
    url = f"/invoices/{invoice['id']}"

    paid = live_client.put(url, json={"paid": True}).json()["invoice"]
    assert paid["paid"] is True
    assert paid["paid_date"] == date.today().isoformat()

    still_paid = live_client.put(url, json={"amt": 150}).json()["invoice"]
    assert still_paid["paid_date"] == paid["paid_date"]
    assert still_paid["amt"] == 150.0

    backdated = live_client.put(url, json={"paid": True, "paid_date": "2024-01-31"}).json()["invoice"]
    assert backdated["paid_date"] == "2024-01-31"

    unpaid = live_client.put(url, json={"paid": False}).json()["invoice"]
    assert unpaid["paid"] is False
    assert unpaid["paid_date"] is None

    ignored = live_client.put(url, json={"paid_date": "2024-02-01"}).json()["invoice"]
    assert ignored["paid_date"] is None


def test_created_paid_invoice_gets_paid_date(live_client):
    invoice = _new_invoice(live_client, paid=True, add_date="2024-01-02")

    assert invoice["paid"] is True
    assert invoice["paid_date"] == date.today().isoformat()
    assert invoice["add_date"] == "2024-01-02"


def test_deleting_company_cascades_to_invoices(live_client):
    invoice = _new_invoice(live_client)

    assert live_client.delete("/companies/testco").json() == {"status": "deleted"}
    assert live_client.get(f"/invoices/{invoice['id']}").status_code == 404
    assert live_client.delete(f"/invoices/{invoice['id']}").status_code == 404

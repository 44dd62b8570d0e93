"""
Ledger API Tests

Expenses and investments over HTTP: creation, savings routing, month
filter, reclassification, revaluation and per-user isolation.
"""
import sys
from decimal import Decimal
from pathlib import Path

import httpx
import pytest
import pytest_asyncio

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

# Setup test database BEFORE importing app modules
from finovo.test_scripts.test_db_config import setup_test_database, initialize_test_database

setup_test_database()

from finovo.app.main import app
from finovo.test_scripts.test_utils import print_section, print_success, register_and_login

TIMEOUT = 10.0


@pytest.fixture(scope="module")
def test_app():
    assert initialize_test_database(), "Refusing to run against a non-test database"
    return app


def _client(test_app) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=test_app), base_url="http://test", timeout=TIMEOUT)


@pytest_asyncio.fixture
async def client(test_app):
    """Client logged in as a fresh user."""
    async with _client(test_app) as client:
        await register_and_login(client, "ledger")
        yield client


@pytest_asyncio.fixture
async def other_client(test_app):
    async with _client(test_app) as client:
        await register_and_login(client, "intruder")
        yield client


class TestAuthRequired:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/api/v1/expenses", "/api/v1/investments", "/api/v1/profile"])
    async def test_anonymous_is_401(self, test_app, path):
        async with _client(test_app) as anonymous:
            assert (await anonymous.get(path)).status_code == 401


class TestExpensesAPI:

    @pytest.mark.asyncio
    async def test_create_and_list(self, client):
        """LEDGER-001: Expenses come back newest first."""
        print_section("LEDGER-001: Create and list expenses")
        for day, amount in (("2025-05-02", "120.50"), ("2025-05-20", "80")):
            response = await client.post(
                "/api/v1/expenses", json={"category": "Transport", "amount": amount, "date": day}
            )
            assert response.status_code == 201, response.text
            assert response.json()["kind"] == "expense"

        rows = (await client.get("/api/v1/expenses")).json()

        assert [row["date"] for row in rows] == ["2025-05-20", "2025-05-02"]
        assert Decimal(rows[1]["amount"]) == Decimal("120.50")
        assert rows[0]["type"] == "need"
        print_success("Expenses listed newest first")

    @pytest.mark.asyncio
    async def test_savings_entry_becomes_investment(self, client):
        """LEDGER-002: type=savings is booked as an investment."""
        response = await client.post(
            "/api/v1/expenses",
            json={"category": "PPF", "amount": 5000, "date": "2025-05-01", "type": "savings", "description": "SBI"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["kind"] == "investment"
        assert data["expense"] is None
        assert data["investment"]["platform"] == "SBI"
        assert (await client.get("/api/v1/expenses")).json() == []
        assert len((await client.get("/api/v1/investments")).json()) == 1

    @pytest.mark.asyncio
    async def test_month_filter(self, client):
        await client.post("/api/v1/expenses", json={"category": "Rent", "amount": 20000, "date": "2025-04-01"})
        await client.post("/api/v1/expenses", json={"category": "Rent", "amount": 21000, "date": "2025-05-01"})

        rows = (await client.get("/api/v1/expenses", params={"month": "2025-04"})).json()

        assert [Decimal(row["amount"]) for row in rows] == [Decimal("20000")]

    @pytest.mark.asyncio
    async def test_bad_month_is_400(self, client):
        response = await client.get("/api/v1/expenses", params={"month": "April"})
        assert response.status_code == 400

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [
        {"category": "Food", "amount": 0, "date": "2025-05-01"},
        {"category": "Food", "amount": "0.001", "date": "2025-05-01"},
        {"category": "  ", "amount": 10, "date": "2025-05-01"},
        {"category": "Food", "amount": 10, "date": "2025-05-01", "type": "luxury"},
        {"category": "Food", "amount": 10},
        ])
    async def test_invalid_expense_is_422(self, client, payload):
        assert (await client.post("/api/v1/expenses", json=payload)).status_code == 422

    @pytest.mark.asyncio
    async def test_reclassify_and_delete(self, client):
        created = await client.post("/api/v1/expenses", json={"category": "Movies", "amount": 600, "date": "2025-05-09"})
        expense_id = created.json()["expense"]["id"]

        patched = await client.patch(f"/api/v1/expenses/{expense_id}/type", json={"type": "want"})
        assert patched.status_code == 200
        assert patched.json()["type"] == "want"

        assert (await client.delete(f"/api/v1/expenses/{expense_id}")).status_code == 200
        assert (await client.delete(f"/api/v1/expenses/{expense_id}")).status_code == 404

    @pytest.mark.asyncio
    async def test_other_user_gets_404(self, client, other_client):
        """LEDGER-003: Rows of another user look missing."""
        print_section("LEDGER-003: Per-user isolation")
        created = await client.post("/api/v1/expenses", json={"category": "Food", "amount": 99, "date": "2025-05-09"})
        expense_id = created.json()["expense"]["id"]

        assert (await other_client.patch(f"/api/v1/expenses/{expense_id}/type", json={"type": "want"})).status_code == 404
        assert (await other_client.delete(f"/api/v1/expenses/{expense_id}")).status_code == 404
        assert (await other_client.get("/api/v1/expenses")).json() == []
        assert len((await client.get("/api/v1/expenses")).json()) == 1
        print_success("Other user cannot see or change the expense")


class TestInvestmentsAPI:

    @pytest.mark.asyncio
    async def test_create_revalue_delete(self, client):
        created = await client.post(
            "/api/v1/investments",
            json={"type": "Mutual Funds", "amount": 10000, "date": "2025-01-15", "platform": "Groww"},
        )
        assert created.status_code == 201, created.text
        investment = created.json()
        assert Decimal(investment["current_value"]) == Decimal("10000")
        assert Decimal(investment["returns"]) == 0

        patched = await client.patch(f"/api/v1/investments/{investment['id']}", json={"current_value": 11500})
        assert Decimal(patched.json()["returns"]) == Decimal("1500")

        assert (await client.delete(f"/api/v1/investments/{investment['id']}")).status_code == 200
        assert (await client.get("/api/v1/investments")).json() == []

    @pytest.mark.asyncio
    async def test_missing_investment_is_404(self, client):
        response = await client.patch("/api/v1/investments/999999999", json={"current_value": 1})
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_sub_cent_amount_is_422(self, client):
        """Amounts that would truncate to 0.00 are refused instead of stored."""
        response = await client.post("/api/v1/investments", json={"type": "Gold", "amount": "0.009", "date": "2025-01-15"})

        assert response.status_code == 422
        assert (await client.get("/api/v1/investments")).json() == []

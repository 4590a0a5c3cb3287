"""Integration tests for the ledger HTTP API"""

import pytest
from httpx import AsyncClient

HEADERS = {"X-Actor-Id": "user_42"}
LOYALTY = "/tenants/tenant_a/loyalty"
CREDIT = "/tenants/tenant_a/credit"
ACCOUNTS = "/tenants/tenant_a/ledger/accounts"


async def accrue(client, points, key, **extra):
    payload = {"customer_id": "cust_001", "program_id": "prog_gold", "points": points, "idempotency_key": key}
    payload.update(extra)
    return await client.post(f"{LOYALTY}/accrue", json=payload, headers=HEADERS)


class TestLoyaltyAPI:
    """POST /accrue, POST /redeem and GET /balance"""

    @pytest.mark.asyncio
    async def test_accrue_returns_201(self, client: AsyncClient):
        response = await accrue(client, 150, "order:ORD-1:accrue", order_id="ORD-1")

        assert response.status_code == 201
        data = response.json()
        assert data["event_type"] == "earned"
        assert data["amount"] == 150
        assert data["balance_before"] == 0
        assert data["new_balance"] == 150
        assert data["order_id"] == "ORD-1"
        assert data["expires_at"] is not None
        assert data["replayed"] is False

    @pytest.mark.asyncio
    async def test_accrue_replay(self, client: AsyncClient):
        first = await accrue(client, 150, "dup")
        second = await accrue(client, 150, "dup")

        assert second.status_code == 201
        assert second.json()["replayed"] is True
        assert second.json()["transaction_id"] == first.json()["transaction_id"]

    @pytest.mark.asyncio
    async def test_accrue_reused_key_conflict(self, client: AsyncClient):
        await accrue(client, 150, "dup")

        response = await accrue(client, 10, "dup")

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "CONFLICT"
        assert response.headers["Retry-After"] == "1"

    @pytest.mark.asyncio
    async def test_accrue_zero_points(self, client: AsyncClient):
        response = await accrue(client, 0, "zero")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_AMOUNT"

    @pytest.mark.asyncio
    async def test_accrue_amount_past_bigint(self, client: AsyncClient):
        response = await accrue(client, 2**63, "huge")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_AMOUNT"

    @pytest.mark.asyncio
    async def test_accrue_unknown_customer(self, client: AsyncClient):
        response = await accrue(client, 10, "ghost", customer_id="ghost")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    @pytest.mark.asyncio
    async def test_missing_actor_header(self, client: AsyncClient):
        response = await client.post(
            f"{LOYALTY}/accrue",
            json={"customer_id": "cust_001", "program_id": "prog_gold", "points": 10, "idempotency_key": "k"},
        )

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHORIZED"

    @pytest.mark.asyncio
    async def test_missing_idempotency_key(self, client: AsyncClient):
        response = await client.post(
            f"{LOYALTY}/accrue",
            json={"customer_id": "cust_001", "program_id": "prog_gold", "points": 10},
            headers=HEADERS,
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_redeem_insufficient_balance(self, client: AsyncClient):
        await accrue(client, 120, "earn")

        response = await client.post(
            f"{LOYALTY}/redeem",
            json={"customer_id": "cust_001", "program_id": "prog_gold", "points": 500, "idempotency_key": "r"},
            headers=HEADERS,
        )

        assert response.status_code == 402
        error = response.json()["error"]
        assert error["code"] == "INSUFFICIENT_BALANCE"
        assert error["details"]["current_balance"] == 120
        assert error["details"]["requested_amount"] == 500
        assert "Retry-After" not in response.headers

    @pytest.mark.asyncio
    async def test_redeem_below_minimum(self, client: AsyncClient):
        await accrue(client, 150, "earn")

        response = await client.post(
            f"{LOYALTY}/redeem",
            json={"customer_id": "cust_001", "program_id": "prog_gold", "points": 50, "idempotency_key": "r"},
            headers=HEADERS,
        )

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "POLICY_VIOLATION"

    @pytest.mark.asyncio
    async def test_redeem_success(self, client: AsyncClient):
        await accrue(client, 150, "earn")

        response = await client.post(
            f"{LOYALTY}/redeem",
            json={"customer_id": "cust_001", "program_id": "prog_gold", "points": 150, "idempotency_key": "r"},
            headers=HEADERS,
        )

        assert response.status_code == 200
        assert response.json()["new_balance"] == 0
        assert response.json()["amount_change"] == -150

    @pytest.mark.asyncio
    async def test_balance(self, client: AsyncClient):
        missing = await client.get(f"{LOYALTY}/balance", params={"customer_id": "cust_001", "program_id": "prog_gold"})
        assert missing.status_code == 404
        assert missing.json()["error"]["code"] == "ACCOUNT_NOT_FOUND"

        await accrue(client, 150, "earn")
        response = await client.get(f"{LOYALTY}/balance", params={"customer_id": "cust_001", "program_id": "prog_gold"})

        assert response.status_code == 200
        assert response.json()["current_balance"] == 150
        assert response.json()["lifetime_earned"] == 150


class TestCreditAPI:
    """POST /charge, POST /payment and GET /balance"""

    @pytest.mark.asyncio
    async def test_payment_then_charge(self, client: AsyncClient):
        payment = await client.post(
            f"{CREDIT}/payment",
            json={"customer_id": "cust_002", "amount": 5000, "idempotency_key": "pay"},
            headers=HEADERS,
        )
        charge = await client.post(
            f"{CREDIT}/charge",
            json={"customer_id": "cust_002", "amount": 1200, "idempotency_key": "charge"},
            headers=HEADERS,
        )
        fee = await client.post(
            f"{CREDIT}/charge",
            json={"customer_id": "cust_002", "amount": 300, "fee": True, "idempotency_key": "fee"},
            headers=HEADERS,
        )

        assert payment.status_code == 201
        assert payment.json()["program_id"] is None
        assert charge.status_code == 200
        assert fee.json()["event_type"] == "fee"

        balance = await client.get(f"{CREDIT}/balance", params={"customer_id": "cust_002"})
        assert balance.json()["current_balance"] == 3500
        assert balance.json()["lifetime_spent"] == 1500

    @pytest.mark.asyncio
    async def test_charge_without_credit(self, client: AsyncClient):
        response = await client.post(
            f"{CREDIT}/charge",
            json={"customer_id": "cust_002", "amount": 100, "idempotency_key": "charge"},
            headers=HEADERS,
        )

        assert response.status_code == 402


class TestAccountsAPI:
    """Account listing, history, adjustment and status"""

    @pytest.mark.asyncio
    async def test_list_accounts_and_transactions(self, client: AsyncClient):
        await accrue(client, 150, "earn-1")
        await accrue(client, 20, "earn-2")

        listing = await client.get(ACCOUNTS, params={"customer_id": "cust_001"})
        assert listing.status_code == 200
        assert listing.json()["total"] == 1
        account_id = listing.json()["accounts"][0]["account_id"]

        history = await client.get(f"{ACCOUNTS}/{account_id}/transactions")
        assert history.status_code == 200
        transactions = history.json()["transactions"]
        assert [t["amount"] for t in transactions] == [20, 150]
        assert transactions[0]["created_by"] == "user_42"

    @pytest.mark.asyncio
    async def test_list_accounts_clamps_limit(self, client: AsyncClient):
        response = await client.get(ACCOUNTS, params={"limit": 1000, "offset": -5})

        assert response.status_code == 200
        assert response.json()["limit"] == 100
        assert response.json()["offset"] == 0

    @pytest.mark.asyncio
    async def test_transactions_of_other_tenant_account(self, client: AsyncClient):
        created = await accrue(client, 150, "earn")
        account_id = created.json()["account_id"]

        response = await client.get(f"/tenants/tenant_b/ledger/accounts/{account_id}/transactions")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_adjust_and_deactivate(self, client: AsyncClient):
        created = await accrue(client, 150, "earn")
        account_id = created.json()["account_id"]

        adjust = await client.post(
            f"{ACCOUNTS}/{account_id}/adjust",
            json={"amount": -30, "description": "Goodwill reversal", "idempotency_key": "adj"},
            headers=HEADERS,
        )
        assert adjust.status_code == 200
        assert adjust.json()["new_balance"] == 120
        assert adjust.json()["event_type"] == "adjustment"

        status = await client.put(f"{ACCOUNTS}/{account_id}/status", json={"is_active": False}, headers=HEADERS)
        assert status.status_code == 200
        assert status.json()["is_active"] is False

        redeem = await client.post(
            f"{LOYALTY}/redeem",
            json={"customer_id": "cust_001", "program_id": "prog_gold", "points": 100, "idempotency_key": "r"},
            headers=HEADERS,
        )
        assert redeem.status_code == 409
        assert redeem.json()["error"]["code"] == "ACCOUNT_INACTIVE"

    @pytest.mark.asyncio
    async def test_health(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

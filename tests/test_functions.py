# =============================================================================
# tests/test_functions.py - Bank Sync & Commission Matching Tests
# =============================================================================
# This module contains tests for:
# - The matching rules (amount tolerance, date window, one-to-one pairing)
# - CommissionService.match_for_agent against the in-memory store
# - BankSyncService with a mocked match function (httpx.MockTransport)
# - The /functions/v1 endpoints and their authentication
# =============================================================================

import asyncio
import json
import random
from datetime import datetime, timezone

import httpx
import pytest
from jose import jwt

from app.auth import decode_access_token, get_current_user
from app.config import settings
from app.exceptions import UnauthorizedError
from app.main import app
from core.models.commission import BankTransaction
from core.services.bank_sync_service import BankSyncService, SimulatedBankFeed
from core.services.commission_service import (
    CommissionService,
    find_matches,
    is_date_close,
    is_match,
)

from tests.fakes import AGENT_ID


AGENT = str(AGENT_ID)


def transaction(tid, amount, when, **extra):
    return {"id": f"row-{tid}", "transaction_id": tid, "amount": amount, "transaction_date": when, **extra}


def commission(cid, amount, expected, **extra):
    return {"id": cid, "amount": amount, "expected_date": expected, **extra}


class StaticFeed:
    """Bank feed that always returns the same transactions."""

    def __init__(self, transactions):
        self.transactions = transactions

    def fetch_transactions(self, now=None):
        return self.transactions


# =============================================================================
# Matching Rules
# =============================================================================

class TestMatchingRules:
    """Test is_date_close, is_match and find_matches."""

    def test_seven_days_apart_is_close(self):
        assert is_date_close("2026-03-01", "2026-03-08", 7)

    def test_partial_day_beyond_window_rounds_up(self):
        assert not is_date_close("2026-03-01T00:00:00+00:00", "2026-03-08T00:00:01+00:00", 7)

    def test_order_does_not_matter(self):
        assert is_date_close("2026-03-08", "2026-03-02", 7)

    @pytest.mark.parametrize("amount,expected", [(1009.99, True), (990.01, True), (1010, False), (989, False)])
    def test_amount_tolerance_is_strict(self, amount, expected):
        assert is_match(
            transaction("T1", amount, "2026-03-05"),
            commission("c1", 1000, "2026-03-05"),
        ) is expected

    def test_commission_without_expected_date_never_matches(self):
        assert not is_match(transaction("T1", 1000, "2026-03-05"), commission("c1", 1000, None))

    def test_each_commission_paid_once(self):
        transactions = [
            transaction("T1", 1000, "2026-03-05"),
            transaction("T2", 1001, "2026-03-06"),
        ]
        commissions = [commission("c1", 1000, "2026-03-05")]

        pairs = find_matches(transactions, commissions)

        assert [(t["transaction_id"], c["id"]) for t, c in pairs] == [("T1", "c1")]

    def test_each_transaction_pays_one_commission(self):
        transactions = [transaction("T1", 1000, "2026-03-05")]
        commissions = [
            commission("c1", 1000, "2026-03-05"),
            commission("c2", 1000, "2026-03-05"),
        ]

        pairs = find_matches(transactions, commissions)

        assert len(pairs) == 1
        assert pairs[0][1]["id"] == "c1"

    def test_second_transaction_takes_next_commission(self):
        transactions = [
            transaction("T1", 1000, "2026-03-05"),
            transaction("T2", 1000, "2026-03-05"),
        ]
        commissions = [
            commission("c1", 1000, "2026-03-05"),
            commission("c2", 1003, "2026-03-07"),
        ]

        pairs = find_matches(transactions, commissions)

        assert [c["id"] for _, c in pairs] == ["c1", "c2"]


# =============================================================================
# Commission Matching
# =============================================================================

class TestMatchForAgent:
    """Test CommissionService.match_for_agent."""

    @pytest.fixture
    def books(self, fake_db):
        fake_db.seed(
            "bank_transactions",
            {"agent_id": AGENT, "transaction_id": "TRX-1", "amount": 1200, "transaction_date": "2026-03-05", "matched": False},
            {"agent_id": AGENT, "transaction_id": "TRX-2", "amount": 800, "transaction_date": "2026-03-05", "matched": False},
            {"agent_id": AGENT, "transaction_id": "TRX-3", "amount": 1200, "transaction_date": "2026-03-05", "matched": True},
            {"agent_id": "someone-else", "transaction_id": "TRX-4", "amount": 500, "transaction_date": "2026-03-05", "matched": False},
        )
        fake_db.seed(
            "commissions",
            {"id": "c-1", "agent_id": AGENT, "amount": 1195, "expected_date": "2026-03-01", "status": "pending"},
            {"id": "c-2", "agent_id": AGENT, "amount": 500, "expected_date": "2026-03-01", "status": "pending"},
            {"id": "c-3", "agent_id": AGENT, "amount": 800, "expected_date": None, "status": "pending"},
            {"id": "c-4", "agent_id": "someone-else", "amount": 500, "expected_date": "2026-03-05", "status": "pending"},
        )

    def test_records_each_match(self, store, fake_db, books):
        result = asyncio.run(CommissionService.match_for_agent(store, AGENT))

        assert result.matched == 1

        commissions = {c["id"]: c for c in fake_db.rows("commissions")}
        assert commissions["c-1"]["status"] == "received"
        assert commissions["c-1"]["bank_transaction_id"] == "TRX-1"
        assert commissions["c-1"]["received_date"] == "2026-03-05"
        assert commissions["c-1"]["matched_automatically"] is True
        assert commissions["c-2"]["status"] == "pending"
        assert commissions["c-4"]["status"] == "pending"

        transactions = {t["transaction_id"]: t["matched"] for t in fake_db.rows("bank_transactions")}
        assert transactions == {"TRX-1": True, "TRX-2": False, "TRX-3": True, "TRX-4": False}

        alerts = fake_db.rows("alerts")
        assert len(alerts) == 1
        assert alerts[0]["agent_id"] == AGENT
        assert alerts[0]["title"] == "עמלה התקבלה ותואמה"
        assert alerts[0]["action_url"] == "/agent/commissions"

    def test_second_run_matches_nothing_new(self, store, fake_db, books):
        asyncio.run(CommissionService.match_for_agent(store, AGENT))

        result = asyncio.run(CommissionService.match_for_agent(store, AGENT))

        assert result.matched == 0
        assert len(fake_db.rows("alerts")) == 1

    def test_no_pending_commissions(self, store):
        assert asyncio.run(CommissionService.match_for_agent(store, AGENT)).matched == 0


# =============================================================================
# Bank Sync
# =============================================================================

class TestSimulatedBankFeed:
    """Test the simulated bank feed."""

    def test_batch_shape(self):
        now = datetime(2026, 3, 10, tzinfo=timezone.utc)

        transactions = SimulatedBankFeed(rng=random.Random(7)).fetch_transactions(now)

        assert len(transactions) == 10
        assert len({t.id for t in transactions}) == 10
        for t in transactions:
            assert 500 <= t.amount <= 5499
            assert any(company in t.description for company in SimulatedBankFeed.COMPANIES)
            assert 0 <= (now - t.date).days < 30


class TestSyncForAgent:
    """Test BankSyncService.sync_for_agent with a mocked match function."""

    FIXED = [
        BankTransaction(id="TRX-A", amount=1000, description="העברה ממגדל ביטוח", date=datetime(2026, 3, 1, tzinfo=timezone.utc)),
        BankTransaction(id="TRX-B", amount=2000, description="העברה מכלל ביטוח", date=datetime(2026, 3, 2, tzinfo=timezone.utc)),
        BankTransaction(id="TRX-C", amount=3000, description="העברה מהראל ביטוח", date=datetime(2026, 3, 3, tzinfo=timezone.utc)),
    ]

    def run_sync(self, store, responder):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return responder(request)

        async def go():
            async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http_client:
                return await BankSyncService.sync_for_agent(
                    store,
                    agent_id=AGENT,
                    authorization="Bearer test-token",
                    feed=StaticFeed(self.FIXED),
                    http_client=http_client,
                )

        return asyncio.run(go()), requests

    def test_stores_transactions_and_reports_matches(self, store, fake_db):
        result, requests = self.run_sync(
            store, lambda request: httpx.Response(200, json={"success": True, "matched": 2})
        )

        assert (result.success, result.synced, result.matched) == (True, 3, 2)

        rows = fake_db.rows("bank_transactions")
        assert {r["transaction_id"] for r in rows} == {"TRX-A", "TRX-B", "TRX-C"}
        assert all(r["agent_id"] == AGENT and r["matched"] is False for r in rows)

        assert len(requests) == 1
        request = requests[0]
        assert request.url == httpx.URL(f"{settings.functions_base_url}/functions/v1/match-commissions")
        assert request.headers["Authorization"] == "Bearer test-token"
        assert json.loads(request.content) == {"agent_id": AGENT}

    def test_missing_matched_count_is_zero(self, store):
        result, _ = self.run_sync(store, lambda request: httpx.Response(200, json={"success": True}))

        assert result.matched == 0

    def test_resync_does_not_duplicate(self, store, fake_db):
        ok = lambda request: httpx.Response(200, json={"matched": 0})

        self.run_sync(store, ok)
        self.run_sync(store, ok)

        assert len(fake_db.rows("bank_transactions")) == 3
        assert fake_db.queries_on("bank_transactions")[-1].on_conflict == "transaction_id"


# =============================================================================
# Endpoints
# =============================================================================

class TestFunctionEndpoints:
    """Test /functions/v1."""

    def test_match_uses_authenticated_agent(self, client, fake_db):
        fake_db.seed(
            "bank_transactions",
            {"agent_id": AGENT, "transaction_id": "TRX-1", "amount": 700, "transaction_date": "2026-03-05", "matched": False},
        )
        fake_db.seed(
            "commissions",
            {"id": "c-1", "agent_id": AGENT, "amount": 700, "expected_date": "2026-03-04", "status": "pending"},
        )

        response = client.post("/functions/v1/match-commissions", json={"agent_id": "someone-else"})

        assert response.status_code == 200
        assert response.json() == {"success": True, "matched": 1}

    def test_sync_endpoint(self, client, fake_db, monkeypatch):
        calls = []

        async def fake_trigger(agent_id, authorization, http_client=None):
            calls.append((agent_id, authorization))
            return {"success": True, "matched": 4}

        monkeypatch.setattr(BankSyncService, "_trigger_matching", staticmethod(fake_trigger))

        response = client.post("/functions/v1/sync-bank-transactions")

        assert response.status_code == 200
        assert response.json() == {"success": True, "synced": 10, "matched": 4}
        assert calls == [(AGENT, "Bearer test-token")]
        assert len(fake_db.rows("bank_transactions")) == 10

    def test_store_failure_is_500(self, client, fake_db):
        fake_db.fail("bank_transactions", message="permission denied")

        response = client.post("/functions/v1/match-commissions")

        assert response.status_code == 500
        assert response.json() == {"error": "permission denied"}

    @pytest.mark.parametrize("path", ["/functions/v1/match-commissions", "/functions/v1/sync-bank-transactions"])
    def test_missing_token_is_401(self, client, path):
        app.dependency_overrides.pop(get_current_user)

        response = client.post(path)

        assert response.status_code == 401
        assert response.json() == {"error": "Authentication required"}
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_invalid_token_is_401_envelope(self, client):
        app.dependency_overrides.pop(get_current_user)

        response = client.post(
            "/functions/v1/match-commissions",
            headers={"Authorization": "Bearer not-a-jwt"},
        )

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid authentication"}


class TestDecodeAccessToken:
    """Test HS256 token verification."""

    def make_token(self, **claims):
        payload = {"sub": AGENT, "email": "agent@example.co.il", "aud": "authenticated", **claims}
        return jwt.encode(payload, settings.SUPABASE_JWT_SECRET, algorithm="HS256")

    def test_valid_token(self):
        token = self.make_token()

        user = decode_access_token(token)

        assert str(user.id) == AGENT
        assert user.email == "agent@example.co.il"
        assert user.authorization_header == f"Bearer {token}"

    def test_wrong_audience_is_rejected(self):
        with pytest.raises(UnauthorizedError) as excinfo:
            decode_access_token(self.make_token(aud="anon"))

        assert excinfo.value.status_code == 401

    def test_malformed_subject_is_rejected(self):
        with pytest.raises(UnauthorizedError) as excinfo:
            decode_access_token(self.make_token(sub="not-a-uuid"))

        assert excinfo.value.message == "Invalid token: malformed user ID"

    def test_expired_token_is_rejected(self):
        with pytest.raises(UnauthorizedError) as excinfo:
            decode_access_token(self.make_token(exp=1))

        assert excinfo.value.message == "Token has expired"

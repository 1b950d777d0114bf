# =============================================================================
# core/services/bank_sync_service.py - Bank Transaction Sync
# =============================================================================
# Pulls an agent's recent bank transactions, stores them, then asks the
# match-commissions function to reconcile them.
#
# There is no Open Banking integration yet: SimulatedBankFeed produces
# plausible incoming payments from the large Israeli insurers.
# =============================================================================

import logging
import random
import time
from datetime import datetime, timedelta, timezone
from typing import Any

import httpx

from app.config import settings
from lib.supabase_client import StoreSession
from core.models.commission import BankTransaction, SyncResult

logger = logging.getLogger(__name__)

MATCH_FUNCTION_PATH = "/functions/v1/match-commissions"


class SimulatedBankFeed:
    """
    Stand-in for the agent's bank.

    Each call returns `count` transfers from insurers dated within the
    last 30 days.
    """

    COMPANIES = ("מגדל", "הפניקס", "כלל", "מנורה", "הראל")

    def __init__(self, count: int = 10, rng: random.Random | None = None):
        self.count = count
        self.rng = rng or random.Random()

    def fetch_transactions(self, now: datetime | None = None) -> list[BankTransaction]:
        now = now or datetime.now(timezone.utc)
        batch = int(time.time() * 1000)

        return [
            BankTransaction(
                id=f"TRX-{batch}-{i}",
                amount=self.rng.randint(500, 5499),
                description=f"העברה מ{self.rng.choice(self.COMPANIES)} ביטוח",
                date=now - timedelta(days=self.rng.randrange(30)),
            )
            for i in range(self.count)
        ]


class BankSyncService:
    """Service behind the sync-bank-transactions function."""

    @staticmethod
    async def sync_for_agent(
        store: StoreSession,
        agent_id: str,
        authorization: str,
        feed: SimulatedBankFeed | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> SyncResult:
        """
        Store the agent's latest transactions and trigger matching.

        Args:
            store: A service-role store session
            agent_id: The authenticated agent
            authorization: The caller's Authorization header, forwarded
                to the match function
            feed: Transaction source (defaults to the simulated feed)
            http_client: Client used to call the match function

        Returns:
            SyncResult with stored and matched counts

        Raises:
            StoreError: If storing transactions fails
            httpx.HTTPError: If the match function cannot be reached
        """
        feed = feed or SimulatedBankFeed()
        transactions = feed.fetch_transactions()

        logger.info(f"Syncing {len(transactions)} bank transactions for agent: {agent_id}")

        response = await store.execute_async(
            store.table("bank_transactions")
            .upsert(
                [transaction.to_row(agent_id) for transaction in transactions],
                on_conflict="transaction_id",
            )
        )
        synced = len(response.data or [])
        logger.info(f"Synced {synced} transactions")

        match_result = await BankSyncService._trigger_matching(agent_id, authorization, http_client)

        return SyncResult(synced=synced, matched=match_result.get("matched") or 0)

    @staticmethod
    async def _trigger_matching(
        agent_id: str,
        authorization: str,
        http_client: httpx.AsyncClient | None = None,
    ) -> dict[str, Any]:
        """POST to the match function and return its JSON body."""
        url = f"{settings.functions_base_url}{MATCH_FUNCTION_PATH}"
        headers = {"Authorization": authorization, "Content-Type": "application/json"}

        if http_client is None:
            async with httpx.AsyncClient(timeout=settings.FUNCTION_TIMEOUT_SECONDS) as client:
                response = await client.post(url, headers=headers, json={"agent_id": agent_id})
        else:
            response = await http_client.post(url, headers=headers, json={"agent_id": agent_id})

        if response.is_error:
            logger.warning(f"Match function returned {response.status_code} for agent {agent_id}")

        return response.json()

# =============================================================================
# core/services/commission_service.py - Commission Matching
# =============================================================================
# Pairs an agent's unmatched bank transactions with the commissions the
# agent is still waiting for, then records each pair:
# - the commission becomes `received` and points at the transaction
# - the transaction is flagged as matched
# - an alert tells the agent the commission arrived
#
# A transaction pays a commission when the amounts differ by less than
# AMOUNT_TOLERANCE and the payment lands within DATE_WINDOW_DAYS of the
# expected date.
# =============================================================================

import logging
import math
from datetime import datetime
from typing import Any

from lib.supabase_client import StoreSession
from lib.utils import parse_timestamp
from core.models.commission import CommissionStatus, MatchResult

logger = logging.getLogger(__name__)

AMOUNT_TOLERANCE = 10
DATE_WINDOW_DAYS = 7

SECONDS_PER_DAY = 24 * 60 * 60


def is_date_close(first: str | datetime, second: str | datetime, days: int) -> bool:
    """True when the two moments are at most `days` calendar days apart (rounded up)."""
    delta = abs((parse_timestamp(second) - parse_timestamp(first)).total_seconds())
    return math.ceil(delta / SECONDS_PER_DAY) <= days


def is_match(transaction: dict[str, Any], commission: dict[str, Any]) -> bool:
    if not commission.get("expected_date") or not transaction.get("transaction_date"):
        return False
    amount_ok = abs(float(transaction["amount"]) - float(commission["amount"])) < AMOUNT_TOLERANCE
    return amount_ok and is_date_close(
        transaction["transaction_date"],
        commission["expected_date"],
        DATE_WINDOW_DAYS,
    )


def find_matches(
    transactions: list[dict[str, Any]],
    commissions: list[dict[str, Any]],
) -> list[tuple[dict[str, Any], dict[str, Any]]]:
    """
    Pair transactions with commissions, first fit in the given order.

    Each transaction pays at most one commission and each commission is
    paid by at most one transaction.
    """
    pairs = []
    paid: set[str] = set()

    for transaction in transactions:
        for commission in commissions:
            if commission["id"] in paid:
                continue
            if is_match(transaction, commission):
                pairs.append((transaction, commission))
                paid.add(commission["id"])
                break

    return pairs


class CommissionService:
    """Service for automatic commission reconciliation."""

    @staticmethod
    async def match_for_agent(store: StoreSession, agent_id: str) -> MatchResult:
        """
        Match an agent's unmatched transactions against pending commissions.

        Args:
            store: A service-role store session
            agent_id: The agent whose books are reconciled

        Returns:
            MatchResult with the number of commissions matched

        Raises:
            StoreError: If any read or write fails
        """
        transactions = (await store.execute_async(
            store.table("bank_transactions")
            .select("*")
            .eq("agent_id", agent_id)
            .eq("matched", False)
        )).data or []

        commissions = (await store.execute_async(
            store.table("commissions")
            .select("*")
            .eq("agent_id", agent_id)
            .eq("status", CommissionStatus.PENDING.value)
        )).data or []

        logger.info(
            f"Found {len(transactions)} unmatched transactions and "
            f"{len(commissions)} pending commissions for agent {agent_id}"
        )

        pairs = find_matches(transactions, commissions)
        for transaction, commission in pairs:
            await CommissionService._record_match(store, agent_id, transaction, commission)

        return MatchResult(matched=len(pairs))

    @staticmethod
    async def _record_match(
        store: StoreSession,
        agent_id: str,
        transaction: dict[str, Any],
        commission: dict[str, Any],
    ) -> None:
        await store.execute_async(
            store.table("commissions")
            .update({
                "status": CommissionStatus.RECEIVED.value,
                "received_date": transaction["transaction_date"],
                "bank_transaction_id": transaction["transaction_id"],
                "matched_automatically": True,
            })
            .eq("id", commission["id"])
        )

        await store.execute_async(
            store.table("bank_transactions")
            .update({"matched": True})
            .eq("id", transaction["id"])
        )

        await store.execute_async(
            store.table("alerts").insert({
                "agent_id": agent_id,
                "type": "commission",
                "title": "עמלה התקבלה ותואמה",
                "message": f"עמלה בסך ₪{commission['amount']} תואמה אוטומטית",
                "action_url": "/agent/commissions",
            })
        )

        logger.info(
            f"Matched commission {commission['id']} with transaction {transaction['transaction_id']}"
        )

# =============================================================================
# app/routers/functions.py - Background Function Endpoints
# =============================================================================
# The two bank reconciliation functions:
# - POST /functions/v1/sync-bank-transactions
# - POST /functions/v1/match-commissions
#
# Both require an authenticated agent and use a service-role store session.
# Sync calls match over HTTP and reports its matched count. Neither shares
# state with the CRM endpoints.
# =============================================================================

import logging

from fastapi import APIRouter, Body, Depends

from app.auth import AuthUser, get_current_user
from app.dependencies import ServiceStoreDep
from core.services.bank_sync_service import BankSyncService
from core.services.commission_service import CommissionService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/sync-bank-transactions")
async def sync_bank_transactions(
    store: ServiceStoreDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Pull the agent's recent bank transactions and reconcile them.

    Returns:
        {"success": true, "synced": <stored>, "matched": <reconciled>}
    """
    result = await BankSyncService.sync_for_agent(
        store,
        agent_id=str(user.id),
        authorization=user.authorization_header,
    )
    return result.model_dump()


@router.post("/match-commissions")
async def match_commissions(
    store: ServiceStoreDep,
    user: AuthUser = Depends(get_current_user),
    payload: dict | None = Body(default=None),
):
    """
    Match the agent's unmatched bank transactions to pending commissions.

    The agent is always the authenticated user; an `agent_id` in the body
    is ignored.
    """
    agent_id = str(user.id)
    if payload and payload.get("agent_id") not in (None, agent_id):
        logger.warning(f"Ignoring agent_id {payload.get('agent_id')} from body for user {agent_id}")

    result = await CommissionService.match_for_agent(store, agent_id)
    return result.model_dump()

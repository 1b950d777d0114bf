# =============================================================================
# core/models/commission.py - Bank Sync & Commission Matching Schemas
# =============================================================================
# Models shared by the two background functions:
# - BankTransaction: one incoming payment from the agent's bank feed
# - CommissionStatus: state of an expected commission
# - SyncResult / MatchResult: function responses
# =============================================================================

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class CommissionStatus(str, Enum):
    PENDING = "pending"
    RECEIVED = "received"


class BankTransaction(BaseModel):
    """A transaction as delivered by the bank feed."""

    id: str = Field(..., description="Bank-side transaction reference")
    amount: float
    description: str | None = None
    date: datetime

    def to_row(self, agent_id: str) -> dict[str, Any]:
        """Row for the bank_transactions table, not yet matched."""
        return {
            "agent_id": agent_id,
            "transaction_id": self.id,
            "amount": self.amount,
            "description": self.description,
            "transaction_date": self.date.isoformat(),
            "matched": False,
        }


class MatchResult(BaseModel):
    """Response of the match-commissions function."""
    success: bool = True
    matched: int = Field(default=0, ge=0)


class SyncResult(BaseModel):
    """Response of the sync-bank-transactions function."""
    success: bool = True
    synced: int = Field(default=0, ge=0)
    matched: int = Field(default=0, ge=0)

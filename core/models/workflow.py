# =============================================================================
# core/models/workflow.py - Workflow Schemas
# =============================================================================
# A workflow is a task the agency tracks for a customer (a claim, a policy
# transfer, a signature round). It is "open" while in any of OPEN_STATUSES.
# =============================================================================

from datetime import date
from enum import Enum
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class WorkflowStatus(str, Enum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    WAITING = "waiting"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class WorkflowPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


# Statuses that count as work still to be done
OPEN_STATUSES = (
    WorkflowStatus.OPEN.value,
    WorkflowStatus.IN_PROGRESS.value,
    WorkflowStatus.WAITING.value,
)

# Priorities surfaced on the dashboard's urgent task list
ATTENTION_PRIORITIES = (
    WorkflowPriority.URGENT.value,
    WorkflowPriority.HIGH.value,
)


class WorkflowStep(BaseModel):
    """One checklist item inside a workflow."""
    id: str
    title: str
    completed: bool = False
    completed_at: str | None = None


class WorkflowCreate(BaseModel):
    """
    Schema for creating a workflow.

    Example:
        {
            "customer_id": "550e8400-e29b-41d4-a716-446655440000",
            "type": "policy_transfer",
            "priority": "high",
            "due_date": "2026-11-01"
        }
    """

    model_config = ConfigDict(extra="allow")

    customer_id: UUID
    type: str = Field(..., min_length=1)
    status: WorkflowStatus | None = None
    priority: WorkflowPriority | None = None
    assigned_to: UUID | None = None
    due_date: date | None = None
    steps: list[WorkflowStep] | None = None

    def to_row(self) -> dict[str, Any]:
        row = self.model_dump(mode="json", exclude_unset=True)
        if self.steps is not None:
            # Steps are stored whole, defaults included
            row["steps"] = [step.model_dump(mode="json") for step in self.steps]
        return row

# =============================================================================
# app/routers/workflows.py - Workflow Endpoints
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Query, status

from app.dependencies import StoreDep
from core.models.workflow import WorkflowCreate, WorkflowPriority, WorkflowStatus
from core.services.workflow_service import WorkflowService

router = APIRouter()


@router.get("")
async def list_workflows(
    store: StoreDep,
    status_filter: Annotated[WorkflowStatus | None, Query(alias="status")] = None,
    priority: WorkflowPriority | None = None,
    assigned_to: Annotated[str | None, Query(description="Agent user ID")] = None,
):
    """List workflows, nearest due date first."""
    workflows = WorkflowService.list_workflows(
        store,
        status=status_filter,
        priority=priority,
        assigned_to=assigned_to,
    )
    return {"data": workflows}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_workflow(store: StoreDep, workflow: WorkflowCreate):
    return {"data": WorkflowService.create_workflow(store, workflow)}

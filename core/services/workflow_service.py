# =============================================================================
# core/services/workflow_service.py - Workflow Operations
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from lib.supabase_client import StoreSession
from lib.utils import normalize_uuid
from core.models.workflow import WorkflowCreate, WorkflowPriority, WorkflowStatus

logger = logging.getLogger(__name__)


class WorkflowService:
    """Service for workflow (task) operations."""

    @staticmethod
    def list_workflows(
        store: StoreSession,
        status: WorkflowStatus | None = None,
        priority: WorkflowPriority | None = None,
        assigned_to: str | UUID | None = None,
    ) -> list[dict[str, Any]]:
        """
        List workflows ordered by nearest due date.

        Each row carries its customer's name and the assigned agent's name.
        """
        query = (
            store.table("workflows")
            .select("*, customers(id, first_name, last_name), assigned_user:users(full_name)")
            .order("due_date", desc=False)
        )

        if status:
            query = query.eq("status", status.value)
        if priority:
            query = query.eq("priority", priority.value)
        if assigned_to:
            query = query.eq("assigned_to", normalize_uuid(assigned_to))

        return store.execute(query).data or []

    @staticmethod
    def create_workflow(store: StoreSession, workflow: WorkflowCreate) -> dict[str, Any]:
        response = store.execute(
            store.table("workflows").insert(workflow.to_row())
        )
        created = response.data[0]
        logger.info(f"Created workflow: {created.get('id')} ({workflow.type})")
        return created

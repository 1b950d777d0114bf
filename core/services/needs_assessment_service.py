# =============================================================================
# core/services/needs_assessment_service.py - Needs Assessment Operations
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from lib.supabase_client import StoreError, StoreSession
from lib.utils import normalize_uuid
from core.models.needs_assessment import NeedsAssessmentUpsert

logger = logging.getLogger(__name__)


class NeedsAssessmentService:
    """
    Service for a customer's needs assessment.

    There is at most one assessment per customer, enforced by the unique
    constraint on `customer_id` which is also the upsert conflict target.
    """

    @staticmethod
    def get_for_customer(
        store: StoreSession,
        customer_id: str | UUID,
    ) -> dict[str, Any] | None:
        """
        Get a customer's needs assessment.

        Returns:
            The assessment with its author's name, or None if the customer
            has not been assessed yet
        """
        try:
            response = store.execute(
                store.table("needs_assessment")
                .select("*, created_by:users(full_name)")
                .eq("customer_id", normalize_uuid(customer_id))
                .single()
            )
        except StoreError as e:
            if e.is_not_found:
                return None
            raise

        return response.data

    @staticmethod
    def upsert_for_customer(
        store: StoreSession,
        customer_id: str | UUID,
        assessment: NeedsAssessmentUpsert,
    ) -> dict[str, Any]:
        """Create the customer's assessment, or replace the existing one."""
        customer_id_str = normalize_uuid(customer_id)
        row = {**assessment.to_row(), "customer_id": customer_id_str}

        response = store.execute(
            store.table("needs_assessment")
            .upsert(row, on_conflict="customer_id")
        )

        logger.info(f"Saved needs assessment for customer: {customer_id_str}")
        return response.data[0]

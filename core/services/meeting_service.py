# =============================================================================
# core/services/meeting_service.py - Meeting Operations
# =============================================================================
# Meetings are always attached to a customer. Two views exist:
# - per customer (newest first), used on the customer card
# - agency wide (soonest first), used by the calendar page
# =============================================================================

import logging
from datetime import datetime
from typing import Any
from uuid import UUID

from lib.supabase_client import StoreSession
from lib.utils import normalize_uuid
from core.models.meeting import MeetingCreate, MeetingStatus, NewMeeting

logger = logging.getLogger(__name__)


class MeetingService:
    """Service for meeting operations."""

    @staticmethod
    def list_customer_meetings(
        store: StoreSession,
        customer_id: str | UUID,
    ) -> list[dict[str, Any]]:
        """List a customer's meetings, latest scheduled first."""
        response = store.execute(
            store.table("meetings")
            .select("*")
            .eq("customer_id", normalize_uuid(customer_id))
            .order("scheduled_at", desc=True)
        )
        return response.data or []

    @staticmethod
    def create_customer_meeting(
        store: StoreSession,
        customer_id: str | UUID,
        meeting: MeetingCreate,
    ) -> dict[str, Any]:
        """
        Create a meeting for a customer.

        The customer from the path wins over any `customer_id` in the body.
        """
        row = {**meeting.to_row(), "customer_id": normalize_uuid(customer_id)}
        return MeetingService._insert(store, row)

    @staticmethod
    def list_meetings(
        store: StoreSession,
        status: MeetingStatus | None = None,
        date_from: datetime | None = None,
        date_to: datetime | None = None,
    ) -> list[dict[str, Any]]:
        """
        List meetings across all customers, soonest first.

        Args:
            store: The request's store session
            status: Only meetings in this state
            date_from: Only meetings scheduled at or after this time
            date_to: Only meetings scheduled at or before this time
        """
        query = (
            store.table("meetings")
            .select("*, customers(id, first_name, last_name)")
            .order("scheduled_at", desc=False)
        )

        if status:
            query = query.eq("status", status.value)
        if date_from:
            query = query.gte("scheduled_at", date_from.isoformat())
        if date_to:
            query = query.lte("scheduled_at", date_to.isoformat())

        return store.execute(query).data or []

    @staticmethod
    def create_meeting(store: StoreSession, meeting: NewMeeting) -> dict[str, Any]:
        return MeetingService._insert(store, meeting.to_row())

    @staticmethod
    def _insert(store: StoreSession, row: dict[str, Any]) -> dict[str, Any]:
        response = store.execute(store.table("meetings").insert(row))
        created = response.data[0]
        logger.info(f"Created meeting: {created.get('id')} for customer {row.get('customer_id')}")
        return created

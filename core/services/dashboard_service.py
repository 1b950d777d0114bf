# =============================================================================
# core/services/dashboard_service.py - Dashboard Aggregation
# =============================================================================
# Builds the two dashboard payloads from many small, independent queries.
#
# Queries with no data dependency run concurrently (asyncio.gather over
# worker threads). The two payloads fail differently:
# - stats: every counter is required; the first failing query aborts
#   the whole request
# - recent: each list is independent; a failing list becomes [] and a
#   failing per-customer product count becomes 0
#
# Each query reads the store at its own moment; the figures are not taken
# from one consistent snapshot.
# =============================================================================

import asyncio
import logging
import math
from datetime import datetime
from typing import Any, Awaitable, TypeVar

from app.config import settings
from lib.supabase_client import StoreError, StoreSession
from lib.utils import end_of_day, local_now, start_of_day, start_of_month, start_of_next_day
from core.models.customer import ProductStatus
from core.models.dashboard import (
    CustomerStats,
    DashboardRecent,
    DashboardStats,
    MeetingStats,
    ProductStats,
    WorkflowStats,
)
from core.models.meeting import MeetingStatus
from core.models.workflow import ATTENTION_PRIORITIES, OPEN_STATUSES, WorkflowPriority

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Size of every list on the dashboard
RECENT_LIMIT = 5


def active_percentage(active: int, total: int) -> int:
    """
    Share of active items as a whole percent, halves rounded up.

    Returns 0 when there is nothing to divide by.
    """
    if not total:
        return 0
    return math.floor(active * 100 / total + 0.5)


async def _or_default(section: str, awaitable: Awaitable[T], default: T) -> T:
    """Await a store call, logging and substituting `default` on StoreError."""
    try:
        return await awaitable
    except StoreError as e:
        logger.warning(f"Dashboard section '{section}' degraded: {e.message}")
        return default


class DashboardService:
    """Service for the dashboard's aggregate views."""

    # -------------------------------------------------------------------------
    # Stats
    # -------------------------------------------------------------------------

    @staticmethod
    async def get_stats(store: StoreSession, now: datetime | None = None) -> DashboardStats:
        """
        Count customers, products, today's meetings and open workflows.

        Args:
            store: The request's store session
            now: Reference time (defaults to now in the agency's time zone)

        Returns:
            DashboardStats with every counter filled (missing counts are 0)

        Raises:
            StoreError: From the first counter query that fails
        """
        now = now or local_now(settings.AGENCY_TIMEZONE)
        today = start_of_day(now).isoformat()
        tomorrow = start_of_next_day(now).isoformat()
        month_start = start_of_month(now).isoformat()

        def count(table: str):
            return store.table(table).select("*", count="exact", head=True)

        (
            customers_total,
            customers_new,
            products_active,
            products_total,
            meetings_today,
            meetings_completed,
            workflows_open,
            workflows_urgent,
        ) = await asyncio.gather(
            store.count_async(count("customers")),
            store.count_async(count("customers").gte("created_at", month_start)),
            store.count_async(count("products").eq("status", ProductStatus.ACTIVE.value)),
            store.count_async(count("products")),
            store.count_async(
                count("meetings")
                .gte("scheduled_at", today)
                .lt("scheduled_at", tomorrow)
            ),
            store.count_async(
                count("meetings")
                .gte("scheduled_at", today)
                .lt("scheduled_at", tomorrow)
                .eq("status", MeetingStatus.COMPLETED.value)
            ),
            store.count_async(count("workflows").in_("status", list(OPEN_STATUSES))),
            store.count_async(
                count("workflows")
                .eq("priority", WorkflowPriority.URGENT.value)
                .in_("status", list(OPEN_STATUSES))
            ),
        )

        return DashboardStats(
            customers=CustomerStats(total=customers_total, new_this_month=customers_new),
            products=ProductStats(
                active=products_active,
                total=products_total,
                percentage=active_percentage(products_active, products_total),
            ),
            meetings=MeetingStats(today=meetings_today, completed_today=meetings_completed),
            workflows=WorkflowStats(open=workflows_open, urgent=workflows_urgent),
        )

    # -------------------------------------------------------------------------
    # Recent
    # -------------------------------------------------------------------------

    @staticmethod
    async def get_recent(store: StoreSession, now: datetime | None = None) -> DashboardRecent:
        """
        Collect the dashboard's short lists.

        The three sections run concurrently. Inside the customers section
        the list must resolve before the per-customer product counts fan out.
        """
        now = now or local_now(settings.AGENCY_TIMEZONE)

        recent_customers, upcoming_meetings, urgent_tasks = await asyncio.gather(
            _or_default("recentCustomers", DashboardService._recent_customers(store), []),
            _or_default("upcomingMeetings", DashboardService._upcoming_meetings(store, now), []),
            _or_default("urgentTasks", DashboardService._urgent_tasks(store), []),
        )

        return DashboardRecent(
            recent_customers=recent_customers,
            upcoming_meetings=upcoming_meetings,
            urgent_tasks=urgent_tasks,
        )

    @staticmethod
    async def _recent_customers(store: StoreSession) -> list[dict[str, Any]]:
        response = await store.execute_async(
            store.table("customers")
            .select("id, first_name, last_name, mobile, created_at")
            .order("created_at", desc=True)
            .limit(RECENT_LIMIT)
        )
        customers = response.data or []

        counts = await asyncio.gather(*(
            _or_default(
                f"products_count:{customer['id']}",
                DashboardService._active_products_count(store, customer["id"]),
                0,
            )
            for customer in customers
        ))

        return [
            {**customer, "products_count": products_count}
            for customer, products_count in zip(customers, counts)
        ]

    @staticmethod
    async def _active_products_count(store: StoreSession, customer_id: str) -> int:
        return await store.count_async(
            store.table("products")
            .select("*", count="exact", head=True)
            .eq("customer_id", customer_id)
            .eq("status", ProductStatus.ACTIVE.value)
        )

    @staticmethod
    async def _upcoming_meetings(store: StoreSession, now: datetime) -> list[dict[str, Any]]:
        """Scheduled meetings from now until the end of today, soonest first."""
        response = await store.execute_async(
            store.table("meetings")
            .select("id, customer_id, type, scheduled_at, duration_minutes, customers(first_name, last_name)")
            .gte("scheduled_at", now.isoformat())
            .lte("scheduled_at", end_of_day(now).isoformat())
            .eq("status", MeetingStatus.SCHEDULED.value)
            .order("scheduled_at", desc=False)
            .limit(RECENT_LIMIT)
        )
        return response.data or []

    @staticmethod
    async def _urgent_tasks(store: StoreSession) -> list[dict[str, Any]]:
        response = await store.execute_async(
            store.table("workflows")
            .select("id, type, priority, due_date, customer_id, customers(first_name, last_name)")
            .in_("status", list(OPEN_STATUSES))
            .in_("priority", list(ATTENTION_PRIORITIES))
            .order("due_date", desc=False)
            .limit(RECENT_LIMIT)
        )
        return response.data or []

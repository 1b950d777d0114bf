# =============================================================================
# core/models/dashboard.py - Dashboard Schemas
# =============================================================================
# These models define the two dashboard payloads:
# - DashboardStats: counters for GET /dashboard/stats
# - DashboardRecent: short lists for GET /dashboard/recent
#
# The web client reads camelCase keys, so every model serializes by alias.
# Rows from the store are passed through as dicts; only the envelope shape
# is modelled here.
# =============================================================================

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model that serializes snake_case fields as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_response(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


# =============================================================================
# Stats
# =============================================================================

class CustomerStats(CamelModel):
    total: int = Field(default=0, ge=0)
    # Customers created since the first day of the current month
    new_this_month: int = Field(default=0, ge=0)


class ProductStats(CamelModel):
    active: int = Field(default=0, ge=0)
    total: int = Field(default=0, ge=0)
    # Share of active products, rounded to a whole percent
    percentage: int = Field(default=0, ge=0, le=100)


class MeetingStats(CamelModel):
    today: int = Field(default=0, ge=0)
    completed_today: int = Field(default=0, ge=0)


class WorkflowStats(CamelModel):
    open: int = Field(default=0, ge=0)
    urgent: int = Field(default=0, ge=0)


class DashboardStats(CamelModel):
    """
    Aggregate counters shown at the top of the dashboard.

    Example:
        {
            "customers": {"total": 120, "newThisMonth": 7},
            "products": {"active": 300, "total": 410, "percentage": 73},
            "meetings": {"today": 4, "completedToday": 1},
            "workflows": {"open": 18, "urgent": 3}
        }
    """

    customers: CustomerStats = Field(default_factory=CustomerStats)
    products: ProductStats = Field(default_factory=ProductStats)
    meetings: MeetingStats = Field(default_factory=MeetingStats)
    workflows: WorkflowStats = Field(default_factory=WorkflowStats)


# =============================================================================
# Recent
# =============================================================================

class DashboardRecent(CamelModel):
    """
    Short lists shown on the dashboard.

    - recent_customers: the newest customers, each with `products_count`
      (its active products)
    - upcoming_meetings: today's remaining scheduled meetings
    - urgent_tasks: open workflows with urgent or high priority
    """

    recent_customers: list[dict[str, Any]] = Field(default_factory=list)
    upcoming_meetings: list[dict[str, Any]] = Field(default_factory=list)
    urgent_tasks: list[dict[str, Any]] = Field(default_factory=list)

# =============================================================================
# app/routers/dashboard.py - Dashboard Endpoints
# =============================================================================
# Both endpoints aggregate several store queries into one response.
# See core/services/dashboard_service.py for the failure policy.
# =============================================================================

from fastapi import APIRouter

from app.dependencies import StoreDep
from core.services.dashboard_service import DashboardService

router = APIRouter()


@router.get("/stats")
async def get_dashboard_stats(store: StoreDep):
    """
    Get the dashboard counters.

    Returns customer totals, product activity, today's meetings and
    open/urgent workflow counts. Fails as a whole if any counter fails.
    """
    stats = await DashboardService.get_stats(store)
    return {"data": stats.to_response()}


@router.get("/recent")
async def get_dashboard_recent(store: StoreDep):
    """
    Get the dashboard lists.

    Returns the five newest customers (with active product counts), the
    rest of today's scheduled meetings and the most pressing open tasks.
    A list that cannot be loaded is returned empty.
    """
    recent = await DashboardService.get_recent(store)
    return {"data": recent.to_response()}

# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - customers.py: Customers, customer meetings and needs assessment
# - meetings.py: Agency-wide meeting calendar
# - workflows.py: Workflow (task) endpoints
# - dashboard.py: Dashboard stats and recent lists
# - functions.py: Bank sync and commission matching functions
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import customers
from . import meetings
from . import workflows
from . import dashboard
from . import functions

__all__ = [
    "health",
    "customers",
    "meetings",
    "workflows",
    "dashboard",
    "functions",
]

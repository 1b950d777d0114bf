# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - customer.py: Customer create/update schemas, product status
# - meeting.py: Meeting schemas and enums
# - needs_assessment.py: Needs assessment upsert schema
# - workflow.py: Workflow schemas, status and priority sets
# - dashboard.py: Dashboard stats and recent-list payloads
# - commission.py: Bank transaction and commission matching schemas
#
# These models define the "contract" between API and clients.
# =============================================================================

from .customer import (
    CUSTOMER_SEARCH_COLUMNS,
    CustomerCreate,
    CustomerUpdate,
    ProductStatus,
)
from .meeting import (
    MeetingCreate,
    MeetingStatus,
    MeetingType,
    NewMeeting,
)
from .needs_assessment import NeedsAssessmentUpsert
from .workflow import (
    ATTENTION_PRIORITIES,
    OPEN_STATUSES,
    WorkflowCreate,
    WorkflowPriority,
    WorkflowStatus,
    WorkflowStep,
)
from .dashboard import (
    CustomerStats,
    DashboardRecent,
    DashboardStats,
    MeetingStats,
    ProductStats,
    WorkflowStats,
)
from .commission import (
    BankTransaction,
    CommissionStatus,
    MatchResult,
    SyncResult,
)

__all__ = [
    # Customer
    "CUSTOMER_SEARCH_COLUMNS",
    "CustomerCreate",
    "CustomerUpdate",
    "ProductStatus",
    # Meeting
    "MeetingCreate",
    "MeetingStatus",
    "MeetingType",
    "NewMeeting",
    # Needs assessment
    "NeedsAssessmentUpsert",
    # Workflow
    "ATTENTION_PRIORITIES",
    "OPEN_STATUSES",
    "WorkflowCreate",
    "WorkflowPriority",
    "WorkflowStatus",
    "WorkflowStep",
    # Dashboard
    "CustomerStats",
    "DashboardRecent",
    "DashboardStats",
    "MeetingStats",
    "ProductStats",
    "WorkflowStats",
    # Commission
    "BankTransaction",
    "CommissionStatus",
    "MatchResult",
    "SyncResult",
]

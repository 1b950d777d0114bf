# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .customer_service import CustomerService
from .meeting_service import MeetingService
from .needs_assessment_service import NeedsAssessmentService
from .workflow_service import WorkflowService
from .dashboard_service import DashboardService
from .commission_service import CommissionService
from .bank_sync_service import BankSyncService, SimulatedBankFeed

__all__ = [
    "CustomerService",
    "MeetingService",
    "NeedsAssessmentService",
    "WorkflowService",
    "DashboardService",
    "CommissionService",
    "BankSyncService",
    "SimulatedBankFeed",
]

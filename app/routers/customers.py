# =============================================================================
# app/routers/customers.py - Customer Endpoints
# =============================================================================
# Customer CRUD plus the two customer-scoped sub-resources:
# - /customers/{id}/meetings
# - /customers/{id}/needs-assessment
#
# Every success is wrapped as {"data": ...}; failures are rendered by the
# exception handlers registered in app.main.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path, Query, status

from app.config import settings
from app.dependencies import StoreDep
from core.models.customer import CustomerCreate, CustomerUpdate
from core.models.meeting import MeetingCreate
from core.models.needs_assessment import NeedsAssessmentUpsert
from core.services.customer_service import CustomerService
from core.services.meeting_service import MeetingService
from core.services.needs_assessment_service import NeedsAssessmentService

router = APIRouter()

CustomerId = Annotated[str, Path(description="Customer UUID")]


# =============================================================================
# Customers
# =============================================================================

@router.get("")
async def list_customers(
    store: StoreDep,
    search: Annotated[str | None, Query(description="Name, ID number, phone or email fragment")] = None,
    limit: Annotated[int, Query(ge=1, le=settings.MAX_PAGE_SIZE)] = settings.DEFAULT_PAGE_SIZE,
    offset: Annotated[int, Query(ge=0)] = 0,
):
    """
    List customers, newest first.

    `count` is the total number of matching customers, independent of
    `limit` and `offset`.
    """
    customers, total = CustomerService.list_customers(
        store,
        search=search,
        limit=limit,
        offset=offset,
    )
    return {"data": customers, "count": total}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_customer(store: StoreDep, customer: CustomerCreate):
    """Create a customer. A duplicate ID number is rejected with 400."""
    return {"data": CustomerService.create_customer(store, customer)}


@router.get("/{customer_id}")
async def get_customer(store: StoreDep, customer_id: CustomerId):
    """
    Get a customer with products, documents, activities, workflows,
    meetings, family members, employers, beneficiaries and needs assessment.
    """
    return {"data": CustomerService.get_customer(store, customer_id)}


@router.patch("/{customer_id}")
async def update_customer(store: StoreDep, customer_id: CustomerId, changes: CustomerUpdate):
    return {"data": CustomerService.update_customer(store, customer_id, changes)}


@router.delete("/{customer_id}")
async def delete_customer(store: StoreDep, customer_id: CustomerId):
    CustomerService.delete_customer(store, customer_id)
    return {"success": True}


# =============================================================================
# Customer Meetings
# =============================================================================

@router.get("/{customer_id}/meetings")
async def list_customer_meetings(store: StoreDep, customer_id: CustomerId):
    return {"data": MeetingService.list_customer_meetings(store, customer_id)}


@router.post("/{customer_id}/meetings", status_code=status.HTTP_201_CREATED)
async def create_customer_meeting(store: StoreDep, customer_id: CustomerId, meeting: MeetingCreate):
    return {"data": MeetingService.create_customer_meeting(store, customer_id, meeting)}


# =============================================================================
# Needs Assessment
# =============================================================================

@router.get("/{customer_id}/needs-assessment")
async def get_needs_assessment(store: StoreDep, customer_id: CustomerId):
    """Get the customer's needs assessment; `data` is null if there is none."""
    return {"data": NeedsAssessmentService.get_for_customer(store, customer_id)}


@router.post("/{customer_id}/needs-assessment", status_code=status.HTTP_201_CREATED)
async def save_needs_assessment(
    store: StoreDep,
    customer_id: CustomerId,
    assessment: NeedsAssessmentUpsert,
):
    """Create the customer's needs assessment or replace the existing one."""
    return {"data": NeedsAssessmentService.upsert_for_customer(store, customer_id, assessment)}

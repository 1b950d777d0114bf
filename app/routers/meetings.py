# =============================================================================
# app/routers/meetings.py - Agency-wide Meeting Endpoints
# =============================================================================

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Query, status

from app.dependencies import StoreDep
from core.models.meeting import MeetingStatus, NewMeeting
from core.services.meeting_service import MeetingService

router = APIRouter()


@router.get("")
async def list_meetings(
    store: StoreDep,
    status_filter: Annotated[MeetingStatus | None, Query(alias="status")] = None,
    date_from: Annotated[datetime | None, Query(alias="from")] = None,
    date_to: Annotated[datetime | None, Query(alias="to")] = None,
):
    """List meetings across all customers, soonest first."""
    meetings = MeetingService.list_meetings(
        store,
        status=status_filter,
        date_from=date_from,
        date_to=date_to,
    )
    return {"data": meetings}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_meeting(store: StoreDep, meeting: NewMeeting):
    return {"data": MeetingService.create_meeting(store, meeting)}

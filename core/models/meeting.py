# =============================================================================
# core/models/meeting.py - Meeting Schemas
# =============================================================================

from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class MeetingType(str, Enum):
    PHONE = "phone"
    IN_PERSON = "in_person"
    VIDEO = "video"


class MeetingStatus(str, Enum):
    """
    Possible states for a meeting.

    Only `scheduled` meetings appear in the dashboard's upcoming list;
    `completed` ones count towards today's progress.
    """
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"


class MeetingCreate(BaseModel):
    """
    Schema for creating a meeting under a customer.

    The customer comes from the URL path, so `customer_id` is not needed
    here and is overwritten if sent.
    """

    model_config = ConfigDict(extra="allow")

    type: MeetingType | None = None
    scheduled_at: datetime
    duration_minutes: int | None = Field(default=None, ge=1)
    location: str | None = None
    summary: str | None = None
    next_steps: str | None = None
    status: MeetingStatus | None = None
    created_by: UUID | None = None

    def to_row(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_unset=True)


class NewMeeting(MeetingCreate):
    """Schema for POST /meetings, where the customer is part of the body."""

    customer_id: UUID

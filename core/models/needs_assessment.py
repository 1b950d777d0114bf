# =============================================================================
# core/models/needs_assessment.py - Needs Assessment Schemas
# =============================================================================
# A customer has at most one needs assessment; POSTing again replaces it.
# The questionnaire columns are owned by the database, so the model only
# types the bookkeeping fields and passes the answers through.
# =============================================================================

from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class NeedsAssessmentUpsert(BaseModel):
    """Schema for POST /customers/{id}/needs-assessment."""

    model_config = ConfigDict(extra="allow")

    # The agent filling in the questionnaire
    created_by: UUID | None = None

    def to_row(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_unset=True)

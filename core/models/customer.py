# =============================================================================
# core/models/customer.py - Customer Schemas
# =============================================================================
# These models define the API contract for customer operations:
# - CustomerCreate: Input for POST /customers
# - CustomerUpdate: Input for PATCH /customers/{id} (all fields optional)
# - ProductStatus: Enum for insurance product states
#
# Unknown columns are allowed through so the database schema stays
# authoritative; only the fields below are type-checked.
# =============================================================================

from datetime import date
from enum import Enum
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


# Text columns searched by GET /customers?search=
CUSTOMER_SEARCH_COLUMNS = (
    "first_name",
    "last_name",
    "id_number",
    "phone",
    "mobile",
    "email",
)

# Relations embedded in GET /customers/{id}
CUSTOMER_DETAIL_SELECT = """
    *,
    products (*),
    documents (*),
    activities (*, created_by:users(full_name)),
    workflows (*),
    meetings (*),
    family_members (*),
    employers (*),
    beneficiaries (*),
    needs_assessment (*)
"""


class ProductStatus(str, Enum):
    """Lifecycle state of an insurance product held by a customer."""
    ACTIVE = "active"
    INACTIVE = "inactive"
    PENDING = "pending"
    CANCELLED = "cancelled"


class CustomerBase(BaseModel):
    """Fields shared by create and update payloads."""

    model_config = ConfigDict(extra="allow")

    birth_date: date | None = None
    gender: str | None = None
    marital_status: str | None = None

    # Contact details (all searchable except the address)
    phone: str | None = None
    mobile: str | None = None
    email: str | None = None

    address_city: str | None = None
    address_street: str | None = None
    address_number: str | None = None

    is_confidential: bool | None = None
    quality_score: int | None = Field(default=None, ge=0, le=100)
    assigned_to: UUID | None = None

    def to_row(self) -> dict[str, Any]:
        """Serialize only the fields the client actually sent."""
        return self.model_dump(mode="json", exclude_unset=True)


class CustomerCreate(CustomerBase):
    """
    Schema for creating a customer.

    Example:
        {
            "first_name": "דנה",
            "last_name": "כהן",
            "id_number": "123456782",
            "mobile": "050-1234567"
        }
    """

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)

    # Israeli ID number, unique across customers
    id_number: str = Field(..., min_length=1, max_length=20)


class CustomerUpdate(CustomerBase):
    """Schema for a partial customer update. Only sent fields are written."""

    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    id_number: str | None = Field(default=None, min_length=1, max_length=20)

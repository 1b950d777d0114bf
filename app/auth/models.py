# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class UserRole(str, Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    AGENT = "agent"


class AuthUser(BaseModel):
    """
    Authenticated user extracted from a Supabase JWT.

    This is the minimal user info available from the token itself,
    without querying the database. `access_token` is kept so it can be
    forwarded to downstream functions.
    """
    model_config = ConfigDict(frozen=True)

    id: UUID
    email: Optional[str] = None
    access_token: Optional[str] = Field(default=None, repr=False, exclude=True)

    @property
    def authorization_header(self) -> str:
        return f"Bearer {self.access_token}"


class UserResponse(BaseModel):
    """
    Agency user profile from the public.users table.
    """
    id: UUID
    email: Optional[str] = None
    full_name: Optional[str] = None
    role: Optional[UserRole] = None
    phone: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

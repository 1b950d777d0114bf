# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# API endpoints for authentication-related operations.
#
# Note: Actual login is handled by Supabase Auth client-side.
# These routes are for getting user info after authentication.
# =============================================================================

import logging

from fastapi import APIRouter, Depends

from app.auth.dependencies import get_current_user
from app.auth.models import AuthUser, UserResponse
from app.dependencies import StoreDep
from lib.supabase_client import StoreError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    store: StoreDep,
    user: AuthUser = Depends(get_current_user),
) -> UserResponse:
    """
    Get the current agent's profile.

    Falls back to the token's own claims when the user has no row in
    public.users yet.
    """
    try:
        response = store.execute(
            store.table("users")
            .select("*")
            .eq("id", str(user.id))
            .single()
        )
        return UserResponse(**response.data)
    except StoreError as e:
        if not e.is_not_found:
            raise

    logger.info(f"No profile row for user {user.id}, returning token claims")
    return UserResponse(id=user.id, email=user.email)

# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# =============================================================================

import logging
from typing import Annotated, Iterator

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from lib.supabase_client import StoreSession

logger = logging.getLogger(__name__)

bearer_optional = HTTPBearer(auto_error=False)


def get_store(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_optional),
) -> Iterator[StoreSession]:
    """
    Open a store session for the duration of one request.

    The caller's bearer token, when present, is forwarded so row level
    security applies. The session is closed after the response is built,
    including when the handler raises.
    """
    token = credentials.credentials if credentials else None
    store = StoreSession.open(access_token=token)
    try:
        yield store
    finally:
        store.close()


def get_service_store() -> Iterator[StoreSession]:
    """
    Open a service-role store session for the duration of one request.

    Used by background functions that act on behalf of an already
    authenticated agent and must bypass row level security.
    """
    store = StoreSession.open()
    try:
        yield store
    finally:
        store.close()


# Type aliases for dependency injection
StoreDep = Annotated[StoreSession, Depends(get_store)]
ServiceStoreDep = Annotated[StoreSession, Depends(get_service_store)]

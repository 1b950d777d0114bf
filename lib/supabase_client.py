# =============================================================================
# lib/supabase_client.py - Supabase Store Session
# =============================================================================
# This module owns every conversation with the Supabase database:
# - StoreSession: a per-request wrapper around a Supabase client
# - StoreError: the typed error raised for any failed store operation
#
# Nothing outside this module inspects raw PostgREST/Postgres error codes.
# Callers catch StoreError and branch on its `kind`.
#
# Usage:
#   from lib.supabase_client import StoreSession
#
#   with StoreSession.open(access_token=token) as store:
#       rows = store.execute(store.table("customers").select("*")).data
# =============================================================================

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Any

from postgrest.exceptions import APIError
from supabase import create_client, Client

from app.config import settings
from lib.utils import ApplicationError

# Set up logging for this module
logger = logging.getLogger(__name__)


# PostgREST: a `.single()` request matched zero (or several) rows
NO_ROWS_CODE = "PGRST116"
# Postgres: unique_violation
UNIQUE_VIOLATION_CODE = "23505"


class StoreErrorKind(str, Enum):
    """Classification of a failed store operation."""
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    FAILURE = "failure"


class StoreError(ApplicationError):
    """
    Error during a Supabase operation.

    `message` is the store's own message, passed through unchanged so the
    HTTP layer can surface it on generic failures.
    """

    def __init__(
        self,
        message: str,
        kind: StoreErrorKind = StoreErrorKind.FAILURE,
        store_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code=f"STORE_{kind.name}", details=details)
        self.kind = kind
        self.store_code = store_code

    @property
    def is_not_found(self) -> bool:
        return self.kind is StoreErrorKind.NOT_FOUND

    @property
    def is_conflict(self) -> bool:
        return self.kind is StoreErrorKind.CONFLICT


def classify_store_error(exc: APIError) -> StoreError:
    """
    Translate a PostgREST APIError into a StoreError.

    Args:
        exc: The error raised by the query builder

    Returns:
        StoreError with the matching kind and the store's message
    """
    code = getattr(exc, "code", None)
    message = getattr(exc, "message", None) or str(exc)

    if code == NO_ROWS_CODE:
        kind = StoreErrorKind.NOT_FOUND
    elif code == UNIQUE_VIOLATION_CODE:
        kind = StoreErrorKind.CONFLICT
    else:
        kind = StoreErrorKind.FAILURE

    details = {}
    if getattr(exc, "details", None):
        details["details"] = exc.details
    if getattr(exc, "hint", None):
        details["hint"] = exc.hint

    return StoreError(message, kind=kind, store_code=code, details=details)


class StoreSession:
    """
    A Supabase client scoped to one request.

    A session is opened when a request arrives and closed when it leaves,
    whatever the outcome. When the caller forwards the user's access token,
    queries run under that user's row level security policies; otherwise
    the service key is used.

    Example:
        with StoreSession.open() as store:
            response = store.execute(
                store.table("customers").select("id").limit(5)
            )
    """

    def __init__(self, client: Client):
        self._client = client
        self._closed = False

    @classmethod
    def open(cls, access_token: str | None = None) -> StoreSession:
        """
        Create a new session.

        Args:
            access_token: Optional user JWT to run queries as that user

        Returns:
            StoreSession: An open session

        Raises:
            StoreError: If the client cannot be created
        """
        key = settings.SUPABASE_ANON_KEY if access_token else settings.SUPABASE_SERVICE_KEY

        try:
            client = create_client(settings.SUPABASE_URL, key)
            if access_token:
                client.postgrest.auth(access_token)
        except Exception as e:
            raise StoreError(
                f"Failed to create Supabase client: {e}",
                details={"suggestion": "Check SUPABASE_URL and the Supabase keys in your .env file"},
            )

        logger.debug(f"Opened store session (user scoped: {bool(access_token)})")
        return cls(client)

    def __enter__(self) -> StoreSession:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def client(self) -> Client:
        return self._client

    def table(self, name: str):
        """Start a query builder on a table."""
        return self._client.table(name)

    def execute(self, query) -> Any:
        """
        Execute a query builder and return its response.

        Raises:
            StoreError: With the kind derived from the store's error code
        """
        try:
            return query.execute()
        except APIError as e:
            error = classify_store_error(e)
            if not error.is_not_found:
                logger.error(f"Store query failed [{error.store_code}]: {error.message}")
            raise error from e

    async def execute_async(self, query) -> Any:
        """
        Execute a query builder on a worker thread.

        Used by aggregation handlers to run independent queries
        concurrently with asyncio.gather().
        """
        return await asyncio.to_thread(self.execute, query)

    async def count_async(self, query) -> int:
        """Execute a count query, defaulting a missing count to 0."""
        response = await self.execute_async(query)
        return response.count or 0

    def close(self) -> None:
        """Release the session's HTTP connections. Safe to call twice."""
        if self._closed:
            return
        self._closed = True
        try:
            self._client.postgrest.aclose()
        except Exception as e:
            logger.warning(f"Failed to close store session cleanly: {e}")
        logger.debug("Closed store session")

# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Per-request store session and typed store errors
# - utils.py: Shared utilities (dates, search filters, base error)
# =============================================================================

from lib.supabase_client import StoreError, StoreErrorKind, StoreSession, classify_store_error
from lib.utils import ApplicationError, ilike_any, normalize_uuid

__all__ = [
    # Store
    "StoreError",
    "StoreErrorKind",
    "StoreSession",
    "classify_store_error",
    # Utils
    "ApplicationError",
    "ilike_any",
    "normalize_uuid",
]

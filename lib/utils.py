# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

from datetime import datetime, time, timedelta
from datetime import timezone as dt_timezone
from typing import Any
from uuid import UUID
from zoneinfo import ZoneInfo


# =============================================================================
# UUID Utilities
# =============================================================================

def normalize_uuid(value: str | UUID) -> str:
    """
    Normalize a UUID to string format.

    Handles both string and UUID objects, ensuring consistent string output.

    Example:
        customer_id = normalize_uuid(uuid_obj)  # "550e8400-..."
        customer_id = normalize_uuid("550e8400-...")  # "550e8400-..."
    """
    return str(value) if isinstance(value, UUID) else value


# =============================================================================
# Date Utilities
# =============================================================================

def local_now(timezone: str) -> datetime:
    """Current time as an aware datetime in the given IANA time zone."""
    return datetime.now(ZoneInfo(timezone))


def parse_timestamp(value: str | datetime) -> datetime:
    """
    Parse an ISO-8601 timestamp or date from the store.

    Values without an offset (including bare dates) are taken as UTC so
    they can be compared with offset-aware timestamps.
    """
    parsed = value if isinstance(value, datetime) else datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=dt_timezone.utc)
    return parsed


def start_of_day(moment: datetime) -> datetime:
    """Midnight of the day containing `moment`, keeping its tzinfo."""
    return datetime.combine(moment.date(), time.min, tzinfo=moment.tzinfo)


def end_of_day(moment: datetime) -> datetime:
    """Last representable instant of the day containing `moment`."""
    return datetime.combine(moment.date(), time.max, tzinfo=moment.tzinfo)


def start_of_next_day(moment: datetime) -> datetime:
    return start_of_day(moment) + timedelta(days=1)


def start_of_month(moment: datetime) -> datetime:
    """Midnight of the first calendar day of the month containing `moment`."""
    return start_of_day(moment).replace(day=1)


# =============================================================================
# Search Utilities
# =============================================================================

def quote_filter_value(value: str) -> str:
    """
    Quote a value for use inside a PostgREST logic tree.

    Reserved characters such as `,` `.` `:` `(` `)` are safe inside
    double quotes; backslashes and quotes are escaped.

    Example:
        quote_filter_value('a,b')  # '"a,b"'
    """
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


# LIKE metacharacters, escaped with a backslash (the Postgres default escape)
LIKE_ESCAPES = str.maketrans({"\\": "\\\\", "%": "\\%", "_": "\\_"})


def escape_like(term: str) -> str:
    """
    Escape `%`, `_` and `\\` so `term` matches only itself in a LIKE pattern.

    Example:
        escape_like("100%_off")  # '100\\%\\_off'
    """
    return term.translate(LIKE_ESCAPES)


def ilike_any(columns: list[str] | tuple[str, ...], term: str) -> str:
    """
    Build an `or` filter matching `term` case-insensitively in any column.

    `term` is matched literally; its LIKE wildcards are escaped.

    Example:
        ilike_any(["first_name", "email"], "dan")
        # 'first_name.ilike."%dan%",email.ilike."%dan%"'
    """
    pattern = quote_filter_value(f"%{escape_like(term)}%")
    return ",".join(f"{column}.ilike.{pattern}" for column in columns)


# =============================================================================
# Base Error Class
# =============================================================================

class ApplicationError(Exception):
    """
    Base error class for application-specific errors.

    Attributes:
        code: Error code for categorization
        message: Human-readable error message
        details: Additional context for debugging

    Example:
        class MyServiceError(ApplicationError):
            def __init__(self, message: str, **kwargs):
                super().__init__(message, code="MY_SERVICE_ERROR", **kwargs)
    """

    def __init__(
        self,
        message: str,
        code: str = "APPLICATION_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }

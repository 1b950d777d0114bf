# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
#
# Every failure leaves the API as {"error": "<message>"}:
# - CrmException subclasses carry their own status and (Hebrew) message
# - StoreError that no service translated -> 500 with the store's message
# - Malformed JSON bodies and anything unexpected -> 500 generic message
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from lib.supabase_client import StoreError

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"

CUSTOMER_NOT_FOUND_MESSAGE = "לקוח לא נמצא"
CUSTOMER_EXISTS_MESSAGE = "לקוח עם תעודת זהות זו כבר קיים במערכת"


class CrmException(Exception):
    """
    Base exception for the CRM API.

    All domain exceptions inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: str = "CRM_ERROR",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        self.headers = headers

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        return {"error": self.message}


# =============================================================================
# Customer Exceptions
# =============================================================================

class CustomerNotFoundError(CrmException):
    """Raised when a customer ID doesn't exist."""

    def __init__(self, customer_id: str):
        super().__init__(
            message=CUSTOMER_NOT_FOUND_MESSAGE,
            code="CUSTOMER_NOT_FOUND",
            status_code=404,
            details={"customer_id": customer_id}
        )


class CustomerExistsError(CrmException):
    """Raised when a customer with the same ID number already exists."""

    def __init__(self, id_number: str | None = None):
        super().__init__(
            message=CUSTOMER_EXISTS_MESSAGE,
            code="CUSTOMER_EXISTS",
            status_code=400,
            details={"id_number": id_number}
        )


# =============================================================================
# Auth Exceptions
# =============================================================================

class UnauthorizedError(CrmException):
    """Raised when a request lacks a valid bearer token."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(
            message=message,
            code="UNAUTHORIZED",
            status_code=401,
            headers={"WWW-Authenticate": "Bearer"},
        )


# =============================================================================
# Exception Handlers
# =============================================================================

def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def crm_exception_handler(
    request: Request,
    exc: CrmException
) -> JSONResponse:
    """Convert CrmException to its JSON error envelope."""
    logger.warning(f"{request.method} {request.url.path} -> {exc.status_code} {exc.code}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=exc.headers,
    )


async def store_exception_handler(
    request: Request,
    exc: StoreError
) -> JSONResponse:
    """
    Handle store errors that no service translated.

    The raw store message is passed through to the client.
    """
    logger.error(f"{request.method} {request.url.path} -> store failure: {exc.to_dict()}")
    return error_response(500, exc.message)


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request validation errors.

    An unparseable JSON body is an unexpected failure (500, generic message);
    a well-formed body with bad field values is a 422.
    """
    errors = exc.errors()
    if any(error.get("type") == "json_invalid" for error in errors):
        logger.warning(f"{request.method} {request.url.path} -> malformed JSON body")
        return error_response(500, INTERNAL_ERROR_MESSAGE)

    summary = "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}"
        for error in errors
    )
    logger.warning(f"{request.method} {request.url.path} -> validation error: {summary}")
    return error_response(422, summary or "Validation error")


async def unexpected_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle anything not raised on purpose."""
    logger.exception(f"Unexpected error on {request.method} {request.url.path}: {exc}")
    return error_response(500, INTERNAL_ERROR_MESSAGE)

# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the agency CRM API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   poetry run uvicorn app.main:app --reload
#   python -m app.main   (binds API_HOST:API_PORT, reloads in development)
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from app.exceptions import (
    CrmException,
    crm_exception_handler,
    error_response,
    store_exception_handler,
    unexpected_exception_handler,
    validation_exception_handler,
)
from app.routers import health, customers, meetings, workflows, dashboard, functions
from app.auth import routes as auth_routes
from lib.supabase_client import StoreError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Store sessions are opened per request, so there is nothing to
    initialize beyond logging the configuration.
    """
    logger.info(f"Starting CRM API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")
    logger.info(f"Dashboard time zone: {settings.AGENCY_TIMEZONE}")

    yield

    logger.info("Shutting down CRM API")


# Create FastAPI application
app = FastAPI(
    title="Agency CRM API",
    description="""
## Insurance Agency CRM API

Customers, meetings, needs assessments and workflows for an insurance
agency, plus the dashboard that summarizes them.

Every response is either `{"data": ...}` or `{"error": "..."}`.
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Customers", "description": "Customer records, meetings and needs assessment"},
        {"name": "Meetings", "description": "Agency-wide meeting calendar"},
        {"name": "Workflows", "description": "Open work items per customer"},
        {"name": "Dashboard", "description": "Aggregate statistics and recent activity"},
        {"name": "Functions", "description": "Bank sync and commission matching"},
        {"name": "Auth", "description": "Current user"},
        {"name": "Health", "description": "API health and readiness checks"},
    ],
)


# =============================================================================
# Middleware
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(CrmException)
async def handle_crm_exception(request: Request, exc: CrmException):
    """Handle domain exceptions (not found, conflict, unauthorized)."""
    return await crm_exception_handler(request, exc)


@app.exception_handler(StoreError)
async def handle_store_error(request: Request, exc: StoreError):
    """Handle store failures that no service translated."""
    return await store_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    return await validation_exception_handler(request, exc)


@app.exception_handler(StarletteHTTPException)
async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render framework HTTP errors (401, 404 route, 405) in the error envelope."""
    response = error_response(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    return await unexpected_exception_handler(request, exc)


# =============================================================================
# Routers
# =============================================================================

app.include_router(health.router, prefix="/api", tags=["Health"])

app.include_router(auth_routes.router, prefix="/api/auth", tags=["Auth"])

app.include_router(customers.router, prefix="/api/customers", tags=["Customers"])

app.include_router(meetings.router, prefix="/api/meetings", tags=["Meetings"])

app.include_router(workflows.router, prefix="/api/workflows", tags=["Workflows"])

app.include_router(dashboard.router, prefix="/api/dashboard", tags=["Dashboard"])

app.include_router(functions.router, prefix="/functions/v1", tags=["Functions"])


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "Agency CRM API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/health",
    }


def main() -> None:
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.is_development,
    )


if __name__ == "__main__":
    main()

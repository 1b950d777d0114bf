# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the CRM's business logic:
# - models/: Pydantic schemas for request validation and payloads
# - services/: Store queries for each resource and the dashboard
#
# Routers in app/ stay thin and delegate here.
# =============================================================================

# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the CRM API:
# - test_store.py: Store session and error classification
# - test_customers.py: Customer endpoints
# - test_meetings.py: Meeting and needs assessment endpoints
# - test_workflows.py: Workflow endpoints
# - test_dashboard.py: Dashboard aggregation
# - test_functions.py: Bank sync and commission matching
# - test_models.py: Pydantic model validation
# - test_health.py: Health checks, current user, error envelope
#
# Run tests with: poetry run pytest
# =============================================================================

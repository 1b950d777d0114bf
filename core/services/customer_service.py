# =============================================================================
# core/services/customer_service.py - Customer Business Logic
# =============================================================================
# Handles customer CRUD operations.
# Separates HTTP concerns from database/business logic.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from lib.supabase_client import StoreError, StoreSession
from lib.utils import ilike_any, normalize_uuid
from core.models.customer import (
    CUSTOMER_DETAIL_SELECT,
    CUSTOMER_SEARCH_COLUMNS,
    CustomerCreate,
    CustomerUpdate,
)
from app.exceptions import CustomerExistsError, CustomerNotFoundError

logger = logging.getLogger(__name__)


class CustomerService:
    """
    Service for customer management operations.

    Provides a clean interface between API routes and database.
    """

    @staticmethod
    def list_customers(
        store: StoreSession,
        search: str | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> tuple[list[dict[str, Any]], int]:
        """
        List customers, newest first, with an optional free-text search.

        Args:
            store: The request's store session
            search: Case-insensitive partial match against name, ID number,
                phone, mobile and email
            limit: Page size
            offset: Rows to skip

        Returns:
            Tuple of (customers list, total matching count)
        """
        query = (
            store.table("customers")
            .select("*, products(count)", count="exact")
        )

        if search:
            query = query.or_(ilike_any(CUSTOMER_SEARCH_COLUMNS, search))

        query = query.order("created_at", desc=True).range(offset, offset + limit - 1)

        response = store.execute(query)
        customers = response.data or []
        total = response.count or 0

        logger.debug(f"Listed {len(customers)} of {total} customers (search={search!r})")
        return customers, total

    @staticmethod
    def get_customer(store: StoreSession, customer_id: str | UUID) -> dict[str, Any]:
        """
        Get a customer with all related records.

        Raises:
            CustomerNotFoundError: If the customer doesn't exist
        """
        customer_id_str = normalize_uuid(customer_id)

        try:
            response = store.execute(
                store.table("customers")
                .select(CUSTOMER_DETAIL_SELECT)
                .eq("id", customer_id_str)
                .single()
            )
        except StoreError as e:
            if e.is_not_found:
                raise CustomerNotFoundError(customer_id_str) from e
            raise

        return response.data

    @staticmethod
    def create_customer(store: StoreSession, customer: CustomerCreate) -> dict[str, Any]:
        """
        Create a new customer.

        Raises:
            CustomerExistsError: If the ID number is already registered
            StoreError: For any other store failure
        """
        try:
            response = store.execute(
                store.table("customers").insert(customer.to_row())
            )
        except StoreError as e:
            if e.is_conflict:
                logger.info(f"Rejected duplicate customer id_number={customer.id_number}")
                raise CustomerExistsError(customer.id_number) from e
            raise

        created = response.data[0]
        logger.info(f"Created customer: {created.get('id')}")
        return created

    @staticmethod
    def update_customer(
        store: StoreSession,
        customer_id: str | UUID,
        changes: CustomerUpdate,
    ) -> dict[str, Any]:
        """
        Apply a partial update to a customer.

        Raises:
            CustomerNotFoundError: If no customer has this ID
            CustomerExistsError: If the change collides with another ID number
        """
        customer_id_str = normalize_uuid(customer_id)
        update_data = changes.to_row()

        if not update_data:
            # Nothing to change; answer with the same flat row an update returns
            try:
                response = store.execute(
                    store.table("customers")
                    .select("*")
                    .eq("id", customer_id_str)
                    .single()
                )
            except StoreError as e:
                if e.is_not_found:
                    raise CustomerNotFoundError(customer_id_str) from e
                raise
            return response.data

        try:
            response = store.execute(
                store.table("customers")
                .update(update_data)
                .eq("id", customer_id_str)
            )
        except StoreError as e:
            if e.is_conflict:
                raise CustomerExistsError(update_data.get("id_number")) from e
            raise

        if not response.data:
            raise CustomerNotFoundError(customer_id_str)

        logger.info(f"Updated customer: {customer_id_str} ({', '.join(update_data)})")
        return response.data[0]

    @staticmethod
    def delete_customer(store: StoreSession, customer_id: str | UUID) -> None:
        """
        Delete a customer.

        Dependent rows are handled by the database's foreign key rules;
        a restricting constraint surfaces as a StoreError.
        """
        customer_id_str = normalize_uuid(customer_id)

        store.execute(
            store.table("customers").delete().eq("id", customer_id_str)
        )
        logger.info(f"Deleted customer: {customer_id_str}")

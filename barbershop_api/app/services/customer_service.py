"""
Service layer for customers.

Customers are stored in the ``customers`` collection.  Deleting a
customer publishes an ``EntityDeleted`` event so that the cascade
coordinator can remove the customer's appointments.
"""

import logging
from typing import Any, Dict, List

from barbershop_api.app.core.errors import MissingField, NotFound, ValidationError
from barbershop_api.app.core.store import get_store
from barbershop_api.app.schemas.customer import CustomerCreate, CustomerUpdate
from barbershop_api.app.services.cascade_service import EntityDeleted, cascade_coordinator

COLLECTION = "customers"

# Fields that may be cleared by sending an explicit null.
NULLABLE_FIELDS = {"phone", "email"}


class CustomerService:
    """Service for managing customers."""

    @classmethod
    async def list_customers(cls) -> List[Dict[str, Any]]:
        """Return all customers ordered by name (case-insensitive)."""
        rows = get_store().list(COLLECTION)
        rows.sort(key=lambda c: (c.get("name") or "").casefold())
        return rows

    @classmethod
    async def get_customer(cls, customer_id: str) -> Dict[str, Any]:
        row = get_store().get_by_id(COLLECTION, customer_id)
        if row is None:
            raise NotFound("Customer not found")
        return row

    @classmethod
    async def create_customer(cls, data: CustomerCreate) -> Dict[str, Any]:
        """Insert a new customer.  ``name`` is mandatory."""
        logger = logging.getLogger(__name__)
        if not data.name or not data.name.strip():
            raise MissingField("Name required")
        customer = get_store().create(
            COLLECTION,
            {"name": data.name, "phone": data.phone or None, "email": data.email or None},
        )
        logger.info("Created customer %s", customer["id"])
        return customer

    @classmethod
    async def update_customer(cls, customer_id: str, data: CustomerUpdate) -> Dict[str, Any]:
        """Update the fields present in ``data``.

        An explicit ``null`` clears ``phone``/``email`` and is ignored
        for ``name``.  An empty patch returns the customer unchanged.
        """
        logger = logging.getLogger(__name__)
        patch = {
            k: v
            for k, v in data.model_dump(exclude_unset=True).items()
            if v is not None or k in NULLABLE_FIELDS
        }
        if "name" in patch and not patch["name"].strip():
            raise ValidationError("Name cannot be empty")
        if not patch:
            return await cls.get_customer(customer_id)
        updated = get_store().update(COLLECTION, customer_id, patch)
        if updated is None:
            raise NotFound("Customer not found")
        logger.info("Updated customer %s (%s)", customer_id, ", ".join(sorted(patch)))
        return updated

    @classmethod
    async def delete_customer(cls, customer_id: str) -> int:
        """Delete a customer and every appointment referencing it.

        Idempotent: deleting an unknown id succeeds.  Returns the number
        of appointments removed by the cascade.
        """
        logger = logging.getLogger(__name__)
        get_store().remove(COLLECTION, customer_id)
        logger.info("Deleted customer %s", customer_id)
        return cascade_coordinator.handle(EntityDeleted("customer", str(customer_id)))

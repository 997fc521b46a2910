"""
Customer endpoints for API v1.

CRUD routes for the ``customers`` collection.  Deleting a customer
also deletes the customer's appointments.  Domain errors raised by
``CustomerService`` are translated to HTTP responses by the handlers
registered in ``main.create_app``.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, status

from barbershop_api.app.schemas.customer import CustomerCreate, CustomerRead, CustomerUpdate
from barbershop_api.app.services.customer_service import CustomerService

router = APIRouter()


@router.get("", response_model=List[CustomerRead])
async def list_customers() -> List[Dict[str, Any]]:
    """Return every customer ordered by name."""
    return await CustomerService.list_customers()


@router.get("/{customer_id}", response_model=CustomerRead)
async def get_customer(customer_id: str) -> Dict[str, Any]:
    """Retrieve a customer by ID.  Returns 404 if it does not exist."""
    return await CustomerService.get_customer(customer_id)


@router.post("", response_model=CustomerRead, status_code=status.HTTP_201_CREATED)
async def create_customer(customer: CustomerCreate) -> Dict[str, Any]:
    """Create a customer.  ``name`` is required; returns 400 without it."""
    return await CustomerService.create_customer(customer)


@router.put("/{customer_id}", response_model=CustomerRead)
async def update_customer(customer_id: str, customer: CustomerUpdate) -> Dict[str, Any]:
    """Update the fields present in the body."""
    return await CustomerService.update_customer(customer_id, customer)


@router.delete("/{customer_id}")
async def delete_customer(customer_id: str) -> Dict[str, Any]:
    """Delete a customer and the appointments referencing it.

    Succeeds even when the customer does not exist.
    """
    await CustomerService.delete_customer(customer_id)
    return {"success": True}

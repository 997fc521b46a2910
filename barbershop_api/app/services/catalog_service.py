"""
Service layer for the catalogue of services offered by the shop.

A service has a title, a duration in minutes and a price.  All three
are required on creation.  Deleting a service cascades to the
appointments booked for it.
"""

import logging
from typing import Any, Dict, List

from barbershop_api.app.core.errors import MissingField, NotFound, ValidationError
from barbershop_api.app.core.store import get_store
from barbershop_api.app.schemas.service import ServiceCreate, ServiceUpdate
from barbershop_api.app.services.cascade_service import EntityDeleted, cascade_coordinator

COLLECTION = "services"


def _check_values(fields: Dict[str, Any]) -> None:
    if "title" in fields and not fields["title"].strip():
        raise ValidationError("Title cannot be empty")
    if "duration_min" in fields and fields["duration_min"] <= 0:
        raise ValidationError("duration_min must be a positive integer")
    if "price" in fields and fields["price"] < 0:
        raise ValidationError("price must be a non-negative number")


class CatalogService:
    """Service for managing the services catalogue."""

    @classmethod
    async def list_services(cls) -> List[Dict[str, Any]]:
        """Return all services ordered by title."""
        rows = get_store().list(COLLECTION)
        rows.sort(key=lambda s: (s.get("title") or "").casefold())
        return rows

    @classmethod
    async def get_service(cls, service_id: str) -> Dict[str, Any]:
        row = get_store().get_by_id(COLLECTION, service_id)
        if row is None:
            raise NotFound("Service not found")
        return row

    @classmethod
    async def create_service(cls, data: ServiceCreate) -> Dict[str, Any]:
        logger = logging.getLogger(__name__)
        if not data.title or data.duration_min is None or data.price is None:
            raise MissingField("Missing fields")
        fields = {"title": data.title, "duration_min": data.duration_min, "price": data.price}
        _check_values(fields)
        service = get_store().create(COLLECTION, fields)
        logger.info("Created service %s (%s)", service["id"], service["title"])
        return service

    @classmethod
    async def update_service(cls, service_id: str, data: ServiceUpdate) -> Dict[str, Any]:
        """Update the fields present in ``data``; explicit nulls are ignored."""
        logger = logging.getLogger(__name__)
        patch = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None}
        _check_values(patch)
        if not patch:
            return await cls.get_service(service_id)
        updated = get_store().update(COLLECTION, service_id, patch)
        if updated is None:
            raise NotFound("Service not found")
        logger.info("Updated service %s (%s)", service_id, ", ".join(sorted(patch)))
        return updated

    @classmethod
    async def delete_service(cls, service_id: str) -> int:
        """Delete a service and its appointments.  Idempotent."""
        logger = logging.getLogger(__name__)
        get_store().remove(COLLECTION, service_id)
        logger.info("Deleted service %s", service_id)
        return cascade_coordinator.handle(EntityDeleted("service", str(service_id)))

"""
Service catalogue endpoints for API v1.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, status

from barbershop_api.app.schemas.service import ServiceCreate, ServiceRead, ServiceUpdate
from barbershop_api.app.services.catalog_service import CatalogService

router = APIRouter()


@router.get("", response_model=List[ServiceRead])
async def list_services() -> List[Dict[str, Any]]:
    return await CatalogService.list_services()


@router.get("/{service_id}", response_model=ServiceRead)
async def get_service(service_id: str) -> Dict[str, Any]:
    return await CatalogService.get_service(service_id)


@router.post("", response_model=ServiceRead, status_code=status.HTTP_201_CREATED)
async def create_service(service: ServiceCreate) -> Dict[str, Any]:
    """Create a service.  ``title``, ``duration_min`` and ``price`` are required."""
    return await CatalogService.create_service(service)


@router.put("/{service_id}", response_model=ServiceRead)
async def update_service(service_id: str, service: ServiceUpdate) -> Dict[str, Any]:
    return await CatalogService.update_service(service_id, service)


@router.delete("/{service_id}")
async def delete_service(service_id: str) -> Dict[str, Any]:
    """Delete a service and every appointment booked for it."""
    await CatalogService.delete_service(service_id)
    return {"success": True}

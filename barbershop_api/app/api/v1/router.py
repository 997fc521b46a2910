"""
Top-level router for version 1 of the API.

Aggregates the customer, service and appointment routers.  When a new
collection is added, include its router here.
"""

from fastapi import APIRouter

from .endpoints import appointments, customers, info, services

router = APIRouter()

router.include_router(customers.router, prefix="/customers", tags=["customers"])
router.include_router(services.router, prefix="/services", tags=["services"])
router.include_router(appointments.router, prefix="/appointments", tags=["appointments"])
router.include_router(info.router, prefix="/info", tags=["info"])

"""
Appointment endpoints for API v1.

These routes book, reschedule, list and cancel appointments.  They
rely on ``AppointmentService`` for validation, reference checks and
slot uniqueness.  A request for a slot that is already taken returns
HTTP 409; malformed input and unknown customers/services return 400.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Query, status

from barbershop_api.app.schemas.appointment import (
    AppointmentCreate,
    AppointmentListItem,
    AppointmentRead,
    AppointmentUpdate,
)
from barbershop_api.app.services.appointment_service import AppointmentService

router = APIRouter()


@router.get("", response_model=List[AppointmentListItem])
async def list_appointments(
    date: Optional[str] = Query(None, description="Only appointments on this day (YYYY-MM-DD)"),
    customer_id: Optional[str] = Query(None, alias="customerId", description="Only this customer's appointments"),
) -> List[Dict[str, Any]]:
    """List appointments ordered by date and start time.

    Each row includes ``customer_name``, ``service_title`` and
    ``duration_min`` looked up from the referenced records.
    """
    return await AppointmentService.list_appointments(date=date, customer_id=customer_id)


@router.get("/{appointment_id}", response_model=AppointmentRead)
async def get_appointment(appointment_id: str) -> Dict[str, Any]:
    return await AppointmentService.get_appointment(appointment_id)


@router.post("", response_model=AppointmentRead, status_code=status.HTTP_201_CREATED)
async def create_appointment(appointment: AppointmentCreate) -> Dict[str, Any]:
    """Book an appointment with status ``booked``."""
    return await AppointmentService.create_appointment(appointment)


@router.put("/{appointment_id}", response_model=AppointmentRead)
async def update_appointment(appointment_id: str, appointment: AppointmentUpdate) -> Dict[str, Any]:
    """Reschedule an appointment or change its status.

    Moving to an occupied slot returns 409.
    """
    return await AppointmentService.update_appointment(appointment_id, appointment)


@router.delete("/{appointment_id}")
async def delete_appointment(appointment_id: str) -> Dict[str, Any]:
    await AppointmentService.delete_appointment(appointment_id)
    return {"success": True}

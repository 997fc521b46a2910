"""
Business logic for appointments.

The shop has a single barber, so a slot is the pair
``(appointment_date, start_time)`` and at most one appointment may
occupy it, whoever the customer is.  ``AppointmentService`` validates
requests, resolves customer and service references, enforces slot
uniqueness and joins display fields (customer name, service title and
duration) into listings.

The conflict check and the write that follows it run while holding the
``appointments`` collection lock, so two requests for the same slot in
one process cannot both succeed.
"""

import logging
import re
from datetime import date as Date
from typing import Any, Dict, List, Optional

from barbershop_api.app.core.errors import (
    MissingField,
    NotFound,
    ReferenceNotFound,
    SlotConflict,
    ValidationError,
)
from barbershop_api.app.core.store import RecordStore, get_store
from barbershop_api.app.schemas.appointment import AppointmentCreate, AppointmentUpdate

COLLECTION = "appointments"
DEFAULT_STATUS = "booked"

DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")

# Request field -> stored field
PATCH_FIELDS = {
    "customerId": "customer_id",
    "serviceId": "service_id",
    "appointment_date": "appointment_date",
    "start_time": "start_time",
    "status": "status",
}


def is_valid_date(value: str) -> bool:
    """``YYYY-MM-DD`` naming a real calendar day."""
    if not isinstance(value, str) or not DATE_RE.match(value):
        return False
    try:
        Date.fromisoformat(value)
    except ValueError:
        return False
    return True


def is_valid_time(value: str) -> bool:
    """``HH:MM`` on a 24 hour clock."""
    return isinstance(value, str) and TIME_RE.match(value) is not None


def validate_appointment_input(appointment_date: Optional[str], start_time: Optional[str]) -> None:
    """Raise ``MissingField`` or ``ValidationError`` for a bad date/time pair."""
    if not appointment_date or not start_time:
        raise MissingField("Missing fields")
    if not is_valid_date(appointment_date):
        raise ValidationError("Invalid date format (YYYY-MM-DD)")
    if not is_valid_time(start_time):
        raise ValidationError("Invalid time format (HH:MM)")


def slot_key(appointment: Dict[str, Any]) -> str:
    """Sort key; correct because both parts are fixed width and zero padded."""
    return f"{appointment.get('appointment_date') or ''} {appointment.get('start_time') or ''}"


def find_conflict(
    appointments: List[Dict[str, Any]],
    appointment_date: str,
    start_time: str,
    exclude_id: Optional[str] = None,
) -> Optional[Dict[str, Any]]:
    """Return the appointment occupying the slot, ignoring ``exclude_id``."""
    for appt in appointments:
        if exclude_id is not None and str(appt.get("id")) == str(exclude_id):
            continue
        if appt.get("appointment_date") == appointment_date and appt.get("start_time") == start_time:
            return appt
    return None


class AppointmentService:
    """Service for booking, rescheduling and listing appointments."""

    @staticmethod
    def _resolve_references(store: RecordStore, customer_id: Optional[str], service_id: Optional[str]) -> None:
        if customer_id is not None and store.get_by_id("customers", customer_id) is None:
            raise ReferenceNotFound("Customer not found")
        if service_id is not None and store.get_by_id("services", service_id) is None:
            raise ReferenceNotFound("Service not found")

    @classmethod
    async def create_appointment(cls, data: AppointmentCreate) -> Dict[str, Any]:
        """Book a slot for a customer.

        Checks run in order and fail before anything is written:
        missing fields, date/time format, customer and service
        existence, then slot availability.  New appointments start
        with status ``booked``.
        """
        logger = logging.getLogger(__name__)
        if not data.customerId or not data.serviceId or not data.appointment_date or not data.start_time:
            raise MissingField("Missing fields")
        validate_appointment_input(data.appointment_date, data.start_time)

        store = get_store()
        cls._resolve_references(store, data.customerId, data.serviceId)

        with store.locked(COLLECTION):
            existing = store.list(COLLECTION)
            if find_conflict(existing, data.appointment_date, data.start_time):
                logger.warning(
                    "Slot %s %s already taken", data.appointment_date, data.start_time
                )
                raise SlotConflict("Time slot already taken")
            appointment = store.create(
                COLLECTION,
                {
                    "customer_id": data.customerId,
                    "service_id": data.serviceId,
                    "appointment_date": data.appointment_date,
                    "start_time": data.start_time,
                    "status": DEFAULT_STATUS,
                },
            )
        logger.info(
            "Booked appointment %s on %s at %s",
            appointment["id"],
            appointment["appointment_date"],
            appointment["start_time"],
        )
        return appointment

    @classmethod
    async def get_appointment(cls, appointment_id: str) -> Dict[str, Any]:
        row = get_store().get_by_id(COLLECTION, appointment_id)
        if row is None:
            raise NotFound("Appointment not found")
        return row

    @classmethod
    async def update_appointment(cls, appointment_id: str, data: AppointmentUpdate) -> Dict[str, Any]:
        """Apply the fields present in ``data`` to an appointment.

        Explicit nulls mean "no change".  If the resulting date/time
        differs from the stored slot, the new slot must be free (the
        appointment itself is not counted as a conflict).  Changed
        customer or service references must exist.
        """
        logger = logging.getLogger(__name__)
        patch = {
            PATCH_FIELDS[k]: v
            for k, v in data.model_dump(exclude_unset=True).items()
            if v is not None and k in PATCH_FIELDS
        }
        if "appointment_date" in patch and not is_valid_date(patch["appointment_date"]):
            raise ValidationError("Invalid date format (YYYY-MM-DD)")
        if "start_time" in patch and not is_valid_time(patch["start_time"]):
            raise ValidationError("Invalid time format (HH:MM)")
        if "status" in patch and not patch["status"].strip():
            raise ValidationError("Status cannot be empty")

        store = get_store()
        with store.locked(COLLECTION):
            current = store.get_by_id(COLLECTION, appointment_id)
            if current is None:
                raise NotFound("Appointment not found")
            if not patch:
                return current

            cls._resolve_references(store, patch.get("customer_id"), patch.get("service_id"))

            new_date = patch.get("appointment_date", current.get("appointment_date"))
            new_time = patch.get("start_time", current.get("start_time"))
            if new_date != current.get("appointment_date") or new_time != current.get("start_time"):
                others = store.list(COLLECTION)
                if find_conflict(others, new_date, new_time, exclude_id=current["id"]):
                    logger.warning("Cannot move appointment %s: slot %s %s taken", appointment_id, new_date, new_time)
                    raise SlotConflict("Time slot already taken")

            updated = store.update(COLLECTION, appointment_id, patch)
        if updated is None:
            raise NotFound("Appointment not found")
        logger.info("Updated appointment %s (%s)", appointment_id, ", ".join(sorted(patch)))
        return updated

    @classmethod
    async def list_appointments(
        cls,
        date: Optional[str] = None,
        customer_id: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """List appointments with customer and service details.

        ``date`` and ``customer_id`` are exact-match filters.  Each row
        gains ``customer_name``, ``service_title`` and ``duration_min``
        (``None`` when the referenced record no longer exists).  Rows
        are ordered by date then start time.
        """
        store = get_store()
        rows = store.list(COLLECTION)
        customers = {str(c.get("id")): c for c in store.list("customers")}
        services = {str(s.get("id")): s for s in store.list("services")}

        if date:
            rows = [r for r in rows if r.get("appointment_date") == date]
        if customer_id:
            rows = [r for r in rows if str(r.get("customer_id")) == str(customer_id)]

        enriched = []
        for appt in rows:
            customer = customers.get(str(appt.get("customer_id"))) or {}
            service = services.get(str(appt.get("service_id"))) or {}
            enriched.append(
                {
                    **appt,
                    "customer_name": customer.get("name"),
                    "service_title": service.get("title"),
                    "duration_min": service.get("duration_min"),
                }
            )
        enriched.sort(key=slot_key)
        return enriched

    @classmethod
    async def delete_appointment(cls, appointment_id: str) -> bool:
        """Remove an appointment.  Idempotent, no cascade."""
        logger = logging.getLogger(__name__)
        get_store().remove(COLLECTION, appointment_id)
        logger.info("Deleted appointment %s", appointment_id)
        return True

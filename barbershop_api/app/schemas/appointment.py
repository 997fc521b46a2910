"""
Pydantic models for appointments.

Request bodies keep the field names used by existing clients
(``customerId``, ``serviceId``, ``appointment_date``, ``start_time``)
while stored and returned appointments use snake case references
(``customer_id``, ``service_id``).  Identifiers may arrive as JSON
numbers; they are normalised to strings here, once.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .ids import id_to_str


class AppointmentCreate(BaseModel):
    """Schema for booking an appointment."""

    customerId: Optional[str] = Field(None, description="ID of the customer")
    serviceId: Optional[str] = Field(None, description="ID of the service")
    appointment_date: Optional[str] = Field(None, examples=["2025-04-20"])
    start_time: Optional[str] = Field(None, examples=["10:00"])

    @field_validator("customerId", "serviceId", mode="before")
    @classmethod
    def normalise_ids(cls, v):
        return id_to_str(v)


class AppointmentUpdate(BaseModel):
    """Schema for updating an appointment.

    Only fields present in the body are changed.  Changing the date or
    the start time re-runs the slot conflict check.
    """

    customerId: Optional[str] = None
    serviceId: Optional[str] = None
    appointment_date: Optional[str] = None
    start_time: Optional[str] = None
    status: Optional[str] = Field(None, examples=["completed"])

    @field_validator("customerId", "serviceId", mode="before")
    @classmethod
    def normalise_ids(cls, v):
        return id_to_str(v)


class AppointmentRead(BaseModel):
    id: str
    customer_id: str
    service_id: str
    appointment_date: str
    start_time: str
    status: str
    created_at: str

    @field_validator("id", "customer_id", "service_id", mode="before")
    @classmethod
    def normalise_ids(cls, v):
        return id_to_str(v)


class AppointmentListItem(AppointmentRead):
    """Appointment joined with its customer and service for display."""

    customer_name: Optional[str] = None
    service_title: Optional[str] = None
    duration_min: Optional[int] = None

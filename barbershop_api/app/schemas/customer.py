"""
Pydantic schemas for customers.

Fields on ``CustomerCreate`` are optional at the schema level so that
a missing name is reported by the service as a ``MissingField`` error
rather than a generic 422.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .ids import id_to_str


class CustomerCreate(BaseModel):
    """Schema for creating a customer."""

    name: Optional[str] = Field(None, description="Customer full name", examples=["Test User"])
    phone: Optional[str] = Field(None, examples=["012"])
    email: Optional[str] = None


class CustomerUpdate(BaseModel):
    """Schema for updating a customer.

    Only fields present in the request body are changed.  Sending
    ``null`` for ``phone`` or ``email`` clears them.
    """

    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None


class CustomerRead(BaseModel):
    id: str
    name: str
    phone: Optional[str] = None
    email: Optional[str] = None
    created_at: str

    @field_validator("id", mode="before")
    @classmethod
    def normalise_id(cls, v):
        return id_to_str(v)

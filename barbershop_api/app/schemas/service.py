"""
Pydantic schemas for the services offered by the shop (haircut, beard
trim, ...).  Value rules (positive duration, non-negative price) are
enforced by ``CatalogService`` so they surface as domain errors.

``price`` accepts whole and fractional amounts and keeps whichever was
sent, so ``15`` is stored and returned as ``15`` rather than ``15.0``.
"""

from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator

from .ids import id_to_str

Price = Union[int, float]


class ServiceCreate(BaseModel):
    """Schema for creating a service."""

    title: Optional[str] = Field(None, examples=["Cut"])
    duration_min: Optional[int] = Field(None, description="Duration in minutes", examples=[30])
    price: Optional[Price] = Field(None, examples=[15])


class ServiceUpdate(BaseModel):
    """Schema for updating a service.  All fields are optional."""

    title: Optional[str] = None
    duration_min: Optional[int] = None
    price: Optional[Price] = None


class ServiceRead(BaseModel):
    id: str
    title: str
    duration_min: int
    price: Price
    created_at: str

    @field_validator("id", mode="before")
    @classmethod
    def normalise_id(cls, v):
        return id_to_str(v)

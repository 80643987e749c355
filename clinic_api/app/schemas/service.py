"""
Pydantic models for the clinic service catalogue.

A service is something a patient can be booked for (a consultation,
a cleaning, an X-ray).  Price and duration are informational only.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ServiceCreate(BaseModel):
    """Schema for creating a catalogue entry."""

    name: str = Field(..., min_length=1, max_length=255, examples=["Dental cleaning"])
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    duration_minutes: Optional[int] = Field(None, ge=1)


class ServiceRead(ServiceCreate):
    """Schema for reading a catalogue entry."""

    id: str
    created_at: Optional[str] = None

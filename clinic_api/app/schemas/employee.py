"""Pydantic models for clinic employees (receptionists and staff)."""

from typing import Optional

from pydantic import BaseModel, Field


class EmployeeCreate(BaseModel):
    """Schema for creating an employee."""

    name: str = Field(..., min_length=1, max_length=255, examples=["Anna Smith"])
    role: Optional[str] = Field(None, examples=["receptionist"])
    email: Optional[str] = None
    phone: Optional[str] = None


class EmployeeRead(EmployeeCreate):
    id: str
    created_at: Optional[str] = None

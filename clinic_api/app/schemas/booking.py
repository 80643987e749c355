"""
Pydantic models for clinic bookings.

A booking links a patient to a service at a given date and time.  It
is taken by a receptionist (an employee) and carries denormalised
copies of the receptionist and service names so that listings can be
rendered without further lookups.
"""

from datetime import date, datetime, time

from pydantic import BaseModel, Field, field_validator


class BookingBase(BaseModel):
    receptionist_id: str = Field(..., min_length=1, description="ObjectId of the employee taking the booking")
    receptionist_name: str | None = Field(None, max_length=255)
    service_id: str = Field(..., min_length=1, description="ObjectId of the booked service")
    service_name: str | None = Field(None, max_length=255)
    assigned_staff_name: str | None = Field(None, max_length=255)
    patient_id: str | None = None
    patient_name: str = Field(..., min_length=1, max_length=255, examples=["Jane Doe"])
    booking_date: date = Field(..., examples=["2025-09-01"])
    booking_time: time = Field(..., examples=["09:30"])
    status: str = Field("scheduled", min_length=1, max_length=50)
    remarks: str | None = Field(None, max_length=1024)

    @field_validator("patient_name")
    @classmethod
    def strip_patient_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class BookingCreate(BookingBase):
    """Schema for creating a booking.

    ``booking_id`` is generated by the server before validation and
    any value sent by the client is replaced.
    """

    booking_id: str = Field(..., min_length=1)


class BookingUpdate(BaseModel):
    """Schema for updating a booking.

    All fields are optional; only fields present in the request body
    are overwritten.  Identifiers cannot be changed and references are
    not re-checked.
    """

    receptionist_id: str | None = None
    receptionist_name: str | None = None
    service_id: str | None = None
    service_name: str | None = None
    assigned_staff_name: str | None = None
    patient_id: str | None = None
    patient_name: str | None = Field(None, min_length=1, max_length=255)
    booking_date: date | None = None
    booking_time: time | None = None
    status: str | None = Field(None, min_length=1, max_length=50)
    remarks: str | None = None


class BookingRead(BaseModel):
    id: str
    booking_id: str
    receptionist_id: str
    receptionist_name: str | None = None
    service_id: str
    service_name: str | None = None
    assigned_staff_name: str | None = None
    patient_id: str | None = None
    patient_name: str
    booking_date: date
    booking_time: time
    status: str
    remarks: str | None = None
    updated: datetime | None = None

    model_config = {
        "from_attributes": True,
    }


class BookingCount(BaseModel):
    count: int

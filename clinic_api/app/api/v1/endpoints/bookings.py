"""
Booking endpoints for API v1.

These routes expose the bookings collection: paginated listing,
creation with referential checks, search by service or patient name,
a total count, and fetch/update/delete by ObjectId.  Business rules
live in ``BookingService``; handlers only map its results to status
codes.  Note that update and delete answer 201 on success, and that a
failed update or delete is a 400 rather than a 404.

Errors use the ``{"message": ...}`` envelope.  Request logging and the
500 fallback are handled by middleware in ``main.py``.
"""

from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Response, status

from clinic_api.app.core.errors import error_response
from clinic_api.app.core.ids import require_object_id
from clinic_api.app.schemas.booking import BookingCount, BookingRead
from clinic_api.app.services.booking_service import BookingService


router = APIRouter()


@router.get("/", response_model=List[BookingRead])
async def list_bookings(
    limit: Optional[str] = None,
    page: Optional[str] = None,
    order: Optional[str] = None,
    sort: Optional[str] = None,
) -> List[BookingRead]:
    """Return a page of bookings.

    - **limit**, **page**: pagination, 10 and 1 by default.  Invalid or
      non-positive values are ignored.
    - **sort**: booking field to sort by; date then time by default.
    - **order**: `1`/`asc` or `-1`/`desc`.
    """
    return await BookingService.list_bookings(limit=limit, page=page, sort=sort, order=order)


@router.post("/", response_model=BookingRead, status_code=status.HTTP_201_CREATED)
async def create_booking(payload: dict = Body(...)):
    """Create a booking after checking its receptionist and service exist."""
    try:
        return await BookingService.create_booking(payload)
    except ValueError as e:
        return error_response(status.HTTP_400_BAD_REQUEST, str(e))


@router.get("/search", response_model=List[BookingRead])
async def search_bookings(
    service: Optional[str] = None,
    patient: Optional[str] = None,
) -> List[BookingRead]:
    """Search bookings by service name and/or patient name.

    Matching is case-insensitive and by substring.  Without any filter
    the result is an empty list.
    """
    return await BookingService.search_bookings(service=service, patient=patient)


@router.get("/count", response_model=BookingCount)
async def count_bookings() -> BookingCount:
    return BookingCount(count=await BookingService.count_bookings())


@router.get("/{id}", response_model=BookingRead)
async def get_booking(record_id: str = Depends(require_object_id)):
    booking = await BookingService.get_booking(record_id)
    if booking is None:
        return error_response(status.HTTP_404_NOT_FOUND, "Booking Not Found!")
    return booking


@router.put("/{id}", response_model=BookingRead, status_code=status.HTTP_201_CREATED)
async def update_booking(
    record_id: str = Depends(require_object_id),
    payload: dict = Body(...),
):
    """Partially update a booking.

    Only the fields present in the body are overwritten; the
    ``updated`` timestamp is always refreshed.
    """
    booking = await BookingService.update_booking(record_id, payload)
    if booking is None:
        return error_response(status.HTTP_400_BAD_REQUEST, "Booking Update Failed")
    return booking


@router.delete("/{id}", status_code=status.HTTP_201_CREATED)
async def delete_booking(record_id: str = Depends(require_object_id)):
    deleted = await BookingService.delete_booking(record_id)
    if not deleted:
        return error_response(status.HTTP_400_BAD_REQUEST, "Deletion Failed")
    return Response(status_code=status.HTTP_201_CREATED)

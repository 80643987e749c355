"""
Employee endpoints for API v1.

Minimal CRUD surface for the employees bookings refer to as their
receptionist.  Payload validation errors are turned into 400
responses by the application's exception handlers.
"""

from typing import List

from fastapi import APIRouter, Depends, Query, status

from clinic_api.app.core.errors import error_response
from clinic_api.app.core.ids import require_object_id
from clinic_api.app.schemas.employee import EmployeeCreate, EmployeeRead
from clinic_api.app.services.employee_service import EmployeeService

router = APIRouter()


@router.get("/", response_model=List[EmployeeRead])
async def list_employees(
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
) -> List[EmployeeRead]:
    return await EmployeeService.list_employees(limit=limit, offset=offset)


@router.post("/", response_model=EmployeeRead, status_code=status.HTTP_201_CREATED)
async def create_employee(employee_in: EmployeeCreate) -> EmployeeRead:
    return await EmployeeService.create_employee(employee_in)


@router.get("/{id}", response_model=EmployeeRead)
async def get_employee(record_id: str = Depends(require_object_id)):
    """Retrieve a single employee.  Returns HTTP 404 if not found."""
    employee = await EmployeeService.get_employee(record_id)
    if employee is None:
        return error_response(status.HTTP_404_NOT_FOUND, "Employee Not Found!")
    return employee

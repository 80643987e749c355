"""
Service catalogue endpoints for API v1.

Lists, creates and retrieves the services patients can be booked for.
"""

from typing import List

from fastapi import APIRouter, Depends, Query, status

from clinic_api.app.core.errors import error_response
from clinic_api.app.core.ids import require_object_id
from clinic_api.app.schemas.service import ServiceCreate, ServiceRead
from clinic_api.app.services.catalog_service import CatalogService

router = APIRouter()


@router.get("/", response_model=List[ServiceRead])
async def list_services(
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
) -> List[ServiceRead]:
    """Return a paginated list of services ordered by name."""
    return await CatalogService.list_services(limit=limit, offset=offset)


@router.post("/", response_model=ServiceRead, status_code=status.HTTP_201_CREATED)
async def create_service(service_in: ServiceCreate) -> ServiceRead:
    return await CatalogService.create_service(service_in)


@router.get("/{id}", response_model=ServiceRead)
async def get_service(record_id: str = Depends(require_object_id)):
    service = await CatalogService.get_service(record_id)
    if service is None:
        return error_response(status.HTTP_404_NOT_FOUND, "Service Not Found!")
    return service

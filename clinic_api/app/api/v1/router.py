"""
Top-level router for version 1 of the API.

This router aggregates the collection routers under a unified prefix.
When a new collection is introduced, include its router here.
"""

from fastapi import APIRouter

from .endpoints import bookings, employees, services

router = APIRouter()

router.include_router(bookings.router, prefix="/bookings", tags=["bookings"])
router.include_router(employees.router, prefix="/employees", tags=["employees"])
router.include_router(services.router, prefix="/services", tags=["services"])

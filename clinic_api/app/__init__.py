"""
Application package initializer.

The project is organised by layer: ``core`` (configuration, logging,
storage, identifiers), ``schemas`` (pydantic payloads), ``services``
(SQL and business rules) and ``api`` (versioned FastAPI routers).
Each domain (bookings, employees, services) exposes a router defined
in ``api/v1/endpoints``.
"""

from .main import app  # noqa: F401

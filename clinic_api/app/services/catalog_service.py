"""
Service layer for the clinic service catalogue.

Stores the services patients can be booked for.  The booking service
uses ``get_service`` as its referential check on ``service_id``.
"""

import logging
import sqlite3
from typing import List, Optional

from clinic_api.app.core.db import get_connection
from clinic_api.app.core.ids import is_valid_object_id, new_object_id
from clinic_api.app.schemas.service import ServiceCreate, ServiceRead


class CatalogService:
    """Service class for catalogue entries."""

    @classmethod
    async def create_service(cls, data: ServiceCreate) -> ServiceRead:
        """Insert a new catalogue entry and return the created record."""
        logger = logging.getLogger(__name__)
        service_id = new_object_id()
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO services (id, name, description, price, duration_minutes)
                VALUES (?, ?, ?, ?, ?)
                """,
                (service_id, data.name, data.description, data.price, data.duration_minutes),
            )
            conn.commit()
            logger.info("Created service %s (%s)", service_id, data.name)
            row = cursor.execute("SELECT * FROM services WHERE id = ?", (service_id,)).fetchone()
            return cls._row_to_service_read(row)
        finally:
            conn.close()

    @classmethod
    async def list_services(cls, limit: int = 100, offset: int = 0) -> List[ServiceRead]:
        conn = get_connection()
        try:
            rows = conn.execute(
                "SELECT * FROM services ORDER BY name ASC, id ASC LIMIT ? OFFSET ?",
                (limit, offset),
            ).fetchall()
            return [cls._row_to_service_read(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def get_service(cls, service_id: str) -> Optional[ServiceRead]:
        """Retrieve a single catalogue entry by its ID."""
        if not is_valid_object_id(service_id):
            return None
        conn = get_connection()
        try:
            row = conn.execute("SELECT * FROM services WHERE id = ?", (service_id,)).fetchone()
            if not row:
                return None
            return cls._row_to_service_read(row)
        finally:
            conn.close()

    @staticmethod
    def _row_to_service_read(row: sqlite3.Row) -> ServiceRead:
        """Convert a database row to a ServiceRead schema instance."""
        return ServiceRead(
            id=row["id"],
            name=row["name"],
            description=row["description"],
            price=row["price"],
            duration_minutes=row["duration_minutes"],
            created_at=row["created_at"],
        )

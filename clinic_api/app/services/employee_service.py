"""
Business logic for clinic employees.

Employees are referenced by bookings as the receptionist who took the
appointment.  The booking service only needs ``get_employee`` to check
that such a reference resolves.
"""

import logging
import sqlite3
from typing import List, Optional

from clinic_api.app.core.db import get_connection
from clinic_api.app.core.ids import is_valid_object_id, new_object_id
from clinic_api.app.schemas.employee import EmployeeCreate, EmployeeRead


class EmployeeService:
    """Service for reading and creating employees."""

    @classmethod
    async def create_employee(cls, data: EmployeeCreate) -> EmployeeRead:
        logger = logging.getLogger(__name__)
        employee_id = new_object_id()
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "INSERT INTO employees (id, name, role, email, phone) VALUES (?, ?, ?, ?, ?)",
                (employee_id, data.name, data.role, data.email, data.phone),
            )
            conn.commit()
            logger.info("Created employee %s (%s)", employee_id, data.name)
            row = cursor.execute("SELECT * FROM employees WHERE id = ?", (employee_id,)).fetchone()
            return cls._row_to_employee_read(row)
        finally:
            conn.close()

    @classmethod
    async def list_employees(cls, limit: int = 100, offset: int = 0) -> List[EmployeeRead]:
        """Return employees ordered by name."""
        conn = get_connection()
        try:
            rows = conn.execute(
                "SELECT * FROM employees ORDER BY name ASC, id ASC LIMIT ? OFFSET ?",
                (limit, offset),
            ).fetchall()
            return [cls._row_to_employee_read(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def get_employee(cls, employee_id: str) -> Optional[EmployeeRead]:
        """Retrieve a single employee, or ``None`` if it does not exist."""
        if not is_valid_object_id(employee_id):
            return None
        conn = get_connection()
        try:
            row = conn.execute("SELECT * FROM employees WHERE id = ?", (employee_id,)).fetchone()
            if not row:
                return None
            return cls._row_to_employee_read(row)
        finally:
            conn.close()

    @staticmethod
    def _row_to_employee_read(row: sqlite3.Row) -> EmployeeRead:
        return EmployeeRead(
            id=row["id"],
            name=row["name"],
            role=row["role"],
            email=row["email"],
            phone=row["phone"],
            created_at=row["created_at"],
        )

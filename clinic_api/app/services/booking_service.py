"""
Business logic for clinic bookings.

The ``BookingService`` stores bookings and checks, at creation time,
that the receptionist and the service a booking refers to exist.
Nothing is re-checked on update, bookings are not checked against
each other, and deleting a booking removes the row outright.

Request bodies arrive as plain dictionaries and are validated here,
so that schema errors, malformed references and missing references
all surface the same way: as a ``ValueError`` carrying the message
shown to the client.
"""

import logging
import sqlite3
from datetime import datetime
from typing import Any, List, Optional

from pydantic import ValidationError

from clinic_api.app.core.db import get_connection
from clinic_api.app.core.errors import validation_message
from clinic_api.app.core.ids import generate_id, is_valid_object_id, new_object_id
from clinic_api.app.schemas.booking import BookingCreate, BookingRead, BookingUpdate
from clinic_api.app.services.catalog_service import CatalogService
from clinic_api.app.services.employee_service import EmployeeService


DEFAULT_LIMIT = 10
DEFAULT_PAGE = 1
BOOKING_ID_PREFIX = "b"

COLUMNS = [
    "id",
    "booking_id",
    "receptionist_id",
    "receptionist_name",
    "service_id",
    "service_name",
    "assigned_staff_name",
    "patient_id",
    "patient_name",
    "booking_date",
    "booking_time",
    "status",
    "remarks",
    "updated",
]

# Columns a client may sort by.  Anything else falls back to date/time.
SORT_FIELDS = set(COLUMNS)

# Largest value SQLite accepts as an INTEGER binding.
MAX_SQLITE_INT = 2**63 - 1


def _positive_int(value: Any, default: int) -> int:
    """Parse a query value as a positive integer, or return ``default``."""
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default
    if parsed <= 0:
        return default
    return min(parsed, MAX_SQLITE_INT)


def _sort_direction(order: Optional[str]) -> str:
    if order is not None and order.strip().lower() in {"-1", "desc"}:
        return "DESC"
    return "ASC"


def _to_storage(values: dict) -> dict:
    """Convert date/time values to the ISO strings stored in SQLite."""
    return {
        key: value.isoformat() if hasattr(value, "isoformat") else value
        for key, value in values.items()
    }


class BookingService:
    """Service for managing bookings."""

    @classmethod
    async def list_bookings(
        cls,
        limit: Any = None,
        page: Any = None,
        sort: Optional[str] = None,
        order: Optional[str] = None,
    ) -> List[BookingRead]:
        """Return one page of bookings.

        ``limit`` and ``page`` are taken as raw query values; anything
        that is not a positive integer falls back to 10 and 1.  There is
        no upper bound on ``limit``.  ``sort`` names a booking column
        (see ``SORT_FIELDS``); by default bookings are ordered by date
        and then time.  ``order`` is ``1``/``asc`` or ``-1``/``desc``;
        anything else means ascending.
        """
        limit = _positive_int(limit, DEFAULT_LIMIT)
        page = _positive_int(page, DEFAULT_PAGE)
        direction = _sort_direction(order)
        if sort in SORT_FIELDS:
            order_by = f"{sort} {direction}, id ASC"
        else:
            order_by = f"booking_date {direction}, booking_time {direction}, id ASC"

        conn = get_connection()
        try:
            rows = conn.execute(
                f"SELECT * FROM bookings ORDER BY {order_by} LIMIT ? OFFSET ?",
                (limit, min((page - 1) * limit, MAX_SQLITE_INT)),
            ).fetchall()
            return [cls._row_to_booking_read(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def create_booking(cls, payload: dict) -> BookingRead:
        """Validate ``payload`` and store it as a new booking.

        A fresh booking number replaces any ``booking_id`` in the
        payload.  The checks run in a fixed order and the first failure
        raises ``ValueError``: schema, receptionist id format,
        receptionist existence, service id format, service existence.
        Missing display names are filled from the referenced records.
        """
        logger = logging.getLogger(__name__)
        request_body = {**payload, "booking_id": generate_id(BOOKING_ID_PREFIX)}
        try:
            booking = BookingCreate.model_validate(request_body)
        except ValidationError as e:
            raise ValueError(validation_message(e.errors()))

        if not is_valid_object_id(booking.receptionist_id):
            raise ValueError("Invalid receptionist_id")
        employee = await EmployeeService.get_employee(booking.receptionist_id)
        if employee is None:
            raise ValueError("Employee Not Found!")

        if not is_valid_object_id(booking.service_id):
            raise ValueError("Invalid service_id")
        service = await CatalogService.get_service(booking.service_id)
        if service is None:
            raise ValueError("Service Not Found!")

        values = booking.model_dump()
        values["id"] = new_object_id()
        values["receptionist_name"] = booking.receptionist_name or employee.name
        values["service_name"] = booking.service_name or service.name
        values["updated"] = datetime.utcnow()
        values = _to_storage(values)

        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                f"INSERT INTO bookings ({', '.join(COLUMNS)}) VALUES ({', '.join('?' for _ in COLUMNS)})",
                tuple(values[column] for column in COLUMNS),
            )
            conn.commit()
            logger.info("Created booking %s (%s)", values["id"], values["booking_id"])
            row = cursor.execute("SELECT * FROM bookings WHERE id = ?", (values["id"],)).fetchone()
            return cls._row_to_booking_read(row)
        finally:
            conn.close()

    @classmethod
    async def search_bookings(
        cls,
        service: Optional[str] = None,
        patient: Optional[str] = None,
    ) -> List[BookingRead]:
        """Find bookings by service name and/or patient name.

        Both filters are case-insensitive substring matches and are
        combined with AND.  With no filter at all nothing is returned.
        """
        clauses: list[str] = []
        params: list[str] = []
        if service:
            clauses.append("instr(casefold(service_name), ?) > 0")
            params.append(service.casefold())
        if patient:
            clauses.append("instr(casefold(patient_name), ?) > 0")
            params.append(patient.casefold())
        if not clauses:
            return []

        conn = get_connection()
        try:
            rows = conn.execute(
                f"SELECT * FROM bookings WHERE {' AND '.join(clauses)} "
                "ORDER BY booking_date ASC, booking_time ASC, id ASC",
                tuple(params),
            ).fetchall()
            return [cls._row_to_booking_read(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def count_bookings(cls) -> int:
        conn = get_connection()
        try:
            row = conn.execute("SELECT COUNT(*) AS total FROM bookings").fetchone()
            return row["total"]
        finally:
            conn.close()

    @classmethod
    async def get_booking(cls, booking_id: str) -> Optional[BookingRead]:
        """Retrieve a single booking by its ObjectId."""
        conn = get_connection()
        try:
            row = conn.execute("SELECT * FROM bookings WHERE id = ?", (booking_id,)).fetchone()
            if not row:
                return None
            return cls._row_to_booking_read(row)
        finally:
            conn.close()

    @classmethod
    async def update_booking(cls, booking_id: str, payload: dict) -> Optional[BookingRead]:
        """Overwrite the fields present in ``payload`` and refresh ``updated``.

        Returns the updated booking, or ``None`` when the update could
        not be applied: the booking does not exist, the payload does not
        validate, or it clears a required column.  Callers are not told
        which.
        """
        logger = logging.getLogger(__name__)
        try:
            changes = BookingUpdate.model_validate(payload).model_dump(exclude_unset=True)
        except ValidationError as e:
            logger.info("Rejected update for booking %s: %s", booking_id, validation_message(e.errors()))
            return None
        changes["updated"] = datetime.utcnow()
        changes = _to_storage(changes)

        assignments = ", ".join(f"{column} = ?" for column in changes)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            try:
                cursor.execute(
                    f"UPDATE bookings SET {assignments} WHERE id = ?",
                    (*changes.values(), booking_id),
                )
            except sqlite3.IntegrityError as e:
                logger.info("Rejected update for booking %s: %s", booking_id, e)
                return None
            if cursor.rowcount == 0:
                return None
            conn.commit()
            logger.info("Updated booking %s", booking_id)
            row = cursor.execute("SELECT * FROM bookings WHERE id = ?", (booking_id,)).fetchone()
            return cls._row_to_booking_read(row)
        finally:
            conn.close()

    @classmethod
    async def delete_booking(cls, booking_id: str) -> bool:
        """Delete a booking by ID.

        Returns ``True`` if a record was deleted, ``False`` otherwise.
        """
        logger = logging.getLogger(__name__)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM bookings WHERE id = ?", (booking_id,))
            affected = cursor.rowcount
            conn.commit()
            if affected:
                logger.info("Deleted booking %s", booking_id)
            return affected > 0
        finally:
            conn.close()

    @staticmethod
    def _row_to_booking_read(row: sqlite3.Row) -> BookingRead:
        """Convert a database row to a BookingRead schema instance."""
        return BookingRead(**{column: row[column] for column in COLUMNS})

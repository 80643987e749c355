"""
Identifier helpers.

Records in every collection are keyed by a BSON ObjectId rendered as a
24-character hex string.  Bookings additionally carry a short booking
number (``b`` followed by a time-based suffix) that front desk staff
can read out over the phone.
"""

import secrets
import time

from bson.objectid import ObjectId
from fastapi import HTTPException, Path, status


def new_object_id() -> str:
    """Return a fresh ObjectId as a hex string."""
    return str(ObjectId())


def is_valid_object_id(value) -> bool:
    """Return ``True`` if ``value`` is a well-formed ObjectId string."""
    return isinstance(value, str) and ObjectId.is_valid(value)


def generate_id(prefix: str) -> str:
    """Generate a booking number such as ``b1714982400123a1f3``.

    The number combines the current time in milliseconds with four
    random hex characters; uniqueness is not enforced by the store.
    """
    return f"{prefix}{int(time.time() * 1000)}{secrets.token_hex(2)}"


def require_object_id(id: str = Path(..., description="ObjectId of the record")) -> str:
    """FastAPI dependency rejecting malformed ``{id}`` path parameters with 400."""
    if not is_valid_object_id(id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid ID.")
    return id

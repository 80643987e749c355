"""
Error envelope helpers.

Every error returned by the API has the shape ``{"message": "..."}``.
Validation failures are reduced to the first reported problem,
formatted as ``"<field>: <reason>"``.
"""

from typing import Any, Iterable, Mapping

from fastapi.responses import JSONResponse

INTERNAL_ERROR_MESSAGE = "Internal Server Error!"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


def validation_message(errors: Iterable[Mapping[str, Any]]) -> str:
    """Build a client-facing message from pydantic/FastAPI error dicts."""
    for error in errors:
        # FastAPI prefixes body errors with "body"; it adds nothing for clients.
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        msg = error.get("msg", "Invalid value")
        return f"{'.'.join(loc)}: {msg}" if loc else msg
    return "Invalid request"

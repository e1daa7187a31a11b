"""
Standardized response utilities
"""

from typing import Iterable, Mapping

from fastapi.responses import JSONResponse

from app.core.errors import CalendarError
from app.schemas.common import ErrorResponse


def error_response(message: str, status_code: int = 400) -> JSONResponse:
    """Create standardized error response"""
    response = ErrorResponse(error=message)
    return JSONResponse(content=response.model_dump(), status_code=status_code)


def calendar_error_response(exc: CalendarError) -> JSONResponse:
    """Translate a service error into its HTTP response"""
    return error_response(exc.message, status_code=exc.status_code)


def format_validation_errors(errors: Iterable[Mapping]) -> str:
    """Flatten pydantic error dicts into one readable line"""
    parts = []
    for err in errors:
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        msg = str(err.get("msg", "Invalid value")).removeprefix("Value error, ")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts) or "Invalid request"

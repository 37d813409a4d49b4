"""
Domain exceptions and the HTTP exception handlers that translate them.

Services raise the exceptions below; endpoints either catch them and raise
`HTTPException`, or let the handlers registered in `app.main` answer.

Validation failures always produce:

    400 {"message": "Validation failed",
         "errors": [{"field": "title", "message": "..."}]}
"""
import logging
from typing import Any, Iterable, Optional, Sequence

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)


class NotFoundError(LookupError):
    """Raised when a requested entity does not exist."""

    resource = "Resource"

    def __init__(self, entity_id: Any = None):
        self.entity_id = entity_id
        super().__init__(f"{self.resource} not found")


class ListingNotFoundError(NotFoundError):
    resource = "Job"


class CompanyNotFoundError(NotFoundError):
    resource = "Company"


class UserNotFoundError(NotFoundError):
    resource = "User"


class CategoryNotFoundError(NotFoundError):
    resource = "Category"


class ApplicationNotFoundError(NotFoundError):
    resource = "Application"


class NotificationNotFoundError(NotFoundError):
    resource = "Notification"


class ConflictError(Exception):
    """Raised when a write would duplicate an existing record."""
    pass


class ListingValidationError(ValueError):
    """
    Raised when a listing payload fails its post-type schema.

    Carries a list of (field path, message) pairs.
    """

    def __init__(self, errors: Sequence[tuple[str, str]]):
        self.errors = list(errors)
        super().__init__("Validation failed")

    def as_dict(self) -> dict:
        return {
            "message": "Validation failed",
            "errors": [{"field": field, "message": message} for field, message in self.errors],
        }


def _field_path(loc: Iterable[Any], tags: Optional[set[str]] = None) -> str:
    """
    Turn a pydantic error location into a dotted field path.

    Drops the "body" prefix FastAPI adds and the tag segment pydantic
    adds for discriminated unions ("job", "auction", ...). Python field
    names become their camelCase wire names; pydantic reports validated
    defaults (such as an omitted `ownerType`) under the Python name.
    """
    parts = [to_camel(part) if isinstance(part, str) and "_" in part else str(part) for part in loc]
    if parts and parts[0] == "body":
        parts = parts[1:]
    if parts and tags and parts[0] in tags:
        parts = parts[1:]
    return ".".join(parts) or "body"


def format_validation_errors(errors: Iterable[dict], tags: Optional[set[str]] = None) -> list[tuple[str, str]]:
    """Convert pydantic error dicts into (field, message) pairs."""
    formatted = []
    for error in errors:
        message = error.get("msg", "Invalid value")
        # pydantic prefixes custom validator messages
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        formatted.append((_field_path(error.get("loc", ()), tags), message))
    return formatted


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    from app.schemas.listing import POST_TYPE_TAGS

    errors = format_validation_errors(exc.errors(), POST_TYPE_TAGS)
    logger.info(f"Rejected {request.method} {request.url.path}: {len(errors)} validation error(s)")
    return JSONResponse(status_code=400, content=ListingValidationError(errors).as_dict())


async def listing_validation_handler(request: Request, exc: ListingValidationError) -> JSONResponse:
    logger.info(f"Rejected {request.method} {request.url.path}: {len(exc.errors)} validation error(s)")
    return JSONResponse(status_code=400, content=exc.as_dict())


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {str(exc)}", exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})

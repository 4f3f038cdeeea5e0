"""Error taxonomy and the handlers that render it as JSON.

Every error body has the shape {"error": str, "details"?: str, "request_id": str}.
"""

from collections.abc import Sequence
from typing import Any
from uuid import UUID

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.research_notes.core.logging import get_logger

logger = get_logger(__name__)


class NotesAPIError(Exception):
    """Base class for errors that map to a fixed HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_content(self) -> dict[str, Any]:
        content: dict[str, Any] = {"error": self.message}
        if self.details:
            content["details"] = self.details
        return content


class ValidationError(NotesAPIError):
    """Malformed or out-of-range input. Never retried."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, field: str, message: str, details: str | None = None):
        super().__init__(message, details)
        self.field = field

    def to_content(self) -> dict[str, Any]:
        content = super().to_content()
        content["field"] = self.field
        return content


class NotFoundError(NotesAPIError):
    """The referenced id does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class StoreError(NotesAPIError):
    """The table store is unreachable or rejected the query.

    `message` is safe to show to callers; the underlying exception is kept
    as `__cause__` and only logged.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class PartialBatchError(NotesAPIError):
    """Some items of a batch failed while the rest stayed applied."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, failed_ids: Sequence[UUID], updated: int):
        self.failed_ids = list(failed_ids)
        self.updated = updated
        super().__init__(
            message,
            details=f"{len(self.failed_ids)} of {len(self.failed_ids) + updated} updates failed",
        )

    def to_content(self) -> dict[str, Any]:
        content = super().to_content()
        content["failed_ids"] = [str(i) for i in self.failed_ids]
        content["updated"] = self.updated
        return content


def _field_name(loc: Sequence[int | str]) -> str:
    # ("body", "noteOrders", 0, "order") -> "noteOrders.0.order"
    parts = [str(p) for p in loc if p not in ("body", "path", "query")]
    return ".".join(parts) or "body"


def describe_validation_errors(errors: Sequence[Any]) -> tuple[str, str, str]:
    """Collapse pydantic error dicts into (first field, first message, all messages)."""
    fields = []
    messages = []
    for error in errors:
        field = _field_name(error.get("loc", ()))
        msg = str(error.get("msg", "Invalid value")).removeprefix("Value error, ")
        fields.append(field)
        messages.append(f"{field}: {msg}")
    if not messages:
        return "body", "Invalid request", ""
    return fields[0], messages[0], "; ".join(messages)


def _error_response(status_code: int, content: dict[str, Any]) -> JSONResponse:
    content["request_id"] = correlation_id.get()
    return JSONResponse(status_code=status_code, content=content)


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that include request_id in responses."""

    @app.exception_handler(NotesAPIError)
    async def notes_api_error_handler(request: Request, exc: NotesAPIError) -> JSONResponse:
        if isinstance(exc, StoreError):
            logger.error(
                "Store error",
                error=exc.message,
                cause=repr(exc.__cause__) if exc.__cause__ else None,
                path=request.url.path,
            )
        elif isinstance(exc, PartialBatchError):
            logger.error(
                "Partial batch failure",
                failed_ids=[str(i) for i in exc.failed_ids],
                updated=exc.updated,
                path=request.url.path,
            )
        return _error_response(exc.status_code, exc.to_content())

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        field, error, details = describe_validation_errors(exc.errors())
        return _error_response(
            status.HTTP_400_BAD_REQUEST,
            {"error": error, "details": details, "field": field},
        )

    @app.exception_handler(StarletteHTTPException)
    async def starlette_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return _error_response(exc.status_code, {"error": str(exc.detail)})

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            request_id=correlation_id.get(),
            path=request.url.path,
        )
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            {"error": "Internal server error"},
        )

"""Map request failures onto the ``{"error": ...}`` response body."""

from collections.abc import Sequence
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse

INVALID_PAYLOAD = "Invalid request payload"
INVALID_ID = "Invalid ID format"


def _is_payload_error(error: dict[str, Any]) -> bool:
    # Body is not JSON, absent, or not an object
    return error.get("type") == "json_invalid" or tuple(error.get("loc", ())) == ("body",)


def validation_message(errors: Sequence[dict[str, Any]]) -> str:
    """Collapse pydantic validation errors into one client-facing message."""
    if any(tuple(error.get("loc", ()))[:1] == ("path",) for error in errors):
        return INVALID_ID
    if any(_is_payload_error(error) for error in errors):
        return INVALID_PAYLOAD

    messages = []
    for error in errors:
        field = ".".join(str(part) for part in error.get("loc", ())[1:])
        messages.append(f"{field}: {error.get('msg')}" if field else str(error.get("msg")))
    return "; ".join(messages)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    message = validation_message(exc.errors())
    logger.bind(status_code=400).info("request.rejected: {}", message)
    return JSONResponse(status_code=400, content={"error": message})


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

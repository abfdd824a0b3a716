"""
Error responses for the storyboard API.

Every failure is rendered as `{"error": ..., "details": ...}` with the status
carried by the pipeline error. `details` holds a traceback in development only.
"""

import traceback
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger as log

from common import global_config
from src.services.storyboard.errors import StoryboardError
from src.utils.logging_config import setup_logging

setup_logging()


def error_body(message: str, exc: BaseException | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {"error": message}
    if exc is not None and global_config.is_development:
        body["details"] = "".join(traceback.format_exception(exc))
    return body


def wrap_unexpected(exc: Exception, message: str) -> StoryboardError:
    """Turn an unexpected exception into a 500-class pipeline error, keeping pipeline errors as-is."""
    if isinstance(exc, StoryboardError):
        return exc
    log.exception(f"{message}: {exc}")
    wrapped = StoryboardError(str(exc) or message)
    wrapped.__cause__ = exc
    return wrapped


async def storyboard_error_handler(request: Request, exc: StoryboardError) -> JSONResponse:
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        log.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        log.warning(
            f"{request.method} {request.url.path} rejected ({exc.status_code}): {exc.message}"
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.message, exc),
    )


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    log.warning(f"{request.method} {request.url.path} invalid body: {exc.errors()}")
    body: dict[str, Any] = {"error": "Invalid request body"}
    if global_config.is_development:
        body["details"] = jsonable_errors(exc)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body)


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    return [
        {
            "loc": [str(part) for part in error.get("loc", ())],
            "msg": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in exc.errors()
    ]


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StoryboardError, storyboard_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(
        RequestValidationError, request_validation_error_handler  # type: ignore[arg-type]
    )


__all__ = ["error_body", "wrap_unexpected", "register_error_handlers"]

"""Exception handlers rendering the failure envelope"""

import logging
import traceback
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from explorer.errors import ExplorerError, status_for
from explorer.models.api import ErrorResponse

logger = logging.getLogger(__name__)

SECURITY_HEADERS = {"X-Content-Type-Options": "nosniff"}


def _exposes_internals(request: Request) -> bool:
    return not request.app.state.settings.is_production


def _error_response(
    request: Request,
    status: int,
    message: str,
    code: str,
    exc: Optional[BaseException] = None,
) -> JSONResponse:
    stack = None
    if exc is not None and _exposes_internals(request):
        stack = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    body = ErrorResponse(error=message, status=status, code=code, stack=stack)
    return JSONResponse(
        status_code=status,
        content=body.model_dump(exclude_none=True),
        headers=SECURITY_HEADERS,
    )


async def explorer_error_handler(request: Request, exc: ExplorerError) -> JSONResponse:
    status = status_for(exc)
    log = logger.error if status >= 500 else logger.warning
    log(
        "%s %s failed: status=%s code=%s message=%s",
        request.method,
        request.url.path,
        status,
        exc.code,
        exc.message,
    )
    return _error_response(request, status, exc.message, exc.code, exc)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}"
        for error in exc.errors()
    )
    logger.warning("%s %s rejected: %s", request.method, request.url.path, details)
    return _error_response(request, 400, f"Invalid request: {details}", "invalid_input")


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = "not_found" if exc.status_code == 404 else "http_error"
    return _error_response(request, exc.status_code, str(exc.detail), code)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled error on %s %s: %s", request.method, request.url.path, exc, exc_info=True)
    message = str(exc) if _exposes_internals(request) else "Internal Server Error"
    return _error_response(request, 500, message or "Internal Server Error", "internal_error", exc)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ExplorerError, explorer_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

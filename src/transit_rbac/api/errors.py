"""Exception handlers mapping library errors to JSON responses."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..core.exceptions import RbacError, create_error_response, get_http_status_code

logger = logging.getLogger(__name__)


async def rbac_exception_handler(request: Request, exc: RbacError) -> JSONResponse:
    """Render an RbacError with its mapped status code."""
    status_code = get_http_status_code(exc)
    if status_code >= 500:
        logger.error(f"{exc.__class__.__name__} on {request.url.path}: {exc.message}")
    else:
        logger.warning(f"{exc.__class__.__name__} on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=status_code, content=create_error_response(exc))


def register_exception_handlers(app: FastAPI) -> None:
    """Register transit-rbac exception handlers on an application."""
    app.add_exception_handler(RbacError, rbac_exception_handler)

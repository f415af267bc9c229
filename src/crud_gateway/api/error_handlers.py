# crud_gateway/api/error_handlers.py
"""
FastAPI exception handlers that map gateway exceptions to HTTP responses.

How to use:
    - Register these handlers in the app factory (main.create_app does this).
    - Routes raise crud_gateway.exceptions.base.GatewayError subclasses for
      requests they refuse before touching the database.
    - Storage failures are normally classified inside the route that ran the
      statement; the StorageError handler is the fallback for any that escape.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import logging

from crud_gateway.exceptions.base import GatewayError, StorageError
from crud_gateway.exceptions.db_error_classifier import classify_db_error

logger = logging.getLogger(__name__)


async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    """
    Payload: exc.to_payload() -> {"message": "...", "errors": [...]}
    """
    logger.info("%s for %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.errors)
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    """
    Unclassified storage failure. The column set of the statement is unknown
    here, so the display column falls back to "Value".
    """
    response = classify_db_error(exc)
    return JSONResponse(status_code=response.status_code, content=response.body)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(GatewayError, gateway_error_handler)
    app.add_exception_handler(StorageError, storage_error_handler)

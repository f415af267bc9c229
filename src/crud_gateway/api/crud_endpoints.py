"""
One router per table, the same five routes for each:

    GET    /{table}        all rows
    GET    /{table}/{id}   one row, 404 when absent
    POST   /{table}        validate as INSERT, insert, 201 + new row
    PATCH  /{table}/{id}   validate as UPDATE, update, 200 + row, 404 when absent
    DELETE /{table}/{id}   {"message": "Deleted"}, 404 when absent

Writes are validated before any statement is built. A failed statement is
answered here, through classify_db_error, with the columns it was writing.
"""

import logging
from typing import Any, Sequence

from fastapi import APIRouter, Depends, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from crud_gateway.api.dependencies import get_storage
from crud_gateway.db.storage import QueryResult, Storage
from crud_gateway.exceptions.base import InvalidPayloadError, StorageError
from crud_gateway.exceptions.db_error_classifier import classify_db_error
from crud_gateway.schemas.registry import QueryType
from crud_gateway.services.query_helper import PRIMARY_KEY, format_insert, format_update
from crud_gateway.services.validate_input import validate_input

logger = logging.getLogger(__name__)

VALIDATION_MESSAGE = "Validation error(s)"
NOT_FOUND = {"message": "Not found"}
DELETED = {"message": "Deleted"}


async def read_payload(request: Request) -> dict[str, Any]:
    """The request body as a JSON object; anything else is refused with 400."""
    try:
        payload = await request.json()
    except ValueError:
        raise InvalidPayloadError()

    if not isinstance(payload, dict):
        raise InvalidPayloadError()
    return payload


def _json(content: Any, status_code: int = 200) -> JSONResponse:
    # rows may hold dates, decimals, ...
    return JSONResponse(status_code=status_code, content=jsonable_encoder(content))


def _validation_failed(messages: list[str], status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": VALIDATION_MESSAGE, "errors": messages})


async def _run(
    storage: Storage,
    statement: str,
    params: Sequence[Any] = (),
    column_names: Sequence[str] = (),
) -> QueryResult | JSONResponse:
    """Execute one statement; a storage failure comes back as its classified response."""
    try:
        return await storage.execute(statement, params)
    except StorageError as exc:
        response = classify_db_error(exc, column_names)
        return JSONResponse(status_code=response.status_code, content=response.body)


def crud_router(table_name: str) -> APIRouter:
    """
    Build the router for `table_name`. The name is taken from the schema
    registry, never from the request, so it is safe to place in statement text.
    """
    router = APIRouter(prefix=f"/{table_name}", tags=[table_name])

    @router.get("")
    async def list_rows(storage: Storage = Depends(get_storage)):
        result = await _run(storage, f"SELECT * FROM {table_name};")
        if isinstance(result, JSONResponse):
            return result
        return _json(result.rows)

    @router.get("/{id}")
    async def get_row(id: str, storage: Storage = Depends(get_storage)):
        result = await _run(storage, f"SELECT * FROM {table_name} WHERE {PRIMARY_KEY} = $1;", [id])
        if isinstance(result, JSONResponse):
            return result
        if not result.rows:
            return JSONResponse(status_code=404, content=NOT_FOUND)
        return _json(result.rows[0])

    @router.post("")
    async def create_row(request: Request, storage: Storage = Depends(get_storage)):
        payload = await read_payload(request)

        messages, status_code = validate_input(payload, table_name, QueryType.INSERT)
        if messages:
            return _validation_failed(messages, status_code)

        mutation = format_insert(payload)
        statement = (
            f"INSERT INTO {table_name} ({', '.join(mutation.column_names)}) "
            f"VALUES ({mutation.placeholders}) RETURNING *;"
        )
        result = await _run(storage, statement, mutation.query_params, mutation.column_names)
        if isinstance(result, JSONResponse):
            return result

        logger.info("crud.created", extra={"table": table_name, "columns": mutation.column_names})
        return _json(result.rows[0] if result.rows else {}, status_code=201)

    @router.patch("/{id}")
    async def update_row(id: str, request: Request, storage: Storage = Depends(get_storage)):
        payload = await read_payload(request)

        messages, status_code = validate_input(payload, table_name, QueryType.UPDATE)
        if messages:
            return _validation_failed(messages, status_code)

        mutation = format_update(payload, id)
        statement = (
            f"UPDATE {table_name} SET {mutation.set_clause} "
            f"WHERE {PRIMARY_KEY} = ${len(mutation.query_params)} RETURNING *;"
        )
        result = await _run(storage, statement, mutation.query_params, mutation.column_names)
        if isinstance(result, JSONResponse):
            return result
        if not result.rows:
            return JSONResponse(status_code=404, content=NOT_FOUND)

        logger.info("crud.updated", extra={"table": table_name, "columns": mutation.column_names})
        return _json(result.rows[0])

    @router.delete("/{id}")
    async def delete_row(id: str, storage: Storage = Depends(get_storage)):
        result = await _run(storage, f"DELETE FROM {table_name} WHERE {PRIMARY_KEY} = $1;", [id])
        if isinstance(result, JSONResponse):
            return result
        if result.row_count == 0:
            return JSONResponse(status_code=404, content=NOT_FOUND)

        logger.info("crud.deleted", extra={"table": table_name})
        return JSONResponse(status_code=200, content=DELETED)

    return router


__all__ = ["crud_router", "read_payload"]

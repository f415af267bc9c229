"""
Storage collaborator: run one parameterized statement, get rows back.

Routes depend only on the `Storage` protocol:

    result = await storage.execute("SELECT * FROM employees WHERE id = $1;", ["7"])
    result.rows       # [{"id": 7, "first_name": ...}]
    result.row_count  # 1

and on `StorageError` when the statement fails. `SQLAlchemyStorage` is the
production implementation over an `AsyncEngine`; tests inject a fake.
"""

import logging
import re
import traceback
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Protocol, Sequence

from sqlalchemy import text
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncEngine

from crud_gateway.exceptions.base import StorageError

logger = logging.getLogger(__name__)

# `$1`, `$2`, ... positional parameters, as produced by services.query_helper
_POSITIONAL_PARAM = re.compile(r"\$(\d+)")


@dataclass
class QueryResult:
    rows: list[dict[str, Any]] = field(default_factory=list)
    row_count: int = 0


class Storage(Protocol):
    async def execute(self, statement: str, params: Sequence[Any] = ()) -> QueryResult:
        ...


def bind_positional(statement: str, params: Sequence[Any]) -> tuple[str, dict[str, Any]]:
    """
    Rewrite `$n` placeholders into SQLAlchemy bind parameters (`:p1`, `:p2`, ...).

    The values stay bound; only the placeholder spelling changes, so the same
    statement text works with whichever DBAPI paramstyle the driver uses.

    Raises:
        ValueError: a placeholder refers to a parameter that was not supplied.
    """
    def _replace(match: re.Match) -> str:
        index = int(match.group(1))
        if not 1 <= index <= len(params):
            raise ValueError(f"Statement references ${index} but {len(params)} parameter(s) were given")
        return f":p{index}"

    rewritten = _POSITIONAL_PARAM.sub(_replace, statement)
    return rewritten, {f"p{i}": value for i, value in enumerate(params, start=1)}


def _sqlstate(orig: Any) -> str | None:
    # psycopg 3 and asyncpg expose `sqlstate`, psycopg2 `pgcode`
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


@asynccontextmanager
async def storage_error_handler(statement: str | None = None) -> AsyncIterator[None]:
    """
    Usage:
        async with storage_error_handler(statement):
            ... DB ops that may raise DBAPIError ...

    Converts driver failures into StorageError (SQLSTATE, driver message, stack).
    Anything that is not a DBAPI error propagates unchanged.
    """
    try:
        yield
    except DBAPIError as exc:
        orig = exc.orig if exc.orig is not None else exc
        code = _sqlstate(orig)
        message = str(orig).strip()
        stack = "".join(traceback.format_exception(orig))

        logger.debug(
            "storage.statement_failed",
            extra={"pgcode": code, "statement": statement},
        )
        raise StorageError(message, code=code, stack=stack) from exc


class SQLAlchemyStorage:
    """
    Storage over an AsyncEngine (connection pool). Each statement runs in its
    own transaction, committed when it succeeds and rolled back when it fails.
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine

    async def execute(self, statement: str, params: Sequence[Any] = ()) -> QueryResult:
        bound_statement, bound_params = bind_positional(statement, params)

        async with storage_error_handler(statement):
            async with self.engine.begin() as conn:
                result = await conn.execute(text(bound_statement), bound_params)
                rows = [dict(row) for row in result.mappings().all()] if result.returns_rows else []
                row_count = result.rowcount if result.rowcount is not None and result.rowcount >= 0 else len(rows)

        logger.debug(
            "storage.statement_ok",
            extra={"statement": statement, "row_count": row_count},
        )
        return QueryResult(rows=rows, row_count=row_count)


__all__ = [
    "QueryResult",
    "Storage",
    "SQLAlchemyStorage",
    "StorageError",
    "bind_positional",
    "storage_error_handler",
]

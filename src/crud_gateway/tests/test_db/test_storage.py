from contextlib import asynccontextmanager

import pytest
from sqlalchemy.exc import DBAPIError

from crud_gateway.db.storage import (
    QueryResult,
    SQLAlchemyStorage,
    StorageError,
    bind_positional,
    storage_error_handler,
)


class FakeDriverError(Exception):
    """Shape of a psycopg error: SQLSTATE on `sqlstate`."""

    def __init__(self, message: str, sqlstate: str | None = None):
        super().__init__(message)
        self.sqlstate = sqlstate


class FakeResult:
    def __init__(self, rows: list[dict], rowcount: int, returns_rows: bool = True):
        self._rows = rows
        self.rowcount = rowcount
        self.returns_rows = returns_rows

    def mappings(self):
        return self

    def all(self):
        return self._rows


class FakeConnection:
    def __init__(self, result: FakeResult | None = None, error: Exception | None = None):
        self.result = result
        self.error = error
        self.executed: list[tuple[str, dict]] = []

    async def execute(self, clause, params):
        self.executed.append((str(clause), params))
        if self.error is not None:
            raise self.error
        return self.result


class FakeEngine:
    def __init__(self, connection: FakeConnection):
        self.connection = connection

    @asynccontextmanager
    async def begin(self):
        yield self.connection


class TestBindPositional:

    def test_rewrites_placeholders_and_binds_values(self):
        statement, params = bind_positional(
            "UPDATE employees SET first_name = $1, last_name = $2 WHERE id = $3 RETURNING *;",
            ["Michael", "Smith", "1"],
        )

        assert statement == "UPDATE employees SET first_name = :p1, last_name = :p2 WHERE id = :p3 RETURNING *;"
        assert params == {"p1": "Michael", "p2": "Smith", "p3": "1"}

    def test_double_digit_placeholders(self):
        statement, params = bind_positional(", ".join(f"${i}" for i in range(1, 12)), list(range(11)))

        assert statement.endswith(":p10, :p11")
        assert params["p11"] == 10

    def test_no_placeholders(self):
        assert bind_positional("SELECT * FROM employees;", []) == ("SELECT * FROM employees;", {})

    def test_missing_parameter(self):
        with pytest.raises(ValueError):
            bind_positional("SELECT * FROM employees WHERE id = $2;", ["1"])


class TestStorageErrorHandler:

    async def test_converts_dbapi_error(self):
        """
        Behavior:
          - DBAPIError -> StorageError carrying SQLSTATE, driver message and stack.
        Importance:
          - classify_db_error only understands StorageError's shape.
        """
        orig = FakeDriverError('null value in column "email" violates not-null constraint', "23502")

        with pytest.raises(StorageError) as exc_info:
            async with storage_error_handler("INSERT ..."):
                raise DBAPIError("INSERT ...", {}, orig)

        error = exc_info.value
        assert error.code == "23502"
        assert error.message == 'null value in column "email" violates not-null constraint'
        assert "FakeDriverError" in error.stack
        assert isinstance(error.__cause__, DBAPIError)

    async def test_pgcode_is_read_too(self):
        orig = Exception("duplicate key")
        orig.pgcode = "23505"

        with pytest.raises(StorageError) as exc_info:
            async with storage_error_handler():
                raise DBAPIError("INSERT ...", {}, orig)

        assert exc_info.value.code == "23505"

    async def test_other_errors_propagate(self):
        with pytest.raises(KeyError):
            async with storage_error_handler():
                raise KeyError("not a driver error")


class TestSQLAlchemyStorage:

    async def test_execute_returns_rows(self):
        conn = FakeConnection(FakeResult([{"id": 1, "first_name": "Michael"}], rowcount=1))
        storage = SQLAlchemyStorage(FakeEngine(conn))

        result = await storage.execute("SELECT * FROM employees WHERE id = $1;", ["1"])

        assert result == QueryResult(rows=[{"id": 1, "first_name": "Michael"}], row_count=1)
        assert conn.executed == [("SELECT * FROM employees WHERE id = :p1;", {"p1": "1"})]

    async def test_delete_reports_row_count(self):
        conn = FakeConnection(FakeResult([], rowcount=0, returns_rows=False))
        storage = SQLAlchemyStorage(FakeEngine(conn))

        result = await storage.execute("DELETE FROM employees WHERE id = $1;", ["9"])

        assert result.rows == []
        assert result.row_count == 0

    async def test_driver_failure_becomes_storage_error(self):
        orig = FakeDriverError('column "nickname" does not exist', "42703")
        conn = FakeConnection(error=DBAPIError("INSERT ...", {}, orig))
        storage = SQLAlchemyStorage(FakeEngine(conn))

        with pytest.raises(StorageError) as exc_info:
            await storage.execute("INSERT INTO employees (nickname) VALUES ($1) RETURNING *;", ["Mike"])

        assert exc_info.value.code == "42703"

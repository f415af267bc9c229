r"""
Classify database failures into stable, client-safe error responses.

Every failed statement ends up here, whatever its origin:

    classify_db_error(StorageError(...), ["email", "username"])
    -> DbErrorResponse(status_code=422,
                       body={"message": "Database error", "errors": ["Username taken"]})

Algorithm
---------
1. A pydantic ValidationError (a contract failure that reached the storage
   path) is flattened into its field messages, status 400.
2. The "column" shown to the client is found heuristically: the first active
   column name that occurs literally in the driver message, capitalized
   (`email` -> `Email`). When none occurs, it is `Value`. PostgreSQL does not
   hand back the offending column in a structured way for all of these codes,
   so this stays a best-effort guess.
3. The SQLSTATE is looked up in PG_ERROR_MAP. Unknown codes -> 500
   "Unexpected error". The raw message is never echoed to the client.
4. The code, the raw message and the stack are always logged at ERROR.

The function never raises; malformed or empty error objects classify as 500.
"""

import logging
from enum import Enum
from typing import Any, Callable, Mapping, NamedTuple, Sequence

from pydantic import ValidationError

from crud_gateway.schemas.messages import issue_messages
from crud_gateway.schemas.registry import get_schema_registry

logger = logging.getLogger(__name__)

RESPONSE_MESSAGE = "Database error"
UNEXPECTED_MESSAGE = "Unexpected error"
DEFAULT_COLUMN = "Value"


# =================================================================================================================
# Postgres error code mapping
# =================================================================================================================

# https://www.postgresql.org/docs/current/errcodes-appendix.html
class PostgresErrorCodes(str, Enum):
    NOT_NULL_VIOLATION = "23502"
    STRING_DATA_RIGHT_TRUNCATION = "22001"
    NUMERIC_VALUE_OUT_OF_RANGE = "22003"
    CHECK_VIOLATION = "23514"
    INVALID_PARAMETER_VALUE = "22023"
    DATETIME_FIELD_OVERFLOW = "22008"
    UNDEFINED_COLUMN = "42703"
    FOREIGN_KEY_VIOLATION = "23503"
    UNIQUE_VIOLATION = "23505"


class ErrorClassification(NamedTuple):
    status: int
    get_message: Callable[[str], str]


PG_ERROR_MAP: dict[str, ErrorClassification] = {
    PostgresErrorCodes.NOT_NULL_VIOLATION.value: ErrorClassification(400, lambda col: f"{col} required"),
    PostgresErrorCodes.STRING_DATA_RIGHT_TRUNCATION.value: ErrorClassification(422, lambda col: f"{col} too long"),
    PostgresErrorCodes.NUMERIC_VALUE_OUT_OF_RANGE.value: ErrorClassification(422, lambda col: f"{col} out of range"),
    PostgresErrorCodes.CHECK_VIOLATION.value: ErrorClassification(422, lambda col: f"{col} invalid"),
    PostgresErrorCodes.INVALID_PARAMETER_VALUE.value: ErrorClassification(422, lambda col: f"{col} invalid"),
    PostgresErrorCodes.DATETIME_FIELD_OVERFLOW.value: ErrorClassification(422, lambda col: f"{col} invalid"),
    PostgresErrorCodes.UNDEFINED_COLUMN.value: ErrorClassification(422, lambda col: f"'{col}' not a column"),
    PostgresErrorCodes.FOREIGN_KEY_VIOLATION.value: ErrorClassification(422, lambda col: f"{col} invalid"),
    PostgresErrorCodes.UNIQUE_VIOLATION.value: ErrorClassification(422, lambda col: f"{col} taken"),
}


class DbErrorResponse(NamedTuple):
    status_code: int
    body: dict


# =================================================================================================================
# Helpers
# =================================================================================================================

def _read(error: Any, key: str) -> str | None:
    """Read `key` from a mapping or an attribute; always a str or None."""
    if isinstance(error, Mapping):
        value = error.get(key)
    else:
        value = getattr(error, key, None)
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def _display_column(message: str | None, column_names: Sequence[str]) -> str:
    if message:
        for current in column_names:
            if current and current in message:
                return current[0].upper() + current[1:]
    return DEFAULT_COLUMN


def _log_diagnostics(code: str | None, message: str | None, stack: str | None) -> None:
    logger.error(
        "Error%s: %s",
        f" {code}" if code else "",
        message,
        extra={"event": "db.error", "pgcode": code, "db_message": message},
    )
    if stack:
        logger.error(stack, extra={"event": "db.error.stack", "pgcode": code})


# =================================================================================================================
# Classifier
# =================================================================================================================

def classify_db_error(error: Any, column_names: Sequence[str] = ()) -> DbErrorResponse:
    """
    Map a storage failure (or a stray contract failure) to a status and a
    `{"message": "Database error", "errors": [...]}` body.

    Args:
        error: StorageError, pydantic ValidationError, a mapping with
            code/message/stack keys, or any other object.
        column_names: columns of the statement that failed, in statement order.
    """
    status_code = 500
    messages = [UNEXPECTED_MESSAGE]

    try:
        if isinstance(error, ValidationError):
            contract = get_schema_registry().contract_named(error.title)
            messages = issue_messages(error, contract) or messages
            status_code = 400

        code = _read(error, "code")
        message = _read(error, "message")
        stack = _read(error, "stack")
        if message is None and isinstance(error, BaseException):
            message = str(error)

        column = _display_column(message, column_names)

        classification = PG_ERROR_MAP.get(code or "")
        if classification:
            status_code = classification.status
            messages = [classification.get_message(column)]

        _log_diagnostics(code, message, stack)

    except Exception:
        # classification itself must never take a request down
        logger.exception("db_error_classifier.failed", extra={"event": "db.error.unclassified"})
        status_code, messages = 500, [UNEXPECTED_MESSAGE]

    return DbErrorResponse(status_code, {"message": RESPONSE_MESSAGE, "errors": messages})


__all__ = [
    "PostgresErrorCodes",
    "ErrorClassification",
    "PG_ERROR_MAP",
    "DbErrorResponse",
    "classify_db_error",
]

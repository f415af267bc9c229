"""
Gateway exceptions.

Two families:
  - GatewayError and its configuration/payload subclasses: raised before any
    statement reaches the database. They carry a client-safe message and an
    HTTP status.
  - StorageError: the shape every database driver failure is converted to
    (SQLSTATE `code`, driver `message`, `stack`). It is never shown to clients
    as-is; db_error_classifier.classify_db_error() turns it into a stable
    response and keeps the raw details in the log.
"""

from typing import Iterable


class GatewayError(Exception):
    """
    Base exception for errors the gateway reports to its callers.

    - message: human-friendly message (safe to show to clients)
    - errors: optional list of detail messages; defaults to [message]
    - status_code: HTTP status for the response
    """

    status_code: int = 400
    title: str = "Request error"

    def __init__(self, message: str, *, errors: Iterable[str] | None = None):
        super().__init__(message)
        self.message = message
        self.errors = list(errors) if errors else [message]

    def http_status(self) -> int:
        return self.status_code

    def to_payload(self) -> dict:
        """Response body shape shared by every gateway error: {"message": ..., "errors": [...]}."""
        return {"message": self.title, "errors": list(self.errors)}


# -----------------------
# Configuration errors: a route exists for a table without a matching contract
# -----------------------

class SchemaNotFoundError(GatewayError):
    """No registered entity maps to the (singularized) table name."""

    title = "Validation error(s)"

    def __init__(self, table_name: str):
        super().__init__(f"No schema found for table '{table_name}'")
        self.table_name = table_name


class SchemaFunctionNotFoundError(GatewayError):
    """The entity exists but has no contract for the requested operation."""

    title = "Validation error(s)"

    def __init__(self, table_name: str, query_type: str):
        super().__init__(f"No {query_type} schema function found for table '{table_name}'")
        self.table_name = table_name
        self.query_type = query_type


# -----------------------
# Payload errors
# -----------------------

class InvalidPayloadError(GatewayError):
    """The request body is not a JSON object."""

    title = "Validation error(s)"

    def __init__(self, message: str = "Request body must be a JSON object"):
        super().__init__(message)


# -----------------------
# Storage failures
# -----------------------

class StorageError(Exception):
    """
    A failed statement, normalized across drivers.

    - code: SQLSTATE (e.g. '23505'), or None when the driver gave none
    - message: the driver's message text (log-only)
    - stack: formatted traceback of the driver exception (log-only)
    """

    def __init__(self, message: str | None = None, *, code: str | None = None, stack: str | None = None):
        super().__init__(message or "Storage error")
        self.code = code
        self.message = message
        self.stack = stack

    def __str__(self) -> str:
        if self.code:
            return f"{self.message} (code: {self.code})"
        return str(self.message)


__all__ = [
    "GatewayError",
    "SchemaNotFoundError",
    "SchemaFunctionNotFoundError",
    "InvalidPayloadError",
    "StorageError",
]

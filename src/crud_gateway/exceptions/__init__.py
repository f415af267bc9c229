# crud_gateway/
# │
# ├── exceptions/
# │   ├── __init__.py
# │   ├── base.py                    # Gateway errors (GatewayError, SchemaNotFoundError, StorageError, ...)
# │   └── db_error_classifier.py     # SQLSTATE -> status + client-safe message

from .base import (
    GatewayError,
    SchemaNotFoundError,
    SchemaFunctionNotFoundError,
    InvalidPayloadError,
    StorageError,
)

__all__ = [
    "GatewayError",
    "SchemaNotFoundError",
    "SchemaFunctionNotFoundError",
    "InvalidPayloadError",
    "StorageError",
]

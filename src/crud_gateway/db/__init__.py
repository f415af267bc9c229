from .database import connect_to_db, disconnect_from_db
from .storage import QueryResult, SQLAlchemyStorage, Storage, StorageError

__all__ = [
    "connect_to_db",
    "disconnect_from_db",
    "QueryResult",
    "SQLAlchemyStorage",
    "Storage",
    "StorageError",
]

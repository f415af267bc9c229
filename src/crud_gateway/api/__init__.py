from .crud_endpoints import crud_router
from .error_handlers import register_exception_handlers

__all__ = ["crud_router", "register_exception_handlers"]

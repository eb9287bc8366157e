"""HTTP surface of faceclaimer."""

from .errors import ApiError, register_error_handlers
from .routes import router

__all__ = ["ApiError", "register_error_handlers", "router"]

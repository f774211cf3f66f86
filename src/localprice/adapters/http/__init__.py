"""
HTTP Adapter - FastAPI Router and Error Handlers
"""

from localprice.adapters.http.api import router
from localprice.adapters.http.errors import register_error_handlers

__all__ = ["router", "register_error_handlers"]

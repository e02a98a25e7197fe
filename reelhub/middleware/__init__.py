"""
Middleware components for request processing.

This package contains:
- Request context (request ID, IP address)
- Exception handlers that render the tagged failure body
"""

from reelhub.middleware.error_handlers import register_exception_handlers
from reelhub.middleware.request_context import RequestContextMiddleware

__all__ = [
    "RequestContextMiddleware",
    "register_exception_handlers",
]

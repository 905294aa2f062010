"""
Middleware package for the Property Watch API.
Provides request IDs, request size limits and request logging.
"""

from .request_context import RequestContextMiddleware

__all__ = [
    "RequestContextMiddleware"
]

"""
Middleware package for the FastAPI application.
"""

from .rate_limit import RateLimitMiddleware
from .request_context import RequestContextMiddleware

__all__ = ["RateLimitMiddleware", "RequestContextMiddleware"]

"""Middleware and request dependencies for the FastAPI application"""
from .security_headers import SecurityHeadersMiddleware
from .timeout import RequestTimeoutMiddleware

__all__ = ["SecurityHeadersMiddleware", "RequestTimeoutMiddleware"]

"""Security headers middleware for FastAPI"""
from fastapi import Request
from fastapi.responses import Response
from starlette.middleware.base import BaseHTTPMiddleware

# Swagger UI and ReDoc load scripts from a CDN, so they get no CSP
DOCS_PATHS = ("/docs", "/redoc", "/openapi.json")

API_CONTENT_SECURITY_POLICY = "default-src 'none'; frame-ancestors 'none'; base-uri 'none'"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Add hardening headers to every response.

    HSTS is only sent when ``enable_hsts`` is set (production), since local
    development runs over plain HTTP.
    """

    def __init__(self, app, enable_hsts: bool = False):
        super().__init__(app)
        self.enable_hsts = enable_hsts

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Permissions-Policy"] = (
            "camera=(), "
            "geolocation=(), "
            "usb=(), "
            "payment=()"
        )
        response.headers["Cross-Origin-Opener-Policy"] = "same-origin"

        if not request.url.path.startswith(DOCS_PATHS):
            response.headers["Content-Security-Policy"] = API_CONTENT_SECURITY_POLICY

        if self.enable_hsts:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        return response

"""Request timeout middleware for FastAPI"""
import asyncio
import logging

from fastapi import Request
from fastapi.responses import JSONResponse, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class RequestTimeoutMiddleware(BaseHTTPMiddleware):
    """Answer 504 when a request outlives ``timeout_seconds`` (a slow hosted model, a stuck store)"""

    def __init__(self, app, timeout_seconds: int = 60):
        super().__init__(app)
        self.timeout_seconds = timeout_seconds

    async def dispatch(self, request: Request, call_next) -> Response:
        try:
            return await asyncio.wait_for(call_next(request), timeout=self.timeout_seconds)
        except asyncio.TimeoutError:
            logger.error("%s %s exceeded %ss", request.method, request.url.path, self.timeout_seconds)
            return JSONResponse(
                status_code=504,
                content={
                    "error": "RequestTimeout",
                    "message": "Request processing exceeded timeout limit",
                    "details": {"timeoutSeconds": self.timeout_seconds},
                },
            )

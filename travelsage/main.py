"""
TravelSage Backend - travel planning service

- Itineraries with embedded days and items, per-user current itinerary
- Restaurant and activity bookings with confirmation codes
- Read-only catalog of destinations, restaurants and activities
- Assistant endpoints (rule-based templates, optional Gemini backend)
- Server-side sessions in HttpOnly cookies
"""
import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Settings, settings as default_settings
from .container import Container
from .middleware import RequestTimeoutMiddleware, SecurityHeadersMiddleware
from .routes import ROUTERS
from .schemas.response import FieldError, HealthResponse, ServiceInfo
from .utils.errors import DependencyError, TravelSageError, ValidationError

logger = logging.getLogger(__name__)

API_PREFIX = "/api"
VERSION = "1.0.0"

# Location prefixes FastAPI adds that are not part of the client's field name
_LOCATION_SOURCES = {"body", "query", "path", "header", "cookie"}


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def field_errors(exc: RequestValidationError) -> List[FieldError]:
    """Flatten FastAPI's validation errors into ``{"field", "message"}`` entries"""
    errors = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in _LOCATION_SOURCES]
        errors.append(FieldError(field=".".join(loc) or "body", message=error.get("msg", "Invalid value")))
    return errors


async def travelsage_error_handler(request: Request, exc: TravelSageError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = field_errors(exc)
    error = ValidationError.for_fields(
        "Invalid request",
        [entry.model_dump() for entry in errors],
    )
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    error = DependencyError("Internal server error")
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


def create_app(container: Optional[Container] = None, settings: Settings = default_settings) -> FastAPI:
    """
    Build the FastAPI application

    Args:
        container: Pre-built container (tests pass an in-memory one);
            built from ``settings`` when omitted
        settings: Application settings

    Returns:
        Configured FastAPI app with the container on ``app.state.container``
    """
    configure_logging(settings.log_level)
    container = container or Container.from_settings(settings)
    settings = container.settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "TravelSage starting (env=%s, storage=%s, assistant=%s)",
            settings.env, settings.storage_backend, settings.assistant_backend,
        )
        yield
        await container.close()
        logger.info("TravelSage stopped")

    app = FastAPI(
        title="TravelSage API",
        description="Travel planning: itineraries, bookings, catalog and assistant",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.container = container

    # Middleware runs bottom to top; security headers wrap everything
    app.add_middleware(SecurityHeadersMiddleware, enable_hsts=settings.is_production)
    app.add_middleware(RequestTimeoutMiddleware, timeout_seconds=settings.request_timeout_seconds)

    allowed_origins_list = [origin.strip() for origin in settings.allowed_origins.split(",") if origin.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.add_exception_handler(TravelSageError, travelsage_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    for router in ROUTERS:
        app.include_router(router, prefix=API_PREFIX)

    @app.get("/", response_model=ServiceInfo)
    async def root():
        """Service banner"""
        return ServiceInfo(
            name="TravelSage API",
            version=VERSION,
            status="ok",
            endpoints=[
                f"{API_PREFIX}/auth",
                f"{API_PREFIX}/destinations",
                f"{API_PREFIX}/restaurants",
                f"{API_PREFIX}/activities",
                f"{API_PREFIX}/bookings",
                f"{API_PREFIX}/itineraries",
                f"{API_PREFIX}/ai",
            ],
        )

    @app.get("/health", response_model=HealthResponse)
    async def health():
        """Health check endpoint"""
        return HealthResponse(
            status="healthy",
            environment=settings.env,
            storage_backend=settings.storage_backend,
            assistant_backend=settings.assistant_backend,
        )

    return app


app = create_app()

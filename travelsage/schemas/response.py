"""Response schemas for API endpoints"""
from typing import Any, Dict, List
from pydantic import BaseModel, Field

from ..models.base import CamelModel


class FieldError(BaseModel):
    """One entry of ``details.errors`` on a 400 response"""
    field: str = Field(..., description="Offending field (camelCase, dotted for nested fields)")
    message: str


class ErrorResponse(BaseModel):
    """Error response schema shared by every endpoint"""
    error: str = Field(..., description="Error type (ValidationError, NotFound, ...)")
    message: str = Field(..., description="Human-readable error message")
    details: Dict[str, Any] = Field(default_factory=dict, description="Additional error details")


class MessageResponse(CamelModel):
    message: str


class HealthResponse(CamelModel):
    status: str
    environment: str
    storage_backend: str
    assistant_backend: str


class ServiceInfo(CamelModel):
    name: str
    version: str
    status: str
    endpoints: List[str]


# Documented error responses for route decorators
ERROR_RESPONSES: Dict[int, Dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Validation error"},
    401: {"model": ErrorResponse, "description": "Missing, invalid or expired session"},
    403: {"model": ErrorResponse, "description": "Not the owner of the resource"},
    404: {"model": ErrorResponse, "description": "Resource not found"},
    409: {"model": ErrorResponse, "description": "Username or email already taken"},
    429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
}

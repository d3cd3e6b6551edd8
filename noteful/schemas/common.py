"""
Noteful API — Shared Schema Building Blocks
===========================================

What:  Base model with camelCase aliases, plus the error and health
       response models used by every router.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class APIModel(BaseModel):
    """
    Base for every schema exposed over HTTP.

    from_attributes:  build responses straight from ORM instances
    alias_generator:  snake_case attributes ↔ camelCase JSON keys
    populate_by_name: accept either spelling on input
    """

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Fields:
        error: Machine-readable error code (e.g., "validation_error", "not_found")
        message: Human-readable description for display to users
        details: Optional extra context (e.g., which field failed validation)
        request_id: Correlation ID for tracing this error in server logs

    Example:
        {
            "error": "validation_error",
            "message": "The `folderId` is not valid",
            "details": {"field": "folderId"},
            "request_id": "1f0c9a2e"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class RegistrationErrorResponse(BaseModel):
    """422 body returned by POST /api/users."""
    code: int = Field(default=422)
    reason: str = Field(default="ValidationError")
    message: str
    location: Optional[str] = None
    request_id: Optional[str] = None


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer probes."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")

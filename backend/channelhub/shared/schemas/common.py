"""
Common Schemas

Shared schemas used across the application for consistent API responses.

Schema Types:
=============
- BaseSchema: Base with common config (from_attributes, populate_by_name)
- ApiResponse[T]: Success envelope {success, message, data}
- MessageResponse: Envelope without data
- ErrorResponse: Failure envelope {success: false, message, error}

Usage:
======
    from channelhub.shared.schemas.common import ApiResponse

    @router.get("/me", response_model=ApiResponse[UserResponse])
    async def me(...):
        return ApiResponse(data=profile, message="User fetched successfully")
"""

from datetime import datetime, timezone
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field


# Generic type for enveloped responses
DataT = TypeVar("DataT")


class BaseSchema(BaseModel):
    """
    Base schema with common configuration.

    - from_attributes: Allow creating from ORM models
    - populate_by_name: Allow field population by name or alias
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
    )


# ═══════════════════════════════════════════════════════════════════════════════
# STANDARD RESPONSES
# ═══════════════════════════════════════════════════════════════════════════════


class ApiResponse(BaseModel, Generic[DataT]):
    """
    Success envelope returned by every endpoint.

    Example:
        {"success": true, "message": "Channel fetched successfully", "data": {...}}
    """

    success: bool = True
    message: str
    data: DataT


class MessageResponse(BaseModel):
    """Simple message response for success confirmations."""

    success: bool = True
    message: str


class ErrorDetail(BaseModel):
    """Error detail structure in error responses."""

    code: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error message")
    details: Optional[dict[str, Any]] = Field(
        default=None,
        description="Additional error context",
    )


class ErrorResponse(BaseModel):
    """
    Standard error response schema.

    Example:
        {
            "success": false,
            "message": "Channel 'bob' not found",
            "error": {"code": "NOT_FOUND", "message": "Channel 'bob' not found", "details": {}}
        }
    """

    success: bool = False
    message: str
    error: ErrorDetail


# ═══════════════════════════════════════════════════════════════════════════════
# HEALTH CHECK
# ═══════════════════════════════════════════════════════════════════════════════


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str = "healthy"
    service: str = "channelhub"
    version: str = "1.0.0"
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

"""
Pydantic response models for MCP tools.

Defines standardized response structures for all tools including
metadata, error responses, and tool-specific outputs.
"""
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field


class ResponseMetadata(BaseModel):
    """
    Metadata included in all tool responses.

    Provides information about token reuse and execution metrics.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "token_cached": True,
                "execution_time_ms": 412.7,
                "reddit_api_calls": 1,
            }
        }
    )

    token_cached: bool = Field(
        ...,
        description="Whether the OAuth token was served from the in-memory cache",
    )
    execution_time_ms: float = Field(
        ...,
        ge=0,
        description="Tool execution time in milliseconds",
    )
    reddit_api_calls: int = Field(
        0,
        ge=0,
        description="Number of Reddit API calls made",
    )


# Generic type for tool result data
T = TypeVar("T")


class ToolResponse(BaseModel, Generic[T]):
    """
    Generic response wrapper for all MCP tools.

    Wraps tool-specific data with standard metadata.

    Type Parameters:
        T: Type of the data field (tool-specific)

    Example:
        >>> response = ToolResponse(
        ...     data={"images": [...]},
        ...     metadata=ResponseMetadata(
        ...         token_cached=False,
        ...         execution_time_ms=734.5,
        ...         reddit_api_calls=2,
        ...     )
        ... )
    """

    data: T = Field(
        ...,
        description="Tool-specific result data",
    )
    metadata: ResponseMetadata = Field(
        ...,
        description="Response metadata (token reuse, timing)",
    )


class ErrorResponse(BaseModel):
    """
    Standardized error response structure.

    Used for JSON-RPC style error payloads returned by the tools.

    Attributes:
        code: JSON-RPC error code
        message: Human-readable error message
        data: Optional additional error context
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "code": -32001,
                "message": "Subreddit 'r/doesnotexist' not found or is private (404).",
                "data": {"kind": "not_found", "status_code": 404},
            }
        }
    )

    code: int = Field(
        ...,
        description="JSON-RPC error code",
    )
    message: str = Field(
        ...,
        min_length=1,
        description="Human-readable error message",
    )
    data: dict[str, Any] | None = Field(
        None,
        description="Additional error context",
    )


class HealthCheckResponse(BaseModel):
    """Health check response used to verify the server and its components."""

    status: str = Field(
        ...,
        description="Overall health status (healthy, degraded, unhealthy)",
    )
    version: str = Field(
        ...,
        description="Server version",
    )
    components: dict[str, str] = Field(
        ...,
        description="Health status of individual components",
    )

"""
Base Schemas.

The envelope every endpoint answers with:

    {"success": true,  "data": ..., "error": null, "metadata": {...}}
    {"success": false, "data": null, "error": {code, message, details}, "metadata": {...}}
"""

from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

from rolenotes.backend.core.utils import utc_now

DataT = TypeVar("DataT")


class ResponseMetadata(BaseModel):
    timestamp: datetime = Field(default_factory=utc_now)
    request_id: str | None = None


class ErrorDetail(BaseModel):
    code: str = Field(description="Stable machine-readable error code")
    message: str
    details: dict[str, Any] | None = None


class ApiResponse(BaseModel, Generic[DataT]):
    """Successful response carrying ``data``."""

    success: bool = True
    data: DataT | None = None
    error: ErrorDetail | None = None
    metadata: ResponseMetadata = Field(default_factory=ResponseMetadata)


class ErrorResponse(BaseModel):
    """Failed response carrying ``error``."""

    success: bool = False
    data: None = None
    error: ErrorDetail
    metadata: ResponseMetadata = Field(default_factory=ResponseMetadata)

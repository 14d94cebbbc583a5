"""Pydantic models shared across API responses."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ErrorDetail(BaseModel):
    """Error detail in API responses."""

    model_config = ConfigDict(extra="forbid")

    code: str
    message: str
    details: dict[str, Any] | list[Any] | str | None = None
    trace_id: str = Field(..., max_length=128)
    timestamp: datetime


class ErrorResponse(BaseModel):
    """Standard error envelope returned by every ToolsmithError."""

    model_config = ConfigDict(extra="forbid")

    error: ErrorDetail

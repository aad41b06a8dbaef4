"""Error response schema shared by all endpoints (documentation only)."""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body returned for every handled error."""

    error: str = Field(..., description="Machine-readable error code, e.g. TENANT_NOT_FOUND")
    message: str = Field(..., description="Message safe to show to menu visitors")
    details: dict[str, Any] = Field(default_factory=dict, description="Diagnostic context")

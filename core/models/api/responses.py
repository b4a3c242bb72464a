"""API response models."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str
    timestamp: str


class ModelConfigResponse(BaseModel):
    """Model provider configuration exposed to clients."""

    provider: str = Field(..., description="Model provider name")
    model: str = Field(..., description="Model used by the research agents")

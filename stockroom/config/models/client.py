"""API client configuration models."""

from pydantic import BaseModel, Field


class ClientConfig(BaseModel):
    """Settings for StockroomClient when built from configuration."""

    base_url: str = Field(default="http://localhost:5000", description="Server base URL")
    timeout: float = Field(default=10.0, gt=0, description="Request timeout in seconds")

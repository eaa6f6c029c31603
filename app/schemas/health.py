"""Pydantic schema for the health check response."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: Literal["ok"] = "ok"
    environment: str = Field(description="APP_ENV the service runs with")
    database: Literal["connected", "disconnected"]

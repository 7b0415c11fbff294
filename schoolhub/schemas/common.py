"""Shared schema base and the response envelope used by every endpoint."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for API payloads: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ErrorResponse(CamelModel):
    """Body returned for every error: {success: false, error: <message>}."""

    success: bool = False
    error: str


class MessageResponse(CamelModel):
    success: bool = True
    message: str


class HealthResponse(CamelModel):
    """Liveness plus database reachability, for load balancers and monitoring."""

    success: bool = True
    status: Literal["ok", "degraded"] = Field(default="ok", description="Service status")
    environment: str = Field(description="Current app environment (dev or prod)")
    version: str
    database: Literal["connected", "disconnected"]

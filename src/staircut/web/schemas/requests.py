"""Pydantic request schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field


class OptimizeRequest(BaseModel):
    """Request for optimizing a staircase project."""

    config: dict[str, Any] = Field(
        ..., description="Project document, same format as a project file"
    )

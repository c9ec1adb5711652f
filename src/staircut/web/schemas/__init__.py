"""Pydantic schemas for the REST API."""

from staircut.web.schemas.requests import OptimizeRequest
from staircut.web.schemas.responses import (
    ErrorResponseSchema,
    OptimizationResultSchema,
    PieceSchema,
    PlacementSchema,
    PlankLayoutSchema,
    TypeStatsSchema,
)

__all__ = [
    "ErrorResponseSchema",
    "OptimizationResultSchema",
    "OptimizeRequest",
    "PieceSchema",
    "PlacementSchema",
    "PlankLayoutSchema",
    "TypeStatsSchema",
]

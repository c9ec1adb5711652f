"""Domain layer - core business logic."""

from .catalog import ConfigurationError, require_candidates
from .services import create_pieces, create_riser_pieces, create_tread_pieces
from .value_objects import (
    CuttingConstraints,
    Piece,
    PieceType,
    PlankInventory,
    PlankSpec,
    StepMeasurement,
)

__all__ = [
    "ConfigurationError",
    "CuttingConstraints",
    "Piece",
    "PieceType",
    "PlankInventory",
    "PlankSpec",
    "StepMeasurement",
    "create_pieces",
    "create_riser_pieces",
    "create_tread_pieces",
    "require_candidates",
]

"""Domain services for the staircase cutting domain."""

from .piece_extraction import (
    calculate_step_dimensions,
    create_pieces,
    create_riser_pieces,
    create_tread_pieces,
)

__all__ = [
    "calculate_step_dimensions",
    "create_pieces",
    "create_riser_pieces",
    "create_tread_pieces",
]

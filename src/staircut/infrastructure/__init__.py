"""Infrastructure layer - packing algorithms and formatters."""

from .bin_packing import (
    BinPacker,
    FreeRectangle,
    PackingConfig,
    PlacedPiece,
    PlankLayout,
    check_tread_fit,
)
from .formatters import JsonExporter, OptimizationReportFormatter
from .plank_optimizer import (
    PieceTypeResult,
    PlankOptimizer,
    RiserOptimizer,
    SelectionStrategy,
    TreadOptimizer,
    optimizer_for,
)

__all__ = [
    "BinPacker",
    "FreeRectangle",
    "JsonExporter",
    "OptimizationReportFormatter",
    "PackingConfig",
    "PieceTypeResult",
    "PlacedPiece",
    "PlankLayout",
    "PlankOptimizer",
    "RiserOptimizer",
    "SelectionStrategy",
    "TreadOptimizer",
    "check_tread_fit",
    "optimizer_for",
]

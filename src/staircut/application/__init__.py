"""Application layer - use cases and orchestration."""

from .commands import OptimizeCutsCommand, aggregate_results, optimize
from .dtos import OptimizationResult, TypeStats

__all__ = [
    "OptimizationResult",
    "OptimizeCutsCommand",
    "TypeStats",
    "aggregate_results",
    "optimize",
]

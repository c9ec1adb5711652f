"""Data Transfer Objects for the application layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Mapping

from staircut.domain.value_objects import Piece
from staircut.infrastructure.bin_packing import PlankLayout


@dataclass(frozen=True)
class TypeStats:
    """Summary of the planks bought for one piece type.

    Attributes:
        planks: Number of planks used.
        cost: Price of those planks.
        efficiency: Percentage of their packed area covered by pieces.
    """

    planks: int = 0
    cost: float = 0.0
    efficiency: float = 0.0


@dataclass(frozen=True)
class OptimizationResult:
    """Complete result of a staircase cutting optimization.

    Attributes:
        tread_layouts: Layouts of the planks bought for treads.
        riser_layouts: Layouts of the planks bought for risers.
        planks_used: Plank counts per spec id, under "treads" and "risers".
        total_cost: Price of every plank used.
        total_waste: Unused area across all planks.
        total_area: Packed area across all planks.
        overall_efficiency: Percentage of total_area covered by pieces.
        all_pieces_fit: True if both treads and risers were fully placed.
        unfit_pieces: Pieces that could not be placed, treads first.
        tread_stats: Tread plank summary.
        riser_stats: Riser plank summary.
        optimized_at: When the optimization ran (UTC).
    """

    tread_layouts: tuple[PlankLayout, ...]
    riser_layouts: tuple[PlankLayout, ...]
    planks_used: Mapping[str, Mapping[str, int]]
    total_cost: float
    total_waste: float
    total_area: float
    overall_efficiency: float
    all_pieces_fit: bool
    unfit_pieces: tuple[Piece, ...]
    tread_stats: TypeStats = field(default_factory=TypeStats)
    riser_stats: TypeStats = field(default_factory=TypeStats)
    optimized_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        # Read-only views of the per-type counts
        frozen = {
            group: MappingProxyType(dict(counts))
            for group, counts in self.planks_used.items()
        }
        object.__setattr__(self, "planks_used", MappingProxyType(frozen))

    @property
    def layouts(self) -> tuple[PlankLayout, ...]:
        """All layouts, treads first."""
        return self.tread_layouts + self.riser_layouts

    @property
    def total_planks(self) -> int:
        return len(self.tread_layouts) + len(self.riser_layouts)

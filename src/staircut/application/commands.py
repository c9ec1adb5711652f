"""Application commands (use cases) for staircase cutting optimization."""

from __future__ import annotations

import logging
from typing import Sequence

from staircut.domain import (
    CuttingConstraints,
    PieceType,
    PlankInventory,
    StepMeasurement,
    create_pieces,
    require_candidates,
)
from staircut.infrastructure.plank_optimizer import (
    PieceTypeResult,
    PlankOptimizer,
    RiserOptimizer,
    TreadOptimizer,
)

from .dtos import OptimizationResult, TypeStats

logger = logging.getLogger(__name__)


class OptimizeCutsCommand:
    """Command to plan the plank purchase for a staircase.

    Extracts tread and riser pieces from the measurements, optimizes each
    type against its own catalog, and merges both into one result.
    """

    def __init__(
        self,
        tread_optimizer: PlankOptimizer | None = None,
        riser_optimizer: PlankOptimizer | None = None,
    ) -> None:
        self.tread_optimizer = tread_optimizer
        self.riser_optimizer = riser_optimizer

    def execute(
        self,
        measurements: Sequence[StepMeasurement],
        inventory: PlankInventory,
        constraints: CuttingConstraints | None = None,
    ) -> OptimizationResult:
        """Execute the optimization.

        Both catalogs are checked before any packing, so a catalog problem
        never yields a partial result. Pieces that cannot be placed do not
        raise; they are reported in the result's unfit_pieces.

        Args:
            measurements: One record per step.
            inventory: Tread and riser catalogs.
            constraints: Saw and rotation settings, defaults if None.

        Returns:
            The merged optimization result.

        Raises:
            ConfigurationError: If a catalog has no spec for its pieces.
            ValueError: If two measurements share a step number.
        """
        constraints = constraints or CuttingConstraints()
        self._check_unique_steps(measurements)

        tread_pieces = create_pieces(PieceType.TREAD, measurements)
        riser_pieces = create_pieces(PieceType.RISER, measurements)

        for piece_type, pieces in (
            (PieceType.TREAD, tread_pieces),
            (PieceType.RISER, riser_pieces),
        ):
            if pieces:
                require_candidates(piece_type, inventory.catalog_for(piece_type))

        logger.info(
            "Optimizing %d steps against %d tread and %d riser specs",
            len(measurements),
            len(inventory.treads),
            len(inventory.risers),
        )

        tread_optimizer = self.tread_optimizer or TreadOptimizer(constraints)
        riser_optimizer = self.riser_optimizer or RiserOptimizer(constraints)

        riser_result = riser_optimizer.optimize(riser_pieces, inventory.risers)
        tread_result = tread_optimizer.optimize(tread_pieces, inventory.treads)

        return aggregate_results(tread_result, riser_result)

    def _check_unique_steps(self, measurements: Sequence[StepMeasurement]) -> None:
        seen: set[int] = set()
        for measurement in measurements:
            if measurement.step_number in seen:
                raise ValueError(f"Duplicate step number: {measurement.step_number}")
            seen.add(measurement.step_number)


def _type_stats(result: PieceTypeResult) -> TypeStats:
    return TypeStats(
        planks=len(result.layouts),
        cost=result.total_cost,
        efficiency=result.efficiency,
    )


def aggregate_results(
    tread_result: PieceTypeResult,
    riser_result: PieceTypeResult,
) -> OptimizationResult:
    """Merge tread and riser results into one optimization result."""
    total_cost = tread_result.total_cost + riser_result.total_cost
    total_area = tread_result.total_area + riser_result.total_area
    total_waste = tread_result.total_waste + riser_result.total_waste
    overall_efficiency = (
        (total_area - total_waste) / total_area * 100 if total_area > 0 else 0.0
    )

    result = OptimizationResult(
        tread_layouts=tread_result.layouts,
        riser_layouts=riser_result.layouts,
        planks_used={
            "treads": tread_result.planks_used,
            "risers": riser_result.planks_used,
        },
        total_cost=total_cost,
        total_waste=total_waste,
        total_area=total_area,
        overall_efficiency=overall_efficiency,
        all_pieces_fit=tread_result.all_pieces_fit and riser_result.all_pieces_fit,
        unfit_pieces=tread_result.unfit_pieces + riser_result.unfit_pieces,
        tread_stats=_type_stats(tread_result),
        riser_stats=_type_stats(riser_result),
    )

    logger.info(
        "Optimization complete: %d planks, %.2f total cost, %.1f%% efficiency",
        result.total_planks,
        result.total_cost,
        result.overall_efficiency,
    )
    if not result.all_pieces_fit:
        logger.warning(
            "%d pieces could not be placed: %s",
            len(result.unfit_pieces),
            ", ".join(p.id for p in result.unfit_pieces),
        )
    return result


def optimize(
    measurements: Sequence[StepMeasurement],
    inventory: PlankInventory,
    constraints: CuttingConstraints | None = None,
) -> OptimizationResult:
    """Plan the cheapest plank purchase for a staircase.

    Convenience wrapper around OptimizeCutsCommand.
    """
    return OptimizeCutsCommand().execute(measurements, inventory, constraints)

"""Cheapest-plank selection for one piece type.

Tread and riser pieces are bought from separate catalogs and obey
different rotation rules, so each type is optimized on its own. An
optimizer first looks for a single plank spec that can take every piece
and keeps the cheapest one. When no spec can, it falls back to a greedy
mix: one plank at a time, always buying the spec that takes the most of
the pieces still waiting.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Sequence

from staircut.domain.catalog import require_candidates
from staircut.domain.value_objects import (
    CuttingConstraints,
    Piece,
    PieceType,
    PlankSpec,
)
from staircut.infrastructure.bin_packing import (
    DEFAULT_MAX_PLANKS,
    BinPacker,
    PackingConfig,
    PlacedPiece,
    PlankLayout,
    check_tread_fit,
)

logger = logging.getLogger(__name__)

MAX_MULTI_SPEC_ITERATIONS = 100


class SelectionStrategy(str, Enum):
    """How the winning layouts of a piece type were chosen.

    Attributes:
        EMPTY: There were no pieces to place.
        SINGLE_SPEC: Every piece fits on planks of one spec.
        MULTI_SPEC: Greedy mix of specs, possibly leaving pieces unfit.
    """

    EMPTY = "empty"
    SINGLE_SPEC = "single_spec"
    MULTI_SPEC = "multi_spec"


@dataclass(frozen=True)
class PieceTypeResult:
    """Winning layouts for one piece type.

    Attributes:
        piece_type: Tread or riser.
        layouts: One layout per plank bought.
        unfit_pieces: Pieces that could not be placed, in input order.
        strategy: How the layouts were chosen.
    """

    piece_type: PieceType
    layouts: tuple[PlankLayout, ...]
    unfit_pieces: tuple[Piece, ...]
    strategy: SelectionStrategy

    @property
    def total_cost(self) -> float:
        """Price of every plank actually used."""
        return sum(layout.plank_spec.price_per_plank for layout in self.layouts)

    @property
    def total_waste(self) -> float:
        return sum(layout.waste_area for layout in self.layouts)

    @property
    def total_area(self) -> float:
        return sum(layout.total_area for layout in self.layouts)

    @property
    def efficiency(self) -> float:
        """Percentage of the packed plank area covered by pieces."""
        if self.total_area == 0:
            return 0.0
        return (self.total_area - self.total_waste) / self.total_area * 100

    @property
    def all_pieces_fit(self) -> bool:
        return not self.unfit_pieces

    @property
    def placements(self) -> tuple[PlacedPiece, ...]:
        return tuple(p for layout in self.layouts for p in layout.placements)

    @property
    def planks_used(self) -> dict[str, int]:
        """Number of planks bought per spec id."""
        counts: dict[str, int] = {}
        for layout in self.layouts:
            key = layout.plank_spec.id
            counts[key] = counts.get(key, 0) + 1
        return counts


class PlankOptimizer:
    """Chooses the cheapest plank purchase for pieces of one type.

    Subclasses set the piece type; the packing configuration (rotations,
    nosing deduction) follows from it.

    Attributes:
        constraints: Saw and rotation settings.
        packer: BinPacker configured for this piece type.
        default_max_planks: Plank cap for specs with unlimited stock.
        max_iterations: Ceiling on planks bought by the greedy fallback.
    """

    piece_type: ClassVar[PieceType]

    def __init__(
        self,
        constraints: CuttingConstraints,
        default_max_planks: int = DEFAULT_MAX_PLANKS,
        max_iterations: int = MAX_MULTI_SPEC_ITERATIONS,
    ) -> None:
        self.constraints = constraints
        self.packer = BinPacker(
            PackingConfig.for_piece_type(constraints, self.piece_type)
        )
        self.default_max_planks = default_max_planks
        self.max_iterations = max_iterations

    def optimize(
        self,
        pieces: Sequence[Piece],
        catalog: Sequence[PlankSpec],
    ) -> PieceTypeResult:
        """Place all pieces at the lowest total plank cost.

        Args:
            pieces: Pieces of this optimizer's type.
            catalog: Plank specs offered for this type.

        Returns:
            The cheapest complete solution, or the greedy best effort with
            the leftover pieces listed as unfit.

        Raises:
            ConfigurationError: If pieces exist but no spec can serve them.
        """
        if not pieces:
            return PieceTypeResult(
                piece_type=self.piece_type,
                layouts=(),
                unfit_pieces=(),
                strategy=SelectionStrategy.EMPTY,
            )

        candidates = require_candidates(self.piece_type, catalog)

        layouts = self._best_single_spec(pieces, candidates)
        strategy = SelectionStrategy.SINGLE_SPEC
        if layouts is None:
            logger.info(
                "No single %s spec takes all %d pieces, mixing specs",
                self.piece_type.value,
                len(pieces),
            )
            layouts = self._pack_multi_spec(pieces, candidates)
            strategy = SelectionStrategy.MULTI_SPEC

        placed_ids = {p.piece.id for layout in layouts for p in layout.placements}
        unfit = tuple(piece for piece in pieces if piece.id not in placed_ids)
        for piece in unfit:
            logger.warning(
                "%s '%s' could not be placed: %s",
                self.piece_type.value.capitalize(),
                piece.id,
                self._describe_unfit(piece, candidates),
            )

        result = PieceTypeResult(
            piece_type=self.piece_type,
            layouts=tuple(layouts),
            unfit_pieces=unfit,
            strategy=strategy,
        )
        logger.info(
            "%s: %d pieces -> %d planks, %.2f cost, %d unfit",
            self.piece_type.value,
            len(pieces),
            len(result.layouts),
            result.total_cost,
            len(unfit),
        )
        return result

    def _best_single_spec(
        self,
        pieces: Sequence[Piece],
        candidates: Sequence[PlankSpec],
    ) -> list[PlankLayout] | None:
        """Try each spec on its own and keep the cheapest complete packing.

        Returns:
            Layouts of the cheapest spec that places every piece, or None.
        """
        best_layouts: list[PlankLayout] | None = None
        best_cost = 0.0

        for spec in candidates:
            max_planks = (
                spec.stock_quantity
                if spec.stock_quantity is not None
                else self.default_max_planks
            )
            layouts = self.packer.pack(pieces, spec, max_planks=max_planks)
            placed = sum(layout.piece_count for layout in layouts)
            if placed < len(pieces):
                logger.debug(
                    "Spec '%s' places %d of %d pieces within %d planks",
                    spec.id,
                    placed,
                    len(pieces),
                    max_planks,
                )
                continue

            cost = len(layouts) * spec.price_per_plank
            logger.debug(
                "Spec '%s' places all pieces on %d planks for %.2f",
                spec.id,
                len(layouts),
                cost,
            )
            if best_layouts is None or cost < best_cost:
                best_layouts = layouts
                best_cost = cost

        return best_layouts

    def _pack_multi_spec(
        self,
        pieces: Sequence[Piece],
        candidates: Sequence[PlankSpec],
    ) -> list[PlankLayout]:
        """Buy planks one at a time from whichever spec places the most.

        Specs are tried in order of area per euro, which also breaks ties.
        A spec drops out once its stock is used up. Stops when every piece
        is placed, nothing more fits, stock runs out or the iteration cap is
        reached.
        """
        ordered = sorted(candidates, key=lambda s: s.area_per_price, reverse=True)
        usage: dict[PlankSpec, int] = {}
        remaining = list(pieces)
        layouts: list[PlankLayout] = []
        iterations = 0

        while remaining:
            if iterations >= self.max_iterations:
                logger.warning(
                    "Stopped mixing %s specs after %d planks with %d pieces left",
                    self.piece_type.value,
                    iterations,
                    len(remaining),
                )
                break

            available = [spec for spec in ordered if self._has_stock(spec, usage)]
            if not available:
                logger.debug("All %s stock is used up", self.piece_type.value)
                break

            best: PlankLayout | None = None
            for spec in available:
                attempt = self.packer.pack(
                    remaining,
                    spec,
                    max_planks=1,
                    start_index=usage.get(spec, 0),
                )
                if not attempt:
                    continue
                if best is None or attempt[0].piece_count > best.piece_count:
                    best = attempt[0]

            if best is None:
                break

            layouts.append(best)
            spec = best.plank_spec
            usage[spec] = usage.get(spec, 0) + 1
            if not self._has_stock(spec, usage):
                logger.debug(
                    "Stock of '%s' exhausted after %d planks", spec.id, usage[spec]
                )

            placed_ids = {p.piece.id for p in best.placements}
            remaining = [piece for piece in remaining if piece.id not in placed_ids]
            iterations += 1

        return layouts

    def _has_stock(self, spec: PlankSpec, usage: dict[PlankSpec, int]) -> bool:
        if spec.stock_quantity is None:
            return True
        return usage.get(spec, 0) < spec.stock_quantity

    def _describe_unfit(self, piece: Piece, candidates: Sequence[PlankSpec]) -> str:
        """Explain why a piece was left over."""
        if any(self.packer.piece_fits(piece, spec) for spec in candidates):
            return "not enough plank stock"
        return f"too large for every plank ({piece.width:g}x{piece.height:g}mm)"


class TreadOptimizer(PlankOptimizer):
    """Optimizer for tread pieces.

    Treads only come from nosed planks and only turn 0 or 180 degrees, so
    the nose stays on the plank's long edge. Usable plank length excludes
    the nosing on both long edges.
    """

    piece_type = PieceType.TREAD

    def _describe_unfit(self, piece: Piece, candidates: Sequence[PlankSpec]) -> str:
        reasons = []
        for spec in candidates:
            fits, reason = check_tread_fit(piece, spec)
            if fits:
                return super()._describe_unfit(piece, candidates)
            reasons.append(f"{spec.id}: {reason}")
        return "; ".join(reasons)


class RiserOptimizer(PlankOptimizer):
    """Optimizer for riser pieces, which may turn a quarter."""

    piece_type = PieceType.RISER


def optimizer_for(
    piece_type: PieceType,
    constraints: CuttingConstraints,
) -> PlankOptimizer:
    """Create the optimizer for a piece type."""
    if piece_type == PieceType.TREAD:
        return TreadOptimizer(constraints)
    return RiserOptimizer(constraints)

"""Bin packing data models and algorithms for plank cutting.

This module provides the data structures for plank layouts and piece
placements, and the guillotine bin packer that fills planks of a single
spec with tread or riser pieces.

Packing works on free rectangles: every plank instance starts with one
rectangle covering its usable area, and each placement splits the
rectangle it lands in with full-length straight cuts. Every piece occupies
its own size plus kerf and safety margin on its right and bottom edges, so
adjacent pieces always keep a saw gap.

All public dataclasses are frozen (immutable).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from staircut.domain.value_objects import (
    VALID_ROTATIONS,
    CuttingConstraints,
    Piece,
    PieceType,
    PlankSpec,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_PLANKS = 20

# Weight of the distance-from-origin tie-break in placement scores
POSITION_WEIGHT = 0.1


@dataclass(frozen=True)
class PackingConfig:
    """Configuration for one packing run.

    Attributes:
        allowed_rotations: Rotations in degrees tried for each piece, in order.
        saw_blade_kerf: Saw kerf reserved after each piece.
        safety_margin: Extra clearance reserved after each piece.
        deduct_nosing: Remove the nosing on both long edges from the usable
            plank length (tread packing).
    """

    allowed_rotations: tuple[int, ...] = (0,)
    saw_blade_kerf: float = 10.0
    safety_margin: float = 5.0
    deduct_nosing: bool = False

    def __post_init__(self) -> None:
        if not self.allowed_rotations:
            raise ValueError("At least one rotation must be allowed")
        invalid = set(self.allowed_rotations) - VALID_ROTATIONS
        if invalid:
            raise ValueError(f"Invalid rotations: {sorted(invalid)}")
        if self.saw_blade_kerf < 0:
            raise ValueError("Saw blade kerf must be non-negative")
        if self.safety_margin < 0:
            raise ValueError("Safety margin must be non-negative")

    @classmethod
    def for_piece_type(
        cls,
        constraints: CuttingConstraints,
        piece_type: PieceType,
    ) -> PackingConfig:
        """Build the packing configuration for treads or risers."""
        return cls(
            allowed_rotations=constraints.rotations_for(piece_type),
            saw_blade_kerf=constraints.saw_blade_kerf,
            safety_margin=constraints.safety_margin,
            deduct_nosing=piece_type == PieceType.TREAD,
        )

    @property
    def clearance(self) -> float:
        """Kerf plus safety margin added to each placed dimension."""
        return self.saw_blade_kerf + self.safety_margin

    def usable_dimensions(self, plank: PlankSpec) -> tuple[float, float]:
        """Return the (width, length) available for pieces on a plank."""
        if self.deduct_nosing:
            return plank.width, plank.nosed_length
        return plank.width, plank.length


@dataclass(frozen=True)
class FreeRectangle:
    """An empty axis-aligned region of a plank instance.

    Attributes:
        x: Left edge.
        y: Top edge, measured along the plank length.
        width: Extent along x.
        height: Extent along y.
    """

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def contains(self, other: FreeRectangle) -> bool:
        """Check whether another rectangle lies entirely inside this one."""
        return (
            other.x >= self.x
            and other.y >= self.y
            and other.right <= self.right
            and other.bottom <= self.bottom
        )


@dataclass(frozen=True)
class PlacedPiece:
    """A piece placed at a specific position on a plank instance.

    Coordinates are relative to the usable area origin.

    Attributes:
        piece: The piece being placed.
        x: Position of the piece's left edge.
        y: Position of the piece's top edge.
        rotation: Rotation in degrees (0, 90, 180 or 270).
        plank_id: Identifier of the plank instance, "<spec id>-<n>".
    """

    piece: Piece
    x: float
    y: float
    rotation: int
    plank_id: str

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError("Position coordinates must be non-negative")
        if self.rotation not in VALID_ROTATIONS:
            raise ValueError(f"Invalid rotation: {self.rotation}")

    @property
    def is_quarter_turned(self) -> bool:
        return self.rotation in (90, 270)

    @property
    def placed_width(self) -> float:
        """Width of piece as placed (accounts for rotation)."""
        return self.piece.height if self.is_quarter_turned else self.piece.width

    @property
    def placed_height(self) -> float:
        """Height of piece as placed (accounts for rotation)."""
        return self.piece.width if self.is_quarter_turned else self.piece.height


@dataclass(frozen=True)
class PlankLayout:
    """Layout of pieces on one physical plank instance.

    Attributes:
        plank_spec: The catalog spec this plank was bought as.
        plank_index: Zero-based ordinal of this instance within its spec.
        placements: Pieces placed on this plank.
        total_area: Usable area the pieces were packed into.
    """

    plank_spec: PlankSpec
    plank_index: int
    placements: tuple[PlacedPiece, ...]
    total_area: float

    def __post_init__(self) -> None:
        if self.plank_index < 0:
            raise ValueError("Plank index must be non-negative")

    @property
    def instance_id(self) -> str:
        return plank_instance_id(self.plank_spec, self.plank_index)

    @property
    def used_area(self) -> float:
        """Total area of the placed pieces."""
        return sum(p.piece.area for p in self.placements)

    @property
    def waste_area(self) -> float:
        """Usable area left unused."""
        return self.total_area - self.used_area

    @property
    def efficiency(self) -> float:
        """Percentage of the usable area covered by pieces."""
        if self.total_area == 0:
            return 0.0
        return self.used_area / self.total_area * 100

    @property
    def piece_count(self) -> int:
        """Number of pieces placed on this plank."""
        return len(self.placements)


def plank_instance_id(plank: PlankSpec, plank_index: int) -> str:
    """Identifier for the n-th physical plank bought as a spec."""
    return f"{plank.id}-{plank_index + 1}"


@dataclass(frozen=True)
class _Candidate:
    """A feasible placement considered while searching free rectangles."""

    score: float
    rect_index: int
    rotation: int
    width: float
    height: float


class BinPacker:
    """Guillotine bin packing onto planks of a single spec.

    Pieces are sorted by area (largest first). Each piece goes to the free
    rectangle and rotation that leave the tightest fit, preferring positions
    near the plank origin. The occupied rectangle is then cut out of its
    free rectangle with full-length straight cuts, which keeps every layout
    cuttable on a panel saw.

    Attributes:
        config: Packing configuration (rotations, kerf, margin, nosing).
    """

    def __init__(self, config: PackingConfig) -> None:
        """Initialize the packer with configuration.

        Args:
            config: Packing configuration for the piece type being packed.
        """
        self.config = config

    def pack(
        self,
        pieces: Sequence[Piece],
        plank: PlankSpec,
        max_planks: int = DEFAULT_MAX_PLANKS,
        start_index: int = 0,
    ) -> list[PlankLayout]:
        """Pack pieces onto as many planks of one spec as needed.

        Planks are filled one at a time. A plank is closed once no remaining
        piece fits any of its free rectangles, and a new one is opened while
        pieces remain and the cap allows. A plank on which nothing fits is
        discarded and packing stops, so pieces that never fit this spec are
        simply left out of the returned layouts.

        Args:
            pieces: Pieces to pack.
            plank: Spec of the planks to fill.
            max_planks: Maximum number of plank instances to open.
            start_index: Ordinal of the first instance, for callers that
                already hold planks of this spec.

        Returns:
            Layouts of the planks used, in the order they were filled.
        """
        remaining = sorted(pieces, key=lambda p: p.area, reverse=True)
        layouts: list[PlankLayout] = []
        plank_index = start_index

        while remaining and len(layouts) < max_planks:
            layout, remaining = self._pack_single_plank(remaining, plank, plank_index)
            if not layout.placements:
                logger.debug(
                    "No remaining piece fits plank '%s'; %d left unplaced",
                    plank.id,
                    len(remaining),
                )
                break

            layouts.append(layout)
            plank_index += 1

            logger.debug(
                "Plank %s: %d pieces, %.1f%% efficiency",
                layout.instance_id,
                layout.piece_count,
                layout.efficiency,
            )

        return layouts

    def piece_fits(self, piece: Piece, plank: PlankSpec) -> bool:
        """Check whether a piece fits alone on an empty plank of a spec."""
        usable_width, usable_length = self.config.usable_dimensions(plank)
        if usable_width <= 0 or usable_length <= 0:
            return False
        empty = FreeRectangle(0.0, 0.0, usable_width, usable_length)
        return any(
            self._fits(piece, empty, rotation, plank)
            for rotation in self.config.allowed_rotations
        )

    def _pack_single_plank(
        self,
        pieces: list[Piece],
        plank: PlankSpec,
        plank_index: int,
    ) -> tuple[PlankLayout, list[Piece]]:
        """Pack as many pieces as possible onto one plank instance.

        Args:
            pieces: Pieces to place, sorted by area descending.
            plank: Spec of the plank.
            plank_index: Ordinal of this instance within its spec.

        Returns:
            Tuple of (layout of this plank, pieces that did not fit).
        """
        usable_width, usable_length = self.config.usable_dimensions(plank)
        instance_id = plank_instance_id(plank, plank_index)
        free: list[FreeRectangle] = []
        if usable_width > 0 and usable_length > 0:
            free.append(FreeRectangle(0.0, 0.0, usable_width, usable_length))

        placed: list[PlacedPiece] = []
        remaining: list[Piece] = []

        for piece in pieces:
            candidate = self._find_best_placement(piece, free, plank)
            if candidate is None:
                remaining.append(piece)
                continue

            rect = free.pop(candidate.rect_index)
            placed.append(
                PlacedPiece(
                    piece=piece,
                    x=rect.x,
                    y=rect.y,
                    rotation=candidate.rotation,
                    plank_id=instance_id,
                )
            )
            free.extend(self._split(rect, candidate.width, candidate.height))
            free = self._prune_contained(free)

        layout = PlankLayout(
            plank_spec=plank,
            plank_index=plank_index,
            placements=tuple(placed),
            total_area=usable_width * usable_length,
        )
        return layout, remaining

    def _find_best_placement(
        self,
        piece: Piece,
        free: list[FreeRectangle],
        plank: PlankSpec,
    ) -> _Candidate | None:
        """Find the best free rectangle and rotation for a piece.

        Score is the smaller leftover side of the rectangle after placing the
        piece (tightest fit), plus a small penalty for distance from the
        plank origin. The lowest score wins; the first one found wins ties.

        Returns:
            The winning candidate, or None if the piece fits nowhere.
        """
        best: _Candidate | None = None
        clearance = self.config.clearance

        for index, rect in enumerate(free):
            for rotation in self.config.allowed_rotations:
                if not self._fits(piece, rect, rotation, plank):
                    continue
                width, height = self._rotated_dimensions(piece, rotation)
                occupied_width = width + clearance
                occupied_height = height + clearance
                score = min(
                    rect.width - occupied_width,
                    rect.height - occupied_height,
                ) + (rect.x + rect.y) * POSITION_WEIGHT
                if best is None or score < best.score:
                    best = _Candidate(
                        score=score,
                        rect_index=index,
                        rotation=rotation,
                        width=occupied_width,
                        height=occupied_height,
                    )

        return best

    def _fits(
        self,
        piece: Piece,
        rect: FreeRectangle,
        rotation: int,
        plank: PlankSpec,
    ) -> bool:
        """Check a piece against a rectangle at one rotation.

        Includes kerf and safety margin, and the nose constraint for treads.
        """
        if not self._nose_allows(piece, rotation, plank):
            return False
        width, height = self._rotated_dimensions(piece, rotation)
        clearance = self.config.clearance
        return width + clearance <= rect.width and height + clearance <= rect.height

    def _nose_allows(self, piece: Piece, rotation: int, plank: PlankSpec) -> bool:
        """Check that a nosed tread keeps its nose on the plank's long edge.

        A nosed tread can only come from a nosed plank, and turning it a
        quarter would put the nose across the plank.
        """
        if piece.piece_type != PieceType.TREAD or not piece.requires_nose:
            return True
        if not plank.has_nosing:
            return False
        return rotation in (0, 180)

    def _rotated_dimensions(self, piece: Piece, rotation: int) -> tuple[float, float]:
        """Return (width, height) of a piece at a rotation."""
        if rotation in (90, 270):
            return piece.height, piece.width
        return piece.width, piece.height

    def _split(
        self,
        rect: FreeRectangle,
        occupied_width: float,
        occupied_height: float,
    ) -> list[FreeRectangle]:
        """Split a free rectangle around a piece placed at its origin.

        Produces at most two disjoint rectangles: a strip to the right of the
        piece and a strip below it. The full-length cut follows the shorter
        leftover side, so the larger leftover stays in one piece.
        """
        leftover_width = rect.width - occupied_width
        leftover_height = rect.height - occupied_height

        if leftover_width < leftover_height:
            # Horizontal cut across the full width under the piece
            right = FreeRectangle(
                rect.x + occupied_width, rect.y, leftover_width, occupied_height
            )
            below = FreeRectangle(
                rect.x, rect.y + occupied_height, rect.width, leftover_height
            )
        else:
            # Vertical cut along the full height beside the piece
            right = FreeRectangle(
                rect.x + occupied_width, rect.y, leftover_width, rect.height
            )
            below = FreeRectangle(
                rect.x, rect.y + occupied_height, occupied_width, leftover_height
            )

        return [r for r in (right, below) if r.width > 0 and r.height > 0]

    def _prune_contained(self, free: list[FreeRectangle]) -> list[FreeRectangle]:
        """Drop free rectangles wholly contained in another one."""
        kept: list[FreeRectangle] = []
        for index, rect in enumerate(free):
            contained = any(
                other.contains(rect) and (other != rect or other_index < index)
                for other_index, other in enumerate(free)
                if other_index != index
            )
            if not contained:
                kept.append(rect)
        return kept


def check_tread_fit(
    piece: Piece,
    plank: PlankSpec,
) -> tuple[bool, str | None]:
    """Check that a tread piece can come out of a tread plank at all.

    Ignores kerf and margin; this is a quick diagnostic for catalog
    problems, not a packing decision. Treads only turn end for end, so the
    piece width is always compared with the plank width.

    Returns:
        Tuple of (fits, reason); reason explains a failure.
    """
    if not plank.has_nosing:
        return False, "Plank does not have nosing for treads"

    effective_length = plank.nosed_length
    if piece.width > plank.width or piece.height > effective_length:
        return False, (
            f"Piece ({piece.width:g}x{piece.height:g}mm) too large for plank "
            f"({plank.width:g}x{effective_length:g}mm effective)"
        )
    return True, None

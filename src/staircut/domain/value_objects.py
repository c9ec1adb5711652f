"""Value objects for the staircase cutting domain.

Immutable records describing what is measured on site, what can be bought,
and how the saw is set up. All lengths are in millimetres and all prices in
euros.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal

DEFAULT_NOSING_DEPTH = 30.0
DEFAULT_TREAD_THICKNESS = 20.0
DEFAULT_RISER_THICKNESS = 18.0

VALID_ROTATIONS: frozenset[int] = frozenset({0, 90, 180, 270})


class PieceType(str, Enum):
    """Kind of piece cut for a step."""

    TREAD = "tread"
    RISER = "riser"


@dataclass(frozen=True)
class StepMeasurement:
    """Site measurements for a single step.

    Widths are taken at the nose (front) and against the wall (back); depths
    on the left, centre and right of the tread; the riser height is the
    vertical rise under the nose.

    Attributes:
        step_number: 1-based position of the step in the staircase.
        front_width: Width measured along the nose.
        back_width: Width measured at the back of the step.
        left_depth: Depth measured on the left side.
        center_depth: Depth measured at the centre.
        right_depth: Depth measured on the right side.
        riser_height: Height of the riser under this step.
    """

    step_number: int
    front_width: float
    back_width: float
    left_depth: float
    center_depth: float
    right_depth: float
    riser_height: float

    def __post_init__(self) -> None:
        if self.step_number < 1:
            raise ValueError("Step number must be at least 1")
        for name in (
            "front_width",
            "back_width",
            "left_depth",
            "center_depth",
            "right_depth",
            "riser_height",
        ):
            if getattr(self, name) <= 0:
                raise ValueError(f"Step {self.step_number}: {name} must be positive")

    @property
    def max_width(self) -> float:
        """Widest of the front and back widths."""
        return max(self.front_width, self.back_width)

    @property
    def max_depth(self) -> float:
        """Deepest of the three depth readings."""
        return max(self.left_depth, self.center_depth, self.right_depth)


@dataclass(frozen=True)
class PlankSpec:
    """A purchasable stock panel.

    Width runs along the x axis of a layout, length along the y axis. For
    tread planks the length is the depth direction and both long edges carry
    the nosing profile.

    Attributes:
        id: Catalog identifier, unique within its catalog.
        width: Panel width.
        length: Panel length.
        thickness: Panel thickness.
        price_per_plank: Purchase price of one panel.
        has_nosing: Whether the panel is profiled with a nose.
        nosing_depth: Depth of the nose profile, DEFAULT_NOSING_DEPTH if unset.
        stock_quantity: Panels available, None for unlimited.
        name: Display name.
        supplier: Optional supplier name.
    """

    id: str
    width: float
    length: float
    thickness: float
    price_per_plank: float
    has_nosing: bool = False
    nosing_depth: float | None = None
    stock_quantity: int | None = None
    name: str = ""
    supplier: str | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Plank id must not be empty")
        if self.width <= 0 or self.length <= 0:
            raise ValueError(f"Plank '{self.id}': dimensions must be positive")
        if self.thickness <= 0:
            raise ValueError(f"Plank '{self.id}': thickness must be positive")
        if self.price_per_plank < 0:
            raise ValueError(f"Plank '{self.id}': price must be non-negative")
        if self.nosing_depth is not None and self.nosing_depth < 0:
            raise ValueError(f"Plank '{self.id}': nosing depth must be non-negative")
        if self.stock_quantity is not None and self.stock_quantity < 0:
            raise ValueError(f"Plank '{self.id}': stock quantity must be non-negative")

    @property
    def display_name(self) -> str:
        """Name for reports, falling back to the id."""
        return self.name or self.id

    @property
    def area(self) -> float:
        """Gross panel area."""
        return self.width * self.length

    @property
    def effective_nosing_depth(self) -> float:
        """Nose depth used for deductions."""
        if self.nosing_depth is None:
            return DEFAULT_NOSING_DEPTH
        return self.nosing_depth

    @property
    def nosed_length(self) -> float:
        """Length left for tread pieces once both nosed edges are deducted."""
        return self.length - 2 * self.effective_nosing_depth

    @property
    def area_per_price(self) -> float:
        """Panel area bought per euro; free panels rank first."""
        if self.price_per_plank == 0:
            return float("inf")
        return self.area / self.price_per_plank


@dataclass(frozen=True)
class PlankInventory:
    """The two independent plank catalogs.

    Attributes:
        treads: Specs offered for tread pieces.
        risers: Specs offered for riser pieces.
    """

    treads: tuple[PlankSpec, ...] = ()
    risers: tuple[PlankSpec, ...] = ()

    def __post_init__(self) -> None:
        # Accept any iterable from callers but keep an immutable snapshot
        object.__setattr__(self, "treads", tuple(self.treads))
        object.__setattr__(self, "risers", tuple(self.risers))

    def catalog_for(self, piece_type: PieceType) -> tuple[PlankSpec, ...]:
        """Return the catalog that serves the given piece type."""
        if piece_type == PieceType.TREAD:
            return self.treads
        return self.risers


@dataclass(frozen=True)
class CuttingConstraints:
    """Saw and rotation settings for a run.

    Attributes:
        saw_blade_kerf: Material removed by one saw cut.
        safety_margin: Extra clearance kept around each piece.
        allow_tread_rotation: Allow treads to turn 180 degrees.
        allow_riser_rotation: Allow risers to turn 90 degrees.
    """

    saw_blade_kerf: float = 10.0
    safety_margin: float = 5.0
    allow_tread_rotation: bool = True
    allow_riser_rotation: bool = True

    def __post_init__(self) -> None:
        if self.saw_blade_kerf < 0:
            raise ValueError("Saw blade kerf must be non-negative")
        if self.safety_margin < 0:
            raise ValueError("Safety margin must be non-negative")

    @property
    def clearance(self) -> float:
        """Gap reserved on the trailing edges of every piece."""
        return self.saw_blade_kerf + self.safety_margin

    def rotations_for(self, piece_type: PieceType) -> tuple[int, ...]:
        """Rotations (degrees) a piece of this type may be placed at.

        Treads keep their nose on the plank's long edge, so they only turn
        end for end. Risers have no profile and may turn a quarter.
        """
        if piece_type == PieceType.TREAD:
            return (0, 180) if self.allow_tread_rotation else (0,)
        return (0, 90) if self.allow_riser_rotation else (0,)


@dataclass(frozen=True)
class Piece:
    """A rectangular piece to cut for one step.

    Attributes:
        id: Run-unique identifier such as "tread-3".
        step_number: Step the piece belongs to.
        width: Piece width (x axis at rotation 0).
        height: Piece height, the depth for treads.
        piece_type: Tread or riser.
        requires_nose: Whether the piece carries the plank's nose.
        nose_axis: Dimension the nose runs along, if any.
    """

    id: str
    step_number: int
    width: float
    height: float
    piece_type: PieceType
    requires_nose: bool = False
    nose_axis: Literal["width", "height"] | None = None
    area: float = field(init=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Piece '{self.id}': dimensions must be positive")
        object.__setattr__(self, "area", self.width * self.height)

"""Tests for plank bin packing data models and the guillotine BinPacker.

Tests cover:
- Data model validation and properties
- Placement at the tightest free rectangle
- Kerf and safety margin handling between pieces
- Rotation rules, including the nose constraint on treads
- Nosing deduction from usable tread plank length
- Plank caps, instance numbering and overflow to new planks
- Free rectangle splitting and pruning
"""

from __future__ import annotations

from itertools import combinations

import pytest

from staircut.domain.value_objects import (
    CuttingConstraints,
    Piece,
    PieceType,
    PlankSpec,
)
from staircut.infrastructure.bin_packing import (
    BinPacker,
    FreeRectangle,
    PackingConfig,
    PlacedPiece,
    PlankLayout,
    check_tread_fit,
)


# =============================================================================
# Fixtures
# =============================================================================


def _riser(piece_id: str, width: float = 900.0, height: float = 180.0) -> Piece:
    return Piece(piece_id, 1, width, height, PieceType.RISER)


def _tread(piece_id: str, width: float = 900.0, height: float = 250.0) -> Piece:
    return Piece(
        piece_id,
        1,
        width,
        height,
        PieceType.TREAD,
        requires_nose=True,
        nose_axis="width",
    )


def _plank(
    plank_id: str = "r",
    width: float = 1000.0,
    length: float = 1000.0,
    **overrides,
) -> PlankSpec:
    return PlankSpec(
        id=plank_id,
        width=width,
        length=length,
        thickness=18.0,
        price_per_plank=10.0,
        **overrides,
    )


@pytest.fixture
def riser_packer() -> BinPacker:
    """Packer for risers with quarter turns allowed."""
    return BinPacker(PackingConfig(allowed_rotations=(0, 90)))


@pytest.fixture
def fixed_packer() -> BinPacker:
    """Packer that never rotates pieces."""
    return BinPacker(PackingConfig(allowed_rotations=(0,)))


@pytest.fixture
def tread_packer() -> BinPacker:
    """Packer for nosed treads."""
    return BinPacker(PackingConfig(allowed_rotations=(0, 180), deduct_nosing=True))


def _occupied(placement: PlacedPiece, clearance: float) -> FreeRectangle:
    return FreeRectangle(
        placement.x,
        placement.y,
        placement.placed_width + clearance,
        placement.placed_height + clearance,
    )


def _overlaps(a: FreeRectangle, b: FreeRectangle) -> bool:
    return a.x < b.right and b.x < a.right and a.y < b.bottom and b.y < a.bottom


# =============================================================================
# Data model tests
# =============================================================================


class TestPackingConfig:
    """Tests for PackingConfig validation."""

    def test_defaults(self) -> None:
        config = PackingConfig()
        assert config.allowed_rotations == (0,)
        assert config.clearance == 15.0
        assert config.deduct_nosing is False

    def test_rejects_unknown_rotation(self) -> None:
        with pytest.raises(ValueError, match="Invalid rotations"):
            PackingConfig(allowed_rotations=(0, 45))

    def test_rejects_empty_rotations(self) -> None:
        with pytest.raises(ValueError, match="At least one rotation"):
            PackingConfig(allowed_rotations=())

    def test_rejects_negative_kerf(self) -> None:
        with pytest.raises(ValueError, match="kerf"):
            PackingConfig(saw_blade_kerf=-1)

    def test_usable_dimensions_deduct_nosing(self) -> None:
        plank = _plank(width=1000, length=1200, has_nosing=True, nosing_depth=25)
        assert PackingConfig(deduct_nosing=True).usable_dimensions(plank) == (
            1000,
            1150,
        )
        assert PackingConfig().usable_dimensions(plank) == (1000, 1200)

    def test_for_piece_type_with_defaults(self) -> None:
        constraints = CuttingConstraints(saw_blade_kerf=3, safety_margin=2)

        riser = PackingConfig.for_piece_type(constraints, PieceType.RISER)
        tread = PackingConfig.for_piece_type(constraints, PieceType.TREAD)

        assert riser.allowed_rotations == (0, 90)
        assert riser.deduct_nosing is False
        assert riser.clearance == 5
        assert tread.allowed_rotations == (0, 180)
        assert tread.deduct_nosing is True

    def test_for_piece_type_rotation_disabled(self) -> None:
        no_riser = CuttingConstraints(allow_riser_rotation=False)
        no_tread = CuttingConstraints(allow_tread_rotation=False)

        assert PackingConfig.for_piece_type(
            no_riser, PieceType.RISER
        ).allowed_rotations == (0,)
        assert PackingConfig.for_piece_type(
            no_riser, PieceType.TREAD
        ).allowed_rotations == (0, 180)
        assert PackingConfig.for_piece_type(
            no_tread, PieceType.TREAD
        ).allowed_rotations == (0,)
        assert PackingConfig.for_piece_type(
            no_tread, PieceType.RISER
        ).allowed_rotations == (0, 90)


class TestPlacedPiece:
    """Tests for PlacedPiece."""

    def test_quarter_turn_swaps_dimensions(self) -> None:
        placed = PlacedPiece(_riser("a", 900, 180), 0, 0, 90, "r-1")
        assert placed.placed_width == 180
        assert placed.placed_height == 900

    def test_half_turn_keeps_dimensions(self) -> None:
        placed = PlacedPiece(_tread("t", 900, 250), 0, 0, 180, "t-1")
        assert (placed.placed_width, placed.placed_height) == (900, 250)

    def test_negative_position_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            PlacedPiece(_riser("a"), -1, 0, 0, "r-1")

    def test_invalid_rotation_rejected(self) -> None:
        with pytest.raises(ValueError, match="Invalid rotation"):
            PlacedPiece(_riser("a"), 0, 0, 45, "r-1")


class TestPlankLayout:
    """Tests for PlankLayout derived values."""

    def test_area_accounting(self) -> None:
        plank = _plank()
        layout = PlankLayout(
            plank_spec=plank,
            plank_index=0,
            placements=(PlacedPiece(_riser("a"), 0, 0, 0, "r-1"),),
            total_area=1_000_000.0,
        )
        assert layout.used_area == 162_000.0
        assert layout.waste_area == 838_000.0
        assert layout.efficiency == pytest.approx(16.2)
        assert layout.piece_count == 1
        assert layout.instance_id == "r-1"

    def test_empty_area_has_zero_efficiency(self) -> None:
        layout = PlankLayout(_plank(), 0, (), 0.0)
        assert layout.efficiency == 0.0


# =============================================================================
# Placement tests
# =============================================================================


class TestBinPackerPlacement:
    """Tests for where pieces land."""

    def test_single_piece_at_origin(self, riser_packer: BinPacker) -> None:
        layouts = riser_packer.pack([_riser("a")], _plank())

        assert len(layouts) == 1
        (placement,) = layouts[0].placements
        assert (placement.x, placement.y, placement.rotation) == (0, 0, 0)
        assert placement.plank_id == "r-1"
        assert layouts[0].total_area == 1_000_000.0

    def test_largest_piece_placed_first(self, fixed_packer: BinPacker) -> None:
        small = _riser("small", 200, 100)
        big = _riser("big", 900, 180)

        (layout,) = fixed_packer.pack([small, big], _plank())

        assert layout.placements[0].piece.id == "big"
        assert (layout.placements[0].x, layout.placements[0].y) == (0, 0)

    def test_equal_areas_keep_input_order(self, fixed_packer: BinPacker) -> None:
        (layout,) = fixed_packer.pack([_riser("a"), _riser("b")], _plank())

        positions = {p.piece.id: (p.x, p.y) for p in layout.placements}
        assert positions == {"a": (0, 0), "b": (0, 195)}

    def test_quarter_turn_used_when_upright_does_not_fit(
        self, riser_packer: BinPacker
    ) -> None:
        plank = _plank(width=1000, length=400)
        (layout,) = riser_packer.pack([_riser("tall", 180, 900)], plank)

        (placement,) = layout.placements
        assert placement.rotation == 90
        assert placement.placed_width == 900

    def test_upright_only_packer_refuses_turnable_piece(
        self, fixed_packer: BinPacker
    ) -> None:
        plank = _plank(width=1000, length=400)
        tall = _riser("tall", 180, 900)

        assert fixed_packer.pack([tall], plank) == []
        assert fixed_packer.piece_fits(tall, plank) is False

    def test_kerf_and_margin_reserved(self, fixed_packer: BinPacker) -> None:
        exact = _riser("exact", 985, 100)
        too_wide = _riser("too-wide", 986, 100)

        assert fixed_packer.pack([exact], _plank())
        assert fixed_packer.pack([too_wide], _plank()) == []

    def test_placements_never_overlap(self, riser_packer: BinPacker) -> None:
        pieces = [_riser(f"p{i}", 300, 200) for i in range(12)]
        plank = _plank()

        layouts = riser_packer.pack(pieces, plank)

        assert sum(layout.piece_count for layout in layouts) == 12
        for layout in layouts:
            rects = [_occupied(p, 15.0) for p in layout.placements]
            for rect in rects:
                assert rect.x >= 0 and rect.y >= 0
                assert rect.right <= plank.width and rect.bottom <= plank.length
            for a, b in combinations(rects, 2):
                assert not _overlaps(a, b)

    def test_mixed_sizes_never_overlap(self, riser_packer: BinPacker) -> None:
        sizes = [
            (620, 340), (410, 150), (280, 280), (150, 90), (700, 120),
            (330, 510), (90, 60), (480, 210), (260, 130), (160, 400),
            (540, 75), (120, 120), (900, 180), (200, 640),
        ]
        pieces = [_riser(f"p{i}", w, h) for i, (w, h) in enumerate(sizes)]
        plank = _plank()

        layouts = riser_packer.pack(pieces, plank)

        placed = [p.piece.id for layout in layouts for p in layout.placements]
        assert sorted(placed) == sorted(p.id for p in pieces)
        for layout in layouts:
            rects = [_occupied(p, 15.0) for p in layout.placements]
            for rect in rects:
                assert rect.x >= 0 and rect.y >= 0
                assert rect.right <= plank.width and rect.bottom <= plank.length
            for a, b in combinations(rects, 2):
                assert not _overlaps(a, b)


class TestBinPackerOverflow:
    """Tests for multi-plank packing and caps."""

    def test_overflow_to_second_plank(self, riser_packer: BinPacker) -> None:
        pieces = [_riser(f"riser-{n}", 1150, 180) for n in (1, 2, 3)]
        plank = _plank(width=1360, length=400)

        layouts = riser_packer.pack(pieces, plank)

        assert [layout.piece_count for layout in layouts] == [2, 1]
        assert [layout.instance_id for layout in layouts] == ["r-1", "r-2"]
        first = layouts[0].placements
        assert [(p.x, p.y) for p in first] == [(0, 0), (0, 195)]

    def test_max_planks_caps_output(self, fixed_packer: BinPacker) -> None:
        pieces = [_riser(f"p{i}") for i in range(5)]
        plank = _plank(width=1000, length=400)

        layouts = fixed_packer.pack(pieces, plank, max_planks=2)

        assert len(layouts) == 2
        assert sum(layout.piece_count for layout in layouts) == 4

    def test_zero_max_planks(self, fixed_packer: BinPacker) -> None:
        assert fixed_packer.pack([_riser("a")], _plank(), max_planks=0) == []

    def test_start_index_numbers_instances(self, fixed_packer: BinPacker) -> None:
        (layout,) = fixed_packer.pack([_riser("a")], _plank(), start_index=3)

        assert layout.plank_index == 3
        assert layout.instance_id == "r-4"
        assert layout.placements[0].plank_id == "r-4"

    def test_oversized_piece_yields_no_layout(self, riser_packer: BinPacker) -> None:
        assert riser_packer.pack([_riser("huge", 2000, 180)], _plank()) == []

    def test_fitting_pieces_packed_around_oversized(
        self, riser_packer: BinPacker
    ) -> None:
        layouts = riser_packer.pack(
            [_riser("huge", 2000, 180), _riser("ok")], _plank()
        )

        placed = [p.piece.id for layout in layouts for p in layout.placements]
        assert placed == ["ok"]

    def test_empty_input(self, riser_packer: BinPacker) -> None:
        assert riser_packer.pack([], _plank()) == []


# =============================================================================
# Tread rules
# =============================================================================


class TestTreadPacking:
    """Tests for nose handling on treads."""

    def test_tread_needs_nosed_plank(self, tread_packer: BinPacker) -> None:
        assert tread_packer.pack([_tread("t")], _plank(length=1200)) == []

    def test_tread_fits_nosed_plank(self, tread_packer: BinPacker) -> None:
        plank = _plank(length=1200, has_nosing=True)
        (layout,) = tread_packer.pack([_tread("t")], plank)

        assert layout.total_area == 1000 * 1140
        assert layout.placements[0].rotation in (0, 180)

    def test_treads_stay_inside_nosed_area(self, tread_packer: BinPacker) -> None:
        sizes = [(900, 250), (820, 300), (950, 200), (600, 280), (700, 240), (400, 310)]
        treads = [_tread(f"t{i}", w, h) for i, (w, h) in enumerate(sizes)]
        plank = _plank(length=1200, has_nosing=True, nosing_depth=40)

        layouts = tread_packer.pack(treads, plank)

        assert sum(layout.piece_count for layout in layouts) == len(treads)
        for layout in layouts:
            assert layout.total_area == 1000 * 1120
            rects = [_occupied(p, 15.0) for p in layout.placements]
            for placement, rect in zip(layout.placements, rects):
                assert placement.rotation in (0, 180)
                assert rect.x >= 0 and rect.y >= 0
                assert rect.right <= plank.width
                assert rect.bottom <= plank.nosed_length
            for a, b in combinations(rects, 2):
                assert not _overlaps(a, b)

    def test_tread_never_quarter_turned(self) -> None:
        packer = BinPacker(PackingConfig(allowed_rotations=(0, 90), deduct_nosing=True))
        narrow = _plank(width=300, length=1200, has_nosing=True)

        assert packer.pack([_tread("t", 900, 250)], narrow) == []

    def test_nosing_reduces_usable_length(self, tread_packer: BinPacker) -> None:
        nosed = _plank(length=300, has_nosing=True, nosing_depth=30)
        flush = _plank(length=300, has_nosing=True, nosing_depth=0)

        assert tread_packer.pack([_tread("t", 900, 250)], nosed) == []
        assert tread_packer.pack([_tread("t", 900, 250)], flush)

    def test_nosing_longer_than_plank_gives_nothing(
        self, tread_packer: BinPacker
    ) -> None:
        plank = _plank(length=50, has_nosing=True)
        assert tread_packer.pack([_tread("t", 10, 10)], plank) == []
        assert tread_packer.piece_fits(_tread("t", 10, 10), plank) is False


class TestCheckTreadFit:
    """Tests for the check_tread_fit diagnostic."""

    def test_plank_without_nosing(self) -> None:
        fits, reason = check_tread_fit(_tread("t"), _plank())
        assert fits is False
        assert reason == "Plank does not have nosing for treads"

    def test_piece_too_large(self) -> None:
        plank = _plank(width=800, length=1200, has_nosing=True)
        fits, reason = check_tread_fit(_tread("t", 900, 250), plank)

        assert fits is False
        assert reason == "Piece (900x250mm) too large for plank (800x1140mm effective)"

    def test_piece_fits(self) -> None:
        plank = _plank(length=1200, has_nosing=True)
        assert check_tread_fit(_tread("t"), plank) == (True, None)


# =============================================================================
# Free rectangle bookkeeping
# =============================================================================


class TestFreeRectangles:
    """Tests for splitting and pruning free rectangles."""

    def test_split_short_width_leftover(self, fixed_packer: BinPacker) -> None:
        rect = FreeRectangle(0, 0, 1000, 1000)
        right, below = fixed_packer._split(rect, 915, 195)

        assert right == FreeRectangle(915, 0, 85, 195)
        assert below == FreeRectangle(0, 195, 1000, 805)

    def test_split_short_height_leftover(self, fixed_packer: BinPacker) -> None:
        rect = FreeRectangle(0, 0, 1000, 1000)
        right, below = fixed_packer._split(rect, 200, 900)

        assert right == FreeRectangle(200, 0, 800, 1000)
        assert below == FreeRectangle(0, 900, 200, 100)

    def test_split_exact_fit_leaves_nothing(self, fixed_packer: BinPacker) -> None:
        assert fixed_packer._split(FreeRectangle(0, 0, 100, 100), 100, 100) == []

    def test_prune_drops_contained(self, fixed_packer: BinPacker) -> None:
        outer = FreeRectangle(0, 0, 100, 100)
        inner = FreeRectangle(10, 10, 50, 50)
        assert fixed_packer._prune_contained([inner, outer]) == [outer]

    def test_prune_keeps_one_of_identical(self, fixed_packer: BinPacker) -> None:
        rect = FreeRectangle(0, 0, 100, 100)
        assert fixed_packer._prune_contained([rect, FreeRectangle(0, 0, 100, 100)]) == [
            rect
        ]

    def test_contains(self) -> None:
        outer = FreeRectangle(0, 0, 100, 100)
        assert outer.contains(FreeRectangle(0, 50, 100, 50))
        assert not outer.contains(FreeRectangle(50, 50, 60, 10))

"""Derive rectangular cut pieces from step measurements."""

from __future__ import annotations

from typing import Sequence

from staircut.domain.value_objects import PieceType, Piece, StepMeasurement


def calculate_step_dimensions(measurement: StepMeasurement) -> tuple[float, float]:
    """Return the (max_width, max_depth) envelope of a step."""
    return measurement.max_width, measurement.max_depth


def create_tread_pieces(measurements: Sequence[StepMeasurement]) -> list[Piece]:
    """Create one tread piece per step.

    Steps are rarely square, so each tread is sized to the largest width
    and the largest depth measured. The nose runs along the width.
    """
    pieces: list[Piece] = []
    for measurement in measurements:
        max_width, max_depth = calculate_step_dimensions(measurement)
        pieces.append(
            Piece(
                id=f"tread-{measurement.step_number}",
                step_number=measurement.step_number,
                width=max_width,
                height=max_depth,
                piece_type=PieceType.TREAD,
                requires_nose=True,
                nose_axis="width",
            )
        )
    return pieces


def create_riser_pieces(measurements: Sequence[StepMeasurement]) -> list[Piece]:
    """Create one riser piece per step, sized front width by riser height."""
    return [
        Piece(
            id=f"riser-{measurement.step_number}",
            step_number=measurement.step_number,
            width=measurement.front_width,
            height=measurement.riser_height,
            piece_type=PieceType.RISER,
        )
        for measurement in measurements
    ]


def create_pieces(
    piece_type: PieceType,
    measurements: Sequence[StepMeasurement],
) -> list[Piece]:
    """Create the pieces of one type for a staircase."""
    if piece_type == PieceType.TREAD:
        return create_tread_pieces(measurements)
    return create_riser_pieces(measurements)

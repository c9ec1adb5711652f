"""Catalog restriction per piece type.

Decides which plank specs may serve a piece type before any packing starts.
"""

from __future__ import annotations

import logging
from typing import Sequence

from .value_objects import PieceType, PlankSpec

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Raised when no valid plank spec exists for a required piece type."""

    def __init__(self, message: str, piece_type: PieceType) -> None:
        self.message = message
        self.piece_type = piece_type
        super().__init__(message)


def tread_candidates(specs: Sequence[PlankSpec]) -> list[PlankSpec]:
    """Return the tread specs that can carry a nosed tread.

    Only profiled planks qualify, and the length left after deducting the
    nose on both long edges must stay positive.
    """
    candidates: list[PlankSpec] = []
    for spec in specs:
        if not spec.has_nosing:
            logger.debug("Tread spec '%s' skipped: no nosing", spec.id)
            continue
        if spec.nosed_length <= 0:
            logger.debug(
                "Tread spec '%s' skipped: nosing %.1f leaves no usable length",
                spec.id,
                spec.effective_nosing_depth,
            )
            continue
        if spec.stock_quantity == 0:
            logger.debug("Tread spec '%s' skipped: out of stock", spec.id)
            continue
        candidates.append(spec)
    return candidates


def riser_candidates(specs: Sequence[PlankSpec]) -> list[PlankSpec]:
    """Return the riser specs with stock available."""
    candidates: list[PlankSpec] = []
    for spec in specs:
        if spec.stock_quantity == 0:
            logger.debug("Riser spec '%s' skipped: out of stock", spec.id)
            continue
        candidates.append(spec)
    return candidates


def require_candidates(
    piece_type: PieceType,
    specs: Sequence[PlankSpec],
) -> list[PlankSpec]:
    """Restrict a catalog to a piece type, failing if nothing is left.

    Raises:
        ConfigurationError: If no spec in the catalog can serve the type.
    """
    if piece_type == PieceType.TREAD:
        candidates = tread_candidates(specs)
        if not candidates:
            raise ConfigurationError(
                "No planks with nosing available for treads",
                piece_type,
            )
    else:
        candidates = riser_candidates(specs)
        if not candidates:
            raise ConfigurationError(
                "No planks available for risers",
                piece_type,
            )
    return candidates

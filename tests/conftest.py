"""Pytest configuration and shared fixtures for staircase cutting tests."""

from __future__ import annotations

import pytest

from staircut.domain import (
    CuttingConstraints,
    PlankInventory,
    PlankSpec,
    StepMeasurement,
)


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Shared builders
# =============================================================================


def _make_step(
    step_number: int,
    width: float = 900.0,
    depth: float = 250.0,
    riser_height: float = 180.0,
) -> StepMeasurement:
    """Create a square step with equal widths and depths."""
    return StepMeasurement(
        step_number=step_number,
        front_width=width,
        back_width=width,
        left_depth=depth,
        center_depth=depth,
        right_depth=depth,
        riser_height=riser_height,
    )


# =============================================================================
# Shared fixtures
# =============================================================================


@pytest.fixture
def constraints() -> CuttingConstraints:
    """Default saw settings: 10mm kerf, 5mm margin, rotations allowed."""
    return CuttingConstraints()


@pytest.fixture
def oak_tread() -> PlankSpec:
    """A nosed oak tread plank, 1000 x 1200mm with 30mm nosing."""
    return PlankSpec(
        id="oak-tread",
        name="Oak tread 1000x1200",
        width=1000.0,
        length=1200.0,
        thickness=40.0,
        price_per_plank=120.0,
        has_nosing=True,
        nosing_depth=30.0,
    )


@pytest.fixture
def pine_riser() -> PlankSpec:
    """A plain pine riser plank, 1000 x 1000mm."""
    return PlankSpec(
        id="pine-riser",
        name="Pine riser 1000x1000",
        width=1000.0,
        length=1000.0,
        thickness=18.0,
        price_per_plank=25.0,
    )


@pytest.fixture
def inventory(oak_tread: PlankSpec, pine_riser: PlankSpec) -> PlankInventory:
    """Inventory with one tread and one riser spec."""
    return PlankInventory(treads=(oak_tread,), risers=(pine_riser,))


@pytest.fixture
def three_steps() -> list[StepMeasurement]:
    """Three identical 900 x 250mm steps with 180mm risers."""
    return [_make_step(n) for n in (1, 2, 3)]

"""Conversion from configuration schemas to domain value objects."""

from __future__ import annotations

from staircut.application.config.schema import (
    CuttingConstraintsConfig,
    PlankSpecConfig,
    ProjectConfiguration,
)
from staircut.domain.value_objects import (
    CuttingConstraints,
    PlankInventory,
    PlankSpec,
    StepMeasurement,
)


def config_to_measurements(config: ProjectConfiguration) -> list[StepMeasurement]:
    """Convert configured steps to StepMeasurement records, in file order."""
    return [
        StepMeasurement(
            step_number=m.step_number,
            front_width=m.front_width,
            back_width=m.back_width,
            left_depth=m.left_depth,
            center_depth=m.center_depth,
            right_depth=m.right_depth,
            riser_height=m.riser_height,
        )
        for m in config.measurements
    ]


def _spec_from_config(spec: PlankSpecConfig) -> PlankSpec:
    return PlankSpec(
        id=spec.id,
        name=spec.name,
        width=spec.width,
        length=spec.length,
        thickness=spec.thickness,
        price_per_plank=spec.price_per_plank,
        has_nosing=spec.has_nosing,
        nosing_depth=spec.nosing_depth,
        stock_quantity=spec.stock_quantity,
        supplier=spec.supplier,
    )


def config_to_inventory(config: ProjectConfiguration) -> PlankInventory:
    """Snapshot the configured catalogs as an immutable PlankInventory."""
    return PlankInventory(
        treads=tuple(_spec_from_config(s) for s in config.inventory.treads),
        risers=tuple(_spec_from_config(s) for s in config.inventory.risers),
    )


def config_to_constraints(
    config: ProjectConfiguration | CuttingConstraintsConfig,
) -> CuttingConstraints:
    """Convert configured saw settings to CuttingConstraints."""
    constraints = (
        config.constraints if isinstance(config, ProjectConfiguration) else config
    )
    return CuttingConstraints(
        saw_blade_kerf=constraints.saw_blade_kerf,
        safety_margin=constraints.safety_margin,
        allow_tread_rotation=constraints.allow_tread_rotation,
        allow_riser_rotation=constraints.allow_riser_rotation,
    )


def merge_constraints_with_cli(
    constraints: CuttingConstraints,
    kerf: float | None = None,
    margin: float | None = None,
    no_tread_rotation: bool = False,
    no_riser_rotation: bool = False,
) -> CuttingConstraints:
    """Apply command-line overrides on top of configured constraints.

    Options left at their defaults keep the configured value.
    """
    return CuttingConstraints(
        saw_blade_kerf=kerf if kerf is not None else constraints.saw_blade_kerf,
        safety_margin=margin if margin is not None else constraints.safety_margin,
        allow_tread_rotation=constraints.allow_tread_rotation and not no_tread_rotation,
        allow_riser_rotation=constraints.allow_riser_rotation and not no_riser_rotation,
    )

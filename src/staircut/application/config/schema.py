"""Pydantic models for staircase project configuration files.

A configuration document holds everything one optimization run needs: the
step measurements, the two plank catalogs and the saw settings. All
lengths are in millimetres and prices in euros.
"""

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

# Supported schema versions for configuration files
# Version 1.0: Measurements, tread/riser catalogs and cutting constraints
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})


class StepMeasurementConfig(BaseModel):
    """Measurements of one step.

    Attributes:
        step_number: 1-based position of the step.
        front_width: Width along the nose.
        back_width: Width at the back of the step.
        left_depth: Depth on the left side.
        center_depth: Depth at the centre.
        right_depth: Depth on the right side.
        riser_height: Height of the riser.
    """

    model_config = ConfigDict(extra="forbid")

    step_number: int = Field(..., ge=1, description="1-based step position")
    front_width: float = Field(..., gt=0, description="Width along the nose in mm")
    back_width: float = Field(..., gt=0, description="Width at the back in mm")
    left_depth: float = Field(..., gt=0, description="Left depth in mm")
    center_depth: float = Field(..., gt=0, description="Centre depth in mm")
    right_depth: float = Field(..., gt=0, description="Right depth in mm")
    riser_height: float = Field(..., gt=0, description="Riser height in mm")


class PlankSpecConfig(BaseModel):
    """A purchasable plank.

    Attributes:
        id: Catalog identifier, unique within its catalog.
        name: Display name.
        width: Plank width in mm.
        length: Plank length in mm (the depth direction for tread planks).
        thickness: Plank thickness in mm.
        price_per_plank: Price of one plank.
        has_nosing: Whether the plank is profiled with a nose.
        nosing_depth: Nose depth in mm (30mm assumed when omitted).
        stock_quantity: Planks available; omit for unlimited.
        supplier: Optional supplier name.
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1, description="Catalog identifier")
    name: str = Field(default="", description="Display name")
    width: float = Field(..., gt=0, description="Plank width in mm")
    length: float = Field(..., gt=0, description="Plank length in mm")
    thickness: float = Field(..., gt=0, description="Plank thickness in mm")
    price_per_plank: float = Field(..., ge=0, description="Price per plank in euros")
    has_nosing: bool = False
    nosing_depth: float | None = Field(
        default=None, ge=0, description="Nose depth in mm"
    )
    stock_quantity: int | None = Field(
        default=None, ge=0, description="Planks in stock, None for unlimited"
    )
    supplier: str | None = None


class InventoryConfig(BaseModel):
    """The tread and riser plank catalogs."""

    model_config = ConfigDict(extra="forbid")

    treads: list[PlankSpecConfig] = Field(default_factory=list)
    risers: list[PlankSpecConfig] = Field(default_factory=list)

    @field_validator("treads", "risers")
    @classmethod
    def validate_unique_ids(cls, v: list[PlankSpecConfig]) -> list[PlankSpecConfig]:
        """Reject duplicate plank ids within a catalog."""
        seen: set[str] = set()
        for spec in v:
            if spec.id in seen:
                raise ValueError(f"Duplicate plank id '{spec.id}'")
            seen.add(spec.id)
        return v


class CuttingConstraintsConfig(BaseModel):
    """Saw settings and rotation permissions.

    Attributes:
        saw_blade_kerf: Saw blade kerf in mm.
        safety_margin: Extra clearance per piece in mm.
        allow_tread_rotation: Allow treads to turn 180 degrees.
        allow_riser_rotation: Allow risers to turn 90 degrees.
    """

    model_config = ConfigDict(extra="forbid")

    saw_blade_kerf: float = Field(default=10.0, ge=0, description="Kerf in mm")
    safety_margin: float = Field(default=5.0, ge=0, description="Margin in mm")
    allow_tread_rotation: bool = True
    allow_riser_rotation: bool = True


class ProjectConfiguration(BaseModel):
    """Root configuration for a staircase optimization run.

    Attributes:
        schema_version: Version of the configuration format.
        name: Optional project name.
        measurements: One entry per step.
        inventory: Tread and riser catalogs.
        constraints: Saw and rotation settings.
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(default="1.0", description="Configuration format version")
    name: str | None = None
    measurements: list[StepMeasurementConfig] = Field(default_factory=list)
    inventory: InventoryConfig = Field(default_factory=InventoryConfig)
    constraints: CuttingConstraintsConfig = Field(
        default_factory=CuttingConstraintsConfig
    )

    @field_validator("schema_version")
    @classmethod
    def validate_schema_version(cls, v: str) -> str:
        if v not in SUPPORTED_VERSIONS:
            supported = ", ".join(sorted(SUPPORTED_VERSIONS))
            raise ValueError(
                f"Unsupported schema version '{v}'. Supported versions: {supported}"
            )
        return v

    @model_validator(mode="after")
    def validate_unique_steps(self) -> "ProjectConfiguration":
        """Reject measurements that repeat a step number."""
        seen: set[int] = set()
        for measurement in self.measurements:
            if measurement.step_number in seen:
                raise ValueError(
                    f"Duplicate step number {measurement.step_number} in measurements"
                )
            seen.add(measurement.step_number)
        return self

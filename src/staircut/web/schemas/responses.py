"""Pydantic response schemas for the REST API."""

from pydantic import BaseModel, Field


class PieceSchema(BaseModel):
    """A tread or riser piece."""

    id: str = Field(..., description="Piece identifier, e.g. tread-3")
    step_number: int = Field(..., description="Step the piece belongs to")
    width: float = Field(..., description="Width in mm")
    height: float = Field(..., description="Height (depth for treads) in mm")
    piece_type: str = Field(..., description="tread or riser")
    requires_nose: bool = Field(default=False, description="Carries the nose")
    area: float = Field(..., description="Area in mm2")


class PlacementSchema(BaseModel):
    """A piece placed on a plank instance."""

    piece: PieceSchema
    x: float = Field(..., description="Left edge in mm from the usable origin")
    y: float = Field(..., description="Top edge in mm from the usable origin")
    rotation: int = Field(..., description="Rotation in degrees")
    plank_id: str = Field(..., description="Plank instance identifier")


class PlankLayoutSchema(BaseModel):
    """Layout of one plank bought."""

    plank_id: str = Field(..., description="Catalog spec identifier")
    plank_name: str = Field(..., description="Display name of the spec")
    instance_id: str = Field(..., description="Instance identifier, e.g. oak-2")
    plank_index: int = Field(..., description="Zero-based ordinal within the spec")
    price: float = Field(..., description="Price of the plank")
    total_area: float = Field(..., description="Usable area in mm2")
    used_area: float = Field(..., description="Area covered by pieces in mm2")
    waste_area: float = Field(..., description="Unused area in mm2")
    efficiency: float = Field(..., description="Used share of the area, percent")
    placements: list[PlacementSchema] = Field(default_factory=list)


class TypeStatsSchema(BaseModel):
    """Plank summary for one piece type."""

    planks: int = 0
    cost: float = 0.0
    efficiency: float = 0.0


class OptimizationResultSchema(BaseModel):
    """Response for staircase optimization."""

    tread_layouts: list[PlankLayoutSchema] = Field(default_factory=list)
    riser_layouts: list[PlankLayoutSchema] = Field(default_factory=list)
    planks_used: dict[str, dict[str, int]] = Field(
        default_factory=dict, description="Plank counts per spec, by piece type"
    )
    total_planks: int = Field(..., description="Number of planks to buy")
    total_cost: float = Field(..., description="Price of all planks")
    total_waste: float = Field(..., description="Unused area in mm2")
    total_area: float = Field(..., description="Usable area in mm2")
    overall_efficiency: float = Field(..., description="Used share, percent")
    all_pieces_fit: bool = Field(..., description="Whether every piece was placed")
    unfit_pieces: list[PieceSchema] = Field(default_factory=list)
    tread_stats: TypeStatsSchema = Field(default_factory=TypeStatsSchema)
    riser_stats: TypeStatsSchema = Field(default_factory=TypeStatsSchema)
    optimized_at: str = Field(..., description="ISO timestamp of the run (UTC)")


class ErrorResponseSchema(BaseModel):
    """Error response."""

    error: str = Field(..., description="Error message")
    error_type: str = Field(..., description="Error category")
    details: list[dict] | None = Field(default=None, description="Error details")

"""Staircase optimization endpoint."""

from fastapi import APIRouter

from staircut.application import optimize
from staircut.application.config import (
    config_to_constraints,
    config_to_inventory,
    config_to_measurements,
    load_config_from_dict,
)
from staircut.infrastructure import JsonExporter
from staircut.web.schemas.requests import OptimizeRequest
from staircut.web.schemas.responses import OptimizationResultSchema

router = APIRouter(prefix="/optimize", tags=["optimize"])


@router.post("", response_model=OptimizationResultSchema)
async def optimize_project(request: OptimizeRequest) -> OptimizationResultSchema:
    """Plan the cheapest plank purchase for a project document.

    Pieces that cannot be placed do not fail the request; they are listed
    in unfit_pieces and all_pieces_fit is false.

    Raises:
        ConfigError: If the document fails validation (422).
        ConfigurationError: If a catalog cannot serve its pieces (422).
    """
    config = load_config_from_dict(request.config)
    result = optimize(
        config_to_measurements(config),
        config_to_inventory(config),
        config_to_constraints(config),
    )
    return OptimizationResultSchema.model_validate(JsonExporter().to_dict(result))

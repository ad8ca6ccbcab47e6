"""FastAPI route definitions."""

from __future__ import annotations

from fastapi import APIRouter

from envelope.models import ConstructionModel
from envelope.services.construction_service import ConstructionService
from envelope.api.schemas import (
    AssemblyInfo, ConstructPerimeterRequest, ConstructResponse,
)

router = APIRouter()

# Shared service instance
_service = ConstructionService()


def _response(model: ConstructionModel, wall_count: int) -> ConstructResponse:
    return ConstructResponse(
        model=model,
        wall_count=wall_count,
        error_count=len(model.errors),
        warning_count=len(model.warnings),
        volumes=_service.material_volumes(model),
    )


@router.post("/perimeter/construct", response_model=ConstructResponse)
async def construct_perimeter(request: ConstructPerimeterRequest) -> ConstructResponse:
    """Construct ring beams and all walls of a perimeter."""
    model = _service.construct_perimeter(request.perimeter, request.storey, request.catalog)
    return _response(model, len(request.perimeter.walls))


@router.post("/perimeter/walls/{index}/construct", response_model=ConstructResponse)
async def construct_wall(index: int, request: ConstructPerimeterRequest) -> ConstructResponse:
    """Construct a single wall in its local frame."""
    model = _service.construct_wall(request.perimeter, index, request.storey, request.catalog)
    return _response(model, 1)


@router.get("/assemblies", response_model=list[AssemblyInfo])
async def list_assemblies() -> list[AssemblyInfo]:
    """List all registered wall and ring beam assembly variants."""
    return [AssemblyInfo(**a) for a in _service.list_assemblies()]


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}

"""API request/response schemas."""

from __future__ import annotations
from pydantic import BaseModel

from envelope.models import (
    AssemblyCatalog, ConstructionModel, PerimeterDefinition, StoreyContext,
)


class ConstructPerimeterRequest(BaseModel):
    """Request body for the construct endpoints. Omit `catalog` for the defaults."""
    perimeter: PerimeterDefinition
    storey: StoreyContext
    catalog: AssemblyCatalog | None = None


class ConstructResponse(BaseModel):
    """Response from the construct endpoints."""
    model: ConstructionModel
    wall_count: int
    error_count: int
    warning_count: int
    volumes: dict[str, float] = {}


class AssemblyInfo(BaseModel):
    id: str
    name: str
    kind: str

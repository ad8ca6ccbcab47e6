"""Shared fixtures for construction tests."""
import pytest

from envelope.models import (
    Opening, OpeningType, PerimeterContext, PerimeterDefinition, StoreyContext,
    Vec2, WallContext, WallDefinition,
)
from envelope.models.defaults import DEFAULT_RING_BEAM, DEFAULT_WALL_ASSEMBLY, default_catalog
from envelope.core.corners import calculate_wall_corner_info
from envelope.core.registry import create_default_registry
from envelope.core.resolver import PerimeterGeometryResolver


WALL_THICKNESS = 420.0


def rectangle_definition(
    width: float = 6000.0,
    depth: float = 4000.0,
    thickness: float = WALL_THICKNESS,
    assembly=DEFAULT_WALL_ASSEMBLY,
    ring_beams: bool = True,
    openings: dict[int, list[Opening]] | None = None,
) -> PerimeterDefinition:
    """Clockwise rectangle; wall 0 runs up the west side, wall 1 along the north."""
    openings = openings or {}
    boundary = [
        Vec2(x=0, y=0),
        Vec2(x=0, y=depth),
        Vec2(x=width, y=depth),
        Vec2(x=width, y=0),
    ]
    return PerimeterDefinition(
        boundary=boundary,
        walls=[
            WallDefinition(thickness=thickness, wall_assembly_id=assembly, openings=openings.get(i, []))
            for i in range(4)
        ],
        base_ring_beam_assembly_id=DEFAULT_RING_BEAM if ring_beams else None,
        top_ring_beam_assembly_id=DEFAULT_RING_BEAM if ring_beams else None,
    )


def door(offset: float = 1000.0, width: float = 900.0, height: float = 2100.0) -> Opening:
    return Opening(type=OpeningType.DOOR, offset=offset, width=width, height=height)


def window(offset: float, width: float = 1000.0, height: float = 1200.0, sill: float = 900.0) -> Opening:
    return Opening(type=OpeningType.WINDOW, offset=offset, width=width, height=height, sill_height=sill)


@pytest.fixture
def catalog():
    return default_catalog()


@pytest.fixture
def registry():
    return create_default_registry()


@pytest.fixture
def storey():
    return StoreyContext(height=2500)


@pytest.fixture
def rectangle():
    return rectangle_definition()


@pytest.fixture
def perimeter(rectangle):
    return PerimeterGeometryResolver().resolve(rectangle)


@pytest.fixture
def perimeter_context(perimeter, storey, catalog):
    return PerimeterContext(perimeter=perimeter, storey=storey, catalog=catalog)


def wall_context(perimeter_context: PerimeterContext, index: int) -> WallContext:
    return WallContext(
        perimeter_context=perimeter_context,
        index=index,
        corners=calculate_wall_corner_info(perimeter_context.perimeter, index),
    )

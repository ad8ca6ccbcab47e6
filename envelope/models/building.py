"""Building element models: perimeters, walls, corners, openings, roofs."""

from __future__ import annotations
import math
from enum import Enum

from pydantic import BaseModel, Field, model_validator

from .geometry import LineSegment2D, Polygon2D, Vec2
from .ids import (
    CornerId, OpeningAssemblyId, OpeningId, PerimeterId, RingBeamAssemblyId,
    WallAssemblyId, WallId, create_corner_id, create_opening_id,
    create_perimeter_id, create_wall_id,
)


COLINEAR_TOLERANCE = 1e-6


class OpeningType(str, Enum):
    DOOR = "door"
    WINDOW = "window"
    PASSAGE = "passage"


class CornerOwner(str, Enum):
    """Which of the two walls meeting at a corner constructs it."""
    PREVIOUS = "previous"
    NEXT = "next"


class Opening(BaseModel):
    """An opening (door/window/passage) positioned along a wall's inside line."""
    id: OpeningId = Field(default_factory=create_opening_id)
    type: OpeningType = OpeningType.WINDOW
    offset: float = Field(ge=0)        # Distance from wall start to opening start
    width: float = Field(gt=0)
    height: float = Field(gt=0)
    sill_height: float | None = Field(default=None, ge=0)
    opening_assembly_id: OpeningAssemblyId | None = None

    @property
    def end(self) -> float:
        return self.offset + self.width

    @property
    def sill(self) -> float:
        return self.sill_height or 0.0

    @property
    def header_height(self) -> float:
        return self.sill + self.height


class WallDefinition(BaseModel):
    """Editable wall data as stored by the floor-plan layer."""
    id: WallId = Field(default_factory=create_wall_id)
    thickness: float = Field(gt=0)
    wall_assembly_id: WallAssemblyId
    openings: list[Opening] = []


class PerimeterDefinition(BaseModel):
    """Inside boundary (clockwise) plus per-wall data; walls[i] runs boundary[i] -> boundary[i+1]."""
    id: PerimeterId = Field(default_factory=create_perimeter_id)
    boundary: list[Vec2]
    walls: list[WallDefinition]
    corner_owners: list[CornerOwner | None] | None = None
    base_ring_beam_assembly_id: RingBeamAssemblyId | None = None
    top_ring_beam_assembly_id: RingBeamAssemblyId | None = None


class PerimeterWall(BaseModel):
    """A wall of a perimeter with its derived geometry (always recomputed)."""
    id: WallId
    thickness: float = Field(gt=0)
    wall_assembly_id: WallAssemblyId
    openings: list[Opening] = []

    inside_line: LineSegment2D
    outside_line: LineSegment2D
    direction: Vec2
    outside_direction: Vec2
    inside_length: float
    outside_length: float

    @model_validator(mode="after")
    def _sort_openings(self) -> PerimeterWall:
        self.openings = sorted(self.openings, key=lambda o: o.offset)
        return self


class PerimeterCorner(BaseModel):
    """Corner at a boundary point; interior angle measured inside the building."""
    id: CornerId = Field(default_factory=create_corner_id)
    inside_point: Vec2
    outside_point: Vec2
    belongs_to: CornerOwner = CornerOwner.NEXT
    interior_angle: float
    exterior_angle: float

    @property
    def is_convex(self) -> bool:
        return self.interior_angle < math.pi - COLINEAR_TOLERANCE

    @property
    def is_colinear(self) -> bool:
        return abs(self.interior_angle - math.pi) <= COLINEAR_TOLERANCE


class Perimeter(BaseModel):
    """One storey's closed wall loop; walls[i] runs corners[i] -> corners[i+1]."""
    id: PerimeterId
    corners: list[PerimeterCorner]
    walls: list[PerimeterWall]
    base_ring_beam_assembly_id: RingBeamAssemblyId | None = None
    top_ring_beam_assembly_id: RingBeamAssemblyId | None = None

    @model_validator(mode="after")
    def _check_pairing(self) -> Perimeter:
        if len(self.corners) != len(self.walls):
            raise ValueError("perimeter needs exactly one corner per wall")
        if len(self.walls) < 3:
            raise ValueError("perimeter needs at least 3 walls")
        return self

    def previous_index(self, index: int) -> int:
        return (index - 1) % len(self.walls)

    def next_index(self, index: int) -> int:
        return (index + 1) % len(self.walls)

    def start_corner(self, index: int) -> PerimeterCorner:
        return self.corners[index]

    def end_corner(self, index: int) -> PerimeterCorner:
        return self.corners[self.next_index(index)]


class RoofType(str, Enum):
    SHED = "shed"
    GABLE = "gable"


class Roof(BaseModel):
    """
    Planar roof described by its ridge.

    `ridge_height` is the elevation of the roof top at the ridge line; the
    underside sits `thickness / cos(slope)` lower. Gable roofs fall on both
    sides of the ridge; shed roofs fall towards the left of the ridge
    direction and stay at ridge height on the other side. The roof covers its
    outline grown by the overhang.
    """
    type: RoofType = RoofType.GABLE
    ridge_line: LineSegment2D
    slope: float = Field(ge=0, lt=90)     # Degrees
    ridge_height: float = Field(gt=0)
    thickness: float = Field(gt=0)
    overhang: float = Field(default=0.0, ge=0)
    outline: Polygon2D

    @property
    def slope_radians(self) -> float:
        return math.radians(self.slope)


class StoreyContext(BaseModel):
    """Vertical context a perimeter is constructed in."""
    height: float = Field(gt=0)
    roof: Roof | None = None

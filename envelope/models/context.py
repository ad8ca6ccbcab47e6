"""Construction context: everything one wall or perimeter construction reads."""

from __future__ import annotations
from pydantic import BaseModel

from .assemblies import AssemblyCatalog
from .building import Perimeter, PerimeterCorner, PerimeterWall, StoreyContext
from .ids import CornerId


class CornerConstructionInfo(BaseModel):
    id: CornerId
    constructed_by_this_wall: bool
    # Signed distance along the wall from its outside line end to the corner's
    # outside point; positive at convex corners, negative at reflex ones.
    corner_extension: float
    # What this wall actually adds at this end (0 when the neighbour owns it)
    extension: float


class WallCornerInfo(BaseModel):
    start: CornerConstructionInfo
    end: CornerConstructionInfo

    @property
    def extension_start(self) -> float:
        return self.start.extension

    @property
    def extension_end(self) -> float:
        return self.end.extension


class PerimeterContext(BaseModel):
    """
    Holds all input for a single perimeter construction pass.

    The resolver produces the perimeter; ring-beam heights are looked up once
    so every wall can size its construction area between them.
    """
    perimeter: Perimeter
    storey: StoreyContext
    catalog: AssemblyCatalog

    base_plate_height: float = 0.0
    top_plate_height: float = 0.0

    @property
    def wall_bottom(self) -> float:
        return self.base_plate_height

    @property
    def wall_top(self) -> float:
        return self.storey.height - self.top_plate_height

    def wall(self, index: int) -> PerimeterWall:
        return self.perimeter.walls[index]

    def previous_wall(self, index: int) -> PerimeterWall:
        return self.perimeter.walls[self.perimeter.previous_index(index)]

    def next_wall(self, index: int) -> PerimeterWall:
        return self.perimeter.walls[self.perimeter.next_index(index)]

    def start_corner(self, index: int) -> PerimeterCorner:
        return self.perimeter.start_corner(index)

    def end_corner(self, index: int) -> PerimeterCorner:
        return self.perimeter.end_corner(index)


class WallContext(BaseModel):
    """Per-wall view of a perimeter context."""
    perimeter_context: PerimeterContext
    index: int
    corners: WallCornerInfo

    @property
    def wall(self) -> PerimeterWall:
        return self.perimeter_context.wall(self.index)

    @property
    def catalog(self) -> AssemblyCatalog:
        return self.perimeter_context.catalog

    @property
    def bottom(self) -> float:
        return self.perimeter_context.wall_bottom

    @property
    def top(self) -> float:
        return self.perimeter_context.wall_top

    @property
    def construction_start(self) -> float:
        """Wall-local x where the core construction begins (<= 0 when extended)."""
        return -self.corners.extension_start

    @property
    def construction_length(self) -> float:
        return self.wall.inside_length + self.corners.extension_start + self.corners.extension_end

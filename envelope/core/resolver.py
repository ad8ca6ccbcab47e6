"""Perimeter geometry: wall lines, outside corners, corner ownership."""

from __future__ import annotations
import logging
import math

from shapely.geometry import Polygon

from envelope.models import (
    ConstructionValidationError, CornerOwner, GeometryError, LineSegment2D,
    Perimeter, PerimeterCorner, PerimeterDefinition, PerimeterWall, Vec2,
)
from envelope.core.geometry import line_intersection, offset_segment

logger = logging.getLogger(__name__)

MIN_WALL_LENGTH = 1e-3  # mm


class PerimeterGeometryResolver:
    """Turns a clockwise inside boundary plus wall thicknesses into a Perimeter."""

    def resolve(self, definition: PerimeterDefinition) -> Perimeter:
        self._validate_boundary(definition)
        walls = self._resolve_walls(definition)
        corners = self._resolve_corners(definition, walls)
        logger.debug("Resolved perimeter %s: %d walls", definition.id, len(walls))
        return Perimeter(
            id=definition.id,
            corners=corners,
            walls=walls,
            base_ring_beam_assembly_id=definition.base_ring_beam_assembly_id,
            top_ring_beam_assembly_id=definition.top_ring_beam_assembly_id,
        )

    def _validate_boundary(self, definition: PerimeterDefinition) -> None:
        points = definition.boundary
        if len(points) < 3:
            raise ConstructionValidationError(
                f"Perimeter needs at least 3 boundary points, got {len(points)}"
            )
        if len(definition.walls) != len(points):
            raise ConstructionValidationError(
                f"Perimeter has {len(points)} boundary points but {len(definition.walls)} walls"
            )
        if definition.corner_owners is not None and len(definition.corner_owners) != len(points):
            raise ConstructionValidationError("corner_owners must have one entry per corner")

        for i, p in enumerate(points):
            q = points[(i + 1) % len(points)]
            if p.distance_to(q) < MIN_WALL_LENGTH:
                raise GeometryError(f"Wall {i} has zero length")

        polygon = Polygon([p.as_tuple() for p in points])
        if not polygon.is_valid or not polygon.exterior.is_simple:
            raise ConstructionValidationError("Perimeter boundary is self-intersecting")
        if polygon.exterior.is_ccw:
            raise ConstructionValidationError("Perimeter boundary must be clockwise")

    def _resolve_walls(self, definition: PerimeterDefinition) -> list[PerimeterWall]:
        points = definition.boundary
        walls: list[PerimeterWall] = []
        for i, wall_def in enumerate(definition.walls):
            inside = LineSegment2D(start=points[i], end=points[(i + 1) % len(points)])
            direction = inside.direction
            # Boundary runs clockwise, so the outside is on the left
            outside = offset_segment(inside, wall_def.thickness)
            walls.append(PerimeterWall(
                id=wall_def.id,
                thickness=wall_def.thickness,
                wall_assembly_id=wall_def.wall_assembly_id,
                openings=wall_def.openings,
                inside_line=inside,
                outside_line=outside,
                direction=direction,
                outside_direction=direction.perpendicular(),
                inside_length=inside.length,
                outside_length=outside.length,
            ))
        return walls

    def _resolve_corners(
        self, definition: PerimeterDefinition, walls: list[PerimeterWall],
    ) -> list[PerimeterCorner]:
        corners: list[PerimeterCorner] = []
        n = len(walls)
        for i in range(n):
            previous = walls[(i - 1) % n]
            current = walls[i]

            outside_point = self._outside_point(previous, current)
            interior = self._interior_angle(previous.direction, current.direction)

            owner = None
            if definition.corner_owners is not None:
                owner = definition.corner_owners[i]
            if owner is None:
                owner = self.default_owner(interior)

            corners.append(PerimeterCorner(
                inside_point=definition.boundary[i],
                outside_point=outside_point,
                belongs_to=owner,
                interior_angle=interior,
                exterior_angle=2 * math.pi - interior,
            ))
        return corners

    def _outside_point(self, previous: PerimeterWall, current: PerimeterWall) -> Vec2:
        point = line_intersection(previous.outside_line.as_line(), current.outside_line.as_line())
        if point is None:
            # Colinear walls: the outside lines meet (or step) at the shared end
            return previous.outside_line.end.lerp(current.outside_line.start, 0.5)
        return point

    @staticmethod
    def _interior_angle(incoming: Vec2, outgoing: Vec2) -> float:
        """Angle inside a clockwise loop; < pi for convex corners."""
        turn = math.atan2(incoming.cross(outgoing), incoming.dot(outgoing))
        return math.pi + turn

    @staticmethod
    def default_owner(interior_angle: float) -> CornerOwner:
        """Convex corners belong to the following wall, reflex ones to the preceding."""
        if interior_angle < math.pi:
            return CornerOwner.NEXT
        return CornerOwner.PREVIOUS

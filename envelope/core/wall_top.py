"""Wall tops under a roof.

Without a roof a wall ends at the flat storey top. Under a roof the top
follows the roof underside sampled along the wall's inside line, the same
line the top ring beam is sampled on, so the beam sits on the wall.
Elements are built to the highest top above them and then clipped.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass

from shapely.geometry import LineString, Polygon
from shapely.geometry.base import BaseGeometry

from envelope.models import (
    ConstructionElement, CuboidShape, ExtrudedPolygonShape,
    GroupOrElement, LineSegment2D, Transform, WallContext,
)
from envelope.core.geometry import from_shapely, iter_polygons, rectangle, to_shapely
from envelope.core.model import create_group
from envelope.core.results import ConstructionResult, ElementResult, element_result
from envelope.core.roof import height_line_for_segment
from envelope.core.shapes import create_boolean, create_element, create_extruded_polygon

logger = logging.getLogger(__name__)

TOLERANCE = 1e-6
FAR = 1e6


def _coords(geometry: BaseGeometry) -> list[tuple[float, float]]:
    if geometry.is_empty:
        return []
    if hasattr(geometry, "geoms"):
        return [c for g in geometry.geoms for c in _coords(g)]
    if isinstance(geometry, Polygon):
        return list(geometry.exterior.coords)
    return list(geometry.coords)


@dataclass(frozen=True)
class WallTopProfile:
    """
    Wall top elevation along wall-local x.

    Points are (x, z) sorted by x; two points at the same x mark a jump.
    The first and last elevation continue beyond the ends.
    """
    points: tuple[tuple[float, float], ...]

    @classmethod
    def flat(cls, z: float, start: float, end: float) -> WallTopProfile:
        return cls(points=((start, z), (end, z)))

    @property
    def max_z(self) -> float:
        return max(z for _, z in self.points)

    @property
    def min_z(self) -> float:
        return min(z for _, z in self.points)

    @property
    def is_level(self) -> bool:
        return self.max_z - self.min_z <= TOLERANCE

    def _extended(self) -> list[tuple[float, float]]:
        (x0, z0), (x1, z1) = self.points[0], self.points[-1]
        return [(x0 - FAR, z0), *self.points, (x1 + FAR, z1)]

    def _top_between(self, start: float, end: float) -> list[float]:
        line = LineString(self._extended())
        low, high = self.min_z - 1.0, self.max_z + 1.0
        if end - start <= TOLERANCE:
            window: BaseGeometry = LineString([(start, low), (start, high)])
        else:
            window = rectangle(start, low, end, high)
        return [z for _, z in _coords(line.intersection(window))]

    def min_between(self, start: float, end: float) -> float:
        return min(self._top_between(start, end), default=self.min_z)

    def max_between(self, start: float, end: float) -> float:
        return max(self._top_between(start, end), default=self.max_z)

    def top_at(self, x: float) -> float:
        """Elevation at x; the lower side at a jump."""
        return self.min_between(x, x)

    def polygon(self, start: float, end: float, bottom: float) -> BaseGeometry:
        """Side outline in the xz plane between `start` and `end`, from `bottom` up to the top."""
        if end - start <= TOLERANCE or self.max_z <= bottom + TOLERANCE:
            return Polygon()
        if self.is_level:
            return rectangle(start, bottom, end, self.max_z)
        # Close the outline below both the bottom and the lowest top
        floor = min(bottom, self.min_z) - 1.0
        points = self._extended()
        outline = Polygon([(points[0][0], floor), *points, (points[-1][0], floor)])
        return outline.intersection(rectangle(start, bottom, end, self.max_z))


def wall_top_profile(context: WallContext) -> WallTopProfile:
    """
    Top of one wall in wall-local coordinates.

    The roof is sampled a wall thickness beyond both construction ends so
    corner layers are covered too.
    """
    pctx = context.perimeter_context
    wall = context.wall
    top = context.top
    start = context.construction_start - wall.thickness
    end = context.construction_start + context.construction_length + wall.thickness

    roof = pctx.storey.roof
    if roof is None:
        return WallTopProfile.flat(top, start, end)

    origin = wall.inside_line.start
    segment = LineSegment2D(start=origin + wall.direction * start, end=origin + wall.direction * end)
    height_line = height_line_for_segment(segment, roof, pctx.storey.height)
    if not height_line.points or height_line.is_flat:
        return WallTopProfile.flat(top, start, end)

    points: list[tuple[float, float]] = []
    for point in height_line.points:
        x = start + point.position * (end - start)
        points.append((x, top + point.offset_before))
        if point.is_jump:
            points.append((x, top + point.offset_after))
    logger.debug("Wall %s follows the roof: %d profile points", wall.id, len(points))
    return WallTopProfile(points=tuple(points))


def _clipped(
    element: ConstructionElement, polygon: Polygon, thickness: float, y: float, keep_id: bool,
) -> ConstructionElement:
    clipped = create_element(
        element.type, element.material,
        create_extruded_polygon(from_shapely(polygon), "xz", thickness),
        transform=Transform.translation(y=y),
        tags=element.tags,
    )
    if keep_id:
        clipped = clipped.model_copy(update={"id": element.id})
    return clipped


def _plain_xz_extrusion(element: ConstructionElement) -> bool:
    transform = element.transform
    return (
        isinstance(element.shape, ExtrudedPolygonShape)
        and element.shape.plane == "xz"
        and transform.rotation.as_tuple() == (0.0, 0.0, 0.0)
        and transform.position.x == 0.0
        and transform.position.z == 0.0
    )


def clip_element(element: ConstructionElement, profile: WallTopProfile) -> list[ConstructionElement]:
    """
    Cut an element down to the wall top.

    Boxes and side extrusions become side extrusions of their clipped
    outline; the first piece keeps the element id. Anything else is wrapped
    in a boolean intersection with the wall outline.
    """
    b = element.bounds
    if b.max.z <= profile.min_between(b.min.x, b.max.x) + TOLERANCE:
        return [element]

    outline = profile.polygon(b.min.x, b.max.x, b.min.z)
    shape = element.shape
    if isinstance(shape, CuboidShape) and element.transform.is_identity():
        p, s = shape.position, shape.size
        section = rectangle(p.x, p.z, p.x + s.x, p.z + s.z).intersection(outline)
        parts = iter_polygons(section)
        return [_clipped(element, part, s.y, p.y, k == 0) for k, part in enumerate(parts)]

    if _plain_xz_extrusion(element):
        section = to_shapely(shape.polygon).intersection(outline)
        parts = iter_polygons(section)
        return [
            _clipped(element, part, shape.thickness, element.transform.position.y, k == 0)
            for k, part in enumerate(parts)
        ]

    parts = iter_polygons(outline)
    if not parts:
        return []
    depth = b.max.y - b.min.y
    prisms = [
        (create_extruded_polygon(from_shapely(part), "xz", depth), Transform.translation(y=b.min.y))
        for part in parts
    ]
    clip = prisms[0] if len(prisms) == 1 else (create_boolean("union", prisms), Transform())
    boolean = create_boolean("intersect", [(shape, element.transform), clip])
    return [element.model_copy(update={
        "shape": boolean, "transform": Transform(), "bounds": boolean.bounds,
    })]


def clip_item(item: GroupOrElement, profile: WallTopProfile) -> list[GroupOrElement]:
    if isinstance(item, ConstructionElement):
        return clip_element(item, profile)
    if not item.transform.is_identity():
        # Placed groups are not built inside wall areas
        return [item]
    children = [c for child in item.children for c in clip_item(child, profile)]
    if not children:
        return []
    group = create_group(children, label=item.label, tags=item.tags)
    return [group.model_copy(update={"id": item.id})]


def clip_to_wall_top(
    results: list[ConstructionResult], profile: WallTopProfile,
) -> list[ConstructionResult]:
    """Clip every element result to the wall top; other results pass through."""
    if profile.is_level:
        # Areas are built to a level top exactly
        return results
    clipped: list[ConstructionResult] = []
    for result in results:
        if isinstance(result, ElementResult):
            clipped.extend(element_result(e) for e in clip_item(result.element, profile))
        else:
            clipped.append(result)
    return clipped

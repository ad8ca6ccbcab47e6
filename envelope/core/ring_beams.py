"""Ring beam geometry: wall runs, corner-cut band polygons, roof adaptation.

Ring beams live in plan coordinates (XY) and are extruded along Z. A beam
variant describes its cross section as bands (offset ranges measured from
the inside line towards the outside, each with its own vertical range);
this module turns bands into elements along every run of the perimeter.
"""

from __future__ import annotations
import logging
import math
from dataclasses import dataclass, field

import numpy as np
from shapely.geometry import Polygon

from envelope.models import (
    CornerOwner, ElementType, GeometryError, Line2D, LineSegment2D, Perimeter, PerimeterCorner,
    PerimeterWall, Polygon2D, PolygonWithHoles2D, StoreyContext, Transform, Vec2, Vec3,
)
from envelope.models.ids import MaterialId
from envelope.core.geometry import (
    from_shapely, iter_polygons, line_intersection, rotation_of, to_shapely,
)
from envelope.core.results import ConstructionResult, element_result
from envelope.core.roof import HeightLine, height_line_for_segment
from envelope.core.shapes import create_boolean, create_element, create_extruded_polygon

logger = logging.getLogger(__name__)

SLOPE_EPSILON = 1e-9


# --- Runs ---

@dataclass(frozen=True)
class RingBeamRun:
    """Consecutive colinear walls start_index..end_index (inclusive, wrapping)."""
    perimeter: Perimeter
    start_index: int
    end_index: int

    @property
    def wall_indices(self) -> list[int]:
        n = len(self.perimeter.walls)
        count = (self.end_index - self.start_index) % n + 1
        return [(self.start_index + k) % n for k in range(count)]

    @property
    def first_wall(self) -> PerimeterWall:
        return self.perimeter.walls[self.start_index]

    @property
    def last_wall(self) -> PerimeterWall:
        return self.perimeter.walls[self.end_index]

    @property
    def start_corner(self) -> PerimeterCorner:
        return self.perimeter.start_corner(self.start_index)

    @property
    def end_corner(self) -> PerimeterCorner:
        return self.perimeter.end_corner(self.end_index)

    @property
    def direction(self) -> Vec2:
        return self.first_wall.direction

    @property
    def outside_direction(self) -> Vec2:
        return self.first_wall.outside_direction

    @property
    def thickness(self) -> float:
        return min(self.perimeter.walls[i].thickness for i in self.wall_indices)


def ring_beam_runs(perimeter: Perimeter) -> list[RingBeamRun]:
    """Split the perimeter at every real (non-colinear) corner."""
    n = len(perimeter.walls)
    breaks = [i for i, c in enumerate(perimeter.corners) if not c.is_colinear]
    if not breaks:
        raise GeometryError("Perimeter has no corners")
    runs: list[RingBeamRun] = []
    for k, start in enumerate(breaks):
        next_break = breaks[(k + 1) % len(breaks)]
        runs.append(RingBeamRun(perimeter, start, (next_break - 1) % n))
    return runs


# --- Band polygons ---

def cap_uses_outer_edge(corner: PerimeterCorner, owned_by_run: bool) -> bool:
    """
    Which of the neighbouring run's edges caps this run at a corner.

    convex,  owned     -> outer (run reaches across the neighbour)
    convex,  not owned -> inner
    concave, owned     -> inner
    concave, not owned -> outer
    """
    return corner.is_convex == owned_by_run


def _offset_line(wall: PerimeterWall, distance: float) -> Line2D:
    return Line2D(
        point=wall.inside_line.start + wall.outside_direction * distance,
        direction=wall.direction,
    )


def _cap_point(own: Line2D, neighbour: Line2D, fallback: Vec2) -> Vec2:
    point = line_intersection(own, neighbour)
    return fallback if point is None else point


def band_polygon(run: RingBeamRun, inner: float, outer: float) -> Polygon2D:
    """
    Plan quadrilateral of one band along a run.

    Each end is cut along either the inner or the outer edge of the same
    band on the adjacent run, so neighbouring runs meet without gap or
    overlap.
    """
    perimeter = run.perimeter
    previous = perimeter.walls[perimeter.previous_index(run.start_index)]
    following = perimeter.walls[perimeter.next_index(run.end_index)]

    own_inner = _offset_line(run.first_wall, inner)
    own_outer = _offset_line(run.first_wall, outer)

    start_owned = run.start_corner.belongs_to == CornerOwner.NEXT
    end_owned = run.end_corner.belongs_to == CornerOwner.PREVIOUS

    start_cap = _offset_line(
        previous, outer if cap_uses_outer_edge(run.start_corner, start_owned) else inner,
    )
    end_cap = _offset_line(
        following, outer if cap_uses_outer_edge(run.end_corner, end_owned) else inner,
    )

    start = run.start_corner.inside_point
    end = run.end_corner.inside_point
    n = run.outside_direction
    return Polygon2D(points=[
        _cap_point(own_inner, start_cap, start + n * inner),
        _cap_point(own_outer, start_cap, start + n * outer),
        _cap_point(own_outer, end_cap, end + n * outer),
        _cap_point(own_inner, end_cap, end + n * inner),
    ])


# --- Bands to elements ---

@dataclass
class BeamBand:
    """One prism of a ring beam cross section."""
    inner: float             # From the inside line, towards the outside
    outer: float
    bottom: float            # From the beam bottom
    height: float
    type: ElementType
    material: MaterialId
    tags: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class AlignedRect:
    """Bounding rectangle of a footprint aligned with a run direction."""
    origin: Vec2
    direction: Vec2
    normal: Vec2
    length: float
    width: float

    @classmethod
    def around(cls, polygons: list[Polygon2D], direction: Vec2) -> AlignedRect:
        normal = direction.perpendicular()
        pts = np.array([p.as_tuple() for poly in polygons for p in poly.points])
        along = pts @ np.array(direction.as_tuple())
        across = pts @ np.array(normal.as_tuple())
        origin = direction * float(along.min()) + normal * float(across.min())
        return cls(
            origin=origin,
            direction=direction,
            normal=normal,
            length=float(along.max() - along.min()),
            width=float(across.max() - across.min()),
        )

    def point_at(self, s: float) -> Vec2:
        return self.origin + self.direction * s

    def line_through(self, point: Vec2) -> LineSegment2D:
        """Full-length segment along the direction, at `point`'s offset across."""
        start = self.origin + self.normal * (point - self.origin).dot(self.normal)
        return LineSegment2D(start=start, end=start + self.direction * self.length)

    def slice(self, s0: float, s1: float) -> Polygon:
        a = self.point_at(s0)
        b = self.point_at(s1)
        w = self.normal * self.width
        return Polygon([a.as_tuple(), b.as_tuple(), (b + w).as_tuple(), (a + w).as_tuple()])

    def to_local(self, polygon: Polygon2D, start: Vec2) -> Polygon2D:
        return Polygon2D(points=[
            Vec2(x=(p - start).dot(self.direction), y=(p - start).dot(self.normal))
            for p in polygon.points
        ])


def _flat_element(band: BeamBand, polygon: Polygon2D, elevation: float) -> ConstructionResult:
    shape = create_extruded_polygon(PolygonWithHoles2D(outer=polygon), "xy", band.height)
    return element_result(create_element(
        band.type, band.material, shape,
        transform=Transform.translation(z=elevation + band.bottom),
        tags=band.tags,
    ))


def _expand_along_path(polygon: Polygon2D, length: float, expansion: float) -> Polygon2D:
    """Push points away from the segment middle by `expansion` along x."""
    middle = length / 2
    points: list[Vec2] = []
    for p in polygon.points:
        x = p.x
        if abs(x - middle) > 1e-9:
            x += math.copysign(expansion, x - middle)
        points.append(Vec2(x=x, y=p.y))
    return Polygon2D(points=points)


def _sloped_element(
    band: BeamBand,
    local: Polygon2D,
    start: Vec2,
    heading: float,
    length: float,
    bottom_start: float,
    bottom_end: float,
    beam_height: float,
) -> ConstructionResult:
    """
    Extrude a footprint piece tilted to follow the roof.

    The tilted prism is lengthened so its ends still reach the footprint
    after rotation, then intersected with a vertical prism of the original
    footprint, expressed in the tilted frame.
    """
    rise = bottom_end - bottom_start
    slope = math.atan2(rise, length)

    expanded = _expand_along_path(local, length, math.tan(abs(slope)) * beam_height)
    body = create_extruded_polygon(PolygonWithHoles2D(outer=expanded), "xy", band.height)

    margin = abs(rise) + beam_height
    clip = create_extruded_polygon(PolygonWithHoles2D(outer=local), "xy", beam_height + 2 * margin)
    clip_position = rotation_of(Transform(rotation=Vec3(y=slope))).apply([0.0, 0.0, -margin])
    clip_transform = Transform(
        position=Vec3(x=float(clip_position[0]), y=float(clip_position[1]), z=float(clip_position[2])),
        rotation=Vec3(y=slope),
    )

    shape = create_boolean("intersect", [
        (body, Transform.translation(z=band.bottom)),
        (clip, clip_transform),
    ])
    transform = Transform(
        position=Vec3(x=start.x, y=start.y, z=bottom_start),
        rotation=Vec3(y=-slope, z=heading),
    )
    return element_result(create_element(band.type, band.material, shape, transform=transform, tags=band.tags))


def construct_bands(
    run: RingBeamRun,
    bands: list[BeamBand],
    beam_height: float,
    elevation: float,
    storey: StoreyContext | None = None,
) -> list[ConstructionResult]:
    """
    Build the band prisms of one run.

    Without a storey roof the beam bottom sits at `elevation`. With a roof
    the beam top follows the roof underside where the roof covers the run
    and stays at `elevation + beam_height` elsewhere. The roof is sampled
    along the run's inside line, where the walls below sample it too.
    """
    polygons = [band_polygon(run, b.inner, b.outer) for b in bands]
    if storey is None or storey.roof is None:
        return [_flat_element(b, p, elevation) for b, p in zip(bands, polygons)]

    rect = AlignedRect.around(polygons, run.direction)
    reference = rect.line_through(run.first_wall.inside_line.start)
    height_line = height_line_for_segment(reference, storey.roof, storey.height)
    if not height_line.points or height_line.is_flat:
        return [_flat_element(b, p, elevation) for b, p in zip(bands, polygons)]

    return _construct_roof_adapted(run, bands, polygons, rect, height_line, beam_height, elevation)


def _construct_roof_adapted(
    run: RingBeamRun,
    bands: list[BeamBand],
    polygons: list[Polygon2D],
    rect: AlignedRect,
    height_line: HeightLine,
    beam_height: float,
    elevation: float,
) -> list[ConstructionResult]:
    heading = run.direction.angle()
    results: list[ConstructionResult] = []
    for t0, t1, h0, h1 in height_line.spans():
        s0, s1 = t0 * rect.length, t1 * rect.length
        start = rect.point_at(s0)
        length = s1 - s0
        piece = rect.slice(s0, s1)
        bottom_start = elevation + h0
        bottom_end = elevation + h1

        for band, polygon in zip(bands, polygons):
            for part in iter_polygons(to_shapely(polygon).intersection(piece)):
                footprint = from_shapely(part).outer
                if abs(bottom_end - bottom_start) <= SLOPE_EPSILON:
                    results.append(_flat_element(band, footprint, bottom_start))
                    continue
                results.append(_sloped_element(
                    band, rect.to_local(footprint, start), start, heading,
                    length, bottom_start, bottom_end, beam_height,
                ))

    logger.debug("Roof-adapted run %d..%d: %d pieces", run.start_index, run.end_index, len(results))
    return results

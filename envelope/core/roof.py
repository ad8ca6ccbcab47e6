"""Roof sampling: height lines along plan segments."""

from __future__ import annotations
import math

from pydantic import BaseModel
from shapely.geometry import LineString, Point
from shapely.geometry.base import BaseGeometry

from envelope.models import LineSegment2D, Roof, RoofType, Vec2
from envelope.core.geometry import signed_distance, to_shapely

POSITION_EPSILON = 1e-9


class HeightPoint(BaseModel):
    """Offset of the roof underside from the storey height at `position`."""
    position: float          # 0..1 along the sampled segment
    offset_before: float
    offset_after: float

    @property
    def is_jump(self) -> bool:
        return abs(self.offset_after - self.offset_before) > 1e-6


class HeightLine(BaseModel):
    points: list[HeightPoint]

    def spans(self) -> list[tuple[float, float, float, float]]:
        """(t0, t1, offset at t0, offset at t1) for each continuous piece."""
        return [
            (a.position, b.position, a.offset_after, b.offset_before)
            for a, b in zip(self.points, self.points[1:])
            if b.position - a.position > POSITION_EPSILON
        ]

    def offset_at(self, t: float) -> float:
        t = min(1.0, max(0.0, t))
        for t0, t1, h0, h1 in self.spans():
            if t0 - POSITION_EPSILON <= t <= t1 + POSITION_EPSILON:
                return h0 + (h1 - h0) * (t - t0) / (t1 - t0)
        return self.points[-1].offset_before if self.points else 0.0

    @property
    def is_flat(self) -> bool:
        return all(
            abs(p.offset_before) <= 1e-6 and abs(p.offset_after) <= 1e-6
            for p in self.points
        )


def roof_coverage(roof: Roof) -> BaseGeometry:
    """Plan area covered by the roof: its outline grown by the overhang."""
    outline = to_shapely(roof.outline)
    if roof.overhang > 0:
        return outline.buffer(roof.overhang, join_style="mitre")
    return outline


def roof_underside(roof: Roof, point: Vec2) -> float:
    """Elevation of the roof underside above a plan point (ignores coverage)."""
    slope = roof.slope_radians
    distance = signed_distance(point, roof.ridge_line.as_line())
    if roof.type == RoofType.GABLE:
        run = abs(distance)
    else:
        run = max(0.0, distance)
    return roof.ridge_height - roof.thickness / math.cos(slope) - math.tan(slope) * run


def _breakpoints(segment: LineSegment2D, roof: Roof, coverage: BaseGeometry) -> list[float]:
    length = segment.length
    ts = [0.0, 1.0]

    ridge = roof.ridge_line.as_line()
    d0 = signed_distance(segment.start, ridge)
    d1 = signed_distance(segment.end, ridge)
    if d0 * d1 < 0:
        ts.append(d0 / (d0 - d1))

    line = LineString([segment.start.as_tuple(), segment.end.as_tuple()])
    crossings = line.intersection(coverage.boundary)
    for geom in getattr(crossings, "geoms", [crossings]):
        if geom.is_empty:
            continue
        for x, y in geom.coords:
            ts.append(Vec2(x=x, y=y).distance_to(segment.start) / length)

    ts = sorted(min(1.0, max(0.0, t)) for t in ts)
    unique: list[float] = []
    for t in ts:
        if not unique or t - unique[-1] > POSITION_EPSILON:
            unique.append(t)
    return unique


def height_line_for_segment(
    segment: LineSegment2D, roof: Roof, storey_height: float,
) -> HeightLine:
    """
    Sample the roof underside along a plan segment.

    Breakpoints sit at both ends, where the segment crosses the ridge and
    where it enters or leaves the roof coverage. Between breakpoints the
    offset is linear. Uncovered stretches have offset 0, which shows up as
    a jump at the coverage boundary.
    """
    if segment.length < POSITION_EPSILON:
        return HeightLine(points=[])

    coverage = roof_coverage(roof)
    ts = _breakpoints(segment, roof, coverage)

    def point_at(t: float) -> Vec2:
        return segment.start.lerp(segment.end, t)

    def offset(t: float, covered: bool) -> float:
        if not covered:
            return 0.0
        return roof_underside(roof, point_at(t)) - storey_height

    # Coverage is constant between consecutive breakpoints
    covered = [
        coverage.covers(Point(point_at((a + b) / 2).as_tuple()))
        for a, b in zip(ts, ts[1:])
    ]

    points: list[HeightPoint] = []
    for i, t in enumerate(ts):
        before = covered[i - 1] if i > 0 else covered[0]
        after = covered[i] if i < len(covered) else covered[-1]
        points.append(HeightPoint(
            position=t,
            offset_before=offset(t, before),
            offset_after=offset(t, after),
        ))
    return HeightLine(points=points)

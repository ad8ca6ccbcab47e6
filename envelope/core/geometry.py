"""Geometry helpers: line math, shapely conversion, rigid transforms."""

from __future__ import annotations
import math

import numpy as np
from scipy.spatial.transform import Rotation
from shapely.geometry import MultiPolygon, Polygon, box
from shapely.geometry.base import BaseGeometry

from envelope.models import (
    Bounds3D, Line2D, LineSegment2D, Plane, Polygon2D, PolygonWithHoles2D,
    Transform, Vec2, Vec3, GeometryError,
)


EPSILON = 1e-9


# --- Lines ---

def line_intersection(a: Line2D, b: Line2D) -> Vec2 | None:
    """Intersection of two infinite lines; None when they are parallel."""
    denom = a.direction.cross(b.direction)
    if abs(denom) < EPSILON:
        return None
    t = (b.point - a.point).cross(b.direction) / denom
    return a.point + a.direction * t


def offset_segment(segment: LineSegment2D, distance: float) -> LineSegment2D:
    """Parallel segment shifted along the counterclockwise normal."""
    direction = segment.direction
    if direction.length() < EPSILON:
        raise GeometryError("Cannot offset a zero-length segment")
    shift = direction.perpendicular() * distance
    return LineSegment2D(start=segment.start + shift, end=segment.end + shift)


def signed_distance(point: Vec2, line: Line2D) -> float:
    """Positive on the left of the line direction."""
    return line.direction.cross(point - line.point)


# --- Shapely conversion ---

def to_shapely(polygon: Polygon2D | PolygonWithHoles2D) -> Polygon:
    if isinstance(polygon, PolygonWithHoles2D):
        return Polygon(
            polygon.outer.as_tuples(),
            [hole.as_tuples() for hole in polygon.holes],
        )
    return Polygon(polygon.as_tuples())


def from_shapely(polygon: Polygon) -> PolygonWithHoles2D:
    # Shapely closes rings by repeating the first coordinate
    outer = list(polygon.exterior.coords)[:-1]
    holes = [list(ring.coords)[:-1] for ring in polygon.interiors]
    return PolygonWithHoles2D(
        outer=Polygon2D.from_tuples(outer),
        holes=[Polygon2D.from_tuples(h) for h in holes],
    )


def iter_polygons(geometry: BaseGeometry) -> list[Polygon]:
    """Flatten a shapely result into its non-empty polygons."""
    if geometry.is_empty:
        return []
    if isinstance(geometry, Polygon):
        return [geometry]
    if isinstance(geometry, MultiPolygon):
        return [g for g in geometry.geoms if not g.is_empty]
    # GeometryCollection from boolean ops on touching shapes
    polygons: list[Polygon] = []
    for part in getattr(geometry, "geoms", []):
        polygons.extend(iter_polygons(part))
    return polygons


def rectangle(min_x: float, min_y: float, max_x: float, max_y: float) -> Polygon:
    return box(min_x, min_y, max_x, max_y)


# --- Planes ---

def plane_to_3d(points: np.ndarray, plane: Plane, depth: float = 0.0) -> np.ndarray:
    """Map (u, v) plane coordinates into 3D, placing the normal axis at `depth`."""
    u, v = points[:, 0], points[:, 1]
    w = np.full(len(points), depth)
    if plane == "xy":
        return np.column_stack([u, v, w])
    if plane == "xz":
        return np.column_stack([u, w, v])
    return np.column_stack([w, u, v])


def extrusion_bounds(polygon: PolygonWithHoles2D, plane: Plane, thickness: float) -> Bounds3D:
    pts = np.array(polygon.outer.as_tuples(), dtype=float)
    corners = np.vstack([
        plane_to_3d(pts, plane, 0.0),
        plane_to_3d(pts, plane, thickness),
    ])
    return bounds_from_array(corners)


# --- Transforms ---

def rotation_of(transform: Transform) -> Rotation:
    return Rotation.from_euler("xyz", list(transform.rotation.as_tuple()))


def apply_transform(transform: Transform, points: np.ndarray) -> np.ndarray:
    """Transform an (N, 3) array of points."""
    pts = np.atleast_2d(np.asarray(points, dtype=float))
    if transform.is_identity():
        return pts.copy()
    return rotation_of(transform).apply(pts) + np.array(transform.position.as_tuple())


def transform_point(transform: Transform, point: Vec3) -> Vec3:
    x, y, z = apply_transform(transform, np.array([point.as_tuple()]))[0]
    return Vec3(x=float(x), y=float(y), z=float(z))


def compose_transforms(outer: Transform, inner: Transform) -> Transform:
    """Transform equal to applying `inner` first, then `outer`."""
    if outer.is_identity():
        return inner
    if inner.is_identity():
        return outer
    outer_rot = rotation_of(outer)
    rotation = outer_rot * rotation_of(inner)
    position = outer_rot.apply(np.array(inner.position.as_tuple())) + np.array(outer.position.as_tuple())
    rx, ry, rz = rotation.as_euler("xyz")
    return Transform(
        position=Vec3(x=float(position[0]), y=float(position[1]), z=float(position[2])),
        rotation=Vec3(x=float(rx), y=float(ry), z=float(rz)),
    )


def bounds_from_array(points: np.ndarray) -> Bounds3D:
    lo = points.min(axis=0)
    hi = points.max(axis=0)
    return Bounds3D(
        min=Vec3(x=float(lo[0]), y=float(lo[1]), z=float(lo[2])),
        max=Vec3(x=float(hi[0]), y=float(hi[1]), z=float(hi[2])),
    )


def transform_bounds(bounds: Bounds3D, transform: Transform) -> Bounds3D:
    """Axis-aligned box around the transformed corners of `bounds`."""
    if transform.is_identity():
        return bounds
    return bounds_from_array(apply_transform(transform, np.array(bounds.corners())))


def heading_transform(origin: Vec2, direction: Vec2, elevation: float = 0.0) -> Transform:
    """Place a local frame at `origin` with local x along `direction`."""
    return Transform(
        position=Vec3(x=origin.x, y=origin.y, z=elevation),
        rotation=Vec3(z=math.atan2(direction.y, direction.x)),
    )

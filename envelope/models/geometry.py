"""Geometric primitives used throughout the construction engine.

Plan coordinates live in the XY plane (y up, perimeters clockwise).
Elevation is Z. All lengths are millimetres.
"""

from __future__ import annotations
import math
from typing import Iterable, Literal

from pydantic import BaseModel, Field


Plane = Literal["xy", "xz", "yz"]


class Vec2(BaseModel):
    """Point or vector in the plan."""
    x: float
    y: float

    def distance_to(self, other: Vec2) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def lerp(self, other: Vec2, t: float) -> Vec2:
        return Vec2(
            x=self.x + (other.x - self.x) * t,
            y=self.y + (other.y - self.y) * t,
        )

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def normalized(self) -> Vec2:
        ln = self.length()
        if ln < 1e-10:
            return Vec2(x=0.0, y=0.0)
        return Vec2(x=self.x / ln, y=self.y / ln)

    def perpendicular(self) -> Vec2:
        """90-degree counterclockwise rotation."""
        return Vec2(x=-self.y, y=self.x)

    def perpendicular_cw(self) -> Vec2:
        """90-degree clockwise rotation."""
        return Vec2(x=self.y, y=-self.x)

    def dot(self, other: Vec2) -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: Vec2) -> float:
        return self.x * other.y - self.y * other.x

    def angle(self) -> float:
        return math.atan2(self.y, self.x)

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(x=self.x + other.x, y=self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(x=self.x - other.x, y=self.y - other.y)

    def __mul__(self, scalar: float) -> Vec2:
        return Vec2(x=self.x * scalar, y=self.y * scalar)

    def __neg__(self) -> Vec2:
        return Vec2(x=-self.x, y=-self.y)


class Vec3(BaseModel):
    """Point or vector in 3D space."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def of(cls, x: float, y: float, z: float) -> Vec3:
        return cls(x=x, y=y, z=z)

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def distance_to(self, other: Vec3) -> float:
        return math.sqrt(
            (self.x - other.x) ** 2
            + (self.y - other.y) ** 2
            + (self.z - other.z) ** 2
        )

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(x=self.x + other.x, y=self.y + other.y, z=self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(x=self.x - other.x, y=self.y - other.y, z=self.z - other.z)


class Line2D(BaseModel):
    """Infinite line through `point` along the unit vector `direction`."""
    point: Vec2
    direction: Vec2

    def offset(self, distance: float) -> Line2D:
        """Parallel line shifted along the counterclockwise normal."""
        return Line2D(
            point=self.point + self.direction.perpendicular() * distance,
            direction=self.direction,
        )


class LineSegment2D(BaseModel):
    start: Vec2
    end: Vec2

    @property
    def length(self) -> float:
        return self.start.distance_to(self.end)

    @property
    def direction(self) -> Vec2:
        return (self.end - self.start).normalized()

    def as_line(self) -> Line2D:
        return Line2D(point=self.start, direction=self.direction)


class Polygon2D(BaseModel):
    points: list[Vec2]

    @classmethod
    def from_tuples(cls, points: Iterable[tuple[float, float]]) -> Polygon2D:
        return cls(points=[Vec2(x=x, y=y) for x, y in points])

    def as_tuples(self) -> list[tuple[float, float]]:
        return [p.as_tuple() for p in self.points]

    def signed_area(self) -> float:
        """Shoelace area; negative for clockwise polygons."""
        pts = self.points
        total = 0.0
        for i, p in enumerate(pts):
            q = pts[(i + 1) % len(pts)]
            total += p.x * q.y - q.x * p.y
        return total / 2.0

    def is_clockwise(self) -> bool:
        return self.signed_area() < 0


class PolygonWithHoles2D(BaseModel):
    outer: Polygon2D
    holes: list[Polygon2D] = []


class Bounds3D(BaseModel):
    """Axis-aligned box."""
    min: Vec3
    max: Vec3

    @classmethod
    def from_points(cls, points: Iterable[tuple[float, float, float]]) -> Bounds3D:
        pts = list(points)
        return cls(
            min=Vec3(x=min(p[0] for p in pts), y=min(p[1] for p in pts), z=min(p[2] for p in pts)),
            max=Vec3(x=max(p[0] for p in pts), y=max(p[1] for p in pts), z=max(p[2] for p in pts)),
        )

    @classmethod
    def from_cuboid(cls, position: Vec3, size: Vec3) -> Bounds3D:
        return cls.from_points([position.as_tuple(), (position + size).as_tuple()])

    @classmethod
    def merge(cls, *bounds: Bounds3D | None) -> Bounds3D | None:
        """Smallest box containing every given box; None when there is none."""
        present = [b for b in bounds if b is not None]
        if not present:
            return None
        return cls.from_points(
            [b.min.as_tuple() for b in present] + [b.max.as_tuple() for b in present]
        )

    @property
    def size(self) -> Vec3:
        return self.max - self.min

    def corners(self) -> list[tuple[float, float, float]]:
        return [
            (x, y, z)
            for x in (self.min.x, self.max.x)
            for y in (self.min.y, self.max.y)
            for z in (self.min.z, self.max.z)
        ]

    def contains(self, other: Bounds3D, tolerance: float = 1e-6) -> bool:
        return (
            self.min.x <= other.min.x + tolerance
            and self.min.y <= other.min.y + tolerance
            and self.min.z <= other.min.z + tolerance
            and self.max.x >= other.max.x - tolerance
            and self.max.y >= other.max.y - tolerance
            and self.max.z >= other.max.z - tolerance
        )


class Transform(BaseModel):
    """Rigid transform: rotate by XYZ Euler angles (radians), then translate."""
    position: Vec3 = Field(default_factory=Vec3)
    rotation: Vec3 = Field(default_factory=Vec3)

    @classmethod
    def translation(cls, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> Transform:
        return cls(position=Vec3(x=x, y=y, z=z))

    def is_identity(self, tolerance: float = 1e-12) -> bool:
        return all(
            abs(v) <= tolerance
            for v in self.position.as_tuple() + self.rotation.as_tuple()
        )


IDENTITY_TRANSFORM = Transform()

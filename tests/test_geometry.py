"""Tests for geometry helpers."""
import math

import pytest

from envelope.models import Line2D, Transform, Vec2, Vec3
from envelope.core.geometry import (
    compose_transforms, heading_transform, line_intersection, signed_distance,
    transform_point,
)


class TestLines:
    def test_intersection(self):
        a = Line2D(point=Vec2(x=0, y=0), direction=Vec2(x=1, y=0))
        b = Line2D(point=Vec2(x=5, y=-3), direction=Vec2(x=0, y=1))
        point = line_intersection(a, b)
        assert (point.x, point.y) == pytest.approx((5, 0))

    def test_parallel_lines(self):
        a = Line2D(point=Vec2(x=0, y=0), direction=Vec2(x=1, y=0))
        assert line_intersection(a, a.offset(10)) is None

    def test_signed_distance_positive_on_left(self):
        line = Line2D(point=Vec2(x=0, y=0), direction=Vec2(x=1, y=0))
        assert signed_distance(Vec2(x=3, y=2), line) == pytest.approx(2)
        assert signed_distance(Vec2(x=3, y=-2), line) == pytest.approx(-2)


class TestTransforms:
    def test_heading_maps_local_axes(self):
        transform = heading_transform(Vec2(x=100, y=0), Vec2(x=0, y=1))
        point = transform_point(transform, Vec3(x=10, y=20, z=5))
        assert point.as_tuple() == pytest.approx((80, 10, 5))

    def test_compose_matches_sequential_application(self):
        inner = Transform(position=Vec3(x=10, y=0, z=5), rotation=Vec3(y=0.3))
        outer = Transform(position=Vec3(x=-50, y=20, z=0), rotation=Vec3(z=math.pi / 3))
        p = Vec3(x=1, y=2, z=3)
        expected = transform_point(outer, transform_point(inner, p))
        actual = transform_point(compose_transforms(outer, inner), p)
        assert actual.as_tuple() == pytest.approx(expected.as_tuple())

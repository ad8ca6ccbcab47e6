"""Tests for roof sampling and validation."""
import math

import pytest
from pydantic import ValidationError

from envelope.models import LineSegment2D, Polygon2D, Roof, RoofType, Vec2
from envelope.core.roof import height_line_for_segment, roof_underside

OUTLINE = Polygon2D.from_tuples([(-420, -420), (-420, 4420), (6420, 4420), (6420, -420)])
RIDGE = {"start": {"x": -1000, "y": 2000}, "end": {"x": 7000, "y": 2000}}


def _roof(**overrides):
    values = dict(
        type=RoofType.GABLE, ridge_line=RIDGE, slope=30, ridge_height=4000,
        thickness=200, overhang=500, outline=OUTLINE,
    )
    values.update(overrides)
    return Roof(**values)


def _segment(x0, y0, x1, y1):
    return LineSegment2D(start=Vec2(x=x0, y=y0), end=Vec2(x=x1, y=y1))


class TestRoofUnderside:
    def test_at_ridge(self):
        expected = 4000 - 200 / math.cos(math.radians(30))
        assert roof_underside(_roof(), Vec2(x=0, y=2000)) == pytest.approx(expected)

    def test_gable_falls_on_both_sides(self):
        roof = _roof()
        below = roof_underside(roof, Vec2(x=0, y=1000))
        above = roof_underside(roof, Vec2(x=0, y=3000))
        assert below == pytest.approx(above)
        drop = math.tan(math.radians(30)) * 1000
        assert roof_underside(roof, Vec2(x=0, y=2000)) - below == pytest.approx(drop)

    def test_shed_falls_to_the_left_only(self):
        roof = _roof(type=RoofType.SHED)
        ridge = roof_underside(roof, Vec2(x=0, y=2000))
        assert roof_underside(roof, Vec2(x=0, y=1000)) == pytest.approx(ridge)
        assert roof_underside(roof, Vec2(x=0, y=3000)) < ridge


class TestHeightLine:
    def test_breakpoint_at_ridge(self):
        line = height_line_for_segment(_segment(-200, -200, -200, 4200), _roof(), 2500)
        assert [p.position for p in line.points] == pytest.approx([0, 0.5, 1])
        ridge_offset = roof_underside(_roof(), Vec2(x=-200, y=2000)) - 2500
        assert line.points[1].offset_before == pytest.approx(ridge_offset)
        assert not any(p.is_jump for p in line.points)
        assert len(line.spans()) == 2

    def test_linear_between_breakpoints(self):
        roof = _roof()
        line = height_line_for_segment(_segment(-200, -200, -200, 4200), roof, 2500)
        expected = roof_underside(roof, Vec2(x=-200, y=900)) - 2500
        assert line.offset_at(0.25) == pytest.approx(expected)

    def test_jump_at_coverage_boundary(self):
        line = height_line_for_segment(_segment(-200, -2000, -200, 4200), _roof(), 2500)
        jumps = [p for p in line.points if p.is_jump]
        assert len(jumps) == 1
        assert jumps[0].offset_before == 0.0
        assert jumps[0].position == pytest.approx((2000 - 920) / 6200)

    def test_uncovered_segment_is_flat(self):
        line = height_line_for_segment(_segment(20000, 0, 20000, 4000), _roof(), 2500)
        assert line.is_flat


class TestRoofValidation:
    @pytest.mark.parametrize("field, value", [
        ("slope", -5), ("thickness", -200), ("thickness", 0), ("overhang", -100), ("slope", 90),
    ])
    def test_rejected(self, field, value):
        with pytest.raises(ValidationError):
            _roof(**{field: value})

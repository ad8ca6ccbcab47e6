"""Tests for wall segmentation."""
import pytest

from envelope.models import ConstructionValidationError, PerimeterDefinition, Vec2, WallDefinition
from envelope.models.defaults import DEFAULT_WALL_ASSEMBLY
from envelope.core.corners import calculate_wall_corner_info
from envelope.core.resolver import PerimeterGeometryResolver
from envelope.core.segmentation import segment_wall, validate_openings

from conftest import door, window


def _assert_tiles(segments, length):
    assert segments[0].start == pytest.approx(0.0)
    for a, b in zip(segments, segments[1:]):
        assert b.start == pytest.approx(a.end)
    assert segments[-1].end == pytest.approx(length)
    assert sum(s.width for s in segments) == pytest.approx(length)


class TestSegmentWall:
    def test_no_openings(self):
        segments = segment_wall(3000, [])
        assert len(segments) == 1
        assert segments[0].type == "wall"
        assert segments[0].width == pytest.approx(3000)

    def test_door_in_middle(self):
        segments = segment_wall(3000, [door(1000, 900)])
        assert [s.type for s in segments] == ["wall", "opening", "wall"]
        assert (segments[0].start, segments[0].end) == pytest.approx((0, 1000))
        assert (segments[1].start, segments[1].end) == pytest.approx((1000, 1900))
        assert (segments[2].start, segments[2].end) == pytest.approx((1900, 3000))
        _assert_tiles(segments, 3000)

    def test_opening_at_both_ends(self):
        segments = segment_wall(3000, [window(0, 800), window(2200, 800)])
        assert [s.type for s in segments] == ["opening", "wall", "opening"]
        _assert_tiles(segments, 3000)

    def test_unsorted_openings(self):
        segments = segment_wall(5000, [window(3000), window(500)])
        assert [s.type for s in segments] == ["wall", "opening", "wall", "opening", "wall"]
        _assert_tiles(segments, 5000)

    def test_opening_offset_shifts_openings(self):
        segments = segment_wall(3420, [door(1000, 900)], opening_offset=420)
        assert segments[1].start == pytest.approx(1420)
        assert segments[1].end == pytest.approx(2320)
        _assert_tiles(segments, 3420)

    def test_adjacent_openings_same_elevation_merge(self):
        a = window(1000, 600)
        b = window(1600, 600)
        segments = segment_wall(4000, [a, b])
        assert [s.type for s in segments] == ["wall", "opening", "wall"]
        assert segments[1].width == pytest.approx(1200)
        assert [o.id for o in segments[1].openings] == [a.id, b.id]

    def test_adjacent_openings_different_elevation_stay_apart(self):
        segments = segment_wall(4000, [window(1000, 600), door(1600, 600)])
        assert [s.type for s in segments] == ["wall", "opening", "opening", "wall"]
        _assert_tiles(segments, 4000)

    def test_segment_elevations(self):
        segments = segment_wall(4000, [window(1000, 1000, height=1200, sill=900)])
        assert segments[1].sill_height == pytest.approx(900)
        assert segments[1].header_height == pytest.approx(2100)
        assert segments[0].sill_height == 0.0


class TestSegmentValidation:
    def test_opening_beyond_wall_end(self):
        with pytest.raises(ConstructionValidationError, match="beyond wall length"):
            segment_wall(3000, [door(2500, 900)])

    def test_overlapping_openings(self):
        with pytest.raises(ConstructionValidationError, match="overlaps"):
            segment_wall(5000, [window(1000, 1000), window(1500, 1000)])

    def test_opening_touching_wall_end_is_valid(self):
        segments = segment_wall(3000, [door(2100, 900)])
        assert [s.type for s in segments] == ["wall", "opening"]
        _assert_tiles(segments, 3000)


def _l_shape_wall(openings):
    """Wall 2 of a clockwise L, 2000mm long, ending at the reflex corner it owns."""
    points = [(0, 0), (0, 4000), (3000, 4000), (3000, 2000), (6000, 2000), (6000, 0)]
    definition = PerimeterDefinition(
        boundary=[Vec2(x=x, y=y) for x, y in points],
        walls=[WallDefinition(thickness=420, wall_assembly_id=DEFAULT_WALL_ASSEMBLY) for _ in points],
    )
    perimeter = PerimeterGeometryResolver().resolve(definition)
    wall = perimeter.walls[2].model_copy(update={"openings": openings})
    return wall, calculate_wall_corner_info(perimeter, 2)


class TestValidateOpenings:
    def test_opening_inside_reflex_corner_zone(self):
        wall, corners = _l_shape_wall([door(1000, 800)])
        assert wall.inside_length == pytest.approx(2000)
        with pytest.raises(ConstructionValidationError, match="construction ends at 1580.0mm"):
            validate_openings(wall, corners)

    def test_opening_clear_of_reflex_corner(self):
        wall, corners = _l_shape_wall([door(1000, 580)])
        validate_openings(wall, corners)

    def test_convex_corners_allow_full_inside_length(self, perimeter):
        wall = perimeter.walls[0].model_copy(update={"openings": [door(3100, 900)]})
        validate_openings(wall, calculate_wall_corner_info(perimeter, 0))

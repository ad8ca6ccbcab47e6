"""Tests for wall tops following the roof."""
import pytest

from envelope.models import (
    ConstructionElement, ElementType, Polygon2D, Roof, StoreyContext, Vec2,
)
from envelope.models.defaults import TIMBER
from envelope.core.constructor import PerimeterConstructor
from envelope.core.roof import roof_underside
from envelope.core.shapes import create_cuboid_element
from envelope.core.wall_top import WallTopProfile, clip_element, wall_top_profile

from conftest import rectangle_definition, wall_context


TOP_PLATE = 60.0


def _gable():
    # Ridge runs east-west through the middle of the 6000x4000 rectangle
    return Roof(
        ridge_line={"start": {"x": -1000, "y": 2000}, "end": {"x": 7000, "y": 2000}},
        slope=30, ridge_height=4000, thickness=200, overhang=500,
        outline=Polygon2D.from_tuples([(-420, -420), (-420, 4420), (6420, 4420), (6420, -420)]),
    )


def _post(x, bottom, height, width=200):
    return create_cuboid_element(ElementType.POST, TIMBER, (x, 30, bottom), (width, 360, height))


class TestWallTopProfile:
    def test_flat_outline_is_a_rectangle(self):
        profile = WallTopProfile.flat(2440, -840, 4840)
        assert profile.is_level
        assert profile.polygon(0, 1000, 60).bounds == pytest.approx((0, 60, 1000, 2440))

    def test_min_and_max_between(self):
        profile = WallTopProfile(points=((0, 2000), (1000, 3000), (2000, 2000)))
        assert profile.max_between(500, 1500) == pytest.approx(3000)
        assert profile.min_between(500, 1500) == pytest.approx(2500)
        assert profile.top_at(250) == pytest.approx(2250)

    def test_jump_takes_the_lower_side(self):
        profile = WallTopProfile(points=((0, 2500), (1000, 2500), (1000, 2000), (2000, 2000)))
        assert profile.top_at(1000) == pytest.approx(2000)
        assert profile.max_between(500, 1500) == pytest.approx(2500)

    def test_ends_continue_level(self):
        profile = WallTopProfile(points=((0, 2000), (1000, 3000)))
        assert profile.top_at(-500) == pytest.approx(2000)
        assert profile.top_at(1500) == pytest.approx(3000)

    def test_without_roof_the_top_is_the_storey_top(self, perimeter_context):
        profile = wall_top_profile(wall_context(perimeter_context, 0))
        assert profile.is_level
        assert profile.max_z == pytest.approx(2500)


class TestClipElement:
    def test_box_below_the_top_is_untouched(self):
        post = _post(400, 60, 1000)
        profile = WallTopProfile(points=((0, 2000), (1000, 3000)))
        assert clip_element(post, profile) == [post]

    def test_box_is_cut_along_the_slope(self):
        post = _post(400, 60, 2940)
        profile = WallTopProfile(points=((0, 2000), (1000, 3000)))
        [clipped] = clip_element(post, profile)
        assert clipped.id == post.id
        assert clipped.shape.type == "extrusion"
        assert clipped.bounds.min.as_tuple() == pytest.approx((400, 30, 60))
        assert clipped.bounds.max.as_tuple() == pytest.approx((600, 390, 2600))

    def test_box_over_a_dip_splits(self):
        post = _post(0, 1500, 1000, width=1000)
        profile = WallTopProfile(points=((0, 3000), (500, 1000), (1000, 3000)))
        parts = clip_element(post, profile)
        assert len(parts) == 2
        assert post.id in [p.id for p in parts]
        assert len({p.id for p in parts}) == 2
        xs = sorted((p.bounds.min.x, p.bounds.max.x) for p in parts)
        assert xs == [pytest.approx((0, 375)), pytest.approx((625, 1000))]

    def test_box_above_the_top_is_dropped(self):
        post = _post(0, 2600, 200)
        assert clip_element(post, WallTopProfile.flat(2440, -500, 1500)) == []


class TestWallsUnderRoof:
    @pytest.fixture
    def model(self, registry, catalog):
        storey = StoreyContext(height=2500, roof=_gable())
        return PerimeterConstructor(registry).construct(rectangle_definition(), storey, catalog)

    def _wall(self, model, label):
        return next(e for e in model.elements if getattr(e, "label", None) == label)

    def test_eave_walls_meet_the_top_beam(self, model):
        eave = roof_underside(_gable(), Vec2(x=3000, y=4000)) - TOP_PLATE
        level_beams = [
            e for e in model.elements
            if isinstance(e, ConstructionElement) and e.type == ElementType.RING_BEAM
            and e.shape.type == "extrusion" and e.bounds.min.z > 1000
        ]
        assert len(level_beams) == 2
        for beam in level_beams:
            assert beam.bounds.min.z == pytest.approx(eave)
        # Walls 2 and 4 run along the eaves, parallel to the ridge
        assert self._wall(model, "Wall 2").bounds.max.z == pytest.approx(eave)
        assert self._wall(model, "Wall 4").bounds.max.z == pytest.approx(eave)

    def test_gable_walls_rise_to_the_ridge(self, model):
        ridge = roof_underside(_gable(), Vec2(x=0, y=2000)) - TOP_PLATE
        for label in ("Wall 1", "Wall 3"):
            assert self._wall(model, label).bounds.max.z == pytest.approx(ridge)

    def test_gable_wall_profile_follows_roof_underside(self, registry, catalog):
        storey = StoreyContext(height=2500, roof=_gable())
        context = PerimeterConstructor(registry).create_context(rectangle_definition(), storey, catalog)
        profile = wall_top_profile(wall_context(context, 0))
        # Wall 1 runs north along x = 0, so wall-local x is plan y
        for x in (-420, 0, 1000, 2000, 3300, 4000):
            expected = roof_underside(_gable(), Vec2(x=0, y=x)) - TOP_PLATE
            assert profile.top_at(x) == pytest.approx(expected)

    def test_no_element_pokes_through_the_roof(self, registry, catalog):
        storey = StoreyContext(height=2500, roof=_gable())
        constructor = PerimeterConstructor(registry)
        context = constructor.create_context(rectangle_definition(), storey, catalog)
        model = constructor.construct_wall(context, 0)
        profile = wall_top_profile(wall_context(context, 0))
        for element in model.iter_elements():
            b = element.bounds
            assert b.max.z <= profile.max_between(b.min.x, b.max.x) + 1e-6

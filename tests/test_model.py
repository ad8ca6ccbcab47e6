"""Tests for model composition, tagged results and the geometry cache."""
import math

import pytest

from envelope.models import (
    Bounds3D, ConstructionModel, ElementType, IDENTITY_TRANSFORM, Measurement,
    Transform, Vec3,
)
from envelope.models.defaults import STRAW, TIMBER
from envelope.core.cache import GeometryCache, key_for
from envelope.core.model import create_group, merge_models, model_from_results, transform_model
from envelope.core.results import (
    aggregate_results, element_result, error_result, measurement_result, warning_result,
)
from envelope.core.shapes import (
    create_boolean, create_cuboid, create_cuboid_element, shape_volume,
)


def _model(position, size, material=TIMBER):
    post = create_cuboid_element(ElementType.POST, material, position, size)
    return model_from_results([
        element_result(post),
        measurement_result(Measurement(
            start_point=Vec3.of(*position),
            end_point=Vec3(x=position[0] + size[0], y=position[1], z=position[2]),
            label="width",
        )),
        warning_result("check", [post], code="test"),
    ])


class TestResults:
    def test_aggregate_keeps_order_per_kind(self):
        a = create_cuboid_element(ElementType.POST, TIMBER, (0, 0, 0), (60, 360, 2000))
        b = create_cuboid_element(ElementType.STRAW, STRAW, (60, 0, 0), (800, 360, 500))
        out = aggregate_results([
            element_result(a), error_result("bad", [a]), element_result(b), warning_result("meh", [b.id]),
        ])
        assert [e.id for e in out.elements] == [a.id, b.id]
        assert out.errors[0].elements == [a.id]
        assert out.errors[0].bounds == a.bounds
        assert out.warnings[0].elements == [b.id]
        assert out.warnings[0].bounds is None

    def test_unknown_result_rejected(self):
        with pytest.raises(TypeError):
            aggregate_results(["not a result"])

    def test_model_stats(self):
        model = _model((0, 0, 0), (60, 360, 2000))
        assert model.stats.total_elements == 1
        assert model.stats.by_type == {"post": 1}
        assert model.stats.warnings == 1


class TestMergeModels:
    def test_bounds_are_union(self):
        a = _model((0, 0, 0), (60, 360, 2000))
        b = _model((1000, -100, 500), (60, 360, 2500))
        merged = merge_models(a, b)
        assert merged.bounds.min.as_tuple() == pytest.approx((0, -100, 0))
        assert merged.bounds.max.as_tuple() == pytest.approx((1060, 360, 3000))
        assert len(merged.elements) == 2
        assert len(merged.measurements) == 2
        assert len(merged.warnings) == 2

    def test_inputs_untouched(self):
        a = _model((0, 0, 0), (60, 360, 2000))
        merge_models(a, _model((100, 0, 0), (60, 360, 2000)))
        assert len(a.elements) == 1

    def test_empty_merge(self):
        merged = merge_models(ConstructionModel(), ConstructionModel())
        assert merged.bounds is None
        assert merged.elements == []


class TestTransformModel:
    def test_identity_round_trip(self):
        model = _model((10, 20, 30), (60, 360, 2000))
        result = transform_model(model, IDENTITY_TRANSFORM)
        assert [e.id for e in result.elements] == [e.id for e in model.elements]
        assert result.bounds == model.bounds
        assert result.measurements == model.measurements

    def test_rotation_wraps_in_group(self):
        model = _model((0, 0, 0), (1000, 100, 500))
        transform = Transform(position=Vec3(x=500, y=0, z=0), rotation=Vec3(z=math.pi / 2))
        result = transform_model(model, transform, label="Wall 1", tags={"wall": "w"})

        assert len(result.elements) == 1
        group = result.elements[0]
        assert group.label == "Wall 1"
        assert group.children[0].id == model.elements[0].id
        assert result.bounds.min.as_tuple() == pytest.approx((400, 0, 0))
        assert result.bounds.max.as_tuple() == pytest.approx((500, 1000, 500))

        m = result.measurements[0]
        assert m.end_point.as_tuple() == pytest.approx((500, 1000, 0))
        assert result.warnings[0].bounds == result.bounds

    def test_group_bounds_in_parent_frame(self):
        post = create_cuboid_element(ElementType.POST, TIMBER, (0, 0, 0), (60, 360, 2000))
        group = create_group([post], Transform.translation(z=100))
        assert group.bounds.min.z == pytest.approx(100)
        assert group.bounds.max.z == pytest.approx(2100)


class TestGeometryCache:
    def test_hits_for_equal_shapes(self):
        cache = GeometryCache(shape_volume)
        first = cache.get_or_build(create_cuboid((0, 0, 0), (100, 200, 300)))
        second = cache.get_or_build(create_cuboid((0.0, -0.0, 0), (100, 200, 300.0000001)))
        assert first == second == pytest.approx(6_000_000)
        assert (cache.hits, cache.misses, len(cache)) == (1, 1, 1)

    def test_boolean_operand_order_does_not_matter(self):
        a = create_cuboid((0, 0, 0), (100, 100, 100))
        b = create_cuboid((50, 0, 0), (100, 100, 100))
        shift = Transform.translation(z=10)
        union_ab = create_boolean("union", [(a, IDENTITY_TRANSFORM), (b, shift)])
        union_ba = create_boolean("union", [(b, shift), (a, IDENTITY_TRANSFORM)])
        assert key_for(union_ab) == key_for(union_ba)

        subtract_ab = create_boolean("subtract", [(a, IDENTITY_TRANSFORM), (b, shift)])
        subtract_ba = create_boolean("subtract", [(b, shift), (a, IDENTITY_TRANSFORM)])
        assert key_for(subtract_ab) != key_for(subtract_ba)

    def test_clear(self):
        cache = GeometryCache(shape_volume)
        shape = create_cuboid((0, 0, 0), (1, 1, 1))
        cache.get_or_build(shape)
        assert cache.contains(shape)
        cache.clear()
        assert len(cache) == 0
        assert not cache.contains(shape)
        assert cache.misses == 0

    def test_builder_called_once_per_key(self):
        calls = []

        def builder(shape):
            calls.append(shape)
            return object()

        cache = GeometryCache(builder)
        shape = create_cuboid((0, 0, 0), (10, 10, 10))
        assert cache.get_or_build(shape) is cache.get_or_build(shape)
        assert len(calls) == 1


class TestBounds:
    def test_merge_skips_missing(self):
        box = Bounds3D.from_cuboid(Vec3(), Vec3(x=1, y=2, z=3))
        assert Bounds3D.merge(None, box, None) == box
        assert Bounds3D.merge() is None

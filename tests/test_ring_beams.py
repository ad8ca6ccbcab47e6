"""Tests for ring beam runs, corner cuts and roof adaptation."""
import pytest
from shapely.geometry import Polygon
from shapely.ops import unary_union

from envelope.models import (
    CornerOwner, DoubleRingBeamConfig, ElementType, PerimeterDefinition, Polygon2D,
    Roof, StoreyContext, Vec2, WallDefinition,
)
from envelope.models.defaults import DEFAULT_RING_BEAM, DEFAULT_WALL_ASSEMBLY, STRAW, TIMBER
from envelope.assemblies.ring_beam.double import DoubleRingBeamAssembly
from envelope.assemblies.ring_beam.full import FullRingBeamAssembly
from envelope.core.resolver import PerimeterGeometryResolver
from envelope.core.results import aggregate_results
from envelope.core.ring_beams import band_polygon, cap_uses_outer_edge, ring_beam_runs

from conftest import rectangle_definition


def _resolve(points):
    return PerimeterGeometryResolver().resolve(PerimeterDefinition(
        boundary=[Vec2(x=x, y=y) for x, y in points],
        walls=[WallDefinition(thickness=420, wall_assembly_id=DEFAULT_WALL_ASSEMBLY) for _ in points],
    ))


def _band_polygons(perimeter, inner=30.0, outer=390.0):
    return [Polygon(band_polygon(run, inner, outer).as_tuples()) for run in ring_beam_runs(perimeter)]


class TestRuns:
    def test_rectangle_has_four_runs(self, perimeter):
        runs = ring_beam_runs(perimeter)
        assert [(r.start_index, r.end_index) for r in runs] == [(0, 0), (1, 1), (2, 2), (3, 3)]

    def test_colinear_walls_share_a_run(self):
        perimeter = _resolve([(0, 0), (0, 2000), (0, 4000), (3000, 4000), (3000, 0)])
        runs = ring_beam_runs(perimeter)
        assert len(runs) == 4
        assert any(r.wall_indices == [0, 1] for r in runs)


class TestCapTruthTable:
    @pytest.mark.parametrize("convex, owned, outer", [
        (True, True, True),
        (True, False, False),
        (False, True, False),
        (False, False, True),
    ])
    def test_table(self, perimeter, convex, owned, outer):
        corner = perimeter.corners[0].model_copy(update={"interior_angle": 1.5 if convex else 4.7})
        assert cap_uses_outer_edge(corner, owned) is outer


class TestBandPolygons:
    def test_rectangle_corners_meet_without_gap_or_overlap(self, perimeter):
        polygons = _band_polygons(perimeter)
        assert len(polygons) == 4
        union = unary_union(polygons)
        assert union.area == pytest.approx(sum(p.area for p in polygons))
        ring = 6780 * 4780 - 6060 * 4060
        assert union.area == pytest.approx(ring)
        assert len(union.interiors) == 1

    def test_owner_reaches_across_corner(self, perimeter):
        polygon = _band_polygons(perimeter)[0]
        min_x, min_y, max_x, max_y = polygon.bounds
        assert (min_x, max_x) == pytest.approx((-390, -30))
        assert (min_y, max_y) == pytest.approx((-390, 4030))

    def test_reflex_corner_without_gap_or_overlap(self):
        perimeter = _resolve([(0, 0), (0, 4000), (3000, 4000), (3000, 2000), (6000, 2000), (6000, 0)])
        polygons = _band_polygons(perimeter)
        union = unary_union(polygons)
        assert union.geom_type == "Polygon"
        assert union.area == pytest.approx(sum(p.area for p in polygons))
        assert len(union.interiors) == 1

    def test_ownership_override_keeps_corners_closed(self):
        definition = rectangle_definition()
        definition.corner_owners = [CornerOwner.PREVIOUS, None, CornerOwner.PREVIOUS, None]
        perimeter = PerimeterGeometryResolver().resolve(definition)
        polygons = _band_polygons(perimeter)
        union = unary_union(polygons)
        assert union.area == pytest.approx(sum(p.area for p in polygons))
        assert union.area == pytest.approx(6780 * 4780 - 6060 * 4060)


class TestAssemblies:
    def test_full_beam_elements(self, perimeter, catalog):
        config = catalog.get_ring_beam_assembly(DEFAULT_RING_BEAM)
        run = ring_beam_runs(perimeter)[0]
        out = aggregate_results(FullRingBeamAssembly().construct(config, run, elevation=0.0))
        assert len(out.elements) == 1
        beam = out.elements[0]
        assert beam.type == ElementType.RING_BEAM
        assert beam.bounds.min.z == pytest.approx(0)
        assert beam.bounds.max.z == pytest.approx(60)

    def test_double_beam_bands(self, perimeter):
        config = DoubleRingBeamConfig(
            id="double", height=80, thickness=120, spacing=100, offset_from_edge=20,
            material=TIMBER, infill_material=STRAW,
        )
        run = ring_beam_runs(perimeter)[0]
        bands = DoubleRingBeamAssembly().bands(config, run)
        assert [(b.inner, b.outer) for b in bands] == [(20, 140), (240, 360), (140, 240)]
        assert [b.type for b in bands] == [ElementType.RING_BEAM, ElementType.RING_BEAM, ElementType.INFILL]


def _gable(outline=((-420, -420), (-420, 4420), (6420, 4420), (6420, -420))):
    return Roof(
        ridge_line={"start": {"x": -1000, "y": 2000}, "end": {"x": 7000, "y": 2000}},
        slope=30, ridge_height=4000, thickness=200, overhang=500,
        outline=Polygon2D.from_tuples(outline),
    )


class TestRoofAdaptation:
    def test_sloped_pieces_on_both_sides_of_ridge(self, perimeter, catalog):
        config = catalog.get_ring_beam_assembly(DEFAULT_RING_BEAM)
        storey = StoreyContext(height=2500, roof=_gable())
        run = ring_beam_runs(perimeter)[0]
        out = aggregate_results(FullRingBeamAssembly().construct(config, run, 2440.0, storey))
        assert len(out.elements) == 2
        for element in out.elements:
            assert element.shape.type == "boolean"
            assert element.shape.operation == "intersect"
            assert element.tags == {"ring_beam": DEFAULT_RING_BEAM}

    def test_run_parallel_to_ridge_is_flat_pieces(self, perimeter, catalog):
        config = catalog.get_ring_beam_assembly(DEFAULT_RING_BEAM)
        storey = StoreyContext(height=2500, roof=_gable())
        run = ring_beam_runs(perimeter)[1]
        out = aggregate_results(FullRingBeamAssembly().construct(config, run, 2440.0, storey))
        assert len(out.elements) == 1
        assert out.elements[0].shape.type == "extrusion"

    def test_roof_elsewhere_keeps_beam_flat(self, perimeter, catalog):
        config = catalog.get_ring_beam_assembly(DEFAULT_RING_BEAM)
        far = ((20000, 20000), (20000, 24000), (24000, 24000), (24000, 20000))
        storey = StoreyContext(height=2500, roof=_gable(far))
        run = ring_beam_runs(perimeter)[0]
        out = aggregate_results(FullRingBeamAssembly().construct(config, run, 2440.0, storey))
        assert len(out.elements) == 1
        assert out.elements[0].bounds.min.z == pytest.approx(2440)

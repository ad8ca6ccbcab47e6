"""Finish layers: inside and outside layer polygons, trimmed at the corners."""

from __future__ import annotations
import logging
from typing import Literal

from shapely.ops import unary_union

from envelope.models import (
    ElementType, LayerConfig, Transform, WallContext, WallLayersConfig,
)
from envelope.core.geometry import from_shapely, iter_polygons, rectangle
from envelope.core.results import ConstructionResult, element_result
from envelope.core.shapes import create_element, create_extruded_polygon
from envelope.core.wall_top import WallTopProfile, wall_top_profile

logger = logging.getLogger(__name__)

LayerSide = Literal["inside", "outside"]


def layer_extent(context: WallContext, side: LayerSide) -> tuple[float, float]:
    """
    Wall-local x range a side's layers cover.

    The wall owning a corner reaches past it by whatever the neighbour's
    layers leave open; the other wall is cut back by the neighbour's layers.
    """
    pctx = context.perimeter_context
    wall = context.wall
    start_corner = pctx.start_corner(context.index)
    end_corner = pctx.end_corner(context.index)
    previous_layers = context.catalog.get_wall_assembly(pctx.previous_wall(context.index).wall_assembly_id).layers
    next_layers = context.catalog.get_wall_assembly(pctx.next_wall(context.index).wall_assembly_id).layers

    if side == "inside":
        start_distance = wall.inside_line.start.distance_to(start_corner.inside_point)
        end_distance = wall.inside_line.end.distance_to(end_corner.inside_point)
        previous_thickness = previous_layers.inside_thickness
        next_thickness = next_layers.inside_thickness
        length = wall.inside_length
    else:
        start_distance = wall.outside_line.start.distance_to(start_corner.outside_point)
        end_distance = wall.outside_line.end.distance_to(end_corner.outside_point)
        previous_thickness = previous_layers.outside_thickness
        next_thickness = next_layers.outside_thickness
        length = wall.outside_length

    start_delta = start_distance - previous_thickness
    end_delta = end_distance - next_thickness

    if context.corners.start.constructed_by_this_wall:
        start_offset = max(start_delta, 0.0)
    else:
        start_offset = min(start_delta, 0.0)
    if context.corners.end.constructed_by_this_wall:
        end_offset = max(end_delta, 0.0)
    else:
        end_offset = min(end_delta, 0.0)

    return -start_offset, length + end_offset


def layer_polygons(context: WallContext, side: LayerSide, profile: WallTopProfile | None = None):
    """Side outline in the xz plane up to the wall top, with opening cut-outs."""
    profile = profile or wall_top_profile(context)
    start, end = layer_extent(context, side)
    bottom, top = context.bottom, profile.max_z
    if end <= start or top <= bottom:
        return []

    outline = profile.polygon(start, end, bottom)
    cutouts = []
    for opening in context.wall.openings:
        lo, hi = max(opening.offset, start), min(opening.end, end)
        z_lo, z_hi = max(opening.sill, bottom), min(opening.header_height, top)
        if hi > lo and z_hi > z_lo:
            cutouts.append(rectangle(lo, z_lo, hi, z_hi))

    if cutouts:
        outline = outline.difference(unary_union(cutouts))
    return iter_polygons(outline)


def _layer_elements(
    polygons, layer: LayerConfig, y: float, side: LayerSide,
) -> list[ConstructionResult]:
    results: list[ConstructionResult] = []
    for polygon in polygons:
        shape = create_extruded_polygon(from_shapely(polygon), "xz", layer.thickness)
        results.append(element_result(create_element(
            ElementType.LAYER, layer.material, shape,
            transform=Transform.translation(y=y),
            tags={"layer": layer.name, "side": side},
        )))
    return results


def construct_wall_layers(
    context: WallContext, layers: WallLayersConfig, profile: WallTopProfile | None = None,
) -> list[ConstructionResult]:
    """
    Build every configured finish layer of one wall.

    Layers sit within the wall thickness and stack from the core outward:
    inside layers towards y = 0, outside layers towards y = thickness.
    """
    results: list[ConstructionResult] = []
    thickness = context.wall.thickness

    if layers.inside_layers:
        polygons = layer_polygons(context, "inside", profile)
        accumulated = 0.0
        for layer in layers.inside_layers:
            y = layers.inside_thickness - accumulated - layer.thickness
            results.extend(_layer_elements(polygons, layer, y, "inside"))
            accumulated += layer.thickness

    if layers.outside_layers:
        polygons = layer_polygons(context, "outside", profile)
        accumulated = 0.0
        for layer in layers.outside_layers:
            y = thickness - layers.outside_thickness + accumulated
            results.extend(_layer_elements(polygons, layer, y, "outside"))
            accumulated += layer.thickness

    logger.debug("Wall %s: %d layer elements", context.wall.id, len(results))
    return results

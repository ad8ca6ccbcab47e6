"""Shared wall construction: segments, openings, layers, annotations.

Wall assemblies differ only in how they fill a plain wall area; this module
walks the wall's segments, frames the openings and adds finish layers,
measurements and corner highlights around whatever fill they provide.
"""

from __future__ import annotations
import logging

from envelope.models import (
    BaseWallAssemblyConfig, ConstructionModel, ConstructionValidationError,
    Measurement, Vec3, WallContext,
)
from envelope.core.corners import corner_areas
from envelope.core.infill import InfillFunction
from envelope.core.layers import construct_wall_layers
from envelope.core.model import model_from_results
from envelope.core.openings import OpeningFramer
from envelope.core.results import ConstructionResult, area_result, measurement_result
from envelope.core.segmentation import WallSegment, segment_wall
from envelope.core.wall_top import WallTopProfile, clip_to_wall_top, wall_top_profile

logger = logging.getLogger(__name__)


def core_depth(context: WallContext, config: BaseWallAssemblyConfig) -> tuple[float, float]:
    """(y start, depth) of the structural core between the finish layers."""
    layers = config.layers
    depth = context.wall.thickness - layers.inside_thickness - layers.outside_thickness
    if depth <= 0:
        raise ConstructionValidationError(
            f"Wall {context.wall.id}: layers ({layers.inside_thickness + layers.outside_thickness:.0f}mm) "
            f"leave no room in a {context.wall.thickness:.0f}mm wall"
        )
    return layers.inside_thickness, depth


def _measurements(
    context: WallContext, segments: list[WallSegment], x0: float, profile: WallTopProfile,
) -> list[ConstructionResult]:
    wall = context.wall
    results: list[ConstructionResult] = [
        measurement_result(Measurement(
            start_point=Vec3(x=0, y=0, z=0),
            end_point=Vec3(x=wall.inside_length, y=0, z=0),
            label=f"{wall.inside_length:.0f}",
            offset=-60,
            group_key="inside",
        )),
        measurement_result(Measurement(
            start_point=Vec3(x=x0, y=wall.thickness, z=0),
            end_point=Vec3(x=x0 + context.construction_length, y=wall.thickness, z=0),
            label=f"{context.construction_length:.0f}",
            offset=60,
            group_key="construction",
        )),
    ]
    for segment in segments:
        if segment.type != "opening":
            continue
        top = profile.min_between(x0 + segment.start, x0 + segment.end)
        results.append(measurement_result(Measurement(
            start_point=Vec3(x=x0 + segment.start, y=0, z=top),
            end_point=Vec3(x=x0 + segment.end, y=0, z=top),
            label=f"{segment.width:.0f}",
            offset=60,
            group_key="openings",
        )))
        results.append(measurement_result(Measurement(
            start_point=Vec3(x=x0 + segment.start, y=0, z=segment.sill_height),
            end_point=Vec3(x=x0 + segment.start, y=0, z=segment.header_height),
            label=f"{segment.header_height - segment.sill_height:.0f}",
            offset=-60,
            group_key="openings",
            tags={"direction": "vertical"},
        )))
    return results


def construct_segmented_wall(
    context: WallContext,
    config: BaseWallAssemblyConfig,
    fill: InfillFunction,
) -> ConstructionModel:
    """
    Construct one wall with `fill` building every plain wall area.

    Segments are laid out over the corner-extended construction length.
    Wall areas next to an opening get a stand on that side; wall ends at
    corners do not. Every area is built up to the highest wall top above it
    and clipped to the wall top afterwards.
    """
    wall = context.wall
    catalog = context.catalog
    y0, depth = core_depth(context, config)
    bottom = context.bottom
    profile = wall_top_profile(context)
    x0 = context.construction_start

    segments = segment_wall(
        context.construction_length, wall.openings,
        opening_offset=context.corners.extension_start,
    )

    results: list[ConstructionResult] = []
    for i, segment in enumerate(segments):
        placed = segment.model_copy(update={"start": x0 + segment.start})
        top = profile.max_between(placed.start, placed.end)
        if segment.type == "wall":
            before = segments[i - 1] if i > 0 else None
            after = segments[i + 1] if i + 1 < len(segments) else None
            results.extend(fill(
                (placed.start, y0, bottom),
                (segment.width, depth, top - bottom),
                starts_with_stand=before is not None and before.type == "opening",
                ends_with_stand=after is not None and after.type == "opening",
            ))
        else:
            opening_config = catalog.resolve_opening_config(segment.openings[0], config)
            framer = OpeningFramer(opening_config, fill)
            lowest = profile.min_between(placed.start, placed.end)
            results.extend(framer.frame(placed, depth, bottom, lowest, y=y0, fill_top=top))

    results = clip_to_wall_top(results, profile)
    results.extend(construct_wall_layers(context, config.layers, profile))
    results.extend(_measurements(context, segments, x0, profile))
    for area in corner_areas(context.corners, wall.inside_length, wall.thickness, bottom, profile.max_z):
        results.append(area_result(area))

    model = model_from_results(results)
    if model.errors:
        logger.warning("Wall %s constructed with %d errors", wall.id, len(model.errors))
    logger.debug(
        "Wall %s: %d segments, %d elements", wall.id, len(segments), model.stats.total_elements,
    )
    return model

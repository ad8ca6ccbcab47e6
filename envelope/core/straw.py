"""Straw bale infill for a rectangular bay."""

from __future__ import annotations

from envelope.models import ElementType, StrawConfig
from envelope.core.results import (
    ConstructionResult, element_result, error_result, warning_result,
)
from envelope.core.shapes import create_cuboid_element

TOLERANCE = 1e-6


def construct_straw(
    position: tuple[float, float, float],
    size: tuple[float, float, float],
    config: StrawConfig,
) -> list[ConstructionResult]:
    """
    Fill a box with bales laid in courses.

    Bales run along x, courses stack along z. Bays that do not divide into
    whole bales get partial bales at the end of each course and in the top
    course. A depth that differs from the bale width cannot be built from
    bales; one straw block is emitted instead, with an error when the wall is
    too thick and a warning when it is too thin.
    """
    x0, y0, z0 = position
    width, depth, height = size

    if abs(depth - config.bale_width) <= TOLERANCE:
        results: list[ConstructionResult] = []
        z = z0
        while z < z0 + height - TOLERANCE:
            bale_h = min(config.bale_height, z0 + height - z)
            x = x0
            while x < x0 + width - TOLERANCE:
                bale_l = min(config.bale_length, x0 + width - x)
                full = (
                    abs(bale_l - config.bale_length) <= TOLERANCE
                    and abs(bale_h - config.bale_height) <= TOLERANCE
                )
                results.append(element_result(create_cuboid_element(
                    ElementType.FULL_STRAWBALE if full else ElementType.PARTIAL_STRAWBALE,
                    config.material,
                    (x, y0, z),
                    (bale_l, config.bale_width, bale_h),
                )))
                x += config.bale_length
            z += config.bale_height
        return results

    block = create_cuboid_element(ElementType.STRAW, config.material, position, size)
    if depth > config.bale_width:
        return [
            element_result(block),
            error_result("Wall is too thick for a single strawbale", [block], code="straw-too-thick"),
        ]
    return [
        element_result(block),
        warning_result("Wall is too thin for a single strawbale", [block], code="straw-too-thin"),
    ]

"""Structural posts: single full-depth posts or double posts with an infill strip."""

from __future__ import annotations

from envelope.models import (
    AssemblyCatalog, DoublePostConfig, ElementType, FullPostConfig, PostConfig,
)
from envelope.models.ids import MaterialId
from envelope.core.results import (
    ConstructionResult, element_result, error_result, warning_result,
)
from envelope.core.shapes import create_cuboid_element


def _stock_check(
    results: list[ConstructionResult],
    catalog: AssemblyCatalog,
    material_id: MaterialId,
    a: float,
    b: float,
) -> None:
    material = catalog.resolve_material(material_id)
    if material is None or not material.is_dimensional:
        return
    if not material.has_cross_section(a, b):
        posts = [
            r.element for r in results
            if r.type == "element" and r.element.type == ElementType.POST
        ]
        results.append(warning_result(
            f"Post cross section {a:.0f}x{b:.0f}mm is not available for {material.name}",
            posts,
            code="post-cross-section",
        ))


def construct_post(
    x: float,
    y: float,
    depth: float,
    bottom: float,
    height: float,
    config: PostConfig,
    catalog: AssemblyCatalog,
) -> list[ConstructionResult]:
    """A post of `config.width` starting at x, spanning [y, y + depth] across the wall."""
    if isinstance(config, FullPostConfig):
        return _full_post(x, y, depth, bottom, height, config, catalog)
    return _double_post(x, y, depth, bottom, height, config, catalog)


def _full_post(
    x: float, y: float, depth: float, bottom: float, height: float,
    config: FullPostConfig, catalog: AssemblyCatalog,
) -> list[ConstructionResult]:
    results: list[ConstructionResult] = [element_result(create_cuboid_element(
        ElementType.POST, config.material,
        (x, y, bottom), (config.width, depth, height),
    ))]
    _stock_check(results, catalog, config.material, config.width, depth)
    return results


def _double_post(
    x: float, y: float, depth: float, bottom: float, height: float,
    config: DoublePostConfig, catalog: AssemblyCatalog,
) -> list[ConstructionResult]:
    t = config.thickness
    inner = create_cuboid_element(
        ElementType.POST, config.material, (x, y, bottom), (config.width, t, height),
    )
    outer = create_cuboid_element(
        ElementType.POST, config.material, (x, y + depth - t, bottom), (config.width, t, height),
    )
    results: list[ConstructionResult] = [element_result(inner), element_result(outer)]

    gap = depth - 2 * t
    if gap > 0:
        results.append(element_result(create_cuboid_element(
            ElementType.INFILL, config.infill_material,
            (x, y + t, bottom), (config.width, gap, height),
        )))
    elif gap < 0:
        results.append(error_result(
            f"Wall is too thin for a double post: needs {2 * t:.0f}mm but only {depth:.0f}mm available",
            [inner, outer],
            code="double-post-depth",
        ))

    _stock_check(results, catalog, config.material, config.width, t)
    return results

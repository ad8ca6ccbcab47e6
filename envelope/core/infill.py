"""Infill layout: posts at uniform spacing with straw bales in the bays."""

from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from typing import Protocol

from envelope.models import AssemblyCatalog, Bounds3D, InfillConfig, Vec3
from envelope.core.posts import construct_post
from envelope.core.results import (
    ConstructionResult, elements_of, error_result, warning_result,
)
from envelope.core.straw import construct_straw

logger = logging.getLogger(__name__)

TOLERANCE = 1e-6


class InfillFunction(Protocol):
    def __call__(
        self,
        position: tuple[float, float, float],
        size: tuple[float, float, float],
        starts_with_stand: bool = False,
        ends_with_stand: bool = False,
    ) -> list[ConstructionResult]: ...


@dataclass(frozen=True)
class InfillLayout:
    """Post layout along one infill run, positions relative to the run start."""
    width: float
    count: int              # Number of bays
    spacing: float          # Center-to-center
    post_centers: list[float]
    within_bounds: bool


class InfillLayoutEngine:
    """
    Lays out posts and straw across rectangular wall areas.

    Spacing is best effort: a layout outside the configured bounds is still
    built and reported as one warning on the area.
    """

    def __init__(self, config: InfillConfig, catalog: AssemblyCatalog) -> None:
        self.config = config
        self.catalog = catalog

    def plan(self, width: float) -> InfillLayout:
        cfg = self.config
        count = max(1, math.ceil(width / cfg.desired_post_spacing - TOLERANCE))
        spacing = width / count
        return InfillLayout(
            width=width,
            count=count,
            spacing=spacing,
            post_centers=[i * spacing for i in range(1, count)],
            within_bounds=cfg.min_straw_space - TOLERANCE <= spacing <= cfg.max_post_spacing + TOLERANCE,
        )

    def fill(
        self,
        position: tuple[float, float, float],
        size: tuple[float, float, float],
        starts_with_stand: bool = False,
        ends_with_stand: bool = False,
    ) -> list[ConstructionResult]:
        """Fill the box at `position` (wall-local) with posts and straw."""
        x0, y0, z0 = position
        width, depth, height = size
        if width <= TOLERANCE or height <= TOLERANCE:
            return []

        cfg = self.config
        post_width = cfg.posts.width
        area_bounds = Bounds3D(
            min=Vec3(x=x0, y=y0, z=z0),
            max=Vec3(x=x0 + width, y=y0 + depth, z=z0 + height),
        )
        results: list[ConstructionResult] = []
        issues: list[ConstructionResult] = []

        def post_at(x: float) -> None:
            results.extend(construct_post(x, y0, depth, z0, height, cfg.posts, self.catalog))

        if starts_with_stand or ends_with_stand:
            if abs(width - post_width) <= TOLERANCE:
                post_at(x0)
                return results
            if width < post_width:
                issues.append(error_result(
                    "Not enough space for a post", bounds=area_bounds, code="post-space",
                ))
                starts_with_stand = ends_with_stand = False
            elif starts_with_stand and ends_with_stand and width < 2 * post_width:
                issues.append(error_result(
                    "Space for more than one post, but not enough for two",
                    bounds=area_bounds, code="post-space",
                ))
                ends_with_stand = False

        left = x0
        right = x0 + width
        if starts_with_stand:
            post_at(left)
            left += post_width
        if ends_with_stand:
            post_at(right - post_width)
            right -= post_width

        if right - left > TOLERANCE:
            layout = self.plan(right - left)
            self._build_run(layout, left, y0, z0, depth, height, results)
            if not layout.within_bounds:
                issues.append(warning_result(
                    f"Post spacing {layout.spacing:.0f}mm is outside the allowed range "
                    f"{cfg.min_straw_space:.0f}-{cfg.max_post_spacing:.0f}mm",
                    elements_of(results),
                    code="infill-spacing",
                    bounds=area_bounds,
                ))

        if height < cfg.min_straw_space:
            issues.append(warning_result(
                "Not enough vertical space to fill with straw",
                elements_of(results),
                code="infill-height",
                bounds=area_bounds,
            ))

        logger.debug(
            "Infill %.0fx%.0fmm at x=%.0f: %d results", width, height, x0, len(results),
        )
        return results + issues

    def _build_run(
        self,
        layout: InfillLayout,
        left: float,
        y0: float,
        z0: float,
        depth: float,
        height: float,
        results: list[ConstructionResult],
    ) -> None:
        half = self.config.posts.width / 2
        bay_start = left
        for center in layout.post_centers:
            post_left = left + center - half
            self._bay(bay_start, post_left, y0, z0, depth, height, results)
            results.extend(construct_post(
                post_left, y0, depth, z0, height, self.config.posts, self.catalog,
            ))
            bay_start = post_left + self.config.posts.width
        self._bay(bay_start, left + layout.width, y0, z0, depth, height, results)

    def _bay(
        self, start: float, end: float, y0: float, z0: float, depth: float, height: float,
        results: list[ConstructionResult],
    ) -> None:
        if end - start <= TOLERANCE:
            return
        results.extend(construct_straw((start, y0, z0), (end - start, depth, height), self.config.straw))

"""Opening framing: headers, sills, fillings and the wall around them."""

from __future__ import annotations
import logging

from envelope.models import ElementType, OpeningConfig
from envelope.core.infill import InfillFunction
from envelope.core.results import ConstructionResult, element_result, error_result
from envelope.core.segmentation import WallSegment
from envelope.core.shapes import create_cuboid_element

logger = logging.getLogger(__name__)

TOLERANCE = 1e-6


class OpeningFramer:
    """
    Frames one opening segment.

    Elevations are measured from the storey floor; `bottom` and `top` bound
    the wall area the opening sits in. Whatever remains above the header and
    below the sill is handed to the infill function. Under a sloped wall top
    `top` is the lowest point above the opening and `fill_top` the highest.
    """

    def __init__(self, config: OpeningConfig, infill: InfillFunction) -> None:
        self.config = config
        self.infill = infill

    def frame(
        self,
        segment: WallSegment,
        depth: float,
        bottom: float,
        top: float,
        y: float = 0.0,
        fill_top: float | None = None,
    ) -> list[ConstructionResult]:
        if segment.type != "opening" or not segment.openings:
            raise ValueError("OpeningFramer requires an opening segment")

        cfg = self.config
        x = segment.start
        width = segment.width
        sill_height = segment.sill_height
        header_height = segment.header_height
        results: list[ConstructionResult] = []

        header_required = header_height < top - TOLERANCE
        if header_required:
            header = create_cuboid_element(
                ElementType.HEADER, cfg.header_material,
                (x, y, header_height), (width, depth, cfg.header_thickness),
            )
            results.append(element_result(header))
            available = top - header_height
            if cfg.header_thickness > available + TOLERANCE:
                results.append(error_result(
                    f"Header does not fit: needs {cfg.header_thickness:.0f}mm "
                    f"but only {available:.0f}mm available",
                    [header],
                    code="header-fit",
                ))

        sill_thickness = 0.0
        if sill_height > 0 and cfg.sill_thickness and cfg.sill_material:
            sill_thickness = cfg.sill_thickness
            sill = create_cuboid_element(
                ElementType.SILL, cfg.sill_material,
                (x, y, sill_height - sill_thickness), (width, depth, sill_thickness),
            )
            results.append(element_result(sill))
            available = sill_height - bottom
            if sill_thickness > available + TOLERANCE:
                results.append(error_result(
                    f"Sill does not fit: needs {sill_thickness:.0f}mm "
                    f"but only {available:.0f}mm available",
                    [sill],
                    code="sill-fit",
                ))

        if cfg.filling_material and cfg.filling_thickness:
            results.extend(self._fillings(segment, depth, y))

        if header_required:
            above = header_height + cfg.header_thickness
            fill_top = top if fill_top is None else max(top, fill_top)
            if fill_top - above > TOLERANCE:
                results.extend(self.infill((x, y, above), (width, depth, fill_top - above)))

        if sill_height > 0:
            below = sill_height - sill_thickness
            if below - bottom > TOLERANCE:
                results.extend(self.infill((x, y, bottom), (width, depth, below - bottom)))

        logger.debug("Framed opening segment at x=%.0f, %d results", x, len(results))
        return results

    def _fillings(self, segment: WallSegment, depth: float, y: float) -> list[ConstructionResult]:
        cfg = self.config
        padding = cfg.padding
        thickness = cfg.filling_thickness or 0.0
        first = segment.openings[0]
        results: list[ConstructionResult] = []
        for opening in segment.openings:
            filling_width = opening.width - 2 * padding
            filling_height = opening.height - 2 * padding
            if filling_width <= 0 or filling_height <= 0:
                continue
            ox = segment.start + (opening.offset - first.offset)
            results.append(element_result(create_cuboid_element(
                ElementType.OPENING, cfg.filling_material,
                (ox + padding, y + (depth - thickness) / 2, opening.sill + padding),
                (filling_width, thickness, filling_height),
                tags={"opening": opening.id, "opening_type": opening.type.value},
            )))
        return results

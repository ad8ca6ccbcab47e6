"""Module wall: prefabricated straw modules, infill for the remainder.

Each module is a timber frame (two stiles and two rails) around a straw
core. Whole modules are placed from the start of every wall area; what is
left over is built by the infill engine.
"""

from __future__ import annotations

from envelope.assemblies.base import WallAssembly
from envelope.assemblies.wall.segmented import construct_segmented_wall
from envelope.core.infill import InfillLayoutEngine
from envelope.core.model import create_group
from envelope.core.results import ConstructionResult, element_result, elements_of, warning_result
from envelope.core.shapes import create_cuboid_element
from envelope.models import (
    Bounds3D, ConstructionModel, ElementType, ModuleConfig, ModulesWallConfig, Vec3, WallContext,
)

TOLERANCE = 1e-6


def construct_module(
    position: tuple[float, float, float],
    size: tuple[float, float, float],
    config: ModuleConfig,
    index: int,
) -> ConstructionResult:
    x, y, z = position
    width, depth, height = size
    fw = config.frame_width
    frame = config.frame_material

    children = [
        create_cuboid_element(ElementType.FRAME, frame, (x, y, z), (fw, depth, height)),
        create_cuboid_element(ElementType.FRAME, frame, (x + width - fw, y, z), (fw, depth, height)),
        create_cuboid_element(ElementType.FRAME, frame, (x + fw, y, z), (width - 2 * fw, depth, fw)),
        create_cuboid_element(
            ElementType.FRAME, frame, (x + fw, y, z + height - fw), (width - 2 * fw, depth, fw),
        ),
        create_cuboid_element(
            ElementType.STRAW, config.straw_material,
            (x + fw, y, z + fw), (width - 2 * fw, depth, height - 2 * fw),
        ),
    ]
    return element_result(create_group(children, label="Module", tags={"module": str(index)}))


class ModulesWallAssembly(WallAssembly):

    def get_id(self) -> str:
        return "modules"

    def get_name(self) -> str:
        return "Straw Modules"

    def construct(self, context: WallContext, config: ModulesWallConfig) -> ConstructionModel:
        engine = InfillLayoutEngine(config.infill, context.catalog)
        module = config.module

        def fill(
            position: tuple[float, float, float],
            size: tuple[float, float, float],
            starts_with_stand: bool = False,
            ends_with_stand: bool = False,
        ) -> list[ConstructionResult]:
            x, y, z = position
            width, depth, height = size
            if height < 2 * module.frame_width + TOLERANCE:
                # Too low for a module frame (e.g. above a header)
                return engine.fill(position, size, starts_with_stand, ends_with_stand)

            count = int((width + TOLERANCE) // module.width)
            results: list[ConstructionResult] = [
                construct_module((x + k * module.width, y, z), (module.width, depth, height), module, k)
                for k in range(count)
            ]
            remainder = width - count * module.width
            if remainder > TOLERANCE:
                # Without a module the remainder itself borders the opening
                fill_results = engine.fill(
                    (x + count * module.width, y, z), (remainder, depth, height),
                    starts_with_stand=starts_with_stand and count == 0,
                    ends_with_stand=ends_with_stand,
                )
                results.extend(fill_results)
                if count == 0:
                    results.append(warning_result(
                        f"Wall area of {width:.0f}mm is narrower than one module",
                        elements_of(fill_results),
                        code="module-width",
                        bounds=Bounds3D(
                            min=Vec3(x=x, y=y, z=z),
                            max=Vec3(x=x + width, y=y + depth, z=z + height),
                        ),
                    ))
            return results

        return construct_segmented_wall(context, config, fill)

"""Non-strawbale wall: one monolithic core block per wall area."""

from __future__ import annotations

from envelope.assemblies.base import WallAssembly
from envelope.assemblies.wall.segmented import construct_segmented_wall
from envelope.core.results import ConstructionResult, element_result
from envelope.core.shapes import create_cuboid_element
from envelope.models import ConstructionModel, ElementType, NonStrawbaleWallConfig, WallContext


class NonStrawbaleWallAssembly(WallAssembly):

    def get_id(self) -> str:
        return "non-strawbale"

    def get_name(self) -> str:
        return "Monolithic Wall"

    def construct(self, context: WallContext, config: NonStrawbaleWallConfig) -> ConstructionModel:

        def fill(
            position: tuple[float, float, float],
            size: tuple[float, float, float],
            starts_with_stand: bool = False,
            ends_with_stand: bool = False,
        ) -> list[ConstructionResult]:
            if size[0] <= 0 or size[2] <= 0:
                return []
            return [element_result(create_cuboid_element(
                ElementType.INFILL, config.material, position, size,
                tags={"construction": "monolithic"},
            ))]

        return construct_segmented_wall(context, config, fill)

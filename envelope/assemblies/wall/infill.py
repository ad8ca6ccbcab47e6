"""Infill wall: posts at regular spacing with straw bales between them."""

from __future__ import annotations

from envelope.assemblies.base import WallAssembly
from envelope.assemblies.wall.segmented import construct_segmented_wall
from envelope.core.infill import InfillLayoutEngine
from envelope.models import ConstructionModel, InfillWallConfig, WallContext


class InfillWallAssembly(WallAssembly):
    """Standard straw-bale infill: posts + bales per wall area."""

    def get_id(self) -> str:
        return "infill"

    def get_name(self) -> str:
        return "Post and Straw Infill"

    def construct(self, context: WallContext, config: InfillWallConfig) -> ConstructionModel:
        engine = InfillLayoutEngine(config.infill, context.catalog)
        return construct_segmented_wall(context, config, engine.fill)

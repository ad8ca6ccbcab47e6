"""Perimeter constructor: orchestrates geometry resolution and assemblies."""

from __future__ import annotations
import logging

from envelope.models import (
    AssemblyCatalog, ConstructionModel, PerimeterContext,
    PerimeterDefinition, StoreyContext, WallContext,
)
from envelope.models.ids import RingBeamAssemblyId
from envelope.core.corners import calculate_wall_corner_info
from envelope.core.geometry import heading_transform
from envelope.core.model import merge_models, model_from_results, transform_model
from envelope.core.registry import AssemblyRegistry
from envelope.core.resolver import PerimeterGeometryResolver
from envelope.core.ring_beams import ring_beam_runs
from envelope.core.segmentation import validate_openings

logger = logging.getLogger(__name__)


class PerimeterConstructor:
    """
    Stateless perimeter constructor.

    Takes a perimeter definition + storey + catalog, resolves geometry,
    builds ring beams and walls through the registered assemblies, and
    returns one merged ConstructionModel in plan coordinates.
    """

    def __init__(self, registry: AssemblyRegistry) -> None:
        self.registry = registry
        self.resolver = PerimeterGeometryResolver()

    def create_context(
        self,
        definition: PerimeterDefinition,
        storey: StoreyContext,
        catalog: AssemblyCatalog,
    ) -> PerimeterContext:
        """Resolve geometry and check every reference before building anything."""
        perimeter = self.resolver.resolve(definition)

        for index, wall in enumerate(perimeter.walls):
            config = catalog.get_wall_assembly(wall.wall_assembly_id)
            self.registry.get_wall_assembly(config.type)
            validate_openings(wall, calculate_wall_corner_info(perimeter, index))
            for opening in wall.openings:
                catalog.resolve_opening_config(opening, config)

        return PerimeterContext(
            perimeter=perimeter,
            storey=storey,
            catalog=catalog,
            base_plate_height=self._ring_beam_height(perimeter.base_ring_beam_assembly_id, catalog),
            top_plate_height=self._ring_beam_height(perimeter.top_ring_beam_assembly_id, catalog),
        )

    def construct(
        self,
        definition: PerimeterDefinition,
        storey: StoreyContext,
        catalog: AssemblyCatalog,
    ) -> ConstructionModel:
        context = self.create_context(definition, storey, catalog)
        perimeter = context.perimeter

        models: list[ConstructionModel] = []
        if perimeter.base_ring_beam_assembly_id:
            models.append(self.construct_ring_beam(context, perimeter.base_ring_beam_assembly_id, top=False))
        if perimeter.top_ring_beam_assembly_id:
            models.append(self.construct_ring_beam(context, perimeter.top_ring_beam_assembly_id, top=True))

        for index, wall in enumerate(perimeter.walls):
            local = self.construct_wall(context, index)
            models.append(transform_model(
                local,
                heading_transform(wall.inside_line.start, wall.direction),
                label=f"Wall {index + 1}",
                tags={"wall": wall.id},
            ))

        model = merge_models(*models)
        logger.info(
            "Constructed perimeter %s: %d walls, %d elements, %d errors, %d warnings",
            perimeter.id, len(perimeter.walls), model.stats.total_elements,
            model.stats.errors, model.stats.warnings,
        )
        return model

    def construct_wall(self, context: PerimeterContext, index: int) -> ConstructionModel:
        """One wall's model in wall-local coordinates."""
        wall = context.wall(index)
        config = context.catalog.get_wall_assembly(wall.wall_assembly_id)
        assembly = self.registry.get_wall_assembly(config.type)
        wall_context = WallContext(
            perimeter_context=context,
            index=index,
            corners=calculate_wall_corner_info(context.perimeter, index),
        )
        return assembly.construct(wall_context, config)

    def construct_ring_beam(
        self, context: PerimeterContext, assembly_id: RingBeamAssemblyId, top: bool,
    ) -> ConstructionModel:
        config = context.catalog.get_ring_beam_assembly(assembly_id)
        assembly = self.registry.get_ring_beam_assembly(config.type)
        height = assembly.height(config)
        elevation = context.storey.height - height if top else 0.0
        storey = context.storey if top else None

        results = []
        for run in ring_beam_runs(context.perimeter):
            results.extend(assembly.construct(config, run, elevation, storey))

        model = model_from_results(results)
        logger.debug(
            "%s ring beam %s: %d elements", "Top" if top else "Base", assembly_id,
            model.stats.total_elements,
        )
        return model

    def _ring_beam_height(
        self, assembly_id: RingBeamAssemblyId | None, catalog: AssemblyCatalog,
    ) -> float:
        if not assembly_id:
            return 0.0
        config = catalog.get_ring_beam_assembly(assembly_id)
        return self.registry.get_ring_beam_assembly(config.type).height(config)

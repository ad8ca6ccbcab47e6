"""High-level construction service: facade for the API layer."""

from __future__ import annotations
from collections import defaultdict
from typing import Any, Callable

from envelope.models import (
    AssemblyCatalog, ConstructionModel, ConstructionValidationError,
    PerimeterDefinition, Shape, StoreyContext,
)
from envelope.models.defaults import default_catalog
from envelope.core.cache import GeometryCache
from envelope.core.constructor import PerimeterConstructor
from envelope.core.registry import AssemblyRegistry, create_default_registry
from envelope.core.shapes import shape_volume


class ConstructionService:
    """
    Validates input, delegates to the constructor, post-processes output.

    The service owns the process-wide geometry cache. By default the cache
    builds shape volumes; a geometry kernel can be plugged in as `builder`.
    """

    def __init__(
        self,
        registry: AssemblyRegistry | None = None,
        catalog: AssemblyCatalog | None = None,
        builder: Callable[[Shape], Any] | None = None,
    ) -> None:
        self.registry = registry or create_default_registry()
        self.catalog = catalog or default_catalog()
        self.constructor = PerimeterConstructor(self.registry)
        self.cache: GeometryCache[Any] = GeometryCache(builder or shape_volume)

    def construct_perimeter(
        self,
        perimeter: PerimeterDefinition,
        storey: StoreyContext,
        catalog: AssemblyCatalog | None = None,
    ) -> ConstructionModel:
        return self.constructor.construct(perimeter, storey, catalog or self.catalog)

    def construct_wall(
        self,
        perimeter: PerimeterDefinition,
        index: int,
        storey: StoreyContext,
        catalog: AssemblyCatalog | None = None,
    ) -> ConstructionModel:
        """One wall of the perimeter, in wall-local coordinates."""
        if not 0 <= index < len(perimeter.walls):
            raise ConstructionValidationError(f"Wall index {index} out of range")
        context = self.constructor.create_context(perimeter, storey, catalog or self.catalog)
        return self.constructor.construct_wall(context, index)

    def build_geometry(self, shape: Shape) -> Any:
        return self.cache.get_or_build(shape)

    def material_volumes(self, model: ConstructionModel) -> dict[str, float]:
        """Volume per material in m³, built through the geometry cache."""
        volumes: dict[str, float] = defaultdict(float)
        for element in model.iter_elements():
            volumes[element.material] += self.build_geometry(element.shape) / 1e9
        return dict(volumes)

    def list_assemblies(self) -> list[dict[str, str]]:
        return [
            {"id": a.get_id(), "name": a.get_name(), "kind": "wall"}
            for a in self.registry.list_wall_assemblies()
        ] + [
            {"id": a.get_id(), "name": a.get_name(), "kind": "ring-beam"}
            for a in self.registry.list_ring_beam_assemblies()
        ]

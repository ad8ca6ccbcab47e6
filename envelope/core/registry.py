"""Assembly registry: stores wall and ring-beam assembly variants by type."""

from __future__ import annotations

from envelope.assemblies.base import RingBeamAssembly, WallAssembly
from envelope.models import ConstructionValidationError


class AssemblyRegistry:
    """
    Central registry for assembly variants.

    Variants are registered at startup. During construction, the registry
    returns the variant matching a configuration record's `type` field.
    """

    def __init__(self) -> None:
        self._walls: dict[str, WallAssembly] = {}
        self._ring_beams: dict[str, RingBeamAssembly] = {}

    def register_wall_assembly(self, assembly: WallAssembly) -> None:
        self._walls[assembly.get_id()] = assembly

    def register_ring_beam_assembly(self, assembly: RingBeamAssembly) -> None:
        self._ring_beams[assembly.get_id()] = assembly

    def unregister(self, assembly_id: str) -> None:
        """Remove a variant of either kind from the registry."""
        self._walls.pop(assembly_id, None)
        self._ring_beams.pop(assembly_id, None)

    def get_wall_assembly(self, type: str) -> WallAssembly:
        assembly = self._walls.get(type)
        if assembly is None:
            raise ConstructionValidationError(f"Wall assembly type '{type}' is not registered")
        return assembly

    def get_ring_beam_assembly(self, type: str) -> RingBeamAssembly:
        assembly = self._ring_beams.get(type)
        if assembly is None:
            raise ConstructionValidationError(f"Ring beam assembly type '{type}' is not registered")
        return assembly

    def list_wall_assemblies(self) -> list[WallAssembly]:
        return list(self._walls.values())

    def list_ring_beam_assemblies(self) -> list[RingBeamAssembly]:
        return list(self._ring_beams.values())


def create_default_registry() -> AssemblyRegistry:
    """Create a registry with all standard assembly variants."""
    from envelope.assemblies.wall.infill import InfillWallAssembly
    from envelope.assemblies.wall.modules import ModulesWallAssembly
    from envelope.assemblies.wall.non_strawbale import NonStrawbaleWallAssembly
    from envelope.assemblies.ring_beam.full import FullRingBeamAssembly
    from envelope.assemblies.ring_beam.double import DoubleRingBeamAssembly
    from envelope.assemblies.ring_beam.brick import BrickRingBeamAssembly

    registry = AssemblyRegistry()
    registry.register_wall_assembly(InfillWallAssembly())
    registry.register_wall_assembly(ModulesWallAssembly())
    registry.register_wall_assembly(NonStrawbaleWallAssembly())
    registry.register_ring_beam_assembly(FullRingBeamAssembly())
    registry.register_ring_beam_assembly(DoubleRingBeamAssembly())
    registry.register_ring_beam_assembly(BrickRingBeamAssembly())
    return registry

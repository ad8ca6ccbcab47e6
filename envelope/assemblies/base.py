"""Abstract base classes for wall and ring-beam assemblies.

Every assembly variant implements one of these interfaces. Variants are:
- Selected by the `type` field of their configuration record
- Stateless: configuration and context arrive with each call
- Registered once in the assembly registry
"""

from __future__ import annotations
from abc import ABC, abstractmethod

from envelope.models import (
    BaseWallAssemblyConfig, ConstructionModel, StoreyContext, WallContext,
)
from envelope.core.results import ConstructionResult
from envelope.core.ring_beams import BeamBand, RingBeamRun, construct_bands


class WallAssembly(ABC):
    """
    Base class for wall construction methods.

    `construct()` returns the wall's model in wall-local coordinates:
    x along the inside line, y across the wall towards the outside, z up.
    """

    @abstractmethod
    def get_id(self) -> str:
        """Configuration type this assembly builds (e.g., 'infill')."""
        ...

    @abstractmethod
    def get_name(self) -> str:
        ...

    @abstractmethod
    def construct(self, context: WallContext, config: BaseWallAssemblyConfig) -> ConstructionModel:
        ...


class RingBeamAssembly(ABC):
    """
    Base class for ring beam variants.

    Subclasses describe their cross section as bands; building the bands
    along a run, including roof adaptation, is shared.
    """

    @abstractmethod
    def get_id(self) -> str:
        ...

    @abstractmethod
    def get_name(self) -> str:
        ...

    @abstractmethod
    def height(self, config) -> float:
        """Total height of the beam."""
        ...

    @abstractmethod
    def bands(self, config, run: RingBeamRun) -> list[BeamBand]:
        ...

    def construct(
        self,
        config,
        run: RingBeamRun,
        elevation: float,
        storey: StoreyContext | None = None,
    ) -> list[ConstructionResult]:
        """Build the beam along one run with its bottom at `elevation`."""
        return construct_bands(run, self.bands(config, run), self.height(config), elevation, storey)

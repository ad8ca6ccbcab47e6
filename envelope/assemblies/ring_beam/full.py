"""Full ring beam: one solid beam across the configured width."""

from __future__ import annotations

from envelope.assemblies.base import RingBeamAssembly
from envelope.core.ring_beams import BeamBand, RingBeamRun
from envelope.models import ElementType, FullRingBeamConfig


class FullRingBeamAssembly(RingBeamAssembly):

    def get_id(self) -> str:
        return "full"

    def get_name(self) -> str:
        return "Full Ring Beam"

    def height(self, config: FullRingBeamConfig) -> float:
        return config.height

    def bands(self, config: FullRingBeamConfig, run: RingBeamRun) -> list[BeamBand]:
        return [BeamBand(
            inner=config.offset_from_edge,
            outer=config.offset_from_edge + config.width,
            bottom=0.0,
            height=config.height,
            type=ElementType.RING_BEAM,
            material=config.material,
            tags={"ring_beam": config.id},
        )]

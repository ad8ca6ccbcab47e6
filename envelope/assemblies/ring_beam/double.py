"""Double ring beam: two beams with an infill gap between them."""

from __future__ import annotations

from envelope.assemblies.base import RingBeamAssembly
from envelope.core.ring_beams import BeamBand, RingBeamRun
from envelope.models import DoubleRingBeamConfig, ElementType


class DoubleRingBeamAssembly(RingBeamAssembly):

    def get_id(self) -> str:
        return "double"

    def get_name(self) -> str:
        return "Double Ring Beam"

    def height(self, config: DoubleRingBeamConfig) -> float:
        return config.height

    def bands(self, config: DoubleRingBeamConfig, run: RingBeamRun) -> list[BeamBand]:
        inner = config.offset_from_edge
        gap_start = inner + config.thickness
        outer_start = gap_start + config.spacing
        tags = {"ring_beam": config.id}

        bands = [
            BeamBand(inner, gap_start, 0.0, config.height, ElementType.RING_BEAM, config.material, tags),
            BeamBand(
                outer_start, outer_start + config.thickness, 0.0, config.height,
                ElementType.RING_BEAM, config.material, tags,
            ),
        ]
        if config.spacing > 0:
            bands.append(BeamBand(
                gap_start, outer_start, 0.0, config.height,
                ElementType.INFILL, config.infill_material, tags,
            ))
        return bands

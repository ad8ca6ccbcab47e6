"""Brick ring beam: brick plinth, insulation, waterproofing and a timber beam.

Cross section, bottom to top:
- brick wall on the inside part of the wall, insulation out to the
  outside face
- waterproofing sheet over the full beam width
- timber beam
"""

from __future__ import annotations

from envelope.assemblies.base import RingBeamAssembly
from envelope.core.ring_beams import BeamBand, RingBeamRun
from envelope.models import BrickRingBeamConfig, ElementType


class BrickRingBeamAssembly(RingBeamAssembly):

    def get_id(self) -> str:
        return "brick"

    def get_name(self) -> str:
        return "Brick Ring Beam"

    def height(self, config: BrickRingBeamConfig) -> float:
        return config.height

    def bands(self, config: BrickRingBeamConfig, run: RingBeamRun) -> list[BeamBand]:
        tags = {"ring_beam": config.id}
        wall_top = config.wall_height
        beam_bottom = wall_top + config.waterproofing_thickness

        bands = [BeamBand(
            0.0, config.wall_width, 0.0, config.wall_height,
            ElementType.BRICK, config.wall_material, tags,
        )]
        if run.thickness > config.wall_width:
            bands.append(BeamBand(
                config.wall_width, run.thickness, 0.0, config.wall_height,
                ElementType.INSULATION, config.insulation_material, tags,
            ))
        bands.append(BeamBand(
            0.0, config.beam_width, wall_top, config.waterproofing_thickness,
            ElementType.WATERPROOFING, config.waterproofing_material, tags,
        ))
        bands.append(BeamBand(
            0.0, config.beam_width, beam_bottom, config.beam_thickness,
            ElementType.RING_BEAM, config.beam_material, tags,
        ))
        return bands

"""Default configuration: materials and assemblies available out of the box."""

from __future__ import annotations

from .assemblies import (
    AssemblyCatalog, BrickRingBeamConfig, DoublePostConfig, DoubleRingBeamConfig,
    FullPostConfig, FullRingBeamConfig, InfillConfig, InfillWallConfig, LayerConfig,
    Material, ModuleConfig, ModulesWallConfig, NonStrawbaleWallConfig, OpeningConfig,
    StrawConfig, WallLayersConfig,
)
from .ids import MaterialId, OpeningAssemblyId, RingBeamAssemblyId, WallAssemblyId


STRAW = MaterialId("material_straw")
TIMBER = MaterialId("material_timber")
CLAY_PLASTER = MaterialId("material_clay_plaster")
LIME_PLASTER = MaterialId("material_lime_plaster")
WOOD_FIBRE = MaterialId("material_wood_fibre")
AAC_BRICK = MaterialId("material_aac_brick")
BITUMEN = MaterialId("material_bitumen")
CORK = MaterialId("material_cork")

DEFAULT_WALL_ASSEMBLY = WallAssemblyId("wall_infill")
MODULES_WALL_ASSEMBLY = WallAssemblyId("wall_modules")
NON_STRAWBALE_WALL_ASSEMBLY = WallAssemblyId("wall_non_strawbale")

DEFAULT_RING_BEAM = RingBeamAssemblyId("ring_beam_full")
DOUBLE_RING_BEAM = RingBeamAssemblyId("ring_beam_double")
BRICK_RING_BEAM = RingBeamAssemblyId("ring_beam_brick")

DEFAULT_OPENING_ASSEMBLY = OpeningAssemblyId("opening_default")


def default_materials() -> list[Material]:
    return [
        Material(id=STRAW, name="Straw", color="#e8c872", density=110),
        Material(
            id=TIMBER, name="Structural timber", color="#b5835a", density=450,
            cross_sections=[(60, 120), (60, 360), (120, 360), (60, 60), (80, 80), (120, 120)],
        ),
        Material(id=CLAY_PLASTER, name="Clay plaster", color="#a1765a", density=1700),
        Material(id=LIME_PLASTER, name="Lime plaster", color="#eeeade", density=1600),
        Material(id=WOOD_FIBRE, name="Wood fibre board", color="#8d6e4e", density=160),
        Material(id=AAC_BRICK, name="AAC brick", color="#d8d8d8", density=400),
        Material(id=BITUMEN, name="Bitumen sheet", color="#222222", density=1100),
        Material(id=CORK, name="Cork insulation", color="#9c6b3f", density=120),
    ]


def default_layers() -> WallLayersConfig:
    return WallLayersConfig(
        inside_layers=[LayerConfig(name="Clay plaster", material=CLAY_PLASTER, thickness=30)],
        outside_layers=[LayerConfig(name="Lime plaster", material=LIME_PLASTER, thickness=30)],
    )


def default_infill() -> InfillConfig:
    return InfillConfig(
        desired_post_spacing=800,
        max_post_spacing=900,
        min_straw_space=70,
        posts=FullPostConfig(width=60, material=TIMBER),
        straw=StrawConfig(material=STRAW),
    )


def default_catalog() -> AssemblyCatalog:
    """A fresh catalog with the standard straw-bale assemblies."""
    materials = default_materials()
    wall_assemblies = [
        InfillWallConfig(
            id=DEFAULT_WALL_ASSEMBLY,
            name="Straw infill between posts",
            layers=default_layers(),
            infill=default_infill(),
        ),
        ModulesWallConfig(
            id=MODULES_WALL_ASSEMBLY,
            name="Prefabricated straw modules",
            layers=default_layers(),
            module=ModuleConfig(frame_material=TIMBER, straw_material=STRAW),
            infill=default_infill().model_copy(update={
                "posts": DoublePostConfig(width=60, thickness=120, material=TIMBER, infill_material=STRAW),
            }),
        ),
        NonStrawbaleWallConfig(
            id=NON_STRAWBALE_WALL_ASSEMBLY,
            name="Brick wall",
            layers=default_layers(),
            material=AAC_BRICK,
        ),
    ]
    ring_beams = [
        FullRingBeamConfig(
            id=DEFAULT_RING_BEAM, name="Solid timber ring beam",
            height=60, width=360, offset_from_edge=30, material=TIMBER,
        ),
        DoubleRingBeamConfig(
            id=DOUBLE_RING_BEAM, name="Double timber ring beam",
            height=60, thickness=120, spacing=120, offset_from_edge=30,
            material=TIMBER, infill_material=STRAW,
        ),
        BrickRingBeamConfig(
            id=BRICK_RING_BEAM, name="Brick plinth with timber beam",
            wall_material=AAC_BRICK, beam_material=TIMBER,
            waterproofing_material=BITUMEN, insulation_material=CORK,
        ),
    ]
    openings = [
        OpeningConfig(
            id=DEFAULT_OPENING_ASSEMBLY, name="Timber header and sill",
            padding=15, header_thickness=60, header_material=TIMBER,
            sill_thickness=60, sill_material=TIMBER,
        ),
    ]
    return AssemblyCatalog(
        materials={m.id: m for m in materials},
        wall_assemblies={a.id: a for a in wall_assemblies},
        ring_beam_assemblies={r.id: r for r in ring_beams},
        opening_assemblies={o.id: o for o in openings},
        default_opening_assembly_id=DEFAULT_OPENING_ASSEMBLY,
    )

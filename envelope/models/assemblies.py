"""Assembly configuration: materials, layers, infill, openings, ring beams.

These records are supplied by the configuration layer and looked up by id
through an `AssemblyCatalog`.
"""

from __future__ import annotations
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, model_validator

from .building import Opening
from .errors import ConstructionValidationError
from .ids import MaterialId, OpeningAssemblyId, RingBeamAssemblyId, WallAssemblyId


class Material(BaseModel):
    id: MaterialId
    name: str
    color: str = "#cccccc"
    density: float | None = Field(default=None, gt=0)   # kg/m³
    # Available stock cross sections for dimensional timber, in mm
    cross_sections: list[tuple[float, float]] = []

    @property
    def is_dimensional(self) -> bool:
        return len(self.cross_sections) > 0

    def has_cross_section(self, a: float, b: float, tolerance: float = 0.5) -> bool:
        wanted = sorted((a, b))
        for section in self.cross_sections:
            available = sorted(section)
            if abs(available[0] - wanted[0]) <= tolerance and abs(available[1] - wanted[1]) <= tolerance:
                return True
        return False


# --- Layers ---

class LayerConfig(BaseModel):
    """One monolithic finish layer."""
    type: Literal["monolithic"] = "monolithic"
    name: str
    material: MaterialId
    thickness: float = Field(gt=0)


class WallLayersConfig(BaseModel):
    """Finish layers, each list ordered from the wall core outward."""
    inside_layers: list[LayerConfig] = []
    outside_layers: list[LayerConfig] = []

    @property
    def inside_thickness(self) -> float:
        return sum(layer.thickness for layer in self.inside_layers)

    @property
    def outside_thickness(self) -> float:
        return sum(layer.thickness for layer in self.outside_layers)


# --- Posts, straw, modules ---

class FullPostConfig(BaseModel):
    """Single solid post spanning the full wall thickness."""
    type: Literal["full"] = "full"
    width: float = Field(default=60.0, gt=0)
    material: MaterialId


class DoublePostConfig(BaseModel):
    """Two posts at the wall faces with an infill strip between them."""
    type: Literal["double"] = "double"
    width: float = Field(default=60.0, gt=0)
    thickness: float = Field(default=120.0, gt=0)
    material: MaterialId
    infill_material: MaterialId


PostConfig = Annotated[Union[FullPostConfig, DoublePostConfig], Field(discriminator="type")]


class StrawConfig(BaseModel):
    bale_length: float = Field(default=800.0, gt=0)
    bale_height: float = Field(default=500.0, gt=0)
    bale_width: float = Field(default=360.0, gt=0)
    material: MaterialId


class InfillConfig(BaseModel):
    """Post layout bounds for straw infill between posts (center-to-center)."""
    desired_post_spacing: float = Field(default=800.0, gt=0)
    max_post_spacing: float = Field(default=900.0, gt=0)
    min_straw_space: float = Field(default=70.0, gt=0)
    posts: PostConfig
    straw: StrawConfig

    @model_validator(mode="after")
    def _check_bounds(self) -> InfillConfig:
        if self.min_straw_space > self.max_post_spacing:
            raise ValueError("min_straw_space must not exceed max_post_spacing")
        if self.desired_post_spacing > self.max_post_spacing:
            raise ValueError("desired_post_spacing must not exceed max_post_spacing")
        return self


class ModuleConfig(BaseModel):
    """Prefabricated straw module: frame around a straw core."""
    width: float = Field(default=920.0, gt=0)
    frame_width: float = Field(default=60.0, gt=0)
    frame_material: MaterialId
    straw_material: MaterialId


# --- Openings ---

class OpeningConfig(BaseModel):
    id: OpeningAssemblyId
    name: str = ""
    padding: float = Field(default=15.0, ge=0)
    header_thickness: float = Field(default=60.0, gt=0)
    header_material: MaterialId
    sill_thickness: float | None = Field(default=60.0, gt=0)
    sill_material: MaterialId | None = None
    filling_thickness: float | None = Field(default=None, gt=0)
    filling_material: MaterialId | None = None


# --- Wall assemblies ---

class BaseWallAssemblyConfig(BaseModel):
    id: WallAssemblyId
    name: str = ""
    layers: WallLayersConfig = Field(default_factory=WallLayersConfig)
    opening_assembly_id: OpeningAssemblyId | None = None


class InfillWallConfig(BaseWallAssemblyConfig):
    type: Literal["infill"] = "infill"
    infill: InfillConfig


class ModulesWallConfig(BaseWallAssemblyConfig):
    type: Literal["modules"] = "modules"
    module: ModuleConfig
    infill: InfillConfig


class NonStrawbaleWallConfig(BaseWallAssemblyConfig):
    type: Literal["non-strawbale"] = "non-strawbale"
    material: MaterialId


WallAssemblyConfig = Annotated[
    Union[InfillWallConfig, ModulesWallConfig, NonStrawbaleWallConfig],
    Field(discriminator="type"),
]


# --- Ring beams ---

class FullRingBeamConfig(BaseModel):
    id: RingBeamAssemblyId
    name: str = ""
    type: Literal["full"] = "full"
    height: float = Field(default=60.0, gt=0)
    width: float = Field(default=360.0, gt=0)
    offset_from_edge: float = 0.0     # From the inside construction edge; any sign
    material: MaterialId


class DoubleRingBeamConfig(BaseModel):
    id: RingBeamAssemblyId
    name: str = ""
    type: Literal["double"] = "double"
    height: float = Field(default=60.0, gt=0)
    thickness: float = Field(default=120.0, gt=0)
    spacing: float = Field(default=120.0, ge=0)
    offset_from_edge: float = 0.0
    material: MaterialId
    infill_material: MaterialId


class BrickRingBeamConfig(BaseModel):
    id: RingBeamAssemblyId
    name: str = ""
    type: Literal["brick"] = "brick"
    wall_height: float = Field(default=300.0, gt=0)
    wall_width: float = Field(default=250.0, gt=0)
    wall_material: MaterialId
    beam_thickness: float = Field(default=60.0, gt=0)
    beam_width: float = Field(default=360.0, gt=0)
    beam_material: MaterialId
    waterproofing_thickness: float = Field(default=2.0, gt=0)
    waterproofing_material: MaterialId
    insulation_material: MaterialId

    @property
    def height(self) -> float:
        return self.wall_height + self.waterproofing_thickness + self.beam_thickness


RingBeamConfig = Annotated[
    Union[FullRingBeamConfig, DoubleRingBeamConfig, BrickRingBeamConfig],
    Field(discriminator="type"),
]


# --- Catalog ---

class AssemblyCatalog(BaseModel):
    """All configuration the construction engine may look up by id."""
    materials: dict[MaterialId, Material] = {}
    wall_assemblies: dict[WallAssemblyId, WallAssemblyConfig] = {}
    ring_beam_assemblies: dict[RingBeamAssemblyId, RingBeamConfig] = {}
    opening_assemblies: dict[OpeningAssemblyId, OpeningConfig] = {}
    default_opening_assembly_id: OpeningAssemblyId | None = None

    def resolve_material(self, material_id: MaterialId) -> Material | None:
        return self.materials.get(material_id)

    def get_wall_assembly(self, assembly_id: WallAssemblyId) -> WallAssemblyConfig:
        assembly = self.wall_assemblies.get(assembly_id)
        if assembly is None:
            raise ConstructionValidationError(f"Wall assembly '{assembly_id}' not found")
        return assembly

    def get_ring_beam_assembly(self, assembly_id: RingBeamAssemblyId) -> RingBeamConfig:
        assembly = self.ring_beam_assemblies.get(assembly_id)
        if assembly is None:
            raise ConstructionValidationError(f"Ring beam assembly '{assembly_id}' not found")
        return assembly

    def resolve_opening_config(
        self, opening: Opening, wall_assembly: BaseWallAssemblyConfig,
    ) -> OpeningConfig:
        """
        Opening override, then the wall assembly's default, then the catalog default.

        The first id that is set decides; an id that is set but missing from
        the catalog is an error, never a reason to fall through.
        """
        for candidate in (
            opening.opening_assembly_id,
            wall_assembly.opening_assembly_id,
            self.default_opening_assembly_id,
        ):
            if candidate is None:
                continue
            config = self.opening_assemblies.get(candidate)
            if config is None:
                raise ConstructionValidationError(f"Opening assembly '{candidate}' not found")
            return config
        raise ConstructionValidationError(
            f"No opening assembly found for opening '{opening.id}'"
        )

"""Construction output models: shapes, elements, groups, issues, models."""

from __future__ import annotations
from collections import Counter
from enum import Enum
from typing import Annotated, Iterator, Literal, Union

from pydantic import BaseModel, Field

from .geometry import Bounds3D, Plane, Polygon2D, PolygonWithHoles2D, Transform, Vec3
from .ids import ElementId, GroupId, MaterialId, create_element_id, create_group_id


class ElementType(str, Enum):
    POST = "post"
    PLATE = "plate"
    FULL_STRAWBALE = "full-strawbale"
    PARTIAL_STRAWBALE = "partial-strawbale"
    STRAW = "straw"
    FRAME = "frame"
    HEADER = "header"
    SILL = "sill"
    OPENING = "opening"
    INFILL = "infill"
    LAYER = "layer"
    RING_BEAM = "ring-beam"
    BRICK = "brick"
    WATERPROOFING = "waterproofing"
    INSULATION = "insulation"


# --- Shapes ---

class CuboidShape(BaseModel):
    """Axis-aligned box from `position` spanning `size`."""
    type: Literal["cuboid"] = "cuboid"
    position: Vec3 = Field(default_factory=Vec3)
    size: Vec3
    bounds: Bounds3D


class ExtrudedPolygonShape(BaseModel):
    """Polygon in `plane`, extruded along the complementary axis from 0 to `thickness`."""
    type: Literal["extrusion"] = "extrusion"
    polygon: PolygonWithHoles2D
    plane: Plane
    thickness: float
    bounds: Bounds3D


class ShapeOperand(BaseModel):
    shape: Shape
    transform: Transform = Field(default_factory=Transform)


class BooleanShape(BaseModel):
    type: Literal["boolean"] = "boolean"
    operation: Literal["union", "subtract", "intersect"]
    operands: list[ShapeOperand]
    bounds: Bounds3D


Shape = Annotated[
    Union[CuboidShape, ExtrudedPolygonShape, BooleanShape],
    Field(discriminator="type"),
]


# --- Element tree ---

class ConstructionElement(BaseModel):
    """A typed, positioned solid. Leaf of the output tree."""
    id: ElementId = Field(default_factory=create_element_id)
    type: ElementType
    material: MaterialId
    shape: Shape
    transform: Transform = Field(default_factory=Transform)
    tags: dict[str, str] = {}
    bounds: Bounds3D


class ConstructionGroup(BaseModel):
    """Elements and subgroups placed by one rigid transform."""
    id: GroupId = Field(default_factory=create_group_id)
    label: str | None = None
    children: list[GroupOrElement] = []
    transform: Transform = Field(default_factory=Transform)
    tags: dict[str, str] = {}
    bounds: Bounds3D | None = None


GroupOrElement = Union[ConstructionGroup, ConstructionElement]


# --- Annotations ---

class Measurement(BaseModel):
    start_point: Vec3
    end_point: Vec3
    label: str
    offset: float = 0.0
    group_key: str | None = None
    tags: dict[str, str] = {}

    @property
    def length(self) -> float:
        return self.start_point.distance_to(self.end_point)


class HighlightedCuboid(BaseModel):
    """Highlighted area for visual feedback (corners, critical zones, etc.)."""
    type: Literal["cuboid"] = "cuboid"
    label: str | None = None
    transform: Transform = Field(default_factory=Transform)
    bounds: Bounds3D
    render_position: Literal["bottom", "top"] = "bottom"


class HighlightedPolygon(BaseModel):
    type: Literal["polygon"] = "polygon"
    label: str | None = None
    polygon: Polygon2D
    plane: Plane = "xy"
    transform: Transform = Field(default_factory=Transform)
    render_position: Literal["bottom", "top"] = "bottom"


HighlightedArea = Annotated[
    Union[HighlightedCuboid, HighlightedPolygon],
    Field(discriminator="type"),
]


class ConstructionIssue(BaseModel):
    """A non-fatal problem with the referenced elements."""
    description: str
    elements: list[ElementId] = []
    code: str | None = None
    bounds: Bounds3D | None = None


# --- Model ---

class ModelStats(BaseModel):
    """Summary statistics for a construction model."""
    total_elements: int = 0
    by_type: dict[str, int] = {}
    errors: int = 0
    warnings: int = 0

    @classmethod
    def from_model(cls, model: ConstructionModel) -> ModelStats:
        counts = Counter(e.type.value for e in model.iter_elements())
        return cls(
            total_elements=sum(counts.values()),
            by_type=dict(counts),
            errors=len(model.errors),
            warnings=len(model.warnings),
        )


class ConstructionModel(BaseModel):
    """The aggregate result of one synthesis run. Never mutated after creation."""
    elements: list[GroupOrElement] = []
    measurements: list[Measurement] = []
    areas: list[HighlightedArea] = []
    errors: list[ConstructionIssue] = []
    warnings: list[ConstructionIssue] = []
    bounds: Bounds3D | None = None
    stats: ModelStats = None  # type: ignore[assignment]

    def model_post_init(self, __context: object) -> None:
        if self.stats is None:
            self.stats = ModelStats.from_model(self)

    def iter_elements(self) -> Iterator[ConstructionElement]:
        """All leaf elements, depth first. Transforms are not applied."""
        stack: list[GroupOrElement] = list(reversed(self.elements))
        while stack:
            item = stack.pop()
            if isinstance(item, ConstructionGroup):
                stack.extend(reversed(item.children))
            else:
                yield item


ShapeOperand.model_rebuild()
BooleanShape.model_rebuild()
ConstructionGroup.model_rebuild()
ConstructionModel.model_rebuild()

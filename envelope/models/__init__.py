from .geometry import (
    Vec2, Vec3, Line2D, LineSegment2D, Polygon2D, PolygonWithHoles2D,
    Bounds3D, Transform, IDENTITY_TRANSFORM, Plane,
)
from .errors import ConstructionValidationError, GeometryError
from .building import (
    Opening, OpeningType, CornerOwner, WallDefinition, PerimeterDefinition,
    PerimeterWall, PerimeterCorner, Perimeter, Roof, RoofType, StoreyContext,
)
from .assemblies import (
    Material, LayerConfig, WallLayersConfig, FullPostConfig, DoublePostConfig,
    PostConfig, StrawConfig, InfillConfig, ModuleConfig, OpeningConfig,
    BaseWallAssemblyConfig, InfillWallConfig, ModulesWallConfig,
    NonStrawbaleWallConfig, WallAssemblyConfig, FullRingBeamConfig,
    DoubleRingBeamConfig, BrickRingBeamConfig, RingBeamConfig, AssemblyCatalog,
)
from .construction import (
    ElementType, CuboidShape, ExtrudedPolygonShape, BooleanShape, ShapeOperand,
    Shape, ConstructionElement, ConstructionGroup, GroupOrElement, Measurement,
    HighlightedCuboid, HighlightedPolygon, HighlightedArea, ConstructionIssue,
    ConstructionModel, ModelStats,
)
from .context import (
    CornerConstructionInfo, WallCornerInfo, PerimeterContext, WallContext,
)

__all__ = [
    "Vec2", "Vec3", "Line2D", "LineSegment2D", "Polygon2D", "PolygonWithHoles2D",
    "Bounds3D", "Transform", "IDENTITY_TRANSFORM", "Plane",
    "ConstructionValidationError", "GeometryError",
    "Opening", "OpeningType", "CornerOwner", "WallDefinition", "PerimeterDefinition",
    "PerimeterWall", "PerimeterCorner", "Perimeter", "Roof", "RoofType", "StoreyContext",
    "Material", "LayerConfig", "WallLayersConfig", "FullPostConfig", "DoublePostConfig",
    "PostConfig", "StrawConfig", "InfillConfig", "ModuleConfig", "OpeningConfig",
    "BaseWallAssemblyConfig", "InfillWallConfig", "ModulesWallConfig",
    "NonStrawbaleWallConfig", "WallAssemblyConfig", "FullRingBeamConfig",
    "DoubleRingBeamConfig", "BrickRingBeamConfig", "RingBeamConfig", "AssemblyCatalog",
    "ElementType", "CuboidShape", "ExtrudedPolygonShape", "BooleanShape", "ShapeOperand",
    "Shape", "ConstructionElement", "ConstructionGroup", "GroupOrElement", "Measurement",
    "HighlightedCuboid", "HighlightedPolygon", "HighlightedArea", "ConstructionIssue",
    "ConstructionModel", "ModelStats",
    "CornerConstructionInfo", "WallCornerInfo", "PerimeterContext", "WallContext",
]

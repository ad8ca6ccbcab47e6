"""Shape and element factories. Every shape carries its local bounds."""

from __future__ import annotations
from typing import Literal

from envelope.models import (
    Bounds3D, BooleanShape, ConstructionElement, CuboidShape, ElementType,
    ExtrudedPolygonShape, Plane, PolygonWithHoles2D, Shape, ShapeOperand,
    Transform, Vec3, GeometryError,
)
from envelope.models.ids import MaterialId
from envelope.core.geometry import extrusion_bounds, to_shapely, transform_bounds


def create_cuboid(position: Vec3 | tuple[float, float, float], size: Vec3 | tuple[float, float, float]) -> CuboidShape:
    if isinstance(position, tuple):
        position = Vec3.of(*position)
    if isinstance(size, tuple):
        size = Vec3.of(*size)
    return CuboidShape(
        position=position,
        size=size,
        bounds=Bounds3D.from_cuboid(position, size),
    )


def create_extruded_polygon(
    polygon: PolygonWithHoles2D, plane: Plane, thickness: float,
) -> ExtrudedPolygonShape:
    if len(polygon.outer.points) < 3:
        raise GeometryError("Extruded polygon needs at least 3 points")
    return ExtrudedPolygonShape(
        polygon=polygon,
        plane=plane,
        thickness=thickness,
        bounds=extrusion_bounds(polygon, plane, thickness),
    )


def _intersect_boxes(boxes: list[Bounds3D]) -> Bounds3D | None:
    lo = [max(b.min.as_tuple()[i] for b in boxes) for i in range(3)]
    hi = [min(b.max.as_tuple()[i] for b in boxes) for i in range(3)]
    if any(lo[i] > hi[i] for i in range(3)):
        return None
    return Bounds3D(min=Vec3.of(*lo), max=Vec3.of(*hi))


def create_boolean(
    operation: Literal["union", "subtract", "intersect"],
    operands: list[tuple[Shape, Transform]],
) -> BooleanShape:
    if not operands:
        raise GeometryError("Boolean shape needs at least one operand")
    wrapped = [ShapeOperand(shape=s, transform=t) for s, t in operands]
    boxes = [transform_bounds(o.shape.bounds, o.transform) for o in wrapped]

    if operation == "union":
        bounds = Bounds3D.merge(*boxes)
    elif operation == "intersect":
        # Disjoint operands collapse onto the first operand's box
        bounds = _intersect_boxes(boxes) or boxes[0]
    else:
        bounds = boxes[0]

    return BooleanShape(operation=operation, operands=wrapped, bounds=bounds)


def create_element(
    type: ElementType,
    material: MaterialId,
    shape: Shape,
    transform: Transform | None = None,
    tags: dict[str, str] | None = None,
) -> ConstructionElement:
    transform = transform or Transform()
    return ConstructionElement(
        type=type,
        material=material,
        shape=shape,
        transform=transform,
        tags=tags or {},
        bounds=transform_bounds(shape.bounds, transform),
    )


def create_cuboid_element(
    type: ElementType,
    material: MaterialId,
    position: tuple[float, float, float],
    size: tuple[float, float, float],
    tags: dict[str, str] | None = None,
) -> ConstructionElement:
    """Axis-aligned box element in wall-local coordinates."""
    return create_element(type, material, create_cuboid(position, size), tags=tags)


def shape_volume(shape: Shape) -> float:
    """
    Volume in mm³.

    Exact for cuboids and extrusions. Boolean shapes are estimated from
    their operands: an intersection by its smallest operand, a union by the
    sum and a subtraction by its base operand.
    """
    if isinstance(shape, CuboidShape):
        return abs(shape.size.x * shape.size.y * shape.size.z)
    if isinstance(shape, ExtrudedPolygonShape):
        return to_shapely(shape.polygon).area * shape.thickness
    volumes = [shape_volume(op.shape) for op in shape.operands]
    if shape.operation == "intersect":
        return min(volumes)
    if shape.operation == "union":
        return sum(volumes)
    return volumes[0]

"""Per-wall corner information: ownership and signed extension."""

from __future__ import annotations

from envelope.models import (
    Bounds3D, CornerConstructionInfo, CornerOwner, HighlightedCuboid, Perimeter,
    Vec3, WallCornerInfo,
)


def calculate_wall_corner_info(perimeter: Perimeter, index: int) -> WallCornerInfo:
    """
    Work out how far a wall's construction reaches past its inside line.

    The owning wall extends to the neighbour's outside face (negative at
    reflex corners, where it stops short); the other wall gets no extension.
    """
    wall = perimeter.walls[index]
    start_corner = perimeter.start_corner(index)
    end_corner = perimeter.end_corner(index)

    start_extension = (wall.outside_line.start - start_corner.outside_point).dot(wall.direction)
    end_extension = (end_corner.outside_point - wall.outside_line.end).dot(wall.direction)

    start_owned = start_corner.belongs_to == CornerOwner.NEXT
    end_owned = end_corner.belongs_to == CornerOwner.PREVIOUS

    return WallCornerInfo(
        start=CornerConstructionInfo(
            id=start_corner.id,
            constructed_by_this_wall=start_owned,
            corner_extension=start_extension,
            extension=start_extension if start_owned else 0.0,
        ),
        end=CornerConstructionInfo(
            id=end_corner.id,
            constructed_by_this_wall=end_owned,
            corner_extension=end_extension,
            extension=end_extension if end_owned else 0.0,
        ),
    )


def corner_areas(
    info: WallCornerInfo, length: float, thickness: float, bottom: float, top: float,
) -> list[HighlightedCuboid]:
    """Highlight the parts of the wall construction that sit inside a corner."""
    areas: list[HighlightedCuboid] = []
    if info.start.constructed_by_this_wall and info.start.extension > 0:
        areas.append(HighlightedCuboid(
            label="Corner",
            bounds=Bounds3D(
                min=Vec3(x=-info.start.extension, y=0, z=bottom),
                max=Vec3(x=0, y=thickness, z=top),
            ),
        ))
    if info.end.constructed_by_this_wall and info.end.extension > 0:
        areas.append(HighlightedCuboid(
            label="Corner",
            bounds=Bounds3D(
                min=Vec3(x=length, y=0, z=bottom),
                max=Vec3(x=length + info.end.extension, y=thickness, z=top),
            ),
        ))
    return areas


def owners_per_corner(perimeter: Perimeter) -> list[int]:
    """Index of the wall constructing each corner."""
    return [
        i if corner.belongs_to == CornerOwner.NEXT else perimeter.previous_index(i)
        for i, corner in enumerate(perimeter.corners)
    ]

"""Wall segmentation: split a wall's length into wall and opening segments."""

from __future__ import annotations
from typing import Literal

from pydantic import BaseModel

from envelope.models import ConstructionValidationError, Opening, PerimeterWall, WallCornerInfo


TOLERANCE = 1e-6


class WallSegment(BaseModel):
    """An interval [start, start + width) of the wall's construction length."""
    type: Literal["wall", "opening"]
    start: float
    width: float
    # Openings framed together; empty for wall segments
    openings: list[Opening] = []

    @property
    def end(self) -> float:
        return self.start + self.width

    @property
    def sill_height(self) -> float:
        return self.openings[0].sill if self.openings else 0.0

    @property
    def header_height(self) -> float:
        return self.openings[0].header_height if self.openings else 0.0


def _same_elevation(a: Opening, b: Opening) -> bool:
    return (
        abs(a.sill - b.sill) <= TOLERANCE
        and abs(a.header_height - b.header_height) <= TOLERANCE
    )


def segment_wall(
    length: float, openings: list[Opening], opening_offset: float = 0.0,
) -> list[WallSegment]:
    """
    Partition [0, length) into alternating wall/opening segments.

    `opening_offset` shifts every opening, e.g. by the start corner extension
    when openings are measured from the inside line start. Directly adjacent
    openings with the same sill and header are merged into one segment.
    Raises ConstructionValidationError when an opening overruns the wall or
    overlaps its predecessor.
    """
    segments: list[WallSegment] = []
    cursor = 0.0

    for opening in sorted(openings, key=lambda o: o.offset):
        start = opening.offset + opening_offset
        end = start + opening.width

        if end > length + TOLERANCE:
            raise ConstructionValidationError(
                f"Opening extends beyond wall length: ends at {end:.1f}mm, "
                f"wall is {length:.1f}mm"
            )
        if start < cursor - TOLERANCE:
            raise ConstructionValidationError(
                f"Opening overlaps previous opening or wall start at {start:.1f}mm"
            )

        previous = segments[-1] if segments else None
        if (
            previous is not None
            and previous.type == "opening"
            and abs(previous.end - start) <= TOLERANCE
            and _same_elevation(previous.openings[0], opening)
        ):
            previous.width = end - previous.start
            previous.openings.append(opening)
            cursor = end
            continue

        if start > cursor + TOLERANCE:
            segments.append(WallSegment(type="wall", start=cursor, width=start - cursor))
            cursor = start
        segments.append(WallSegment(
            type="opening", start=cursor, width=end - cursor,
            openings=[opening],
        ))
        cursor = end

    if length > cursor + TOLERANCE:
        segments.append(WallSegment(type="wall", start=cursor, width=length - cursor))

    return segments


def validate_openings(wall: PerimeterWall, corners: WallCornerInfo) -> None:
    """
    Check a wall's openings before construction.

    Openings are measured from the inside line start, but the wall is built
    over its corner-shifted stretch: extended past corners it owns, cut back
    at reflex corners. Openings must fit that stretch.
    """
    start = -corners.extension_start
    end = wall.inside_length + corners.extension_end
    for opening in wall.openings:
        if opening.end > end + TOLERANCE:
            raise ConstructionValidationError(
                f"Opening extends beyond wall length: ends at {opening.end:.1f}mm, "
                f"wall construction ends at {end:.1f}mm"
            )
        if opening.offset < start - TOLERANCE:
            raise ConstructionValidationError(
                f"Opening starts at {opening.offset:.1f}mm, before the wall "
                f"construction starts at {start:.1f}mm"
            )
    segment_wall(end - start, wall.openings, opening_offset=-start)

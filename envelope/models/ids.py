"""Opaque identifier types for every entity kind."""

from __future__ import annotations
from typing import NewType
from uuid import uuid4


PerimeterId = NewType("PerimeterId", str)
WallId = NewType("WallId", str)
CornerId = NewType("CornerId", str)
OpeningId = NewType("OpeningId", str)
ElementId = NewType("ElementId", str)
GroupId = NewType("GroupId", str)
MaterialId = NewType("MaterialId", str)
WallAssemblyId = NewType("WallAssemblyId", str)
RingBeamAssemblyId = NewType("RingBeamAssemblyId", str)
OpeningAssemblyId = NewType("OpeningAssemblyId", str)


def _new_id(prefix: str) -> str:
    return f"{prefix}_{uuid4().hex[:16]}"


def create_perimeter_id() -> PerimeterId:
    return PerimeterId(_new_id("perimeter"))


def create_wall_id() -> WallId:
    return WallId(_new_id("wall"))


def create_corner_id() -> CornerId:
    return CornerId(_new_id("corner"))


def create_opening_id() -> OpeningId:
    return OpeningId(_new_id("opening"))


def create_element_id() -> ElementId:
    return ElementId(_new_id("element"))


def create_group_id() -> GroupId:
    return GroupId(_new_id("group"))

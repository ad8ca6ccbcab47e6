"""Tagged construction results.

Stages return flat lists of results instead of building models piecemeal;
callers concatenate the lists and fold them once with `aggregate_results`.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, Literal, Union

from envelope.models import (
    Bounds3D, ConstructionElement, ConstructionGroup, ConstructionIssue,
    GroupOrElement, HighlightedArea, Measurement,
)
from envelope.models.ids import ElementId


@dataclass(frozen=True)
class ElementResult:
    element: GroupOrElement
    type: Literal["element"] = "element"


@dataclass(frozen=True)
class MeasurementResult:
    measurement: Measurement
    type: Literal["measurement"] = "measurement"


@dataclass(frozen=True)
class AreaResult:
    area: HighlightedArea
    type: Literal["area"] = "area"


@dataclass(frozen=True)
class ErrorResult:
    issue: ConstructionIssue
    type: Literal["error"] = "error"


@dataclass(frozen=True)
class WarningResult:
    issue: ConstructionIssue
    type: Literal["warning"] = "warning"


ConstructionResult = Union[ElementResult, MeasurementResult, AreaResult, ErrorResult, WarningResult]


def element_result(element: GroupOrElement) -> ElementResult:
    return ElementResult(element)


def measurement_result(measurement: Measurement) -> MeasurementResult:
    return MeasurementResult(measurement)


def area_result(area: HighlightedArea) -> AreaResult:
    return AreaResult(area)


def _issue(
    description: str,
    elements: Iterable[GroupOrElement | ElementId],
    code: str | None,
    bounds: Bounds3D | None,
) -> ConstructionIssue:
    ids: list[ElementId] = []
    boxes: list[Bounds3D | None] = []
    for e in elements:
        if isinstance(e, (ConstructionElement, ConstructionGroup)):
            ids.append(e.id)
            boxes.append(e.bounds)
        else:
            ids.append(e)
    return ConstructionIssue(
        description=description,
        elements=ids,
        code=code,
        bounds=bounds if bounds is not None else Bounds3D.merge(*boxes),
    )


def error_result(
    description: str,
    elements: Iterable[GroupOrElement | ElementId] = (),
    code: str | None = None,
    bounds: Bounds3D | None = None,
) -> ErrorResult:
    return ErrorResult(_issue(description, elements, code, bounds))


def warning_result(
    description: str,
    elements: Iterable[GroupOrElement | ElementId] = (),
    code: str | None = None,
    bounds: Bounds3D | None = None,
) -> WarningResult:
    return WarningResult(_issue(description, elements, code, bounds))


@dataclass
class AggregatedResults:
    elements: list[GroupOrElement] = field(default_factory=list)
    measurements: list[Measurement] = field(default_factory=list)
    areas: list[HighlightedArea] = field(default_factory=list)
    errors: list[ConstructionIssue] = field(default_factory=list)
    warnings: list[ConstructionIssue] = field(default_factory=list)


def aggregate_results(results: Iterable[ConstructionResult]) -> AggregatedResults:
    """Fold tagged results into separate lists, keeping their order."""
    out = AggregatedResults()
    for result in results:
        if isinstance(result, ElementResult):
            out.elements.append(result.element)
        elif isinstance(result, MeasurementResult):
            out.measurements.append(result.measurement)
        elif isinstance(result, AreaResult):
            out.areas.append(result.area)
        elif isinstance(result, ErrorResult):
            out.errors.append(result.issue)
        elif isinstance(result, WarningResult):
            out.warnings.append(result.issue)
        else:
            raise TypeError(f"Unknown construction result: {result!r}")
    return out


def elements_of(results: Iterable[ConstructionResult]) -> list[GroupOrElement]:
    return [r.element for r in results if isinstance(r, ElementResult)]

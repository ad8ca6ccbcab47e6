"""Construction model composition: merge, transform, build from results.

All functions are pure: inputs are never mutated, new models are returned.
Element and group bounds are expressed in their parent's frame, so a model's
bounds are the union of its top-level element bounds.
"""

from __future__ import annotations
from typing import Iterable

from envelope.models import (
    Bounds3D, ConstructionGroup, ConstructionIssue, ConstructionModel,
    GroupOrElement, HighlightedArea, Measurement, Transform,
)
from envelope.core.geometry import compose_transforms, transform_bounds, transform_point
from envelope.core.results import ConstructionResult, aggregate_results


def elements_bounds(elements: Iterable[GroupOrElement]) -> Bounds3D | None:
    return Bounds3D.merge(*(e.bounds for e in elements))


def create_group(
    children: list[GroupOrElement],
    transform: Transform | None = None,
    label: str | None = None,
    tags: dict[str, str] | None = None,
) -> ConstructionGroup:
    transform = transform or Transform()
    local = elements_bounds(children)
    return ConstructionGroup(
        label=label,
        children=children,
        transform=transform,
        tags=tags or {},
        bounds=transform_bounds(local, transform) if local is not None else None,
    )


def model_from_results(results: Iterable[ConstructionResult]) -> ConstructionModel:
    aggregated = aggregate_results(results)
    return ConstructionModel(
        elements=aggregated.elements,
        measurements=aggregated.measurements,
        areas=aggregated.areas,
        errors=aggregated.errors,
        warnings=aggregated.warnings,
        bounds=elements_bounds(aggregated.elements),
    )


def merge_models(*models: ConstructionModel) -> ConstructionModel:
    """Concatenate every list and union the bounds."""
    elements: list[GroupOrElement] = []
    measurements: list[Measurement] = []
    areas: list[HighlightedArea] = []
    errors: list[ConstructionIssue] = []
    warnings: list[ConstructionIssue] = []
    for m in models:
        elements.extend(m.elements)
        measurements.extend(m.measurements)
        areas.extend(m.areas)
        errors.extend(m.errors)
        warnings.extend(m.warnings)
    return ConstructionModel(
        elements=elements,
        measurements=measurements,
        areas=areas,
        errors=errors,
        warnings=warnings,
        bounds=Bounds3D.merge(*(m.bounds for m in models)),
    )


def _transform_measurement(m: Measurement, transform: Transform) -> Measurement:
    return m.model_copy(update={
        "start_point": transform_point(transform, m.start_point),
        "end_point": transform_point(transform, m.end_point),
    })


def _transform_area(area: HighlightedArea, transform: Transform) -> HighlightedArea:
    # Area geometry stays local; only its placement changes
    return area.model_copy(update={"transform": compose_transforms(transform, area.transform)})


def _transform_issue(issue: ConstructionIssue, transform: Transform) -> ConstructionIssue:
    if issue.bounds is None:
        return issue
    return issue.model_copy(update={"bounds": transform_bounds(issue.bounds, transform)})


def transform_model(
    model: ConstructionModel,
    transform: Transform,
    label: str | None = None,
    tags: dict[str, str] | None = None,
) -> ConstructionModel:
    """
    Reposition a whole model by one rigid transform.

    The elements are wrapped in a single group carrying the transform;
    measurements, areas, bounds and issue bounds are mapped into the new
    frame. The identity transform returns an equivalent model unchanged.
    """
    if transform.is_identity() and label is None and not tags:
        return ConstructionModel(
            elements=list(model.elements),
            measurements=list(model.measurements),
            areas=list(model.areas),
            errors=list(model.errors),
            warnings=list(model.warnings),
            bounds=model.bounds,
        )

    elements: list[GroupOrElement] = []
    if model.elements:
        elements.append(create_group(list(model.elements), transform, label=label, tags=tags))

    return ConstructionModel(
        elements=elements,
        measurements=[_transform_measurement(m, transform) for m in model.measurements],
        areas=[_transform_area(a, transform) for a in model.areas],
        errors=[_transform_issue(i, transform) for i in model.errors],
        warnings=[_transform_issue(i, transform) for i in model.warnings],
        bounds=transform_bounds(model.bounds, transform) if model.bounds is not None else None,
    )

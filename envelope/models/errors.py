"""Fatal construction errors."""

from __future__ import annotations


class ConstructionValidationError(ValueError):
    """Input is structurally invalid; no coherent model can be produced."""


class GeometryError(ConstructionValidationError):
    """Derived geometry cannot be constructed (degenerate or parallel lines)."""

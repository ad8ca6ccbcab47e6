"""Geometry cache: shape parameters to built kernel geometry.

The geometry kernel itself is external; the cache only remembers whatever
the injected builder returned for a given canonical shape key.
"""

from __future__ import annotations
import json
import logging
from typing import Any, Callable, Generic, TypeVar

from envelope.models import Shape

logger = logging.getLogger(__name__)

T = TypeVar("T")

KEY_PRECISION = 6


def _canonical(value: Any) -> Any:
    if isinstance(value, float):
        rounded = round(value, KEY_PRECISION)
        return 0.0 if rounded == 0 else rounded   # fold -0.0
    if isinstance(value, dict):
        return {k: _canonical(v) for k, v in value.items() if k != "bounds"}
    if isinstance(value, (list, tuple)):
        return [_canonical(v) for v in value]
    return value


def _canonical_shape(data: dict[str, Any]) -> dict[str, Any]:
    data = _canonical(data)
    if data.get("type") != "boolean":
        return data
    operands = [
        {"shape": _canonical_shape(op["shape"]), "transform": op["transform"]}
        for op in data["operands"]
    ]
    by_key = lambda op: json.dumps(op, sort_keys=True)  # noqa: E731
    if data["operation"] == "subtract":
        # Base operand stays first; the subtracted set is unordered
        operands = operands[:1] + sorted(operands[1:], key=by_key)
    else:
        operands = sorted(operands, key=by_key)
    data["operands"] = operands
    return data


def key_for(shape: Shape) -> str:
    """Canonical string key; equal for shapes that build the same geometry."""
    return json.dumps(_canonical_shape(shape.model_dump(mode="json")), sort_keys=True)


class GeometryCache(Generic[T]):
    """
    Memoizes kernel geometry by canonical shape key.

    One instance is meant to live as long as the service that owns it. The
    cache never evicts; call `clear()` to release everything.
    """

    def __init__(self, builder: Callable[[Shape], T]) -> None:
        self._builder = builder
        self._entries: dict[str, T] = {}
        self.hits = 0
        self.misses = 0

    def get_or_build(self, shape: Shape) -> T:
        key = key_for(shape)
        if key in self._entries:
            self.hits += 1
            return self._entries[key]
        self.misses += 1
        built = self._builder(shape)
        self._entries[key] = built
        logger.debug("Cached geometry for %s shape (%d entries)", shape.type, len(self._entries))
        return built

    def contains(self, shape: Shape) -> bool:
        return key_for(shape) in self._entries

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

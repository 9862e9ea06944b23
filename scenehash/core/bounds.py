# scenehash/core/bounds.py
"""
Axis-aligned bounding boxes and the bounds-provider capability.

Anything with ``left``/``top``/``right``/``bottom`` attributes (``pygame.Rect``,
``pygame.FRect``, :class:`Bounds`) can be used where bounds are expected;
:func:`coerce_bounds` validates and normalises it to a :class:`Bounds`.
"""
from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from typing import Iterable, Protocol, Tuple, runtime_checkable

import pygame

from .errors import InvalidBounds

_EDGES = ("left", "top", "right", "bottom")


@runtime_checkable
class BoundsLike(Protocol):
    """Any object exposing the four AABB edges."""

    left: float
    top: float
    right: float
    bottom: float


@runtime_checkable
class BoundsProvider(Protocol):
    """
    Capability an entity exposes so the grid can ask for its AABB.

    ``skip_update=True`` is the fast mode and may return a stale cached box;
    ``skip_update=False`` forces the provider to recompute.
    """

    def get_bounds(self, skip_update: bool = False) -> BoundsLike: ...


@dataclass(frozen=True, slots=True)
class Bounds:
    """Immutable AABB with ``left <= right`` and ``top <= bottom``."""

    left: float
    top: float
    right: float
    bottom: float

    @classmethod
    def from_rect(cls, x: float, y: float, width: float, height: float) -> "Bounds":
        """Build from position + size, the way ``pygame.Rect`` is specified."""
        return coerce_bounds((x, y, x + width, y + height))

    @classmethod
    def empty_at(cls, x: float, y: float) -> "Bounds":
        return cls(float(x), float(y), float(x), float(y))

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def center(self) -> Tuple[float, float]:
        return (self.left + self.right) * 0.5, (self.top + self.bottom) * 0.5

    def intersects(self, other: BoundsLike) -> bool:
        """Inclusive overlap test: touching edges count as overlapping."""
        return (
            other.right >= self.left
            and other.left <= self.right
            and other.bottom >= self.top
            and other.top <= self.bottom
        )

    def union(self, other: BoundsLike) -> "Bounds":
        return Bounds(
            min(self.left, float(other.left)),
            min(self.top, float(other.top)),
            max(self.right, float(other.right)),
            max(self.bottom, float(other.bottom)),
        )

    def translate(self, dx: float, dy: float) -> "Bounds":
        return Bounds(self.left + dx, self.top + dy, self.right + dx, self.bottom + dy)

    def to_rect(self) -> pygame.Rect:
        """Integer ``pygame.Rect`` covering these bounds (floored origin, ceiled extent)."""
        x0, y0 = math.floor(self.left), math.floor(self.top)
        x1, y1 = math.ceil(self.right), math.ceil(self.bottom)
        return pygame.Rect(x0, y0, x1 - x0, y1 - y0)


def _edge_value(source: object, name: str, raw: object) -> float:
    if isinstance(raw, bool) or not isinstance(raw, numbers.Real):
        raise InvalidBounds(source, f"{name} must be a real number, got {type(raw).__name__}")
    try:
        value = float(raw)
    except OverflowError:
        raise InvalidBounds(source, f"{name} is too large for a float") from None
    if not math.isfinite(value):
        raise InvalidBounds(source, f"{name} must be finite, got {value!r}")
    return value


def coerce_bounds(source: object) -> Bounds:
    """
    Validate ``source`` and return it as :class:`Bounds`.

    Accepts an object with edge attributes or a 4-sequence
    ``(left, top, right, bottom)``. Raises :class:`InvalidBounds` for anything
    non-numeric, non-finite or inverted.
    """
    if isinstance(source, Bounds):
        raw: Iterable[object] = (source.left, source.top, source.right, source.bottom)
    elif all(hasattr(source, e) for e in _EDGES):
        raw = tuple(getattr(source, e) for e in _EDGES)
    elif isinstance(source, (tuple, list)) and len(source) == 4:
        raw = source
    else:
        raise InvalidBounds(source, "expected left/top/right/bottom")

    left, top, right, bottom = (_edge_value(source, n, v) for n, v in zip(_EDGES, raw))
    if left > right:
        raise InvalidBounds(source, f"left {left} > right {right}")
    if top > bottom:
        raise InvalidBounds(source, f"top {top} > bottom {bottom}")
    return Bounds(left, top, right, bottom)

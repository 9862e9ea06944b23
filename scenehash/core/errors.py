# scenehash/core/errors.py
"""
Exceptions raised by the spatial hash.

Both concrete errors also derive from ValueError so callers that only care
about "bad input" can catch the builtin.
"""
from __future__ import annotations


class SpatialHashError(Exception):
    """Base class for all scenehash errors."""


class InvalidArgument(SpatialHashError, ValueError):
    """Raised when the grid is constructed with an unusable cell size."""

    def __init__(self, name: str, value: object, reason: str) -> None:
        self.name = name
        self.value = value
        super().__init__(f"Invalid {name} {value!r}: {reason}")


class InvalidBounds(SpatialHashError, ValueError):
    """Raised when an AABB is non-finite, inverted or not an AABB at all."""

    def __init__(self, bounds: object, reason: str) -> None:
        self.bounds = bounds
        super().__init__(f"Invalid bounds {bounds!r}: {reason}")

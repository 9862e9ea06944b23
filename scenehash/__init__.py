# scenehash/__init__.py
"""
scenehash: broad-phase spatial hashing for 2D scene graphs.

Entities are bucketed into square grid cells by their axis-aligned bounds so
"what overlaps this rectangle?" only visits the cells the rectangle touches.
"""
from .core import (
    Bounds,
    BoundsProvider,
    EntitySet,
    InvalidArgument,
    InvalidBounds,
    SpatialHash,
    SpatialHashError,
    SpatialHashSystem,
)
from .entities import SceneNode
from .utils import EventBus, bus, configure_logging

__version__ = "0.1.0"

__all__ = [
    "Bounds",
    "BoundsProvider",
    "EntitySet",
    "EventBus",
    "InvalidArgument",
    "InvalidBounds",
    "SceneNode",
    "SpatialHash",
    "SpatialHashError",
    "SpatialHashSystem",
    "bus",
    "configure_logging",
]

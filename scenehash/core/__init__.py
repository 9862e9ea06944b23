from .bounds import Bounds, BoundsLike, BoundsProvider, coerce_bounds
from .errors import InvalidArgument, InvalidBounds, SpatialHashError
from .spatial_hash import EntitySet, SpatialHash
from .system import SpatialHashSystem

__all__ = [
    "Bounds",
    "BoundsLike",
    "BoundsProvider",
    "coerce_bounds",
    "EntitySet",
    "InvalidArgument",
    "InvalidBounds",
    "SpatialHash",
    "SpatialHashError",
    "SpatialHashSystem",
]

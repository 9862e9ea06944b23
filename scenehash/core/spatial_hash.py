# scenehash/core/spatial_hash.py
from __future__ import annotations

import logging
import math
import numbers
from collections.abc import Set as AbstractSet
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Iterable, Iterator, Optional, Set, Tuple

from .bounds import Bounds, coerce_bounds
from .errors import InvalidArgument, InvalidBounds

log = logging.getLogger(__name__)

Cell = Tuple[int, int]
CellRange = Tuple[int, int, int, int]  # min_cx, min_cy, max_cx, max_cy


@dataclass(slots=True)
class Entry:
    """Stored record for one indexed entity."""
    obj: Any
    bounds: Bounds
    cells: FrozenSet[Cell]


class SpatialHash:
    """
    Uniform 2D grid over square cells of ``cell_size`` world units.

    - Buckets keyed by integer ``(cx, cy)`` cells; an entity sits in every
      bucket its AABB touches and in no other
    - Membership is by identity, so unhashable or value-equal objects are fine
    - Reverse index (entity -> footprint) keeps remove/update O(footprint)
    - ``query`` re-checks exact AABB overlap; ``query_coarse`` does not
    - Empty buckets are dropped, ``reset`` releases every key
    """

    def __init__(self, cell_size: float) -> None:
        if isinstance(cell_size, bool) or not isinstance(cell_size, numbers.Real):
            raise InvalidArgument("cell_size", cell_size, "must be a real number")
        try:
            size = float(cell_size)
        except OverflowError:
            raise InvalidArgument("cell_size", cell_size, "is too large for a float") from None
        if not math.isfinite(size) or size <= 0:
            raise InvalidArgument("cell_size", cell_size, "must be positive and finite")
        self._cell_size = size

        self._grid: Dict[Cell, Set[int]] = {}
        self._entries: Dict[int, Entry] = {}

        # lightweight stats, refreshed by every query
        self.last_query_cells_visited: int = 0
        self.last_query_candidates: int = 0

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(cell_size={self._cell_size:g}, "
            f"entities={len(self._entries)}, buckets={len(self._grid)})"
        )

    @property
    def cell_size(self) -> float:
        return self._cell_size

    # ---------------------------------------------------------------------
    # Cell math
    # ---------------------------------------------------------------------
    def cell_of(self, x: float, y: float) -> Cell:
        c = self._cell_size
        fx, fy = x / c, y / c
        if not (math.isfinite(fx) and math.isfinite(fy)):
            raise InvalidBounds((x, y), f"cell index overflows for cell_size {c:g}")
        return math.floor(fx), math.floor(fy)

    def cell_range(self, bounds: Any) -> CellRange:
        """Inclusive ``(min_cx, min_cy, max_cx, max_cy)`` spanned by ``bounds``."""
        b = coerce_bounds(bounds)
        min_cx, min_cy = self.cell_of(b.left, b.top)
        max_cx, max_cy = self.cell_of(b.right, b.bottom)
        return min_cx, min_cy, max_cx, max_cy

    def cells_for(self, bounds: Any) -> Iterator[Cell]:
        """Every cell spanned by ``bounds``. Order is unspecified."""
        min_cx, min_cy, max_cx, max_cy = self.cell_range(bounds)
        for cy in range(min_cy, max_cy + 1):
            for cx in range(min_cx, max_cx + 1):
                yield (cx, cy)

    # ---------------------------------------------------------------------
    # Mutators
    # ---------------------------------------------------------------------
    def insert(self, obj: Any, bounds: Any = None) -> "SpatialHash":
        """
        Index ``obj`` under ``bounds`` (or ``obj.get_bounds()`` when omitted).

        Re-inserting a present entity moves it to the new footprint. Returns
        ``self`` so calls can be chained.
        """
        b = self._resolve_bounds(obj, bounds)
        self._reindex(obj, b)
        return self

    def update(self, obj: Any, bounds: Any = None) -> None:
        """Equivalent to ``remove(obj)`` then ``insert(obj, bounds)``."""
        b = self._resolve_bounds(obj, bounds)
        self.remove(obj)
        self._reindex(obj, b)

    def remove(self, obj: Any) -> None:
        """Drop ``obj`` from every bucket it occupies. No-op when absent."""
        entry = self._entries.pop(id(obj), None)
        if entry is None:
            return
        self._discard_from(id(obj), entry.cells)

    def reset(self) -> None:
        """Empty the grid; all bucket keys and stored bounds are released."""
        if self._entries:
            log.debug("reset: dropping %d entities from %d buckets", len(self._entries), len(self._grid))
        self._grid.clear()
        self._entries.clear()

    clear = reset

    # ---------------------------------------------------------------------
    # Queries
    # ---------------------------------------------------------------------
    def query(self, bounds: Any) -> EntitySet:
        """
        Entities whose stored AABB overlaps ``bounds`` (edges inclusive).

        Cell membership only narrows the candidates; each one is checked
        against the bounds recorded at its last insert/update.
        """
        q = coerce_bounds(bounds)
        found: Dict[int, Any] = {}
        seen: Set[int] = set()
        for eid in self._candidates(q):
            if eid in seen:
                continue
            seen.add(eid)
            entry = self._entries[eid]
            if q.intersects(entry.bounds):
                found[eid] = entry.obj
        return EntitySet._from_ids(found)

    def query_coarse(self, bounds: Any) -> EntitySet:
        """Every entity sharing a cell with ``bounds``; an over-approximation of :meth:`query`."""
        q = coerce_bounds(bounds)
        found: Dict[int, Any] = {}
        for eid in self._candidates(q):
            if eid not in found:
                found[eid] = self._entries[eid].obj
        return EntitySet._from_ids(found)

    # ---------------------------------------------------------------------
    # Accessors / helpers
    # ---------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, obj: Any) -> bool:
        return id(obj) in self._entries

    def count(self) -> int:
        return len(self._entries)

    def bounds_of(self, obj: Any) -> Optional[Bounds]:
        """Bounds recorded for ``obj``, or None when it isn't indexed."""
        entry = self._entries.get(id(obj))
        return entry.bounds if entry else None

    def footprint(self, obj: Any) -> FrozenSet[Cell]:
        entry = self._entries.get(id(obj))
        return entry.cells if entry else frozenset()

    def num_buckets(self) -> int:
        return len(self._grid)

    def bucket_sizes(self) -> Dict[Cell, int]:
        return {cell: len(ids) for cell, ids in self._grid.items()}

    def avg_bucket_load(self) -> float:
        if not self._grid:
            return 0.0
        return sum(len(s) for s in self._grid.values()) / float(len(self._grid))

    # ---------------------------------------------------------------------
    # Internals
    # ---------------------------------------------------------------------
    def _resolve_bounds(self, obj: Any, bounds: Any) -> Bounds:
        if bounds is None:
            getter = getattr(obj, "get_bounds", None)
            if getter is None:
                raise InvalidBounds(obj, "no bounds given and entity has no get_bounds()")
            bounds = getter()
        return coerce_bounds(bounds)

    def _candidates(self, q: Bounds) -> Iterator[int]:
        self.last_query_cells_visited = 0
        self.last_query_candidates = 0
        grid = self._grid
        min_cx, min_cy, max_cx, max_cy = self.cell_range(q)
        span = (max_cx - min_cx + 1) * (max_cy - min_cy + 1)

        if span > len(grid):
            # sparse grid: scan the occupied buckets instead of the whole range
            for (cx, cy), bucket in list(grid.items()):
                self.last_query_cells_visited += 1
                if min_cx <= cx <= max_cx and min_cy <= cy <= max_cy:
                    self.last_query_candidates += len(bucket)
                    yield from bucket
            return

        for cy in range(min_cy, max_cy + 1):
            for cx in range(min_cx, max_cx + 1):
                self.last_query_cells_visited += 1
                bucket = grid.get((cx, cy))
                if not bucket:
                    continue
                self.last_query_candidates += len(bucket)
                yield from bucket

    def _reindex(self, obj: Any, bounds: Bounds) -> None:
        eid = id(obj)
        new_cells = frozenset(self.cells_for(bounds))
        old = self._entries.get(eid)
        old_cells = old.cells if old is not None else frozenset()

        self._discard_from(eid, old_cells - new_cells)
        for cell in new_cells - old_cells:
            self._grid.setdefault(cell, set()).add(eid)

        self._entries[eid] = Entry(obj, bounds, new_cells)

    def _discard_from(self, eid: int, cells: FrozenSet[Cell]) -> None:
        for cell in cells:
            bucket = self._grid.get(cell)
            if bucket:
                bucket.discard(eid)
                if not bucket:
                    del self._grid[cell]


class EntitySet(AbstractSet):
    """
    Read-only set of entities compared by identity.

    Returned by queries so that unhashable entities, or distinct entities that
    compare equal by value, are each reported exactly once.
    """

    __slots__ = ("_items",)

    def __init__(self, iterable: Iterable[Any] = ()) -> None:
        self._items: Dict[int, Any] = {id(o): o for o in iterable}

    @classmethod
    def _from_ids(cls, items: Dict[int, Any]) -> EntitySet:
        inst = cls.__new__(cls)
        inst._items = items
        return inst

    def __contains__(self, obj: object) -> bool:
        return id(obj) in self._items

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._items.values())!r})"

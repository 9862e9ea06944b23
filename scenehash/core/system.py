# scenehash/core/system.py
"""
SpatialHashSystem: keeps one SpatialHash in sync with a set of scene-graph roots.

    system = SpatialHashSystem(cell_size=128)
    system.add_target(stage)
    system.set_ticker(bus)        # re-index on every "tick" event
    hits = system.search(pygame.Rect(0, 0, 64, 64))

Each update clears the hash and re-inserts every target together with all of
its descendants. Which nodes are indexed, and when, is decided here; the
SpatialHash itself knows nothing about trees.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Set

import scenehash.utils.settings as settings
from scenehash.utils.event_bus import EventBus, Subscription

from .spatial_hash import EntitySet, SpatialHash

log = logging.getLogger(__name__)


class SpatialHashSystem:
    """Scene-wide spatial hash, re-indexed once per tick."""

    def __init__(self, cell_size: float = settings.SCENE_CELL_SIZE) -> None:
        self.hash2d = SpatialHash(cell_size)

        # roots re-indexed (with their whole subtree) on each update
        self._targets: Dict[int, Any] = {}

        # when True, prerender() triggers update(); turn off if rendering several times per tick
        self.update_before_render: bool = True

        # when True, update() trusts each target's cached bounds instead of refreshing them first
        self.skip_bounds_update: bool = False

        self._tick_sub: Optional[Subscription] = None
        self._prerender_sub: Optional[Subscription] = None

    def __repr__(self) -> str:
        return f"SpatialHashSystem(targets={len(self._targets)}, hash={self.hash2d!r})"

    # ------------------------------------------------------------------ #
    # Targets
    # ------------------------------------------------------------------ #
    @property
    def targets(self) -> List[Any]:
        return list(self._targets.values())

    def add_target(self, node: Any) -> SpatialHashSystem:
        self._targets[id(node)] = node
        log.debug("hash target added: %r", node)
        return self

    def remove_target(self, node: Any) -> SpatialHashSystem:
        self._targets.pop(id(node), None)
        return self

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #
    def search(self, rect_or_node: Any) -> EntitySet:
        """Indexed nodes overlapping a rectangle, or the precise bounds of a node."""
        getter = getattr(rect_or_node, "get_bounds", None)
        bounds = getter() if callable(getter) else rect_or_node
        return self.hash2d.query(bounds)

    # ------------------------------------------------------------------ #
    # Tick wiring
    # ------------------------------------------------------------------ #
    def prerender(self, payload: Optional[Dict[str, Any]] = None) -> None:
        if self.update_before_render:
            self.update()

    def attach_prerender(self, bus: EventBus, event: str = settings.PRERENDER_EVENT) -> SpatialHashSystem:
        if self._prerender_sub is not None:
            self._prerender_sub.cancel()
        self._prerender_sub = bus.on(event, self.prerender)
        return self

    def set_ticker(self, ticker: Optional[EventBus], event: str = settings.TICK_EVENT) -> SpatialHashSystem:
        """
        Re-index on every ``event`` emitted by ``ticker``.

        A previously set ticker is detached first. Passing None stops ticking.
        A non-None ticker turns ``update_before_render`` off.
        """
        if self._tick_sub is not None:
            self._tick_sub.cancel()
            self._tick_sub = None

        if ticker is not None:
            self.update_before_render = False
            self._tick_sub = ticker.on(event, self.update)
            log.info("spatial hash ticking on %r", event)
        return self

    @property
    def ticker(self) -> Optional[EventBus]:
        return self._tick_sub.bus if self._tick_sub is not None else None

    # ------------------------------------------------------------------ #
    # Update
    # ------------------------------------------------------------------ #
    def update(self, payload: Optional[Dict[str, Any]] = None) -> None:
        """Rebuild the hash from every target and its descendants."""
        hash2d = self.hash2d
        hash2d.reset()

        for target in list(self._targets.values()):
            if not self.skip_bounds_update:
                # refreshes the cached bounds of the whole subtree
                target.get_bounds()
            self._put_subtree(target)

        log.debug("spatial hash rebuilt: %d nodes in %d buckets", len(hash2d), hash2d.num_buckets())

    def _put_subtree(self, root: Any) -> None:
        stack = [root]
        seen: Set[int] = set()
        while stack:
            node = stack.pop()
            if id(node) in seen:
                continue
            seen.add(id(node))
            self.hash2d.insert(node, node.get_bounds(skip_update=True))
            children = getattr(node, "children", None)
            if children:
                stack.extend(children)

    def destroy(self) -> None:
        self.set_ticker(None)
        if self._prerender_sub is not None:
            self._prerender_sub.cancel()
            self._prerender_sub = None
        self._targets.clear()
        self.hash2d.reset()

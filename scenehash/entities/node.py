"""
SceneNode: a minimal scene-graph node that provides bounds to the spatial hash.
Geometry is stored directly in world coordinates (no transforms).
"""
from __future__ import annotations

from typing import Iterator, List, Optional

from scenehash.core.bounds import Bounds


class SceneNode:
    """
    A node with its own rectangle geometry and any number of children.

    ``get_bounds()`` recomputes the union of this node's geometry and the
    bounds of all descendants. ``get_bounds(skip_update=True)`` returns the
    value cached by the last precise call, which may be stale.
    """

    def __init__(
        self,
        x: float = 0.0,
        y: float = 0.0,
        width: float = 0.0,
        height: float = 0.0,
        *,
        name: Optional[str] = None,
    ) -> None:
        self.name = name
        self.x = float(x)
        self.y = float(y)
        self.parent: Optional[SceneNode] = None
        self.children: List[SceneNode] = []

        # own geometry as a union of drawn rectangles; None until something is drawn
        self._geometry: Optional[Bounds] = None
        self._cached: Optional[Bounds] = None
        if width or height:
            self.draw_rect(x, y, width, height)

    def __repr__(self) -> str:
        label = self.name or hex(id(self))
        return f"SceneNode({label}, children={len(self.children)})"

    # ---------- hierarchy ----------
    def add_child(self, child: SceneNode) -> SceneNode:
        node: Optional[SceneNode] = self
        while node is not None:
            if node is child:
                raise ValueError("a node cannot be added below itself")
            node = node.parent
        if child.parent is not None:
            child.parent.remove_child(child)
        child.parent = self
        self.children.append(child)
        return child

    def remove_child(self, child: SceneNode) -> None:
        for i, c in enumerate(self.children):
            if c is child:
                del self.children[i]
                child.parent = None
                return

    def walk(self) -> Iterator[SceneNode]:
        """This node then every descendant, depth-first."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    # ---------- geometry ----------
    def draw_rect(self, x: float, y: float, width: float, height: float) -> SceneNode:
        rect = Bounds.from_rect(x, y, width, height)
        self._geometry = rect if self._geometry is None else self._geometry.union(rect)
        return self

    def clear_geometry(self) -> None:
        self._geometry = None

    def move_by(self, dx: float, dy: float) -> None:
        """Translate own geometry; cached bounds stay stale until the next precise query."""
        self.x += dx
        self.y += dy
        if self._geometry is not None:
            self._geometry = self._geometry.translate(dx, dy)

    def move_to(self, x: float, y: float) -> None:
        self.move_by(x - self.x, y - self.y)

    # ---------- bounds provider ----------
    def get_bounds(self, skip_update: bool = False) -> Bounds:
        if skip_update and self._cached is not None:
            return self._cached
        self._refresh_subtree()
        return self._cached

    def _refresh_subtree(self) -> None:
        # children before parents, so every union reads fresh child caches
        for node in reversed(list(self.walk())):
            result = node._geometry
            for child in node.children:
                b = child._cached
                result = b if result is None else result.union(b)
            node._cached = result if result is not None else Bounds.empty_at(node.x, node.y)

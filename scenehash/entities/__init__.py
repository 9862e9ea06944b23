from .node import SceneNode

__all__ = ["SceneNode"]

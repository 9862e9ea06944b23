from .debug_overlay import GridDebugOverlay

__all__ = ["GridDebugOverlay"]

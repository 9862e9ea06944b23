# scenehash/utils/settings.py
"""
Centralized defaults for the spatial hash and its debug tooling.

These are read as constructor defaults only; nothing in the package assigns
to them at runtime. Pass explicit values instead of editing this module.
"""

# --- Spatial Hash Settings ---
SCENE_CELL_SIZE = 256       # world units per square cell for the scene-wide hash

# --- Driver Settings ---
TICK_EVENT = "tick"             # EventBus event the system re-indexes on
PRERENDER_EVENT = "prerender"   # EventBus event fired before each render

# --- Debug Overlay ---
DEBUG_GRID_COLOR = (0, 255, 0)
DEBUG_GRID_ALPHA = 60
DEBUG_GRID_LINE_WIDTH = 1
DEBUG_GRID_MAX_LINES = 512    # per axis; denser grids skip their lines for that axis
DEBUG_COUNT_FONT_SIZE = 14

# --- Logging ---
LOG_DIR = "logs"
LOG_FILE_PREFIX = "scenehash"
LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%H:%M:%S"
NOISY_LOGGERS = ("PIL", "matplotlib", "urllib3", "asyncio", "OpenGL")

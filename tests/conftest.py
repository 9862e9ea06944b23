# tests/conftest.py
from __future__ import annotations
import os
import sys
from pathlib import Path
import pytest

# Ensure repo root is importable (so `import scenehash` works without an install)
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Headless Pygame setup (safe if pygame isn't used in a given test)
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")


@pytest.fixture(scope="session", autouse=True)
def _init_pygame():
    import pygame
    pygame.init()
    try:
        yield
    finally:
        pygame.quit()


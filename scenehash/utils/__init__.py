# scenehash/utils/__init__.py
"""Settings, logging and the event bus shared by the scenehash packages."""
from .event_bus import EventBus, Subscription, bus
from .logging_setup import configure_logging

__all__ = ["EventBus", "Subscription", "bus", "configure_logging"]

# scenehash/utils/event_bus.py
from __future__ import annotations
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, DefaultDict, Dict, List, Optional

Handler = Callable[[Dict[str, Any]], None]


@dataclass(slots=True, eq=False)
class Subscription:
    """
    Handle returned by ``EventBus.on``. Calling it (or ``cancel()``) unsubscribes;
    doing so twice is harmless.
    """
    bus: "EventBus"
    event: str
    handler: Handler
    active: bool = True

    def cancel(self) -> None:
        if self.active:
            self.active = False
            self.bus._detach(self)

    __call__ = cancel


class EventBus:
    """
    Synchronous pub/sub bus that drives per-tick work such as SpatialHashSystem:
        sub = bus.on("tick", lambda payload: ...)
        bus.emit("tick", dt=0.016)   # -> number of handlers run
        sub()                        # unsubscribe
    Handlers run in subscription order on the emitting thread; exceptions propagate.
    """
    def __init__(self) -> None:
        self._subs: DefaultDict[str, List[Subscription]] = defaultdict(list)

    def on(self, event: str, handler: Handler) -> Subscription:
        sub = Subscription(self, event, handler)
        self._subs[event].append(sub)
        return sub

    def emit(self, event: str, **payload: Any) -> int:
        ran = 0
        # snapshot, so handlers may (un)subscribe while we dispatch
        for sub in list(self._subs.get(event, ())):
            if sub.active:
                sub.handler(payload)
                ran += 1
        return ran

    def handler_count(self, event: str) -> int:
        return len(self._subs.get(event, ()))

    def clear(self, event: Optional[str] = None) -> None:
        """Cancel every subscription, or only those for ``event``."""
        events = [event] if event is not None else list(self._subs)
        for name in events:
            for sub in list(self._subs.get(name, ())):
                sub.cancel()

    def _detach(self, sub: Subscription) -> None:
        subs = self._subs.get(sub.event)
        if not subs:
            return
        for i, s in enumerate(subs):
            if s is sub:
                del subs[i]
                break
        if not subs:
            del self._subs[sub.event]


# shared instance
bus = EventBus()

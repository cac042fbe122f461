"""In-process dispatch of desktop lifecycle events."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from typing import Any

DesktopEventHandler = Callable[[str, dict[str, Any]], None]

WINDOW_OPENED = "window.opened"
WINDOW_CLOSED = "window.closed"
WINDOW_MINIMIZED = "window.minimized"
WINDOW_FOCUSED = "window.focused"
WINDOW_MOVED = "window.moved"
WINDOW_RESIZED = "window.resized"
WINDOW_DATA_UPDATED = "window.data_updated"
APP_INSTALLED = "app.installed"
APP_UNINSTALLED = "app.uninstalled"
COMMAND_EVALUATED = "terminal.command"

ANY_EVENT = "*"


class EventBus:
    """Delivers events to subscribers synchronously, in subscription order."""

    def __init__(self) -> None:
        self._handlers: dict[str, list[DesktopEventHandler]] = defaultdict(list)

    def subscribe(self, event_name: str, handler: DesktopEventHandler) -> None:
        """Register a callback for one event name, or `*` for all of them."""
        self._handlers[event_name].append(handler)

    def emit(self, event_name: str, payload: dict[str, Any]) -> None:
        for handler in [*self._handlers.get(event_name, []), *self._handlers.get(ANY_EVENT, [])]:
            handler(event_name, payload)

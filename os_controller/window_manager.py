"""Window lifecycle transitions layered on the window registry."""

from __future__ import annotations

import logging
from typing import Any

from core.event_bus import (
    WINDOW_CLOSED,
    WINDOW_DATA_UPDATED,
    WINDOW_FOCUSED,
    WINDOW_MINIMIZED,
    WINDOW_MOVED,
    WINDOW_OPENED,
    WINDOW_RESIZED,
    EventBus,
)
from world_model.app_registry import AppRegistry
from world_model.types.window import WindowRecord
from world_model.window_registry import WindowRegistry


class WindowManager:
    """Open/minimize/focus/close state machine over registry records.

    Every operation that names an unknown window id returns without touching
    state. Scripts routinely hold ids of windows that were closed since, and
    those calls are ignored rather than reported.
    """

    def __init__(
        self,
        registry: WindowRegistry,
        apps: AppRegistry,
        event_bus: EventBus | None = None,
    ) -> None:
        self.registry = registry
        self.apps = apps
        self.event_bus = event_bus or EventBus()
        self.logger = logging.getLogger("fluxo.window_manager")
        self.focused_window_id: str | None = None

    def _emit(self, event_name: str, record: WindowRecord, **extra: Any) -> None:
        self.event_bus.emit(event_name, {"window_id": record.id, "app_id": record.app_id, **extra})

    def windows(self) -> list[WindowRecord]:
        """Copies of the live records, in allocation order."""
        return [record.model_copy(deep=True) for record in self.registry.live()]

    def get(self, window_id: str) -> WindowRecord | None:
        record = self.registry.get(window_id)
        return record.model_copy(deep=True) if record else None

    def open(self, app_id: str, data: dict[str, Any] | None = None) -> WindowRecord | None:
        """Open a window for an app, or focus its existing single instance."""
        app = self.apps.get(app_id)
        if app is None:
            self.logger.info("Ignoring open for unknown app %s", app_id)
            return None

        if not app.can_multi_instance:
            existing = self.registry.find_by_app(app_id)
            if existing is not None:
                self.logger.debug("App %s is single-instance, focusing %s", app_id, existing.id)
                self.focus(existing.id)
                return self.get(existing.id)

        record = self.registry.allocate(app.id, app.name, app.type, data)
        for other in self.registry.live():
            if other.id != record.id:
                other.focused = False
        self.focused_window_id = record.id
        self.logger.info("Opened %s (%s) z=%s", record.id, app_id, record.z_index)
        self._emit(WINDOW_OPENED, record, z_index=record.z_index)
        return record.model_copy(deep=True)

    def close(self, window_id: str) -> bool:
        """Remove a window. Focus is cleared, not handed to another window."""
        record = self.registry.remove(window_id)
        if record is None:
            return False
        self.focused_window_id = None
        self.logger.info("Closed %s", window_id)
        self._emit(WINDOW_CLOSED, record)
        return True

    def minimize(self, window_id: str) -> bool:
        record = self.registry.get(window_id)
        if record is None:
            return False
        record.status = "minimized"
        record.focused = False
        self.focused_window_id = None
        self.logger.info("Minimized %s", window_id)
        self._emit(WINDOW_MINIMIZED, record)
        return True

    def focus(self, window_id: str) -> bool:
        """Restore a window and raise it above every other."""
        target = self.registry.get(window_id)
        if target is None:
            return False
        for record in self.registry.live():
            if record.id != window_id:
                record.focused = False
        target.status = "open"
        target.focused = True
        target.z_index = self.registry.next_z()
        self.focused_window_id = window_id
        self.logger.info("Focused %s z=%s", window_id, target.z_index)
        self._emit(WINDOW_FOCUSED, target, z_index=target.z_index)
        return True

    def activate(self, window_id: str) -> bool:
        """Taskbar click: restore a minimized window, minimize a focused one."""
        record = self.registry.get(window_id)
        if record is None:
            return False
        if record.status == "minimized":
            return self.focus(window_id)
        if record.focused:
            return self.minimize(window_id)
        return self.focus(window_id)

    def move(self, window_id: str, x: float, y: float) -> bool:
        record = self.registry.get(window_id)
        if record is None:
            return False
        record.x = x
        record.y = y
        self.logger.debug("Moved %s to (%s, %s)", window_id, x, y)
        self._emit(WINDOW_MOVED, record, x=x, y=y)
        return True

    def resize(self, window_id: str, width: float, height: float) -> bool:
        """Set the window size as given; minimum sizes are the caller's concern."""
        record = self.registry.get(window_id)
        if record is None:
            return False
        record.width = width
        record.height = height
        self.logger.debug("Resized %s to %sx%s", window_id, width, height)
        self._emit(WINDOW_RESIZED, record, width=width, height=height)
        return True

    def set_data(self, window_id: str, patch: dict[str, Any]) -> bool:
        record = self.registry.get(window_id)
        if record is None:
            return False
        record.data = {**record.data, **patch}
        self._emit(WINDOW_DATA_UPDATED, record, keys=sorted(patch))
        return True

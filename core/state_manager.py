"""Desktop application state and the controller that owns it."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from core.event_bus import APP_INSTALLED, APP_UNINSTALLED, EventBus
from os_controller.window_manager import WindowManager
from world_model.app_registry import AppRegistry
from world_model.desktop_state import DesktopIconBoard
from world_model.file_system import VirtualFileSystem
from world_model.types.application import Application
from world_model.types.desktop import SystemState
from world_model.window_registry import WindowRegistry

logger = logging.getLogger("fluxo.state")


@dataclass
class DesktopState:
    """Everything one desktop session holds, passed to consumers by reference."""

    registry: WindowRegistry
    apps: AppRegistry
    file_system: VirtualFileSystem
    icons: DesktopIconBoard
    background: str | None = None


class StateManager:
    """Funnels app-level mutations that span several stores."""

    def __init__(
        self,
        state: DesktopState,
        window_manager: WindowManager,
        event_bus: EventBus | None = None,
    ) -> None:
        self.state = state
        self.window_manager = window_manager
        self.event_bus = event_bus or window_manager.event_bus

    def install_app(self, descriptor: dict[str, Any]) -> Application:
        """Register an app and place its icon below the existing ones."""
        app = self.state.apps.install(descriptor)
        self.state.icons.add_for_app(app.id)
        logger.info("Installed app %s (%s)", app.id, app.name)
        self.event_bus.emit(APP_INSTALLED, {"app_id": app.id, "name": app.name})
        return app

    def uninstall_app(self, app_id: str) -> bool:
        """Remove an app, its icons and every window it owns."""
        app = self.state.apps.uninstall(app_id)
        if app is None:
            return False
        self.state.icons.remove_for_app(app_id)
        for window in self.window_manager.windows():
            if window.app_id == app_id:
                self.window_manager.close(window.id)
        logger.info("Uninstalled app %s", app_id)
        self.event_bus.emit(APP_UNINSTALLED, {"app_id": app_id})
        return True

    def set_background(self, background: str | None) -> None:
        self.state.background = background

    def snapshot(self) -> SystemState:
        return SystemState(
            windows=self.window_manager.windows(),
            desktop_icons=[icon.model_copy() for icon in self.state.icons.all()],
            next_z_index=self.state.registry.peek_z,
            background=self.state.background,
        )

    def restore(self, snapshot: SystemState) -> None:
        """Load a persisted snapshot; focus tracking follows the focused record."""
        self.state.registry.restore(
            [window.model_copy(deep=True) for window in snapshot.windows],
            snapshot.next_z_index,
        )
        self.state.icons.replace(icon.model_copy() for icon in snapshot.desktop_icons)
        self.state.background = snapshot.background
        focused = [window.id for window in self.state.registry.live() if window.focused]
        self.window_manager.focused_window_id = focused[-1] if focused else None
        logger.debug("Restored %d windows", len(snapshot.windows))

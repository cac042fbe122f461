"""Top-level desktop runtime wiring."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from core.audit_logger import AuditLogger
from core.event_bus import ANY_EVENT, EventBus
from core.policy_runtime import (
    DesktopSettings,
    desktop_settings,
    ensure_runtime_dirs,
    load_effective_config,
)
from core.state_manager import DesktopState, StateManager
from fluxo.terminal import Terminal
from os_controller.window_manager import WindowManager
from storage.state_store import StateStore
from world_model.app_registry import AppRegistry
from world_model.desktop_state import DesktopIconBoard, default_icons
from world_model.file_system import VirtualFileSystem
from world_model.window_registry import WindowRegistry


@dataclass
class RuntimeBundle:
    """Holds initialized desktop components."""

    config: dict[str, Any]
    settings: DesktopSettings
    event_bus: EventBus
    state: DesktopState
    window_manager: WindowManager
    state_manager: StateManager
    terminal: Terminal
    store: StateStore | None = None
    audit: AuditLogger | None = None

    def save(self) -> None:
        """Persist the current desktop when a store is configured."""
        if self.store is None:
            return
        self.store.save(self.state_manager.snapshot())
        self.store.save_apps(self.state.apps.all())
        self.store.save_nodes(self.state.file_system.nodes())


def build_desktop(
    settings: DesktopSettings | None = None,
    *,
    config: dict[str, Any] | None = None,
    event_bus: EventBus | None = None,
    id_factory: Callable[[], str] | None = None,
) -> RuntimeBundle:
    """Assemble an in-memory desktop with default apps, icons and files."""
    settings = settings or DesktopSettings()
    event_bus = event_bus or EventBus()
    registry = WindowRegistry(
        geometry=settings.window,
        initial_z_index=settings.initial_z_index,
        id_prefix=settings.window_id_prefix,
        id_factory=id_factory,
    )
    apps = AppRegistry(app.model_copy() for app in settings.apps)
    state = DesktopState(
        registry=registry,
        apps=apps,
        file_system=VirtualFileSystem(),
        icons=DesktopIconBoard(default_icons(apps.all())),
        background=settings.background,
    )
    window_manager = WindowManager(registry, apps, event_bus)
    return RuntimeBundle(
        config=config or {},
        settings=settings,
        event_bus=event_bus,
        state=state,
        window_manager=window_manager,
        state_manager=StateManager(state, window_manager, event_bus),
        terminal=Terminal(window_manager, apps, state.file_system, event_bus),
    )


class Orchestrator:
    """Creates and wires desktop components from the config directory."""

    def __init__(self, root: Path | None = None) -> None:
        default_root = Path(__file__).resolve().parents[1]
        self.root = (root or default_root).resolve()

    def build(self) -> RuntimeBundle:
        config = load_effective_config(self.root)
        logging.getLogger("fluxo").setLevel(
            str(config.get("logging", {}).get("level", "WARNING")).upper()
        )
        paths = ensure_runtime_dirs(self.root, config)

        bundle = build_desktop(desktop_settings(config), config=config)

        if config.get("audit", {}).get("enabled", True):
            bundle.audit = AuditLogger(paths["audit_log_path"])
            bundle.event_bus.subscribe(ANY_EVENT, bundle.audit.handle)

        if config.get("persistence", {}).get("enabled", True):
            bundle.store = StateStore(paths["db_path"])
            self._load(bundle, bundle.store)
        return bundle

    @staticmethod
    def _load(bundle: RuntimeBundle, store: StateStore) -> None:
        apps = store.load_apps()
        if apps is not None:
            bundle.state.apps.replace(apps)
        nodes = store.load_nodes()
        if nodes is not None:
            bundle.state.file_system.replace(nodes)
        snapshot = store.load()
        if snapshot is not None:
            bundle.state_manager.restore(snapshot)

"""Registry of installed application descriptors."""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from typing import Any

from world_model.types.application import Application


class AppRegistry:
    """Tracks application descriptors keyed by app id."""

    def __init__(self, apps: Iterable[Application] = ()) -> None:
        self._apps: dict[str, Application] = {}
        for app in apps:
            self.register(app)

    def register(self, app: Application) -> None:
        self._apps[app.id] = app

    def get(self, app_id: str) -> Application | None:
        return self._apps.get(app_id)

    def all(self) -> list[Application]:
        return list(self._apps.values())

    def installed(self) -> list[Application]:
        return [app for app in self._apps.values() if app.installed]

    def install(self, descriptor: dict[str, Any]) -> Application:
        """Register a new app under a fresh id, marked installed."""
        payload = {k: v for k, v in descriptor.items() if k not in {"id", "installed"}}
        app = Application(id=uuid.uuid4().hex[:12], installed=True, **payload)
        self.register(app)
        return app

    def uninstall(self, app_id: str) -> Application | None:
        return self._apps.pop(app_id, None)

    def update(self, app_id: str, patch: dict[str, Any]) -> Application | None:
        app = self._apps.get(app_id)
        if app is None:
            return None
        updated = app.model_copy(update={k: v for k, v in patch.items() if k != "id"})
        updated = Application.model_validate(updated.model_dump())
        self._apps[app_id] = updated
        return updated

    def replace(self, apps: Iterable[Application]) -> None:
        self._apps = {app.id: app for app in apps}

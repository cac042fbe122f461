"""Desktop icon placement."""

from __future__ import annotations

import uuid
from collections.abc import Iterable

from world_model.types.application import Application
from world_model.types.desktop import DesktopIcon

ICON_COLUMN_X = 20
ICON_ROW_HEIGHT = 120


def default_icons(apps: Iterable[Application]) -> list[DesktopIcon]:
    """One icon per installed app, stacked down the left column."""
    return [
        DesktopIcon(
            id=uuid.uuid4().hex[:12],
            app_id=app.id,
            x=ICON_COLUMN_X,
            y=ICON_COLUMN_X + index * ICON_ROW_HEIGHT,
            order=index,
        )
        for index, app in enumerate(app for app in apps if app.installed)
    ]


class DesktopIconBoard:
    """Icons shown on the desktop surface. Independent of window lifecycle."""

    def __init__(self, icons: Iterable[DesktopIcon] = ()) -> None:
        self._icons: list[DesktopIcon] = list(icons)

    def all(self) -> list[DesktopIcon]:
        return sorted(self._icons, key=lambda icon: icon.order)

    def add_for_app(self, app_id: str) -> DesktopIcon:
        """Append an icon one row below the lowest existing icon."""
        max_y = max((icon.y for icon in self._icons), default=0)
        icon = DesktopIcon(
            id=uuid.uuid4().hex[:12],
            app_id=app_id,
            x=ICON_COLUMN_X,
            y=max(max_y, 0) + ICON_ROW_HEIGHT,
            order=len(self._icons),
        )
        self._icons.append(icon)
        return icon

    def remove_for_app(self, app_id: str) -> int:
        before = len(self._icons)
        self._icons = [icon for icon in self._icons if icon.app_id != app_id]
        return before - len(self._icons)

    def move(self, icon_id: str, x: float, y: float) -> DesktopIcon | None:
        for icon in self._icons:
            if icon.id == icon_id:
                icon.x = x
                icon.y = y
                return icon
        return None

    def replace(self, icons: Iterable[DesktopIcon]) -> None:
        self._icons = list(icons)

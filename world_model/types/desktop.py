"""Desktop icon and persisted system snapshot models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from world_model.types.window import WindowRecord


class DesktopIcon(BaseModel):
    """Placement of an application shortcut on the desktop."""

    id: str
    app_id: str
    x: float
    y: float
    order: int


class SystemState(BaseModel):
    """Snapshot of desktop state as persisted between sessions."""

    windows: list[WindowRecord] = Field(default_factory=list)
    desktop_icons: list[DesktopIcon] = Field(default_factory=list)
    next_z_index: int
    background: str | None = None

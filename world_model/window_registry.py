"""Authoritative store of window records and the global z-order counter."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any

from core.policy_runtime import WindowGeometry
from world_model.types.window import WindowRecord


class WindowRegistry:
    """Allocates window identity and stacking order.

    Z values come from a counter that only moves forward and is persisted with
    every snapshot. Default ids are numbered from the z value a window is
    allocated with, so an id is never handed out twice, across restarts too.
    """

    def __init__(
        self,
        geometry: WindowGeometry | None = None,
        initial_z_index: int = 100,
        id_prefix: str = "win-",
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self.geometry = geometry or WindowGeometry()
        self.logger = logging.getLogger("fluxo.registry")
        self._windows: dict[str, WindowRecord] = {}
        self._initial_z = initial_z_index
        self._next_z = initial_z_index
        self._id_prefix = id_prefix
        self._id_factory = id_factory

    @property
    def peek_z(self) -> int:
        """Value the next call to `next_z` will return."""
        return self._next_z

    def next_z(self) -> int:
        z_index = self._next_z
        self._next_z += 1
        return z_index

    def _new_id(self, z_index: int) -> str:
        if self._id_factory is not None:
            return self._id_factory()
        serial = max(z_index - self._initial_z + 1, 1)
        while f"{self._id_prefix}{serial}" in self._windows:
            serial += 1
        return f"{self._id_prefix}{serial}"

    def allocate(
        self,
        app_id: str,
        title: str,
        app_type: str,
        data: dict[str, Any] | None = None,
    ) -> WindowRecord:
        """Create an open, focused window cascaded from the live count."""
        offset = len(self._windows) * self.geometry.cascade_step
        z_index = self.next_z()
        record = WindowRecord(
            id=self._new_id(z_index),
            title=title,
            app_id=app_id,
            app_type=app_type,
            x=self.geometry.origin_x + offset,
            y=self.geometry.origin_y + offset,
            width=self.geometry.default_width,
            height=self.geometry.default_height,
            status="open",
            z_index=z_index,
            focused=True,
            data=dict(data or {}),
        )
        self._windows[record.id] = record
        self.logger.debug("Allocated %s for app %s at z=%s", record.id, app_id, record.z_index)
        return record

    def get(self, window_id: str) -> WindowRecord | None:
        return self._windows.get(window_id)

    def remove(self, window_id: str) -> WindowRecord | None:
        return self._windows.pop(window_id, None)

    def live(self) -> list[WindowRecord]:
        """Return live records in allocation order."""
        return list(self._windows.values())

    def count(self) -> int:
        return len(self._windows)

    def find_by_app(self, app_id: str) -> WindowRecord | None:
        for record in self._windows.values():
            if record.app_id == app_id and record.status != "closed":
                return record
        return None

    def restore(self, windows: Iterable[WindowRecord], next_z: int) -> None:
        """Replace the live set with a persisted snapshot."""
        self._windows = {
            record.id: record for record in windows if record.status != "closed"
        }
        highest = max((record.z_index for record in self._windows.values()), default=next_z - 1)
        self._next_z = max(next_z, highest + 1)
        self.logger.debug(
            "Restored %d windows, next z=%s", len(self._windows), self._next_z
        )

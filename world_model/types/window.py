"""Window record models."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

WindowStatus = Literal["open", "minimized", "closed"]


class WindowRecord(BaseModel):
    """One running application instance on the desktop."""

    id: str
    title: str
    app_id: str
    app_type: str = "custom"
    x: float = 100
    y: float = 50
    width: float = 800
    height: float = 600
    status: WindowStatus = "open"
    z_index: int
    start_time: datetime = Field(default_factory=lambda: datetime.now(UTC))
    focused: bool = False
    data: dict[str, Any] = Field(default_factory=dict)

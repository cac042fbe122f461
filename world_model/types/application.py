"""Application descriptor models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

AppType = Literal[
    "terminal",
    "vs-studio",
    "files",
    "browser",
    "web-store",
    "properties",
    "custom",
]


class Application(BaseModel):
    """Installed program that windows are instantiated from."""

    id: str
    name: str
    type: AppType = "custom"
    icon: str = ""
    description: str = ""
    executable: str = ""
    installed: bool = True
    can_multi_instance: bool = True

"""Typed desktop payload models."""

from world_model.types.application import Application, AppType
from world_model.types.desktop import DesktopIcon, SystemState
from world_model.types.filesystem import FileSystemNode, NodeType
from world_model.types.window import WindowRecord, WindowStatus

__all__ = [
    "Application",
    "AppType",
    "DesktopIcon",
    "FileSystemNode",
    "NodeType",
    "SystemState",
    "WindowRecord",
    "WindowStatus",
]

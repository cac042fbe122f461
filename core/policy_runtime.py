"""Configuration loading and runtime directory bootstrapping."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from world_model.types.application import Application

DEFAULT_APPS: list[dict[str, Any]] = [
    {
        "id": "terminal",
        "name": "Terminal",
        "type": "terminal",
        "icon": "⌘",
        "description": "Fluxo terminal with full scripting support",
        "executable": "Terminal.fxo",
        "installed": True,
        "can_multi_instance": True,
    },
    {
        "id": "vs-studio",
        "name": "VS.Studio",
        "type": "vs-studio",
        "icon": "⚡",
        "description": "Code editor with Fluxo syntax highlighting",
        "executable": "VS.Studio.fxo",
        "installed": True,
        "can_multi_instance": False,
    },
    {
        "id": "files",
        "name": "Files",
        "type": "files",
        "icon": "📁",
        "description": "File system explorer",
        "executable": "Files.fxo",
        "installed": True,
        "can_multi_instance": False,
    },
    {
        "id": "browser",
        "name": "Browser",
        "type": "browser",
        "icon": "🌐",
        "description": "Web browser simulation",
        "executable": "Browser.fxo",
        "installed": True,
        "can_multi_instance": True,
    },
    {
        "id": "web-store",
        "name": "Web Store",
        "type": "web-store",
        "icon": "🛒",
        "description": "Install additional applications",
        "executable": "WebStore.fxo",
        "installed": True,
        "can_multi_instance": False,
    },
    {
        "id": "properties",
        "name": "Properties",
        "type": "properties",
        "icon": "ℹ",
        "description": "Inspect a window or application",
        "executable": "Properties.fxo",
        "installed": False,
        "can_multi_instance": True,
    },
]


class WindowGeometry(BaseModel):
    """Placement and sizing defaults for new windows."""

    origin_x: float = 100
    origin_y: float = 50
    cascade_step: float = 30
    default_width: float = 800
    default_height: float = 600
    min_width: float = 400
    min_height: float = 300


class DesktopSettings(BaseModel):
    """Validated view over the `desktop` config section."""

    initial_z_index: int = 100
    window_id_prefix: str = "win-"
    background: str | None = "default"
    window: WindowGeometry = Field(default_factory=WindowGeometry)
    apps: list[Application] = Field(
        default_factory=lambda: [Application(**app) for app in DEFAULT_APPS]
    )


def load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML from file, returning empty mapping when missing."""
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")
    return data


def merge_dicts(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge dictionaries."""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged


def ensure_runtime_dirs(root: Path, config: dict[str, Any]) -> dict[str, Path]:
    """Ensure state and log directories exist and return resolved paths."""
    paths_cfg = config.get("paths", {})
    db_path = (root / paths_cfg.get("db_path", "workspace/desktop.db")).resolve()
    audit_log_path = (root / paths_cfg.get("audit_log_path", "logs/terminal.jsonl")).resolve()

    db_path.parent.mkdir(parents=True, exist_ok=True)
    audit_log_path.parent.mkdir(parents=True, exist_ok=True)

    return {
        "db_path": db_path,
        "audit_log_path": audit_log_path,
    }


def load_effective_config(root: Path) -> dict[str, Any]:
    """Load and merge all runtime configuration files."""
    config_dir = root / "config"
    default_cfg = load_yaml(config_dir / "default.yaml")
    apps_cfg = load_yaml(config_dir / "apps.yaml")

    merged = merge_dicts({"desktop": {}, "persistence": {}, "logging": {}}, default_cfg)
    if apps_cfg.get("apps"):
        merged["desktop"] = merge_dicts(merged["desktop"], {"apps": apps_cfg["apps"]})
    return merged


def desktop_settings(config: dict[str, Any]) -> DesktopSettings:
    """Validate the desktop section of an effective config."""
    return DesktopSettings.model_validate(config.get("desktop", {}))

"""Typer command handlers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import typer
from pydantic import ValidationError

from core.orchestrator import Orchestrator, RuntimeBundle


def _runtime(root: Path | None = None) -> RuntimeBundle:
    return Orchestrator(root=root).build()


def _terminal_window(bundle: RuntimeBundle):
    """Reuse a live terminal window as command context, opening one if needed."""
    for window in bundle.window_manager.windows():
        if window.app_type == "terminal":
            return window
    return bundle.window_manager.open("terminal")


def shell() -> None:
    """Run an interactive terminal session."""
    bundle = _runtime()
    window = _terminal_window(bundle)
    bundle.save()
    typer.echo("FluxoOS Terminal v1.0.0")
    typer.echo("Type 'help' for available commands. Type 'exit' to quit.")
    while True:
        line = typer.prompt("$", default="", show_default=False)
        if line.strip().lower() in {"exit", "quit"}:
            typer.echo("bye")
            break
        if not line.strip():
            continue
        result = bundle.terminal.run(line, window)
        if getattr(result, "clear", False):
            typer.clear()
        elif result.render():
            typer.echo(result.render(), err=not result.ok)
        bundle.save()


def exec_line(line: str) -> None:
    """Evaluate one terminal line."""
    bundle = _runtime()
    result = bundle.terminal.run(line)
    if result.render():
        typer.echo(result.render(), err=not result.ok)
    bundle.save()
    if not result.ok:
        raise typer.Exit(code=1)


def run_script(path: str) -> None:
    """Run a script stored in the virtual file system."""
    bundle = _runtime()
    result = bundle.terminal.run_script(path)
    if result.render():
        typer.echo(result.render(), err=not result.ok)
    bundle.save()
    if not result.ok:
        raise typer.Exit(code=1)


def _window_payload(data: str | None) -> dict[str, Any] | None:
    """Decode `--data`; it must be a JSON object."""
    if not data:
        return None
    try:
        payload = json.loads(data)
    except json.JSONDecodeError as exc:
        typer.echo(f"Invalid --data JSON: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    if not isinstance(payload, dict):
        typer.echo("Invalid --data: expected a JSON object", err=True)
        raise typer.Exit(code=1)
    return payload


def open_window(app_id: str, data: str | None = None) -> None:
    """Open a window for an app."""
    payload = _window_payload(data)
    bundle = _runtime()
    window = bundle.window_manager.open(app_id, payload)
    if window is None:
        typer.echo(f"Unknown app: {app_id}", err=True)
        raise typer.Exit(code=1)
    bundle.save()
    typer.echo(f"{window.id}: {window.title} z={window.z_index}")


def window_action(action: str, window_id: str) -> None:
    """Apply close/minimize/focus/activate to a window."""
    bundle = _runtime()
    handler = getattr(bundle.window_manager, action)
    if not handler(window_id):
        typer.echo(f"No window {window_id}; nothing to do.")
        return
    bundle.save()
    typer.echo(f"{action}: {window_id}")


def move_window(window_id: str, x: float, y: float) -> None:
    """Move a window."""
    bundle = _runtime()
    if bundle.window_manager.move(window_id, x, y):
        bundle.save()
        typer.echo(f"Moved {window_id} to ({x:g}, {y:g})")
    else:
        typer.echo(f"No window {window_id}; nothing to do.")


def resize_window(window_id: str, width: float, height: float) -> None:
    """Resize a window, holding it to the configured minimum size."""
    bundle = _runtime()
    geometry = bundle.settings.window
    width = max(width, geometry.min_width)
    height = max(height, geometry.min_height)
    if bundle.window_manager.resize(window_id, width, height):
        bundle.save()
        typer.echo(f"Resized {window_id} to {width:g}x{height:g}")
    else:
        typer.echo(f"No window {window_id}; nothing to do.")


def windows_list() -> None:
    """List live windows."""
    bundle = _runtime()
    output = bundle.terminal.evaluate("windows")
    typer.echo(output or "(no windows)")


def apps_list(all_apps: bool = False) -> None:
    """List applications."""
    bundle = _runtime()
    apps = bundle.state.apps.all() if all_apps else bundle.state.apps.installed()
    for app in apps:
        flags = "multi" if app.can_multi_instance else "single"
        typer.echo(f"{app.id}: {app.name} [{app.type}, {flags}] - {app.description}")


def apps_install(name: str, app_type: str, description: str, single_instance: bool) -> None:
    """Install an application descriptor."""
    bundle = _runtime()
    try:
        app = bundle.state_manager.install_app(
            {
                "name": name,
                "type": app_type,
                "description": description,
                "executable": f"{name.replace(' ', '')}.fxo",
                "can_multi_instance": not single_instance,
            }
        )
    except ValidationError as exc:
        typer.echo(f"Invalid app descriptor: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    bundle.save()
    typer.echo(f"Installed {app.name} as {app.id}")


def apps_uninstall(app_id: str) -> None:
    """Uninstall an application and close its windows."""
    bundle = _runtime()
    if not bundle.state_manager.uninstall_app(app_id):
        typer.echo(f"Unknown app: {app_id}", err=True)
        raise typer.Exit(code=1)
    bundle.save()
    typer.echo(f"Uninstalled {app_id}")


def fs_ls(path: str) -> None:
    """List a folder of the virtual file system."""
    typer.echo(_runtime().terminal.evaluate(f"ls {path}"))


def fs_cat(path: str) -> None:
    """Print a virtual file."""
    typer.echo(_runtime().terminal.evaluate(f"cat {path}"))


def fs_rm(path: str) -> None:
    """Delete a virtual file or folder with everything below it."""
    bundle = _runtime()
    node = bundle.state.file_system.get_node_by_path(path)
    if node is None:
        typer.echo(f"rm: {path}: No such file or directory", err=True)
        raise typer.Exit(code=1)
    removed = bundle.state.file_system.delete_node(node.id)
    if not removed:
        typer.echo(f"rm: {path}: Cannot remove", err=True)
        raise typer.Exit(code=1)
    bundle.save()
    typer.echo(f"Removed {len(removed)} node(s)")


def state_show() -> None:
    """Show the persisted desktop snapshot."""
    bundle = _runtime()
    typer.echo(json.dumps(bundle.state_manager.snapshot().model_dump(mode="json"), indent=2))


def state_reset() -> None:
    """Forget persisted desktop state."""
    bundle = _runtime()
    if bundle.store is not None:
        bundle.store.clear()
    typer.echo("Desktop state cleared.")


def config_show() -> None:
    """Show effective runtime config."""
    bundle = _runtime()
    typer.echo(json.dumps(bundle.config, indent=2, default=str))

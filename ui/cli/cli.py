"""CLI entrypoint for the Fluxo desktop."""

from __future__ import annotations

import typer

from ui.cli import commands

app = typer.Typer(help="FluxoOS desktop: windows, files and Fluxo scripts")
apps_app = typer.Typer(help="Application commands")
fs_app = typer.Typer(help="Virtual file system commands")
state_app = typer.Typer(help="Persisted desktop state")
config_app = typer.Typer(help="Configuration commands")


@app.command("shell")
def shell_cmd() -> None:
    """Interactive Fluxo terminal."""
    commands.shell()


@app.command("exec")
def exec_cmd(line: str = typer.Argument(..., help="Terminal line to evaluate")) -> None:
    """Evaluate one terminal line."""
    commands.exec_line(line=line)


@app.command("run")
def run_cmd(path: str = typer.Argument(..., help="Script path in the virtual file system")) -> None:
    """Run a Fluxo script file."""
    commands.run_script(path=path)


@app.command("open")
def open_cmd(
    app_id: str,
    data: str | None = typer.Option(None, "--data", help="JSON payload for the window"),
) -> None:
    """Open a window for an application."""
    commands.open_window(app_id=app_id, data=data)


@app.command("close")
def close_cmd(window_id: str) -> None:
    """Close a window."""
    commands.window_action("close", window_id)


@app.command("minimize")
def minimize_cmd(window_id: str) -> None:
    """Minimize a window."""
    commands.window_action("minimize", window_id)


@app.command("focus")
def focus_cmd(window_id: str) -> None:
    """Restore a window and bring it to front."""
    commands.window_action("focus", window_id)


@app.command("activate")
def activate_cmd(window_id: str) -> None:
    """Taskbar click on a window."""
    commands.window_action("activate", window_id)


@app.command("move")
def move_cmd(window_id: str, x: float, y: float) -> None:
    """Move a window."""
    commands.move_window(window_id=window_id, x=x, y=y)


@app.command("resize")
def resize_cmd(window_id: str, width: float, height: float) -> None:
    """Resize a window."""
    commands.resize_window(window_id=window_id, width=width, height=height)


@app.command("windows")
def windows_cmd() -> None:
    """List open and minimized windows."""
    commands.windows_list()


@apps_app.command("list")
def apps_list_cmd(
    all_apps: bool = typer.Option(False, "--all", help="Include apps that are not installed"),
) -> None:
    """List applications."""
    commands.apps_list(all_apps=all_apps)


@apps_app.command("install")
def apps_install_cmd(
    name: str = typer.Argument(..., help="Display name"),
    app_type: str = typer.Option("custom", "--type", help="Application type"),
    description: str = typer.Option("", help="Short description"),
    single_instance: bool = typer.Option(False, "--single", help="Allow one window at a time"),
) -> None:
    """Install an application."""
    commands.apps_install(
        name=name, app_type=app_type, description=description, single_instance=single_instance
    )


@apps_app.command("uninstall")
def apps_uninstall_cmd(app_id: str) -> None:
    """Uninstall an application."""
    commands.apps_uninstall(app_id=app_id)


@fs_app.command("ls")
def fs_ls_cmd(path: str = typer.Argument("/")) -> None:
    """List a folder."""
    commands.fs_ls(path=path)


@fs_app.command("cat")
def fs_cat_cmd(path: str) -> None:
    """Print a file."""
    commands.fs_cat(path=path)


@fs_app.command("rm")
def fs_rm_cmd(path: str) -> None:
    """Delete a file or folder."""
    commands.fs_rm(path=path)


@state_app.command("show")
def state_show_cmd() -> None:
    """Show the desktop snapshot."""
    commands.state_show()


@state_app.command("reset")
def state_reset_cmd() -> None:
    """Clear persisted desktop state."""
    commands.state_reset()


@config_app.command("show")
def config_show_cmd() -> None:
    """Show effective configuration."""
    commands.config_show()


app.add_typer(apps_app, name="apps")
app.add_typer(fs_app, name="fs")
app.add_typer(state_app, name="state")
app.add_typer(config_app, name="config")


def main() -> None:
    """Console script entrypoint."""
    app()


if __name__ == "__main__":
    main()

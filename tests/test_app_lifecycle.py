"""Application install/uninstall and desktop icon tests."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from core.orchestrator import RuntimeBundle


def test_default_icons_stack_in_left_column(desktop: RuntimeBundle) -> None:
    icons = desktop.state.icons.all()

    assert [icon.app_id for icon in icons] == ["terminal", "vs-studio", "files", "browser", "web-store"]
    assert [icon.y for icon in icons] == [20, 140, 260, 380, 500]
    assert all(icon.x == 20 for icon in icons)


def test_install_places_icon_below_lowest(desktop: RuntimeBundle) -> None:
    app = desktop.state_manager.install_app(
        {"id": "ignored", "name": "Paint", "type": "custom", "installed": False}
    )

    assert app.id != "ignored"
    assert app.installed is True
    icon = desktop.state.icons.all()[-1]
    assert (icon.app_id, icon.x, icon.y, icon.order) == (app.id, 20, 620, 5)
    assert f"{app.id}: Paint - " in desktop.terminal.evaluate("apps")


def test_install_rejects_malformed_descriptor(desktop: RuntimeBundle) -> None:
    with pytest.raises(ValidationError):
        desktop.state_manager.install_app({"name": "Bad", "type": "spreadsheet"})


def test_uninstall_removes_icons_and_windows(desktop: RuntimeBundle) -> None:
    manager = desktop.window_manager
    keep = manager.open("terminal")
    manager.open("browser")
    manager.open("browser")

    assert desktop.state_manager.uninstall_app("browser") is True

    assert [w.id for w in manager.windows()] == [keep.id]
    assert all(icon.app_id != "browser" for icon in desktop.state.icons.all())
    assert manager.open("browser") is None
    assert desktop.state_manager.uninstall_app("browser") is False


def test_update_app_toggles_single_instance(desktop: RuntimeBundle) -> None:
    desktop.state.apps.update("terminal", {"can_multi_instance": False})

    first = desktop.window_manager.open("terminal")
    second = desktop.window_manager.open("terminal")

    assert first.id == second.id
    assert desktop.state.apps.update("missing", {"name": "x"}) is None

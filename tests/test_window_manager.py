"""Window manager state machine tests."""

from __future__ import annotations

import random

import pytest

from core.event_bus import WINDOW_CLOSED, WINDOW_FOCUSED, WINDOW_OPENED
from core.orchestrator import RuntimeBundle


def _focused(bundle: RuntimeBundle) -> list[str]:
    return [w.id for w in bundle.window_manager.windows() if w.focused]


def test_first_terminal_window_defaults(desktop: RuntimeBundle) -> None:
    window = desktop.window_manager.open("terminal")

    assert window is not None
    assert window.status == "open"
    assert window.focused is True
    assert window.z_index == 100
    assert (window.x, window.y) == (100, 50)
    assert desktop.window_manager.focused_window_id == window.id


def test_open_unfocuses_other_windows(desktop: RuntimeBundle) -> None:
    manager = desktop.window_manager
    first = manager.open("terminal")
    second = manager.open("browser")

    assert _focused(desktop) == [second.id]
    assert manager.get(first.id).focused is False


def test_open_unknown_app_is_noop(desktop: RuntimeBundle) -> None:
    assert desktop.window_manager.open("does-not-exist") is None
    assert desktop.window_manager.windows() == []
    assert desktop.state.registry.peek_z == 100


def test_single_instance_open_twice_matches_focus(make_desktop) -> None:
    via_open = make_desktop()
    first = via_open.window_manager.open("files")
    via_open.window_manager.open("terminal")
    via_open.window_manager.open("files")

    via_focus = make_desktop()
    reference = via_focus.window_manager.open("files")
    via_focus.window_manager.open("terminal")
    via_focus.window_manager.focus(reference.id)

    files_windows = [w for w in via_open.window_manager.windows() if w.app_id == "files"]
    assert len(files_windows) == 1
    assert files_windows[0].id == first.id

    def comparable(bundle: RuntimeBundle) -> list[dict]:
        return [w.model_dump(exclude={"start_time"}) for w in bundle.window_manager.windows()]

    assert comparable(via_open) == comparable(via_focus)


def test_multi_instance_app_opens_new_windows(desktop: RuntimeBundle) -> None:
    desktop.window_manager.open("terminal")
    desktop.window_manager.open("terminal")
    assert len(desktop.window_manager.windows()) == 2


def test_minimize_keeps_z_and_clears_focus(desktop: RuntimeBundle) -> None:
    manager = desktop.window_manager
    window = manager.open("terminal")

    manager.minimize(window.id)
    minimized = manager.get(window.id)

    assert minimized.status == "minimized"
    assert minimized.focused is False
    assert minimized.z_index == window.z_index
    assert manager.focused_window_id is None


def test_focus_restores_and_raises(desktop: RuntimeBundle) -> None:
    manager = desktop.window_manager
    first = manager.open("terminal")
    second = manager.open("browser")
    manager.minimize(first.id)

    manager.focus(first.id)
    restored = manager.get(first.id)

    assert restored.status == "open"
    assert restored.focused is True
    assert restored.z_index > second.z_index
    assert manager.get(second.id).focused is False


def test_close_removes_record_without_promoting_focus(desktop: RuntimeBundle) -> None:
    manager = desktop.window_manager
    first = manager.open("terminal")
    second = manager.open("browser")

    manager.close(second.id)

    assert manager.get(second.id) is None
    assert manager.focused_window_id is None
    assert manager.get(first.id).focused is False


@pytest.mark.parametrize(
    "operation",
    [
        lambda m, wid: m.close(wid),
        lambda m, wid: m.minimize(wid),
        lambda m, wid: m.focus(wid),
        lambda m, wid: m.activate(wid),
        lambda m, wid: m.move(wid, 1, 2),
        lambda m, wid: m.resize(wid, 3, 4),
        lambda m, wid: m.set_data(wid, {"k": "v"}),
    ],
)
def test_operations_on_closed_window_are_noops(desktop: RuntimeBundle, operation) -> None:
    manager = desktop.window_manager
    survivor = manager.open("terminal")
    closed = manager.open("browser")
    manager.close(closed.id)
    before = [w.model_dump() for w in manager.windows()]
    z_before = desktop.state.registry.peek_z
    focus_before = manager.focused_window_id

    assert operation(manager, closed.id) is False
    assert [w.model_dump() for w in manager.windows()] == before
    assert desktop.state.registry.peek_z == z_before
    assert manager.focused_window_id == focus_before
    assert manager.get(survivor.id) is not None


def test_z_order_strictly_increasing_across_closes(desktop: RuntimeBundle) -> None:
    manager = desktop.window_manager
    assigned = []
    for index in range(10):
        window = manager.open("terminal" if index % 2 else "browser")
        assigned.append(window.z_index)
        if index % 3 == 0:
            manager.close(window.id)
    assert assigned == sorted(set(assigned))


def test_at_most_one_focused_under_random_sequences(desktop: RuntimeBundle) -> None:
    manager = desktop.window_manager
    rng = random.Random(7)
    apps = ["terminal", "browser", "files", "vs-studio", "web-store"]
    for _ in range(300):
        live = [w.id for w in manager.windows()]
        action = rng.choice(["open", "focus", "minimize", "close", "activate"])
        if action == "open" or not live:
            manager.open(rng.choice(apps))
        else:
            getattr(manager, action)(rng.choice(live))
        assert len(_focused(desktop)) <= 1


def test_move_and_resize_do_not_clamp(desktop: RuntimeBundle) -> None:
    manager = desktop.window_manager
    window = manager.open("terminal")

    manager.move(window.id, -40, -10)
    manager.resize(window.id, 10, 0)
    updated = manager.get(window.id)

    assert (updated.x, updated.y) == (-40, -10)
    assert (updated.width, updated.height) == (10, 0)


def test_set_data_shallow_merges(desktop: RuntimeBundle) -> None:
    manager = desktop.window_manager
    window = manager.open("properties", {"target": {"id": "a"}, "tab": "general"})

    manager.set_data(window.id, {"tab": "details"})

    assert manager.get(window.id).data == {"target": {"id": "a"}, "tab": "details"}


def test_activate_toggles_like_taskbar(desktop: RuntimeBundle) -> None:
    manager = desktop.window_manager
    first = manager.open("terminal")
    second = manager.open("browser")

    manager.activate(second.id)
    assert manager.get(second.id).status == "minimized"

    manager.activate(second.id)
    assert manager.get(second.id).focused is True

    manager.activate(first.id)
    assert manager.get(first.id).focused is True
    assert manager.get(second.id).focused is False


def test_windows_returns_copies(desktop: RuntimeBundle) -> None:
    window = desktop.window_manager.open("terminal")
    listed = desktop.window_manager.windows()[0]
    listed.x = 999

    assert desktop.window_manager.get(window.id).x == 100


def test_transitions_are_published(desktop: RuntimeBundle) -> None:
    events: list[str] = []
    desktop.event_bus.subscribe("*", lambda name, payload: events.append(name))
    manager = desktop.window_manager

    window = manager.open("terminal")
    manager.focus(window.id)
    manager.close(window.id)
    manager.close(window.id)

    assert events == [WINDOW_OPENED, WINDOW_FOCUSED, WINDOW_CLOSED]

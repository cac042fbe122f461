"""Fluxo evaluation tests against a live window manager."""

from __future__ import annotations

from core.orchestrator import RuntimeBundle


def test_bound_move_updates_window(make_desktop) -> None:
    desktop = make_desktop("w1")
    desktop.window_manager.open("terminal")

    output = desktop.terminal.evaluate('local a = window("w1")\na.move:(10,20)')

    window = desktop.window_manager.get("w1")
    assert (window.x, window.y) == (10, 20)
    assert "Moved window w1 to (10, 20)" in output


def test_print_suppresses_window_methods(make_desktop) -> None:
    desktop = make_desktop("w1")
    desktop.window_manager.open("terminal")

    output = desktop.terminal.evaluate('local a = window("w1") console.log:("hi") a.move:(1,2)')

    assert output == "hi"
    assert desktop.window_manager.get("w1").x == 100


def test_multiple_prints_each_on_own_line(desktop: RuntimeBundle) -> None:
    output = desktop.terminal.evaluate("console.log:('one') console.log:(2.0) console.log:(three)")
    assert output == "one\n2\nthree"


def test_multiple_calls_report_in_order(make_desktop) -> None:
    desktop = make_desktop("w1", "w2")
    desktop.window_manager.open("terminal")
    desktop.window_manager.open("browser")

    output = desktop.terminal.evaluate(
        'local a = window("w1") local b = window("w2") '
        "a.resize:(640, 480) b.focus:() a.close:()"
    )

    assert output.splitlines() == [
        "Resized window w1 to 640x480",
        "Focused window w2",
        "Closed window w1",
    ]
    assert desktop.window_manager.get("w1") is None
    assert desktop.window_manager.get("w2").focused is True


def test_unbound_and_unresolved_variables_report_and_continue(make_desktop) -> None:
    desktop = make_desktop("w1")
    desktop.window_manager.open("terminal")

    output = desktop.terminal.evaluate(
        'local gone = window("nope") gone.move:(1,1) ghost.focus:() '
        'local a = window("w1") a.move:(5, 6)'
    )

    assert output.splitlines() == [
        "Error: Window variable 'gone' not found",
        "Error: Window variable 'ghost' not found",
        "Moved window w1 to (5, 6)",
    ]


def test_non_numeric_arguments_skip_only_that_call(make_desktop) -> None:
    desktop = make_desktop("w1")
    desktop.window_manager.open("terminal")

    output = desktop.terminal.evaluate(
        'local a = window("w1") a.move:(left, 2) a.resize:(500) a.move:(7, 8)'
    )

    lines = output.splitlines()
    assert lines[0].startswith("Error: move expects numeric arguments")
    assert lines[1].startswith("Error: resize expects numeric arguments")
    assert lines[2] == "Moved window w1 to (7, 8)"
    window = desktop.window_manager.get("w1")
    assert (window.x, window.y, window.width) == (7, 8, 800)


def test_unknown_method_is_reported(make_desktop) -> None:
    desktop = make_desktop("w1")
    desktop.window_manager.open("terminal")

    output = desktop.terminal.evaluate('local a = window("w1") a.spin:()')

    assert output == "Unknown method: spin"


def test_unrecognized_input_acknowledged(desktop: RuntimeBundle) -> None:
    assert desktop.terminal.evaluate("what is this") == "(command executed)"
    assert desktop.terminal.evaluate('local a = window("w9")') == "(command executed)"


def test_bindings_do_not_outlive_one_evaluation(make_desktop) -> None:
    desktop = make_desktop("w1")
    desktop.window_manager.open("terminal")

    desktop.terminal.evaluate('local a = window("w1")')
    output = desktop.terminal.evaluate("a.move:(1, 1)")

    assert output == "Error: Window variable 'a' not found"


def test_script_and_direct_calls_reach_same_state(make_desktop) -> None:
    scripted = make_desktop("w1", "w2")
    direct = make_desktop("w1", "w2")
    for bundle in (scripted, direct):
        bundle.window_manager.open("terminal")
        bundle.window_manager.open("browser")

    scripted.terminal.evaluate(
        'local a = window("w1") a.move:(15, 25) a.resize:(700, 500) a.focus:()'
    )
    scripted.terminal.evaluate('var b = window("w2") b.minimize:()')
    direct.window_manager.move("w1", 15, 25)
    direct.window_manager.resize("w1", 700, 500)
    direct.window_manager.focus("w1")
    direct.window_manager.minimize("w2")

    def comparable(bundle: RuntimeBundle) -> list[dict]:
        return [w.model_dump(exclude={"start_time"}) for w in bundle.window_manager.windows()]

    assert comparable(scripted) == comparable(direct)
    assert scripted.window_manager.focused_window_id == direct.window_manager.focused_window_id


def test_comments_are_ignored(make_desktop) -> None:
    desktop = make_desktop("w1")
    desktop.window_manager.open("terminal")

    output = desktop.terminal.evaluate(
        '// a.close:()\nlocal a = window("w1")\na.move:(3, 4) // moved'
    )

    assert output == "Moved window w1 to (3, 4)"
    assert desktop.window_manager.get("w1") is not None


def test_unclosed_print_keeps_window_untouched(make_desktop) -> None:
    desktop = make_desktop("w1")
    desktop.window_manager.open("terminal")

    output = desktop.terminal.evaluate('local a = window("w1") console.log:( a.move:(1,2)')

    assert output == "a.move:(1,2"
    assert desktop.window_manager.get("w1").x == 100

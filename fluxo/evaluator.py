"""Evaluation pass over parsed Fluxo programs."""

from __future__ import annotations

import logging
from collections.abc import Callable

from fluxo.parser import (
    Expr,
    MethodCall,
    NumberLiteral,
    PrintCall,
    Program,
    StringLiteral,
    WindowBinding,
    format_number,
    parse,
    parse_number,
)
from os_controller.window_manager import WindowManager
from world_model.types.window import WindowRecord

NO_OUTPUT_ACK = "(command executed)"

logger = logging.getLogger("fluxo.evaluator")


def render(expr: Expr) -> str:
    if isinstance(expr, StringLiteral):
        return expr.value
    if isinstance(expr, NumberLiteral):
        return format_number(expr.value)
    return expr.text


class FluxoEvaluator:
    """Runs print calls, or else window bindings and method calls.

    Bindings live only for the duration of one `run` call.
    """

    def __init__(self, window_manager: WindowManager) -> None:
        self.window_manager = window_manager
        self._methods: dict[str, Callable[[WindowRecord, tuple[str, ...]], str]] = {
            "move": self._move,
            "resize": self._resize,
            "close": self._close,
            "focus": self._focus,
            "minimize": self._minimize,
        }

    def evaluate(self, source: str) -> str:
        return self.run(parse(source))

    def run(self, program: Program) -> str:
        prints: list[PrintCall] = program.of_type(PrintCall)
        if prints:
            return "\n".join(render(call.expr) for call in prints).strip()

        bindings: dict[str, WindowRecord | None] = {}
        for binding in program.of_type(WindowBinding):
            bindings[binding.name] = self.window_manager.get(binding.window_id)

        lines: list[str] = []
        for call in program.of_type(MethodCall):
            window = bindings.get(call.target)
            if window is None:
                lines.append(f"Error: Window variable '{call.target}' not found")
                continue
            handler = self._methods.get(call.method)
            if handler is None:
                lines.append(f"Unknown method: {call.method}")
                continue
            lines.append(handler(window, call.args))
            logger.debug("%s.%s%s -> %s", call.target, call.method, call.args, lines[-1])

        return "\n".join(lines).strip() or NO_OUTPUT_ACK

    @staticmethod
    def _numbers(args: tuple[str, ...]) -> tuple[int | float, int | float] | None:
        if len(args) < 2:
            return None
        first, second = parse_number(args[0]), parse_number(args[1])
        if first is None or second is None:
            return None
        return first, second

    def _move(self, window: WindowRecord, args: tuple[str, ...]) -> str:
        numbers = self._numbers(args)
        if numbers is None:
            return "Error: move expects numeric arguments (x, y)"
        x, y = numbers
        self.window_manager.move(window.id, x, y)
        return f"Moved window {window.id} to ({format_number(x)}, {format_number(y)})"

    def _resize(self, window: WindowRecord, args: tuple[str, ...]) -> str:
        numbers = self._numbers(args)
        if numbers is None:
            return "Error: resize expects numeric arguments (width, height)"
        width, height = numbers
        self.window_manager.resize(window.id, width, height)
        return f"Resized window {window.id} to {format_number(width)}x{format_number(height)}"

    def _close(self, window: WindowRecord, args: tuple[str, ...]) -> str:
        self.window_manager.close(window.id)
        return f"Closed window {window.id}"

    def _focus(self, window: WindowRecord, args: tuple[str, ...]) -> str:
        self.window_manager.focus(window.id)
        return f"Focused window {window.id}"

    def _minimize(self, window: WindowRecord, args: tuple[str, ...]) -> str:
        self.window_manager.minimize(window.id)
        return f"Minimized window {window.id}"

"""Single entry point a terminal surface calls per submitted line."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from core.event_bus import COMMAND_EVALUATED, EventBus
from fluxo.commands import BuiltinCommand, BuiltinCommands, classify
from fluxo.evaluator import FluxoEvaluator
from os_controller.window_manager import WindowManager
from world_model.app_registry import AppRegistry
from world_model.file_system import VirtualFileSystem
from world_model.types.window import WindowRecord

logger = logging.getLogger("fluxo.terminal")


@dataclass(frozen=True)
class Ok:
    output: str
    clear: bool = False

    @property
    def ok(self) -> bool:
        return True

    def render(self) -> str:
        return self.output


@dataclass(frozen=True)
class Err:
    message: str

    @property
    def ok(self) -> bool:
        return False

    def render(self) -> str:
        return self.message


CommandResult = Ok | Err


class Terminal:
    """Routes lines to built-ins or the Fluxo evaluator.

    User mistakes come back as ordinary output text inside `Ok`. `Err` is
    reserved for failures inside the desktop itself, which are logged with
    their traceback here instead of propagating to the surface.
    """

    def __init__(
        self,
        window_manager: WindowManager,
        apps: AppRegistry,
        file_system: VirtualFileSystem,
        event_bus: EventBus | None = None,
    ) -> None:
        self.file_system = file_system
        self.builtins = BuiltinCommands(window_manager, apps, file_system)
        self.evaluator = FluxoEvaluator(window_manager)
        self.event_bus = event_bus or EventBus()

    def run(self, line: str, current_window: WindowRecord | None = None) -> CommandResult:
        request = classify(line)
        try:
            if isinstance(request, BuiltinCommand):
                result: CommandResult = Ok(
                    self.builtins.run(request), clear=request.name == "clear"
                )
            else:
                result = Ok(self.evaluator.evaluate(request.source))
        except Exception as exc:
            logger.exception("Command failed: %r", line)
            result = Err(f"Error: {exc}")
        try:
            self.event_bus.emit(
                COMMAND_EVALUATED,
                {
                    "line": line,
                    "window_id": current_window.id if current_window else None,
                    "ok": result.ok,
                    "output": result.render(),
                },
            )
        except Exception:
            logger.exception("Command subscriber failed: %r", line)
        return result

    def evaluate(self, line: str, current_window: WindowRecord | None = None) -> str:
        return self.run(line, current_window).render()

    def run_script(self, path: str, current_window: WindowRecord | None = None) -> CommandResult:
        """Evaluate a whole file of the virtual file system as one input."""
        node = self.file_system.get_node_by_path(path)
        if node is None:
            return Ok(f"run: {path}: No such file or directory")
        if node.type == "folder":
            return Ok(f"run: {path}: Is a directory")
        logger.info("Running script %s", path)
        try:
            output = self.evaluator.evaluate(node.content or "")
        except Exception as exc:
            logger.exception("Script failed: %s", path)
            return Err(f"Error: {exc}")
        return Ok(output)

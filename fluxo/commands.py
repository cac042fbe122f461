"""Terminal built-in commands and the line classifier that routes to them."""

from __future__ import annotations

from dataclasses import dataclass

from fluxo.parser import format_number
from os_controller.window_manager import WindowManager
from world_model.app_registry import AppRegistry
from world_model.file_system import VirtualFileSystem

HELP_TEXT = """Available commands:
  help - Show this help message
  clear - Clear the terminal
  ls [path] - List files and folders
  cat <file> - Display file contents
  windows - List all open windows
  apps - List all installed apps
  console.log:(<message>) - Print a message

Window objects:
  local <name> = window("<id>") - Bind a window to a name

Window methods (on window object):
  .move:(<x>, <y>) - Move window to position
  .resize:(<width>, <height>) - Resize window
  .close:() - Close window
  .focus:() - Focus window
  .minimize:() - Minimize window

File system commands:
  mkdir <name> - Create a folder
  touch <name> - Create a file"""

EXACT_COMMANDS = ("help", "clear", "windows", "apps")
ARGUMENT_COMMANDS = ("cat", "mkdir", "touch")


@dataclass(frozen=True)
class BuiltinCommand:
    name: str
    argument: str = ""


@dataclass(frozen=True)
class FluxoRequest:
    source: str


def classify(line: str) -> BuiltinCommand | FluxoRequest:
    """Decide whether a line is a built-in or Fluxo source.

    Checked in order: help, clear, windows, apps, ls [path], cat, mkdir,
    touch. Everything else is Fluxo.
    """
    trimmed = line.strip()
    if trimmed in EXACT_COMMANDS:
        return BuiltinCommand(trimmed)
    head, _, rest = trimmed.partition(" ")
    if head == "ls":
        words = rest.split()
        return BuiltinCommand("ls", words[0] if words else "/")
    if head in ARGUMENT_COMMANDS and rest.strip():
        return BuiltinCommand(head, rest.strip())
    return FluxoRequest(trimmed)


class BuiltinCommands:
    """Answers built-ins against the file system and registries."""

    def __init__(
        self,
        window_manager: WindowManager,
        apps: AppRegistry,
        file_system: VirtualFileSystem,
    ) -> None:
        self.window_manager = window_manager
        self.apps = apps
        self.file_system = file_system

    def run(self, command: BuiltinCommand) -> str:
        handler = getattr(self, f"_cmd_{command.name}")
        return handler(command.argument)

    def _cmd_help(self, _: str) -> str:
        return HELP_TEXT

    def _cmd_clear(self, _: str) -> str:
        return ""

    def _cmd_windows(self, _: str) -> str:
        return "\n".join(
            f"{w.id}: {w.title} ({format_number(w.x)},{format_number(w.y)}) "
            f"{format_number(w.width)}x{format_number(w.height)} [{w.status}]"
            for w in self.window_manager.windows()
            if w.status != "closed"
        )

    def _cmd_apps(self, _: str) -> str:
        return "\n".join(
            f"{app.id}: {app.name} - {app.description}" for app in self.apps.installed()
        )

    def _cmd_ls(self, path: str) -> str:
        node = self.file_system.get_node_by_path(path)
        if node is None:
            return f"ls: {path}: No such file or directory"
        if node.type == "file":
            return node.name
        children = self.file_system.get_node_children(node.id)
        if not children:
            return "(empty directory)"
        return "\n".join(
            f"{'📁' if child.type == 'folder' else '📄'} {child.name}" for child in children
        )

    def _cmd_cat(self, path: str) -> str:
        node = self.file_system.get_node_by_path(path)
        if node is None:
            return f"cat: {path}: No such file or directory"
        if node.type == "folder":
            return f"cat: {path}: Is a directory"
        return node.content or "(empty file)"

    def _create_check(self, command: str, name: str) -> str | None:
        if "/" in name:
            return f"{command}: {name}: Invalid name"
        root = self.file_system.root()
        path = f"/{name}"
        if root is None:
            return f"{command}: /: No such file or directory"
        if self.file_system.get_node_by_path(path) is not None:
            return f"{command}: {name}: File exists"
        return None

    def _cmd_mkdir(self, name: str) -> str:
        error = self._create_check("mkdir", name)
        if error:
            return error
        self.file_system.create_folder(None, name)
        return f"Created folder: {name}"

    def _cmd_touch(self, name: str) -> str:
        error = self._create_check("touch", name)
        if error:
            return error
        self.file_system.create_file(None, name, "")
        return f"Created file: {name}"

"""In-memory folder/file tree backing the terminal built-ins."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable
from datetime import UTC, datetime

from world_model.types.filesystem import FileSystemNode

ROOT_ID = "root"

SAMPLE_SCRIPT = """// Sample Fluxo Script
console.log:("Hello from Fluxo!")

// Window manipulation example
local win = window("win-1")
win.move:(100, 100)
win.resize:(800, 600)"""


def default_nodes() -> list[FileSystemNode]:
    """Seed tree every fresh desktop starts from."""
    folders = [
        (ROOT_ID, "/", "/", None),
        ("system", "System", "/System", ROOT_ID),
        ("library", "Library", "/System/Library", "system"),
        ("ui", "UI", "/System/Library/UI", "library"),
        ("components", "Components", "/System/Library/UI/Components", "ui"),
        ("documents", "Documents", "/Documents", ROOT_ID),
        ("scripts", "Scripts", "/Documents/Scripts", "documents"),
    ]
    nodes = [
        FileSystemNode(id=node_id, name=name, type="folder", path=path, parent_id=parent_id)
        for node_id, name, path, parent_id in folders
    ]
    nodes.append(
        FileSystemNode(
            id="sample-script",
            name="hello.fxo",
            type="file",
            path="/Documents/Scripts/hello.fxo",
            parent_id="scripts",
            extension="fxo",
            content=SAMPLE_SCRIPT,
        )
    )
    return nodes


def _extension(name: str) -> str | None:
    if "." not in name:
        return None
    return name.rsplit(".", 1)[1]


def _join(parent_path: str, name: str) -> str:
    return f"{'' if parent_path == '/' else parent_path}/{name}"


class VirtualFileSystem:
    """Node store keyed by id; paths are materialized on creation."""

    def __init__(self, nodes: Iterable[FileSystemNode] | None = None) -> None:
        self.logger = logging.getLogger("fluxo.fs")
        self._nodes: dict[str, FileSystemNode] = {}
        for node in default_nodes() if nodes is None else nodes:
            self._nodes[node.id] = node

    def nodes(self) -> list[FileSystemNode]:
        return list(self._nodes.values())

    def replace(self, nodes: Iterable[FileSystemNode]) -> None:
        self._nodes = {node.id: node for node in nodes}

    def root(self) -> FileSystemNode | None:
        return self.get_node_by_path("/")

    def get_node_by_id(self, node_id: str) -> FileSystemNode | None:
        return self._nodes.get(node_id)

    def get_node_by_path(self, path: str) -> FileSystemNode | None:
        for node in self._nodes.values():
            if node.path == path:
                return node
        return None

    def get_node_children(self, parent_id: str | None) -> list[FileSystemNode]:
        return [node for node in self._nodes.values() if node.parent_id == parent_id]

    def _resolve_parent(self, parent_id: str | None) -> FileSystemNode | None:
        if parent_id is None:
            return self.root()
        parent = self._nodes.get(parent_id)
        if parent is None or parent.type != "folder":
            return None
        return parent

    def create_file(
        self, parent_id: str | None, name: str, content: str = ""
    ) -> FileSystemNode | None:
        """Create a file under a folder; None parent means the root."""
        parent = self._resolve_parent(parent_id)
        if parent is None:
            self.logger.info("create_file: no folder with id %s", parent_id)
            return None
        node = FileSystemNode(
            id=uuid.uuid4().hex,
            name=name,
            type="file",
            path=_join(parent.path, name),
            parent_id=parent.id,
            content=content,
            extension=_extension(name),
        )
        self._nodes[node.id] = node
        self.logger.debug("Created file %s", node.path)
        return node

    def create_folder(self, parent_id: str | None, name: str) -> FileSystemNode | None:
        """Create a folder under a folder; None parent means the root."""
        parent = self._resolve_parent(parent_id)
        if parent is None:
            self.logger.info("create_folder: no folder with id %s", parent_id)
            return None
        node = FileSystemNode(
            id=uuid.uuid4().hex,
            name=name,
            type="folder",
            path=_join(parent.path, name),
            parent_id=parent.id,
        )
        self._nodes[node.id] = node
        self.logger.debug("Created folder %s", node.path)
        return node

    def descendants(self, node_id: str) -> list[str]:
        """Ids of every node whose parent chain passes through `node_id`."""
        found: list[str] = []
        pending = [node_id]
        while pending:
            current = pending.pop()
            for child in self.get_node_children(current):
                found.append(child.id)
                pending.append(child.id)
        return found

    def delete_node(self, node_id: str) -> list[str]:
        """Delete a node and its subtree, returning the removed ids."""
        node = self._nodes.get(node_id)
        if node is None or node.parent_id is None:
            return []
        removed = [node_id, *self.descendants(node_id)]
        for doomed in removed:
            self._nodes.pop(doomed, None)
        self.logger.debug("Deleted %s (%d nodes)", node.path, len(removed))
        return removed

    def update_file_content(self, node_id: str, content: str) -> FileSystemNode | None:
        node = self._nodes.get(node_id)
        if node is None or node.type != "file":
            return None
        node.content = content
        node.modified_at = datetime.now(UTC)
        return node

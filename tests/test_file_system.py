"""Virtual file system tests."""

from __future__ import annotations

from world_model.file_system import VirtualFileSystem


def test_default_tree_paths_follow_parents() -> None:
    fs = VirtualFileSystem()
    for node in fs.nodes():
        if node.parent_id is None:
            assert node.path == "/"
            continue
        parent = fs.get_node_by_id(node.parent_id)
        prefix = "" if parent.path == "/" else parent.path
        assert node.path == f"{prefix}/{node.name}"


def test_create_nested_nodes() -> None:
    fs = VirtualFileSystem()
    folder = fs.create_folder("documents", "Notes")
    note = fs.create_file(folder.id, "today.md", "# hi")

    assert folder.path == "/Documents/Notes"
    assert note.path == "/Documents/Notes/today.md"
    assert note.extension == "md"
    assert fs.get_node_children(folder.id) == [note]


def test_create_under_unknown_or_file_parent_is_noop() -> None:
    fs = VirtualFileSystem()
    count = len(fs.nodes())

    assert fs.create_folder("missing", "X") is None
    assert fs.create_file("sample-script", "inner.txt") is None
    assert len(fs.nodes()) == count


def test_delete_folder_cascades_only_to_descendants() -> None:
    fs = VirtualFileSystem()
    folder = fs.create_folder(None, "X")
    child = fs.create_folder(folder.id, "Inner")
    grandchild = fs.create_file(child.id, "deep.txt", "x")
    sibling = fs.create_folder(None, "XY")
    lookalike = fs.create_file(sibling.id, "keep.txt", "y")
    before = {node.id for node in fs.nodes()}

    removed = fs.delete_node(folder.id)

    assert set(removed) == {folder.id, child.id, grandchild.id}
    assert {node.id for node in fs.nodes()} == before - set(removed)
    assert fs.get_node_by_id(lookalike.id) is not None


def test_delete_root_and_unknown_are_noops() -> None:
    fs = VirtualFileSystem()
    count = len(fs.nodes())

    assert fs.delete_node("root") == []
    assert fs.delete_node("missing") == []
    assert len(fs.nodes()) == count


def test_update_file_content_touches_modified_at() -> None:
    fs = VirtualFileSystem()
    node = fs.create_file(None, "a.txt", "one")
    created = node.modified_at

    updated = fs.update_file_content(node.id, "two")

    assert updated.content == "two"
    assert updated.modified_at >= created
    assert fs.update_file_content("documents", "nope") is None

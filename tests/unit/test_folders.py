import random

import pytest

from startgrid import folders
from startgrid.models.item import ROOT, Folder, Shortcut, check_integrity, find_item, iter_all_ids
from tests.helpers import leaf


def ids(items):
    return [item.id for item in items]


def children(items, folder_id):
    return [c.id for c in find_item(items, folder_id).item.children]


def test_array_move():
    assert folders.array_move(["a", "b", "c", "d"], 0, 2) == ["b", "c", "a", "d"]
    assert folders.array_move(["a", "b", "c", "d"], 3, 1) == ["a", "d", "b", "c"]
    assert folders.array_move(["a", "b"], 0, 5) == ["a", "b"]


def test_new_folder_ids_unique_and_prefixed():
    seen = set()
    for _ in range(50):
        folder_id = folders.new_folder_id(seen)
        assert folder_id.startswith("folder-")
        assert folder_id not in seen
        seen.add(folder_id)


def test_create_folder_replaces_target_slot():
    items = [leaf("a"), leaf("b"), leaf("c"), leaf("d")]
    result = folders.create_folder(items, target_leaf_id="c", source_leaf_id="a", folder_id="folder-1")

    assert ids(result) == ["b", "folder-1", "d"]
    folder = result[1]
    assert isinstance(folder, Folder)
    assert folder.title == "Folder"
    assert [c.id for c in folder.children] == ["c", "a"]
    # Input untouched
    assert ids(items) == ["a", "b", "c", "d"]


def test_create_folder_generates_id():
    result = folders.create_folder([leaf("a"), leaf("b")], "b", "a")
    assert result[0].id.startswith("folder-")


def test_create_folder_rejects_folders_and_self(sample_items):
    assert folders.create_folder(sample_items, "f", "a") == sample_items
    assert folders.create_folder(sample_items, "a", "f") == sample_items
    assert folders.create_folder(sample_items, "a", "a") == sample_items
    # Folder children are not root items
    assert folders.create_folder(sample_items, "a", "f1") == sample_items


def test_move_into_folder_appends(sample_items):
    result = folders.move_into_folder(sample_items, "a", "f")
    assert ids(result) == ["b", "f", "c"]
    assert children(result, "f") == ["f1", "f2", "a"]


def test_move_into_folder_noops(sample_items):
    assert folders.move_into_folder(sample_items, "missing", "f") == sample_items
    assert folders.move_into_folder(sample_items, "a", "b") == sample_items
    assert folders.move_into_folder(sample_items, "f1", "f") == sample_items


def test_move_into_folder_from_other_folder_dissolves_source():
    items = [Folder(id="g", children=[leaf("g1")]), Folder(id="f", children=[leaf("f1")])]
    result = folders.move_into_folder(items, "g1", "f")
    assert ids(result) == ["f"]
    assert children(result, "f") == ["f1", "g1"]


def test_remove_from_folder_defaults_after_folder(sample_items):
    result = folders.remove_from_folder(sample_items, "f1", "f")
    assert ids(result) == ["a", "b", "f", "f1", "c"]
    assert children(result, "f") == ["f2"]


@pytest.mark.parametrize("hint, expected", [
    ("a", ["f1", "a", "b", "f", "c"]),      # hint before folder: insert at hint
    ("c", ["a", "b", "f", "c", "f1"]),      # hint after folder: insert after hint
    ("f", ["a", "b", "f", "f1", "c"]),      # folder itself counts as no hint
    ("f2", ["a", "b", "f", "f1", "c"]),     # not a root item
    ("missing", ["a", "b", "f", "f1", "c"]),
])
def test_remove_from_folder_insertion_hint(sample_items, hint, expected):
    assert ids(folders.remove_from_folder(sample_items, "f1", "f", hint)) == expected


def test_remove_last_child_dissolves_folder_in_place():
    items = [leaf("a"), Folder(id="g", children=[leaf("g1")]), leaf("b")]
    result = folders.remove_from_folder(items, "g1", "g", insertion_hint="a")
    assert ids(result) == ["a", "g1", "b"]
    assert isinstance(result[1], Shortcut)


def test_remove_from_folder_wrong_container(sample_items):
    assert folders.remove_from_folder(sample_items, "a", "f") == sample_items
    assert folders.remove_from_folder(sample_items, "f1", "b") == sample_items


def test_reorder_within_root_and_folder(sample_items):
    assert ids(folders.reorder_within(sample_items, ROOT, 0, 3)) == ["b", "f", "c", "a"]
    assert children(folders.reorder_within(sample_items, "f", 0, 1), "f") == ["f2", "f1"]
    assert folders.reorder_within(sample_items, "b", 0, 1) == sample_items


def test_delete_folder_drops_children(sample_items):
    result = folders.delete_folder(sample_items, "f")
    assert ids(result) == ["a", "b", "c"]
    assert find_item(result, "f1") is None
    assert folders.delete_folder(sample_items, "a") == sample_items


def test_remove_item(sample_items):
    assert ids(folders.remove_item(sample_items, "b")) == ["a", "f", "c"]
    assert children(folders.remove_item(sample_items, "f2"), "f") == ["f1"]
    twice = folders.remove_item(folders.remove_item(sample_items, "f1"), "f2")
    assert ids(twice) == ["a", "b", "c"]


def test_rename_folder(sample_items):
    assert find_item(folders.rename_folder(sample_items, "f", "  Work "), "f").item.title == "Work"
    assert find_item(folders.rename_folder(sample_items, "f", "   "), "f").item.title == "Folder"
    assert folders.rename_folder(sample_items, "a", "x") == sample_items


def test_update_item_in_place(sample_items):
    result = folders.update_item(sample_items, Shortcut(id="f2", title="Renamed", url="https://x.org"))
    assert find_item(result, "f2").item.title == "Renamed"
    assert find_item(result, "f2").index == 1
    result = folders.update_item(sample_items, Shortcut(id="b", title="B2"))
    assert result[1].title == "B2"
    assert folders.update_item(sample_items, Shortcut(id="nope")) == sample_items


def test_random_operation_sequence_keeps_invariants():
    """Ids stay unique and no empty folder survives any operation."""
    rng = random.Random(1234)
    items = [leaf(f"s{i}") for i in range(12)]
    total_leaves = 12

    for _ in range(300):
        all_ids = list(iter_all_ids(items))
        leaves = [i for i in all_ids if not isinstance(find_item(items, i).item, Folder)]
        roots = [item.id for item in items]
        root_folders = [item.id for item in items if isinstance(item, Folder)]
        op = rng.choice(["create", "into", "out", "reorder"])

        if op == "create" and len(roots) > 1:
            items = folders.create_folder(items, rng.choice(roots), rng.choice(roots))
        elif op == "into" and root_folders:
            items = folders.move_into_folder(items, rng.choice(leaves), rng.choice(root_folders))
        elif op == "out" and root_folders:
            folder_id = rng.choice(root_folders)
            child = rng.choice(children(items, folder_id))
            items = folders.remove_from_folder(items, child, folder_id, rng.choice(roots + [None]))
        else:
            items = folders.reorder_within(items, ROOT, rng.randrange(len(items)), rng.randrange(len(items)))

        check_integrity(items)
        leaf_count = sum(len(i.children) if isinstance(i, Folder) else 1 for i in items)
        assert leaf_count == total_leaves

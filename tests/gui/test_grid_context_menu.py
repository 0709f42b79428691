from unittest.mock import patch

import pytest
from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QDialogButtonBox, QInputDialog, QMenu

from gui.edit_dialog import EditShortcutDialog
from gui.grid_view import GridView
from startgrid.engine import GridEngine
from startgrid.models.item import Shortcut


@pytest.fixture
def engine(qapp, fast_settings, sample_items):
    eng = GridEngine(sample_items, settings=fast_settings, viewport_width=1280)
    yield eng
    eng.shutdown()


@pytest.fixture
def view(qtbot, engine):
    widget = GridView(engine)
    qtbot.addWidget(widget)
    widget.resize(1280, 720)
    widget.show()
    qtbot.waitExposed(widget)
    return widget


def choose(text, seen=None):
    """Stands in for QMenu.exec and picks the action labelled `text`."""
    def fake_exec(menu, *args):
        labels = [action.text() for action in menu.actions() if not action.isSeparator()]
        if seen is not None:
            seen.extend(labels)
        for action in menu.actions():
            if action.text() == text:
                return action
        return None
    return fake_exec


def right_click(view, item_id):
    bridge = view.bridge
    rects = bridge.folder_child_rects() if view.engine.open_folder else bridge.page_rects()
    for item, rect in rects:
        if item.id == item_id:
            return bridge.press_at(*rect.center, Qt.MouseButton.RightButton)
    raise AssertionError(f"{item_id} not visible")


def test_leaf_menu_delete_removes_item(view, engine):
    seen = []
    with patch.object(QMenu, "exec", choose("Delete", seen)):
        right_click(view, "b")

    assert seen == ["Edit...", "Delete"]
    assert [item.id for item in engine.items] == ["a", "f", "c"]
    assert engine.context_item_id is None


def test_folder_menu_rename(view, engine):
    seen = []
    with patch.object(QMenu, "exec", choose("Rename...", seen)), \
            patch.object(QInputDialog, "getText", return_value=("  Dev  ", True)) as get_text:
        right_click(view, "f")

    assert seen == ["Rename...", "Delete Folder"]
    assert get_text.call_args.kwargs["text"] == "Tools"
    assert engine.find("f").item.title == "Dev"
    assert engine.context_item_id is None


def test_folder_menu_rename_cancelled(view, engine):
    with patch.object(QMenu, "exec", choose("Rename...")), \
            patch.object(QInputDialog, "getText", return_value=("Dev", False)):
        right_click(view, "f")
    assert engine.find("f").item.title == "Tools"


def test_folder_menu_delete_removes_folder_and_children(view, engine):
    with patch.object(QMenu, "exec", choose("Delete Folder")):
        right_click(view, "f")
    assert [item.id for item in engine.items] == ["a", "b", "c"]
    assert engine.find("f1") is None


def test_child_menu_move_out_of_folder(view, engine):
    assert engine.open_folder_view("f")
    seen = []
    with patch.object(QMenu, "exec", choose("Move out of Folder", seen)):
        right_click(view, "f2")

    assert seen == ["Edit...", "Move out of Folder", "Delete"]
    assert engine.find("f2").in_root
    assert engine.open_folder_id is None
    folder = engine.find("f").item
    assert [c.id for c in folder.children] == ["f1"]


def test_leaf_menu_edit_updates_item(view, engine):
    with patch.object(QMenu, "exec", choose("Edit...")), \
            patch("gui.grid_view.EditShortcutDialog") as MockDialog:
        instance = MockDialog.return_value
        instance.exec.return_value = True
        instance.get_shortcut.return_value = Shortcut(id="a", title="Alpha", url="https://alpha.example.org")
        right_click(view, "a")

    assert MockDialog.call_args.args[0].id == "a"
    item = engine.find("a").item
    assert item.title == "Alpha"
    assert item.url == "https://alpha.example.org"


def test_menu_closed_without_choice_keeps_context(view, engine):
    with patch.object(QMenu, "exec", return_value=None):
        right_click(view, "c")
    assert engine.context_item_id == "c"
    assert [item.id for item in engine.items] == ["a", "b", "f", "c"]


def test_edit_dialog_returns_updated_copy(qtbot):
    original = Shortcut(id="x", title="Old", url="https://old.example.org")
    dlg = EditShortcutDialog(original)
    qtbot.addWidget(dlg)

    dlg.input_title.setText(" New ")
    dlg.input_url.setText("https://new.example.org")
    edited = dlg.get_shortcut()
    assert edited.id == "x"
    assert edited.title == "New"
    assert edited.url == "https://new.example.org"
    assert original.title == "Old"

    ok = dlg.buttons.button(QDialogButtonBox.StandardButton.Ok)
    dlg.input_url.setText("   ")
    assert not ok.isEnabled()

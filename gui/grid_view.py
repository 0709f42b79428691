"""
------------------------------------------------------------------------------
Project:        StartGrid
File:           gui/grid_view.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Minimal painter for the start-page grid: tiles of the current
                page, folder previews, the merge candidate highlight, the
                drag ghost, page dots and the open folder panel. Also hosts
                the per-item context menu (edit, rename, move out, delete).
------------------------------------------------------------------------------
"""

import zlib
from typing import Optional

from PyQt6.QtCore import QPoint, QRectF, Qt
from PyQt6.QtGui import QBrush, QColor, QPainter, QPen
from PyQt6.QtWidgets import QInputDialog, QMenu, QWidget

from gui.edit_dialog import EditShortcutDialog
from gui.grid_bridge import GridInputBridge
from startgrid.collision import Rect
from startgrid.engine import GridEngine
from startgrid.layout import LABEL_HEIGHT
from startgrid.models.item import Folder, Shortcut

TILE_PALETTE = ["#5a7d9a", "#3b82f6", "#8b5cf6", "#10b981", "#f59e0b", "#ef4444", "#14b8a6", "#6366f1"]
DOT_SIZE = 8


def tile_color(title: str) -> QColor:
    """Stable badge color derived from the title."""
    return QColor(TILE_PALETTE[zlib.crc32(title.encode("utf-8")) % len(TILE_PALETTE)])


def _qrect(rect: Rect) -> QRectF:
    return QRectF(rect.x, rect.y, rect.width, rect.height)


class GridView(QWidget):
    def __init__(self, engine: GridEngine, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.engine = engine
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setMinimumSize(360, 240)
        self.setMouseTracking(True)
        self.bridge = GridInputBridge(engine, self, parent=self)
        self.bridge.contextMenuRequested.connect(self._show_context_menu)

        for signal in (
            engine.itemsChanged,
            engine.pageChanged,
            engine.mergeCandidateChanged,
            engine.folderViewChanged,
            engine.dragStateChanged,
            engine.contextItemChanged,
        ):
            signal.connect(self._on_engine_changed)

    def _on_engine_changed(self, *_args) -> None:
        self.update()

    # --- Context menu ---

    def _show_context_menu(self, item_id: str, pos: QPoint) -> None:
        loc = self.engine.find(item_id)
        if loc is None:
            return

        menu = QMenu(self)
        handlers = {}
        if isinstance(loc.item, Folder):
            handlers[menu.addAction(self.tr("Rename..."))] = lambda: self._rename_folder(item_id)
            menu.addSeparator()
            handlers[menu.addAction(self.tr("Delete Folder"))] = lambda: self.engine.delete_folder(item_id)
        else:
            handlers[menu.addAction(self.tr("Edit..."))] = lambda: self._edit_shortcut(item_id)
            if not loc.in_root:
                handlers[menu.addAction(self.tr("Move out of Folder"))] = lambda: self.engine.move_out_of_folder(item_id)
            menu.addSeparator()
            handlers[menu.addAction(self.tr("Delete"))] = lambda: self.engine.remove_item(item_id)

        action = menu.exec(pos)
        handler = handlers.get(action)
        if handler is not None:
            handler()
            self.engine.dismiss_context_menu()

    def _rename_folder(self, folder_id: str) -> None:
        loc = self.engine.find(folder_id)
        if loc is None:
            return
        new_title, ok = QInputDialog.getText(self, self.tr("Rename Folder"), self.tr("New Title:"), text=loc.item.title)
        if ok and new_title.strip():
            self.engine.rename_folder(folder_id, new_title.strip())

    def _edit_shortcut(self, item_id: str) -> None:
        loc = self.engine.find(item_id)
        if loc is None:
            return
        dlg = EditShortcutDialog(loc.item, parent=self)
        if dlg.exec():
            self.engine.update_item(dlg.get_shortcut())

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.fillRect(self.rect(), QColor("#1f2937"))

        active_id = self.engine.drag_state.active_id
        for item, rect in self.bridge.page_rects():
            self._paint_tile(painter, item, rect, dimmed=item.id == active_id)
        self._paint_page_dots(painter)

        if self.engine.open_folder is not None:
            self._paint_folder_panel(painter, active_id)

        ghost = self.bridge.drag_rect
        loc = self.engine.find(active_id)
        if ghost is not None and loc is not None:
            self._paint_tile(painter, loc.item, ghost, with_label=False)
        painter.end()

    def _paint_tile(self, painter: QPainter, item, rect: Rect, dimmed: bool = False, with_label: bool = True) -> None:
        painter.save()
        if dimmed:
            painter.setOpacity(0.3)
        box = _qrect(rect)
        radius = rect.width * 0.22

        if isinstance(item, Folder):
            painter.setBrush(QBrush(QColor(255, 255, 255, 50)))
            painter.setPen(Qt.PenStyle.NoPen)
            painter.drawRoundedRect(box, radius, radius)
            cell = rect.width / 3.0
            for index, child in enumerate(item.preview()):
                row, col = divmod(index, 3)
                mini = QRectF(rect.x + col * cell + cell * 0.15, rect.y + row * cell + cell * 0.15, cell * 0.7, cell * 0.7)
                painter.setBrush(QBrush(tile_color(child.title)))
                painter.drawRoundedRect(mini, cell * 0.15, cell * 0.15)
        elif isinstance(item, Shortcut):
            painter.setBrush(QBrush(tile_color(item.title)))
            painter.setPen(Qt.PenStyle.NoPen)
            painter.drawRoundedRect(box, radius, radius)
            letter = item.icon.display_letter(item.title) if item.icon else (item.title[:1].upper() or "A")
            font = painter.font()
            font.setPixelSize(max(8, int(rect.width * 0.45)))
            font.setBold(True)
            painter.setFont(font)
            painter.setPen(Qt.GlobalColor.white)
            painter.drawText(box, Qt.AlignmentFlag.AlignCenter, letter)

        if item.id == self.engine.merge_candidate:
            pen = QPen(QColor("#60a5fa"), 3)
            pen.setStyle(Qt.PenStyle.DashLine)
            painter.setPen(pen)
            painter.setBrush(Qt.BrushStyle.NoBrush)
            painter.drawRoundedRect(box.adjusted(-4, -4, 4, 4), radius, radius)

        if item.id == self.engine.context_item_id:
            painter.setPen(QPen(QColor("#f59e0b"), 2))
            painter.setBrush(Qt.BrushStyle.NoBrush)
            painter.drawRoundedRect(box.adjusted(-2, -2, 2, 2), radius, radius)

        if with_label:
            font = painter.font()
            font.setPixelSize(12)
            font.setBold(False)
            painter.setFont(font)
            painter.setPen(QColor("#e5e7eb"))
            label = QRectF(rect.x - 8, rect.bottom + 4, rect.width + 16, LABEL_HEIGHT - 4)
            painter.drawText(label, Qt.AlignmentFlag.AlignHCenter | Qt.AlignmentFlag.AlignTop, item.title)
        painter.restore()

    def _paint_page_dots(self, painter: QPainter) -> None:
        total = self.engine.total_pages
        if total <= 1:
            return
        spacing = DOT_SIZE * 2
        x = (self.width() - (total * spacing - DOT_SIZE)) / 2.0
        y = self.height() - 3 * DOT_SIZE
        painter.setPen(Qt.PenStyle.NoPen)
        for page in range(total):
            alpha = 230 if page == self.engine.current_page else 90
            painter.setBrush(QBrush(QColor(255, 255, 255, alpha)))
            painter.drawEllipse(QRectF(x + page * spacing, y, DOT_SIZE, DOT_SIZE))

    def _paint_folder_panel(self, painter: QPainter, active_id: Optional[str]) -> None:
        painter.fillRect(self.rect(), QColor(0, 0, 0, 140))
        panel = self.bridge.folder_panel_rect()
        if panel is None:
            return
        painter.setBrush(QBrush(QColor("#374151")))
        painter.setPen(Qt.PenStyle.NoPen)
        painter.drawRoundedRect(_qrect(panel), 16, 16)

        painter.setPen(QColor("#f9fafb"))
        title_box = QRectF(panel.x, panel.y - 32, panel.width, 28)
        painter.drawText(title_box, Qt.AlignmentFlag.AlignCenter, self.engine.open_folder.title)

        for child, rect in self.bridge.folder_child_rects():
            self._paint_tile(painter, child, rect, dimmed=child.id == active_id)

"""
------------------------------------------------------------------------------
Project:        StartGrid
File:           gui/grid_bridge.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Translates Qt input on the grid view (mouse, wheel, keys,
                resize) into GridEngine commands. Builds the droppable
                regions of the visible page or the open folder panel for
                every drag tick, opens leaf URLs and requests the context
                menu.
------------------------------------------------------------------------------
"""

import math
from typing import List, Optional, Tuple

from PyQt6.QtCore import QEvent, QObject, QPoint, Qt, QUrl, pyqtSignal
from PyQt6.QtGui import QDesktopServices
from PyQt6.QtWidgets import QWidget

from startgrid.collision import FOLDER_CONTENT_REGION_ID, OUTSIDE_REGION_ID, DropRegion, Rect
from startgrid.engine import GridEngine
from startgrid.logger import get_logger

logger = get_logger("gui")

# Pointer travel before a press turns into a drag
DRAG_START_DISTANCE = 10
FOLDER_PANEL_COLUMNS = 4
FOLDER_PANEL_PADDING = 24

_KEY_NAMES = {
    Qt.Key.Key_Left: "ArrowLeft",
    Qt.Key.Key_Right: "ArrowRight",
    Qt.Key.Key_PageUp: "PageUp",
    Qt.Key.Key_PageDown: "PageDown",
    Qt.Key.Key_Escape: "Escape",
}

_ACTIVATE_KEYS = (Qt.Key.Key_Return, Qt.Key.Key_Enter)


def wheel_deltas(pixel_delta: QPoint, angle_delta: QPoint) -> Tuple[float, float]:
    """
    Wheel movement in scroll direction (positive = forward).
    Trackpads report pixel deltas, mouse wheels only angle deltas.
    """
    delta = pixel_delta if not pixel_delta.isNull() else angle_delta
    return float(-delta.x()), float(-delta.y())


class GridInputBridge(QObject):
    """
    Event filter installed on the grid view.

    Hit testing uses the same GridMetrics the view paints with, so the
    regions handed to the engine match what the user sees.
    """

    contextMenuRequested = pyqtSignal(str, QPoint)  # item id, global position

    def __init__(self, engine: GridEngine, view: QWidget, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.engine = engine
        self.view = view
        self._press_pos: Optional[Tuple[float, float]] = None
        self._press_id: Optional[str] = None
        self._grab_offset: Tuple[float, float] = (0.0, 0.0)
        self._drag_rect: Optional[Rect] = None
        self._menu_open_at_press = False
        self._press_on_menu_item = False
        self._hover_id: Optional[str] = None
        self.dragging = False

        view.installEventFilter(self)
        engine.set_viewport_width(view.width())
        engine.pageChanged.connect(self._clear_hover)
        engine.folderViewChanged.connect(self._clear_hover)

    @property
    def drag_rect(self) -> Optional[Rect]:
        """Current rectangle of the dragged tile, for painting the ghost."""
        return self._drag_rect if self.dragging else None

    # --- Geometry ---

    def grid_origin(self) -> Tuple[float, float]:
        return self.engine.metrics.origin(self.view.width())

    def page_rects(self) -> List[Tuple[object, Rect]]:
        metrics = self.engine.metrics
        origin = self.grid_origin()
        return [(item, metrics.cell_rect(slot, origin)) for slot, item in enumerate(self.engine.page_items())]

    def folder_panel_rect(self) -> Optional[Rect]:
        folder = self.engine.open_folder
        if folder is None:
            return None
        metrics = self.engine.metrics
        pitch = metrics.icon_size + metrics.col_gap
        rows = max(1, math.ceil(len(folder.children) / FOLDER_PANEL_COLUMNS))
        width = FOLDER_PANEL_COLUMNS * pitch + 2 * FOLDER_PANEL_PADDING
        height = rows * metrics.row_pitch + 2 * FOLDER_PANEL_PADDING
        return Rect(0, 0, width, height).centered_at(self.view.width() / 2.0, self.view.height() / 2.0)

    def folder_child_rects(self) -> List[Tuple[object, Rect]]:
        folder = self.engine.open_folder
        panel = self.folder_panel_rect()
        if folder is None or panel is None:
            return []
        metrics = self.engine.metrics
        pitch = metrics.icon_size + metrics.col_gap
        result = []
        for index, child in enumerate(folder.children):
            row, col = divmod(index, FOLDER_PANEL_COLUMNS)
            x = panel.x + FOLDER_PANEL_PADDING + col * pitch
            y = panel.y + FOLDER_PANEL_PADDING + row * metrics.row_pitch
            result.append((child, Rect(x, y, metrics.icon_size, metrics.icon_size)))
        return result

    def build_regions(self) -> List[DropRegion]:
        """Droppable regions for the current view state."""
        panel = self.folder_panel_rect()
        if panel is not None:
            regions = [
                DropRegion(child.id, rect, index)
                for index, (child, rect) in enumerate(self.folder_child_rects())
            ]
            regions.append(DropRegion(FOLDER_CONTENT_REGION_ID, panel))
            regions.append(DropRegion(OUTSIDE_REGION_ID, Rect(0, 0, self.view.width(), self.view.height())))
            return regions

        base = self.engine.current_page * self.engine.metrics.capacity
        return [
            DropRegion(item.id, rect, base + slot)
            for slot, (item, rect) in enumerate(self.page_rects())
        ]

    def item_at(self, px: float, py: float) -> Optional[str]:
        rects = self.folder_child_rects() if self.engine.open_folder is not None else self.page_rects()
        for item, rect in rects:
            if rect.contains(px, py):
                return item.id
        return None

    # --- Pointer ---

    def press_at(self, px: float, py: float, button: Qt.MouseButton = Qt.MouseButton.LeftButton) -> Optional[str]:
        if button == Qt.MouseButton.RightButton:
            item_id = self.item_at(px, py)
            if item_id is not None:
                self.engine.set_context_item(item_id)
                self.contextMenuRequested.emit(item_id, self.view.mapToGlobal(QPoint(int(px), int(py))))
            return item_id

        self._menu_open_at_press = self.engine.context_item_id is not None
        self._press_pos = (px, py)
        self._press_id = self.item_at(px, py)
        self._press_on_menu_item = self._press_id is not None and self.engine.is_drag_suppressed(self._press_id)
        if self._press_on_menu_item:
            # The item showing the context menu neither drags nor activates
            self._press_id = None
        if self._press_id is not None:
            rect = self._rect_of(self._press_id)
            if rect is not None:
                self._grab_offset = (px - rect.x, py - rect.y)
        return self._press_id

    def move_to(self, px: float, py: float) -> None:
        if self._press_pos is None:
            self._hover_id = self.item_at(px, py)
            return
        if self._press_id is None:
            return

        if not self.dragging:
            sx, sy = self._press_pos
            if math.hypot(px - sx, py - sy) < DRAG_START_DISTANCE:
                return
            if not self.engine.start_drag(self._press_id):
                self._press_id = None
                return
            self.dragging = True

        metrics = self.engine.metrics
        edge = metrics.icon_size * metrics.scale
        ox, oy = self._grab_offset
        self._drag_rect = Rect(px - ox, py - oy, edge, edge)
        self.engine.update_drag_position(self._drag_rect, self.build_regions())
        self.view.update()

    def release_at(self, px: float, py: float) -> None:
        if self.dragging:
            self.engine.end_drag()
        elif self._press_pos is not None and not self._press_on_menu_item:
            self._click(px, py)
        if self._menu_open_at_press:
            self.engine.dismiss_context_menu()
        self._reset_press()
        self.view.update()

    def _click(self, px: float, py: float) -> None:
        panel = self.folder_panel_rect()
        if panel is not None and not panel.contains(px, py):
            self.engine.close_folder()
            return
        item_id = self.item_at(px, py)
        if item_id is not None:
            self.activate(item_id)

    def activate(self, item_id: Optional[str]) -> bool:
        """
        Opens a root folder in the folder panel or a leaf's URL in the
        desktop browser. Returns False when there is nothing to open.
        """
        loc = self.engine.find(item_id)
        if loc is None:
            return False
        if loc.item.is_folder:
            return self.engine.open_folder_view(item_id)
        if not loc.item.url:
            logger.debug(f"activate: {item_id} has no URL")
            return False
        logger.info(f"Opening {loc.item.url}")
        return QDesktopServices.openUrl(QUrl(loc.item.url))

    def _rect_of(self, item_id: str) -> Optional[Rect]:
        rects = self.folder_child_rects() if self.engine.open_folder is not None else self.page_rects()
        for item, rect in rects:
            if item.id == item_id:
                return rect
        return None

    def _clear_hover(self, *_args) -> None:
        self._hover_id = None

    def _reset_press(self) -> None:
        self._press_pos = None
        self._press_id = None
        self._drag_rect = None
        self._menu_open_at_press = False
        self._press_on_menu_item = False
        self.dragging = False

    # --- Event filter ---

    def eventFilter(self, obj, event):
        if obj is not self.view:
            return super().eventFilter(obj, event)

        etype = event.type()
        if etype == QEvent.Type.MouseButtonPress:
            pos = event.position()
            self.press_at(pos.x(), pos.y(), event.button())
            return False
        if etype == QEvent.Type.MouseMove:
            pos = event.position()
            self.move_to(pos.x(), pos.y())
            return False
        if etype == QEvent.Type.MouseButtonRelease:
            if event.button() == Qt.MouseButton.LeftButton:
                pos = event.position()
                self.release_at(pos.x(), pos.y())
            return False
        if etype == QEvent.Type.Leave:
            self._hover_id = None
            return False
        if etype == QEvent.Type.Wheel:
            dx, dy = wheel_deltas(event.pixelDelta(), event.angleDelta())
            self.engine.on_wheel(dx, dy)
            return True
        if etype == QEvent.Type.KeyPress:
            if event.key() in _ACTIVATE_KEYS:
                if self.dragging:
                    return False
                return self.activate(self._hover_id)
            key = _KEY_NAMES.get(event.key())
            if key is not None:
                if key == "Escape" and self.dragging:
                    self._reset_press()
                return self.engine.on_key(key)
            return False
        if etype == QEvent.Type.Resize:
            self.engine.set_viewport_width(self.view.width())
            return False
        if etype == QEvent.Type.Hide:
            self.engine.cancel_drag()
            self._reset_press()
            return False
        return super().eventFilter(obj, event)

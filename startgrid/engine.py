"""
------------------------------------------------------------------------------
Project:        StartGrid
File:           startgrid/engine.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    GridEngine, the command/query surface consumed by rendering.
                Owns the item tuple, the drag session with its debounce
                timers, the open folder view and the page navigator, and
                publishes every change through Qt signals.
------------------------------------------------------------------------------
"""

from dataclasses import replace
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from startgrid import drag_state, folders
from startgrid.collision import Classification, DropRegion, Rect, classify
from startgrid.config import GridSettings
from startgrid.drag_state import DragState, DropAction, DropDecision, Effect, Step
from startgrid.layout import GridMetrics, compute_metrics
from startgrid.logger import get_logger, log_drag_transition
from startgrid.models.item import Folder, Location, Shortcut, check_integrity, find_item
from startgrid.pagination import PageNavigator, page_count, page_slice

logger = get_logger("engine")

AnyItem = Union[Shortcut, Folder]


class DragSession:
    """
    Timer handles belonging to exactly one drag episode. Disposed (timers
    stopped and released) before the next episode may start.
    """

    def __init__(self, session_id: int, owner: QObject, merge_delay_ms: int, drag_out_delay_ms: int) -> None:
        self.id = session_id
        self.merge_target: Optional[str] = None

        self.merge_timer = QTimer(owner)
        self.merge_timer.setSingleShot(True)
        self.merge_timer.setInterval(merge_delay_ms)

        self.drag_out_timer = QTimer(owner)
        self.drag_out_timer.setSingleShot(True)
        self.drag_out_timer.setInterval(drag_out_delay_ms)

    @property
    def has_pending_timers(self) -> bool:
        return self.merge_timer.isActive() or self.drag_out_timer.isActive()

    def dispose(self) -> None:
        for timer in (self.merge_timer, self.drag_out_timer):
            timer.stop()
            timer.timeout.disconnect()
            timer.deleteLater()
        self.merge_target = None


class GridEngine(QObject):
    """
    Grid arrangement engine.

    Rendering feeds discrete input (drag ticks, wheel, keys, viewport size)
    and re-reads the item tuple whenever itemsChanged fires.
    """
    itemsChanged = pyqtSignal(list)
    pageChanged = pyqtSignal(int)
    mergeCandidateChanged = pyqtSignal(object)
    folderViewChanged = pyqtSignal(object)
    dragStateChanged = pyqtSignal(object)
    contextItemChanged = pyqtSignal(object)

    def __init__(
        self,
        items: Optional[Iterable[AnyItem]] = None,
        settings: Optional[GridSettings] = None,
        viewport_width: float = 1280,
        clock=None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self.settings = settings or GridSettings()
        self._items: Tuple[AnyItem, ...] = ()
        self._state: DragState = drag_state.IDLE
        self._session: Optional[DragSession] = None
        self._session_counter = 0
        self._merge_candidate: Optional[str] = None
        self._open_folder_id: Optional[str] = None
        self._context_item_id: Optional[str] = None
        self._viewport_width = viewport_width

        self.navigator = PageNavigator(
            cooldown_ms=self.settings.page_cooldown_ms,
            threshold=self.settings.wheel_threshold,
            gesture_gap_ms=self.settings.wheel_gesture_gap_ms,
            clock=clock,
            parent=self,
        )
        self.navigator.pageChanged.connect(self.pageChanged.emit)
        self._metrics = self._compute_metrics()

        if items is not None:
            self.set_items(items)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def items(self) -> Tuple[AnyItem, ...]:
        return self._items

    @property
    def current_page(self) -> int:
        return self.navigator.current_page

    @property
    def total_pages(self) -> int:
        return self.navigator.total_pages

    @property
    def metrics(self) -> GridMetrics:
        return self._metrics

    @property
    def merge_candidate(self) -> Optional[str]:
        return self._merge_candidate

    @property
    def drag_state(self) -> DragState:
        return self._state

    @property
    def open_folder_id(self) -> Optional[str]:
        return self._open_folder_id

    @property
    def open_folder(self) -> Optional[Folder]:
        loc = find_item(self._items, self._open_folder_id)
        if loc is not None and isinstance(loc.item, Folder):
            return loc.item
        return None

    @property
    def context_item_id(self) -> Optional[str]:
        return self._context_item_id

    @property
    def has_pending_timers(self) -> bool:
        return self._session is not None and self._session.has_pending_timers

    def find(self, item_id: Optional[str]) -> Optional[Location]:
        return find_item(self._items, item_id)

    def page_items(self, page: Optional[int] = None) -> List[AnyItem]:
        if page is None:
            page = self.current_page
        return page_slice(self._items, self._metrics.capacity, page)

    def is_drag_suppressed(self, item_id: str) -> bool:
        """An item whose context menu is open cannot be dragged."""
        return item_id is not None and item_id == self._context_item_id

    # ------------------------------------------------------------------
    # Items
    # ------------------------------------------------------------------

    def set_items(self, items: Iterable[AnyItem]) -> None:
        """
        Replaces the whole root sequence (e.g. after an external add or sync).

        Raises:
            GridIntegrityError: If the sequence has duplicate ids or empty folders.
        """
        new_items = list(items)
        check_integrity(new_items)
        self._commit(new_items, "set_items")

    def remove_item(self, item_id: str) -> bool:
        return self._commit(folders.remove_item(self._items, item_id), f"remove {item_id}")

    def delete_folder(self, folder_id: str) -> bool:
        return self._commit(folders.delete_folder(self._items, folder_id), f"delete folder {folder_id}")

    def rename_folder(self, folder_id: str, title: str) -> bool:
        return self._commit(folders.rename_folder(self._items, folder_id, title), f"rename {folder_id}")

    def update_item(self, item: Shortcut) -> bool:
        return self._commit(folders.update_item(self._items, item), f"update {item.id}")

    def move_out_of_folder(self, leaf_id: str, insertion_hint: Optional[str] = None) -> bool:
        """Ejects a folder child into the root sequence and closes the folder view."""
        loc = self.find(leaf_id)
        if loc is None or loc.in_root:
            return False
        changed = self._commit(
            folders.remove_from_folder(self._items, leaf_id, loc.container, insertion_hint),
            f"move {leaf_id} out of {loc.container}",
        )
        self.close_folder()
        return changed

    # ------------------------------------------------------------------
    # Folder view & context menu
    # ------------------------------------------------------------------

    def open_folder_view(self, folder_id: str) -> bool:
        loc = self.find(folder_id)
        if loc is None or not loc.in_root or not isinstance(loc.item, Folder):
            return False
        if self._open_folder_id != folder_id:
            self._open_folder_id = folder_id
            self.folderViewChanged.emit(folder_id)
        return True

    def close_folder(self) -> None:
        if self._open_folder_id is not None:
            self._open_folder_id = None
            self.folderViewChanged.emit(None)

    def set_context_item(self, item_id: Optional[str]) -> None:
        if item_id is not None and self.find(item_id) is None:
            return
        if item_id != self._context_item_id:
            self._context_item_id = item_id
            self.contextItemChanged.emit(item_id)

    def dismiss_context_menu(self) -> None:
        self.set_context_item(None)

    # ------------------------------------------------------------------
    # Drag lifecycle
    # ------------------------------------------------------------------

    def start_drag(self, item_id: str) -> bool:
        if self._state.is_active:
            self.cancel_drag()

        if self.find(item_id) is None:
            logger.debug(f"start_drag: unknown id {item_id}")
            return False
        if self.is_drag_suppressed(item_id):
            logger.debug(f"start_drag: {item_id} has its context menu open")
            return False

        self._session_counter += 1
        session = DragSession(
            self._session_counter,
            self,
            self.settings.merge_delay_ms,
            self.settings.drag_out_delay_ms,
        )
        sid = session.id
        session.merge_timer.timeout.connect(lambda: self._on_merge_timeout(sid))
        session.drag_out_timer.timeout.connect(lambda: self._on_drag_out_timeout(sid))
        self._session = session

        self._apply(drag_state.start(item_id, sid))
        return True

    def update_drag_position(self, active_rect: Rect, regions: Sequence[DropRegion]) -> Classification:
        """Classifies the current tick and advances the state machine."""
        classification = classify(active_rect, regions)
        self.apply_classification(classification)
        return classification

    def apply_classification(self, classification: Classification) -> None:
        if not self._state.is_active:
            return
        self._apply(drag_state.move(self._state, self._items, classification))

    def end_drag(self) -> DropDecision:
        """Releases the dragged item: merge if a merge is pending, otherwise reorder."""
        if not self._state.is_active:
            return DropDecision(DropAction.NONE)
        decision, step = drag_state.end(self._state)
        self._apply(step)
        self._dispose_session()

        if decision.action == DropAction.MERGE:
            self._merge(decision.active_id, decision.over_id)
        elif decision.action == DropAction.REORDER:
            self._reorder(decision.active_id, decision.over_id)
        return decision

    def cancel_drag(self) -> None:
        if self._state.is_active:
            self._apply(drag_state.cancel(self._state))
        self._dispose_session()

    # ------------------------------------------------------------------
    # Paging & viewport
    # ------------------------------------------------------------------

    def request_page(self, index: Optional[int] = None, delta: Optional[int] = None) -> bool:
        if index is not None:
            return self.navigator.go_to_page(index)
        if delta:
            return self.navigator.go_to_page(self.current_page + delta)
        return False

    def on_wheel(self, delta_x: float, delta_y: float) -> bool:
        return self.navigator.on_wheel(delta_x, delta_y)

    def on_key(self, key: str) -> bool:
        if key == "Escape":
            if self._state.is_active:
                self.cancel_drag()
                return True
            if self._context_item_id is not None:
                self.dismiss_context_menu()
                return True
            return False
        return self.navigator.on_key(key)

    def set_viewport_width(self, width: float) -> None:
        self._viewport_width = width
        self._metrics = self._compute_metrics()
        self._refresh_pages()

    def set_grid(self, columns: Optional[int] = None, rows: Optional[int] = None, icon_size: Optional[int] = None) -> None:
        self.settings = replace(
            self.settings,
            columns=self.settings.columns if columns is None else columns,
            rows=self.settings.rows if rows is None else rows,
            icon_size=self.settings.icon_size if icon_size is None else icon_size,
        )
        self._metrics = self._compute_metrics()
        self._refresh_pages()

    def shutdown(self) -> None:
        """Drops every pending timer, e.g. when the hosting view goes away."""
        self.cancel_drag()
        self.navigator.stop()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _compute_metrics(self) -> GridMetrics:
        s = self.settings
        return compute_metrics(s.columns, s.rows, s.icon_size, self._viewport_width, left_offset=s.left_offset)

    def _refresh_pages(self) -> None:
        self.navigator.set_total_pages(page_count(len(self._items), self._metrics.capacity))

    def _commit(self, new_items: Sequence[AnyItem], reason: str) -> bool:
        new_tuple = tuple(new_items)
        if new_tuple == self._items:
            logger.debug(f"No change: {reason}")
            return False
        self._items = new_tuple
        logger.info(f"Items changed: {reason}")
        self.itemsChanged.emit(list(new_tuple))
        self._refresh_pages()
        self._prune_references()
        return True

    def _prune_references(self) -> None:
        if self._context_item_id is not None and self.find(self._context_item_id) is None:
            self.set_context_item(None)
        if self._open_folder_id is not None and self.open_folder is None:
            self.close_folder()
        if self._state.is_active and self.find(self._state.active_id) is None:
            self.cancel_drag()

    def _apply(self, step: Step) -> None:
        old = self._state
        self._state = step.state
        log_drag_transition(old, step.state, step.effects)
        if old != step.state:
            self.dragStateChanged.emit(step.state)
        for effect in step.effects:
            self._run_effect(effect)

    def _run_effect(self, effect: Effect) -> None:
        session = self._session
        if effect == Effect.START_MERGE_TIMER and session is not None:
            session.merge_target = self._state.over_id
            session.merge_timer.start()
        elif effect == Effect.CANCEL_MERGE_TIMER and session is not None:
            session.merge_timer.stop()
            session.merge_target = None
        elif effect == Effect.START_DRAG_OUT_TIMER and session is not None:
            session.drag_out_timer.start()
        elif effect == Effect.CANCEL_DRAG_OUT_TIMER and session is not None:
            session.drag_out_timer.stop()
        elif effect == Effect.SET_MERGE_CANDIDATE:
            self._set_merge_candidate(self._state.over_id)
        elif effect == Effect.CLEAR_MERGE_CANDIDATE:
            self._set_merge_candidate(None)
        elif effect == Effect.APPLY_DRAG_OUT:
            self._apply_drag_out()

    def _set_merge_candidate(self, item_id: Optional[str]) -> None:
        if item_id != self._merge_candidate:
            self._merge_candidate = item_id
            self.mergeCandidateChanged.emit(item_id)

    def _dispose_session(self) -> None:
        if self._session is not None:
            self._session.dispose()
            self._session = None

    def _on_merge_timeout(self, session_id: int) -> None:
        session = self._session
        target = session.merge_target if session is not None and session.id == session_id else None
        self._apply(drag_state.merge_timer_fired(self._state, session_id, target))

    def _on_drag_out_timeout(self, session_id: int) -> None:
        self._apply(drag_state.drag_out_timer_fired(self._state, session_id))

    def _apply_drag_out(self) -> None:
        loc = self.find(self._state.active_id)
        if loc is not None and not loc.in_root:
            self._commit(
                folders.remove_from_folder(self._items, loc.item.id, loc.container),
                f"drag {loc.item.id} out of {loc.container}",
            )
            self.close_folder()
        if self._state.is_active:
            self._apply(drag_state.after_drag_out(self._state))

    def _merge(self, active_id: Optional[str], target_id: Optional[str]) -> None:
        active = self.find(active_id)
        target = self.find(target_id)
        if active is None or target is None:
            return
        if isinstance(active.item, Folder):
            # Folders never merge, dropping one is a plain reorder
            self._reorder(active_id, target_id)
            return
        if isinstance(target.item, Folder):
            self._commit(
                folders.move_into_folder(self._items, active.item.id, target.item.id),
                f"merge {active_id} into {target_id}",
            )
        else:
            self._commit(
                folders.create_folder(self._items, target.item.id, active.item.id),
                f"merge {active_id} with {target_id}",
            )

    def _reorder(self, active_id: Optional[str], over_id: Optional[str]) -> None:
        active = self.find(active_id)
        over = self.find(over_id)
        if active is None or over is None:
            return
        if active.container != over.container or active.index == over.index:
            return
        self._commit(
            folders.reorder_within(self._items, active.container, active.index, over.index),
            f"reorder {active_id} -> {over.container}[{over.index}]",
        )

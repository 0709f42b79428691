"""
------------------------------------------------------------------------------
Project:        StartGrid
File:           startgrid/pagination.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Splits the root sequence into fixed-capacity pages and turns
                continuous wheel input and discrete key presses into single
                page steps, with a cooldown against multi-page skips.
------------------------------------------------------------------------------
"""

import math
import time
from typing import Callable, List, Optional, Sequence

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from startgrid.logger import get_logger

logger = get_logger("paging")

KEYS_BACK = ("ArrowLeft", "Left", "PageUp")
KEYS_FORWARD = ("ArrowRight", "Right", "PageDown")


def page_count(item_count: int, capacity: int) -> int:
    if capacity <= 0 or item_count <= 0:
        return 0
    return math.ceil(item_count / capacity)


def paginate(items: Sequence, capacity: int) -> List[list]:
    """Contiguous fixed-size slices; the last page may be partial."""
    if capacity <= 0:
        return []
    return [list(items[start:start + capacity]) for start in range(0, len(items), capacity)]


def page_slice(items: Sequence, capacity: int, page: int) -> list:
    if capacity <= 0 or page < 0:
        return []
    start = page * capacity
    return list(items[start:start + capacity])


def page_of(index: int, capacity: int) -> int:
    """Page holding the item at a root index."""
    if capacity <= 0 or index < 0:
        return 0
    return index // capacity


class PageNavigator(QObject):
    """
    Tracks the current page and maps gestures to page steps.

    Wheel deltas accumulate in a signed counter. Crossing the threshold moves
    exactly one page and resets the counter. While the cooldown timer runs,
    wheel input is dropped entirely.
    """
    pageChanged = pyqtSignal(int)

    def __init__(
        self,
        cooldown_ms: int = 600,
        threshold: float = 50.0,
        gesture_gap_ms: int = 200,
        clock: Optional[Callable[[], float]] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self.threshold = float(threshold)
        self.gesture_gap_ms = gesture_gap_ms
        self._clock = clock or time.monotonic
        self._current = 0
        self._total = 0
        self._accumulated = 0.0
        self._last_wheel_ms: Optional[float] = None

        self._cooldown = QTimer(self)
        self._cooldown.setSingleShot(True)
        self._cooldown.setInterval(cooldown_ms)
        self._cooldown.timeout.connect(self._end_cooldown)

    @property
    def current_page(self) -> int:
        return self._current

    @property
    def total_pages(self) -> int:
        return self._total

    @property
    def accumulated(self) -> float:
        return self._accumulated

    @property
    def is_changing(self) -> bool:
        return self._cooldown.isActive()

    def set_total_pages(self, total: int) -> None:
        """Updates the page count, pulling the current page back into range."""
        self._total = max(0, int(total))
        if self._total > 0 and self._current >= self._total:
            self._set_current(self._total - 1)
        elif self._total == 0 and self._current != 0:
            self._set_current(0)

    def go_to_page(self, target: int) -> bool:
        """
        Jumps to a page (clamped). Starts the cooldown when the page changes.

        Returns:
            True if the current page changed.
        """
        if self._total <= 0:
            return False
        clamped = max(0, min(self._total - 1, int(target)))
        if clamped == self._current:
            return False
        self._cooldown.start()
        self._set_current(clamped)
        return True

    def step(self, delta: int) -> bool:
        if delta == 0:
            return False
        return self.go_to_page(self._current + (1 if delta > 0 else -1))

    def on_wheel(self, delta_x: float, delta_y: float) -> bool:
        """
        Feeds one wheel event.

        Horizontal-dominant deltas (trackpad swipes) use delta_x, pure vertical
        deltas (mouse wheels) use delta_y. Diagonal input is ignored.
        """
        if self._total <= 1 or self._cooldown.isActive():
            return False

        now_ms = self._clock() * 1000.0
        if self._last_wheel_ms is None or now_ms - self._last_wheel_ms > self.gesture_gap_ms:
            self._accumulated = 0.0
        self._last_wheel_ms = now_ms

        if abs(delta_x) > abs(delta_y):
            delta = delta_x
        elif delta_x == 0 and delta_y != 0:
            delta = delta_y
        else:
            return False

        self._accumulated += delta
        if self._accumulated > self.threshold:
            self._accumulated = 0.0
            return self.step(1)
        if self._accumulated < -self.threshold:
            self._accumulated = 0.0
            return self.step(-1)
        return False

    def on_key(self, key: str) -> bool:
        if key in KEYS_BACK:
            return self.step(-1)
        if key in KEYS_FORWARD:
            return self.step(1)
        return False

    def stop(self) -> None:
        """Cancels a running cooldown."""
        self._cooldown.stop()
        self._accumulated = 0.0

    def _set_current(self, page: int) -> None:
        self._current = page
        logger.debug(f"Page -> {page + 1}/{self._total}")
        self.pageChanged.emit(page)

    def _end_cooldown(self) -> None:
        self._accumulated = 0.0

"""
------------------------------------------------------------------------------
Project:        StartGrid
File:           startgrid/layout.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Responsive grid geometry. Derives the effective column count,
                gaps and scale factor from the configured grid and the
                viewport width, and maps page slots to rectangles.
------------------------------------------------------------------------------
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from startgrid.collision import Rect

# Horizontal padding around the grid
DEFAULT_PADDING = 48
# The grid never plans with less room than this, narrower viewports scale instead
MIN_AVAILABLE_WIDTH = 320
# Title line below each icon
LABEL_HEIGHT = 28
DEFAULT_TOP_MARGIN = 16


def calculate_gaps(columns: int, rows: int) -> Tuple[int, int]:
    """Denser grids get tighter gaps, with a floor on both axes."""
    col_gap = max(8, 40 - (columns - 3) * 6)
    row_gap = max(12, 32 - (rows - 2) * 5)
    return col_gap, row_gap


def required_width(columns: int, rows: int, icon_size: int) -> int:
    col_gap, _ = calculate_gaps(columns, rows)
    return columns * icon_size + (columns - 1) * col_gap


@dataclass(frozen=True)
class GridMetrics:
    columns: int
    rows: int
    icon_size: int
    col_gap: int
    row_gap: int
    scale: float = 1.0
    left_offset: int = 0

    @property
    def capacity(self) -> int:
        return self.columns * self.rows

    @property
    def content_width(self) -> int:
        """Unscaled width of one page of the grid."""
        return self.columns * self.icon_size + (self.columns - 1) * self.col_gap

    @property
    def row_pitch(self) -> float:
        return self.icon_size + LABEL_HEIGHT + self.row_gap

    def origin(self, viewport_width: float, top: float = DEFAULT_TOP_MARGIN) -> Tuple[float, float]:
        """Top-left corner of the centered grid inside the viewport."""
        free = viewport_width - self.left_offset - self.content_width * self.scale
        return (self.left_offset + max(0.0, free / 2.0), top)

    def cell_rect(self, slot: int, origin: Tuple[float, float] = (0.0, 0.0)) -> Rect:
        """Icon rectangle of a page slot (0-based, row-major)."""
        row, col = divmod(slot, self.columns)
        ox, oy = origin
        x = ox + col * (self.icon_size + self.col_gap) * self.scale
        y = oy + row * self.row_pitch * self.scale
        edge = self.icon_size * self.scale
        return Rect(x, y, edge, edge)

    def slot_at(self, px: float, py: float, origin: Tuple[float, float] = (0.0, 0.0)) -> Optional[int]:
        for slot in range(self.capacity):
            if self.cell_rect(slot, origin).contains(px, py):
                return slot
        return None


def compute_metrics(
    columns: int,
    rows: int,
    icon_size: int,
    viewport_width: float,
    padding: int = DEFAULT_PADDING,
    left_offset: int = 0,
) -> GridMetrics:
    """
    Reduces the configured column count until a page fits the viewport.
    Never adds columns. If even a single column is too wide, a uniform
    scale factor below 1 is applied.

    Args:
        columns: Configured columns.
        rows: Configured rows per page.
        icon_size: Icon edge length in pixels.
        viewport_width: Width of the hosting view in pixels.
        padding: Horizontal padding subtracted from the viewport.
        left_offset: Width reserved on the left side.

    Returns:
        The effective GridMetrics.
    """
    columns = max(1, int(columns))
    rows = max(1, int(rows))
    available = max(MIN_AVAILABLE_WIDTH, viewport_width - padding - left_offset)

    effective = columns
    while effective > 1 and required_width(effective, rows, icon_size) > available:
        effective -= 1

    needed = required_width(effective, rows, icon_size)
    scale = available / needed if needed > available else 1.0
    col_gap, row_gap = calculate_gaps(effective, rows)

    return GridMetrics(
        columns=effective,
        rows=rows,
        icon_size=icon_size,
        col_gap=col_gap,
        row_gap=row_gap,
        scale=min(1.0, scale),
        left_offset=left_offset,
    )

"""
------------------------------------------------------------------------------
Project:        StartGrid
File:           startgrid/collision.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Stateless collision classification for drag ticks. Strict
                rectangle overlap takes precedence, nearest-center proximity
                is only a fallback when nothing overlaps.
------------------------------------------------------------------------------
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

# Synthetic droppable covering the screen around an open folder view
OUTSIDE_REGION_ID = "folder-outside"
# Panel of an open folder view; hovering it keeps the item inside the folder
FOLDER_CONTENT_REGION_ID = "folder-content"


class CollisionKind(str, Enum):
    OVERLAP = "overlap"
    PROXIMITY = "proximity"


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def area(self) -> float:
        return max(0.0, self.width) * max(0.0, self.height)

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x + self.width / 2.0, self.y + self.height / 2.0)

    def intersection_area(self, other: "Rect") -> float:
        w = min(self.right, other.right) - max(self.x, other.x)
        h = min(self.bottom, other.bottom) - max(self.y, other.y)
        if w <= 0 or h <= 0:
            return 0.0
        return w * h

    def intersects(self, other: "Rect") -> bool:
        """Strict intersection, touching edges do not count."""
        return self.intersection_area(other) > 0

    def contains(self, px: float, py: float) -> bool:
        return self.x <= px < self.right and self.y <= py < self.bottom

    def centered_at(self, cx: float, cy: float) -> "Rect":
        return Rect(cx - self.width / 2.0, cy - self.height / 2.0, self.width, self.height)


@dataclass(frozen=True)
class DropRegion:
    """A droppable area: a grid slot, a folder child or the outside region."""
    id: str
    rect: Rect
    index: Optional[int] = None


@dataclass(frozen=True)
class Collision:
    id: str
    kind: CollisionKind
    score: float  # intersection ratio for overlap, center distance for proximity
    index: Optional[int] = None


@dataclass(frozen=True)
class Classification:
    kind: Optional[CollisionKind]
    collisions: Tuple[Collision, ...] = ()

    @property
    def over(self) -> Optional[Collision]:
        return self.collisions[0] if self.collisions else None

    @property
    def is_overlap(self) -> bool:
        return self.kind == CollisionKind.OVERLAP


EMPTY_CLASSIFICATION = Classification(kind=None)


def _intersection_ratio(active: Rect, target: Rect) -> float:
    inter = active.intersection_area(target)
    union = active.area + target.area - inter
    if union <= 0:
        return 0.0
    return inter / union


def _center_distance(a: Rect, b: Rect) -> float:
    (ax, ay), (bx, by) = a.center, b.center
    return math.hypot(ax - bx, ay - by)


def classify(active_rect: Rect, regions: Sequence[DropRegion]) -> Classification:
    """
    Classifies one drag tick.

    Args:
        active_rect: Bounding box of the dragged item at the current pointer position.
        regions: All currently droppable regions.

    Returns:
        Every overlapping region (best intersection ratio first) tagged as
        overlap, or else the single nearest region tagged as proximity.
    """
    if not regions:
        return EMPTY_CLASSIFICATION

    overlaps = []
    for order, region in enumerate(regions):
        if active_rect.intersects(region.rect):
            ratio = _intersection_ratio(active_rect, region.rect)
            overlaps.append((-ratio, order, region))

    if overlaps:
        overlaps.sort(key=lambda entry: (entry[0], entry[1]))
        return Classification(
            kind=CollisionKind.OVERLAP,
            collisions=tuple(
                Collision(id=region.id, kind=CollisionKind.OVERLAP, score=-neg_ratio, index=region.index)
                for neg_ratio, _order, region in overlaps
            ),
        )

    nearest = min(
        enumerate(regions),
        key=lambda entry: (_center_distance(active_rect, entry[1].rect), entry[0]),
    )[1]
    return Classification(
        kind=CollisionKind.PROXIMITY,
        collisions=(
            Collision(
                id=nearest.id,
                kind=CollisionKind.PROXIMITY,
                score=_center_distance(active_rect, nearest.rect),
                index=nearest.index,
            ),
        ),
    )

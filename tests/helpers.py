from startgrid.collision import Classification, Collision, CollisionKind
from startgrid.models.item import Shortcut


def leaf(item_id: str, title: str = "") -> Shortcut:
    return Shortcut(id=item_id, title=title or item_id.upper(), url=f"https://{item_id}.example.org")


def overlap(*ids, index=None) -> Classification:
    """Overlap classification over the given ids, best first."""
    return Classification(
        CollisionKind.OVERLAP,
        tuple(Collision(item_id, CollisionKind.OVERLAP, 0.5, index) for item_id in ids),
    )


def near(item_id, index=None) -> Classification:
    return Classification(CollisionKind.PROXIMITY, (Collision(item_id, CollisionKind.PROXIMITY, 10.0, index),))


class FakeClock:
    """Manually advanced monotonic clock (seconds)."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def __call__(self) -> float:
        return self.now

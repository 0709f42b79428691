import os

# Must be set before the first QApplication is created
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from startgrid.config import GridSettings
from startgrid.engine import GridEngine
from startgrid.models.item import Folder
from tests.helpers import FakeClock, leaf


@pytest.fixture
def fast_settings():
    """Short debounce delays so timer tests finish quickly."""
    return GridSettings(merge_delay_ms=60, drag_out_delay_ms=40, page_cooldown_ms=60)


@pytest.fixture
def sample_items():
    """Root: a, b, f(f1, f2), c"""
    return [
        leaf("a"),
        leaf("b"),
        Folder(id="f", title="Tools", children=[leaf("f1"), leaf("f2")]),
        leaf("c"),
    ]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def engine(qapp, fast_settings, sample_items, clock):
    eng = GridEngine(sample_items, settings=fast_settings, viewport_width=1280, clock=clock)
    yield eng
    eng.shutdown()

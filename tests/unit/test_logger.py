"""
------------------------------------------------------------------------------
Project:        StartGrid
File:           tests/unit/test_logger.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Unit tests for the centralized logging system.
------------------------------------------------------------------------------
"""

import logging

from startgrid.drag_state import DragPhase, DragState, Effect
from startgrid.logger import get_logger, log_drag_transition, set_component_level, setup_logging


def _flush():
    for handler in logging.getLogger("startgrid").handlers:
        handler.flush()


def test_logger_namespace():
    """Verify that get_logger returns a child of the startgrid root."""
    logger = get_logger("engine")
    assert logger.name == "startgrid.engine"
    assert get_logger("startgrid.paging").name == "startgrid.paging"


def test_logging_to_file(tmp_path):
    log_file = tmp_path / "app.log"
    setup_logging(level="DEBUG", log_file=str(log_file))

    get_logger("test").debug("Logging to file test message")
    _flush()

    assert "Logging to file test message" in log_file.read_text()


def test_component_level_overrides(tmp_path):
    """Specific components can be more verbose than the global level."""
    log_file = tmp_path / "component.log"
    setup_logging(level="INFO", component_levels={"drag": "DEBUG"}, log_file=str(log_file))

    get_logger("drag").debug("DRAG DEBUG MESSAGE")
    get_logger("folders").debug("FOLDERS DEBUG MESSAGE")
    _flush()

    content = log_file.read_text()
    assert "DRAG DEBUG MESSAGE" in content
    assert "FOLDERS DEBUG MESSAGE" not in content
    set_component_level("drag", "NOTSET")


def test_drag_transition_trace(tmp_path):
    log_file = tmp_path / "trace.log"
    setup_logging(level="WARNING", log_file=str(log_file), component_levels={"drag.trace": "DEBUG"})

    old = DragState(phase=DragPhase.DRAGGING, active_id="a", session=1)
    new = DragState(phase=DragPhase.ARMED, active_id="a", over_id="b", session=1)
    log_drag_transition(old, new, (Effect.START_MERGE_TIMER,))
    _flush()

    content = log_file.read_text()
    assert "dragging(active=a, over=None, session=1) -> armed(active=a, over=b, session=1)" in content
    assert "EFFECTS: START_MERGE_TIMER" in content
    set_component_level("drag.trace", "NOTSET")


def test_quiet_default_mode(tmp_path):
    """Verify that the system is quiet at Default level."""
    log_file = tmp_path / "quiet.log"
    setup_logging(level="WARNING", log_file=str(log_file))

    get_logger("engine").info("THIS SHOULD NOT APPEAR")
    _flush()

    assert "THIS SHOULD NOT APPEAR" not in log_file.read_text()


def test_setup_again_replaces_handlers(tmp_path):
    """A second setup (profile switch) must not duplicate output."""
    setup_logging(level="INFO", log_file=str(tmp_path / "first.log"))
    second = tmp_path / "second.log"
    setup_logging(level="INFO", log_file=str(second))

    root = logging.getLogger("startgrid")
    assert len(root.handlers) == 2

    get_logger("paging").info("PAGE FLIP")
    _flush()
    assert second.read_text().count("PAGE FLIP") == 1
    assert "PAGE FLIP" not in (tmp_path / "first.log").read_text()


def test_unknown_component_level_is_ignored():
    set_component_level("gui", "DEBUG")
    set_component_level("gui", "CHATTY")
    assert get_logger("gui").level == logging.DEBUG
    set_component_level("gui", "NOTSET")

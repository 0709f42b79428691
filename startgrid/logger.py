"""
------------------------------------------------------------------------------
Project:        StartGrid
File:           startgrid/logger.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Logging setup for the grid. Every module logs below the
                'startgrid' logger (engine, drag, folders, paging, gui) so
                one component can be turned up without flooding the rest.
                Drag state changes go to their own 'drag.trace' channel.
------------------------------------------------------------------------------
"""

import logging
import sys
from pathlib import Path
from typing import Dict, Iterable, Optional

APP_LOGGER_NAME = "startgrid"

# Level shortened to four letters to keep drag traces aligned
DEFAULT_FORMAT = "%(asctime)s [%(levelname).4s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

def setup_logging(
    level: str = "WARNING",
    log_file: Optional[str] = None,
    component_levels: Optional[Dict[str, str]] = None
) -> None:
    """
    (Re)configures the 'startgrid' logger from the [Logging] settings.

    Args:
        level: Base level for all grid components.
        log_file: Optional file that receives the same records as stdout.
        component_levels: Per-component overrides, e.g. {'drag': 'DEBUG'}
            while chasing a merge timing problem.
    """
    root = logging.getLogger(APP_LOGGER_NAME)

    # Safe to call again after a profile switch
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()

    numeric_level = getattr(logging, level.upper(), logging.WARNING)
    root.setLevel(numeric_level)

    formatter = logging.Formatter(DEFAULT_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(log_path), encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    for component, cmp_level in (component_levels or {}).items():
        set_component_level(component, cmp_level)

def get_logger(name: str) -> logging.Logger:
    """
    Component logger, e.g. get_logger("paging") -> 'startgrid.paging'.
    Already qualified names are returned unchanged.
    """
    if name.startswith(APP_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{APP_LOGGER_NAME}.{name}")

def set_component_level(component: str, level: str) -> None:
    """Overrides the level of one grid component. Unknown level names are ignored."""
    logger = get_logger(component)
    numeric_level = getattr(logging, level.upper(), None)
    if numeric_level is not None:
        logger.setLevel(numeric_level)
        logger.propagate = True

def log_drag_transition(old_state: object, new_state: object, effects: Iterable[object] = ()) -> None:
    """
    One line per drag phase change with the timer effects it scheduled,
    e.g. 'dragging(active=a, ...) -> armed(...) | EFFECTS: START_MERGE_TIMER'.
    Only emitted when 'startgrid.drag.trace' is at DEBUG.
    """
    logger = get_logger("drag.trace")
    if logger.isEnabledFor(logging.DEBUG):
        msg = f"{old_state} -> {new_state}"
        names = [getattr(e, "name", str(e)) for e in effects]
        if names:
            msg += f" | EFFECTS: {', '.join(names)}"
        logger.debug(msg)

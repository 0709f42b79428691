"""
------------------------------------------------------------------------------
Project:        StartGrid
File:           main.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Application entry point. Initializes the Qt environment,
                configuration and logging, loads the shortcut list and
                launches the grid view on top of the GridEngine.
------------------------------------------------------------------------------
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from PyQt6.QtCore import QCoreApplication
from PyQt6.QtWidgets import QApplication
from pydantic import ValidationError

from gui.grid_view import GridView
from startgrid.config import AppConfig
from startgrid.engine import GridEngine
from startgrid.logger import get_logger, setup_logging
from startgrid.models.item import GridIntegrityError, Shortcut, parse_items

SAMPLE_SITES = [
    ("GitHub", "https://github.com"),
    ("Python", "https://www.python.org"),
    ("PyPI", "https://pypi.org"),
    ("Qt", "https://www.qt.io"),
    ("Wikipedia", "https://www.wikipedia.org"),
    ("Mozilla", "https://developer.mozilla.org"),
    ("Stack Overflow", "https://stackoverflow.com"),
    ("Hacker News", "https://news.ycombinator.com"),
    ("Read the Docs", "https://readthedocs.org"),
    ("Arch Wiki", "https://wiki.archlinux.org"),
    ("KDE", "https://kde.org"),
    ("GNOME", "https://www.gnome.org"),
    ("Debian", "https://www.debian.org"),
    ("Fedora", "https://fedoraproject.org"),
    ("OpenStreetMap", "https://www.openstreetmap.org"),
    ("Codeberg", "https://codeberg.org"),
    ("Matrix", "https://matrix.org"),
    ("LWN", "https://lwn.net"),
]


def sample_items() -> List[Shortcut]:
    return [Shortcut(id=f"s{index}", title=title, url=url) for index, (title, url) in enumerate(SAMPLE_SITES)]


def load_items(path: Optional[Path]) -> list:
    """
    Loads shortcuts from a JSON list. Falls back to the sample set if the
    file is missing or malformed.
    """
    logger = get_logger("core")
    if path is None or not path.exists():
        return sample_items()
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        return parse_items(raw)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        logger.error(f"Failed to load shortcuts from {path}: {e}")
        return sample_items()


def main() -> None:
    """
    StartGrid Entry Point.
    Initializes infrastructure and launches the GUI.
    """
    parser = argparse.ArgumentParser(description="StartGrid - Start page shortcut grid")
    parser.add_argument("-P", "--profile", type=str, help="Application profile for isolation (e.g. 'dev', 'test')")
    parser.add_argument("-i", "--items", type=Path, help="JSON file with the shortcut list")
    args, unknown = parser.parse_known_args()

    app = QApplication(sys.argv)

    app_id = "startgrid"
    if args.profile:
        app_id = f"startgrid-{args.profile}"
    QCoreApplication.setApplicationName(app_id)

    app_config = AppConfig(profile=args.profile)

    setup_logging(
        level=app_config.get_log_level(),
        log_file=str(app_config.get_log_file_path()),
        component_levels=app_config.get_log_components()
    )
    logger = get_logger("core")
    logger.info(f"StartGrid started (Profile: {args.profile or 'default'})")

    items_path = args.items or app_config.get_items_file_path()
    engine = GridEngine(settings=app_config.get_grid_settings())
    try:
        engine.set_items(load_items(items_path))
    except GridIntegrityError as e:
        logger.error(f"Rejected shortcut list {items_path}: {e}")
        engine.set_items(sample_items())

    view = GridView(engine)
    view.setWindowTitle("StartGrid" if not args.profile else f"StartGrid [PROFILE: {args.profile.upper()}]")
    view.resize(1100, 640)
    view.show()

    app.aboutToQuit.connect(engine.shutdown)
    sys.exit(app.exec())


if __name__ == "__main__":
    main()

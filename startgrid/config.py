"""
------------------------------------------------------------------------------
Project:        StartGrid
File:           startgrid/config.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Manages application configuration using QSettings. Holds the
                grid dimensions, drag debounce delays and paging thresholds,
                and standardizes config/data paths (XDG standards on Linux).
------------------------------------------------------------------------------
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from PyQt6.QtCore import QSettings, QStandardPaths


@dataclass(frozen=True)
class GridSettings:
    """Tunables consumed by the grid engine."""
    columns: int = 5
    rows: int = 3
    icon_size: int = 96
    left_offset: int = 0
    merge_delay_ms: int = 600
    drag_out_delay_ms: int = 400
    page_cooldown_ms: int = 600
    wheel_threshold: float = 50.0
    wheel_gesture_gap_ms: int = 200


class AppConfig:
    """
    Manages application configuration using QSettings.
    Singleton-like usage via class methods or single instance.
    """

    # Keys (Simple names now, groups handled in methods)
    KEY_COLUMNS: str = "columns"
    KEY_ROWS: str = "rows"
    KEY_ICON_SIZE: str = "icon_size"
    KEY_LEFT_OFFSET: str = "left_offset"
    KEY_MERGE_DELAY: str = "merge_delay_ms"
    KEY_DRAG_OUT_DELAY: str = "drag_out_delay_ms"
    KEY_PAGE_COOLDOWN: str = "page_cooldown_ms"
    KEY_WHEEL_THRESHOLD: str = "wheel_threshold"
    KEY_WHEEL_GESTURE_GAP: str = "wheel_gesture_gap_ms"
    KEY_LOG_LEVEL: str = "log_level"
    KEY_LOG_COMPONENTS: str = "log_components"

    # Defaults
    DEFAULTS: GridSettings = GridSettings()

    APP_ID: str = "startgrid"
    _active_profile: Optional[str] = None

    def __init__(self, profile: Optional[str] = None) -> None:
        """
        Initializes the configuration manager.

        Args:
            profile: Optional profile name (e.g. 'dev', 'test').
                    If provided, all paths and settings will be isolated (e.g. startgrid-dev).
        """
        # If no profile provided, use the last active one (Global Singleton-like)
        if profile is None:
            profile = AppConfig._active_profile
        else:
            AppConfig._active_profile = profile

        self.profile = profile
        self.active_id = self.APP_ID
        if profile:
            self.active_id = f"{self.APP_ID}-{profile}"

        self.settings = QSettings(self.active_id, self.active_id)

    def get_config_dir(self) -> Path:
        """
        Returns the path to the application configuration directory.
        Forces a flat structure: ~/.config/startgrid[-profile]/
        """
        base_path = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.ConfigLocation)
        config_dir = Path(base_path) / self.active_id
        config_dir.mkdir(parents=True, exist_ok=True)
        return config_dir

    def get_data_dir(self) -> Path:
        """
        Returns the path to the application data directory.
        Forces a flat structure: ~/.local/share/startgrid[-profile]/
        """
        base_path = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.GenericDataLocation)
        data_dir = Path(base_path) / self.active_id
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def _get_setting(self, group: str, key: str, default: Any = None) -> Any:
        """
        Helper to retrieve a setting value from a specific group.

        Args:
            group: The configuration group name.
            key: The setting key.
            default: The default value if not found.

        Returns:
            The retrieved value or default.
        """
        if group:
            self.settings.beginGroup(group)
        val = self.settings.value(key, default)
        if group:
            self.settings.endGroup()
        return val

    def _set_setting(self, group: str, key: str, value: Any) -> None:
        """
        Helper to save a setting value into a specific group.

        Args:
            group: The configuration group name.
            key: The setting key.
            value: The value to save.
        """
        if isinstance(value, str):
            value = value.strip()

        if group:
            self.settings.beginGroup(group)
        self.settings.setValue(key, value)
        if group:
            self.settings.endGroup()

    def _get_int(self, group: str, key: str, default: int, minimum: int = 0) -> int:
        try:
            val = int(self._get_setting(group, key, default))
        except (TypeError, ValueError):
            return default
        return max(minimum, val)

    def get_columns(self) -> int:
        """
        Retrieves the configured number of grid columns.

        Returns:
            The column count (at least 1).
        """
        return self._get_int("Grid", self.KEY_COLUMNS, self.DEFAULTS.columns, minimum=1)

    def set_columns(self, columns: int) -> None:
        """
        Saves the number of grid columns.

        Args:
            columns: The column count.
        """
        self._set_setting("Grid", self.KEY_COLUMNS, int(columns))

    def get_rows(self) -> int:
        """
        Retrieves the configured number of grid rows per page.

        Returns:
            The row count (at least 1).
        """
        return self._get_int("Grid", self.KEY_ROWS, self.DEFAULTS.rows, minimum=1)

    def set_rows(self, rows: int) -> None:
        """
        Saves the number of grid rows per page.

        Args:
            rows: The row count.
        """
        self._set_setting("Grid", self.KEY_ROWS, int(rows))

    def get_icon_size(self) -> int:
        """Retrieves the icon edge length in pixels."""
        return self._get_int("Grid", self.KEY_ICON_SIZE, self.DEFAULTS.icon_size, minimum=16)

    def set_icon_size(self, size: int) -> None:
        """Saves the icon edge length in pixels."""
        self._set_setting("Grid", self.KEY_ICON_SIZE, int(size))

    def get_left_offset(self) -> int:
        """Retrieves the width reserved on the left (e.g. a side panel)."""
        return self._get_int("Grid", self.KEY_LEFT_OFFSET, self.DEFAULTS.left_offset)

    def set_left_offset(self, offset: int) -> None:
        """Saves the width reserved on the left."""
        self._set_setting("Grid", self.KEY_LEFT_OFFSET, int(offset))

    def get_merge_delay(self) -> int:
        """Retrieves how long an overlap must stay stable before a merge is offered (ms)."""
        return self._get_int("Drag", self.KEY_MERGE_DELAY, self.DEFAULTS.merge_delay_ms)

    def set_merge_delay(self, delay_ms: int) -> None:
        """Saves the merge delay (ms)."""
        self._set_setting("Drag", self.KEY_MERGE_DELAY, int(delay_ms))

    def get_drag_out_delay(self) -> int:
        """Retrieves how long an item must hover outside an open folder to leave it (ms)."""
        return self._get_int("Drag", self.KEY_DRAG_OUT_DELAY, self.DEFAULTS.drag_out_delay_ms)

    def set_drag_out_delay(self, delay_ms: int) -> None:
        """Saves the drag-out delay (ms)."""
        self._set_setting("Drag", self.KEY_DRAG_OUT_DELAY, int(delay_ms))

    def get_page_cooldown(self) -> int:
        """Retrieves the pause after a page change during which wheel input is ignored (ms)."""
        return self._get_int("Paging", self.KEY_PAGE_COOLDOWN, self.DEFAULTS.page_cooldown_ms)

    def set_page_cooldown(self, cooldown_ms: int) -> None:
        """Saves the page change cooldown (ms)."""
        self._set_setting("Paging", self.KEY_PAGE_COOLDOWN, int(cooldown_ms))

    def get_wheel_threshold(self) -> float:
        """Retrieves the accumulated wheel delta needed for one page step."""
        try:
            val = float(self._get_setting("Paging", self.KEY_WHEEL_THRESHOLD, self.DEFAULTS.wheel_threshold))
        except (TypeError, ValueError):
            return self.DEFAULTS.wheel_threshold
        return val if val > 0 else self.DEFAULTS.wheel_threshold

    def set_wheel_threshold(self, threshold: float) -> None:
        """Saves the wheel threshold."""
        self._set_setting("Paging", self.KEY_WHEEL_THRESHOLD, float(threshold))

    def get_wheel_gesture_gap(self) -> int:
        """Retrieves the idle gap that starts a new wheel gesture (ms)."""
        return self._get_int("Paging", self.KEY_WHEEL_GESTURE_GAP, self.DEFAULTS.wheel_gesture_gap_ms)

    def set_wheel_gesture_gap(self, gap_ms: int) -> None:
        """Saves the wheel gesture gap (ms)."""
        self._set_setting("Paging", self.KEY_WHEEL_GESTURE_GAP, int(gap_ms))

    def get_grid_settings(self) -> GridSettings:
        """
        Bundles all engine tunables into one immutable object.

        Returns:
            The current GridSettings.
        """
        return GridSettings(
            columns=self.get_columns(),
            rows=self.get_rows(),
            icon_size=self.get_icon_size(),
            left_offset=self.get_left_offset(),
            merge_delay_ms=self.get_merge_delay(),
            drag_out_delay_ms=self.get_drag_out_delay(),
            page_cooldown_ms=self.get_page_cooldown(),
            wheel_threshold=self.get_wheel_threshold(),
            wheel_gesture_gap_ms=self.get_wheel_gesture_gap(),
        )

    def get_log_level(self) -> str:
        """Retrieves the global log level."""
        return str(self._get_setting("Logging", self.KEY_LOG_LEVEL, "WARNING"))

    def set_log_level(self, level: str) -> None:
        """Saves the global log level."""
        self._set_setting("Logging", self.KEY_LOG_LEVEL, level.upper())

    def get_log_components(self) -> Dict[str, str]:
        """Retrieves a dictionary of component-specific log levels."""
        raw = str(self._get_setting("Logging", self.KEY_LOG_COMPONENTS, "{}"))
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            return {}
        return data if isinstance(data, dict) else {}

    def set_log_components(self, components: Dict[str, str]) -> None:
        """Saves a dictionary of component-specific log levels."""
        self._set_setting("Logging", self.KEY_LOG_COMPONENTS, json.dumps(components))

    def get_log_file_path(self) -> Path:
        """Returns the absolute path to the log file."""
        return self.get_data_dir() / "app.log"

    def get_items_file_path(self) -> Path:
        """Returns the path of the JSON file the demo loads its shortcuts from."""
        return self.get_data_dir() / "shortcuts.json"

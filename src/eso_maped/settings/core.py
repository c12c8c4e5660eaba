"""
Core settings management for ESO-maped.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from PySide6.QtCore import QSettings

from ..markers.colour import Colour
from ..markers.icons import MarkerIcon
from .types import ConfigError, ConfigVersion, ValidationResult
from .migration import SettingsMigrator
from .validation import SettingsValidator
from .paths import PathSettings
from .editor import EditorSettings
from .logging import LoggingSettings

logger = logging.getLogger(__name__)


class AppSettings:
    """
    Configuration management using QSettings.

    Provides type-safe access to application settings with automatic
    cross-platform storage and validation.
    """

    def __init__(self, profile: str = "default", settings_file: Optional[Path] = None):
        """Initialize settings with organization, application name, and profile.

        Args:
            profile: Settings profile name (default: "default")
            settings_file: Explicit INI file instead of the platform store
        """
        if settings_file is not None:
            self.settings = QSettings(str(settings_file), QSettings.Format.IniFormat)
        else:
            self.settings = QSettings("eso-maped", "eso_maped")
        self.profile = profile

        if self.settings.status() != QSettings.Status.NoError:
            raise ConfigError(
                f"Cannot access settings at {self.settings.fileName()}: {self.settings.status()}"
            )

        # Profile as a group: eso-maped/eso_maped/default/...
        self.settings.beginGroup(profile)

        self._migrator = SettingsMigrator(self.settings)
        self._validator = SettingsValidator(self)
        self._paths = PathSettings(self.settings)
        self._editor = EditorSettings(self.settings)
        self._logging = LoggingSettings(self.settings)

        self._migrator.ensure_version()

        logger.debug(
            f"Settings initialized for profile '{profile}', stored at: {self.settings.fileName()}"
        )

    # === SUBSYSTEM ACCESS ===

    @property
    def paths(self) -> PathSettings:
        """Access path settings subsystem."""
        return self._paths

    @property
    def editor(self) -> EditorSettings:
        """Access editor settings subsystem."""
        return self._editor

    @property
    def logging(self) -> LoggingSettings:
        """Access logging settings subsystem."""
        return self._logging

    # === VERSION AND FIRST RUN ===

    @property
    def is_first_run(self) -> bool:
        """Check if this is the first run of the application."""
        return self._get_bool("app/first_run", True)

    def set_first_run_complete(self) -> None:
        """Mark first run as complete."""
        self.settings.setValue("app/first_run", False)
        self.settings.sync()

    @property
    def version(self) -> str:
        """Get configuration version."""
        return self._get_str("app/version", ConfigVersion.CURRENT.value)

    # === HELPER METHODS ===

    def _get_str(self, key: str, default: str = "") -> str:
        """Type-safe string retrieval from settings."""
        value = self.settings.value(key, default)
        return str(value) if value is not None else default

    def _get_bool(self, key: str, default: bool = False) -> bool:
        """Type-safe boolean retrieval from settings."""
        value = self.settings.value(key, default)
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in ("true", "1", "yes")
        return bool(value) if value is not None else default

    # === PATH SETTINGS (DELEGATED) ===

    @property
    def catalog_path(self) -> Optional[Path]:
        """Get the zone catalog override file."""
        return self._paths.catalog_path

    @catalog_path.setter
    def catalog_path(self, value: Optional[Path]) -> None:
        """Set the zone catalog override file."""
        self._paths.catalog_path = value

    @property
    def recent_files(self) -> List[str]:
        """Get list of recently opened marker files."""
        return self._paths.recent_files

    def add_recent_file(self, file_path: Union[str, Path]) -> None:
        """Add file to recent files list (max 10 items)."""
        self._paths.add_recent_file(file_path)

    # === EDITOR SETTINGS (DELEGATED) ===

    @property
    def remap_on_move(self) -> bool:
        """Whether position edits re-resolve the map."""
        return self._editor.remap_on_move

    @remap_on_move.setter
    def remap_on_move(self, value: bool) -> None:
        self._editor.remap_on_move = value

    @property
    def placement_icon(self) -> MarkerIcon:
        """Icon of markers placed directly on the map."""
        return self._editor.placement_icon

    @placement_icon.setter
    def placement_icon(self, value: MarkerIcon) -> None:
        self._editor.placement_icon = value

    @property
    def line_colour(self) -> Colour:
        """Default colour of new breadcrumb lines."""
        return self._editor.line_colour

    @line_colour.setter
    def line_colour(self, value: Colour) -> None:
        self._editor.line_colour = value

    # === LOGGING SETTINGS (DELEGATED) ===

    @property
    def console_logging(self) -> bool:
        """Check if console logging is enabled."""
        return self._logging.console_logging

    @console_logging.setter
    def console_logging(self, value: bool) -> None:
        """Set console logging enabled state."""
        self._logging.console_logging = value

    @property
    def console_log_level(self) -> str:
        """Get console logging level."""
        return self._logging.console_log_level

    @console_log_level.setter
    def console_log_level(self, value: str) -> None:
        """Set console logging level."""
        self._logging.console_log_level = value

    @property
    def console_use_colors(self) -> bool:
        """Check if console should use colors."""
        return self._logging.console_use_colors

    @console_use_colors.setter
    def console_use_colors(self, value: bool) -> None:
        """Set console color usage."""
        self._logging.console_use_colors = value

    @property
    def file_logging(self) -> bool:
        """Check if file logging is enabled."""
        return self._logging.file_logging

    @file_logging.setter
    def file_logging(self, value: bool) -> None:
        """Set file logging enabled state."""
        self._logging.file_logging = value

    @property
    def log_file_path(self) -> str:
        """Get log file path (read-only)."""
        return self._logging.log_file_path

    @property
    def log_file_absolute_path(self) -> Path:
        """Get absolute path to log file."""
        return self._logging.log_file_absolute_path

    # === VALIDATION ===

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        return self._validator.validate()

    # === UTILITY METHODS ===

    def get_settings_file_path(self) -> str:
        """Get the file path where settings are stored."""
        return self.settings.fileName()

    def sync(self) -> None:
        """Force synchronization of settings to storage."""
        self.settings.sync()

"""
Settings migration system for ESO-maped.
"""

import logging
from typing import TYPE_CHECKING

from .types import ConfigVersion

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)


class SettingsMigrator:
    """Handles configuration migration between versions."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def ensure_version(self) -> None:
        """Ensure configuration version is set and handle migrations."""
        current_version = str(self.settings.value("app/version", ""))

        if not current_version:
            self.settings.setValue("app/version", ConfigVersion.CURRENT.value)
            self.settings.setValue("app/first_run", True)
            self.settings.sync()
            logger.info("First run detected, initializing configuration")
        elif current_version != ConfigVersion.CURRENT.value:
            self._migrate_config(current_version, ConfigVersion.CURRENT.value)

    def _migrate_config(self, from_version: str, to_version: str) -> None:
        """Migrate configuration from old version to new version."""
        logger.info(f"Migrating configuration from {from_version} to {to_version}")

        if from_version == ConfigVersion.V1_0.value and to_version == ConfigVersion.V1_1.value:
            self._migrate_1_0_to_1_1()

        self.settings.setValue("app/version", to_version)
        self.settings.setValue("app/migrated_from", from_version)
        self.settings.sync()
        logger.info(f"Migration from {from_version} to {to_version} completed")

    def _migrate_1_0_to_1_1(self) -> None:
        """Migrate from version 1.0 to 1.1 - catalog path moved under paths/."""
        logger.debug("Performing migration from 1.0 to 1.1")

        old_catalog = str(self.settings.value("catalog/path", "") or "")
        if old_catalog:
            self.settings.setValue("paths/catalog", old_catalog)
            logger.info(f"Migrated zone catalog path: {old_catalog}")
            self.settings.remove("catalog/path")

        # 1.0 stored the placement icon as its numeric code
        old_icon = self.settings.value("editor/placement_icon_code", None)
        if old_icon is not None:
            from ..markers.icons import MarkerIcon

            try:
                icon = MarkerIcon.from_code(int(str(old_icon)))
            except ValueError:
                logger.warning(f"Dropped invalid placement icon code: {old_icon}")
            else:
                if icon is not MarkerIcon.UNKNOWN:
                    self.settings.setValue("editor/placement_icon", icon.path)
            self.settings.remove("editor/placement_icon_code")

        self.settings.sync()

"""
Settings validation system for ESO-maped.
"""

import logging
from pathlib import Path
from typing import List, TYPE_CHECKING

from .types import ValidationResult

if TYPE_CHECKING:
    from .core import AppSettings

logger = logging.getLogger(__name__)


class SettingsValidator:
    """Validates configuration settings."""

    def __init__(self, settings: "AppSettings"):
        self.settings = settings

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        errors: List[str] = []
        warnings: List[str] = []

        # Catalog override is optional; the built-in catalog is used otherwise
        catalog_path = self.settings.catalog_path
        if catalog_path:
            if not catalog_path.exists():
                errors.append(f"Zone catalog does not exist: {catalog_path}")
            elif catalog_path.suffix.lower() != ".json":
                warnings.append(f"Zone catalog is not a .json file: {catalog_path}")

        recent_files = self.settings.recent_files
        valid_recent: List[str] = []
        for file_path in recent_files:
            if Path(file_path).exists():
                valid_recent.append(file_path)
            else:
                warnings.append(f"Recent file no longer exists: {file_path}")

        if len(valid_recent) != len(recent_files):
            self.settings.settings.setValue("paths/recent_files", valid_recent)
            self.settings.settings.sync()

        for error in errors:
            logger.error(error)

        return ValidationResult(
            is_valid=len(errors) == 0, errors=errors, warnings=warnings
        )

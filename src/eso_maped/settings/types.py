"""
Settings version stamps, errors and validation results for ESO-maped.
"""

from dataclasses import dataclass, field
from enum import Enum


class ConfigVersion(Enum):
    """Value stored under `app/version`, used to pick migrations.

    1.0 kept the catalog override under `catalog/path` and the placement icon
    as a numeric marker code (`editor/placement_icon_code`). 1.1 moved the
    override to `paths/catalog` and stores the placement icon as its asset
    path (`editor/placement_icon`).
    """
    V1_0 = "1.0"
    V1_1 = "1.1"
    CURRENT = V1_1


class ConfigError(Exception):
    """Raised when the settings store cannot be opened."""
    pass


@dataclass
class ValidationResult:
    """Outcome of `SettingsValidator.validate`.

    Errors make the settings unusable as configured (a catalog override that
    does not exist). Warnings were corrected or can be ignored.
    """
    is_valid: bool
    errors: list[str] = field(default_factory=lambda: [])  # type: ignore[assignment]
    warnings: list[str] = field(default_factory=lambda: [])  # type: ignore[assignment]

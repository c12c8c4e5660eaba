"""
Settings package for ESO-maped.

This package provides a modular, type-safe configuration management system
using Qt's QSettings for cross-platform storage.

Usage:
    from eso_maped.settings import AppSettings, ValidationResult

    settings = AppSettings()
    result = settings.validate()
"""

from .core import AppSettings
from .types import ConfigVersion, ConfigError, ValidationResult
from .editor import EditorSettings
from .paths import PathSettings
from .logging import LoggingSettings

__all__ = [
    "AppSettings",
    "ConfigVersion",
    "ConfigError",
    "ValidationResult",
    "EditorSettings",
    "PathSettings",
    "LoggingSettings",
]

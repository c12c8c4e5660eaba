"""
Utility modules for ESO-maped.
"""

from .logging_config import setup_logging, ColoredFormatter, CSVFormatter

__all__ = ["setup_logging", "ColoredFormatter", "CSVFormatter"]

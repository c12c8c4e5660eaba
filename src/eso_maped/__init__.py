"""
ESO-maped: marker string editor core for ESO raid maps

Parses, edits and rebuilds the three community marker string formats
(simple icon markers, rich markers and breadcrumb lines) against a static
zone/map catalog.
"""

__version__ = "0.1.0"
__author__ = "ESO-maped Contributors"

from .catalog import Catalog, load_builtin_catalog, load_catalog, find_best_map
from .markers import (
    MarkerCollection,
    MarkerDocument,
    parse_marker_text,
    build_marker_text,
)
from .utils.logging_config import setup_logging

__all__ = [
    # Catalog
    "Catalog",
    "load_builtin_catalog",
    "load_catalog",
    "find_best_map",

    # Markers
    "MarkerCollection",
    "MarkerDocument",
    "parse_marker_text",
    "build_marker_text",

    # Logging
    "setup_logging",
]

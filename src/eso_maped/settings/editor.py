"""
Editor-related settings for ESO-maped.
"""

import logging
from typing import TYPE_CHECKING

from ..markers.colour import Colour, WHITE, colour_to_token, parse_colour_token
from ..markers.icons import MarkerIcon

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)


class EditorSettings:
    """Manages marker-editing behaviour."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

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

    @property
    def remap_on_move(self) -> bool:
        """Whether editing a marker's position re-resolves its map."""
        return self._get_bool("editor/remap_on_move", True)

    @remap_on_move.setter
    def remap_on_move(self, value: bool) -> None:
        """Set whether position edits re-resolve the map."""
        self.settings.setValue("editor/remap_on_move", value)
        self.settings.sync()

    @property
    def placement_icon(self) -> MarkerIcon:
        """Icon of markers placed directly on the map."""
        path = self._get_str("editor/placement_icon", MarkerIcon.MARKER_LIGHTBLUE.path)
        icon = MarkerIcon.from_path(path)
        if icon is MarkerIcon.UNKNOWN:
            return MarkerIcon.MARKER_LIGHTBLUE
        return icon

    @placement_icon.setter
    def placement_icon(self, value: MarkerIcon) -> None:
        """Set the icon of markers placed directly on the map."""
        if value is MarkerIcon.UNKNOWN:
            logger.warning(
                f"Cannot use {value} as placement icon, keeping current: {self.placement_icon}"
            )
            return
        self.settings.setValue("editor/placement_icon", value.path)
        self.settings.sync()

    @property
    def line_colour(self) -> Colour:
        """Default colour of newly drawn breadcrumb lines."""
        token = self._get_str("editor/line_colour", colour_to_token(WHITE))
        return parse_colour_token(token)

    @line_colour.setter
    def line_colour(self, value: Colour) -> None:
        """Set the default breadcrumb line colour."""
        self.settings.setValue("editor/line_colour", colour_to_token(value))
        self.settings.sync()

"""
Marker entities, the three marker-string codecs and the editing session.
"""

from .icons import (
    MarkerIcon,
    Texture,
    UnknownTexture,
    BackgroundTexture,
    texture_from_path,
    texture_to_path,
    texture_from_asset,
    texture_asset,
    texture_from_code,
    texture_code,
)
from .colour import (
    Colour,
    WHITE,
    hex_to_rgba,
    rgba_to_hex_string,
    parse_colour_token,
    colour_to_token,
    parse_colour_tuple,
)
from .models import (
    Position3D,
    SimpleMarker,
    RichMarker,
    BreadcrumbLine,
    Marker,
    Entity,
    semantic_key,
)
from .simple_codec import parse_simple_string, build_simple_string
from .line_codec import parse_lines_string, build_lines_string
from .rich_codec import escape_text, unescape_text, parse_rich_string, build_rich_string
from .aggregate import (
    MarkerCollection,
    assign_ids,
    parse_marker_text,
    build_marker_text,
    first_zone,
)
from .editing import MarkerDocument

__all__ = [
    "MarkerIcon",
    "Texture",
    "UnknownTexture",
    "BackgroundTexture",
    "texture_from_path",
    "texture_to_path",
    "texture_from_asset",
    "texture_asset",
    "texture_from_code",
    "texture_code",
    "Colour",
    "WHITE",
    "hex_to_rgba",
    "rgba_to_hex_string",
    "parse_colour_token",
    "colour_to_token",
    "parse_colour_tuple",
    "Position3D",
    "SimpleMarker",
    "RichMarker",
    "BreadcrumbLine",
    "Marker",
    "Entity",
    "semantic_key",
    "parse_simple_string",
    "build_simple_string",
    "parse_lines_string",
    "build_lines_string",
    "escape_text",
    "unescape_text",
    "parse_rich_string",
    "build_rich_string",
    "MarkerCollection",
    "assign_ids",
    "parse_marker_text",
    "build_marker_text",
    "first_zone",
    "MarkerDocument",
]

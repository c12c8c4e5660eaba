"""
Colour helpers shared by the line and rich-marker codecs.

Colours are (r, g, b, a) tuples of 0-255 ints. Marker strings write them as
hex: `RRGGBB` (opaque) or `RRGGBBAA`.
"""

import re
from typing import Optional

Colour = tuple[int, int, int, int]

WHITE: Colour = (255, 255, 255, 255)

_HEX_RE = re.compile(r"^[0-9A-Fa-f]+$")


def hex_to_rgba(value: int) -> Colour:
    """Split a packed 0xRRGGBB integer into an opaque colour.

    Values above 0xFFFFFF are treated as 0xRRGGBBAA.
    """
    if value > 0xFFFFFF:
        return (
            (value >> 24) & 0xFF,
            (value >> 16) & 0xFF,
            (value >> 8) & 0xFF,
            value & 0xFF,
        )
    return ((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF, 255)


def rgba_to_hex_string(colour: Colour) -> str:
    """Format a colour for a colour picker: `#rrggbb`, alpha dropped."""
    r, g, b, _a = colour
    return f"#{r:02x}{g:02x}{b:02x}"


def parse_colour_token(token: str) -> Colour:
    """Parse a hex colour token from a marker string.

    Up to six digits are read as RRGGBB with full alpha, longer tokens as
    RRGGBBAA. Malformed tokens read as 0, i.e. opaque black.
    """
    token = token.strip()
    if not _HEX_RE.match(token):
        return (0, 0, 0, 255)
    value = int(token, 16)
    if len(token) <= 6:
        return ((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF, 255)
    value &= 0xFFFFFFFF
    return (
        (value >> 24) & 0xFF,
        (value >> 16) & 0xFF,
        (value >> 8) & 0xFF,
        value & 0xFF,
    )


def colour_to_token(colour: Colour, always_alpha: bool = False) -> str:
    """Format a colour as an uppercase hex token.

    Opaque colours drop the alpha byte unless `always_alpha` is set.
    """
    r, g, b, a = colour
    if a == 255 and not always_alpha:
        return f"{r:02X}{g:02X}{b:02X}"
    return f"{r:02X}{g:02X}{b:02X}{a:02X}"


def parse_colour_tuple(text: str) -> Optional[Colour]:
    """Parse "(r, g, b, a)" as typed into an editor field.

    Components that are not 0-255 integers are skipped; fewer than four
    valid components gives None.
    """
    parts = text.strip().lstrip("(").rstrip(")").split(",")
    nums: list[int] = []
    for part in parts:
        part = part.strip()
        if part.isdigit() and int(part) <= 255:
            nums.append(int(part))
    if len(nums) < 4:
        return None
    return (nums[0], nums[1], nums[2], nums[3])

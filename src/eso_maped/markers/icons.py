"""
Icon vocabularies of the two marker kinds.

Simple markers use a closed set of 71 icons addressed by a small integer code.
Rich markers use textures addressed by an in-game texture path; custom paths
that are not in the known set are preserved verbatim as `UnknownTexture`.

All conversions here are total. Unknown codes and paths become the
`UNKNOWN` / `UnknownTexture` sentinels instead of raising, so malformed input
shows up as a placeholder in the editor rather than aborting a parse.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class MarkerIcon(Enum):
    """Icons of simple markers, in code order.

    The member value is the icon asset path. The numeric code used in marker
    strings is the 1-based position of the member in this enumeration.
    """

    # 1-12: numbers
    NUM_1 = "1.png"
    NUM_2 = "2.png"
    NUM_3 = "3.png"
    NUM_4 = "4.png"
    NUM_5 = "5.png"
    NUM_6 = "6.png"
    NUM_7 = "7.png"
    NUM_8 = "8.png"
    NUM_9 = "9.png"
    NUM_10 = "10.png"
    NUM_11 = "11.png"
    NUM_12 = "12.png"

    # 13-22: arrow and single squares
    ARROW = "arrow.png"
    MARKER_LIGHTBLUE = "squares/marker_lightblue.png"
    SQUARE_BLUE = "squares/square_blue.png"
    SQUARE_GREEN = "squares/square_green.png"
    SQUARE_ORANGE = "squares/square_orange.png"
    SQUARE_ORANGE_OT = "squares/square_orange_OT.png"
    SQUARE_PINK = "squares/square_pink.png"
    SQUARE_RED = "squares/square_red.png"
    SQUARE_RED_MT = "squares/square_red_MT.png"
    SQUARE_YELLOW = "squares/square_yellow.png"

    # 23-44: double squares
    SQUARETWO_BLUE = "squares/squaretwo_blue.png"
    SQUARETWO_BLUE_ONE = "squares/squaretwo_blue_one.png"
    SQUARETWO_BLUE_TWO = "squares/squaretwo_blue_two.png"
    SQUARETWO_BLUE_THREE = "squares/squaretwo_blue_three.png"
    SQUARETWO_BLUE_FOUR = "squares/squaretwo_blue_four.png"
    SQUARETWO_GREEN = "squares/squaretwo_green.png"
    SQUARETWO_GREEN_ONE = "squares/squaretwo_green_one.png"
    SQUARETWO_GREEN_TWO = "squares/squaretwo_green_two.png"
    SQUARETWO_GREEN_THREE = "squares/squaretwo_green_three.png"
    SQUARETWO_GREEN_FOUR = "squares/squaretwo_green_four.png"
    SQUARETWO_ORANGE = "squares/squaretwo_orange.png"
    SQUARETWO_ORANGE_ONE = "squares/squaretwo_orange_one.png"
    SQUARETWO_ORANGE_TWO = "squares/squaretwo_orange_two.png"
    SQUARETWO_ORANGE_THREE = "squares/squaretwo_orange_three.png"
    SQUARETWO_ORANGE_FOUR = "squares/squaretwo_orange_four.png"
    SQUARETWO_PINK = "squares/squaretwo_pink.png"
    SQUARETWO_RED = "squares/squaretwo_red.png"
    SQUARETWO_RED_ONE = "squares/squaretwo_red_one.png"
    SQUARETWO_RED_TWO = "squares/squaretwo_red_two.png"
    SQUARETWO_RED_THREE = "squares/squaretwo_red_three.png"
    SQUARETWO_RED_FOUR = "squares/squaretwo_red_four.png"
    SQUARETWO_YELLOW = "squares/squaretwo_yellow.png"

    # 45-70: letters
    LETTER_A = "a.png"
    LETTER_B = "b.png"
    LETTER_C = "c.png"
    LETTER_D = "d.png"
    LETTER_E = "e.png"
    LETTER_F = "f.png"
    LETTER_G = "g.png"
    LETTER_H = "h.png"
    LETTER_I = "i.png"
    LETTER_J = "j.png"
    LETTER_K = "k.png"
    LETTER_L = "l.png"
    LETTER_M = "m.png"
    LETTER_N = "n.png"
    LETTER_O = "o.png"
    LETTER_P = "p.png"
    LETTER_Q = "q.png"
    LETTER_R = "r.png"
    LETTER_S = "s.png"
    LETTER_T = "t.png"
    LETTER_U = "u.png"
    LETTER_V = "v.png"
    LETTER_W = "w.png"
    LETTER_X = "x.png"
    LETTER_Y = "y.png"
    LETTER_Z = "z.png"

    # 71
    SHARKPOG = "sharkpog.png"

    # No code of its own; written as MARKER_LIGHTBLUE
    UNKNOWN = "unknown.png"

    @property
    def code(self) -> int:
        """Numeric code used in simple marker strings.

        `UNKNOWN` has no slot in the format and is written as 14
        (MARKER_LIGHTBLUE). This is lossy on purpose.
        """
        return _ICON_TO_CODE.get(self, UNKNOWN_ICON_CODE)

    @property
    def path(self) -> str:
        """Icon asset path."""
        return self.value

    @classmethod
    def from_code(cls, code: int) -> "MarkerIcon":
        """Get the icon for a numeric code; UNKNOWN for codes outside 1-71."""
        return _CODE_TO_ICON.get(code, cls.UNKNOWN)

    @classmethod
    def from_path(cls, path: str) -> "MarkerIcon":
        """Get the icon for an asset path; UNKNOWN for unrecognized paths."""
        try:
            return cls(path)
        except ValueError:
            return cls.UNKNOWN

    @classmethod
    def number(cls, n: int) -> "MarkerIcon":
        """Numbered icon 1-12, UNKNOWN otherwise."""
        return cls.from_code(n) if 1 <= n <= 12 else cls.UNKNOWN

    @classmethod
    def letter(cls, char: str) -> "MarkerIcon":
        """Letter icon a-z, UNKNOWN otherwise."""
        if len(char) == 1 and "a" <= char <= "z":
            return cls.from_code(LETTER_A_CODE + ord(char) - ord("a"))
        return cls.UNKNOWN


UNKNOWN_ICON_CODE = 14
LETTER_A_CODE = 45

_CODE_TO_ICON: dict[int, MarkerIcon] = {
    code: icon
    for code, icon in enumerate(list(MarkerIcon)[:-1], start=1)
}
_ICON_TO_CODE: dict[MarkerIcon, int] = {icon: code for code, icon in _CODE_TO_ICON.items()}

# Icons that can be written to a marker string, in code order
ICONS_BY_CODE: tuple[MarkerIcon, ...] = tuple(_CODE_TO_ICON.values())

# Icons in icon-picker order: numbers, arrow, light-blue marker, then each
# colour's single and double squares together
PICKER_ICONS: tuple[MarkerIcon, ...] = (
    *(MarkerIcon.number(n) for n in range(1, 13)),
    MarkerIcon.ARROW,
    MarkerIcon.MARKER_LIGHTBLUE,
    MarkerIcon.SQUARE_PINK,
    MarkerIcon.SQUARETWO_PINK,
    MarkerIcon.SQUARE_YELLOW,
    MarkerIcon.SQUARETWO_YELLOW,
    MarkerIcon.SQUARE_BLUE,
    MarkerIcon.SQUARETWO_BLUE,
    MarkerIcon.SQUARETWO_BLUE_ONE,
    MarkerIcon.SQUARETWO_BLUE_TWO,
    MarkerIcon.SQUARETWO_BLUE_THREE,
    MarkerIcon.SQUARETWO_BLUE_FOUR,
    MarkerIcon.SQUARE_GREEN,
    MarkerIcon.SQUARETWO_GREEN,
    MarkerIcon.SQUARETWO_GREEN_ONE,
    MarkerIcon.SQUARETWO_GREEN_TWO,
    MarkerIcon.SQUARETWO_GREEN_THREE,
    MarkerIcon.SQUARETWO_GREEN_FOUR,
    MarkerIcon.SQUARE_ORANGE_OT,
    MarkerIcon.SQUARE_ORANGE,
    MarkerIcon.SQUARETWO_ORANGE,
    MarkerIcon.SQUARETWO_ORANGE_ONE,
    MarkerIcon.SQUARETWO_ORANGE_TWO,
    MarkerIcon.SQUARETWO_ORANGE_THREE,
    MarkerIcon.SQUARETWO_ORANGE_FOUR,
    MarkerIcon.SQUARE_RED_MT,
    MarkerIcon.SQUARE_RED,
    MarkerIcon.SQUARETWO_RED,
    MarkerIcon.SQUARETWO_RED_ONE,
    MarkerIcon.SQUARETWO_RED_TWO,
    MarkerIcon.SQUARETWO_RED_THREE,
    MarkerIcon.SQUARETWO_RED_FOUR,
    *(MarkerIcon.letter(chr(c)) for c in range(ord("a"), ord("z") + 1)),
    MarkerIcon.SHARKPOG,
)



# =============================================================================
# Rich marker textures
# =============================================================================


class Texture(Enum):
    """Known rich-marker background textures.

    Each member carries a stable code, the in-game texture path written into
    marker strings, and the file name of the editor's preview asset.
    """

    CIRCLE = (1, "M0RMarkers/textures/circle.dds", "circle.png")
    HEXAGON = (2, "M0RMarkers/textures/hexagon.dds", "hexagon.png")
    SQUARE = (3, "M0RMarkers/textures/square.dds", "square.png")
    DIAMOND = (4, "M0RMarkers/textures/diamond.dds", "diamond.png")
    OCTAGON = (5, "M0RMarkers/textures/octagon.dds", "octagon.png")
    CHEVRON = (6, "M0RMarkers/textures/chevron.dds", "chevron.png")
    ARROW = (7, "M0RMarkers/textures/arrow.dds", "arrow.png")
    STAR = (8, "M0RMarkers/textures/star.dds", "star.png")
    CROSS = (9, "M0RMarkers/textures/cross.dds", "cross.png")
    SKULL = (10, "M0RMarkers/textures/skull.dds", "skull.png")
    SHARKPOG = (11, "M0RMarkers/textures/sharkpog.dds", "sharkpog.png")
    ROLE_TANK = (12, "esoui/art/lfg/gamepad/lfg_roleicon_tank.dds", "role_tank.png")
    ROLE_HEALER = (13, "esoui/art/lfg/gamepad/lfg_roleicon_healer.dds", "role_healer.png")
    ROLE_DPS = (14, "esoui/art/lfg/gamepad/lfg_roleicon_dps.dds", "role_dps.png")

    def __init__(self, code: int, game_path: str, asset: str):
        self.code = code
        self.game_path = game_path
        self.asset = asset


@dataclass(frozen=True)
class UnknownTexture:
    """Texture path outside the known set, kept verbatim for round-tripping."""

    path: str


BackgroundTexture = Union[Texture, UnknownTexture, None]
"""A rich marker's texture: known, custom (unknown), or none at all."""

UNKNOWN_TEXTURE_ASSET = "unknown.png"

# UnknownTexture has no code; written as CIRCLE
UNKNOWN_TEXTURE_CODE = Texture.CIRCLE.code

_PATH_TO_TEXTURE: dict[str, Texture] = {t.game_path.lower(): t for t in Texture}
_ASSET_TO_TEXTURE: dict[str, Texture] = {t.asset: t for t in Texture}
_CODE_TO_TEXTURE: dict[int, Texture] = {t.code: t for t in Texture}


def texture_from_path(path: str) -> BackgroundTexture:
    """Resolve an in-game texture path.

    Blank paths mean "no texture". Known paths are matched case-insensitively
    (game paths are case-insensitive); anything else is an UnknownTexture
    carrying the original string.
    """
    stripped = path.strip()
    if not stripped:
        return None
    texture = _PATH_TO_TEXTURE.get(stripped.lower())
    if texture is not None:
        return texture
    return UnknownTexture(path)


def texture_to_path(texture: BackgroundTexture) -> str:
    """In-game texture path of a texture; empty for no texture."""
    if texture is None:
        return ""
    if isinstance(texture, UnknownTexture):
        return texture.path
    return texture.game_path


def texture_from_asset(asset: str) -> BackgroundTexture:
    """Resolve a preview asset file name, as chosen in an icon picker."""
    if not asset:
        return None
    texture = _ASSET_TO_TEXTURE.get(asset)
    if texture is not None:
        return texture
    return UnknownTexture(asset)


def texture_asset(texture: BackgroundTexture) -> Optional[str]:
    """Preview asset of a texture; None when the marker has no texture."""
    if texture is None:
        return None
    if isinstance(texture, UnknownTexture):
        return UNKNOWN_TEXTURE_ASSET
    return texture.asset


def texture_from_code(code: int) -> BackgroundTexture:
    """Texture for a numeric code; an empty UnknownTexture for unknown codes."""
    return _CODE_TO_TEXTURE.get(code, UnknownTexture(""))


def texture_code(texture: BackgroundTexture) -> Optional[int]:
    """Numeric code of a texture; None for no texture.

    UnknownTexture is written as CIRCLE's code, the same lossy fallback the
    simple icons use.
    """
    if texture is None:
        return None
    if isinstance(texture, UnknownTexture):
        return UNKNOWN_TEXTURE_CODE
    return texture.code

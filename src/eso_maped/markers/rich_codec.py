"""
Rich marker string codec.

One bracketed record per zone:

    <zone]timestamp]minX:minY:minZ]sizes]pitches]yaws]colours]textures]positions>

`positions` is a `,`-separated list of `x:y:z:text` entries, one per marker,
with hex coordinates relative to the minimums. A marker's 1-based position in
that list is its ordinal. The five attribute fields are inverted indexes:
`;`-separated `value:ordinal,ordinal,...` groups. Most markers keep default
attributes, so only the exceptions need listing.

Delimiters inside free text are replaced by private-use codepoints
U+E000-U+E004 and newlines by a literal backslash-n. The format has no escape
for the backslash itself, so text that already holds a backslash followed by
`n` reads back as a newline.

Unlike the other two formats, a record with a broken envelope has no
recoverable shape: the whole call then returns nothing.
"""

import logging
import math
import re
import time
from typing import Iterable, Mapping, Optional, Sequence

from ..catalog.models import Catalog, Zone
from ..catalog.resolution import NO_MAP, find_best_map
from .colour import WHITE, Colour, colour_to_token, parse_colour_token
from .icons import BackgroundTexture, texture_from_path, texture_to_path
from .models import (
    PITCH_RANGE,
    YAW_RANGE,
    Marker,
    Position3D,
    RichMarker,
    clamp,
)

logger = logging.getLogger(__name__)

RICH_RECORD_RE = re.compile(r"<([^>]*)>")
RICH_FIELD_COUNT = 9

DEFAULT_SIZE = 1.0

_ESCAPES = {
    ":": "\ue000",
    ",": "\ue001",
    "]": "\ue002",
    ";": "\ue003",
    ">": "\ue004",
}
_ESCAPE_TABLE = str.maketrans(_ESCAPES)
_UNESCAPE_TABLE = str.maketrans({v: k for k, v in _ESCAPES.items()})
_NEWLINE_ESCAPE = "\\n"

_HEX_INT_RE = re.compile(r"^-?[0-9A-Fa-f]+$")
_DEC_INT_RE = re.compile(r"^-?[0-9]+$")
_ZONE_RE = re.compile(r"^[0-9]+$")


# =============================================================================
# Text escaping
# =============================================================================


def escape_text(text: str) -> str:
    """Make free text safe to embed in a rich marker record."""
    text = text.replace("\r\n", "\n").replace("\n", _NEWLINE_ESCAPE)
    return text.translate(_ESCAPE_TABLE)


def unescape_text(text: str) -> str:
    """Reverse `escape_text`."""
    return text.replace(_NEWLINE_ESCAPE, "\n").translate(_UNESCAPE_TABLE)


# =============================================================================
# Field helpers
# =============================================================================


def _hex(value: int) -> str:
    return format(value, "X")


def _parse_hex(token: str) -> int:
    token = token.strip()
    return int(token, 16) if _HEX_INT_RE.match(token) else 0


def _format_size(size: float) -> str:
    """Shortest exact decimal of a size, without a trailing ".0"."""
    text = repr(float(size))
    return text[:-2] if text.endswith(".0") else text


def _parse_groups(field: str) -> list[tuple[str, list[int]]]:
    """Split `value:i,i;value:i` into (raw value, ordinals) pairs."""
    groups: list[tuple[str, list[int]]] = []
    for entry in field.split(";"):
        value, sep, indices = entry.partition(":")
        if not sep:
            continue
        ordinals = [
            int(index, 16)
            for index in (i.strip() for i in indices.split(","))
            if _HEX_INT_RE.match(index) and not index.startswith("-")
        ]
        groups.append((value.strip(), ordinals))
    return groups


def _format_groups(pairs: Iterable[tuple[int, str]]) -> str:
    """Group (ordinal, value) pairs by value, in first-seen value order."""
    grouped: dict[str, list[int]] = {}
    for ordinal, value in pairs:
        grouped.setdefault(value, []).append(ordinal)
    return ";".join(
        f"{value}:{','.join(_hex(o) for o in ordinals)}"
        for value, ordinals in grouped.items()
    )


def _size_table(field: str) -> dict[int, float]:
    table: dict[int, float] = {}
    for value, ordinals in _parse_groups(field):
        try:
            size = float(value)
        except ValueError:
            logger.debug(f"Ignoring malformed size group value {value!r}")
            continue
        if not math.isfinite(size):
            continue
        for ordinal in ordinals:
            table[ordinal] = size
    return table


def _angle_table(field: str, bounds: tuple[int, int]) -> dict[int, int]:
    table: dict[int, int] = {}
    for value, ordinals in _parse_groups(field):
        if not _DEC_INT_RE.match(value):
            logger.debug(f"Ignoring malformed angle group value {value!r}")
            continue
        angle = clamp(int(value), bounds)
        for ordinal in ordinals:
            table[ordinal] = angle
    return table


def _colour_table(field: str) -> dict[int, Colour]:
    table: dict[int, Colour] = {}
    for value, ordinals in _parse_groups(field):
        colour = parse_colour_token(value)
        for ordinal in ordinals:
            table[ordinal] = colour
    return table


def _texture_table(field: str) -> dict[int, BackgroundTexture]:
    table: dict[int, BackgroundTexture] = {}
    for value, ordinals in _parse_groups(field):
        texture = texture_from_path(unescape_text(value))
        for ordinal in ordinals:
            table[ordinal] = texture
    return table


# =============================================================================
# Parsing
# =============================================================================


def _resolve_map(zone: Optional[Zone], position: Position3D) -> int:
    if zone is None:
        return NO_MAP
    map_info = find_best_map(position, zone)
    return map_info.map_id if map_info is not None else NO_MAP


def _parse_record(
    fields: list[str], catalog: Optional[Catalog]
) -> Optional[tuple[int, list[RichMarker]]]:
    """Parse the nine fields of one record; None if the zone field is unusable."""
    (
        zone_field,
        _timestamp,
        mins_field,
        sizes_field,
        pitches_field,
        yaws_field,
        colours_field,
        textures_field,
        positions_field,
    ) = fields

    zone_key = zone_field.strip()
    if not _ZONE_RE.match(zone_key) or int(zone_key) > 0xFFFF:
        logger.warning(f"Skipping rich marker record with invalid zone {zone_key!r}")
        return None
    zone = catalog.match_zone(zone_key) if catalog is not None else None
    zone_id = zone.id if zone is not None else int(zone_key)

    mins = mins_field.split(":")
    mins += [""] * (3 - len(mins))
    min_x, min_y, min_z = (_parse_hex(m) for m in mins[:3])

    sizes = _size_table(sizes_field)
    pitches = _angle_table(pitches_field, PITCH_RANGE)
    yaws = _angle_table(yaws_field, YAW_RANGE)
    colours = _colour_table(colours_field)
    textures = _texture_table(textures_field)

    markers: list[RichMarker] = []
    for ordinal, entry in enumerate(positions_field.split(","), start=1):
        if not entry.strip():
            continue
        parts = entry.split(":", 3)
        parts += [""] * (4 - len(parts))
        position = Position3D(
            min_x + _parse_hex(parts[0]),
            min_y + _parse_hex(parts[1]),
            min_z + _parse_hex(parts[2]),
        )
        text = unescape_text(parts[3])

        orientation = None
        if ordinal in pitches or ordinal in yaws:
            orientation = (pitches.get(ordinal, 0), yaws.get(ordinal, 0))

        markers.append(
            RichMarker(
                position=position,
                background_texture=textures.get(ordinal),
                text=text or None,
                size=sizes.get(ordinal, DEFAULT_SIZE),
                colour=colours.get(ordinal, WHITE),
                orientation=orientation,
                map_id=_resolve_map(zone, position),
            )
        )
    return zone_id, markers


def parse_rich_string(
    text: str, catalog: Optional[Catalog] = None
) -> dict[int, list[RichMarker]]:
    """Parse all rich marker records in `text`.

    A record with fewer than nine `]`-separated fields makes the whole call
    return an empty result. A record whose zone field is not a decimal zone
    id is skipped.

    Args:
        text: Marker string, possibly mixed with other formats
        catalog: Zone catalog; the zone is matched on its exact decimal id

    Returns:
        Rich markers per zone id, ids sequential per zone
    """
    result: dict[int, list[RichMarker]] = {}

    for match in RICH_RECORD_RE.finditer(text):
        fields = match.group(1).split("]", RICH_FIELD_COUNT - 1)
        if len(fields) < RICH_FIELD_COUNT:
            logger.warning(
                f"Malformed rich marker record: expected {RICH_FIELD_COUNT} fields, "
                f"got {len(fields)}; ignoring all rich markers"
            )
            return {}

        parsed = _parse_record(fields, catalog)
        if parsed is None:
            continue
        zone_id, markers = parsed

        zone_markers = result.setdefault(zone_id, [])
        for marker in markers:
            zone_markers.append(
                RichMarker(
                    position=marker.position,
                    background_texture=marker.background_texture,
                    text=marker.text,
                    size=marker.size,
                    colour=marker.colour,
                    orientation=marker.orientation,
                    id=len(zone_markers),
                    map_id=marker.map_id,
                )
            )

    result = {zone_id: markers for zone_id, markers in result.items() if markers}
    if result:
        total = sum(len(markers) for markers in result.values())
        logger.debug(f"Parsed {total} rich marker(s) in {len(result)} zone(s)")
    return result


# =============================================================================
# Building
# =============================================================================


def _build_record(zone_id: int, markers: Sequence[RichMarker], timestamp: int) -> str:
    """Build the record of one zone; `markers` must be non-empty."""
    min_x = min(m.position.x for m in markers)
    min_y = min(m.position.y for m in markers)
    min_z = min(m.position.z for m in markers)

    numbered = list(enumerate(markers, start=1))

    sizes = _format_groups(
        (i, _format_size(m.size)) for i, m in numbered if m.size != DEFAULT_SIZE
    )
    pitches = _format_groups(
        (i, str(m.orientation[0])) for i, m in numbered if m.orientation is not None
    )
    yaws = _format_groups(
        (i, str(m.orientation[1])) for i, m in numbered if m.orientation is not None
    )
    colours = _format_groups(
        (i, colour_to_token(m.colour, always_alpha=True)) for i, m in numbered
    )
    textures = _format_groups(
        (i, escape_text(texture_to_path(m.background_texture)))
        for i, m in numbered
        if texture_to_path(m.background_texture)
    )
    positions = ",".join(
        f"{_hex(m.position.x - min_x)}:{_hex(m.position.y - min_y)}:"
        f"{_hex(m.position.z - min_z)}:{escape_text(m.text or '')}"
        for m in markers
    )

    fields = [
        str(zone_id),
        str(timestamp),
        f"{_hex(min_x)}:{_hex(min_y)}:{_hex(min_z)}",
        sizes,
        pitches,
        yaws,
        colours,
        textures,
        positions,
    ]
    return "<" + "]".join(fields) + ">"


def build_rich_string(
    markers: Mapping[int, Sequence[Marker]], timestamp: Optional[int] = None
) -> str:
    """Build a rich marker string from per-zone marker lists.

    Zones are written in ascending id order, one record each. Only active
    rich markers are written; simple markers in the lists are ignored.

    Args:
        markers: Markers per zone id
        timestamp: Unix time embedded in each record (informational only);
            defaults to now
    """
    stamp = int(time.time()) if timestamp is None else timestamp
    records: list[str] = []
    for zone_id in sorted(markers):
        rich = [m for m in markers[zone_id] if isinstance(m, RichMarker) and m.active]
        if rich:
            records.append(_build_record(zone_id, rich, stamp))
    return "".join(records)

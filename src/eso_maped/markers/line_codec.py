"""
Breadcrumb line string codec.

A line string is a flat list of `;`-terminated hex tokens. For each zone:

    zone; minX; minY; minZ;
    colourCount; colour...;
    pointCount; (dx; dy; dz)...;
    lineCount; (colourIndex; point1Index; point2Index)...;

Zones follow each other with no extra delimiter. Point coordinates are
offsets from the zone minimums, indices are 1-based into the colour and
point tables. Points shared by several lines (a connected path) are stored
once.

The decoder needs both tables before it can resolve a single line, so it
reads whole zone blocks. Malformed numbers read as 0 and never abort the
parse.
"""

import logging
import re
from typing import Mapping, Optional, Sequence

from ..catalog.models import Catalog
from ..catalog.resolution import resolve_map_id
from .colour import WHITE, Colour, colour_to_token, parse_colour_token
from .models import BreadcrumbLine, Position3D
from .rich_codec import RICH_RECORD_RE
from .simple_codec import MAX_ZONE_ID, SIMPLE_RECORD_RE

logger = logging.getLogger(__name__)

_HEX_INT_RE = re.compile(r"^-?[0-9A-Fa-f]+$")
_TRAILING_HEX_RE = re.compile(r"([0-9A-Fa-f]+)$")


def _hex(value: int) -> str:
    """Uppercase hex, negative values with a leading '-'."""
    return format(value, "X")


class _TokenReader:
    """Sequential reader over line-string tokens."""

    def __init__(self, tokens: list[str]):
        self.tokens = [token.strip() for token in tokens]
        self.pos = 0

    def remaining(self) -> int:
        return len(self.tokens) - self.pos

    def at_end(self) -> bool:
        """True when only blank tokens are left."""
        return not any(self.tokens[self.pos:])

    def next_token(self) -> str:
        if self.pos >= len(self.tokens):
            return ""
        token = self.tokens[self.pos]
        self.pos += 1
        return token

    def next_int(self) -> int:
        """Read a hex integer; malformed or missing tokens read as 0."""
        token = self.next_token()
        if not _HEX_INT_RE.match(token):
            if token:
                logger.debug(f"Malformed hex token {token!r}, using 0")
            return 0
        return int(token, 16)

    def next_count(self, per_item: int = 1) -> int:
        """Read an item count, clamped to what the remaining tokens can hold."""
        count = self.next_int()
        return max(0, min(count, self.remaining() // per_item))


def _strip_other_formats(text: str) -> str:
    """Blank out rich and simple marker records so only line tokens remain."""
    text = RICH_RECORD_RE.sub(" ", text)
    return SIMPLE_RECORD_RE.sub(" ", text)


def _read_zone_id(token: str) -> int:
    """Zone id from the trailing hex digits of a token; leading garbage is ignored."""
    match = _TRAILING_HEX_RE.search(token)
    if match is None:
        return 0
    return int(match.group(1), 16)


def parse_lines_string(
    text: str, catalog: Optional[Catalog] = None
) -> dict[int, list[BreadcrumbLine]]:
    """Parse all breadcrumb line blocks in `text`.

    Rich and simple marker records in the text are skipped, so the whole
    combined marker text can be passed in. Each line's map is resolved from
    the midpoint of its two endpoints.

    Args:
        text: Line string, possibly mixed with other formats
        catalog: Zone catalog used to resolve map ids

    Returns:
        Lines per zone id, in string order, ids sequential per zone
    """
    stripped = _strip_other_formats(text)
    if ";" not in stripped:
        return {}

    reader = _TokenReader(stripped.split(";"))
    result: dict[int, list[BreadcrumbLine]] = {}

    while not reader.at_end():
        zone_id = _read_zone_id(reader.next_token())
        min_x = reader.next_int()
        min_y = reader.next_int()
        min_z = reader.next_int()

        colours: list[Colour] = [
            parse_colour_token(reader.next_token()) for _ in range(reader.next_count())
        ]

        points: list[Position3D] = []
        for _ in range(reader.next_count(per_item=3)):
            dx = reader.next_int()
            dy = reader.next_int()
            dz = reader.next_int()
            points.append(Position3D(min_x + dx, min_y + dy, min_z + dz))

        block: list[BreadcrumbLine] = []
        for _ in range(reader.next_count(per_item=3)):
            colour_index = max(reader.next_int() - 1, 0)
            p1_index = max(reader.next_int() - 1, 0)
            p2_index = max(reader.next_int() - 1, 0)
            if p1_index >= len(points) or p2_index >= len(points):
                logger.debug(
                    f"Dropping line in zone {zone_id}: point index out of range "
                    f"({p1_index + 1}, {p2_index + 1} of {len(points)})"
                )
                continue
            colour = colours[colour_index] if colour_index < len(colours) else WHITE
            block.append(
                BreadcrumbLine(
                    position1=points[p1_index],
                    position2=points[p2_index],
                    colour=colour,
                )
            )

        if zone_id > MAX_ZONE_ID:
            logger.debug(f"Ignoring line block with zone id out of range: {zone_id}")
            continue

        if not block:
            continue

        zone_lines = result.setdefault(zone_id, [])
        for line in block:
            map_id = resolve_map_id(catalog, zone_id, line.midpoint)
            zone_lines.append(
                BreadcrumbLine(
                    position1=line.position1,
                    position2=line.position2,
                    colour=line.colour,
                    id=len(zone_lines),
                    map_id=map_id,
                )
            )

    if result:
        total = sum(len(lines) for lines in result.values())
        logger.debug(f"Parsed {total} line(s) in {len(result)} zone(s)")
    return result


def _build_zone_tokens(zone_id: int, lines: Sequence[BreadcrumbLine]) -> list[str]:
    """Tokens of one zone block; `lines` must be non-empty."""
    colour_table: dict[Colour, int] = {}
    point_table: dict[Position3D, int] = {}
    for line in lines:
        colour_table.setdefault(line.colour, len(colour_table) + 1)
        point_table.setdefault(line.position1, len(point_table) + 1)
        point_table.setdefault(line.position2, len(point_table) + 1)

    min_x = min(p.x for p in point_table)
    min_y = min(p.y for p in point_table)
    min_z = min(p.z for p in point_table)

    tokens = [_hex(zone_id), _hex(min_x), _hex(min_y), _hex(min_z)]

    tokens.append(_hex(len(colour_table)))
    tokens.extend(colour_to_token(colour) for colour in colour_table)

    tokens.append(_hex(len(point_table)))
    for point in point_table:
        tokens.extend((_hex(point.x - min_x), _hex(point.y - min_y), _hex(point.z - min_z)))

    tokens.append(_hex(len(lines)))
    for line in lines:
        tokens.extend(
            (
                _hex(colour_table[line.colour]),
                _hex(point_table[line.position1]),
                _hex(point_table[line.position2]),
            )
        )
    return tokens


def build_lines_string(lines: Mapping[int, Sequence[BreadcrumbLine]]) -> str:
    """Build a line string from per-zone line lists.

    Zones are written in ascending id order; inactive lines are left out and
    zones without active lines produce no block.
    """
    parts: list[str] = []
    for zone_id in sorted(lines):
        active = [line for line in lines[zone_id] if line.active]
        if not active:
            continue
        parts.extend(f"{token};" for token in _build_zone_tokens(zone_id, active))
    return "".join(parts)

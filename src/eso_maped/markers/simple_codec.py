"""
Simple marker string codec.

A simple marker string is a run of self-delimited records:

    /{zoneId}//{x},{y},{z},{iconCode}/

with no separator between records. All fields are unsigned decimal
integers. Parsing is best effort: text that does not match a record is
ignored, so a half-typed string just yields fewer markers.
"""

import logging
import re
from typing import Mapping, Optional, Sequence

from ..catalog.models import Catalog
from ..catalog.resolution import resolve_map_id
from .icons import MarkerIcon
from .models import Marker, Position3D, SimpleMarker

logger = logging.getLogger(__name__)

SIMPLE_RECORD_RE = re.compile(r"/(\d+)//(\d+),(\d+),(\d+),(\d+)/")

MAX_ZONE_ID = 0xFFFF


def parse_simple_string(
    text: str, catalog: Optional[Catalog] = None
) -> dict[int, list[SimpleMarker]]:
    """Parse all simple marker records in `text`.

    Duplicate records in a zone (equal position, icon, active flag) collapse
    to the first one. Ids are sequential per zone in first-seen order.
    Records with a zone id above 65535 are ignored.

    Args:
        text: Marker string, possibly mixed with other formats
        catalog: Zone catalog used to resolve map ids

    Returns:
        Markers per zone id, in first-seen order
    """
    result: dict[int, list[SimpleMarker]] = {}
    seen: dict[int, set[SimpleMarker]] = {}

    for match in SIMPLE_RECORD_RE.finditer(text):
        zone_str, x_str, y_str, z_str, code_str = match.groups()
        zone_id = int(zone_str)
        if zone_id > MAX_ZONE_ID:
            logger.debug(f"Ignoring simple marker with zone id out of range: {zone_id}")
            continue

        position = Position3D(int(x_str), int(y_str), int(z_str))
        marker = SimpleMarker(position=position, icon=MarkerIcon.from_code(int(code_str)))

        zone_seen = seen.setdefault(zone_id, set())
        if marker in zone_seen:
            continue
        zone_seen.add(marker)

        zone_markers = result.setdefault(zone_id, [])
        map_id = resolve_map_id(catalog, zone_id, position)
        zone_markers.append(
            SimpleMarker(
                position=position,
                icon=marker.icon,
                id=len(zone_markers),
                map_id=map_id,
            )
        )

    if result:
        total = sum(len(markers) for markers in result.values())
        logger.debug(f"Parsed {total} simple marker(s) in {len(result)} zone(s)")
    return result


def _format_record(zone_id: int, marker: SimpleMarker) -> str:
    pos = marker.position
    return f"/{zone_id}//{pos.x},{pos.y},{pos.z},{marker.icon.code}/"


def build_simple_string(markers: Mapping[int, Sequence[Marker]]) -> str:
    """Build a simple marker string from per-zone marker lists.

    Zones are written in ascending id order. Within a zone only active
    simple markers are written, sorted by icon code (stable). Rich markers
    in the lists are ignored. Markers with a negative coordinate cannot be
    expressed in this format and are skipped.
    """
    records: list[str] = []
    for zone_id in sorted(markers):
        simple = [
            m for m in markers[zone_id] if isinstance(m, SimpleMarker) and m.active
        ]
        for marker in sorted(simple, key=lambda m: m.icon.code):
            pos = marker.position
            if pos.x < 0 or pos.y < 0 or pos.z < 0:
                logger.warning(
                    f"Skipping simple marker {marker.id} in zone {zone_id}: "
                    f"negative coordinates {pos} are not supported by this format"
                )
                continue
            records.append(_format_record(zone_id, marker))
    return "".join(records)

"""
Aggregation of the three formats into one per-zone collection.

The editor keeps a single text blob holding all three formats. Every edit of
that text reparses the whole blob; every edit of a marker rebuilds the whole
blob. There is no incremental update path.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Optional, Sequence, TypeVar

from ..catalog.models import Catalog
from .line_codec import build_lines_string, parse_lines_string
from .models import BreadcrumbLine, Marker, RichMarker, SimpleMarker
from .rich_codec import build_rich_string, parse_rich_string
from .simple_codec import build_simple_string, parse_simple_string

logger = logging.getLogger(__name__)

TEntity = TypeVar("TEntity", SimpleMarker, RichMarker, BreadcrumbLine)


@dataclass(frozen=True)
class MarkerCollection:
    """Markers and lines of every zone found in a marker text.

    The collection is treated as an immutable value: the `with_*` methods
    return a new collection and leave this one untouched.

    Attributes:
        markers: Simple and rich markers per zone id
        lines: Breadcrumb lines per zone id
    """

    markers: dict[int, list[Marker]] = field(default_factory=lambda: {})  # type: ignore[assignment]
    lines: dict[int, list[BreadcrumbLine]] = field(default_factory=lambda: {})  # type: ignore[assignment]

    def zone_ids(self) -> list[int]:
        """Ids of all zones holding markers or lines, ascending."""
        return sorted(set(self.markers) | set(self.lines))

    def markers_for(self, zone_id: int) -> list[Marker]:
        return list(self.markers.get(zone_id, []))

    def lines_for(self, zone_id: int) -> list[BreadcrumbLine]:
        return list(self.lines.get(zone_id, []))

    def markers_on_map(self, zone_id: int, map_id: int) -> list[Marker]:
        """Markers of a zone that were resolved onto `map_id`."""
        return [m for m in self.markers.get(zone_id, []) if m.map_id == map_id]

    def lines_on_map(self, zone_id: int, map_id: int) -> list[BreadcrumbLine]:
        """Lines of a zone that were resolved onto `map_id`."""
        return [line for line in self.lines.get(zone_id, []) if line.map_id == map_id]

    def with_markers(self, zone_id: int, markers: Sequence[Marker]) -> "MarkerCollection":
        """Copy with one zone's markers replaced and their ids reassigned."""
        new_markers = dict(self.markers)
        new_markers[zone_id] = assign_ids(markers)
        return MarkerCollection(markers=new_markers, lines=dict(self.lines))

    def with_lines(self, zone_id: int, lines: Sequence[BreadcrumbLine]) -> "MarkerCollection":
        """Copy with one zone's lines replaced and their ids reassigned."""
        new_lines = dict(self.lines)
        new_lines[zone_id] = assign_ids(lines)
        return MarkerCollection(markers=dict(self.markers), lines=new_lines)

    def is_empty(self) -> bool:
        return not any(self.markers.values()) and not any(self.lines.values())

    def to_dict(self) -> dict[str, Any]:
        """Plain-data form, for JSON export."""
        return {
            "zones": [
                {
                    "zone_id": zone_id,
                    "markers": [m.to_dict() for m in self.markers.get(zone_id, [])],
                    "lines": [line.to_dict() for line in self.lines.get(zone_id, [])],
                }
                for zone_id in self.zone_ids()
            ]
        }


def assign_ids(entities: Sequence[TEntity]) -> list[TEntity]:
    """Renumber entities 0, 1, 2... in list order."""
    return [
        entity if entity.id == index else replace(entity, id=index)
        for index, entity in enumerate(entities)
    ]


def parse_marker_text(text: str, catalog: Optional[Catalog] = None) -> MarkerCollection:
    """Parse a text blob holding any mix of the three formats.

    Per zone, rich markers come first and simple markers after them; ids are
    then reassigned over the merged list. Lines keep their own id sequence.
    Blank text gives an empty collection.
    """
    if not text.strip():
        return MarkerCollection()

    merged: dict[int, list[Marker]] = {}
    for zone_id, rich in parse_rich_string(text, catalog).items():
        merged.setdefault(zone_id, []).extend(rich)
    for zone_id, simple in parse_simple_string(text, catalog).items():
        merged.setdefault(zone_id, []).extend(simple)

    markers = {zone_id: assign_ids(zone_markers) for zone_id, zone_markers in merged.items()}
    lines = parse_lines_string(text, catalog)

    collection = MarkerCollection(markers=markers, lines=lines)
    logger.debug(
        f"Parsed marker text: {sum(len(m) for m in markers.values())} marker(s), "
        f"{sum(len(ln) for ln in lines.values())} line(s), zones {collection.zone_ids()}"
    )
    return collection


def build_marker_text(collection: MarkerCollection, timestamp: Optional[int] = None) -> str:
    """Serialize a collection: simple markers, rich markers, then lines.

    The three parts are joined with newlines; empty parts are kept as empty
    lines so the layout stays stable while editing.
    """
    return "\n".join(
        (
            build_simple_string(collection.markers),
            build_rich_string(collection.markers, timestamp=timestamp),
            build_lines_string(collection.lines),
        )
    )


def first_zone(collection: MarkerCollection) -> Optional[int]:
    """Lowest zone id holding markers or lines; None for an empty collection."""
    zone_ids = collection.zone_ids()
    return zone_ids[0] if zone_ids else None

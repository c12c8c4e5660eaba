"""
Editing session over one marker text.

`MarkerDocument` owns the text blob and the collection parsed from it. Edits
go through the document: each one replaces the affected zone's list in a new
collection, reassigns ids, and rebuilds the whole text. Entities are matched
by semantic equality (`semantic_key`), never by id, since ids change on every
rebuild.
"""

import logging
import math
from dataclasses import replace
from typing import TYPE_CHECKING, Any, Callable, Optional, Sequence

from ..catalog.models import Catalog
from ..catalog.resolution import resolve_map_id
from .aggregate import MarkerCollection, build_marker_text, first_zone, parse_marker_text
from .colour import Colour, WHITE, hex_to_rgba, parse_colour_tuple
from .icons import MarkerIcon, texture_from_asset, texture_from_path, UnknownTexture
from .models import (
    PITCH_RANGE,
    YAW_RANGE,
    BreadcrumbLine,
    Entity,
    Marker,
    Position3D,
    RichMarker,
    SimpleMarker,
    clamp,
    semantic_key,
)

if TYPE_CHECKING:
    from ..settings import AppSettings

# Fallback of the colour field when the typed value is not a hex number
FALLBACK_COLOUR_VALUE = 0x00FFFF

MARKER_FIELDS = (
    "x",
    "y",
    "z",
    "icon",
    "size",
    "pitch",
    "yaw",
    "text",
    "colour",
    "colour_tuple",
    "active",
)

_TRUE_VALUES = ("true", "1", "yes", "on")


def _parse_int(value: str) -> Optional[int]:
    try:
        return int(value.strip())
    except ValueError:
        return None


def _parse_size(value: str) -> float:
    try:
        size = float(value.strip())
    except ValueError:
        return 1.0
    return size if math.isfinite(size) else 1.0


def _parse_colour_value(value: str) -> Colour:
    digits = value.strip().lstrip("#")
    try:
        packed = int(digits, 16)
    except ValueError:
        packed = FALLBACK_COLOUR_VALUE
    return hex_to_rgba(packed & 0xFFFFFFFF)


def _find_index(entities: Sequence[Entity], target: Entity) -> Optional[int]:
    key = semantic_key(target)
    for index, entity in enumerate(entities):
        if semantic_key(entity) == key:
            return index
    return None


class MarkerDocument:
    """Marker text plus its parsed collection, kept in sync on every edit.

    Typing into the text calls `set_text`, which reparses everything. All
    other operations edit the collection and rebuild the text from it, so
    after an edit `text` is always the canonical serialization.

    Attributes:
        catalog: Zone catalog used for map resolution and placement
        settings: Optional settings; editor defaults come from here
        timestamp: Fixed rich-record timestamp; None writes the current time
    """

    def __init__(
        self,
        catalog: Catalog,
        settings: Optional["AppSettings"] = None,
        timestamp: Optional[int] = None,
    ):
        self.catalog = catalog
        self.settings = settings
        self.timestamp = timestamp
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

        self._text = ""
        self._collection = MarkerCollection()
        self._selected_zone: Optional[int] = None

    # === STATE ===

    @property
    def text(self) -> str:
        return self._text

    @property
    def collection(self) -> MarkerCollection:
        return self._collection

    @property
    def selected_zone(self) -> Optional[int]:
        """Zone shown in the editor; follows pasted text."""
        return self._selected_zone

    @property
    def remap_on_move(self) -> bool:
        return self.settings.remap_on_move if self.settings is not None else True

    def select_zone(self, zone_id: int) -> None:
        if zone_id not in self.catalog:
            self.logger.debug(f"Selected zone {zone_id} is not in the catalog")
        self._selected_zone = zone_id

    def markers(self, zone_id: Optional[int] = None) -> list[Marker]:
        """Markers of a zone, the selected zone by default."""
        zone = self._zone_or_selected(zone_id)
        return self._collection.markers_for(zone) if zone is not None else []

    def lines(self, zone_id: Optional[int] = None) -> list[BreadcrumbLine]:
        """Lines of a zone, the selected zone by default."""
        zone = self._zone_or_selected(zone_id)
        return self._collection.lines_for(zone) if zone is not None else []

    def _zone_or_selected(self, zone_id: Optional[int]) -> Optional[int]:
        return zone_id if zone_id is not None else self._selected_zone

    # === TEXT ===

    def set_text(self, text: str) -> None:
        """Replace the text and reparse it.

        The text is kept as typed, not rebuilt. When it holds any data the
        selection moves to its lowest zone.
        """
        self._text = text
        self._collection = parse_marker_text(text, self.catalog)
        zone = first_zone(self._collection)
        if zone is not None and zone != self._selected_zone:
            self.logger.info(f"Switching to zone {zone} from pasted text")
            self._selected_zone = zone

    def _commit(self, collection: MarkerCollection) -> None:
        self._collection = collection
        self._text = build_marker_text(collection, timestamp=self.timestamp)

    # === MARKER EDITS ===

    def update_marker(self, zone_id: int, index: int, field: str, value: str) -> None:
        """Set one field of a marker from a raw editor value.

        Args:
            zone_id: Zone holding the marker
            index: Position of the marker in the zone's list (its id)
            field: One of `MARKER_FIELDS`
            value: Value as typed; unparseable numbers follow the per-field
                fallbacks (coordinates unchanged, size 1.0, pitch/yaw clear
                the orientation, colour 0x00FFFF)

        Raises:
            ValueError: If `field` is not a marker field
        """
        if field not in MARKER_FIELDS:
            raise ValueError(f"Unknown marker field: {field!r}")

        markers = self._collection.markers_for(zone_id)
        if not 0 <= index < len(markers):
            self.logger.warning(
                f"No marker {index} in zone {zone_id} ({len(markers)} marker(s))"
            )
            return

        marker = markers[index]
        updated = self._apply_field(zone_id, marker, field, value)
        if updated is None or (updated == marker and updated.map_id == marker.map_id):
            return

        markers[index] = updated
        self._commit(self._collection.with_markers(zone_id, markers))

    def _apply_field(
        self, zone_id: int, marker: Marker, field: str, value: str
    ) -> Optional[Marker]:
        """Marker with `field` set, or None when the edit does not apply."""
        if field in ("x", "y", "z"):
            coord = _parse_int(value)
            if coord is None:
                return None
            position = marker.position.with_axis(field, coord)
            map_id = marker.map_id
            if self.remap_on_move:
                map_id = resolve_map_id(self.catalog, zone_id, position)
            return replace(marker, position=position, map_id=map_id)

        if field == "active":
            return replace(marker, active=value.strip().lower() in _TRUE_VALUES)

        if isinstance(marker, SimpleMarker):
            if field == "icon":
                return replace(marker, icon=MarkerIcon.from_path(value))
            self.logger.debug(f"Field {field!r} does not apply to simple markers")
            return None

        return self._apply_rich_field(marker, field, value)

    def _apply_rich_field(
        self, marker: RichMarker, field: str, value: str
    ) -> Optional[RichMarker]:
        if field == "icon":
            texture = texture_from_asset(value)
            if isinstance(texture, UnknownTexture):
                texture = texture_from_path(value)
            return replace(marker, background_texture=texture)

        if field == "size":
            return replace(marker, size=_parse_size(value))

        if field in ("pitch", "yaw"):
            angle = _parse_int(value)
            if angle is None:
                return replace(marker, orientation=None)
            pitch, yaw = marker.orientation if marker.orientation is not None else (0, 0)
            if field == "pitch":
                pitch = clamp(angle, PITCH_RANGE)
            else:
                yaw = clamp(angle, YAW_RANGE)
            return replace(marker, orientation=(pitch, yaw))

        if field == "text":
            return replace(marker, text=value or None)

        if field == "colour":
            return replace(marker, colour=_parse_colour_value(value))

        # colour_tuple
        colour = parse_colour_tuple(value)
        if colour is None:
            return None
        return replace(marker, colour=colour)

    def set_marker_active(self, zone_id: int, marker: Marker, active: bool) -> bool:
        """Show or hide a marker; returns False when it is not in the zone."""
        return self._replace_entity(
            zone_id,
            marker,
            lambda m: replace(m, active=active),
            self._collection.markers_for,
            self._collection.with_markers,
        )

    def delete_marker(self, zone_id: int, marker: Marker) -> bool:
        """Remove a marker; returns False when it is not in the zone."""
        return self._replace_entity(
            zone_id, marker, None, self._collection.markers_for, self._collection.with_markers
        )

    def place_marker(self, zone_id: int, map_id: int, nx: float, nz: float) -> SimpleMarker:
        """Add a simple marker at a point picked on a map image.

        Args:
            zone_id: Zone owning the map
            map_id: Map the point was picked on; becomes the marker's map
            nx: Horizontal position on the map, 0.0 to 1.0
            nz: Vertical position on the map, 0.0 to 1.0

        Raises:
            ValueError: If the catalog has no such map in the zone
        """
        zone = self.catalog.get_zone(zone_id)
        map_info = zone.get_map(map_id) if zone is not None else None
        if map_info is None:
            raise ValueError(f"Zone {zone_id} has no map {map_id}")

        icon = MarkerIcon.MARKER_LIGHTBLUE
        if self.settings is not None:
            icon = self.settings.placement_icon
        markers = self._collection.markers_for(zone_id)
        marker = SimpleMarker(
            position=map_info.world_position(nx, nz),
            icon=icon,
            id=len(markers),
            map_id=map_info.map_id,
        )
        self._commit(self._collection.with_markers(zone_id, markers + [marker]))
        self.logger.debug(f"Placed marker at {marker.position} on map {map_id}")
        return marker

    def replace_markers(self, zone_id: int, markers: Sequence[Marker]) -> None:
        """Replace all markers of a zone."""
        self._commit(self._collection.with_markers(zone_id, markers))

    # === LINE EDITS ===

    def add_line(
        self,
        zone_id: int,
        position1: Position3D,
        position2: Position3D,
        colour: Optional[Colour] = None,
    ) -> BreadcrumbLine:
        """Append a line; colour defaults to the configured line colour."""
        if colour is None:
            colour = self.settings.line_colour if self.settings is not None else WHITE
        lines = self._collection.lines_for(zone_id)
        line = BreadcrumbLine(position1=position1, position2=position2, colour=colour)
        line = replace(
            line, id=len(lines), map_id=resolve_map_id(self.catalog, zone_id, line.midpoint)
        )
        self._commit(self._collection.with_lines(zone_id, lines + [line]))
        return line

    def set_line_active(self, zone_id: int, line: BreadcrumbLine, active: bool) -> bool:
        """Show or hide a line; returns False when it is not in the zone."""
        return self._replace_entity(
            zone_id,
            line,
            lambda ln: replace(ln, active=active),
            self._collection.lines_for,
            self._collection.with_lines,
        )

    def delete_line(self, zone_id: int, line: BreadcrumbLine) -> bool:
        """Remove a line; returns False when it is not in the zone."""
        return self._replace_entity(
            zone_id, line, None, self._collection.lines_for, self._collection.with_lines
        )

    def replace_lines(self, zone_id: int, lines: Sequence[BreadcrumbLine]) -> None:
        """Replace all lines of a zone."""
        self._commit(self._collection.with_lines(zone_id, lines))

    # === HELPERS ===

    def _replace_entity(
        self,
        zone_id: int,
        target: Entity,
        transform: Optional[Callable[[Any], Any]],
        getter: Callable[[int], list[Any]],
        setter: Callable[[int, Sequence[Any]], MarkerCollection],
    ) -> bool:
        """Replace (or drop, when `transform` is None) the first match of `target`."""
        entities = getter(zone_id)
        index = _find_index(entities, target)
        if index is None:
            self.logger.warning(f"Entity not found in zone {zone_id}: {target}")
            return False
        if transform is None:
            del entities[index]
        else:
            entities[index] = transform(entities[index])
        self._commit(setter(zone_id, entities))
        return True

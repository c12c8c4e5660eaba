"""
Data models for the zone/map catalog.

The catalog is static reference data: every zone of the game that the editor
knows about, and for each zone the maps (floors, rooms, sub-areas) it is
split into. Each map carries the world-space bounding box used to place
markers on it.

These models are read-only at runtime. They are built once by
`CatalogLoader` and passed to the codecs as a parameter.
"""

from dataclasses import dataclass, field
from typing import Any, Iterator, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..markers.models import Position3D


@dataclass(frozen=True)
class ScaleData:
    """World-space bounding box of a map.

    Attributes:
        min_x: Smallest world X covered by the map image
        max_x: Largest world X covered by the map image
        min_z: Smallest world Z covered by the map image
        max_z: Largest world Z covered by the map image
        y: Reference elevation of the map, if known. Used to tell stacked
           floors apart when their X/Z boxes overlap.
    """

    min_x: float
    max_x: float
    min_z: float
    max_z: float
    y: Optional[float] = None

    @property
    def x_scale_factor(self) -> float:
        """World units to normalized map units along X."""
        width = self.max_x - self.min_x
        return 1.0 / width if width else 0.0

    @property
    def z_scale_factor(self) -> float:
        """World units to normalized map units along Z."""
        depth = self.max_z - self.min_z
        return 1.0 / depth if depth else 0.0

    @property
    def area(self) -> float:
        """Bounding box area in world units."""
        return (self.max_x - self.min_x) * (self.max_z - self.min_z)

    def contains(self, x: float, z: float) -> bool:
        """Check whether a world (x, z) point is inside the box (edges included)."""
        return self.min_x <= x <= self.max_x and self.min_z <= z <= self.max_z

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScaleData":
        """Create ScaleData from a catalog JSON dict."""
        y = data.get("y")
        return cls(
            min_x=float(data["min_x"]),
            max_x=float(data["max_x"]),
            min_z=float(data["min_z"]),
            max_z=float(data["max_z"]),
            y=float(y) if y is not None else None,
        )


@dataclass(frozen=True)
class MapInfo:
    """A renderable sub-region of a zone.

    Attributes:
        map_id: Game map identifier (unique across the catalog)
        zone_id: Identifier of the owning zone
        name: Display name
        tile_count: Number of tiles per side of the map image grid
        tile_slug: Asset path prefix of the map tiles
        scale_data: World-space bounding box
    """

    map_id: int
    zone_id: int
    name: str
    tile_count: int
    tile_slug: str
    scale_data: ScaleData

    @property
    def tiles(self) -> list[str]:
        """Asset paths of all map tiles, row-major."""
        return [f"{self.tile_slug}{i}.png" for i in range(self.tile_count**2)]

    @property
    def area(self) -> float:
        """Bounding box area, used as the last map-resolution tie-break."""
        return self.scale_data.area

    def contains(self, x: float, z: float) -> bool:
        """Check whether a world (x, z) point lies on this map."""
        return self.scale_data.contains(x, z)

    def world_position(self, nx: float, nz: float) -> "Position3D":
        """Convert normalized map coordinates to a world position.

        Args:
            nx: Horizontal position on the map image, 0.0 (left) to 1.0 (right)
            nz: Vertical position on the map image, 0.0 (top) to 1.0 (bottom)

        Returns:
            Rounded world position. Elevation is the map's reference Y, or 0.
        """
        from ..markers.models import Position3D

        scale = self.scale_data
        x = scale.min_x + nx * (scale.max_x - scale.min_x)
        z = scale.min_z + nz * (scale.max_z - scale.min_z)
        y = scale.y if scale.y is not None else 0.0
        return Position3D(round(x), round(y), round(z))


@dataclass(frozen=True)
class Zone:
    """A game area/instance containing one or more maps.

    Map order matters: it is the catalog order and the final tie-break of
    map resolution.
    """

    id: int
    name: str
    maps: tuple[MapInfo, ...] = ()

    def get_map(self, map_id: int) -> Optional[MapInfo]:
        """Get a map of this zone by id."""
        for map_info in self.maps:
            if map_info.map_id == map_id:
                return map_info
        return None


@dataclass
class Catalog:
    """Read-only lookup table of all known zones, keyed by zone id."""

    zones: dict[int, Zone] = field(default_factory=lambda: {})  # type: ignore[assignment]
    version: str = ""

    def __iter__(self) -> Iterator[Zone]:
        return iter(self.zones.values())

    def __len__(self) -> int:
        return len(self.zones)

    def __contains__(self, zone_id: object) -> bool:
        return zone_id in self.zones

    def get_zone(self, zone_id: int) -> Optional[Zone]:
        """Get a zone by numeric id."""
        return self.zones.get(zone_id)

    def match_zone(self, key: str) -> Optional[Zone]:
        """Get a zone whose id, written in decimal, is exactly `key`.

        "1000" matches zone 1000, "01000" and " 1000" match nothing.
        """
        for zone in self.zones.values():
            if str(zone.id) == key:
                return zone
        return None

    def zone_ids(self) -> list[int]:
        """All zone ids, ascending."""
        return sorted(self.zones)

    def find_map(self, map_id: int) -> Optional[MapInfo]:
        """Find a map anywhere in the catalog."""
        for zone in self.zones.values():
            map_info = zone.get_map(map_id)
            if map_info is not None:
                return map_info
        return None

"""
Data models for markers and breadcrumb lines.

Entities are frozen dataclasses. Equality and hashing cover only the
semantic fields: `id` and `map_id` are excluded (`compare=False`), so two
markers parsed from different places in a string are equal when they
describe the same thing. Use `semantic_key()` where the comparison key itself
is needed (deduplication, correlating an edited copy with the master list).

Editing never mutates an entity in place: use `dataclasses.replace` and put
the new entity in a new list.
"""

from dataclasses import dataclass, field
from typing import Any, Hashable, Optional, Union

from .colour import Colour, WHITE, colour_to_token
from .icons import BackgroundTexture, MarkerIcon, UnknownTexture, texture_to_path

Orientation = tuple[int, int]
"""(pitch, yaw): pitch in -90..90, yaw in 0..360."""

PITCH_RANGE = (-90, 90)
YAW_RANGE = (0, 360)


@dataclass(frozen=True)
class Position3D:
    """World-space game coordinates. Values can be large and negative."""

    x: int
    y: int
    z: int

    def midpoint(self, other: "Position3D") -> "Position3D":
        """Point halfway between two positions, floored on each axis."""
        return Position3D(
            (self.x + other.x) // 2,
            (self.y + other.y) // 2,
            (self.z + other.z) // 2,
        )

    def with_axis(self, axis: str, value: int) -> "Position3D":
        """Copy with one axis ("x", "y" or "z") replaced."""
        if axis not in ("x", "y", "z"):
            raise ValueError(f"Unknown axis: {axis!r}")
        coords = {"x": self.x, "y": self.y, "z": self.z}
        coords[axis] = value
        return Position3D(**coords)

    def to_dict(self) -> dict[str, int]:
        return {"x": self.x, "y": self.y, "z": self.z}


@dataclass(frozen=True)
class SimpleMarker:
    """Lightweight marker carrying only a numeric-code icon.

    Attributes:
        position: World position
        icon: Icon, see `MarkerIcon`
        size: Display size; not stored in the string format
        active: Inactive markers are left out of built strings
        id: Sequential id within the zone; reassigned on every rebuild
        map_id: Map resolved at parse time (0 when no map contains the marker)
    """

    position: Position3D
    icon: MarkerIcon = MarkerIcon.MARKER_LIGHTBLUE
    size: int = field(default=1, compare=False)
    active: bool = True
    id: int = field(default=0, compare=False)
    map_id: int = field(default=0, compare=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": "simple",
            "id": self.id,
            "map_id": self.map_id,
            "position": self.position.to_dict(),
            "icon": self.icon.path,
            "icon_code": self.icon.code,
            "active": self.active,
        }


@dataclass(frozen=True)
class RichMarker:
    """Marker with texture, text, colour, size and optional facing.

    Attributes:
        position: World position
        background_texture: Known texture, custom texture path, or None
        text: Free text, None when empty
        size: Scale factor, 1.0 by default
        colour: (r, g, b, a)
        orientation: (pitch, yaw), or None to always face the viewer
        active: Inactive markers are left out of built strings
        id: Sequential id within the zone; reassigned on every rebuild
        map_id: Map resolved at parse time (0 when no map contains the marker)
    """

    position: Position3D
    background_texture: BackgroundTexture = None
    text: Optional[str] = None
    size: float = 1.0
    colour: Colour = WHITE
    orientation: Optional[Orientation] = None
    active: bool = True
    id: int = field(default=0, compare=False)
    map_id: int = field(default=0, compare=False)

    def to_dict(self) -> dict[str, Any]:
        texture = self.background_texture
        return {
            "kind": "rich",
            "id": self.id,
            "map_id": self.map_id,
            "position": self.position.to_dict(),
            "texture": texture_to_path(texture) or None,
            "custom_texture": isinstance(texture, UnknownTexture),
            "text": self.text,
            "size": self.size,
            "colour": colour_to_token(self.colour, always_alpha=True),
            "orientation": list(self.orientation) if self.orientation else None,
            "active": self.active,
        }


@dataclass(frozen=True)
class BreadcrumbLine:
    """Path segment drawn between two world positions."""

    position1: Position3D
    position2: Position3D
    active: bool = True
    colour: Colour = WHITE
    id: int = field(default=0, compare=False)
    map_id: int = field(default=0, compare=False)

    @property
    def midpoint(self) -> Position3D:
        """Midpoint of the segment; decides which map the line is drawn on."""
        return self.position1.midpoint(self.position2)

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": "line",
            "id": self.id,
            "map_id": self.map_id,
            "position1": self.position1.to_dict(),
            "position2": self.position2.to_dict(),
            "colour": colour_to_token(self.colour, always_alpha=True),
            "active": self.active,
        }


Marker = Union[SimpleMarker, RichMarker]
Entity = Union[SimpleMarker, RichMarker, BreadcrumbLine]


def semantic_key(entity: Entity) -> Hashable:
    """Identity-free comparison key of an entity.

    Two entities with the same key are duplicates, whatever their `id` and
    `map_id`. The key includes the entity type, so a simple and a rich
    marker at the same spot never collide.
    """
    if isinstance(entity, SimpleMarker):
        return ("simple", entity.position, entity.icon, entity.active)
    if isinstance(entity, RichMarker):
        return (
            "rich",
            entity.position,
            entity.background_texture,
            entity.text,
            entity.size,
            entity.colour,
            entity.orientation,
            entity.active,
        )
    return ("line", entity.position1, entity.position2, entity.active, entity.colour)


def clamp(value: int, bounds: tuple[int, int]) -> int:
    """Clamp an int into an inclusive (low, high) range."""
    low, high = bounds
    return max(low, min(high, value))

"""
Map resolution: deciding which map of a zone a world position belongs to.

Maps of one zone may overlap on X/Z (stacked floors), so the choice is made
on elevation first and bounding box size second.
"""

import logging
import math
from typing import Optional, TYPE_CHECKING

from .models import Catalog, MapInfo, Zone

if TYPE_CHECKING:
    from ..markers.models import Position3D

logger = logging.getLogger(__name__)

# Sentinel map id for positions that fall on no known map
NO_MAP = 0


def _map_rank(map_info: MapInfo, y: float) -> tuple[bool, float, float]:
    """Sort key of a candidate map: known elevation, elevation distance, area."""
    reference_y = map_info.scale_data.y
    if reference_y is None:
        return (True, math.inf, map_info.area)
    return (False, abs(y - reference_y), map_info.area)


def find_best_map(position: "Position3D", zone: Zone) -> Optional[MapInfo]:
    """Choose the map of `zone` that `position` lies on.

    Candidates are the maps whose bounding box contains (x, z). Among them
    the winner is the minimum of (elevation unknown, |y - reference y|, area):
    maps with a known reference elevation beat those without, then the
    closest elevation wins, then the smaller map. Remaining ties keep catalog
    order.

    Args:
        position: World position
        zone: Zone whose maps are searched

    Returns:
        The chosen map, or None if no map contains the point
    """
    candidates = [m for m in zone.maps if m.contains(position.x, position.z)]
    if not candidates:
        return None
    return min(candidates, key=lambda m: _map_rank(m, position.y))


def resolve_map_id(
    catalog: Optional[Catalog], zone_id: int, position: "Position3D"
) -> int:
    """Resolve the map id for a position in a zone, or `NO_MAP`.

    Unknown zones and positions outside every map both resolve to `NO_MAP`;
    the entity is kept either way.
    """
    if catalog is None:
        return NO_MAP
    zone = catalog.get_zone(zone_id)
    if zone is None:
        logger.debug(f"Zone {zone_id} is not in the catalog")
        return NO_MAP
    map_info = find_best_map(position, zone)
    if map_info is None:
        logger.debug(f"No map of zone {zone_id} contains {position}")
        return NO_MAP
    return map_info.map_id

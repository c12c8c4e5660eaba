"""Zone/map catalog: static reference data and map resolution."""

from .models import ScaleData, MapInfo, Zone, Catalog
from .loader import CatalogSchema, CatalogLoader, load_builtin_catalog, load_catalog
from .resolution import NO_MAP, find_best_map, resolve_map_id

__all__ = [
    "ScaleData",
    "MapInfo",
    "Zone",
    "Catalog",
    "CatalogSchema",
    "CatalogLoader",
    "load_builtin_catalog",
    "load_catalog",
    "NO_MAP",
    "find_best_map",
    "resolve_map_id",
]

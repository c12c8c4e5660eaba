"""Loading the zone/map catalog from JSON files.

Handles validation and conversion of catalog JSON into `Catalog` instances.
The built-in catalog ships with the package under `catalog/data/zones.json`.
"""

import logging
from importlib.resources import files
from pathlib import Path
from typing import Any, Optional, cast

import orjson

from .models import Catalog, MapInfo, ScaleData, Zone

BUILTIN_CATALOG_PACKAGE = "eso_maped.catalog.data"
BUILTIN_CATALOG_FILE = "zones.json"


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class CatalogSchema:
    """Validation of the catalog JSON structure.

    Every method returns a list of error messages; an empty list means valid.
    """

    REQUIRED_ROOT_FIELDS = {"version", "zones"}
    REQUIRED_ZONE_FIELDS = {"id", "name", "maps"}
    REQUIRED_MAP_FIELDS = {"map_id", "name", "tile_count", "tile_slug", "scale"}
    REQUIRED_SCALE_FIELDS = {"min_x", "max_x", "min_z", "max_z"}

    @staticmethod
    def validate_root(data: Any) -> list[str]:
        """Validate root-level fields."""
        if not isinstance(data, dict):
            return ["Catalog root must be an object"]
        root = cast(dict[str, Any], data)

        errors: list[str] = []
        missing = CatalogSchema.REQUIRED_ROOT_FIELDS - root.keys()
        if missing:
            errors.append(f"Missing required fields: {sorted(missing)}")
        if not isinstance(root.get("zones"), list):
            errors.append("'zones' must be an array")
        return errors

    @staticmethod
    def validate_zone(zone_data: Any) -> list[str]:
        """Validate one zone object, including its maps."""
        if not isinstance(zone_data, dict):
            return ["Zone entry must be an object"]
        zone = cast(dict[str, Any], zone_data)

        errors: list[str] = []
        missing = CatalogSchema.REQUIRED_ZONE_FIELDS - zone.keys()
        if missing:
            errors.append(f"Zone {zone.get('id')!r}: missing fields {sorted(missing)}")
            return errors

        zone_id = zone["id"]
        if not isinstance(zone_id, int) or not (0 <= zone_id <= 0xFFFF):
            errors.append(f"Zone id must be 0-65535, got {zone_id!r}")
        if not isinstance(zone["maps"], list) or not zone["maps"]:
            errors.append(f"Zone {zone_id}: 'maps' must be a non-empty array")
            return errors

        for map_data in cast(list[Any], zone["maps"]):
            errors.extend(
                f"Zone {zone_id}: {error}"
                for error in CatalogSchema.validate_map(map_data)
            )
        return errors

    @staticmethod
    def validate_map(map_data: Any) -> list[str]:
        """Validate one map object."""
        if not isinstance(map_data, dict):
            return ["map entry must be an object"]
        map_dict = cast(dict[str, Any], map_data)

        errors: list[str] = []
        missing = CatalogSchema.REQUIRED_MAP_FIELDS - map_dict.keys()
        if missing:
            errors.append(f"map {map_dict.get('map_id')!r}: missing fields {sorted(missing)}")
            return errors

        map_id = map_dict["map_id"]
        if not isinstance(map_id, int) or not (1 <= map_id <= 0xFFFF):
            errors.append(f"map_id must be 1-65535, got {map_id!r}")
        tile_count = map_dict["tile_count"]
        if not isinstance(tile_count, int) or tile_count < 1:
            errors.append(f"map {map_id}: 'tile_count' must be a positive integer")

        scale = map_dict["scale"]
        if not isinstance(scale, dict):
            errors.append(f"map {map_id}: 'scale' must be an object")
            return errors
        scale_dict = cast(dict[str, Any], scale)
        missing_scale = CatalogSchema.REQUIRED_SCALE_FIELDS - scale_dict.keys()
        if missing_scale:
            errors.append(f"map {map_id}: scale missing {sorted(missing_scale)}")
            return errors
        bad_scale = [
            key
            for key in sorted(CatalogSchema.REQUIRED_SCALE_FIELDS)
            if not _is_number(scale_dict[key])
        ]
        if scale_dict.get("y") is not None and not _is_number(scale_dict["y"]):
            bad_scale.append("y")
        if bad_scale:
            errors.append(f"map {map_id}: scale values {bad_scale} must be numbers")
            return errors
        if scale_dict["min_x"] >= scale_dict["max_x"]:
            errors.append(f"map {map_id}: min_x must be below max_x")
        if scale_dict["min_z"] >= scale_dict["max_z"]:
            errors.append(f"map {map_id}: min_z must be below max_z")
        return errors

    @staticmethod
    def validate_catalog(data: Any) -> list[str]:
        """Validate the whole catalog document."""
        errors = CatalogSchema.validate_root(data)
        if errors:
            return errors

        seen_zones: set[int] = set()
        seen_maps: set[int] = set()
        for zone_data in cast(list[Any], data["zones"]):
            zone_errors = CatalogSchema.validate_zone(zone_data)
            errors.extend(zone_errors)
            if zone_errors:
                continue
            zone_id = zone_data["id"]
            if zone_id in seen_zones:
                errors.append(f"Duplicate zone id: {zone_id}")
            seen_zones.add(zone_id)
            for map_data in zone_data["maps"]:
                if map_data["map_id"] in seen_maps:
                    errors.append(f"Duplicate map id: {map_data['map_id']}")
                seen_maps.add(map_data["map_id"])
        return errors


class CatalogLoader:
    """Loads the zone/map catalog from JSON.

    Handles parsing, validation, and conversion to a `Catalog` instance.
    """

    def __init__(self):
        """Initialize the loader."""
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def load_from_json(self, path: Path) -> Catalog:
        """Load a catalog from a JSON file.

        Args:
            path: Path to JSON file

        Returns:
            Loaded Catalog instance

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If JSON is invalid or doesn't match schema
        """
        if not path.exists():
            raise FileNotFoundError(f"Catalog file not found: {path}")

        self.logger.info(f"Loading zone catalog from: {path}")
        return self.load_from_bytes(path.read_bytes(), source=str(path))

    def load_from_bytes(self, raw: bytes, source: str = "<bytes>") -> Catalog:
        """Load a catalog from raw JSON bytes.

        Raises:
            ValueError: If JSON is invalid or doesn't match schema
        """
        try:
            data = orjson.loads(raw)
        except orjson.JSONDecodeError as e:
            raise ValueError(f"Failed to parse JSON from {source}: {e}")

        errors = CatalogSchema.validate_catalog(data)
        if errors:
            error_msg = "\n  - ".join(errors)
            raise ValueError(f"Invalid catalog JSON in {source}:\n  - {error_msg}")

        catalog = self._build_catalog(data)
        map_count = sum(len(zone.maps) for zone in catalog)
        self.logger.info(
            f"Loaded catalog {catalog.version!r}: {len(catalog)} zone(s), {map_count} map(s)"
        )
        return catalog

    def _build_catalog(self, data: dict[str, Any]) -> Catalog:
        """Convert validated JSON data to a Catalog."""
        zones: dict[int, Zone] = {}
        for zone_data in data["zones"]:
            zone = self._build_zone(zone_data)
            zones[zone.id] = zone
        return Catalog(zones=zones, version=str(data["version"]))

    def _build_zone(self, zone_data: dict[str, Any]) -> Zone:
        """Convert zone JSON data to a Zone with its maps in file order."""
        zone_id = int(zone_data["id"])
        maps = tuple(
            MapInfo(
                map_id=int(map_data["map_id"]),
                zone_id=zone_id,
                name=str(map_data["name"]),
                tile_count=int(map_data["tile_count"]),
                tile_slug=str(map_data["tile_slug"]),
                scale_data=ScaleData.from_dict(map_data["scale"]),
            )
            for map_data in zone_data["maps"]
        )
        return Zone(id=zone_id, name=str(zone_data["name"]), maps=maps)


def load_builtin_catalog() -> Catalog:
    """Load the catalog shipped with the package."""
    raw = files(BUILTIN_CATALOG_PACKAGE).joinpath(BUILTIN_CATALOG_FILE).read_bytes()
    return CatalogLoader().load_from_bytes(raw, source=BUILTIN_CATALOG_FILE)


def load_catalog(path: Optional[Path] = None) -> Catalog:
    """Load a catalog from `path`, or the built-in one when no path is given."""
    if path is None:
        return load_builtin_catalog()
    return CatalogLoader().load_from_json(path)

"""Shared fixtures for ESO-maped tests."""

import logging
import logging.handlers
from pathlib import Path
from typing import Iterator, Optional

import pytest

from eso_maped.catalog import Catalog, MapInfo, ScaleData, Zone, load_builtin_catalog


@pytest.fixture(scope="session")
def catalog() -> Catalog:
    """The catalog shipped with the package."""
    return load_builtin_catalog()


def make_map(
    zone_id: int,
    map_id: int,
    min_x: float,
    max_x: float,
    min_z: float,
    max_z: float,
    y: Optional[float] = None,
) -> MapInfo:
    return MapInfo(
        map_id=map_id,
        zone_id=zone_id,
        name=f"Map {map_id}",
        tile_count=2,
        tile_slug=f"test/map{map_id}_",
        scale_data=ScaleData(min_x=min_x, max_x=max_x, min_z=min_z, max_z=max_z, y=y),
    )


@pytest.fixture
def stacked_zone() -> Zone:
    """Zone with two floors over the same box and a small room on the upper one."""
    return Zone(
        id=1,
        name="Test Tower",
        maps=(
            make_map(1, 10, 0, 1000, 0, 1000, y=100),
            make_map(1, 11, 0, 1000, 0, 1000, y=500),
            make_map(1, 12, 400, 600, 400, 600, y=500),
        ),
    )


@pytest.fixture
def flat_zone() -> Zone:
    """Zone whose maps carry no reference elevation."""
    return Zone(
        id=2,
        name="Test Plains",
        maps=(
            make_map(2, 20, 0, 2000, 0, 2000),
            make_map(2, 21, 500, 1500, 500, 1500),
            make_map(2, 22, 500, 1500, 500, 1500),
        ),
    )


@pytest.fixture
def settings_file(tmp_path: Path) -> Path:
    """Path of a throwaway settings INI file."""
    return tmp_path / "settings.ini"


@pytest.fixture(autouse=True)
def reset_app_logging() -> Iterator[None]:
    """Drop the handlers `setup_logging` installs so tests do not leak them."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if type(handler) in (logging.StreamHandler, logging.handlers.RotatingFileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
